"""
Schedule advisor - deal pacing and conflict-free windows from the athlete's calendar.
"""
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ..models.advice import DealWindow, ScheduleAdvice, UpcomingBlock
from ..models.athlete import AthleteProfile


logger = logging.getLogger(__name__)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def format_day(day: date) -> str:
    """US-style short date, e.g. 3/7/2026."""
    return f"{day.month}/{day.day}/{day.year}"


class ScheduleAdvisor:
    """Builds scheduling advice over a fixed look-ahead horizon."""

    def __init__(self, horizon_days: int = 90, max_windows: int = 5, min_window_days: int = 2):
        self.horizon_days = horizon_days
        self.max_windows = max_windows
        self.min_window_days = min_window_days

    def advise(self, athlete: AthleteProfile, now: Optional[datetime] = None) -> ScheduleAdvice:
        """
        Summarize the athlete's deal load, blocked periods and open windows.

        Args:
            athlete: Athlete snapshot
            now: Reference time, defaults to current UTC time

        Returns:
            ScheduleAdvice
        """
        today = (now or datetime.now(timezone.utc)).date()
        max_deals = athlete.max_deals_per_month

        active = len(athlete.deals_with_status("active"))
        pending = len(athlete.deals_with_status("pending", "negotiating"))
        deals_this_month = len(athlete.deals_starting_in_month(today.year, today.month))

        windows = self.find_deal_windows(athlete, today)
        logger.info(f"Found {len(windows)} deal windows for athlete {athlete.id}")

        return ScheduleAdvice(
            current_status=self._current_status(active, pending, max_deals),
            upcoming_blocked_periods=self._upcoming_blocks(athlete, today),
            suggested_deal_windows=windows[: self.max_windows],
            pacing_advice=self._pacing_advice(deals_this_month, max_deals),
            recommendations=self._recommendations(athlete, active),
        )

    def find_deal_windows(self, athlete: AthleteProfile, today: date) -> list[DealWindow]:
        """Runs of consecutive preferred, unblocked days within the horizon."""
        preferred = set(athlete.preferred_deal_days)
        windows: list[DealWindow] = []
        window_start: Optional[date] = None
        run = 0

        for offset in range(self.horizon_days + 1):
            day = today + timedelta(days=offset)
            good = WEEKDAYS[day.weekday()] in preferred and not athlete.is_blocked(day)

            if good:
                if window_start is None:
                    window_start = day
                run += 1
                continue

            if window_start is not None and run >= self.min_window_days:
                windows.append(self._window(window_start, day - timedelta(days=1), run))
            window_start = None
            run = 0

        # Flush a run still open at the end of the horizon
        if window_start is not None and run >= self.min_window_days:
            windows.append(self._window(window_start, window_start + timedelta(days=run - 1), run))

        return windows

    def _window(self, start: date, end: date, run: int) -> DealWindow:
        return DealWindow(
            period=f"{format_day(start)} - {format_day(end)}",
            reason=f"{run} consecutive preferred days with no conflicts",
            score=min(100, 50 + run * 10),
        )

    def _current_status(self, active: int, pending: int, max_deals: int) -> str:
        if active == 0 and pending == 0:
            return "Your schedule is clear. Great time to take on new opportunities!"
        if active + pending >= max_deals:
            return (
                f"You're at capacity with {active} active and {pending} pending deals. "
                "Focus on completing current commitments."
            )
        return (
            f"You have {active} active and {pending} pending deals. "
            f"Room for {max_deals - active - pending} more this month."
        )

    def _upcoming_blocks(self, athlete: AthleteProfile, today: date) -> list[UpcomingBlock]:
        return [
            UpcomingBlock(
                name=period.name,
                dates=f"{format_day(period.start_date)} - {format_day(period.end_date)}",
                reason=(
                    "Academic calendar"
                    if period.source == "academic_calendar"
                    else "Personal preference"
                ),
            )
            for period in athlete.all_blocked_periods
            if period.end_date >= today
        ]

    def _pacing_advice(self, deals_this_month: int, max_deals: int) -> str:
        if deals_this_month == 0:
            return "You have no deals scheduled this month. Consider taking on 2-3 quality opportunities."
        if deals_this_month <= max_deals / 2:
            return (
                f"Good pacing! You have room for {max_deals // 2} more deals this month "
                "without overcommitting."
            )
        if deals_this_month < max_deals:
            return "Be selective with additional deals this month. Quality over quantity."
        return "Focus on your current commitments. Wait until next month to take on more deals."

    def _recommendations(self, athlete: AthleteProfile, active: int) -> list[str]:
        availability = athlete.availability
        recommendations = []

        if availability and availability.no_finals_deals:
            recommendations.append(
                "Your finals periods are blocked - smart choice for academic success!"
            )
        else:
            recommendations.append("Consider blocking finals periods to protect your GPA.")

        if {"saturday", "sunday"} & set(athlete.preferred_deal_days):
            recommendations.append(
                "Weekends are good for NIL activities that don't conflict with classes."
            )

        if availability and 0 < availability.min_notice_days < 3:
            recommendations.append(
                "Consider increasing your minimum notice days to reduce last-minute stress."
            )

        if active >= 3:
            recommendations.append(
                "With multiple active deals, make sure to track deliverables and deadlines carefully."
            )

        return recommendations
