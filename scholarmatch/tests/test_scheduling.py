"""
Tests for schedule advice and deal windows.
"""
from datetime import date, datetime, timedelta

import pytest

from scholarmatch.models.athlete import AvailabilityPreferences, BlockedPeriod, DealSummary
from scholarmatch.pipeline.scheduling import WEEKDAYS, ScheduleAdvisor, format_day


def window_days(period: str) -> list[date]:
    start_text, end_text = period.split(" - ")
    start = datetime.strptime(start_text, "%m/%d/%Y").date()
    end = datetime.strptime(end_text, "%m/%d/%Y").date()
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


@pytest.fixture
def advisor() -> ScheduleAdvisor:
    return ScheduleAdvisor()


@pytest.fixture
def busy_athlete(make_athlete):
    return make_athlete(
        blocked_periods=[
            BlockedPeriod(name="Fall Break Travel", start_date="2026-10-30", end_date="2026-11-01",
                          source="academic_calendar"),
            BlockedPeriod(name="Summer Session", start_date="2026-06-01", end_date="2026-08-01",
                          source="academic_calendar"),
        ],
        availability=AvailabilityPreferences(
            blocked_periods=[
                BlockedPeriod(name="Family Trip", start_date="2026-11-20", end_date="2026-11-22"),
            ],
        ),
    )


class TestDealWindows:

    def test_first_window_is_next_weekend(self, advisor, make_athlete, now):
        windows = advisor.find_deal_windows(make_athlete(), now.date())

        # The Sunday run of one day is too short
        assert windows[0].period == "10/23/2026 - 10/25/2026"
        assert windows[0].score == 80

    def test_blocked_weekend_skipped(self, advisor, busy_athlete, now):
        windows = advisor.find_deal_windows(busy_athlete, now.date())
        periods = [w.period for w in windows]

        assert "10/30/2026 - 11/1/2026" not in periods
        assert periods[1] == "11/6/2026 - 11/8/2026"

    def test_windows_only_contain_preferred_unblocked_days(self, advisor, busy_athlete, now):
        windows = advisor.find_deal_windows(busy_athlete, now.date())

        assert windows
        for window in windows:
            for day in window_days(window.period):
                assert WEEKDAYS[day.weekday()] in busy_athlete.preferred_deal_days
                assert not busy_athlete.is_blocked(day)

    def test_run_open_at_horizon_is_kept(self, make_athlete, now):
        advisor = ScheduleAdvisor(horizon_days=6)
        windows = advisor.find_deal_windows(make_athlete(), now.date())

        assert [w.period for w in windows] == ["10/23/2026 - 10/24/2026"]
        assert windows[0].score == 70

    def test_single_preferred_day_never_forms_window(self, advisor, make_athlete, now):
        athlete = make_athlete(availability=AvailabilityPreferences(preferred_deal_days=["Friday"]))
        assert advisor.find_deal_windows(athlete, now.date()) == []

    def test_window_count_capped(self, make_athlete, now):
        advice = ScheduleAdvisor(max_windows=2).advise(make_athlete(), now=now)
        assert len(advice.suggested_deal_windows) == 2


class TestScheduleAdvice:

    def test_clear_schedule(self, advisor, make_athlete, now):
        advice = advisor.advise(make_athlete(), now=now)

        assert advice.current_status.startswith("Your schedule is clear")
        assert advice.pacing_advice.startswith("You have no deals scheduled this month")
        assert advice.recommendations[0] == "Consider blocking finals periods to protect your GPA."

    def test_room_left_this_month(self, advisor, make_athlete, now):
        athlete = make_athlete(deals=[
            DealSummary(id="d1", status="active", start_date="2026-10-02"),
            DealSummary(id="d2", status="pending"),
        ])
        advice = advisor.advise(athlete, now=now)

        assert advice.current_status == (
            "You have 1 active and 1 pending deals. Room for 3 more this month."
        )
        assert advice.pacing_advice.startswith("Good pacing!")

    def test_at_capacity(self, advisor, make_athlete, now):
        athlete = make_athlete(
            availability=AvailabilityPreferences(max_deals_per_month=2),
            deals=[
                DealSummary(id="d1", status="active"),
                DealSummary(id="d2", status="negotiating"),
            ],
        )
        advice = advisor.advise(athlete, now=now)
        assert advice.current_status.startswith("You're at capacity")

    def test_upcoming_blocks_exclude_past_periods(self, advisor, busy_athlete, now):
        advice = advisor.advise(busy_athlete, now=now)
        blocks = [(b.name, b.reason) for b in advice.upcoming_blocked_periods]

        assert blocks == [
            ("Fall Break Travel", "Academic calendar"),
            ("Family Trip", "Personal preference"),
        ]
        assert advice.upcoming_blocked_periods[0].dates == "10/30/2026 - 11/1/2026"

    def test_finals_preference_acknowledged(self, advisor, busy_athlete, now):
        advice = advisor.advise(busy_athlete, now=now)
        assert advice.recommendations[0].startswith("Your finals periods are blocked")


def test_format_day_has_no_padding():
    assert format_day(date(2026, 3, 7)) == "3/7/2026"
