"""
Athlete models - the read-only profile snapshot every advisor action works on.
"""
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def parse_day(v: Any) -> Any:
    """Accept ISO dates and timestamps ("2026-03-01T12:00:00Z") for date fields."""
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, str) and len(v) > 10 and v[10] in ("T", " "):
        return v[:10]
    return v


class ScholarTier(str, Enum):
    """Scholar classification used as a valuation multiplier."""
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"

    @classmethod
    def parse(cls, value: Any) -> Optional["ScholarTier"]:
        """Map a raw tier value to a tier, or None when absent or unrecognized."""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class SchoolInfo(BaseModel):
    name: str
    short_name: Optional[str] = None
    division: Optional[str] = None


class SportInfo(BaseModel):
    name: str
    category: Optional[str] = None


class MajorCategory(BaseModel):
    """Major grouping with the industries it feeds into."""
    name: str
    industries: list[str] = Field(default_factory=list)


class AcademicRecord(BaseModel):
    gpa: float
    semester: str
    year: int
    deans_list: bool = False


class BlockedPeriod(BaseModel):
    """A closed date interval during which the athlete takes no deals."""
    name: str = ""
    start_date: date
    end_date: date
    period_type: Optional[str] = None
    source: str = Field(default="custom", description="'academic_calendar' or a custom block")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        return parse_day(v)

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class AvailabilityPreferences(BaseModel):
    """Scheduling preferences the athlete set for NIL activity."""
    blocked_periods: list[BlockedPeriod] = Field(default_factory=list)
    max_deals_per_month: int = Field(default=5, ge=0)
    no_finals_deals: bool = True
    no_midterms_deals: bool = True
    preferred_deal_days: list[str] = Field(
        default_factory=lambda: ["friday", "saturday", "sunday"]
    )
    min_notice_days: int = Field(default=3, ge=0)
    max_hours_per_week: int = Field(default=10, ge=0)

    @field_validator("preferred_deal_days", mode="before")
    @classmethod
    def lowercase_days(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [str(d).strip().lower() for d in v]
        return v


class DealSummary(BaseModel):
    """One of the athlete's existing deals, as listed on the profile."""
    id: str
    title: str = ""
    amount: float = Field(default=0, ge=0)
    status: str = "pending"
    deal_type: str = "other"
    brand_name: Optional[str] = None
    brand_industry: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        return parse_day(v)


class AthleteProfile(BaseModel):
    """
    Snapshot of an athlete with everything the advisor needs.
    Built by a repository; never mutated by the calculators.
    """
    id: str
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None

    school: Optional[SchoolInfo] = None
    sport: Optional[SportInfo] = None
    major_category: Optional[MajorCategory] = None
    major: Optional[str] = None
    academic_year: Optional[str] = None

    # Academics
    gpa: Optional[float] = Field(default=None, ge=0)
    cumulative_gpa: Optional[float] = Field(default=None, ge=0)
    academic_records: list[AcademicRecord] = Field(default_factory=list)

    # Reach and track record
    gradeup_score: int = Field(default=0, ge=0, le=1000)
    total_followers: int = Field(default=0, ge=0)
    instagram_followers: int = Field(default=0, ge=0)
    twitter_followers: int = Field(default=0, ge=0)
    tiktok_followers: int = Field(default=0, ge=0)
    total_earnings: float = Field(default=0, ge=0)
    deals_completed: int = Field(default=0, ge=0)
    avg_deal_rating: float = Field(default=0, ge=0, le=5)
    nil_valuation: float = Field(default=0, ge=0)
    scholar_tier: Optional[ScholarTier] = None

    # Verification
    enrollment_verified: bool = False
    sport_verified: bool = False
    grades_verified: bool = False

    accepting_deals: bool = True
    min_deal_amount: Optional[float] = None

    deals: list[DealSummary] = Field(default_factory=list)
    availability: Optional[AvailabilityPreferences] = None
    blocked_periods: list[BlockedPeriod] = Field(
        default_factory=list,
        description="Academic calendar and custom blocks resolved by the backend",
    )

    @field_validator("scholar_tier", mode="before")
    @classmethod
    def parse_tier(cls, v: Any) -> Optional[ScholarTier]:
        return ScholarTier.parse(v)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def effective_gpa(self) -> float:
        """Cumulative GPA, falling back to the term GPA, else 0."""
        return self.cumulative_gpa or self.gpa or 0.0

    @property
    def industries(self) -> list[str]:
        """Lowercased industry tags derived from the athlete's major."""
        if not self.major_category:
            return []
        return [i.lower() for i in self.major_category.industries]

    @property
    def fully_verified(self) -> bool:
        return self.enrollment_verified and self.sport_verified and self.grades_verified

    @property
    def min_notice_days(self) -> int:
        if self.availability and self.availability.min_notice_days:
            return self.availability.min_notice_days
        return 3

    @property
    def max_deals_per_month(self) -> int:
        if self.availability and self.availability.max_deals_per_month:
            return self.availability.max_deals_per_month
        return 5

    @property
    def preferred_deal_days(self) -> list[str]:
        if self.availability:
            return self.availability.preferred_deal_days
        return ["friday", "saturday", "sunday"]

    @property
    def all_blocked_periods(self) -> list[BlockedPeriod]:
        """
        Resolved and custom blocked periods, sorted by start date.

        The backend already folds custom blocks into blocked_periods, so a
        custom block with the same dates as one already listed is skipped.
        """
        custom = self.availability.blocked_periods if self.availability else []
        periods: dict[tuple[date, date], BlockedPeriod] = {}
        for period in [*self.blocked_periods, *custom]:
            periods.setdefault((period.start_date, period.end_date), period)
        return sorted(periods.values(), key=lambda p: (p.start_date, p.end_date))

    def is_blocked(self, day: date) -> bool:
        """Check whether a day falls inside any blocked period."""
        for period in self.all_blocked_periods:
            if period.start_date > day:
                break
            if period.contains(day):
                return True
        return False

    def deals_with_status(self, *statuses: str) -> list[DealSummary]:
        return [d for d in self.deals if d.status in statuses]

    def deals_starting_in_month(self, year: int, month: int, *statuses: str) -> list[DealSummary]:
        """Deals whose start date falls in the given month, optionally by status."""
        return [
            d for d in self.deals
            if d.start_date is not None
            and d.start_date.year == year
            and d.start_date.month == month
            and (not statuses or d.status in statuses)
        ]
