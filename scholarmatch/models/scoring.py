"""
Scoring models - fair market value, deal score breakdowns, and brand matches.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ValuationResult(BaseModel):
    """Fair market value range for one deal type."""
    model_config = ConfigDict(frozen=True)

    min: int = Field(ge=0)
    max: int = Field(ge=0)
    typical: int = Field(ge=0)

    @model_validator(mode="after")
    def check_ordering(self) -> "ValuationResult":
        if not self.min <= self.typical <= self.max:
            raise ValueError("valuation must satisfy min <= typical <= max")
        return self


class Recommendation(str, Enum):
    ACCEPT = "accept"
    NEGOTIATE = "negotiate"
    DECLINE = "decline"
    REVIEW = "review"


class SubScore(BaseModel):
    """One component of a deal score with its explanation."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    explanation: str


class ScoreBreakdown(BaseModel):
    """Complete scoring breakdown for a deal offer."""
    model_config = ConfigDict(frozen=True)

    compensation: SubScore
    timing: SubScore
    brand: SubScore
    workload: SubScore

    overall: int = Field(ge=0, le=100, description="Weighted average of the four sub-scores")
    recommendation: Recommendation
    counter_offer: Optional[int] = Field(default=None, ge=0)

    red_flags: list[str] = Field(default_factory=list)
    green_flags: list[str] = Field(default_factory=list)

    summary: str = Field(default="", description="One-paragraph overall analysis")
    valuation: Optional[ValuationResult] = None

    @property
    def priority(self) -> str:
        """Action priority derived from the overall score."""
        if self.overall >= 70:
            return "high"
        if self.overall >= 50:
            return "medium"
        return "low"


class DealValueRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int = Field(ge=0)
    max: int = Field(ge=0)


class BrandCandidate(BaseModel):
    """A brand considered for matching, with its entry requirements."""
    id: str
    company_name: str
    industry: Optional[str] = None
    is_verified: bool = False
    budget_range_min: Optional[float] = None
    budget_range_max: Optional[float] = None
    min_gpa: Optional[float] = None
    min_followers: Optional[int] = None


class BrandMatch(BaseModel):
    """A ranked brand recommendation for an athlete."""
    model_config = ConfigDict(frozen=True)

    brand_id: str
    company_name: str
    industry: str = "General"
    match_score: int = Field(ge=0, le=100)
    match_reasons: list[str] = Field(min_length=1)
    potential_deal_value: DealValueRange
    is_verified: bool = False
