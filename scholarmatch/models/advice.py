"""
Advice models - schedule planning, score tips, and career guidance.
"""
from typing import Literal

from pydantic import BaseModel, Field


Impact = Literal["high", "medium", "low"]


class UpcomingBlock(BaseModel):
    name: str
    dates: str
    reason: str


class DealWindow(BaseModel):
    """A run of consecutive preferred days with no conflicts."""
    period: str
    reason: str
    score: int = Field(ge=0, le=100)


class ScheduleAdvice(BaseModel):
    current_status: str
    upcoming_blocked_periods: list[UpcomingBlock] = Field(default_factory=list)
    suggested_deal_windows: list[DealWindow] = Field(default_factory=list)
    pacing_advice: str
    recommendations: list[str] = Field(default_factory=list)


class ScoreTip(BaseModel):
    category: Literal["academic", "social", "experience", "verification"]
    title: str
    description: str
    impact: Impact
    actionable: bool = True


class ScoreTips(BaseModel):
    current_score: int
    tier: str
    improvement_potential: int = Field(ge=0)
    tips: list[ScoreTip] = Field(default_factory=list)
    quick_wins: list[str] = Field(default_factory=list)
    long_term_strategies: list[str] = Field(default_factory=list)


class EarningsPotential(BaseModel):
    current: int = Field(ge=0, description="Estimated monthly earnings today")
    optimized: int = Field(ge=0, description="Estimate after the listed improvements")
    factors: list[str] = Field(default_factory=list)


class PlatformPriority(BaseModel):
    platform: str
    priority: str
    reason: str


class ContentStrategy(BaseModel):
    pillars: list[str] = Field(default_factory=list)
    frequency: str
    platforms: list[PlatformPriority] = Field(default_factory=list)


class NextStep(BaseModel):
    action: str
    timeline: str
    impact: str


class CareerGuidance(BaseModel):
    career_summary: str
    earnings_potential: EarningsPotential
    content_strategy: ContentStrategy
    branding_tips: list[str] = Field(default_factory=list)
    next_steps: list[NextStep] = Field(default_factory=list)
