"""
Pydantic models for the ScholarMatch advisor.
All data contracts are defined here for strict validation.
"""

from .athlete import (
    AthleteProfile,
    AvailabilityPreferences,
    BlockedPeriod,
    DealSummary,
    MajorCategory,
    ScholarTier,
    SchoolInfo,
    SportInfo,
)
from .deal import BrandProfile, DealOffer, DealType, OpportunityRequirements
from .scoring import (
    BrandCandidate,
    BrandMatch,
    DealValueRange,
    Recommendation,
    ScoreBreakdown,
    SubScore,
    ValuationResult,
)
from .advice import CareerGuidance, ScheduleAdvice, ScoreTips
from .request import ActionItem, AdvisorRequest, AdvisorResponse, ChatMessage

__all__ = [
    # Athlete
    "AthleteProfile",
    "AvailabilityPreferences",
    "BlockedPeriod",
    "DealSummary",
    "MajorCategory",
    "ScholarTier",
    "SchoolInfo",
    "SportInfo",
    # Deals
    "BrandProfile",
    "DealOffer",
    "DealType",
    "OpportunityRequirements",
    # Scoring
    "BrandCandidate",
    "BrandMatch",
    "DealValueRange",
    "Recommendation",
    "ScoreBreakdown",
    "SubScore",
    "ValuationResult",
    # Advice
    "CareerGuidance",
    "ScheduleAdvice",
    "ScoreTips",
    # Requests
    "ActionItem",
    "AdvisorRequest",
    "AdvisorResponse",
    "ChatMessage",
]
