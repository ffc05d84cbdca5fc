"""Pipeline modules for advisor actions."""

from .valuation import valuate
from .deal_scoring import DealScorer
from .brand_matching import BrandMatcher
from .scheduling import ScheduleAdvisor
from .score_tips import build_score_tips
from .career import build_career_guidance
from .chat import ChatResponder
from .advisor import AdvisorService

__all__ = [
    "valuate",
    "DealScorer",
    "BrandMatcher",
    "ScheduleAdvisor",
    "build_score_tips",
    "build_career_guidance",
    "ChatResponder",
    "AdvisorService",
]
