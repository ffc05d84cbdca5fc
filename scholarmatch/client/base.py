"""
Repository interface the advisor reads athletes, deals and brands through.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..models.athlete import AthleteProfile
from ..models.deal import DealOffer
from ..models.scoring import BrandCandidate


class AdvisorRepository(ABC):
    """Data access for the advisor. Implementations return fully built snapshots."""

    @abstractmethod
    def get_athlete(self, athlete_id: str) -> Optional[AthleteProfile]:
        """Athlete with academics, recent deals, availability and blocked periods."""

    @abstractmethod
    def get_deal(self, deal_id: str) -> Optional[DealOffer]:
        """Deal with its brand and originating opportunity."""

    @abstractmethod
    def list_brand_candidates(self, limit: int = 20) -> list[BrandCandidate]:
        """Verified brands eligible for on-the-fly matching."""

    @abstractmethod
    def list_precomputed_matches(self, athlete_id: str, limit: int = 10) -> list[dict[str, Any]]:
        """Stored match rows for an athlete, best first. Empty when none exist."""

    def log_activity(self, action: str, athlete_id: str, metadata: dict[str, Any]) -> None:
        """Record an advisor interaction. No-op unless overridden."""
        return None
