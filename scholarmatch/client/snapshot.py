"""
In-memory repository backed by a JSON snapshot.
"""
import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..models.athlete import AthleteProfile
from ..models.deal import DealOffer
from ..models.scoring import BrandCandidate
from .base import AdvisorRepository


logger = logging.getLogger(__name__)


class SnapshotRepository(AdvisorRepository):
    """
    Serves already-materialized athletes, deals and brands.

    Snapshot JSON layout:
        {"athletes": [...], "deals": [...], "brands": [...],
         "brand_matches": {"<athlete_id>": [...]}}
    """

    def __init__(
        self,
        athletes: Optional[list[AthleteProfile]] = None,
        deals: Optional[list[DealOffer]] = None,
        brands: Optional[list[BrandCandidate]] = None,
        brand_matches: Optional[dict[str, list[dict[str, Any]]]] = None,
    ):
        self.athletes = {a.id: a for a in athletes or []}
        self.deals = {d.id: d for d in deals or [] if d.id}
        self.brands = list(brands or [])
        self.brand_matches = dict(brand_matches or {})
        self.activity: list[dict[str, Any]] = []

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SnapshotRepository":
        return cls(
            athletes=[AthleteProfile.model_validate(a) for a in data.get("athletes", [])],
            deals=[DealOffer.model_validate(d) for d in data.get("deals", [])],
            brands=[BrandCandidate.model_validate(b) for b in data.get("brands", [])],
            brand_matches=data.get("brand_matches", {}),
        )

    @classmethod
    def from_file(cls, path: Path) -> "SnapshotRepository":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        repo = cls.from_dict(data)
        logger.info(
            f"Loaded snapshot {path}: {len(repo.athletes)} athletes, "
            f"{len(repo.deals)} deals, {len(repo.brands)} brands"
        )
        return repo

    def get_athlete(self, athlete_id: str) -> Optional[AthleteProfile]:
        return self.athletes.get(athlete_id)

    def get_deal(self, deal_id: str) -> Optional[DealOffer]:
        return self.deals.get(deal_id)

    def list_brand_candidates(self, limit: int = 20) -> list[BrandCandidate]:
        return [b for b in self.brands if b.is_verified][:limit]

    def list_precomputed_matches(self, athlete_id: str, limit: int = 10) -> list[dict[str, Any]]:
        return self.brand_matches.get(athlete_id, [])[:limit]

    def log_activity(self, action: str, athlete_id: str, metadata: dict[str, Any]) -> None:
        self.activity.append({"action": action, "athlete_id": athlete_id, "metadata": metadata})
