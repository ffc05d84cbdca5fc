"""
Brand matcher - rank candidate brands against an athlete profile.
"""
import logging
from typing import Any, Optional

from ..models.athlete import AthleteProfile
from ..models.deal import DealType
from ..models.scoring import BrandCandidate, BrandMatch, DealValueRange
from .valuation import round_half_up, valuate


logger = logging.getLogger(__name__)

GENERIC_REASON = "General brand partnership opportunity"


class BrandMatcher:
    """
    Scores brands with additive signals and hard-filters on brand requirements.
    Scores start at 50 and are clamped to 0-100.
    """

    def __init__(
        self,
        base_score: int = 50,
        industry_bonus: int = 25,
        gpa_bonus: int = 10,
        verification_bonus: int = 10,
        follower_bonus: int = 10,
        follower_threshold: int = 10_000,
        gpa_threshold: float = 3.5,
    ):
        self.base_score = base_score
        self.industry_bonus = industry_bonus
        self.gpa_bonus = gpa_bonus
        self.verification_bonus = verification_bonus
        self.follower_bonus = follower_bonus
        self.follower_threshold = follower_threshold
        self.gpa_threshold = gpa_threshold

    def match(
        self,
        athlete: AthleteProfile,
        candidates: list[BrandCandidate],
        limit: int = 10,
    ) -> list[BrandMatch]:
        """
        Score and rank candidate brands.

        Args:
            athlete: Athlete to match for
            candidates: Brands to consider
            limit: Number of top matches to return

        Returns:
            BrandMatch list sorted by match score, highest first
        """
        eligible = [b for b in candidates if self.meets_requirements(athlete, b)]
        logger.info(
            f"Matching athlete {athlete.id}: {len(eligible)} of {len(candidates)} "
            f"brands pass requirements"
        )

        fallback = default_deal_value(athlete)
        matches = [self._score_brand(athlete, brand, fallback) for brand in eligible]

        # Stable sort keeps candidate order for ties
        matches.sort(key=lambda m: m.match_score, reverse=True)
        return matches[:limit]

    def meets_requirements(self, athlete: AthleteProfile, brand: BrandCandidate) -> bool:
        """Hard filter on the brand's minimum GPA and follower count."""
        if brand.min_gpa and athlete.effective_gpa < brand.min_gpa:
            return False
        if brand.min_followers and athlete.total_followers < brand.min_followers:
            return False
        return True

    def _score_brand(
        self,
        athlete: AthleteProfile,
        brand: BrandCandidate,
        fallback: DealValueRange,
    ) -> BrandMatch:
        reasons: list[str] = []
        score = self.base_score

        if brand.industry and brand.industry.lower() in athlete.industries:
            score += self.industry_bonus
            major = athlete.major_category.name if athlete.major_category else "academic"
            reasons.append(f"Your {major} major aligns with their {brand.industry} industry")

        if athlete.effective_gpa >= self.gpa_threshold:
            score += self.gpa_bonus
            reasons.append("Your strong GPA makes you attractive to quality brands")

        if athlete.enrollment_verified and athlete.sport_verified:
            score += self.verification_bonus
            reasons.append("Your verified status builds trust with brands")

        if athlete.total_followers >= self.follower_threshold:
            score += self.follower_bonus
            reasons.append("Your social media reach expands their audience")

        return BrandMatch(
            brand_id=brand.id,
            company_name=brand.company_name,
            industry=brand.industry or "General",
            match_score=max(0, min(100, score)),
            match_reasons=reasons or [GENERIC_REASON],
            potential_deal_value=_deal_value(
                brand.budget_range_min, brand.budget_range_max, fallback
            ),
            is_verified=brand.is_verified,
        )

    def from_precomputed(
        self,
        athlete: AthleteProfile,
        rows: list[dict[str, Any]],
    ) -> list[BrandMatch]:
        """
        Map stored athlete/brand match rows into BrandMatch objects.
        Rows keep the order the backend returned them in.
        """
        fallback = default_deal_value(athlete)
        major = athlete.major_category.name if athlete.major_category else "major"
        matches = []

        for row in rows:
            brand = row.get("brand") or {}
            if not brand.get("id"):
                logger.warning(f"Skipping precomputed match without brand: {row.get('brand_id')}")
                continue

            reasons = []
            if row.get("major_match"):
                reasons.append(f"Industry alignment with your {major}")
            if row.get("industry_match"):
                reasons.append("Direct industry match")
            if row.get("values_match"):
                reasons.append("Shared values and mission")

            matches.append(BrandMatch(
                brand_id=str(brand["id"]),
                company_name=brand.get("company_name") or "Unknown brand",
                industry=brand.get("industry") or "General",
                match_score=max(0, min(100, round_half_up(float(row.get("match_score") or 0)))),
                match_reasons=reasons or ["General partnership potential"],
                potential_deal_value=_deal_value(
                    brand.get("budget_range_min"), brand.get("budget_range_max"), fallback
                ),
                is_verified=bool(brand.get("is_verified")),
            ))

        return matches


def default_deal_value(athlete: AthleteProfile) -> DealValueRange:
    """Social-post minimum to endorsement maximum for this athlete."""
    return DealValueRange(
        min=valuate(athlete, DealType.SOCIAL_POST).min,
        max=valuate(athlete, DealType.ENDORSEMENT).max,
    )


def _deal_value(
    budget_min: Optional[float],
    budget_max: Optional[float],
    fallback: DealValueRange,
) -> DealValueRange:
    return DealValueRange(
        min=round_half_up(budget_min) if budget_min else fallback.min,
        max=round_half_up(budget_max) if budget_max else fallback.max,
    )
