"""
Valuation module: fair market value range for an athlete and deal type.
"""
import math
from typing import NamedTuple, Optional, Union

from ..models.athlete import AthleteProfile, ScholarTier
from ..models.deal import DealType
from ..models.scoring import ValuationResult


class RateRow(NamedTuple):
    base: float
    follower_multiplier: float
    gpa_bonus: float


BASE_RATES: dict[DealType, RateRow] = {
    DealType.SOCIAL_POST: RateRow(base=50, follower_multiplier=0.001, gpa_bonus=50),
    DealType.APPEARANCE: RateRow(base=200, follower_multiplier=0.002, gpa_bonus=100),
    DealType.ENDORSEMENT: RateRow(base=500, follower_multiplier=0.005, gpa_bonus=200),
    DealType.AUTOGRAPH: RateRow(base=25, follower_multiplier=0.0005, gpa_bonus=25),
    DealType.CAMP: RateRow(base=150, follower_multiplier=0.001, gpa_bonus=75),
    DealType.MERCHANDISE: RateRow(base=100, follower_multiplier=0.002, gpa_bonus=100),
    DealType.OTHER: RateRow(base=100, follower_multiplier=0.001, gpa_bonus=50),
}

TIER_MULTIPLIERS: dict[Optional[ScholarTier], float] = {
    ScholarTier.PLATINUM: 1.5,
    ScholarTier.GOLD: 1.3,
    ScholarTier.SILVER: 1.15,
    ScholarTier.BRONZE: 1.05,
    None: 1.0,
}

# Major revenue sports, compared lowercased without apostrophes
PREMIUM_SPORTS = frozenset({"football", "mens basketball", "womens basketball"})

GPA_BONUS_THRESHOLD = 3.5
PREMIUM_SPORT_MULTIPLIER = 1.25
VERIFIED_MULTIPLIER = 1.1
VETERAN_DEALS, VETERAN_MULTIPLIER = 10, 1.15
EXPERIENCED_DEALS, EXPERIENCED_MULTIPLIER = 5, 1.05
MIN_RATIO, MAX_RATIO = 0.7, 1.4


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def get_rate_row(deal_type: Union[DealType, str]) -> RateRow:
    """Rate row for a deal type; unmapped types use the 'other' row."""
    return BASE_RATES.get(DealType.parse(deal_type), BASE_RATES[DealType.OTHER])


def is_premium_sport(sport_name: Optional[str]) -> bool:
    if not sport_name:
        return False
    return sport_name.lower().replace("'", "").strip() in PREMIUM_SPORTS


def compute_typical_rate(athlete: AthleteProfile, deal_type: Union[DealType, str]) -> float:
    """
    Unrounded typical rate for a deal.

    Multipliers are applied in a fixed order: tier, sport premium,
    verification, deal experience.
    """
    rates = get_rate_row(deal_type)

    typical = rates.base + athlete.total_followers * rates.follower_multiplier

    gpa = athlete.effective_gpa
    if gpa >= GPA_BONUS_THRESHOLD:
        typical += rates.gpa_bonus * (gpa / 4.0)

    typical *= TIER_MULTIPLIERS.get(athlete.scholar_tier, 1.0)

    if is_premium_sport(athlete.sport.name if athlete.sport else None):
        typical *= PREMIUM_SPORT_MULTIPLIER

    if athlete.fully_verified:
        typical *= VERIFIED_MULTIPLIER

    if athlete.deals_completed >= VETERAN_DEALS:
        typical *= VETERAN_MULTIPLIER
    elif athlete.deals_completed >= EXPERIENCED_DEALS:
        typical *= EXPERIENCED_MULTIPLIER

    return typical


def valuate(athlete: AthleteProfile, deal_type: Union[DealType, str]) -> ValuationResult:
    """
    Compute the fair market value range for a deal type.

    Returns:
        ValuationResult with typical rounded to whole dollars and
        min/max at 70% and 140% of it.
    """
    typical = round_half_up(compute_typical_rate(athlete, deal_type))
    return ValuationResult(
        min=round_half_up(typical * MIN_RATIO),
        max=round_half_up(typical * MAX_RATIO),
        typical=typical,
    )


def format_money(amount: float) -> str:
    """Dollar amount with thousands separators; cents only when present."""
    if float(amount).is_integer():
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"

