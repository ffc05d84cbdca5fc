"""
Deal scoring engine - deterministic offer scoring with transparent breakdown.
"""
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ..models.athlete import AthleteProfile
from ..models.deal import DealOffer
from ..models.scoring import (
    Recommendation,
    ScoreBreakdown,
    SubScore,
    ValuationResult,
)
from .valuation import format_money, round_half_up, valuate


logger = logging.getLogger(__name__)

# Flag texts
MEETS_MARKET_RATE = "Compensation meets or exceeds market rate"
BELOW_MARKET_RATE = "Compensation below market rate"
BLOCKED_PERIOD_CONFLICT = "Conflicts with blocked period"
INSUFFICIENT_NOTICE = "Insufficient notice period"
BRAND_VERIFIED = "Brand is verified on GradeUp"
BRAND_HISTORY = "Brand has extensive deal history"
BRAND_EXCELLENT_RATINGS = "Brand has excellent athlete ratings"
BRAND_POOR_RATINGS = "Brand has below-average athlete ratings"
BRAND_INDUSTRY_MATCH = "Brand industry aligns with your major"
OVER_MONTHLY_LIMIT = "At or over monthly deal limit"

WORKLOAD_STATUSES = ("active", "accepted")


@dataclass
class ComponentResult:
    """Raw (unrounded) component score plus the flags it raised."""
    score: float
    explanation: str
    red_flags: list[str] = field(default_factory=list)
    green_flags: list[str] = field(default_factory=list)

    @property
    def bounded(self) -> float:
        return max(0.0, min(100.0, self.score))

    def to_sub_score(self) -> SubScore:
        return SubScore(score=clamp_score(self.score), explanation=self.explanation)


def clamp_score(value: float) -> int:
    """Round half-up and clamp to 0-100."""
    return max(0, min(100, round_half_up(value)))


def _as_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


class DealScorer:
    """
    Deterministic deal scorer.
    All component scores are 0-100, higher is better for the athlete.
    """

    def __init__(
        self,
        compensation_weight: float = 0.35,
        timing_weight: float = 0.25,
        brand_weight: float = 0.25,
        workload_weight: float = 0.15,
    ):
        self.compensation_weight = compensation_weight
        self.timing_weight = timing_weight
        self.brand_weight = brand_weight
        self.workload_weight = workload_weight

    def score(
        self,
        athlete: AthleteProfile,
        deal: DealOffer,
        now: Optional[datetime] = None,
    ) -> ScoreBreakdown:
        """
        Calculate the full scoring breakdown for a deal offer.

        Args:
            athlete: Snapshot of the athlete receiving the offer
            deal: The offer under review
            now: Reference time for notice and monthly workload checks

        Returns:
            ScoreBreakdown with sub-scores, recommendation and flags
        """
        now = _as_utc(now)
        valuation = valuate(athlete, deal.deal_type)

        compensation = self._calculate_compensation_score(deal, valuation)
        timing = self._calculate_timing_score(athlete, deal, now)
        brand = self._calculate_brand_score(athlete, deal)
        workload = self._calculate_workload_score(athlete, now)

        components = (compensation, timing, brand, workload)
        red_flags = [f for c in components for f in c.red_flags]
        green_flags = [f for c in components for f in c.green_flags]

        sub_scores = [c.to_sub_score() for c in components]
        overall = self._combine(*(c.bounded for c in components))

        recommendation = self._recommend(overall, red_flags, green_flags)
        counter_offer = self._counter_offer(recommendation, deal.amount, valuation)

        logger.info(
            f"Scored deal {deal.id or '<unsaved>'} for athlete {athlete.id}: "
            f"{overall}/100 -> {recommendation.value}"
        )

        return ScoreBreakdown(
            compensation=sub_scores[0],
            timing=sub_scores[1],
            brand=sub_scores[2],
            workload=sub_scores[3],
            overall=overall,
            recommendation=recommendation,
            counter_offer=counter_offer,
            red_flags=red_flags,
            green_flags=green_flags,
            summary=build_summary(recommendation, overall, red_flags, green_flags),
            valuation=valuation,
        )

    def _combine(
        self,
        compensation: float,
        timing: float,
        brand: float,
        workload: float,
    ) -> int:
        """Weighted sum of the four sub-scores."""
        total = (
            compensation * self.compensation_weight
            + timing * self.timing_weight
            + brand * self.brand_weight
            + workload * self.workload_weight
        )
        return clamp_score(total)

    def _calculate_compensation_score(
        self,
        deal: DealOffer,
        valuation: ValuationResult,
    ) -> ComponentResult:
        """Score the offered amount against the fair market range."""
        amount = deal.amount
        typical, minimum = valuation.typical, valuation.min

        if amount >= typical:
            premium = (amount - typical) / typical if typical else 0
            relation = "above" if amount > typical else "at"
            return ComponentResult(
                score=min(100, 80 + premium * 50),
                explanation=(
                    f"The offer of {format_money(amount)} is {relation} your typical "
                    f"rate of {format_money(typical)}."
                ),
                green_flags=[MEETS_MARKET_RATE],
            )

        if amount >= minimum:
            span = typical - minimum
            ratio = (amount - minimum) / span if span else 1
            return ComponentResult(
                score=40 + ratio * 40,
                explanation=(
                    f"The offer of {format_money(amount)} is below your typical rate of "
                    f"{format_money(typical)}, but within acceptable range."
                ),
            )

        ratio = amount / minimum if minimum else 0
        return ComponentResult(
            score=max(10, ratio * 40),
            explanation=(
                f"The offer of {format_money(amount)} is significantly below your minimum "
                f"expected rate of {format_money(minimum)}."
            ),
            red_flags=[BELOW_MARKET_RATE],
        )

    def _calculate_timing_score(
        self,
        athlete: AthleteProfile,
        deal: DealOffer,
        now: datetime,
    ) -> ComponentResult:
        """Check the start date against blocked periods and the notice preference."""
        result = ComponentResult(
            score=70,
            explanation="Timing appears suitable based on your schedule.",
        )
        if deal.start_date is None:
            return result

        if athlete.is_blocked(deal.start_date):
            result.score = 20
            result.explanation = (
                "This deal conflicts with a blocked period (finals, midterms, or custom block)."
            )
            result.red_flags.append(BLOCKED_PERIOD_CONFLICT)

        start = datetime(
            deal.start_date.year, deal.start_date.month, deal.start_date.day,
            tzinfo=timezone.utc,
        )
        days_until = math.ceil((start - now).total_seconds() / 86400)
        min_notice = athlete.min_notice_days

        if days_until < min_notice:
            result.score = max(result.score - 30, 10)
            result.explanation += (
                f" Short notice ({days_until} days vs your {min_notice}-day minimum)."
            )
            result.red_flags.append(INSUFFICIENT_NOTICE)

        return result

    def _calculate_brand_score(
        self,
        athlete: AthleteProfile,
        deal: DealOffer,
    ) -> ComponentResult:
        """Score the brand's track record and fit with the athlete's major."""
        brand = deal.brand
        if brand is None:
            return ComponentResult(
                score=50,
                explanation="No brand verification data available.",
            )

        result = ComponentResult(score=50, explanation="")

        if brand.is_verified:
            result.score += 20
            result.green_flags.append(BRAND_VERIFIED)

        if brand.deals_completed >= 10:
            result.score += 15
            result.green_flags.append(BRAND_HISTORY)

        rating = brand.avg_deal_rating
        if rating >= 4.5:
            result.score += 15
            result.green_flags.append(BRAND_EXCELLENT_RATINGS)
        elif rating >= 4.0:
            result.score += 10
        elif 0 < rating < 3.5:
            # 0 means the brand has never been rated
            result.score -= 20
            result.red_flags.append(BRAND_POOR_RATINGS)

        if brand.industry and brand.industry.lower() in athlete.industries:
            result.score += 15
            result.green_flags.append(BRAND_INDUSTRY_MATCH)

        status = "verified" if brand.is_verified else "not yet verified"
        result.explanation = (
            f"{brand.company_name} is {status} with {brand.deals_completed} completed "
            f"deals and a {rating:.1f} average rating."
        )
        return result

    def _calculate_workload_score(
        self,
        athlete: AthleteProfile,
        now: datetime,
    ) -> ComponentResult:
        """Compare this month's active deals with the athlete's monthly cap."""
        deals_this_month = len(
            athlete.deals_starting_in_month(now.year, now.month, *WORKLOAD_STATUSES)
        )
        max_deals = athlete.max_deals_per_month

        if deals_this_month >= max_deals:
            return ComponentResult(
                score=30,
                explanation=(
                    f"You already have {deals_this_month} deals this month "
                    f"(your limit is {max_deals})."
                ),
                red_flags=[OVER_MONTHLY_LIMIT],
            )
        if deals_this_month == max_deals - 1:
            return ComponentResult(
                score=50,
                explanation=(
                    f"You have {deals_this_month} deals this month. This would put you "
                    f"at your limit of {max_deals}."
                ),
            )
        return ComponentResult(score=70, explanation="Workload appears manageable.")

    def _recommend(
        self,
        overall: int,
        red_flags: list[str],
        green_flags: list[str],
    ) -> Recommendation:
        """Apply the recommendation policy in priority order."""
        if overall >= 75 and not red_flags:
            return Recommendation.ACCEPT
        if overall >= 50 or (overall >= 40 and len(green_flags) >= 2):
            return Recommendation.NEGOTIATE if red_flags else Recommendation.ACCEPT
        if overall >= 35:
            return Recommendation.NEGOTIATE
        return Recommendation.DECLINE if len(red_flags) >= 3 else Recommendation.REVIEW

    def _counter_offer(
        self,
        recommendation: Recommendation,
        amount: float,
        valuation: ValuationResult,
    ) -> Optional[int]:
        """Midpoint between offer and typical rate, never below the minimum."""
        if recommendation != Recommendation.NEGOTIATE or amount >= valuation.typical:
            return None
        return max(round_half_up((valuation.typical + amount) / 2), valuation.min)


def build_summary(
    recommendation: Recommendation,
    score: int,
    red_flags: list[str],
    green_flags: list[str],
) -> str:
    """Build the one-paragraph overall analysis."""
    if recommendation == Recommendation.ACCEPT:
        text = f"This deal scores {score}/100 and looks like a great opportunity. "
        if green_flags:
            text += f"Key positives: {', '.join(green_flags[:2])}. "
        return text + "I recommend accepting this deal."

    if recommendation == Recommendation.NEGOTIATE:
        text = f"This deal scores {score}/100 and has potential, but there are some concerns. "
        if red_flags:
            text += f"Issues to address: {', '.join(red_flags)}. "
        return text + "I recommend negotiating better terms before accepting."

    if recommendation == Recommendation.DECLINE:
        text = f"This deal scores {score}/100 and raises significant concerns. "
        if red_flags:
            text += f"Major issues: {', '.join(red_flags)}. "
        return text + "I recommend declining this deal or requesting substantial changes."

    return (
        f"This deal scores {score}/100. There are both positives and concerns to consider. "
        "I recommend taking more time to review the details and possibly consulting "
        "with your compliance office."
    )
