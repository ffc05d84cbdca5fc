"""
Advisor service - loads the athlete snapshot and runs the requested action.
"""
import logging
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError

from ..ai.llm_client import LLMClient
from ..client.base import AdvisorRepository
from ..config import Config, get_config
from ..errors import AdvisorError, AthleteNotFoundError, DealNotFoundError, InvalidRequestError
from ..models.athlete import AthleteProfile
from ..models.deal import DealOffer
from ..models.request import ActionItem, AdvisorRequest, AdvisorResponse
from ..models.scoring import BrandMatch, ScoreBreakdown
from .brand_matching import BrandMatcher
from .career import build_career_guidance
from .chat import ChatResponder, title_industry
from .deal_scoring import DealScorer
from .scheduling import ScheduleAdvisor
from .score_tips import build_score_tips
from .valuation import format_money


logger = logging.getLogger(__name__)

PENDING_STATUSES = ("pending", "negotiating")


class AdvisorService:
    """
    Entry point for advisor requests.

    Every request names an athlete; the athlete snapshot is loaded once
    and handed to the action's calculator.
    """

    def __init__(
        self,
        repository: AdvisorRepository,
        scorer: Optional[DealScorer] = None,
        matcher: Optional[BrandMatcher] = None,
        schedule_advisor: Optional[ScheduleAdvisor] = None,
        chat: Optional[ChatResponder] = None,
        config: Optional[Config] = None,
    ):
        self.repository = repository
        self.config = config or get_config()
        advisor = self.config.advisor

        self.scorer = scorer or DealScorer()
        self.matcher = matcher or BrandMatcher()
        self.schedule_advisor = schedule_advisor or ScheduleAdvisor(
            horizon_days=advisor.schedule_horizon_days,
            max_windows=advisor.max_deal_windows,
        )
        self.chat = chat or ChatResponder(
            schedule_advisor=self.schedule_advisor,
            llm=LLMClient() if self.config.enable_ai_chat else None,
            enable_llm=self.config.enable_ai_chat,
        )

        self._handlers = {
            "chat": self._handle_chat,
            "analyze_deal": self._handle_analyze_deal,
            "recommend_brands": self._handle_recommend_brands,
            "schedule_advice": self._handle_schedule_advice,
            "score_tips": self._handle_score_tips,
            "career_guidance": self._handle_career_guidance,
        }

    def handle_payload(self, payload: dict[str, Any], now: Optional[datetime] = None) -> dict[str, Any]:
        """Handle a JSON-decoded request body and return a JSON-ready dict."""
        try:
            request = AdvisorRequest.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Rejected malformed request: {e.error_count()} errors")
            response = _failure("Invalid request body")
        else:
            response = self.handle(request, now=now)
        return response.model_dump(mode="json", exclude_none=True)

    def handle(self, request: AdvisorRequest, now: Optional[datetime] = None) -> AdvisorResponse:
        """
        Run one advisor action.

        Errors from the request or backend become a failed response;
        anything else propagates.
        """
        logger.info(f"Advisor request: {request.action} for athlete {request.athlete_id or '<none>'}")

        try:
            athlete = self._load_athlete(request.athlete_id)
        except (AdvisorError, ValidationError) as e:
            logger.warning(f"Request failed before dispatch: {e}")
            return _failure(_error_text(e))

        try:
            response = self._handlers[request.action](request, athlete, now)
        except (AdvisorError, ValidationError) as e:
            logger.warning(f"{request.action} failed: {e}")
            response = _failure(_error_text(e))

        self._record_activity(request, response)
        return response

    def _load_athlete(self, athlete_id: str) -> AthleteProfile:
        if not athlete_id:
            raise InvalidRequestError("athlete_id is required")
        athlete = self.repository.get_athlete(athlete_id)
        if athlete is None:
            raise AthleteNotFoundError(athlete_id)
        return athlete

    def _record_activity(self, request: AdvisorRequest, response: AdvisorResponse) -> None:
        if not self.config.enable_activity_log:
            return
        try:
            self.repository.log_activity(
                f"scholarmatch_{request.action}",
                request.athlete_id,
                {
                    "action": request.action,
                    "has_message": bool(request.message),
                    "deal_id": request.deal_id,
                    "response_success": response.success,
                },
            )
        except AdvisorError as e:
            logger.warning(f"Activity log write failed: {e}")

    def _handle_chat(
        self, request: AdvisorRequest, athlete: AthleteProfile, now: Optional[datetime]
    ) -> AdvisorResponse:
        return self.chat.respond(request.message, athlete, request.conversation_history)

    def _handle_analyze_deal(
        self, request: AdvisorRequest, athlete: AthleteProfile, now: Optional[datetime]
    ) -> AdvisorResponse:
        deal_id = request.deal_id
        detailed = bool(deal_id)

        if not deal_id:
            pending = athlete.deals_with_status(*PENDING_STATUSES)
            if not pending:
                return _no_pending_deals(athlete)
            deal_id = pending[0].id

        deal = self.repository.get_deal(deal_id)
        if deal is None:
            raise DealNotFoundError(deal_id)

        analysis = self.scorer.score(athlete, deal, now=now)
        data: dict[str, Any] = {
            "deal_id": deal.id,
            "analysis": analysis.model_dump(mode="json"),
        }
        if not detailed:
            data["deal_summary"] = {
                "title": deal.title,
                "brand": deal.brand.company_name if deal.brand else None,
                "amount": deal.amount,
                "type": deal.deal_type.value,
            }

        return AdvisorResponse(
            success=True,
            message=_deal_analysis_message(deal, analysis, detailed),
            data=data,
            action_items=[
                ActionItem(
                    type=analysis.recommendation.value,
                    title=f"{analysis.recommendation.value.capitalize()} this deal",
                    description=analysis.summary,
                    priority=analysis.priority,
                )
            ],
            confidence=analysis.overall / 100,
        )

    def _handle_recommend_brands(
        self, request: AdvisorRequest, athlete: AthleteProfile, now: Optional[datetime]
    ) -> AdvisorResponse:
        matches = self.recommend_brands(athlete)
        if not matches:
            return _no_brand_matches(athlete)

        top = matches[:self.config.advisor.top_recommendations_shown]
        return AdvisorResponse(
            success=True,
            message=_brand_matches_message(athlete, top),
            data={
                "recommendations": [m.model_dump(mode="json") for m in top],
                "total_matches": len(matches),
            },
            suggestions=[
                "How do I pitch to these brands?",
                "What deal types work best with each?",
                "Are there any brands I should avoid?",
            ],
        )

    def recommend_brands(self, athlete: AthleteProfile) -> list[BrandMatch]:
        """Stored matches when the backend has them, otherwise live matching."""
        limit = self.config.advisor.recommendation_limit

        rows = self.repository.list_precomputed_matches(athlete.id, limit=limit)
        if rows:
            matches = self.matcher.from_precomputed(athlete, rows)
            if matches:
                logger.info(f"Using {len(matches)} precomputed brand matches")
                return matches

        candidates = self.repository.list_brand_candidates(
            limit=self.config.advisor.brand_candidate_limit
        )
        return self.matcher.match(athlete, candidates, limit=limit)

    def _handle_schedule_advice(
        self, request: AdvisorRequest, athlete: AthleteProfile, now: Optional[datetime]
    ) -> AdvisorResponse:
        advice = self.schedule_advisor.advise(athlete, now=now)

        if advice.upcoming_blocked_periods:
            blocked = "\n".join(
                f"- **{p.name}**: {p.dates} ({p.reason})" for p in advice.upcoming_blocked_periods
            )
        else:
            blocked = "No blocked periods in the next 6 months."
        if advice.suggested_deal_windows:
            windows = "\n".join(
                f"- {w.period}: {w.reason} (Score: {w.score}/100)" for w in advice.suggested_deal_windows
            )
        else:
            windows = "All upcoming dates appear available!"
        recommendations = "\n".join(f"- {r}" for r in advice.recommendations)

        return AdvisorResponse(
            success=True,
            message=f"""**Your NIL Schedule Analysis**

**Current Status:**
{advice.current_status}

**Pacing Advice:**
{advice.pacing_advice}

**Upcoming Blocked Periods:**
{blocked}

**Best Windows for Deals:**
{windows}

**Recommendations:**
{recommendations}

Remember: Quality over quantity. One great deal is better than three mediocre ones!""",
            data=advice.model_dump(mode="json"),
            suggestions=[
                "Help me set up my availability preferences",
                "How many deals should I do per month?",
                "Block my finals period",
            ],
        )

    def _handle_score_tips(
        self, request: AdvisorRequest, athlete: AthleteProfile, now: Optional[datetime]
    ) -> AdvisorResponse:
        tips = build_score_tips(athlete)

        if tips.quick_wins:
            quick_wins = "\n".join(f"- {w}" for w in tips.quick_wins)
        else:
            quick_wins = "You've already captured the quick wins!"
        priority = "\n".join(
            f"\n**{t.title}** ({t.category})\n{t.description}"
            for t in tips.tips if t.impact == "high"
        )
        strategies = "\n".join(f"- {s}" for s in tips.long_term_strategies)

        return AdvisorResponse(
            success=True,
            message=f"""**GradeUp Score Improvement Plan**

**Current Score:** {tips.current_score}/1000 ({tips.tier} Tier)
**Improvement Potential:** +{tips.improvement_potential} points

**Quick Wins (This Week):**
{quick_wins}

**Priority Improvements:**
{priority}

**Long-Term Strategies:**
{strategies}

**Score Breakdown:**
Your GradeUp Score combines:
- Athletic Score (40%): Based on sport tier, deals, and ratings
- Social Score (30%): Based on follower count and engagement
- Academic Score (30%): GPA-weighted with bonuses for excellence

Focus on the areas where you have the most room to grow!""",
            data=tips.model_dump(mode="json"),
            action_items=[
                ActionItem(type="improve", title=t.title, description=t.description, priority=t.impact)
                for t in tips.tips if t.actionable
            ],
            suggestions=[
                "How do I improve my academic score?",
                "Tips for growing my social following",
                "Help me get verified",
            ],
        )

    def _handle_career_guidance(
        self, request: AdvisorRequest, athlete: AthleteProfile, now: Optional[datetime]
    ) -> AdvisorResponse:
        guidance = build_career_guidance(athlete)
        earnings = guidance.earnings_potential
        strategy = guidance.content_strategy

        factors = f"\n- Key Improvements: {', '.join(earnings.factors)}" if earnings.factors else ""
        pillars = "\n".join(f"- {p}" for p in strategy.pillars)
        platforms = "\n".join(
            f"- **{p.platform}** ({p.priority}): {p.reason}" for p in strategy.platforms
        )
        branding = "\n".join(f"- {t}" for t in guidance.branding_tips)
        steps = "\n".join(
            f"\n**{s.action}**\nTimeline: {s.timeline} | Impact: {s.impact}"
            for s in guidance.next_steps
        )

        return AdvisorResponse(
            success=True,
            message=f"""**Your NIL Career Roadmap**

{guidance.career_summary}

**Earnings Potential:**
- Current Monthly Estimate: {format_money(earnings.current)}
- Optimized Potential: {format_money(earnings.optimized)}{factors}

**Content Strategy:**

*Content Pillars:*
{pillars}

*Posting Frequency:*
{strategy.frequency}

*Platform Priorities:*
{platforms}

**Personal Branding Tips:**
{branding}

**Your Next Steps:**
{steps}

Remember: Your NIL journey is a marathon, not a sprint. Build your brand authentically!""",
            data=guidance.model_dump(mode="json"),
            action_items=[
                ActionItem(
                    type="improve",
                    title=s.action,
                    description=s.impact,
                    priority="high" if "week" in s.timeline else "medium",
                )
                for s in guidance.next_steps
            ],
            suggestions=[
                "Help me create a content calendar",
                "What brands should I target first?",
                "How do I stand out from other athletes?",
            ],
        )


def _error_text(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return "Invalid data received from backend"
    return str(error)


def _failure(error: str) -> AdvisorResponse:
    return AdvisorResponse(
        success=False,
        message=f"Sorry, I encountered an error: {error}. Please try again.",
        error=error,
    )


def _no_pending_deals(athlete: AthleteProfile) -> AdvisorResponse:
    recent = "\n".join(
        f"- {d.title}: {format_money(d.amount)} ({d.status})" for d in athlete.deals[:3]
    ) or "No recent deals"
    return AdvisorResponse(
        success=True,
        message=f"""You don't have any pending deals to analyze right now.

**Your Recent Deal Activity:**
{recent}

Would you like me to help you find new opportunities that match your profile?""",
        suggestions=[
            "Find brand recommendations for me",
            "What deal types should I look for?",
            "How do I get more deal offers?",
        ],
    )


def _deal_analysis_message(deal: DealOffer, analysis: ScoreBreakdown, detailed: bool) -> str:
    header = (
        f"**Deal Analysis: {deal.title}**\n\n"
        f"**Recommendation: {analysis.recommendation.value.upper()}** "
        f"(Score: {analysis.overall}/100)\n\n"
        f"{analysis.summary}\n"
    )
    components = [
        ("Compensation", analysis.compensation),
        ("Timing", analysis.timing),
        ("Brand", analysis.brand),
        ("Workload", analysis.workload),
    ]

    if detailed:
        body = "\n**Detailed Breakdown:**\n\n" + "\n\n".join(
            f"**{name} ({sub.score}/100)**\n{sub.explanation}" for name, sub in components
        )
        if analysis.green_flags:
            body += "\n\n**Green Flags:**\n" + "\n".join(f"- {f}" for f in analysis.green_flags)
        if analysis.red_flags:
            body += "\n\n**Red Flags:**\n" + "\n".join(f"- {f}" for f in analysis.red_flags)
        if analysis.counter_offer:
            body += (
                f"\n\n**Suggested Counter-Offer:** {format_money(analysis.counter_offer)}\n"
                "This brings the offer closer to your typical market rate "
                "while still being reasonable for the brand."
            )
        return header + body

    body = "\n**Breakdown:**\n" + "\n".join(
        f"- {name}: {sub.score}/100 - {sub.explanation}" for name, sub in components
    )
    if analysis.green_flags:
        body += f"\n\n**Positives:** {', '.join(analysis.green_flags)}"
    if analysis.red_flags:
        body += f"\n\n**Concerns:** {', '.join(analysis.red_flags)}"
    if analysis.counter_offer:
        body += f"\n\n**Suggested Counter-Offer:** {format_money(analysis.counter_offer)}"
    return header + body


def _no_brand_matches(athlete: AthleteProfile) -> AdvisorResponse:
    major_category = athlete.major_category
    industries = major_category.industries if major_category else []
    if industries:
        ideal = "\n".join(f"- {title_industry(i)} companies" for i in industries[:5])
    else:
        ideal = "- Consumer brands\n- Sports equipment\n- Local businesses"

    return AdvisorResponse(
        success=True,
        message=f"""I couldn't find specific brand matches right now, but here's what you should look for:

**Ideal Brand Types for You:**
Based on your {major_category.name if major_category else 'studies'} major and {athlete.sport.name if athlete.sport else 'athletic'} background:

{ideal}

**Tips for Finding Brands:**
1. Look for brands you already use and love
2. Check what brands sponsor athletes at your school
3. Consider local businesses in your college town
4. Look at what brands your sport's professionals endorse

Would you like help reaching out to specific types of brands?""",
        suggestions=[
            "How do I reach out to brands?",
            "What should I include in my pitch?",
            "Show me my score improvement tips",
        ],
    )


def _brand_matches_message(athlete: AthleteProfile, matches: list[BrandMatch]) -> str:
    entries = "\n\n".join(
        f"**{i}. {m.company_name}**{' (Verified)' if m.is_verified else ''}\n"
        f"   Match Score: {m.match_score}/100 | Industry: {m.industry}\n"
        f"   Potential Value: {format_money(m.potential_deal_value.min)} - "
        f"{format_money(m.potential_deal_value.max)}\n"
        f"   Why: {m.match_reasons[0]}"
        for i, m in enumerate(matches, start=1)
    )
    major = athlete.major_category.name if athlete.major_category else "academic"
    sport = athlete.sport.name if athlete.sport else "sport"

    return f"""**Top Brand Matches for You:**

{entries}

**Why These Brands?**
I matched you based on:
- Your {major} major and related industries
- Your {sport} and athletic profile
- Your {athlete.total_followers:,} followers
- Your {athlete.gradeup_score}/1000 GradeUp Score

Ready to reach out to any of these brands?"""
