"""
Chat responder - keyword-routed answers with an optional LLM fallback.
"""
import logging
from typing import Callable, Optional

from openai import OpenAIError

from ..ai.llm_client import LLMClient
from ..ai.prompts import GENERAL_SYSTEM_PROMPT, build_athlete_context
from ..models.athlete import AthleteProfile
from ..models.deal import DealType
from ..models.request import AdvisorResponse, ChatMessage
from .scheduling import ScheduleAdvisor
from .valuation import format_money, round_half_up, valuate


logger = logging.getLogger(__name__)

Topic = Callable[[AthleteProfile], AdvisorResponse]


def _has_any(text: str, *keywords: str) -> bool:
    return any(k in text for k in keywords)


def title_industry(industry: str) -> str:
    return industry[:1].upper() + industry[1:].replace("_", " ", 1)


class ChatResponder:
    """Routes free-text questions to canned, profile-aware answers."""

    def __init__(
        self,
        schedule_advisor: Optional[ScheduleAdvisor] = None,
        llm: Optional[LLMClient] = None,
        enable_llm: bool = False,
    ):
        self.schedule_advisor = schedule_advisor or ScheduleAdvisor()
        self.llm = llm
        self.enable_llm = enable_llm

    def respond(
        self,
        message: Optional[str],
        athlete: AthleteProfile,
        history: Optional[list[ChatMessage]] = None,
    ) -> AdvisorResponse:
        """
        Answer a chat message for an athlete.

        Topics are checked in a fixed order; the first keyword hit wins.
        """
        text = (message or "").lower()

        routes: list[tuple[tuple[str, ...], Topic]] = [
            (("rule", "ncaa", "compliance", "legal"), self._rules),
            (("tax", "irs", "1099"), self._taxes),
            (("earn", "money", "worth", "value", "rate"), self._earnings),
            (("brand", "deal", "sponsor", "partner"), self._brands),
            (("schedule", "time", "busy", "available"), self._schedule),
            (("gpa", "grade", "academic", "school", "study"), self._academics),
        ]
        for keywords, topic in routes:
            if _has_any(text, *keywords):
                logger.info(f"Chat routed to {topic.__name__.lstrip('_')}")
                return topic(athlete)

        if text.strip() and self.enable_llm and self.llm and self.llm.is_available():
            reply = self._ask_llm(message, athlete, history)
            if reply:
                return AdvisorResponse(success=True, message=reply)

        return self._menu(athlete)

    def _ask_llm(
        self,
        message: str,
        athlete: AthleteProfile,
        history: Optional[list[ChatMessage]],
    ) -> Optional[str]:
        system_prompt = f"{GENERAL_SYSTEM_PROMPT}\n\n{build_athlete_context(athlete)}"
        try:
            return self.llm.chat(system_prompt, message, history)
        except (OpenAIError, RuntimeError) as e:
            logger.warning(f"LLM chat failed, using default reply: {e}")
            return None

    def _rules(self, athlete: AthleteProfile) -> AdvisorResponse:
        school = athlete.school.name if athlete.school else "your school"
        return AdvisorResponse(
            success=True,
            message=f"""Great question about NIL rules! Here's what you need to know:

**Key NIL Rules:**
1. You CAN earn money from your name, image, and likeness
2. You MUST disclose all NIL activities to {school}
3. You CANNOT be paid for athletic performance (pay-for-play)
4. You CANNOT use school logos/marks without permission
5. State laws vary - know your state's specific requirements

**Your Responsibilities:**
- Report all deals to your compliance office
- Keep records of all NIL income for taxes
- Review contracts carefully before signing
- Avoid conflicts with team sponsors

For specific situations, always consult with your school's compliance office. They're there to help you, not punish you!""",
            suggestions=[
                "Would you like me to explain tax obligations for NIL income?",
                "Want to know about disclosure requirements at your school?",
                "Should I help you understand what types of deals are allowed?",
            ],
        )

    def _taxes(self, athlete: AthleteProfile) -> AdvisorResponse:
        earnings = athlete.total_earnings
        return AdvisorResponse(
            success=True,
            message=f"""NIL income is taxable income. Here's what you need to know:

**Tax Basics for NIL:**
1. NIL income is considered self-employment income
2. You'll likely receive 1099 forms from brands paying $600+
3. You may need to make quarterly estimated tax payments
4. You can deduct legitimate business expenses

**Deductible Expenses May Include:**
- Agent/manager fees (if applicable)
- Professional photos for your profile
- Travel for NIL appearances (if not reimbursed)
- Equipment used primarily for NIL content

**Your Estimated Tax Impact:**
Based on your total earnings of {format_money(earnings)}, you should set aside approximately {format_money(round_half_up(earnings * 0.25))} for taxes (varies by state and total income).

**Important:** I recommend consulting with a tax professional who understands NIL income. Many schools offer tax guidance for athletes!""",
            suggestions=[
                "Would you like tips on tracking NIL expenses?",
                "Should I explain quarterly tax payments?",
                "Want to know more about deductible expenses?",
            ],
        )

    def _earnings(self, athlete: AthleteProfile) -> AdvisorResponse:
        fair_value = valuate(athlete, DealType.SOCIAL_POST)
        typical = fair_value.typical
        tier = f" ({athlete.scholar_tier.value} tier)" if athlete.scholar_tier else ""
        rating = (
            f"{athlete.avg_deal_rating:.1f}/5.0" if athlete.avg_deal_rating > 0 else "Not yet rated"
        )
        gpa_line = (
            "strong GPA gives you a premium - brands love scholar-athletes!"
            if athlete.effective_gpa >= 3.5
            else "GPA affects your rates - improving it would unlock higher-paying opportunities."
        )
        return AdvisorResponse(
            success=True,
            message=f"""Let me break down your NIL earning potential:

**Your Current Metrics:**
- GradeUp Score: {athlete.gradeup_score}/1000{tier}
- Total Followers: {athlete.total_followers:,}
- Deals Completed: {athlete.deals_completed}
- Average Rating: {rating}

**Estimated Deal Values:**
- Social Media Post: {format_money(fair_value.min)} - {format_money(fair_value.max)}
- Appearance: {format_money(typical * 3)} - {format_money(typical * 5)}
- Endorsement: {format_money(typical * 5)} - {format_money(typical * 10)}

**Total Earnings to Date:** {format_money(athlete.total_earnings)}

Your {gpa_line}""",
            suggestions=[
                "Want tips on increasing your deal value?",
                "Should I find brands that match your profile?",
                "Would you like to see score improvement strategies?",
            ],
            data={
                "fair_value": fair_value.model_dump(),
                "current_earnings": athlete.total_earnings,
                "gradeup_score": athlete.gradeup_score,
            },
        )

    def _brands(self, athlete: AthleteProfile) -> AdvisorResponse:
        major_category = athlete.major_category
        industries = major_category.industries if major_category else []
        if industries:
            industry_lines = "\n".join(f"- {title_industry(i)}" for i in industries[:5])
        else:
            industry_lines = "- General consumer brands\n- Sports and fitness\n- Local businesses"
        gpa = athlete.effective_gpa

        return AdvisorResponse(
            success=True,
            message=f"""Let's talk about brand partnerships for you!

**Your Profile Strengths:**
- Sport: {athlete.sport.name if athlete.sport else 'Athletics'} at {athlete.school.name if athlete.school else 'your school'}
- Major: {athlete.major or (major_category.name if major_category else 'Not specified')}
- GPA: {gpa if gpa else 'Not listed'}
- Followers: {athlete.total_followers:,}

**Best Brand Matches for You:**
Based on your {major_category.name if major_category else 'studies'}, these industries align well:
{industry_lines}

**Deal Types to Consider:**
1. Social media posts (quick, flexible)
2. Local business appearances (build community ties)
3. Product endorsements (if you genuinely use the product)
4. Camp/clinic appearances (great for athletes who want to coach)

Want me to find specific brand recommendations for you?""",
            suggestions=[
                "Show me brand recommendations",
                "How do I negotiate better deal terms?",
                "What brands should I avoid?",
            ],
        )

    def _schedule(self, athlete: AthleteProfile) -> AdvisorResponse:
        advice = self.schedule_advisor.advise(athlete)
        if advice.upcoming_blocked_periods:
            blocked = "\n".join(
                f"- {p.name}: {p.dates}" for p in advice.upcoming_blocked_periods[:3]
            )
        else:
            blocked = "No blocked periods in the next 3 months."
        windows = "\n".join(
            f"- {w.period} ({w.reason})" for w in advice.suggested_deal_windows[:3]
        )

        return AdvisorResponse(
            success=True,
            message=f"""Here's your current schedule status:

**{advice.current_status}**

**Upcoming Blocked Periods:**
{blocked}

**{advice.pacing_advice}**

**Recommended Deal Windows:**
{windows}

Remember: {advice.recommendations[0]}""",
            suggestions=[
                "How many deals should I take per month?",
                "When are the best times for appearances?",
                "Help me block off study time",
            ],
            data=advice.model_dump(),
        )

    def _academics(self, athlete: AthleteProfile) -> AdvisorResponse:
        gpa = athlete.effective_gpa
        if gpa >= 3.5:
            closing = "Your strong GPA is a competitive advantage - make sure brands know about it!"
        elif gpa >= 3.0:
            closing = "You're doing well! Push for that 3.5 to unlock premium brand opportunities."
        else:
            closing = "Focus on academics first - a stronger GPA will significantly boost your NIL potential."
        major = athlete.major or (athlete.major_category.name if athlete.major_category else "Not specified")

        return AdvisorResponse(
            success=True,
            message=f"""Academics are central to your NIL success! Here's the breakdown:

**Your Academic Profile:**
- Current GPA: {f'{gpa:.2f}' if gpa > 0 else 'Not listed'}
- Major: {major}
- Year: {athlete.academic_year or 'Not specified'}
- Grades Verified: {'Yes' if athlete.grades_verified else 'Not yet - verify to boost your score!'}

**Why GPA Matters for NIL:**
1. Brands trust scholar-athletes more
2. Higher GPA = higher deal values (+10-20%)
3. Dean's List status (3.5+) unlocks premium opportunities
4. Academic excellence is YOUR differentiator

**Academic Tips for Athletes:**
- Use your athletic department's tutoring resources
- Block study time like you block practice time
- Build relationships with professors during office hours
- Consider your NIL activities when choosing course loads

{closing}""",
            suggestions=[
                "How do I balance NIL with studying?",
                "What brands value academic excellence?",
                "Show me my score improvement tips",
            ],
        )

    def _menu(self, athlete: AthleteProfile) -> AdvisorResponse:
        greeting = f"Hey {athlete.first_name}!" if athlete.first_name else "Hey there!"
        return AdvisorResponse(
            success=True,
            message=f"""{greeting} I'm ScholarMatch, your AI NIL advisor. I can help you with:

**Deal Analysis** - Evaluate offers and suggest counter-offers
**Brand Matching** - Find brands that fit your profile and values
**Schedule Planning** - Balance NIL with academics and athletics
**Score Improvement** - Tips to boost your GradeUp Score
**NIL Rules & Taxes** - Navigate compliance and financial questions

**Your Quick Stats:**
- GradeUp Score: {athlete.gradeup_score}/1000
- Total Earnings: {format_money(athlete.total_earnings)}
- Deals Completed: {athlete.deals_completed}
- Followers: {athlete.total_followers:,}

What would you like help with today?""",
            suggestions=[
                "Analyze my pending deals",
                "Find brands that match my profile",
                "How can I improve my score?",
                "What are the NIL rules I should know?",
            ],
        )
