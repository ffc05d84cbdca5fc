"""
Career guidance - earnings outlook, content strategy and next steps.
"""
from ..models.advice import (
    CareerGuidance,
    ContentStrategy,
    EarningsPotential,
    NextStep,
    PlatformPriority,
)
from ..models.athlete import AthleteProfile
from ..models.deal import DealType
from .valuation import round_half_up, valuate


POSTS_PER_MONTH_ESTIMATE = 3


def estimate_earnings(athlete: AthleteProfile) -> EarningsPotential:
    """
    Monthly earnings today (three social posts at the typical rate) and after
    the improvements the athlete has not made yet.
    """
    current = valuate(athlete, DealType.SOCIAL_POST).typical * POSTS_PER_MONTH_ESTIMATE
    multiplier = 1.0
    factors = []

    if not athlete.fully_verified:
        multiplier *= 1.15
        factors.append("Complete all verifications")
    if athlete.effective_gpa < 3.5:
        multiplier *= 1.2
        factors.append("Improve GPA to 3.5+")
    if athlete.total_followers < 10_000:
        multiplier *= 1.3
        factors.append("Grow social following to 10K+")
    if athlete.deals_completed < 5:
        multiplier *= 1.1
        factors.append("Complete 5+ deals with excellent ratings")

    return EarningsPotential(
        current=current,
        optimized=round_half_up(current * multiplier),
        factors=factors,
    )


def _career_summary(athlete: AthleteProfile, major_name: str, sport_name: str) -> str:
    summary = f"As a {athlete.academic_year or 'student'} {major_name} major playing {sport_name}"
    if athlete.effective_gpa >= 3.5:
        summary += " with an impressive GPA"
    summary += ", you have strong NIL potential. "

    if athlete.total_followers >= 10_000:
        summary += "Your established social media presence opens doors to major brand deals. "
    elif athlete.total_followers >= 1_000:
        summary += "Your growing social media presence is building a foundation for brand partnerships. "
    else:
        summary += "Building your social media presence will unlock more opportunities. "

    if athlete.deals_completed >= 5:
        summary += "Your deal experience makes you attractive to quality brands."
    else:
        summary += "Focus on building your track record with successful deals."
    return summary


def _content_strategy(athlete: AthleteProfile, major_name: str, sport_name: str) -> ContentStrategy:
    pillars = [
        f"{sport_name} training and game highlights",
        "Academic life and study tips for athletes",
        "Behind-the-scenes team content",
    ]
    if major_name != "General Studies":
        pillars.append(f"{major_name}-related insights and career goals")

    tiktok_priority = "High" if athlete.tiktok_followers > athlete.instagram_followers else "Medium"
    platforms = [
        PlatformPriority(
            platform="Instagram",
            priority="High",
            reason="Best for visual content, stories, and brand partnerships",
        ),
        PlatformPriority(
            platform="TikTok",
            priority=tiktok_priority,
            reason="High growth potential with short-form video content",
        ),
        PlatformPriority(
            platform="Twitter/X",
            priority="Medium",
            reason="Good for real-time engagement and sports commentary",
        ),
    ]

    return ContentStrategy(
        pillars=pillars,
        frequency="Aim for 3-4 posts per week, with at least 1 story/day",
        platforms=platforms,
    )


def _next_steps(athlete: AthleteProfile) -> list[NextStep]:
    steps = []
    if not athlete.fully_verified:
        steps.append(NextStep(
            action="Complete all profile verifications",
            timeline="This week",
            impact="Increases trust and visibility to brands",
        ))
    if athlete.deals_completed < 3:
        steps.append(NextStep(
            action="Accept 1-2 smaller deals to build track record",
            timeline="Next 30 days",
            impact="Establishes credibility for larger opportunities",
        ))
    if athlete.total_followers < 5_000:
        steps.append(NextStep(
            action="Post consistently (3-4x/week) to grow following",
            timeline="Ongoing",
            impact="Increases deal value and brand interest",
        ))
    steps.append(NextStep(
        action="Research and reach out to 3 aligned brands",
        timeline="Next 2 weeks",
        impact="Proactive outreach often leads to better deals",
    ))
    return steps


def build_career_guidance(athlete: AthleteProfile) -> CareerGuidance:
    """Assemble the NIL career roadmap for an athlete."""
    major_name = athlete.major_category.name if athlete.major_category else "General Studies"
    sport_name = athlete.sport.name if athlete.sport else "Athletics"
    gpa_note = (
        "your strong GPA is a differentiator"
        if athlete.effective_gpa >= 3.5
        else "focus on improving academics"
    )

    return CareerGuidance(
        career_summary=_career_summary(athlete, major_name, sport_name),
        earnings_potential=estimate_earnings(athlete),
        content_strategy=_content_strategy(athlete, major_name, sport_name),
        branding_tips=[
            f'Lead with your "scholar-athlete" identity - {gpa_note}',
            "Be authentic - share real moments from training, studying, and campus life",
            "Stay consistent - your personal brand should be recognizable across all platforms",
            "Engage genuinely - respond to comments and build community",
            "Think long-term - avoid deals that could hurt your reputation",
        ],
        next_steps=_next_steps(athlete),
    )
