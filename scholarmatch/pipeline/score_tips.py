"""
GradeUp Score improvement tips.
"""
from ..models.advice import ScoreTip, ScoreTips
from ..models.athlete import AthleteProfile


def display_tier(gradeup_score: int) -> str:
    """Tier label shown next to a 0-1000 GradeUp Score."""
    if gradeup_score >= 800:
        return "Platinum"
    if gradeup_score >= 600:
        return "Gold"
    if gradeup_score >= 400:
        return "Silver"
    return "Bronze"


def improvement_potential(athlete: AthleteProfile) -> int:
    """Points the athlete could still gain from the levers the advisor tracks."""
    gpa = athlete.effective_gpa
    points = 0
    points += 0 if athlete.enrollment_verified else 10
    points += 0 if athlete.sport_verified else 10
    points += 0 if athlete.grades_verified else 10
    if 3.0 <= gpa < 3.5:
        points += 15
    if athlete.total_followers < 10_000:
        points += 20
    if athlete.deals_completed < 5:
        points += 15
    return points


def build_score_tips(athlete: AthleteProfile) -> ScoreTips:
    """Collect academic, verification, social and experience tips for an athlete."""
    tips: list[ScoreTip] = []
    quick_wins: list[str] = []
    long_term: list[str] = []
    gpa = athlete.effective_gpa

    # Academic
    if gpa < 3.0:
        tips.append(ScoreTip(
            category="academic",
            title="Improve Your GPA",
            description=(
                "Your GPA is below 3.0. This significantly impacts your GradeUp Score and "
                "brand appeal. Consider tutoring services and office hours."
            ),
            impact="high",
        ))
        long_term.append("Focus on improving GPA to 3.0+ through study groups and tutoring")
    elif gpa < 3.5:
        tips.append(ScoreTip(
            category="academic",
            title="Push for Dean's List",
            description=(
                "You're close to 3.5 GPA! Reaching Dean's List status unlocks premium "
                "brand opportunities."
            ),
            impact="medium",
        ))
        long_term.append("Target Dean's List status (3.5+ GPA) for premium brand access")
    else:
        tips.append(ScoreTip(
            category="academic",
            title="Maintain Excellence",
            description="Your strong GPA is a major asset. Keep it up and highlight it in your profile!",
            impact="low",
            actionable=False,
        ))

    # Verification
    if not athlete.enrollment_verified:
        tips.append(ScoreTip(
            category="verification",
            title="Verify Enrollment",
            description=(
                "Verified athletes get 15% more deal offers. Complete enrollment "
                "verification in your settings."
            ),
            impact="high",
        ))
        quick_wins.append("Complete enrollment verification (+5-10 points)")

    if not athlete.sport_verified:
        tips.append(ScoreTip(
            category="verification",
            title="Verify Sport Participation",
            description=(
                "Sport verification confirms you're an active athlete. Contact your "
                "athletic department to verify."
            ),
            impact="high",
        ))
        quick_wins.append("Complete sport verification (+5-10 points)")

    if not athlete.grades_verified:
        tips.append(ScoreTip(
            category="verification",
            title="Verify Grades",
            description=(
                "Grade verification shows brands your academic commitment is real. "
                "Upload your transcript to verify."
            ),
            impact="high",
        ))
        quick_wins.append("Complete grades verification (+5-10 points)")

    # Social
    if athlete.total_followers < 1_000:
        tips.append(ScoreTip(
            category="social",
            title="Build Your Following",
            description=(
                "Your social media presence is your platform. Post consistently and engage "
                "with your school's sports community."
            ),
            impact="high",
        ))
        long_term.append("Grow social following to 1,000+ through consistent, authentic content")
    elif athlete.total_followers < 10_000:
        tips.append(ScoreTip(
            category="social",
            title="Expand Your Reach",
            description=(
                "You're building momentum! Collaborate with teammates and create content "
                "around your sport and studies."
            ),
            impact="medium",
        ))
        long_term.append("Reach 10K followers through collaborations and viral content")
    else:
        tips.append(ScoreTip(
            category="social",
            title="Leverage Your Platform",
            description=(
                "With 10K+ followers, you have real influence. Focus on engagement rate "
                "and brand-friendly content."
            ),
            impact="low",
        ))

    # Experience
    if athlete.deals_completed == 0:
        tips.append(ScoreTip(
            category="experience",
            title="Complete Your First Deal",
            description=(
                "Every journey starts with one step. Accept a smaller deal to build your "
                "track record and get ratings."
            ),
            impact="high",
        ))
        quick_wins.append("Complete your first deal to establish credibility")
    elif athlete.deals_completed < 5:
        tips.append(ScoreTip(
            category="experience",
            title="Build Deal History",
            description=(
                f"You've completed {athlete.deals_completed} deals. Getting to 5+ shows "
                "brands you're reliable and professional."
            ),
            impact="medium",
        ))
    else:
        tips.append(ScoreTip(
            category="experience",
            title="Maintain Excellence",
            description=(
                f"With {athlete.deals_completed} completed deals, focus on getting 5-star "
                "ratings and testimonials."
            ),
            impact="low",
        ))

    return ScoreTips(
        current_score=athlete.gradeup_score,
        tier=display_tier(athlete.gradeup_score),
        improvement_potential=improvement_potential(athlete),
        tips=tips,
        quick_wins=quick_wins,
        long_term_strategies=long_term,
    )
