"""
Supabase (PostgREST) client with retry logic and normalization.
"""
import logging
from datetime import date, timedelta
from typing import Any, Optional

import requests
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import get_config
from ..errors import BackendError
from ..models.athlete import (
    AcademicRecord,
    AthleteProfile,
    AvailabilityPreferences,
    BlockedPeriod,
    DealSummary,
    MajorCategory,
    SchoolInfo,
    SportInfo,
)
from ..models.deal import BrandProfile, DealOffer, OpportunityRequirements
from ..models.scoring import BrandCandidate
from .base import AdvisorRepository


logger = logging.getLogger(__name__)

ATHLETE_SELECT = (
    "*,"
    "profile:profiles!inner(first_name,last_name,email),"
    "school:schools(name,short_name,division),"
    "sport:sports(name,category),"
    "major_category:major_categories(name,industries)"
)
DEAL_SUMMARY_SELECT = (
    "id,title,amount,status,deal_type,start_date,end_date,"
    "brand:brands(company_name,industry)"
)
DEAL_SELECT = (
    "*,"
    "brand:brands(id,company_name,industry,is_verified,total_spent,deals_completed,avg_deal_rating),"
    "opportunity:opportunities(title,compensation_type,min_gpa,min_followers)"
)
BRAND_CANDIDATE_SELECT = (
    "id,company_name,industry,is_verified,budget_range_min,budget_range_max,min_gpa,min_followers"
)
MATCH_SELECT = (
    "brand_id,match_score,major_match,industry_match,values_match,"
    "brand:brands(id,company_name,industry,is_verified,budget_range_min,budget_range_max)"
)


class SupabaseRepository(AdvisorRepository):
    """
    Reads advisor snapshots from Supabase's REST interface.
    Returns validated models instead of raw rows.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        service_role_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        config = get_config()
        self.base_url = (url or config.supabase.url).rstrip("/")
        self.timeout = timeout or config.supabase.timeout_seconds
        self.advisor_config = config.advisor
        key = service_role_key or config.supabase.service_role_key

        if not self.base_url or not key:
            raise BackendError("Supabase URL and service role key must be configured")

        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        })
        logger.info("SupabaseRepository initialized")

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        before_sleep=lambda retry_state: logger.warning(
            f"Retry attempt {retry_state.attempt_number}"
        ),
        reraise=True,
    )
    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        """Issue one HTTP request; connection errors and timeouts are retried."""
        response = self.session.request(
            method, f"{self.base_url}/rest/v1/{path}", timeout=self.timeout, **kwargs
        )
        response.raise_for_status()
        return response

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._send(method, path, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Supabase {method} {path} failed: {e}")
            raise BackendError(f"Backend request failed: {path}") from e

        if not response.content:
            return None
        return response.json()

    def _select(
        self,
        table: str,
        select: str,
        filters: dict[str, str],
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        params = {"select": select, **filters}
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)
        return self._request("GET", table, params=params) or []

    def get_athlete(self, athlete_id: str, today: Optional[date] = None) -> Optional[AthleteProfile]:
        """Load an athlete and everything the advisor actions read."""
        logger.info(f"Loading athlete context: {athlete_id}")
        match_id = {"athlete_id": f"eq.{athlete_id}"}

        rows = self._select("athletes", ATHLETE_SELECT, {"id": f"eq.{athlete_id}"}, limit=1)
        if not rows:
            return None

        records = self._select(
            "academic_records", "gpa,semester,year,deans_list", match_id,
            order="year.desc,semester.desc",
            limit=self.advisor_config.academic_record_limit,
        )
        deals = self._select(
            "deals", DEAL_SUMMARY_SELECT, match_id,
            order="created_at.desc",
            limit=self.advisor_config.recent_deal_limit,
        )
        availability = self._select("athlete_availability", "*", match_id, limit=1)

        today = today or date.today()
        horizon = today + timedelta(days=self.advisor_config.blocked_lookahead_days)
        blocked = self._request("POST", "rpc/get_athlete_blocked_periods", json={
            "p_athlete_id": athlete_id,
            "p_start_date": today.isoformat(),
            "p_end_date": horizon.isoformat(),
        }) or []

        return normalize_athlete(
            rows[0],
            academic_records=records,
            deals=deals,
            availability=availability[0] if availability else None,
            blocked_periods=blocked,
        )

    def get_deal(self, deal_id: str) -> Optional[DealOffer]:
        rows = self._select("deals", DEAL_SELECT, {"id": f"eq.{deal_id}"}, limit=1)
        return normalize_deal(rows[0]) if rows else None

    def list_brand_candidates(self, limit: int = 20) -> list[BrandCandidate]:
        rows = self._select(
            "brands", BRAND_CANDIDATE_SELECT, {"is_verified": "eq.true"}, limit=limit
        )
        return [BrandCandidate.model_validate(row) for row in rows]

    def list_precomputed_matches(self, athlete_id: str, limit: int = 10) -> list[dict[str, Any]]:
        return self._select(
            "athlete_brand_matches", MATCH_SELECT, {"athlete_id": f"eq.{athlete_id}"},
            order="match_score.desc",
            limit=limit,
        )

    def log_activity(self, action: str, athlete_id: str, metadata: dict[str, Any]) -> None:
        self._request(
            "POST", "activity_log",
            json={
                "action": action,
                "entity_type": "athlete",
                "entity_id": athlete_id,
                "metadata": metadata,
            },
            headers={"Prefer": "return=minimal"},
        )


def _number(value: Any, default: float = 0) -> float:
    return value if value is not None else default


def normalize_athlete(
    row: dict[str, Any],
    academic_records: Optional[list[dict[str, Any]]] = None,
    deals: Optional[list[dict[str, Any]]] = None,
    availability: Optional[dict[str, Any]] = None,
    blocked_periods: Optional[list[dict[str, Any]]] = None,
) -> AthleteProfile:
    """Build an AthleteProfile from raw backend rows, defaulting missing values."""
    profile = row.get("profile") or {}
    school = row.get("school")
    sport = row.get("sport")
    major_category = row.get("major_category")

    return AthleteProfile(
        id=str(row["id"]),
        first_name=profile.get("first_name") or "",
        last_name=profile.get("last_name") or "",
        email=profile.get("email"),
        school=SchoolInfo.model_validate(school) if school else None,
        sport=SportInfo.model_validate(sport) if sport else None,
        major_category=MajorCategory(
            name=major_category.get("name") or "",
            industries=major_category.get("industries") or [],
        ) if major_category else None,
        major=row.get("major"),
        academic_year=row.get("academic_year"),
        gpa=row.get("gpa"),
        cumulative_gpa=row.get("cumulative_gpa"),
        academic_records=[AcademicRecord.model_validate(r) for r in academic_records or []],
        gradeup_score=int(_number(row.get("gradeup_score"))),
        total_followers=int(_number(row.get("total_followers"))),
        instagram_followers=int(_number(row.get("instagram_followers"))),
        twitter_followers=int(_number(row.get("twitter_followers"))),
        tiktok_followers=int(_number(row.get("tiktok_followers"))),
        total_earnings=_number(row.get("total_earnings")),
        deals_completed=int(_number(row.get("deals_completed"))),
        avg_deal_rating=_number(row.get("avg_deal_rating")),
        nil_valuation=_number(row.get("nil_valuation")),
        scholar_tier=row.get("scholar_tier"),
        enrollment_verified=bool(row.get("enrollment_verified")),
        sport_verified=bool(row.get("sport_verified")),
        grades_verified=bool(row.get("grades_verified")),
        accepting_deals=row.get("accepting_deals") is not False,
        min_deal_amount=row.get("min_deal_amount"),
        deals=[normalize_deal_summary(d) for d in deals or []],
        availability=normalize_availability(availability) if availability else None,
        blocked_periods=[
            BlockedPeriod.model_validate(p) for p in blocked_periods or []
            if p.get("start_date") and p.get("end_date")
        ],
    )


def normalize_availability(row: dict[str, Any]) -> AvailabilityPreferences:
    """Availability preferences with the platform defaults for unset columns."""
    return AvailabilityPreferences(
        blocked_periods=[
            BlockedPeriod.model_validate(p) for p in row.get("blocked_periods") or []
            if p.get("start_date") and p.get("end_date")
        ],
        max_deals_per_month=row.get("max_deals_per_month") or 5,
        no_finals_deals=row.get("no_finals_deals") is not False,
        no_midterms_deals=row.get("no_midterms_deals") is not False,
        preferred_deal_days=row.get("preferred_deal_days") or ["friday", "saturday", "sunday"],
        min_notice_days=row.get("min_notice_days") or 3,
        max_hours_per_week=row.get("max_hours_per_week") or 10,
    )


def normalize_deal_summary(row: dict[str, Any]) -> DealSummary:
    brand = row.get("brand") or {}
    return DealSummary(
        id=str(row["id"]),
        title=row.get("title") or "",
        amount=_number(row.get("amount")),
        status=row.get("status") or "pending",
        deal_type=row.get("deal_type") or "other",
        brand_name=brand.get("company_name"),
        brand_industry=brand.get("industry"),
        start_date=row.get("start_date"),
        end_date=row.get("end_date"),
    )


def normalize_deal(row: dict[str, Any]) -> DealOffer:
    """Build a DealOffer from a deal row with embedded brand and opportunity."""
    brand = row.get("brand")
    opportunity = row.get("opportunity")
    return DealOffer(
        id=str(row["id"]),
        title=row.get("title") or "",
        description=row.get("description"),
        deal_type=row.get("deal_type"),
        amount=_number(row.get("amount")),
        status=row.get("status") or "pending",
        payment_terms=row.get("payment_terms"),
        deliverables=row.get("deliverables") or [],
        start_date=row.get("start_date"),
        end_date=row.get("end_date"),
        brand=BrandProfile(
            id=brand.get("id"),
            company_name=brand.get("company_name") or "This brand",
            industry=brand.get("industry"),
            is_verified=bool(brand.get("is_verified")),
            total_spent=_number(brand.get("total_spent")),
            deals_completed=int(_number(brand.get("deals_completed"))),
            avg_deal_rating=_number(brand.get("avg_deal_rating")),
        ) if brand else None,
        opportunity=OpportunityRequirements.model_validate(opportunity) if opportunity else None,
    )
