"""
Tests for the backend repositories. No network: the HTTP session is stubbed.
"""
import json

import pytest
import requests

from scholarmatch.client.snapshot import SnapshotRepository
from scholarmatch.client.supabase import (
    SupabaseRepository,
    normalize_athlete,
    normalize_deal,
)
from scholarmatch.config import reset_config
from scholarmatch.errors import BackendError
from scholarmatch.models.deal import DealType
from scholarmatch.pipeline.scheduling import ScheduleAdvisor


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200):
        self.payload = payload
        self.status_code = status_code
        self.content = json.dumps(payload).encode() if payload is not None else b""

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class FakeSession:
    """Answers PostgREST paths from a route table; queued errors are raised first."""

    def __init__(self, routes=None, errors=None):
        self.routes = routes or {}
        self.errors = list(errors or [])
        self.headers = {}
        self.calls = []

    def request(self, method, url, timeout=None, **kwargs):
        path = url.split("/rest/v1/", 1)[1]
        self.calls.append((method, path, kwargs))
        if self.errors:
            raise self.errors.pop(0)
        route = self.routes.get(path)
        if isinstance(route, FakeResponse):
            return route
        return FakeResponse(route)


@pytest.fixture(autouse=True)
def no_retry_sleep(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda seconds: None)


def make_repository(session: FakeSession) -> SupabaseRepository:
    return SupabaseRepository(
        url="https://example.supabase.co/",
        service_role_key="service-key",
        session=session,
    )


ATHLETE_ROW = {
    "id": "athlete-1",
    "gpa": 3.4,
    "cumulative_gpa": None,
    "total_followers": None,
    "scholar_tier": "platinum",
    "enrollment_verified": True,
    "accepting_deals": None,
    "profile": {"first_name": "Jordan", "last_name": "Lee", "email": "jordan@example.edu"},
    "school": {"name": "State University", "short_name": "SU", "division": "D1"},
    "sport": {"name": "Football", "category": "team"},
    "major_category": {"name": "Business", "industries": None},
}


class TestNormalization:

    def test_nulls_become_defaults(self):
        athlete = normalize_athlete(ATHLETE_ROW)

        assert athlete.full_name == "Jordan Lee"
        assert athlete.total_followers == 0
        assert athlete.avg_deal_rating == 0
        assert athlete.accepting_deals is True
        assert athlete.major_category.industries == []
        assert athlete.availability is None

    def test_related_rows(self):
        athlete = normalize_athlete(
            ATHLETE_ROW,
            academic_records=[{"gpa": 3.5, "semester": "Fall", "year": 2025, "deans_list": True}],
            deals=[{
                "id": 7, "title": "Post", "amount": None, "status": "active",
                "deal_type": "social_post", "start_date": "2026-10-02T10:00:00+00:00",
                "brand": {"company_name": "Campus Coffee", "industry": "food"},
            }],
            availability={"max_deals_per_month": None, "preferred_deal_days": ["Saturday"]},
            blocked_periods=[
                {"name": "Finals", "start_date": "2026-12-07", "end_date": "2026-12-18",
                 "period_type": "finals", "source": "academic_calendar"},
                {"name": "Broken", "start_date": None, "end_date": "2026-12-18"},
            ],
        )

        assert athlete.academic_records[0].deans_list
        assert athlete.deals[0].id == "7"
        assert athlete.deals[0].amount == 0
        assert athlete.deals[0].brand_name == "Campus Coffee"
        assert athlete.max_deals_per_month == 5
        assert athlete.preferred_deal_days == ["saturday"]
        assert [p.name for p in athlete.blocked_periods] == ["Finals"]

    def test_deal_with_brand(self):
        deal = normalize_deal({
            "id": "deal-1",
            "title": "Jersey Signing",
            "deal_type": "autograph",
            "amount": "250.00",
            "deliverables": None,
            "brand": {"id": "b1", "company_name": None, "avg_deal_rating": None},
            "opportunity": {"title": "Signing Day", "min_gpa": 3.0},
        })

        assert deal.deal_type == DealType.AUTOGRAPH
        assert deal.amount == 250
        assert deal.brand.company_name == "This brand"
        assert deal.brand.avg_deal_rating == 0
        assert deal.opportunity.min_gpa == 3.0

    def test_custom_block_from_both_sources_listed_once(self, now):
        wedding = {"name": "Wedding", "start_date": "2026-11-14", "end_date": "2026-11-14"}
        athlete = normalize_athlete(
            {"id": "a1"},
            availability={"blocked_periods": [wedding]},
            blocked_periods=[
                {"name": "Finals", "start_date": "2026-12-07", "end_date": "2026-12-18",
                 "source": "academic_calendar"},
                {**wedding, "source": "athlete_preference"},
            ],
        )
        advice = ScheduleAdvisor().advise(athlete, now=now)

        assert [b.name for b in advice.upcoming_blocked_periods] == ["Wedding", "Finals"]
        assert advice.upcoming_blocked_periods[0].reason == "Personal preference"


class TestSupabaseRepository:

    def test_headers(self):
        session = FakeSession()
        make_repository(session)

        assert session.headers["apikey"] == "service-key"
        assert session.headers["Authorization"] == "Bearer service-key"

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
        reset_config()
        try:
            with pytest.raises(BackendError):
                SupabaseRepository(session=FakeSession())
        finally:
            reset_config()

    def test_get_athlete_loads_related_rows(self):
        session = FakeSession(routes={
            "athletes": [ATHLETE_ROW],
            "academic_records": [],
            "deals": [],
            "athlete_availability": [{"min_notice_days": 5}],
            "rpc/get_athlete_blocked_periods": [
                {"name": "Finals", "start_date": "2026-12-07", "end_date": "2026-12-18"},
            ],
        })
        athlete = make_repository(session).get_athlete("athlete-1")

        assert athlete.min_notice_days == 5
        assert len(athlete.blocked_periods) == 1
        paths = [path for _, path, _ in session.calls]
        assert paths == [
            "athletes",
            "academic_records",
            "deals",
            "athlete_availability",
            "rpc/get_athlete_blocked_periods",
        ]
        _, _, first = session.calls[0]
        assert first["params"]["id"] == "eq.athlete-1"

    def test_missing_athlete(self):
        session = FakeSession(routes={"athletes": []})

        assert make_repository(session).get_athlete("nobody") is None
        assert len(session.calls) == 1

    def test_brand_candidates_filtered_to_verified(self):
        session = FakeSession(routes={"brands": [
            {"id": "b1", "company_name": "Ledger Bank", "industry": "finance", "is_verified": True},
        ]})
        [candidate] = make_repository(session).list_brand_candidates(limit=20)

        assert candidate.company_name == "Ledger Bank"
        _, _, kwargs = session.calls[0]
        assert kwargs["params"]["is_verified"] == "eq.true"
        assert kwargs["params"]["limit"] == "20"

    def test_transient_errors_retried(self):
        session = FakeSession(
            routes={"deals": [{"id": "deal-1", "amount": 100}]},
            errors=[requests.ConnectionError("reset"), requests.Timeout("slow")],
        )
        deal = make_repository(session).get_deal("deal-1")

        assert deal.id == "deal-1"
        assert len(session.calls) == 3

    def test_retries_exhausted(self):
        session = FakeSession(errors=[requests.ConnectionError("down")] * 3)

        with pytest.raises(BackendError):
            make_repository(session).get_deal("deal-1")
        assert len(session.calls) == 3

    def test_http_errors_not_retried(self):
        session = FakeSession(routes={"deals": FakeResponse({"message": "boom"}, status_code=500)})

        with pytest.raises(BackendError):
            make_repository(session).get_deal("deal-1")
        assert len(session.calls) == 1

    def test_log_activity_posts_row(self):
        session = FakeSession(routes={"activity_log": None})
        make_repository(session).log_activity("scholarmatch_chat", "athlete-1", {"action": "chat"})

        method, path, kwargs = session.calls[0]
        assert (method, path) == ("POST", "activity_log")
        assert kwargs["json"]["entity_id"] == "athlete-1"
        assert kwargs["headers"] == {"Prefer": "return=minimal"}


class TestSnapshotRepository:

    def test_from_file(self, tmp_path):
        snapshot = {
            "athletes": [{"id": "athlete-1", "first_name": "Jordan", "gpa": 3.6}],
            "deals": [{"id": "deal-1", "amount": 200, "deal_type": "camp"}],
            "brands": [
                {"id": "b1", "company_name": "Ledger Bank", "is_verified": True},
                {"id": "b2", "company_name": "Pending Co", "is_verified": False},
            ],
            "brand_matches": {"athlete-1": [{"brand_id": "b1", "match_score": 80}]},
        }
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(snapshot), encoding="utf-8")

        repo = SnapshotRepository.from_file(path)

        assert repo.get_athlete("athlete-1").first_name == "Jordan"
        assert repo.get_athlete("other") is None
        assert repo.get_deal("deal-1").deal_type == DealType.CAMP
        assert [b.id for b in repo.list_brand_candidates()] == ["b1"]
        assert len(repo.list_precomputed_matches("athlete-1")) == 1
        assert repo.list_precomputed_matches("other") == []
