"""
Tests for the advisor request handler over an in-memory repository.
"""
from datetime import date

import pytest

from scholarmatch.client.snapshot import SnapshotRepository
from scholarmatch.config import Config
from scholarmatch.errors import BackendError
from scholarmatch.models.athlete import DealSummary
from scholarmatch.models.deal import BrandProfile, DealOffer
from scholarmatch.models.request import AdvisorRequest
from scholarmatch.models.scoring import BrandCandidate
from scholarmatch.pipeline.advisor import AdvisorService


class FailingLogRepository(SnapshotRepository):
    def log_activity(self, action, athlete_id, metadata):
        raise BackendError("activity_log unavailable")


class UnreachableRepository(SnapshotRepository):
    def get_athlete(self, athlete_id):
        raise BackendError("Backend request failed: athletes")


@pytest.fixture
def config() -> Config:
    return Config(enable_ai_chat=False, enable_activity_log=True)


@pytest.fixture
def athlete(scholar_athlete):
    return scholar_athlete.model_copy(update={"deals": [
        DealSummary(id="deal-1", title="Campus Coffee Post", amount=150, status="pending"),
        DealSummary(id="deal-0", title="Bookstore Signing", amount=300, status="completed"),
    ]})


@pytest.fixture
def deal() -> DealOffer:
    return DealOffer(
        id="deal-1",
        title="Campus Coffee Post",
        deal_type="social_post",
        amount=150,
        start_date=date(2026, 11, 20),
        brand=BrandProfile(company_name="Campus Coffee", is_verified=True, deals_completed=12),
    )


@pytest.fixture
def brands() -> list[BrandCandidate]:
    return [
        BrandCandidate(id="b1", company_name="Ledger Bank", industry="finance", is_verified=True),
        BrandCandidate(id="b2", company_name="Unverified Co", industry="finance"),
    ]


@pytest.fixture
def repository(athlete, deal, brands) -> SnapshotRepository:
    return SnapshotRepository(athletes=[athlete], deals=[deal], brands=brands)


@pytest.fixture
def service(repository, config) -> AdvisorService:
    return AdvisorService(repository, config=config)


def request(action: str, **fields) -> AdvisorRequest:
    return AdvisorRequest(action=action, athlete_id=fields.pop("athlete_id", "athlete-1"), **fields)


class TestRequestValidation:

    def test_missing_athlete_id(self, service, repository):
        response = service.handle(request("chat", athlete_id=""))

        assert not response.success
        assert response.error == "athlete_id is required"
        assert response.message == "Sorry, I encountered an error: athlete_id is required. Please try again."
        assert repository.activity == []

    def test_unknown_athlete(self, service):
        response = service.handle(request("score_tips", athlete_id="nobody"))

        assert not response.success
        assert response.error == "Athlete not found"

    def test_backend_failure_becomes_failed_response(self, config):
        service = AdvisorService(UnreachableRepository(), config=config)
        response = service.handle(request("score_tips"))

        assert not response.success
        assert response.error == "Backend request failed: athletes"

    def test_unknown_action_routes_to_chat(self, service):
        response = service.handle(request("dance"))

        assert response.success
        assert response.message.startswith("Hey Jordan!")


class TestAnalyzeDeal:

    def test_specific_deal(self, service, now):
        response = service.handle(request("analyze_deal", deal_id="deal-1"), now=now)
        analysis = response.data["analysis"]

        assert response.success
        assert response.data["deal_id"] == "deal-1"
        assert "deal_summary" not in response.data
        assert "**Detailed Breakdown:**" in response.message
        assert response.confidence == pytest.approx(analysis["overall"] / 100)

        [item] = response.action_items
        assert item.type == analysis["recommendation"]
        assert item.title == f"{analysis['recommendation'].capitalize()} this deal"

    def test_scored_values(self, service, now):
        response = service.handle(request("analyze_deal", deal_id="deal-1"), now=now)

        # 0.35*51.03 + 0.25*70 + 0.25*85 + 0.15*70
        assert response.data["analysis"]["overall"] == 67
        assert response.data["analysis"]["recommendation"] == "accept"
        assert response.action_items[0].priority == "medium"

    def test_first_pending_deal_used(self, service, now):
        response = service.handle(request("analyze_deal"), now=now)

        assert response.success
        assert response.data["deal_id"] == "deal-1"
        assert response.data["deal_summary"] == {
            "title": "Campus Coffee Post",
            "brand": "Campus Coffee",
            "amount": 150,
            "type": "social_post",
        }
        assert "**Breakdown:**" in response.message

    def test_no_pending_deals(self, service, repository, athlete):
        repository.athletes[athlete.id] = athlete.model_copy(update={"deals": []})
        response = service.handle(request("analyze_deal"))

        assert response.success
        assert "don't have any pending deals" in response.message
        assert "No recent deals" in response.message

    def test_unknown_deal(self, service, repository):
        response = service.handle(request("analyze_deal", deal_id="missing"))

        assert not response.success
        assert response.error == "Deal not found"
        assert repository.activity[-1]["metadata"]["response_success"] is False

    def test_pending_deal_missing_from_backend(self, service, repository):
        repository.deals.clear()
        response = service.handle(request("analyze_deal"))

        assert not response.success
        assert response.error == "Deal not found"


class TestRecommendBrands:

    def test_live_matching_over_verified_brands(self, service):
        response = service.handle(request("recommend_brands"))

        assert response.success
        assert response.data["total_matches"] == 1
        [top] = response.data["recommendations"]
        assert top["brand_id"] == "b1"
        assert "**1. Ledger Bank** (Verified)" in response.message

    def test_precomputed_matches_preferred(self, service, repository):
        repository.brand_matches["athlete-1"] = [{
            "brand_id": "p1",
            "match_score": 91,
            "industry_match": True,
            "brand": {"id": "p1", "company_name": "Stored Match Inc", "industry": "finance"},
        }]
        response = service.handle(request("recommend_brands"))

        assert [r["brand_id"] for r in response.data["recommendations"]] == ["p1"]

    def test_no_matches(self, config, athlete, deal):
        service = AdvisorService(SnapshotRepository(athletes=[athlete], deals=[deal]), config=config)
        response = service.handle(request("recommend_brands"))

        assert response.success
        assert response.data is None
        assert "couldn't find specific brand matches" in response.message
        assert "- Finance companies" in response.message


class TestGuidanceActions:

    def test_schedule_advice(self, service, now):
        response = service.handle(request("schedule_advice"), now=now)

        assert response.success
        assert response.data["suggested_deal_windows"][0]["period"] == "10/23/2026 - 10/25/2026"
        assert "**Best Windows for Deals:**" in response.message

    def test_score_tips(self, service):
        response = service.handle(request("score_tips"))

        assert response.success
        assert response.data["tier"] == "Bronze"
        assert all(item.type == "improve" for item in response.action_items)

    def test_career_guidance(self, service):
        response = service.handle(request("career_guidance"))

        assert response.success
        assert "Current Monthly Estimate: $576" in response.message
        assert response.action_items[-1].title == "Research and reach out to 3 aligned brands"


class TestActivityLog:

    def test_interaction_recorded(self, service, repository):
        service.handle(request("score_tips", message="help"))

        assert repository.activity == [{
            "action": "scholarmatch_score_tips",
            "athlete_id": "athlete-1",
            "metadata": {
                "action": "score_tips",
                "has_message": True,
                "deal_id": None,
                "response_success": True,
            },
        }]

    def test_disabled(self, repository):
        service = AdvisorService(
            repository, config=Config(enable_ai_chat=False, enable_activity_log=False)
        )
        service.handle(request("score_tips"))

        assert repository.activity == []

    def test_log_failure_does_not_fail_request(self, athlete, config):
        service = AdvisorService(FailingLogRepository(athletes=[athlete]), config=config)
        response = service.handle(request("score_tips"))

        assert response.success


class TestHandlePayload:

    def test_round_trip(self, service):
        result = service.handle_payload({"action": "score_tips", "athlete_id": "athlete-1"})

        assert result["success"] is True
        assert "error" not in result
        assert isinstance(result["action_items"], list)

    def test_malformed_payload(self, service):
        result = service.handle_payload({
            "action": "chat",
            "athlete_id": "athlete-1",
            "conversation_history": [{"role": "robot", "content": "beep"}],
        })

        assert result["success"] is False
        assert result["error"] == "Invalid request body"
