"""Integration tests for dashboards, notifications, health and metrics."""

import pytest
from prometheus_client import REGISTRY

from loanflow import main
from loanflow.core.config import settings
from loanflow.domain.entities import ApplicationStatus, utcnow


# =============================================================================
# Dashboards
# =============================================================================

class TestOfficerDashboard:

    @pytest.mark.asyncio
    async def test_officer_stats(self, client, auth, make_application):
        reviewed = await make_application()
        await make_application()
        await make_application(status=ApplicationStatus.ADDITIONAL_INFO_REQUESTED)
        await client.post(
            f"/v1/applications/{reviewed.id}/review",
            json={"decision": "APPROVED"},
            headers=auth("officer"),
        )

        response = await client.get("/v1/officer/stats", headers=auth("officer"))

        assert response.status_code == 200
        assert response.json() == {
            "pending_applications": 1,
            "reviewed_today": 1,
            "awaiting_additional_info": 1,
            "approval_rate": 100.0,
        }

    @pytest.mark.asyncio
    async def test_approver_cannot_see_officer_stats(self, client, auth, users):
        response = await client.get("/v1/officer/stats", headers=auth("approver"))

        assert response.status_code == 403


class TestApproverDashboard:

    @pytest.mark.asyncio
    async def test_approver_stats(self, client, auth, make_application):
        await make_application(status=ApplicationStatus.UNDER_REVIEW)
        await make_application(status=ApplicationStatus.APPROVED, approved_at=utcnow())
        await make_application(status=ApplicationStatus.REJECTED, rejected_at=utcnow())

        response = await client.get("/v1/approver/stats", headers=auth("approver"))

        data = response.json()
        assert data["pending_review"] == 1
        assert data["approved_today"] == 1
        assert data["rejected_today"] == 1
        assert data["total_approved_amount"] == 0

    @pytest.mark.asyncio
    async def test_pending_queue_shows_recommendation_and_risk(
        self, client, auth, make_application
    ):
        application = await make_application(amount=600000)
        await client.post(
            f"/v1/applications/{application.id}/review",
            json={"decision": "APPROVED"},
            headers=auth("officer"),
        )

        response = await client.get("/v1/approver/pending", headers=auth("approver"))

        items = response.json()
        assert len(items) == 1
        assert items[0]["applicant_name"] == "Ada Applicant"
        assert items[0]["reviewed_by"] == "Olu Officer"
        assert items[0]["recommendation"] == "Approve"
        assert items[0]["risk_level"] == "High"

    @pytest.mark.asyncio
    async def test_pending_queue_keeps_officer_recommendation_after_info_round_trip(
        self, client, auth, make_application
    ):
        application = await make_application()
        await client.post(
            f"/v1/applications/{application.id}/review",
            json={"decision": "APPROVED"},
            headers=auth("officer"),
        )
        await client.post(
            f"/v1/applications/{application.id}/review",
            json={"decision": "REQUEST_INFO", "comments": "Confirm your shop address"},
            headers=auth("approver"),
        )
        answer = await client.post(
            f"/v1/applications/{application.id}/additional-info",
            json={"info": "12 Market Road, Ibadan"},
            headers=auth("applicant"),
        )
        assert answer.json()["status"] == "UNDER_REVIEW"

        response = await client.get("/v1/approver/pending", headers=auth("approver"))

        items = response.json()
        assert len(items) == 1
        assert items[0]["reviewed_by"] == "Olu Officer"
        assert items[0]["recommendation"] == "Approve"

    @pytest.mark.asyncio
    async def test_admin_can_see_approver_stats(self, client, auth, users):
        response = await client.get("/v1/approver/stats", headers=auth("admin"))

        assert response.status_code == 200


class TestAdminDashboard:

    @pytest.mark.asyncio
    async def test_admin_stats(self, client, auth, make_application):
        approved = await make_application(status=ApplicationStatus.APPROVED)
        await make_application()
        await client.post(f"/v1/applications/{approved.id}/disburse", headers=auth("approver"))

        response = await client.get("/v1/admin/stats", headers=auth("admin"))

        assert response.json() == {
            "total_applications": 2,
            "total_loans": 1,
            "total_users": 6,
            "total_disbursed": 300000.0,
        }

    @pytest.mark.asyncio
    async def test_officer_cannot_see_admin_stats(self, client, auth, users):
        response = await client.get("/v1/admin/stats", headers=auth("officer"))

        assert response.status_code == 403


# =============================================================================
# Notifications
# =============================================================================

class TestNotifications:

    @pytest.mark.asyncio
    async def test_applicant_sees_own_notifications_newest_first(
        self, client, auth, make_application
    ):
        application = await make_application()
        await client.post(
            f"/v1/applications/{application.id}/review",
            json={"decision": "APPROVED"},
            headers=auth("officer"),
        )
        await client.post(
            f"/v1/applications/{application.id}/review",
            json={"decision": "APPROVED"},
            headers=auth("approver"),
        )

        mine = await client.get("/v1/notifications", headers=auth("applicant"))
        theirs = await client.get("/v1/notifications", headers=auth("other_applicant"))

        assert [n["type"] for n in mine.json()] == [
            "APPLICATION_APPROVED",
            "APPLICATION_UNDER_REVIEW",
        ]
        assert theirs.json() == []

    @pytest.mark.asyncio
    async def test_no_notification_when_actor_is_recipient(
        self, client, auth, make_application
    ):
        """A super admin acting on their own application is not notified."""
        application = await make_application(owner="admin")

        await client.post(
            f"/v1/applications/{application.id}/review",
            json={"decision": "APPROVED"},
            headers=auth("admin"),
        )

        response = await client.get("/v1/notifications", headers=auth("admin"))
        assert response.json() == []


# =============================================================================
# Health and Metrics
# =============================================================================

class TestServiceEndpoints:

    @pytest.mark.asyncio
    async def test_health_is_public(self, client):
        response = await client.get("/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_metrics_endpoint_returns_prometheus_format(self, client):
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert "loanflow_review_decisions_total" in response.text

    @pytest.mark.asyncio
    async def test_review_increments_decision_counter(self, client, auth, make_application):
        labels = {"review_type": "OFFICER_REVIEW", "decision": "REJECTED"}
        before = REGISTRY.get_sample_value("loanflow_review_decisions_total", labels) or 0
        application = await make_application()

        await client.post(
            f"/v1/applications/{application.id}/review",
            json={"decision": "REJECTED", "comments": "Unverifiable income"},
            headers=auth("officer"),
        )

        after = REGISTRY.get_sample_value("loanflow_review_decisions_total", labels)
        assert after == before + 1

    @pytest.mark.asyncio
    async def test_responses_carry_request_id(self, client):
        response = await client.get("/v1/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_runner_serves_on_configured_host_and_port(self, monkeypatch):
        calls = []
        monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
        monkeypatch.setattr(settings, "host", "127.0.0.1")
        monkeypatch.setattr(settings, "port", 9100)

        main.run()

        app_path, kwargs = calls[0]
        assert app_path == "loanflow.main:app"
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9100
