"""
Integration tests for resilience and error handling.

These tests verify:
1. A lost conditional update writes nothing and reports a conflict
2. A failing audit insert does not roll back the status change
3. Session provider failures map to 401 or 500 and are retried when transient
"""

from dataclasses import replace
from uuid import UUID, uuid4

import httpx
import pytest
from prometheus_client import REGISTRY

from loanflow.application.dto import ReviewRequest
from loanflow.application.services import ReviewService
from loanflow.core.dependencies import (
    get_activity_recorder,
    get_review_service,
    get_session_client,
)
from loanflow.domain.entities import Actor, ApplicationStatus, UserRole
from loanflow.domain.exceptions import (
    AuthenticationError,
    SessionProviderException,
    StaleApplicationException,
)
from loanflow.domain.interfaces import SessionClient
from loanflow.infrastructure.clients import HttpSessionClient
from loanflow.infrastructure.database import (
    AuditLogModel,
    LoanReviewModel,
    NotificationModel,
)
from loanflow.infrastructure.repositories import (
    PostgresApplicationRepository,
    PostgresReviewRepository,
    SqlActivityRecorder,
)
from loanflow.main import app


# =============================================================================
# Test Doubles
# =============================================================================

class StaleReadApplicationRepository(PostgresApplicationRepository):
    """Returns applications as they looked before a concurrent review."""

    def __init__(self, session, stale_status: ApplicationStatus):
        super().__init__(session)
        self.stale_status = stale_status

    async def get_by_id(self, application_id):
        application = await super().get_by_id(application_id)
        if application is None:
            return None
        return replace(application, status=self.stale_status)


class BrokenAuditRecorder(SqlActivityRecorder):
    """Writes audit rows that violate the NOT NULL constraint on action."""

    async def record_audit(self, actor_id, action, entity_type, entity_id, old_values, new_values, metadata):
        model = AuditLogModel(
            user_id=str(actor_id),
            action=None,
            entity_type=entity_type,
            entity_id=str(entity_id),
        )
        return await self._insert(model, kind="audit", activity=action)


class OutageSessionClient(SessionClient):
    async def resolve(self, token: str) -> UUID:
        raise SessionProviderException("Session provider error: 502", status_code=502)


def failure_count(kind: str) -> float:
    value = REGISTRY.get_sample_value(
        "loanflow_activity_record_failures_total", {"kind": kind}
    )
    return value or 0.0


# =============================================================================
# Conditional Update
# =============================================================================

class TestStaleStatus:

    @pytest.mark.asyncio
    async def test_lost_update_raises_conflict_and_writes_nothing(
        self, test_session, make_application, users, db_rows
    ):
        """Two officers read PENDING; the second one's update must miss."""
        application = await make_application(status=ApplicationStatus.UNDER_REVIEW)
        service = ReviewService(
            application_repository=StaleReadApplicationRepository(
                test_session, ApplicationStatus.PENDING
            ),
            review_repository=PostgresReviewRepository(test_session),
            recorder=SqlActivityRecorder(test_session),
        )
        officer = Actor(user_id=users["officer"].id, role=UserRole.LOAN_OFFICER)

        with pytest.raises(StaleApplicationException):
            await service.review(application.id, officer, ReviewRequest(decision="REJECTED"))

        app_id = str(application.id)
        assert await db_rows(LoanReviewModel, application_id=app_id) == []
        assert await db_rows(NotificationModel, loan_application_id=app_id) == []
        assert await db_rows(AuditLogModel, entity_id=app_id) == []

    @pytest.mark.asyncio
    async def test_stale_error_maps_to_400(self, client, auth, make_application, test_session):
        application = await make_application(status=ApplicationStatus.UNDER_REVIEW)

        async def stale_service():
            return ReviewService(
                application_repository=StaleReadApplicationRepository(
                    test_session, ApplicationStatus.PENDING
                ),
                review_repository=PostgresReviewRepository(test_session),
                recorder=SqlActivityRecorder(test_session),
            )

        app.dependency_overrides[get_review_service] = stale_service

        response = await client.post(
            f"/v1/applications/{application.id}/review",
            json={"decision": "APPROVED"},
            headers=auth("officer"),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "STALE_APPLICATION"


# =============================================================================
# Audit Failure Isolation
# =============================================================================

class TestAuditFailure:

    @pytest.mark.asyncio
    async def test_failed_audit_does_not_roll_back_transition(
        self, client, auth, make_application, applications, db_rows, test_session
    ):
        application = await make_application()
        app.dependency_overrides[get_activity_recorder] = lambda: BrokenAuditRecorder(test_session)
        before = failure_count("audit")

        response = await client.post(
            f"/v1/applications/{application.id}/review",
            json={"decision": "APPROVED"},
            headers=auth("officer"),
        )

        assert response.status_code == 200
        stored = await applications.get_by_id(application.id)
        assert stored.status is ApplicationStatus.UNDER_REVIEW

        app_id = str(application.id)
        assert len(await db_rows(LoanReviewModel, application_id=app_id)) == 1
        assert len(await db_rows(NotificationModel, loan_application_id=app_id)) == 1
        assert await db_rows(AuditLogModel, entity_id=app_id) == []
        assert failure_count("audit") == before + 1


# =============================================================================
# Session Provider
# =============================================================================

class TestSessionProviderOutage:

    @pytest.mark.asyncio
    async def test_outage_returns_generic_500(self, client, auth, users):
        app.dependency_overrides[get_session_client] = OutageSessionClient

        response = await client.get("/v1/applications", headers=auth("admin"))

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "SESSION_PROVIDER_ERROR"
        assert "502" not in data["message"]


class TestHttpSessionClient:
    """HttpSessionClient against an httpx MockTransport."""

    @pytest.mark.asyncio
    async def test_resolves_user_id(self):
        user_id = uuid4()

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/sessions/current"
            assert request.headers["Authorization"] == "Bearer abc"
            return httpx.Response(200, json={"user_id": str(user_id)})

        client = HttpSessionClient(
            base_url="http://sessions.test",
            transport=httpx.MockTransport(handler),
        )

        assert await client.resolve("abc") == user_id

    @pytest.mark.asyncio
    async def test_rejected_token_is_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(401, json={"detail": "expired"})

        client = HttpSessionClient(
            base_url="http://sessions.test",
            max_retries=3,
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(AuthenticationError):
            await client.resolve("expired")
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_transport_errors_are_retried(self):
        user_id = uuid4()
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) < 2:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"user_id": str(user_id)})

        client = HttpSessionClient(
            base_url="http://sessions.test",
            max_retries=3,
            transport=httpx.MockTransport(handler),
        )

        assert await client.resolve("abc") == user_id
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_malformed_session_is_provider_error(self):
        client = HttpSessionClient(
            base_url="http://sessions.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
        )

        with pytest.raises(SessionProviderException):
            await client.resolve("abc")

    @pytest.mark.asyncio
    async def test_server_error_is_provider_error(self):
        client = HttpSessionClient(
            base_url="http://sessions.test",
            max_retries=1,
            transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        )

        with pytest.raises(SessionProviderException):
            await client.resolve("abc")
