"""Integration tests for application intake, listing and self-service."""

import pytest

from loanflow.domain.entities import ApplicationStatus, InterestRate
from loanflow.infrastructure.database import AuditLogModel, NotificationModel
from loanflow.infrastructure.repositories import PostgresInterestRateRepository


def submission(**overrides) -> dict:
    body = {
        "amount": 250000,
        "purpose": "Buy a delivery tricycle",
        "duration": 6,
        "monthly_income": 180000,
        "employment_status": "SELF_EMPLOYED",
    }
    body.update(overrides)
    return body


class TestSubmitApplication:

    @pytest.mark.asyncio
    async def test_submission_is_pending_with_default_rate(self, client, auth, users):
        response = await client.post("/v1/applications", json=submission(), headers=auth("applicant"))

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "PENDING"
        assert data["applicant_id"] == str(users["applicant"].id)
        assert data["interest_rate"] == 15.5

    @pytest.mark.asyncio
    async def test_active_rate_for_duration_is_used(self, client, auth, users, test_session):
        await PostgresInterestRateRepository(test_session).save(
            InterestRate(months=6, rate=9.0, admin_id=users["admin"].id)
        )
        await test_session.commit()

        response = await client.post("/v1/applications", json=submission(), headers=auth("applicant"))

        assert response.json()["interest_rate"] == 9.0

    @pytest.mark.asyncio
    async def test_active_officers_are_notified(self, client, auth, users, db_rows):
        response = await client.post("/v1/applications", json=submission(), headers=auth("applicant"))
        app_id = response.json()["id"]

        notices = await db_rows(NotificationModel, loan_application_id=app_id)
        assert [n.user_id for n in notices] == [str(users["officer"].id)]
        assert notices[0].type == "APPLICATION_SUBMITTED"

        audits = await db_rows(AuditLogModel, entity_id=app_id)
        assert [a.action for a in audits] == ["SUBMIT_APPLICATION"]

    @pytest.mark.asyncio
    async def test_invalid_submission_lists_every_problem(self, client, auth, users):
        response = await client.post(
            "/v1/applications",
            json=submission(amount=0, duration=120, employment_status="PIRATE"),
            headers=auth("applicant"),
        )

        assert response.status_code == 400
        message = response.json()["message"]
        assert "amount" in message
        assert "duration" in message
        assert "employment_status" in message

    @pytest.mark.asyncio
    async def test_officer_cannot_submit(self, client, auth, users):
        response = await client.post("/v1/applications", json=submission(), headers=auth("officer"))

        assert response.status_code == 403


class TestListApplications:

    @pytest.mark.asyncio
    async def test_applicant_sees_only_own(self, client, auth, make_application):
        mine = await make_application()
        await make_application(owner="other_applicant")

        response = await client.get("/v1/applications", headers=auth("applicant"))

        data = response.json()
        assert [a["id"] for a in data["items"]] == [str(mine.id)]
        assert data["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_officer_queue_excludes_approved(self, client, auth, make_application):
        pending = await make_application()
        await make_application(status=ApplicationStatus.APPROVED)

        response = await client.get("/v1/applications", headers=auth("officer"))

        ids = [a["id"] for a in response.json()["items"]]
        assert ids == [str(pending.id)]

    @pytest.mark.asyncio
    async def test_officer_also_sees_what_they_reviewed(self, client, auth, make_application):
        application = await make_application()
        await client.post(
            f"/v1/applications/{application.id}/review",
            json={"decision": "REJECTED", "comments": "Incomplete"},
            headers=auth("officer"),
        )

        response = await client.get("/v1/applications", headers=auth("officer"))

        statuses = {a["id"]: a["status"] for a in response.json()["items"]}
        assert statuses[str(application.id)] == "REJECTED"

    @pytest.mark.asyncio
    async def test_status_filter(self, client, auth, make_application):
        await make_application()
        approved = await make_application(status=ApplicationStatus.APPROVED)

        response = await client.get("/v1/applications?status=APPROVED", headers=auth("admin"))

        assert [a["id"] for a in response.json()["items"]] == [str(approved.id)]

    @pytest.mark.asyncio
    async def test_unknown_status_filter_is_400(self, client, auth, users):
        response = await client.get("/v1/applications?status=LOST", headers=auth("admin"))

        assert response.status_code == 400


class TestApplicationDetail:

    @pytest.mark.asyncio
    async def test_detail_includes_reviews_and_applicant(self, client, auth, make_application):
        application = await make_application()
        await client.post(
            f"/v1/applications/{application.id}/review",
            json={"decision": "APPROVED"},
            headers=auth("officer"),
        )

        response = await client.get(f"/v1/applications/{application.id}", headers=auth("approver"))

        assert response.status_code == 200
        data = response.json()
        assert len(data["reviews"]) == 1
        assert data["applicant"]["name"] == "Ada Applicant"
        assert data["loan"] is None

    @pytest.mark.asyncio
    async def test_other_applicant_is_forbidden(self, client, auth, make_application):
        application = await make_application()

        response = await client.get(
            f"/v1/applications/{application.id}",
            headers=auth("other_applicant"),
        )

        assert response.status_code == 403


class TestAccountDetails:

    @pytest.mark.asyncio
    async def test_owner_updates_account(self, client, auth, make_application, db_rows):
        application = await make_application()

        response = await client.put(
            f"/v1/applications/{application.id}/account",
            json={"account_number": "0123456789", "bank_name": "First Bank"},
            headers=auth("applicant"),
        )

        assert response.status_code == 200
        assert response.json()["account_number"] == "0123456789"
        audits = await db_rows(AuditLogModel, action="UPDATE_APPLICATION_ACCOUNT_DETAILS")
        assert len(audits) == 1

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_field(self, client, auth, make_application):
        application = await make_application(account_number="1111111111", bank_name="Old Bank")

        response = await client.put(
            f"/v1/applications/{application.id}/account",
            json={"bank_name": "New Bank"},
            headers=auth("applicant"),
        )

        assert response.json()["account_number"] == "1111111111"
        assert response.json()["bank_name"] == "New Bank"

    @pytest.mark.asyncio
    async def test_staff_cannot_update_account(self, client, auth, make_application):
        application = await make_application()

        response = await client.put(
            f"/v1/applications/{application.id}/account",
            json={"bank_name": "Sneaky Bank"},
            headers=auth("officer"),
        )

        assert response.status_code == 403
