"""Integration tests for the /v1/loans endpoints."""

import pytest

from loanflow.domain.entities import ApplicationStatus
from loanflow.infrastructure.database import AuditLogModel, NotificationModel


def loan_body(application, **overrides) -> dict:
    body = {
        "application_id": str(application.id),
        "approved_amount": 300000,
        "interest_rate": 15.5,
        "duration": 12,
        "monthly_payment": 28875,
    }
    body.update(overrides)
    return body


class TestCreateLoan:

    @pytest.mark.asyncio
    async def test_officer_books_loan_without_changing_status(
        self, client, auth, make_application, applications, db_rows
    ):
        application = await make_application(status=ApplicationStatus.APPROVED)

        response = await client.post(
            "/v1/loans",
            json=loan_body(application, disbursement_amount=250000),
            headers=auth("officer"),
        )

        assert response.status_code == 201
        loan = response.json()["loan"]
        assert loan["disbursement_amount"] == 250000
        assert loan["total_repayment"] == 346500
        assert loan["disbursement_date"] is None

        stored = await applications.get_by_id(application.id)
        assert stored.status is ApplicationStatus.APPROVED

        audits = await db_rows(AuditLogModel, action="CREATE_LOAN")
        assert len(audits) == 1
        notices = await db_rows(NotificationModel, type="LOAN_CREATED")
        assert len(notices) == 1

    @pytest.mark.asyncio
    async def test_disbursement_amount_defaults_to_approved(
        self, client, auth, make_application
    ):
        application = await make_application(status=ApplicationStatus.APPROVED)

        response = await client.post("/v1/loans", json=loan_body(application), headers=auth("officer"))

        assert response.json()["loan"]["disbursement_amount"] == 300000

    @pytest.mark.asyncio
    async def test_second_loan_is_conflict(self, client, auth, make_application):
        application = await make_application(status=ApplicationStatus.APPROVED)
        await client.post("/v1/loans", json=loan_body(application), headers=auth("officer"))

        response = await client.post("/v1/loans", json=loan_body(application), headers=auth("officer"))

        assert response.status_code == 400
        assert response.json()["error"] == "LOAN_ALREADY_EXISTS"

    @pytest.mark.asyncio
    async def test_pending_application_cannot_get_loan(self, client, auth, make_application):
        application = await make_application()

        response = await client.post("/v1/loans", json=loan_body(application), headers=auth("officer"))

        assert response.status_code == 400
        assert response.json()["error"] == "APPLICATION_NOT_APPROVED"

    @pytest.mark.asyncio
    async def test_disbursement_above_approved_is_invalid(self, client, auth, make_application):
        application = await make_application(status=ApplicationStatus.APPROVED)

        response = await client.post(
            "/v1/loans",
            json=loan_body(application, disbursement_amount=400000),
            headers=auth("officer"),
        )

        assert response.status_code == 400
        assert "disbursement_amount" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_approver_cannot_create_loan(self, client, auth, make_application):
        application = await make_application(status=ApplicationStatus.APPROVED)

        response = await client.post("/v1/loans", json=loan_body(application), headers=auth("approver"))

        assert response.status_code == 403


class TestListLoans:

    @pytest.mark.asyncio
    async def test_applicant_sees_only_own_loans(self, client, auth, make_application):
        mine = await make_application(status=ApplicationStatus.APPROVED)
        theirs = await make_application(status=ApplicationStatus.APPROVED, owner="other_applicant")
        for application in (mine, theirs):
            await client.post("/v1/loans", json=loan_body(application), headers=auth("officer"))

        response = await client.get("/v1/loans", headers=auth("applicant"))

        assert response.status_code == 200
        data = response.json()
        assert [loan["application_id"] for loan in data["items"]] == [str(mine.id)]
        assert data["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_admin_sees_all_loans(self, client, auth, make_application):
        for owner in ("applicant", "other_applicant"):
            application = await make_application(status=ApplicationStatus.APPROVED, owner=owner)
            await client.post("/v1/loans", json=loan_body(application), headers=auth("officer"))

        response = await client.get("/v1/loans?limit=1", headers=auth("admin"))

        data = response.json()
        assert len(data["items"]) == 1
        assert data["pagination"] == {"page": 1, "limit": 1, "total": 2, "pages": 2}
