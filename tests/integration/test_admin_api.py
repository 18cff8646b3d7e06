"""Integration tests for registration, staff administration and interest rates."""

import pytest

from loanflow.core.security import verify_password
from loanflow.infrastructure.database import AuditLogModel, UserModel


def registration(**overrides) -> dict:
    body = {
        "name": "Chidi Okeke",
        "email": "Chidi@Example.com",
        "password": "s3cret!",
        "phone_number": "08031234567",
        "address": "14 Allen Avenue, Ikeja",
    }
    body.update(overrides)
    return body


# =============================================================================
# Registration
# =============================================================================

class TestRegister:

    @pytest.mark.asyncio
    async def test_register_creates_applicant_with_hashed_password(self, client, db_rows):
        response = await client.post(
            "/v1/auth/register",
            json=registration(),
            headers={"X-Real-IP": "198.51.100.7"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["role"] == "APPLICANT"
        assert data["email"] == "chidi@example.com"
        assert "password_hash" not in data

        stored = (await db_rows(UserModel, email="chidi@example.com"))[0]
        assert stored.password_hash != "s3cret!"
        assert verify_password("s3cret!", stored.password_hash)

        audits = await db_rows(AuditLogModel, action="REGISTER_USER")
        assert audits[0].user_id == data["id"]
        assert audits[0].ip_address == "198.51.100.7"

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected(self, client, users):
        response = await client.post(
            "/v1/auth/register",
            json=registration(email="applicant@loanflow.test"),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "DUPLICATE_EMAIL"

    @pytest.mark.asyncio
    async def test_field_rules(self, client):
        response = await client.post(
            "/v1/auth/register",
            json=registration(name="A", email="not-an-email", password="123"),
        )

        assert response.status_code == 400
        message = response.json()["message"]
        assert "Name must be at least 2 characters" in message
        assert "Invalid email address" in message
        assert "Password must be at least 6 characters" in message


# =============================================================================
# Users and Staff
# =============================================================================

class TestAdminUsers:

    @pytest.mark.asyncio
    async def test_create_staff_returns_temporary_password(self, client, auth, users):
        response = await client.post(
            "/v1/admin/users",
            json={"name": "New Officer", "email": "new.officer@loanflow.test", "role": "LOAN_OFFICER"},
            headers=auth("admin"),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["role"] == "LOAN_OFFICER"
        assert len(data["temporary_password"]) == 12

    @pytest.mark.asyncio
    async def test_only_admin_manages_users(self, client, auth, users):
        response = await client.get("/v1/admin/users", headers=auth("approver"))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_list_users_filters_by_role(self, client, auth, users):
        response = await client.get("/v1/admin/users?role=APPLICANT", headers=auth("admin"))

        data = response.json()
        assert {u["email"] for u in data["items"]} == {
            "applicant@loanflow.test",
            "other_applicant@loanflow.test",
        }
        assert data["pagination"]["total"] == 2

    @pytest.mark.asyncio
    async def test_list_staff_filters_inactive(self, client, auth, users):
        response = await client.get("/v1/admin/staff?status=inactive", headers=auth("admin"))

        emails = [u["email"] for u in response.json()["items"]]
        assert emails == ["inactive_officer@loanflow.test"]

    @pytest.mark.asyncio
    async def test_staff_filter_rejects_applicant_role(self, client, auth, users):
        response = await client.get("/v1/admin/staff?role=APPLICANT", headers=auth("admin"))

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_deactivated_officer_loses_access(self, client, auth, users, db_rows):
        officer_id = users["officer"].id

        response = await client.patch(
            f"/v1/admin/staff/{officer_id}",
            json={"is_active": False},
            headers=auth("admin"),
        )
        after = await client.get("/v1/applications", headers=auth("officer"))

        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert after.status_code == 403
        assert len(await db_rows(AuditLogModel, action="UPDATE_STAFF_STATUS")) == 1

    @pytest.mark.asyncio
    async def test_admin_cannot_change_own_status(self, client, auth, users):
        response = await client.patch(
            f"/v1/admin/staff/{users['admin'].id}",
            json={"is_active": False},
            headers=auth("admin"),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_applicant_status_is_not_staff_managed(self, client, auth, users):
        response = await client.patch(
            f"/v1/admin/staff/{users['applicant'].id}",
            json={"is_active": False},
            headers=auth("admin"),
        )

        assert response.status_code == 400


# =============================================================================
# Interest Rates
# =============================================================================

class TestInterestRates:

    @pytest.mark.asyncio
    async def test_upsert_then_update_same_duration(self, client, auth, users, db_rows):
        first = await client.post(
            "/v1/interest-rates",
            json={"months": 12, "rate": 18.0},
            headers=auth("admin"),
        )
        second = await client.post(
            "/v1/interest-rates",
            json={"months": 12, "rate": 16.5},
            headers=auth("admin"),
        )

        assert first.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["rate"] == 16.5
        actions = [a.action for a in await db_rows(AuditLogModel, entity_type="InterestRate")]
        assert sorted(actions) == ["CREATE_INTEREST_RATE", "UPDATE_INTEREST_RATE"]

    @pytest.mark.asyncio
    async def test_available_is_public_and_sorted(self, client, auth, users):
        for months, rate in ((12, 18.0), (3, 8.0)):
            await client.post(
                "/v1/interest-rates",
                json={"months": months, "rate": rate},
                headers=auth("admin"),
            )

        response = await client.get("/v1/interest-rates/available")

        assert response.status_code == 200
        assert response.json() == [{"months": 3, "rate": 8.0}, {"months": 12, "rate": 18.0}]

    @pytest.mark.asyncio
    async def test_delete_rate(self, client, auth, users):
        created = await client.post(
            "/v1/interest-rates",
            json={"months": 6, "rate": 12.0},
            headers=auth("admin"),
        )

        response = await client.delete(
            f"/v1/interest-rates/{created.json()['id']}",
            headers=auth("admin"),
        )
        missing = await client.delete(
            f"/v1/interest-rates/{created.json()['id']}",
            headers=auth("admin"),
        )

        assert response.status_code == 204
        assert missing.status_code == 404
        assert missing.json()["error"] == "INTEREST_RATE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_out_of_range_rate_is_invalid(self, client, auth, users):
        response = await client.post(
            "/v1/interest-rates",
            json={"months": 12, "rate": 150},
            headers=auth("admin"),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_officer_cannot_set_rates(self, client, auth, users):
        response = await client.post(
            "/v1/interest-rates",
            json={"months": 12, "rate": 10},
            headers=auth("officer"),
        )

        assert response.status_code == 403
