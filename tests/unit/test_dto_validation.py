"""Unit tests for request DTO validation and password helpers."""

from uuid import uuid4

import pytest

from loanflow.application.dto import (
    CreateLoanRequest,
    CreateUserRequest,
    InterestRateRequest,
    Page,
    PageRequest,
    RegisterDocumentRequest,
    ReviewRequest,
    SubmitApplicationRequest,
    UserListRequest,
)
from loanflow.core.security import (
    generate_temporary_password,
    hash_password,
    verify_password,
)


class TestReviewRequest:

    def test_request_info_needs_comments(self):
        assert ReviewRequest(decision="REQUEST_INFO", comments="   ").validate()

    def test_other_decisions_allow_empty_comments(self):
        assert ReviewRequest(decision="APPROVED").validate() == []


class TestCreateLoanRequest:

    def make(self, **overrides) -> CreateLoanRequest:
        fields = dict(
            application_id=uuid4(),
            approved_amount=300000,
            interest_rate=15.5,
            duration=12,
            monthly_payment=28875,
        )
        fields.update(overrides)
        return CreateLoanRequest(**fields)

    def test_valid_terms(self):
        request = self.make()

        assert request.validate() == []
        assert request.effective_disbursement_amount == 300000

    def test_disbursement_cannot_exceed_approved(self):
        errors = self.make(disbursement_amount=300001).validate()

        assert errors == ["disbursement_amount cannot exceed approved_amount"]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"approved_amount": 0},
            {"interest_rate": 101},
            {"duration": 0},
            {"duration": 61},
            {"monthly_payment": -1},
        ],
    )
    def test_out_of_range_terms(self, overrides):
        assert self.make(**overrides).validate()


class TestSubmitApplicationRequest:

    def test_blank_purpose(self):
        request = SubmitApplicationRequest(
            amount=1000,
            purpose="  ",
            duration=6,
            monthly_income=0,
            employment_status="EMPLOYED",
        )

        assert request.validate() == ["purpose is required"]


class TestRegisterDocumentRequest:

    def test_card_type_only_for_id_cards(self):
        request = RegisterDocumentRequest(
            document_type="PAY_SLIP",
            file_name="slip.pdf",
            file_url="https://media.example.com/slip.pdf",
            file_size=1024,
            mime_type="application/pdf",
            id_card_type="NATIONAL_ID",
        )

        assert request.validate() == ["id_card_type only applies to ID cards"]

    def test_file_url_must_be_http(self):
        request = RegisterDocumentRequest(
            document_type="PAY_SLIP",
            file_name="slip.pdf",
            file_url="ftp://media.example.com/slip.pdf",
            file_size=1024,
            mime_type="application/pdf",
        )

        assert request.validate() == ["file_url must be an http(s) URL"]


class TestAdminRequests:

    def test_unknown_role(self):
        errors = CreateUserRequest(name="Kemi", email="kemi@example.com", role="BOSS").validate()

        assert errors == ["invalid role: BOSS"]

    def test_status_filter_maps_to_flag(self):
        assert UserListRequest(status="active").is_active is True
        assert UserListRequest(status="inactive").is_active is False
        assert UserListRequest().is_active is None

    def test_rate_months_range(self):
        assert InterestRateRequest(months=0, rate=10).validate()
        assert InterestRateRequest(months=12, rate=10).validate() == []


class TestPaging:

    def test_offset(self):
        assert PageRequest(page=3, limit=20).offset == 40

    def test_pages_round_up(self):
        assert Page(items=[], total=21, page=1, limit=10).pages == 3
        assert Page(items=[], total=0, page=1, limit=10).pages == 0


class TestSecurity:

    def test_hash_and_verify(self):
        hashed = hash_password("correct horse", rounds=4)

        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_non_bcrypt_hash_does_not_verify(self):
        assert verify_password("anything", "plain-text") is False

    def test_temporary_password_length(self):
        password = generate_temporary_password(16)

        assert len(password) == 16
        assert password != generate_temporary_password(16)
