"""
Integration tests for data persistence.

These tests verify:
1. Applications keep their decision timestamps and info exchange when saved
2. Money columns hold integer kobo and read back as naira
3. A failed notification or audit insert is reported, not raised
4. Stage-filtered review lookups
"""

from datetime import timedelta

import pytest
from prometheus_client import REGISTRY

from loanflow.domain.entities import (
    ApplicationStatus,
    Loan,
    LoanReview,
    NotificationType,
    RequestMetadata,
    ReviewDecision,
    ReviewType,
    utcnow,
)
from loanflow.infrastructure.database import (
    LoanApplicationModel,
    LoanModel,
    NotificationModel,
)
from loanflow.infrastructure.repositories import (
    PostgresLoanRepository,
    PostgresReviewRepository,
    SqlActivityRecorder,
)


def failure_count(kind: str) -> float:
    value = REGISTRY.get_sample_value(
        "loanflow_activity_record_failures_total", {"kind": kind}
    )
    return value or 0.0


# =============================================================================
# Applications
# =============================================================================

class TestApplicationPersistence:

    @pytest.mark.asyncio
    async def test_save_keeps_decision_timestamps_and_info(
        self, make_application, applications
    ):
        decided = utcnow() - timedelta(hours=2)
        application = await make_application(
            status=ApplicationStatus.DISBURSED,
            approved_at=decided,
            disbursed_at=decided + timedelta(hours=1),
            additional_info_requested="Send a utility bill",
            additional_info_provided="Uploaded the NEPA bill",
        )

        stored = await applications.get_by_id(application.id)

        assert stored.approved_at == decided
        assert stored.disbursed_at == decided + timedelta(hours=1)
        assert stored.rejected_at is None
        assert stored.additional_info_requested == "Send a utility bill"
        assert stored.additional_info_provided == "Uploaded the NEPA bill"

    @pytest.mark.asyncio
    async def test_amounts_are_stored_in_kobo(self, make_application, applications, db_rows):
        application = await make_application(amount=250000.75)

        row = (await db_rows(LoanApplicationModel, id=str(application.id)))[0]
        assert row.amount_kobo == 25000075
        assert row.monthly_income_kobo == 15000000

        stored = await applications.get_by_id(application.id)
        assert stored.amount == 250000.75
        assert stored.monthly_income == 150000


# =============================================================================
# Loans
# =============================================================================

class TestLoanPersistence:

    @pytest.mark.asyncio
    async def test_loan_terms_round_trip_through_kobo(
        self, test_session, make_application, users, db_rows
    ):
        application = await make_application(status=ApplicationStatus.APPROVED)
        loans = PostgresLoanRepository(test_session)
        loan = await loans.save(
            Loan(
                application_id=application.id,
                approved_amount=300000,
                disbursement_amount=290000.5,
                interest_rate=15.5,
                duration=12,
                monthly_payment=28875,
                total_repayment=346500,
                created_by=users["officer"].id,
            )
        )
        await test_session.commit()

        row = (await db_rows(LoanModel, id=str(loan.id)))[0]
        assert row.approved_amount_kobo == 30000000
        assert row.disbursement_amount_kobo == 29000050

        stored = await loans.get_by_application_id(application.id)
        assert stored.disbursement_amount == 290000.5
        assert stored.monthly_payment == 28875
        assert await loans.sum_approved_amount() == 300000


# =============================================================================
# Activity Recorder
# =============================================================================

class TestActivityRecorder:

    @pytest.mark.asyncio
    async def test_failed_notification_returns_false_and_is_counted(
        self, test_session, make_application, users
    ):
        application = await make_application()
        recorder = SqlActivityRecorder(test_session)
        before = failure_count("notification")

        recorded = await recorder.record_notification(
            users["applicant"].id,
            NotificationType.APPLICATION_APPROVED,
            None,
            "Your loan was approved",
            application.id,
        )

        assert recorded is False
        assert failure_count("notification") == before + 1

    @pytest.mark.asyncio
    async def test_session_stays_usable_after_failed_insert(
        self, test_session, make_application, users, db_rows
    ):
        application = await make_application()
        recorder = SqlActivityRecorder(test_session)

        assert await recorder.record_audit(
            users["officer"].id,
            None,
            "LoanApplication",
            str(application.id),
            None,
            None,
            RequestMetadata(),
        ) is False
        assert await recorder.record_notification(
            users["applicant"].id,
            NotificationType.APPLICATION_UNDER_REVIEW,
            "Application under review",
            "An officer has reviewed your application",
            application.id,
        ) is True
        await test_session.commit()

        notices = await db_rows(NotificationModel, loan_application_id=str(application.id))
        assert [n.type for n in notices] == ["APPLICATION_UNDER_REVIEW"]


# =============================================================================
# Reviews
# =============================================================================

class TestReviewLookup:

    @pytest.mark.asyncio
    async def test_latest_review_can_be_limited_to_one_stage(
        self, test_session, make_application, users
    ):
        application = await make_application(status=ApplicationStatus.UNDER_REVIEW)
        reviews = PostgresReviewRepository(test_session)
        earlier = utcnow() - timedelta(minutes=5)
        await reviews.add(
            LoanReview(
                application_id=application.id,
                reviewer_id=users["officer"].id,
                review_type=ReviewType.OFFICER_REVIEW,
                decision=ReviewDecision.APPROVED,
                reviewed_at=earlier,
            )
        )
        await reviews.add(
            LoanReview(
                application_id=application.id,
                reviewer_id=users["approver"].id,
                review_type=ReviewType.APPROVER_REVIEW,
                decision=ReviewDecision.REQUEST_INFO,
                comments="Confirm your address",
            )
        )
        await test_session.commit()

        latest = await reviews.latest_for_application(application.id)
        officer = await reviews.latest_for_application(
            application.id, ReviewType.OFFICER_REVIEW
        )

        assert latest.review_type is ReviewType.APPROVER_REVIEW
        assert officer.reviewer_id == users["officer"].id
        assert officer.decision is ReviewDecision.APPROVED
