"""Disbursement service - releases funds for approved applications."""

from uuid import UUID

import structlog

from loanflow.application.dto import DisbursementResult
from loanflow.core.config import settings
from loanflow.core.metrics import (
    record_disbursement,
    record_status_transition,
    track_workflow_latency,
)
from loanflow.domain.entities import (
    Actor,
    ApplicationStatus,
    Loan,
    LoanApplication,
    NotificationType,
    utcnow,
)
from loanflow.domain.exceptions import (
    AlreadyDisbursedException,
    ApplicationNotFoundException,
    AuthorizationError,
    NotApprovedException,
    StaleApplicationException,
)
from loanflow.domain.interfaces import (
    ActivityRecorder,
    ApplicationRepository,
    LoanRepository,
)
from loanflow.service.workflow import add_months, calculate_loan_terms, can_disburse

from .common import format_amount, notify_unless_actor

logger = structlog.get_logger(__name__)


class DisbursementService:
    """Application service for the final step of the loan workflow."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        loan_repository: LoanRepository,
        recorder: ActivityRecorder,
    ):
        self._application_repo = application_repository
        self._loan_repo = loan_repository
        self._recorder = recorder

    async def disburse(self, application_id: UUID, actor: Actor) -> DisbursementResult:
        """
        Mark an approved application as disbursed.

        Stamps the existing loan, or books one from the application's own
        terms when no officer created it beforehand.

        Args:
            application_id: The approved application
            actor: An approver or super admin

        Returns:
            DisbursementResult with the updated application and its loan

        Raises:
            AuthorizationError: If the actor may not disburse
            ApplicationNotFoundException: If the application does not exist
            AlreadyDisbursedException: If funds were already released
            NotApprovedException: If the application is not APPROVED
            StaleApplicationException: If the status changed concurrently
        """
        if not can_disburse(actor.role):
            raise AuthorizationError(f"Role {actor.role.value} cannot disburse loans")

        log = logger.bind(application_id=str(application_id), actor_id=str(actor.user_id))

        with track_workflow_latency("disburse"):
            application = await self._application_repo.get_by_id(application_id)
            if application is None:
                raise ApplicationNotFoundException(str(application_id))

            if (
                application.status is ApplicationStatus.DISBURSED
                or application.disbursed_at is not None
            ):
                log.warning("disbursement_repeated")
                raise AlreadyDisbursedException(str(application.id))

            if application.status is not ApplicationStatus.APPROVED:
                raise NotApprovedException(application.status.value)

            now = utcnow()
            updated = await self._application_repo.transition(
                application.id,
                ApplicationStatus.APPROVED,
                ApplicationStatus.DISBURSED,
                disbursed_at=now,
            )
            if updated is None:
                raise StaleApplicationException(str(application.id), ApplicationStatus.APPROVED.value)

            loan = await self._loan_repo.get_by_application_id(application.id)
            if loan is None:
                loan = await self._loan_repo.save(self._book_loan(application, actor, now))
                log.info("loan_booked_at_disbursement", loan_id=str(loan.id))
            else:
                if loan.disbursement_date is None:
                    loan.disbursement_date = now
                if loan.next_payment_due is None:
                    loan.next_payment_due = add_months(loan.disbursement_date)
                loan = await self._loan_repo.update(loan)

            amount = format_amount(loan.disbursement_amount, settings.currency_symbol)
            await notify_unless_actor(
                self._recorder,
                actor,
                application.applicant_id,
                NotificationType.LOAN_DISBURSED,
                "Loan Disbursed",
                f"Your loan of {amount} has been disbursed to your account.",
                application_id=application.id,
            )

            await self._recorder.record_audit(
                actor_id=actor.user_id,
                action="DISBURSE_LOAN",
                entity_type="LoanApplication",
                entity_id=str(application.id),
                old_values=application.snapshot(),
                new_values={**updated.snapshot(), "loan_id": str(loan.id)},
                metadata=actor.metadata,
            )

        record_disbursement(loan.disbursement_amount)
        record_status_transition(application.status.value, updated.status.value)
        log.info("loan_disbursed", loan_id=str(loan.id), amount=loan.disbursement_amount)

        return DisbursementResult(application=updated, loan=loan)

    def _book_loan(self, application: LoanApplication, actor: Actor, now) -> Loan:
        terms = calculate_loan_terms(
            application.amount,
            application.interest_rate,
            application.duration,
        )
        return Loan(
            application_id=application.id,
            approved_amount=terms.principal,
            disbursement_amount=terms.principal,
            interest_rate=terms.interest_rate,
            duration=terms.duration,
            monthly_payment=terms.monthly_payment,
            total_repayment=terms.total_repayment,
            created_by=actor.user_id,
            bank_account=application.account_number,
            bank_name=application.bank_name,
            disbursement_date=now,
            next_payment_due=add_months(now),
        )
