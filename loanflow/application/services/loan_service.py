"""Loan service - books loan terms for approved applications."""

import structlog

from loanflow.application.dto import CreateLoanRequest, Page, PageRequest
from loanflow.core.config import settings
from loanflow.core.metrics import track_workflow_latency
from loanflow.domain.entities import (
    Actor,
    ApplicationStatus,
    Loan,
    NotificationType,
    UserRole,
)
from loanflow.domain.exceptions import (
    ApplicationNotFoundException,
    AuthorizationError,
    LoanAlreadyExistsException,
    NotApprovedException,
)
from loanflow.domain.interfaces import (
    ActivityRecorder,
    ApplicationRepository,
    LoanRepository,
)
from loanflow.service.workflow import can_create_loan

from .common import ensure_valid, format_amount, notify_unless_actor

logger = structlog.get_logger(__name__)


class LoanService:
    """Application service for loan booking and listing."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        loan_repository: LoanRepository,
        recorder: ActivityRecorder,
    ):
        self._application_repo = application_repository
        self._loan_repo = loan_repository
        self._recorder = recorder

    async def create_loan(self, actor: Actor, request: CreateLoanRequest) -> Loan:
        """
        Create the loan for an approved application.

        The application keeps its APPROVED status; disbursement is a
        separate step.

        Raises:
            AuthorizationError: If the actor is not an officer or super admin
            ValidationError: If the terms are out of range
            ApplicationNotFoundException: If the application does not exist
            NotApprovedException: If the application is not APPROVED
            LoanAlreadyExistsException: If the application already has a loan
        """
        if not can_create_loan(actor.role):
            raise AuthorizationError(f"Role {actor.role.value} cannot create loans")

        ensure_valid(request)

        with track_workflow_latency("create_loan"):
            application = await self._application_repo.get_by_id(request.application_id)
            if application is None:
                raise ApplicationNotFoundException(str(request.application_id))

            if application.status is not ApplicationStatus.APPROVED:
                raise NotApprovedException(application.status.value)

            if await self._loan_repo.get_by_application_id(application.id) is not None:
                raise LoanAlreadyExistsException(str(application.id))

            loan = await self._loan_repo.save(
                Loan(
                    application_id=application.id,
                    approved_amount=request.approved_amount,
                    disbursement_amount=request.effective_disbursement_amount,
                    interest_rate=request.interest_rate,
                    duration=request.duration,
                    monthly_payment=request.monthly_payment,
                    total_repayment=round(request.monthly_payment * request.duration, 2),
                    created_by=actor.user_id,
                    bank_account=request.bank_account or application.account_number,
                    bank_name=request.bank_name or application.bank_name,
                )
            )

            await self._recorder.record_audit(
                actor_id=actor.user_id,
                action="CREATE_LOAN",
                entity_type="Loan",
                entity_id=str(loan.id),
                old_values=None,
                new_values=loan.to_dict(),
                metadata=actor.metadata,
            )

            amount = format_amount(loan.approved_amount, settings.currency_symbol)
            await notify_unless_actor(
                self._recorder,
                actor,
                application.applicant_id,
                NotificationType.LOAN_CREATED,
                "Loan Created",
                f"A loan of {amount} has been set up for your approved application.",
                application_id=application.id,
            )

        logger.info(
            "loan_created",
            loan_id=str(loan.id),
            application_id=str(application.id),
            approved_amount=loan.approved_amount,
        )
        return loan

    async def list_loans(self, actor: Actor, request: PageRequest) -> Page[Loan]:
        """
        List loans visible to the actor.

        Applicants see loans on their own applications; officers see loans
        they booked or whose application they reviewed; everyone else sees all.
        """
        ensure_valid(request)

        filters = {}
        if actor.role is UserRole.APPLICANT:
            filters["applicant_id"] = actor.user_id
        elif actor.role is UserRole.LOAN_OFFICER:
            filters["created_or_reviewed_by"] = actor.user_id

        loans, total = await self._loan_repo.list(
            limit=request.limit,
            offset=request.offset,
            **filters,
        )
        return Page(items=loans, total=total, page=request.page, limit=request.limit)
