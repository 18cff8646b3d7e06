"""Application service - intake, listing and applicant self-service."""

from uuid import UUID

import structlog

from loanflow.application.dto import (
    AccountDetailsRequest,
    ApplicationDetail,
    ApplicationListRequest,
    Page,
    SubmitApplicationRequest,
)
from loanflow.core.config import settings
from loanflow.core.metrics import record_application_submitted
from loanflow.domain.entities import (
    Actor,
    ApplicationStatus,
    EmploymentStatus,
    LoanApplication,
    NotificationType,
    UserRole,
)
from loanflow.domain.exceptions import (
    ApplicationNotFoundException,
    AuthorizationError,
)
from loanflow.domain.interfaces import (
    ActivityRecorder,
    ApplicationRepository,
    InterestRateRepository,
    LoanRepository,
    ReviewRepository,
    UserRepository,
)
from loanflow.service.workflow import (
    application_scope,
    can_view_application,
    workflow_settings,
)

from .common import ensure_valid, format_amount

logger = structlog.get_logger(__name__)


class ApplicationService:
    """Application service for loan application intake and reads."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        review_repository: ReviewRepository,
        loan_repository: LoanRepository,
        user_repository: UserRepository,
        interest_rate_repository: InterestRateRepository,
        recorder: ActivityRecorder,
    ):
        self._application_repo = application_repository
        self._review_repo = review_repository
        self._loan_repo = loan_repository
        self._user_repo = user_repository
        self._rate_repo = interest_rate_repository
        self._recorder = recorder

    async def submit(self, actor: Actor, request: SubmitApplicationRequest) -> LoanApplication:
        """
        Submit a new loan application.

        The interest rate is fixed at intake from the active rate for the
        requested duration, falling back to the configured default.

        Raises:
            AuthorizationError: If the actor is staff other than a super admin
            ValidationError: If the request is invalid
        """
        if not actor.has_role(UserRole.APPLICANT, UserRole.SUPER_ADMIN):
            raise AuthorizationError("Only applicants can submit loan applications")

        ensure_valid(request)

        configured = await self._rate_repo.get_by_months(request.duration)
        if configured is not None and configured.is_active:
            interest_rate = configured.rate
        else:
            interest_rate = workflow_settings.default_interest_rate

        application = await self._application_repo.save(
            LoanApplication(
                applicant_id=actor.user_id,
                amount=request.amount,
                purpose=request.purpose.strip(),
                duration=request.duration,
                interest_rate=interest_rate,
                monthly_income=request.monthly_income,
                employment_status=EmploymentStatus(request.employment_status),
                employer_name=request.employer_name,
                work_experience=request.work_experience,
                account_number=request.account_number,
                bank_name=request.bank_name,
            )
        )

        amount = format_amount(application.amount, settings.currency_symbol)
        officers = await self._user_repo.list_active_by_role(UserRole.LOAN_OFFICER)
        for officer in officers:
            await self._recorder.record_notification(
                user_id=officer.id,
                type=NotificationType.APPLICATION_SUBMITTED,
                title="New Loan Application",
                message=f"A new application for {amount} is awaiting review.",
                related_application_id=application.id,
            )

        await self._recorder.record_audit(
            actor_id=actor.user_id,
            action="SUBMIT_APPLICATION",
            entity_type="LoanApplication",
            entity_id=str(application.id),
            old_values=None,
            new_values={
                **application.snapshot(),
                "amount": application.amount,
                "duration": application.duration,
                "interest_rate": application.interest_rate,
            },
            metadata=actor.metadata,
        )

        record_application_submitted()
        logger.info(
            "application_submitted",
            application_id=str(application.id),
            applicant_id=str(actor.user_id),
            amount=application.amount,
            officers_notified=len(officers),
        )
        return application

    async def list_applications(
        self,
        actor: Actor,
        request: ApplicationListRequest,
    ) -> Page[LoanApplication]:
        ensure_valid(request)

        scope = application_scope(actor)
        status = ApplicationStatus(request.status) if request.status else None
        items, total = await self._application_repo.list(
            applicant_id=scope.applicant_id,
            visible_statuses=scope.visible_statuses,
            reviewed_by=scope.reviewed_by,
            status=status,
            limit=request.limit,
            offset=request.offset,
        )
        return Page(items=items, total=total, page=request.page, limit=request.limit)

    async def get_detail(self, actor: Actor, application_id: UUID) -> ApplicationDetail:
        """
        Fetch an application with its reviews, loan and applicant.

        Raises:
            ApplicationNotFoundException: If the application does not exist
            AuthorizationError: If an applicant asks for someone else's
        """
        application = await self._get_application(application_id)

        if not can_view_application(actor, application.applicant_id):
            raise AuthorizationError("You can only view your own applications")

        return ApplicationDetail(
            application=application,
            reviews=await self._review_repo.list_for_application(application.id),
            loan=await self._loan_repo.get_by_application_id(application.id),
            applicant=await self._user_repo.get_by_id(application.applicant_id),
        )

    async def update_account_details(
        self,
        actor: Actor,
        application_id: UUID,
        request: AccountDetailsRequest,
    ) -> LoanApplication:
        if not actor.has_role(UserRole.APPLICANT, UserRole.SUPER_ADMIN):
            raise AuthorizationError("Only the applicant can update account details")

        ensure_valid(request)

        application = await self._get_application(application_id)
        if not actor.is_admin and not actor.owns(application.applicant_id):
            raise AuthorizationError("You can only update your own applications")

        updated = await self._application_repo.update_account_details(
            application.id,
            account_number=request.account_number or application.account_number,
            bank_name=request.bank_name or application.bank_name,
        )

        await self._recorder.record_audit(
            actor_id=actor.user_id,
            action="UPDATE_APPLICATION_ACCOUNT_DETAILS",
            entity_type="LoanApplication",
            entity_id=str(application.id),
            old_values={
                "account_number": application.account_number,
                "bank_name": application.bank_name,
            },
            new_values={
                "account_number": updated.account_number,
                "bank_name": updated.bank_name,
            },
            metadata=actor.metadata,
        )

        logger.info("account_details_updated", application_id=str(application.id))
        return updated

    async def _get_application(self, application_id: UUID) -> LoanApplication:
        application = await self._application_repo.get_by_id(application_id)
        if application is None:
            raise ApplicationNotFoundException(str(application_id))
        return application
