"""Dependency injection for FastAPI."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from loanflow.application.services import (
    ApplicationService,
    DashboardService,
    DisbursementService,
    DocumentService,
    InterestRateService,
    LoanService,
    NotificationService,
    ReviewService,
    UserService,
)
from loanflow.domain.entities import Actor, RequestMetadata
from loanflow.domain.exceptions import AuthenticationError, AuthorizationError
from loanflow.domain.interfaces import SessionClient
from loanflow.infrastructure.clients import HttpSessionClient
from loanflow.infrastructure.database import get_db_session
from loanflow.infrastructure.repositories import (
    PostgresApplicationRepository,
    PostgresDocumentRepository,
    PostgresInterestRateRepository,
    PostgresLoanRepository,
    PostgresNotificationRepository,
    PostgresReviewRepository,
    PostgresUserRepository,
    SqlActivityRecorder,
)
from loanflow.presentation.middleware.request_context import get_request_metadata

logger = structlog.get_logger(__name__)

DbSession = Annotated[AsyncSession, Depends(get_db_session)]

bearer_scheme = HTTPBearer(auto_error=False)


# Repository dependencies
async def get_application_repository(session: DbSession) -> PostgresApplicationRepository:
    return PostgresApplicationRepository(session)


async def get_review_repository(session: DbSession) -> PostgresReviewRepository:
    return PostgresReviewRepository(session)


async def get_loan_repository(session: DbSession) -> PostgresLoanRepository:
    return PostgresLoanRepository(session)


async def get_user_repository(session: DbSession) -> PostgresUserRepository:
    return PostgresUserRepository(session)


async def get_interest_rate_repository(session: DbSession) -> PostgresInterestRateRepository:
    return PostgresInterestRateRepository(session)


async def get_document_repository(session: DbSession) -> PostgresDocumentRepository:
    return PostgresDocumentRepository(session)


async def get_notification_repository(session: DbSession) -> PostgresNotificationRepository:
    return PostgresNotificationRepository(session)


async def get_activity_recorder(session: DbSession) -> SqlActivityRecorder:
    """Get the notification/audit recorder bound to the request's transaction."""
    return SqlActivityRecorder(session)


ApplicationRepo = Annotated[PostgresApplicationRepository, Depends(get_application_repository)]
ReviewRepo = Annotated[PostgresReviewRepository, Depends(get_review_repository)]
LoanRepo = Annotated[PostgresLoanRepository, Depends(get_loan_repository)]
UserRepo = Annotated[PostgresUserRepository, Depends(get_user_repository)]
RateRepo = Annotated[PostgresInterestRateRepository, Depends(get_interest_rate_repository)]
DocumentRepo = Annotated[PostgresDocumentRepository, Depends(get_document_repository)]
NotificationRepo = Annotated[PostgresNotificationRepository, Depends(get_notification_repository)]
Recorder = Annotated[SqlActivityRecorder, Depends(get_activity_recorder)]


# External client dependencies
def get_session_client() -> SessionClient:
    """Get a SessionClient instance."""
    return HttpSessionClient()


# Authentication
def get_metadata(request: Request) -> RequestMetadata:
    return get_request_metadata(request)


async def get_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session_client: Annotated[SessionClient, Depends(get_session_client)],
    users: UserRepo,
    metadata: Annotated[RequestMetadata, Depends(get_metadata)],
) -> Actor:
    """
    Resolve the bearer token into the caller's Actor.

    The session provider only vouches for the user id; role and
    activation state are read from our own users table.

    Raises:
        AuthenticationError: If the token is missing, rejected or unknown
        AuthorizationError: If the account has been deactivated
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    user_id: UUID = await session_client.resolve(credentials.credentials)
    user = await users.get_by_id(user_id)
    if user is None:
        logger.warning("session_user_unknown", user_id=str(user_id))
        raise AuthenticationError("Unknown user")

    if not user.is_active:
        raise AuthorizationError("Account is deactivated")

    return Actor(user_id=user.id, role=user.role, name=user.name, metadata=metadata)


CurrentActor = Annotated[Actor, Depends(get_actor)]


# Service dependencies
async def get_review_service(
    applications: ApplicationRepo,
    reviews: ReviewRepo,
    recorder: Recorder,
) -> ReviewService:
    return ReviewService(
        application_repository=applications,
        review_repository=reviews,
        recorder=recorder,
    )


async def get_disbursement_service(
    applications: ApplicationRepo,
    loans: LoanRepo,
    recorder: Recorder,
) -> DisbursementService:
    return DisbursementService(
        application_repository=applications,
        loan_repository=loans,
        recorder=recorder,
    )


async def get_loan_service(
    applications: ApplicationRepo,
    loans: LoanRepo,
    recorder: Recorder,
) -> LoanService:
    return LoanService(
        application_repository=applications,
        loan_repository=loans,
        recorder=recorder,
    )


async def get_application_service(
    applications: ApplicationRepo,
    reviews: ReviewRepo,
    loans: LoanRepo,
    users: UserRepo,
    rates: RateRepo,
    recorder: Recorder,
) -> ApplicationService:
    """Get an ApplicationService instance with all dependencies."""
    return ApplicationService(
        application_repository=applications,
        review_repository=reviews,
        loan_repository=loans,
        user_repository=users,
        interest_rate_repository=rates,
        recorder=recorder,
    )


async def get_document_service(
    applications: ApplicationRepo,
    documents: DocumentRepo,
    recorder: Recorder,
) -> DocumentService:
    return DocumentService(
        application_repository=applications,
        document_repository=documents,
        recorder=recorder,
    )


async def get_interest_rate_service(rates: RateRepo, recorder: Recorder) -> InterestRateService:
    return InterestRateService(interest_rate_repository=rates, recorder=recorder)


async def get_user_service(users: UserRepo, recorder: Recorder) -> UserService:
    return UserService(user_repository=users, recorder=recorder)


async def get_dashboard_service(
    applications: ApplicationRepo,
    reviews: ReviewRepo,
    loans: LoanRepo,
    users: UserRepo,
) -> DashboardService:
    return DashboardService(
        application_repository=applications,
        review_repository=reviews,
        loan_repository=loans,
        user_repository=users,
    )


async def get_notification_service(notifications: NotificationRepo) -> NotificationService:
    return NotificationService(notification_repository=notifications)
