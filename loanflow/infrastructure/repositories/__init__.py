"""Repository implementations."""

from .activity_recorder import SqlActivityRecorder, serialize_for_audit
from .application_repository import PostgresApplicationRepository
from .document_repository import PostgresDocumentRepository
from .interest_rate_repository import PostgresInterestRateRepository
from .loan_repository import PostgresLoanRepository
from .notification_repository import PostgresNotificationRepository
from .review_repository import PostgresReviewRepository
from .user_repository import PostgresUserRepository

__all__ = [
    "SqlActivityRecorder",
    "serialize_for_audit",
    "PostgresApplicationRepository",
    "PostgresDocumentRepository",
    "PostgresInterestRateRepository",
    "PostgresLoanRepository",
    "PostgresNotificationRepository",
    "PostgresReviewRepository",
    "PostgresUserRepository",
]
