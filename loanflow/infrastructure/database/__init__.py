"""Database infrastructure."""

from .connection import get_db_session, DatabaseSessionManager, db_manager
from .models import (
    Base,
    AuditLogModel,
    DocumentModel,
    InterestRateModel,
    LoanApplicationModel,
    LoanModel,
    LoanReviewModel,
    NotificationModel,
    UserModel,
)

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "Base",
    "AuditLogModel",
    "DocumentModel",
    "InterestRateModel",
    "LoanApplicationModel",
    "LoanModel",
    "LoanReviewModel",
    "NotificationModel",
    "UserModel",
]
