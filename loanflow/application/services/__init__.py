"""Application services (use cases)."""

from .application_service import ApplicationService
from .dashboard_service import DashboardService
from .disbursement_service import DisbursementService
from .document_service import DocumentService
from .interest_rate_service import InterestRateService
from .loan_service import LoanService
from .notification_service import NotificationService
from .review_service import ReviewService
from .user_service import UserService

__all__ = [
    "ApplicationService",
    "DashboardService",
    "DisbursementService",
    "DocumentService",
    "InterestRateService",
    "LoanService",
    "NotificationService",
    "ReviewService",
    "UserService",
]
