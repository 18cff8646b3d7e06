"""Data Transfer Objects for application layer."""

from .application import (
    AccountDetailsRequest,
    ApplicationDetail,
    ApplicationListRequest,
    SubmitApplicationRequest,
)
from .common import Page, PageRequest
from .dashboard import AdminStats, ApproverStats, OfficerStats, PendingQueueItem
from .document import DocumentReviewRequest, RegisterDocumentRequest
from .interest_rate import InterestRateRequest
from .loan import CreateLoanRequest
from .review import (
    AdditionalInfoRequest,
    DisbursementResult,
    ReviewRequest,
    ReviewResult,
)
from .user import CreatedUser, CreateUserRequest, RegisterUserRequest, UserListRequest

__all__ = [
    "AccountDetailsRequest",
    "ApplicationDetail",
    "ApplicationListRequest",
    "SubmitApplicationRequest",
    "Page",
    "PageRequest",
    "AdminStats",
    "ApproverStats",
    "OfficerStats",
    "PendingQueueItem",
    "DocumentReviewRequest",
    "RegisterDocumentRequest",
    "InterestRateRequest",
    "CreateLoanRequest",
    "AdditionalInfoRequest",
    "DisbursementResult",
    "ReviewRequest",
    "ReviewResult",
    "CreatedUser",
    "CreateUserRequest",
    "RegisterUserRequest",
    "UserListRequest",
]
