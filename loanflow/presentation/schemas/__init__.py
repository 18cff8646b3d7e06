"""Pydantic schemas for API request/response validation."""

from .application import (
    AccountDetailsSchema,
    AdditionalInfoSchema,
    ApplicantSummarySchema,
    ApplicationDetailSchema,
    ApplicationListSchema,
    ApplicationSchema,
    DisbursementResponseSchema,
    ReviewRequestSchema,
    ReviewResponseSchema,
    ReviewSchema,
    SubmitApplicationSchema,
)
from .common import MessageSchema, PaginationSchema
from .dashboard import (
    AdminStatsSchema,
    ApproverStatsSchema,
    NotificationSchema,
    OfficerStatsSchema,
    PendingQueueItemSchema,
)
from .document import DocumentReviewSchema, DocumentSchema, RegisterDocumentSchema
from .error import ErrorResponseSchema
from .interest_rate import (
    AvailableRateSchema,
    InterestRateListSchema,
    InterestRateRequestSchema,
    InterestRateSchema,
)
from .loan import CreateLoanSchema, LoanListSchema, LoanResponseSchema, LoanSchema
from .user import (
    CreatedUserSchema,
    CreateUserSchema,
    RegisterUserSchema,
    StaffStatusSchema,
    UserListSchema,
    UserSchema,
)

__all__ = [
    "AccountDetailsSchema",
    "AdditionalInfoSchema",
    "ApplicantSummarySchema",
    "ApplicationDetailSchema",
    "ApplicationListSchema",
    "ApplicationSchema",
    "DisbursementResponseSchema",
    "ReviewRequestSchema",
    "ReviewResponseSchema",
    "ReviewSchema",
    "SubmitApplicationSchema",
    "MessageSchema",
    "PaginationSchema",
    "AdminStatsSchema",
    "ApproverStatsSchema",
    "NotificationSchema",
    "OfficerStatsSchema",
    "PendingQueueItemSchema",
    "DocumentReviewSchema",
    "DocumentSchema",
    "RegisterDocumentSchema",
    "ErrorResponseSchema",
    "AvailableRateSchema",
    "InterestRateListSchema",
    "InterestRateRequestSchema",
    "InterestRateSchema",
    "CreateLoanSchema",
    "LoanListSchema",
    "LoanResponseSchema",
    "LoanSchema",
    "CreatedUserSchema",
    "CreateUserSchema",
    "RegisterUserSchema",
    "StaffStatusSchema",
    "UserListSchema",
    "UserSchema",
]
