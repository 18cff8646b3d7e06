"""Domain Entities - Core business objects."""

from .activity import AuditLog, Notification, NotificationType
from .actor import Actor, RequestMetadata
from .application import ApplicationStatus, EmploymentStatus, LoanApplication
from .clock import utcnow
from .document import Document, DocumentStatus, DocumentType, IdCardType
from .interest_rate import InterestRate
from .loan import Loan
from .review import LoanReview, ReviewDecision, ReviewType
from .user import STAFF_ROLES, User, UserRole

__all__ = [
    "Actor",
    "ApplicationStatus",
    "AuditLog",
    "Document",
    "DocumentStatus",
    "DocumentType",
    "EmploymentStatus",
    "IdCardType",
    "InterestRate",
    "Loan",
    "LoanApplication",
    "LoanReview",
    "Notification",
    "NotificationType",
    "RequestMetadata",
    "ReviewDecision",
    "ReviewType",
    "STAFF_ROLES",
    "User",
    "UserRole",
    "utcnow",
]
