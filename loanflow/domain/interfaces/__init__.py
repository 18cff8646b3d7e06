"""
Domain Interfaces (Ports)
"""

from .repositories import (
    ApplicationRepository,
    DocumentRepository,
    InterestRateRepository,
    LoanRepository,
    NotificationRepository,
    ReviewRepository,
    UserRepository,
)
from .clients import SessionClient
from .recorders import ActivityRecorder

__all__ = [
    "ApplicationRepository",
    "DocumentRepository",
    "InterestRateRepository",
    "LoanRepository",
    "NotificationRepository",
    "ReviewRepository",
    "UserRepository",
    "SessionClient",
    "ActivityRecorder",
]
