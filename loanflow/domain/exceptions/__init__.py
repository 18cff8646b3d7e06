"""Domain Exceptions - Business rule violations and domain errors."""

from .base import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainException,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from .application import (
    AlreadyDisbursedException,
    ApplicationNotFoundException,
    InvalidTransitionException,
    NotApprovedException,
    StaleApplicationException,
)
from .loan import (
    InterestRateNotFoundException,
    LoanAlreadyExistsException,
    LoanNotFoundException,
)
from .user import (
    DocumentNotFoundException,
    DuplicateDocumentException,
    DuplicateEmailException,
    UserNotFoundException,
)
from .session import SessionProviderException, SessionProviderTimeoutException

__all__ = [
    "DomainException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "UnexpectedError",
    "ApplicationNotFoundException",
    "InvalidTransitionException",
    "StaleApplicationException",
    "NotApprovedException",
    "AlreadyDisbursedException",
    "LoanNotFoundException",
    "LoanAlreadyExistsException",
    "InterestRateNotFoundException",
    "UserNotFoundException",
    "DuplicateEmailException",
    "DocumentNotFoundException",
    "DuplicateDocumentException",
    "SessionProviderException",
    "SessionProviderTimeoutException",
]
