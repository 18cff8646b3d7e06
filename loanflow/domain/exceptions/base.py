"""Base domain exception and the error taxonomy."""


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    Domain exceptions represent business rule violations or
    domain-specific error conditions.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class AuthenticationError(DomainException):
    """Raised when the caller has no valid session."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message=message, code="UNAUTHENTICATED")


class AuthorizationError(DomainException):
    """Raised when the caller's role does not allow the action."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message=message, code="FORBIDDEN")


class NotFoundError(DomainException):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            message=f"{entity} not found: {entity_id}",
            code=f"{entity.upper().replace(' ', '_')}_NOT_FOUND",
        )
        self.entity_id = entity_id


class ValidationError(DomainException):
    """Raised when input is malformed or out of range."""

    def __init__(self, message: str):
        super().__init__(message=message, code="VALIDATION_ERROR")


class ConflictError(DomainException):
    """Raised for illegal state transitions and duplicate entities."""

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message=message, code=code)


class UnexpectedError(DomainException):
    """Raised for downstream failures that must surface as a 500."""

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        super().__init__(message=message, code=code)
