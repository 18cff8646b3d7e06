"""Application workflow exceptions."""

from .base import ConflictError, NotFoundError


class ApplicationNotFoundException(NotFoundError):
    """Raised when a loan application cannot be found."""

    def __init__(self, application_id: str):
        super().__init__("Application", application_id)


class InvalidTransitionException(ConflictError):
    """Raised when the application is not in a state the actor may act on."""

    def __init__(self, status: str, stage: str):
        super().__init__(
            message=(
                f"Application not in reviewable state for this role "
                f"(status={status}, stage={stage})"
            ),
            code="INVALID_TRANSITION",
        )
        self.status = status
        self.stage = stage


class StaleApplicationException(ConflictError):
    """Raised when a concurrent request changed the status first."""

    def __init__(self, application_id: str, expected_status: str):
        super().__init__(
            message=(
                f"Application {application_id} is no longer {expected_status}; "
                "it was modified by another request"
            ),
            code="STALE_APPLICATION",
        )


class NotApprovedException(ConflictError):
    """Raised when an action requires an APPROVED application."""

    def __init__(self, status: str):
        super().__init__(
            message=f"Application must be approved (current status: {status})",
            code="APPLICATION_NOT_APPROVED",
        )


class AlreadyDisbursedException(ConflictError):
    """Raised on a repeated disbursement."""

    def __init__(self, application_id: str):
        super().__init__(
            message=f"Loan for application {application_id} has already been disbursed",
            code="ALREADY_DISBURSED",
        )
