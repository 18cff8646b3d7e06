"""Loan-related domain exceptions."""

from .base import ConflictError, NotFoundError


class LoanNotFoundException(NotFoundError):
    def __init__(self, loan_id: str):
        super().__init__("Loan", loan_id)


class LoanAlreadyExistsException(ConflictError):
    """Raised when an application already has a loan."""

    def __init__(self, application_id: str):
        super().__init__(
            message=f"Loan already exists for application {application_id}",
            code="LOAN_ALREADY_EXISTS",
        )


class InterestRateNotFoundException(NotFoundError):
    def __init__(self, rate_id: str):
        super().__init__("Interest rate", rate_id)
