"""Data transfer objects for application intake and self-service."""

from dataclasses import dataclass, field
from typing import List, Optional

from loanflow.domain.entities import (
    ApplicationStatus,
    EmploymentStatus,
    Loan,
    LoanApplication,
    LoanReview,
    User,
)
from loanflow.service.workflow import workflow_settings

from .common import PageRequest


@dataclass(frozen=True)
class SubmitApplicationRequest:
    """Input for a new loan application."""

    amount: float
    purpose: str
    duration: int
    monthly_income: float
    employment_status: str
    employer_name: Optional[str] = None
    work_experience: Optional[int] = None
    account_number: Optional[str] = None
    bank_name: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if self.amount <= 0:
            errors.append("amount must be positive")

        if not self.purpose or not self.purpose.strip():
            errors.append("purpose is required")

        low = workflow_settings.min_duration_months
        high = workflow_settings.max_duration_months
        if not low <= self.duration <= high:
            errors.append(f"duration must be between {low} and {high} months")

        if self.monthly_income < 0:
            errors.append("monthly_income cannot be negative")

        if self.employment_status not in EmploymentStatus.__members__:
            errors.append(f"invalid employment_status: {self.employment_status}")

        if self.work_experience is not None and self.work_experience < 0:
            errors.append("work_experience cannot be negative")

        return errors


@dataclass(frozen=True)
class ApplicationListRequest(PageRequest):
    status: Optional[str] = None

    def validate(self) -> List[str]:
        errors = super().validate()

        if self.status is not None and self.status not in ApplicationStatus.__members__:
            errors.append(f"invalid status filter: {self.status}")

        return errors


@dataclass(frozen=True)
class AccountDetailsRequest:
    account_number: Optional[str] = None
    bank_name: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if self.account_number is not None and not self.account_number.strip():
            errors.append("account_number cannot be blank")

        if self.bank_name is not None and not self.bank_name.strip():
            errors.append("bank_name cannot be blank")

        return errors


@dataclass(frozen=True)
class ApplicationDetail:
    """An application with the records a reviewer needs alongside it."""

    application: LoanApplication
    reviews: List[LoanReview] = field(default_factory=list)
    loan: Optional[Loan] = None
    applicant: Optional[User] = None
