"""Data transfer objects for loan creation."""

from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from loanflow.service.workflow import workflow_settings


@dataclass(frozen=True)
class CreateLoanRequest:
    """Terms set by the officer who books an approved application."""

    application_id: UUID
    approved_amount: float
    interest_rate: float
    duration: int
    monthly_payment: float
    disbursement_amount: Optional[float] = None
    bank_account: Optional[str] = None
    bank_name: Optional[str] = None

    @property
    def effective_disbursement_amount(self) -> float:
        if self.disbursement_amount is None:
            return self.approved_amount
        return self.disbursement_amount

    def validate(self) -> List[str]:
        errors = []

        if self.approved_amount <= 0:
            errors.append("approved_amount must be positive")

        if not 0 <= self.interest_rate <= 100:
            errors.append("interest_rate must be between 0 and 100")

        low = workflow_settings.min_duration_months
        high = workflow_settings.max_duration_months
        if not low <= self.duration <= high:
            errors.append(f"duration must be between {low} and {high} months")

        if self.monthly_payment <= 0:
            errors.append("monthly_payment must be positive")

        amount = self.effective_disbursement_amount
        if amount <= 0:
            errors.append("disbursement_amount must be positive")
        elif amount > self.approved_amount:
            errors.append("disbursement_amount cannot exceed approved_amount")

        return errors
