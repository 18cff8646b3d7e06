"""Loan entity created from an approved application."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from .clock import utcnow


@dataclass
class Loan:
    """Finalized terms of an approved application."""

    application_id: UUID
    approved_amount: float
    disbursement_amount: float
    interest_rate: float
    duration: int
    monthly_payment: float
    total_repayment: float
    created_by: UUID
    bank_account: Optional[str] = None
    bank_name: Optional[str] = None
    disbursement_date: Optional[datetime] = None
    next_payment_due: Optional[date] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)

    @property
    def is_disbursed(self) -> bool:
        return self.disbursement_date is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for audit snapshots."""
        return {
            "loan_id": str(self.id),
            "application_id": str(self.application_id),
            "approved_amount": self.approved_amount,
            "disbursement_amount": self.disbursement_amount,
            "interest_rate": self.interest_rate,
            "duration": self.duration,
            "monthly_payment": self.monthly_payment,
            "total_repayment": self.total_repayment,
            "disbursement_date": (
                self.disbursement_date.isoformat() if self.disbursement_date else None
            ),
        }
