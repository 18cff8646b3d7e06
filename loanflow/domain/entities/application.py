"""Loan application entity and its status model."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from .clock import utcnow


class ApplicationStatus(str, Enum):
    """Closed set of states an application moves through."""

    PENDING = "PENDING"
    UNDER_REVIEW = "UNDER_REVIEW"
    ADDITIONAL_INFO_REQUESTED = "ADDITIONAL_INFO_REQUESTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    DISBURSED = "DISBURSED"


class EmploymentStatus(str, Enum):
    EMPLOYED = "EMPLOYED"
    SELF_EMPLOYED = "SELF_EMPLOYED"
    UNEMPLOYED = "UNEMPLOYED"
    RETIRED = "RETIRED"
    STUDENT = "STUDENT"


@dataclass
class LoanApplication:
    """
    A loan request submitted by an applicant.

    The applicant owns the record but only the review workflow mutates
    its status. Decision timestamps are set once and never cleared.
    """

    applicant_id: UUID
    amount: float
    purpose: str
    duration: int
    interest_rate: float
    monthly_income: float
    employment_status: EmploymentStatus
    employer_name: Optional[str] = None
    work_experience: Optional[int] = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    account_number: Optional[str] = None
    bank_name: Optional[str] = None
    additional_info_requested: Optional[str] = None
    additional_info_provided: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    disbursed_at: Optional[datetime] = None
    id: UUID = field(default_factory=uuid4)
    submitted_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def snapshot(self) -> dict:
        """Status-related fields for audit old/new values."""
        return {
            "status": self.status.value,
            "approved_at": _iso(self.approved_at),
            "rejected_at": _iso(self.rejected_at),
            "disbursed_at": _iso(self.disbursed_at),
            "additional_info_requested": self.additional_info_requested,
        }


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
