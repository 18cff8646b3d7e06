"""Read models for the role dashboards."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AdminStats:
    total_applications: int
    total_loans: int
    total_users: int
    total_disbursed: float


@dataclass(frozen=True)
class OfficerStats:
    pending_applications: int
    reviewed_today: int
    awaiting_additional_info: int
    approval_rate: float


@dataclass(frozen=True)
class ApproverStats:
    pending_review: int
    approved_today: int
    rejected_today: int
    total_approved_amount: float


@dataclass(frozen=True)
class PendingQueueItem:
    """One row of the approver's pending queue."""

    application_id: str
    applicant_name: str
    amount: float
    purpose: str
    submitted_at: str
    reviewed_by: Optional[str]
    recommendation: str
    risk_level: str
