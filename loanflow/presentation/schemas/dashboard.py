"""Dashboard and notification schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from loanflow.domain.entities import Notification


class AdminStatsSchema(BaseModel):
    total_applications: int
    total_loans: int
    total_users: int
    total_disbursed: float


class OfficerStatsSchema(BaseModel):
    pending_applications: int
    reviewed_today: int
    awaiting_additional_info: int
    approval_rate: float


class ApproverStatsSchema(BaseModel):
    pending_review: int
    approved_today: int
    rejected_today: int
    total_approved_amount: float


class PendingQueueItemSchema(BaseModel):
    application_id: str
    applicant_name: str
    amount: float
    purpose: str
    submitted_at: str
    reviewed_by: Optional[str] = None
    recommendation: str
    risk_level: str


class NotificationSchema(BaseModel):
    id: str
    type: str
    title: str
    message: str
    loan_application_id: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationSchema":
        return cls(
            id=str(notification.id),
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            loan_application_id=(
                str(notification.loan_application_id)
                if notification.loan_application_id
                else None
            ),
            created_at=notification.created_at,
        )
