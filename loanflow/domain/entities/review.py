"""Loan review entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from .clock import utcnow


class ReviewType(str, Enum):
    OFFICER_REVIEW = "OFFICER_REVIEW"
    APPROVER_REVIEW = "APPROVER_REVIEW"


class ReviewDecision(str, Enum):
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    REQUEST_INFO = "REQUEST_INFO"


@dataclass(frozen=True)
class LoanReview:
    """
    One reviewer's decision on an application.

    Reviews are append-only: a new decision is a new record.
    """

    application_id: UUID
    reviewer_id: UUID
    review_type: ReviewType
    decision: ReviewDecision
    comments: str = ""
    id: UUID = field(default_factory=uuid4)
    reviewed_at: datetime = field(default_factory=utcnow)
