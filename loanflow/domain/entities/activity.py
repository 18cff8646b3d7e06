"""Notification and audit log entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from .clock import utcnow


class NotificationType(str, Enum):
    APPLICATION_SUBMITTED = "APPLICATION_SUBMITTED"
    APPLICATION_UNDER_REVIEW = "APPLICATION_UNDER_REVIEW"
    APPLICATION_APPROVED = "APPLICATION_APPROVED"
    APPLICATION_REJECTED = "APPLICATION_REJECTED"
    ADDITIONAL_INFO_REQUESTED = "ADDITIONAL_INFO_REQUESTED"
    ADDITIONAL_INFO_PROVIDED = "ADDITIONAL_INFO_PROVIDED"
    LOAN_CREATED = "LOAN_CREATED"
    LOAN_DISBURSED = "LOAN_DISBURSED"
    DOCUMENT_REVIEWED = "DOCUMENT_REVIEWED"


@dataclass(frozen=True)
class Notification:
    """A message delivered to a user's inbox. Never mutated."""

    user_id: UUID
    type: NotificationType
    title: str
    message: str
    loan_application_id: Optional[UUID] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class AuditLog:
    """Append-only record of a mutating action."""

    user_id: Optional[UUID]
    action: str
    entity_type: str
    entity_id: str
    old_values: Optional[dict[str, Any]] = None
    new_values: Optional[dict[str, Any]] = None
    ip_address: str = "unknown"
    user_agent: str = "unknown"
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
