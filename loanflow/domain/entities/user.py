"""User entity and roles."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from .clock import utcnow


class UserRole(str, Enum):
    APPLICANT = "APPLICANT"
    LOAN_OFFICER = "LOAN_OFFICER"
    APPROVER = "APPROVER"
    SUPER_ADMIN = "SUPER_ADMIN"

    @property
    def is_staff(self) -> bool:
        return self is not UserRole.APPLICANT


STAFF_ROLES = (UserRole.LOAN_OFFICER, UserRole.APPROVER, UserRole.SUPER_ADMIN)


@dataclass
class User:
    """
    A person known to the back office.

    Applicants register themselves; staff accounts are created by a
    super admin. Authentication itself happens at the session provider,
    this record only carries the role and activation flag.
    """

    email: str
    name: str
    role: UserRole
    password_hash: str
    phone_number: str | None = None
    address: str | None = None
    is_active: bool = True
    email_verified: bool = False
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
