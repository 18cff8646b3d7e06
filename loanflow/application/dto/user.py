"""Data transfer objects for registration and staff administration."""

import re
from dataclasses import dataclass
from typing import List, Optional

from loanflow.domain.entities import User, UserRole

from .common import PageRequest

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(email: str, errors: List[str]) -> None:
    if not email or not EMAIL_PATTERN.match(email):
        errors.append("Invalid email address")


@dataclass(frozen=True)
class RegisterUserRequest:
    """Self-service applicant sign-up."""

    name: str
    email: str
    password: str
    phone_number: str
    address: str

    def validate(self) -> List[str]:
        errors = []

        if len(self.name.strip()) < 2:
            errors.append("Name must be at least 2 characters")

        _check_email(self.email, errors)

        if len(self.password) < 6:
            errors.append("Password must be at least 6 characters")

        if len(self.phone_number.strip()) < 10:
            errors.append("Phone number must be at least 10 characters")

        if len(self.address.strip()) < 5:
            errors.append("Address must be at least 5 characters")

        return errors


@dataclass(frozen=True)
class CreateUserRequest:
    """Account created by a super admin on someone's behalf."""

    name: str
    email: str
    role: str
    phone_number: Optional[str] = None
    address: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.name or not self.name.strip():
            errors.append("name is required")

        _check_email(self.email, errors)

        if self.role not in UserRole.__members__:
            errors.append(f"invalid role: {self.role}")

        return errors


@dataclass(frozen=True)
class UserListRequest(PageRequest):
    role: Optional[str] = None
    status: Optional[str] = None

    def validate(self) -> List[str]:
        errors = super().validate()

        if self.role is not None and self.role not in UserRole.__members__:
            errors.append(f"invalid role filter: {self.role}")

        if self.status is not None and self.status not in ("active", "inactive"):
            errors.append("status must be 'active' or 'inactive'")

        return errors

    @property
    def is_active(self) -> Optional[bool]:
        if self.status is None:
            return None
        return self.status == "active"


@dataclass(frozen=True)
class CreatedUser:
    """A new account and the one-time password issued with it."""

    user: User
    temporary_password: str
