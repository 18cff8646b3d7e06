"""Configured interest rate per loan duration."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from .clock import utcnow


@dataclass
class InterestRate:
    months: int
    rate: float
    admin_id: UUID
    is_active: bool = True
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "months": self.months,
            "rate": self.rate,
            "is_active": self.is_active,
        }
