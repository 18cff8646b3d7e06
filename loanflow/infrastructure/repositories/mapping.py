"""Helpers shared by the model-to-entity mappers."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands timestamps back without tzinfo; everything is stored as UTC
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def as_uuid(value: Optional[str]) -> Optional[UUID]:
    return UUID(str(value)) if value is not None else None


def db_id(value: Optional[UUID]) -> Optional[str]:
    return str(value) if value is not None else None


def to_kobo(amount: Optional[float]) -> Optional[int]:
    """Naira to integer kobo, the unit every money column is stored in."""
    return round(amount * 100) if amount is not None else None


def from_kobo(value: Optional[int]) -> Optional[float]:
    return value / 100 if value is not None else None
