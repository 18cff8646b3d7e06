"""Helpers shared by the use-case services."""

from typing import Optional, Protocol
from uuid import UUID

from loanflow.domain.entities import Actor, NotificationType
from loanflow.domain.exceptions import ValidationError
from loanflow.domain.interfaces import ActivityRecorder


class Validatable(Protocol):
    def validate(self) -> list[str]: ...


def ensure_valid(request: Validatable) -> None:
    """
    Raise a single ValidationError listing every problem with a request.

    Raises:
        ValidationError: If request.validate() reports any errors
    """
    errors = request.validate()
    if errors:
        raise ValidationError("; ".join(errors))


async def notify_unless_actor(
    recorder: ActivityRecorder,
    actor: Actor,
    recipient_id: UUID,
    type: NotificationType,
    title: str,
    message: str,
    application_id: Optional[UUID] = None,
) -> bool:
    """Notify the affected user, skipping the case where they acted themselves."""
    if actor.owns(recipient_id):
        return False
    return await recorder.record_notification(
        user_id=recipient_id,
        type=type,
        title=title,
        message=message,
        related_application_id=application_id,
    )


def format_amount(amount: float, currency_symbol: str) -> str:
    return f"{currency_symbol}{amount:,.2f}"
