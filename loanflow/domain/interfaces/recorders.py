"""Notification/audit emitter interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional
from uuid import UUID

from loanflow.domain.entities import NotificationType, RequestMetadata


class ActivityRecorder(ABC):
    """
    Append-only recorder for notifications and audit rows.

    Both operations are fire-and-forget from the caller's point of view:
    they report success as a bool and never raise, so a recording
    failure cannot undo the state change that triggered it.
    """

    @abstractmethod
    async def record_notification(
        self,
        user_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        related_application_id: Optional[UUID] = None,
    ) -> bool:
        ...

    @abstractmethod
    async def record_audit(
        self,
        actor_id: Optional[UUID],
        action: str,
        entity_type: str,
        entity_id: str,
        old_values: Optional[dict[str, Any]],
        new_values: Optional[dict[str, Any]],
        metadata: RequestMetadata,
    ) -> bool:
        ...
