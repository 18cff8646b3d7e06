"""SQL-backed notification and audit recorder."""

from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

import structlog
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from loanflow.core.metrics import record_activity_failure
from loanflow.domain.entities import NotificationType, RequestMetadata, utcnow
from loanflow.domain.interfaces import ActivityRecorder
from loanflow.infrastructure.database.models import AuditLogModel, NotificationModel

from .mapping import db_id

logger = structlog.get_logger(__name__)


def serialize_for_audit(value: Any) -> Any:
    """Make a snapshot JSON-safe for the audit columns."""
    return jsonable_encoder(
        value,
        custom_encoder={
            datetime: lambda v: v.isoformat(),
            date: lambda v: v.isoformat(),
        },
    )


class SqlActivityRecorder(ActivityRecorder):
    """
    Writes notifications and audit rows in the caller's transaction.

    Each insert runs in its own SAVEPOINT: if it fails only the savepoint
    is rolled back and the state change that triggered it still commits.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def record_notification(
        self,
        user_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        related_application_id: Optional[UUID] = None,
    ) -> bool:
        model = NotificationModel(
            user_id=str(user_id),
            type=type.value,
            title=title,
            message=message,
            loan_application_id=db_id(related_application_id),
            created_at=utcnow(),
        )
        return await self._insert(model, kind="notification", activity=type.value)

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
        model = AuditLogModel(
            user_id=db_id(actor_id),
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id),
            old_values=serialize_for_audit(old_values) if old_values is not None else None,
            new_values=serialize_for_audit(new_values) if new_values is not None else None,
            ip_address=metadata.ip_address,
            user_agent=metadata.user_agent,
            created_at=utcnow(),
        )
        return await self._insert(model, kind="audit", activity=action)

    async def _insert(self, model: Any, kind: str, activity: str) -> bool:
        try:
            async with self._session.begin_nested():
                self._session.add(model)
                await self._session.flush()
        except SQLAlchemyError as e:
            record_activity_failure(kind)
            logger.error(
                "activity_record_failed",
                kind=kind,
                activity=activity,
                error=str(e),
            )
            return False
        return True
