"""PostgreSQL implementation of NotificationRepository."""

from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from loanflow.domain.entities import Notification, NotificationType
from loanflow.domain.interfaces import NotificationRepository
from loanflow.infrastructure.database.models import NotificationModel

from .mapping import as_utc, as_uuid


class PostgresNotificationRepository(NotificationRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_for_user(self, user_id: UUID, limit: int = 20) -> List[Notification]:
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.user_id == str(user_id))
            .order_by(NotificationModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [
            Notification(
                id=as_uuid(m.id),
                user_id=as_uuid(m.user_id),
                type=NotificationType(m.type),
                title=m.title,
                message=m.message,
                loan_application_id=as_uuid(m.loan_application_id),
                created_at=as_utc(m.created_at),
            )
            for m in result.scalars().all()
        ]
