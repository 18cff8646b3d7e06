"""Notification service - the caller's inbox."""

from loanflow.domain.entities import Actor, Notification
from loanflow.domain.interfaces import NotificationRepository


class NotificationService:
    def __init__(self, notification_repository: NotificationRepository):
        self._notification_repo = notification_repository

    async def list_for(self, actor: Actor, limit: int = 20) -> list[Notification]:
        return await self._notification_repo.list_for_user(actor.user_id, limit=limit)
