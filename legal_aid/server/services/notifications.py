"""
Notification service.

Other services stage notifications inside their own transaction with
:meth:`NotificationService.notify`. Fan-out that must never fail the request
(payment updates) goes through :meth:`NotificationService.notify_after_commit`.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from legal_aid.core.database.base import utc_now
from legal_aid.core.database.entities.notifications import Notification
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import NotFound
from legal_aid.core.logging_config import get_logger
from legal_aid.core.models.domain.enums import NotificationPriority, NotificationStatus, NotificationType

logger = get_logger(__name__)


class NotificationService:
    """Creates and reads in-app notifications."""

    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def notify(
        self,
        user_id: int,
        title: str,
        message: str,
        *,
        type: NotificationType = NotificationType.SYSTEM,
        priority: NotificationPriority = NotificationPriority.NORMAL,
        link: Optional[str] = None,
    ) -> Notification:
        """Stage a notification in the current transaction."""
        notification = Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=type.value,
            priority=priority.value,
            link=link,
        )
        return await self.repos.notifications.add(notification)

    async def notify_after_commit(
        self,
        user_ids: Iterable[Optional[int]],
        title: str,
        message: str,
        *,
        type: NotificationType = NotificationType.SYSTEM,
        link: Optional[str] = None,
    ) -> int:
        """Send notifications in their own transaction after the caller committed.

        A failure here is logged and rolled back without affecting the change
        the caller already committed.

        Returns:
            Number of notifications delivered.
        """
        recipients = sorted({user_id for user_id in user_ids if user_id is not None})
        if not recipients:
            return 0
        try:
            for user_id in recipients:
                await self.notify(user_id, title, message, type=type, link=link)
            await self.repos.commit()
        except Exception as e:
            logger.warning(f"Failed to deliver notification '{title}' to {recipients}: {e}", exc_info=True)
            await self.repos.rollback()
            return 0
        return len(recipients)

    async def list_for_user(
        self, user_id: int, *, unread_only: bool = False, limit: int = 50, offset: int = 0
    ) -> List[Notification]:
        return await self.repos.notifications.list_for_user(
            user_id, unread_only=unread_only, limit=limit, offset=offset
        )

    async def unread_count(self, user_id: int) -> int:
        return await self.repos.notifications.count_unread(user_id)

    async def mark_read(self, user_id: int, notification_id: int) -> Notification:
        notification = await self.repos.notifications.get_by_id(notification_id)
        if notification is None or notification.user_id != user_id:
            raise NotFound("Notification not found")
        if notification.status != NotificationStatus.READ.value:
            notification.status = NotificationStatus.READ.value
            notification.read_at = utc_now()
            self.repos.session.add(notification)
            await self.repos.commit()
        return notification

    async def mark_all_read(self, user_id: int) -> int:
        return await self.repos.notifications.mark_all_read(user_id, utc_now())
