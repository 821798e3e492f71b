import logging
from typing import List, Optional, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.app.core.database import generate_id, utcnow
from backend.app.core.errors import NotFoundError, PermissionDeniedError
from backend.app.core.events import change_events
from backend.app.core.registry import registry
from backend.app.models.enums import NotificationType
from backend.app.models.notification_model import AppNotification
from backend.app.schemas.social_schema import NotificationResponse

logger = logging.getLogger(__name__)


class NotificationsService:
    def build(
        self,
        db: AsyncSession,
        user_id: str,
        title: str,
        description: str,
        link: Optional[str] = None,
        type: str = NotificationType.GENERAL,
        **extra: Any,
    ) -> AppNotification:
        """
        Stages a notification on the caller's session. It is persisted by the
        caller's commit, so it lands atomically with the change it reports.
        """
        notification = AppNotification(
            id=generate_id("ntf"),
            user_id=user_id,
            type=type,
            title=title,
            description=description,
            link=link,
            read=False,
            created_at=utcnow(),
            **extra,
        )
        db.add(notification)
        return notification

    async def announce(self, notifications: List[AppNotification]):
        """Push committed notifications to their owners' live channels."""
        for n in notifications:
            await change_events.publish(
                f"notifications:{n.user_id}",
                {"type": "NOTIFICATION", "notification": NotificationResponse.model_validate(n).model_dump(mode="json")},
            )

    async def create_notification(self, db: AsyncSession, user_id: str, title: str, description: str, **kwargs) -> AppNotification:
        notification = self.build(db, user_id, title, description, **kwargs)
        await db.commit()
        await self.announce([notification])
        return notification

    async def list_notifications(self, db: AsyncSession, user_id: str, limit: Optional[int] = None) -> List[AppNotification]:
        limit = limit or registry.defaults.notifications_limit
        result = await db.execute(
            select(AppNotification)
            .where(AppNotification.user_id == user_id)
            .order_by(AppNotification.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_owned(self, db: AsyncSession, notification_id: str, user_id: str) -> AppNotification:
        result = await db.execute(select(AppNotification).where(AppNotification.id == notification_id))
        notification = result.scalar_one_or_none()
        if not notification:
            raise NotFoundError("Notification not found.")
        if notification.user_id != user_id:
            raise PermissionDeniedError("This notification belongs to another user.")
        return notification

    async def mark_notification_as_read(self, db: AsyncSession, notification_id: str, user_id: str) -> AppNotification:
        notification = await self.get_owned(db, notification_id, user_id)
        notification.read = True
        await db.commit()
        return notification

    async def update_notification_status(self, db: AsyncSession, notification_id: str, user_id: str, status: str) -> AppNotification:
        notification = await self.get_owned(db, notification_id, user_id)
        notification.status = status
        notification.read = True
        await db.commit()
        return notification

    def notify_many(self, db: AsyncSession, user_ids: List[str], title: str, description: str, link: Optional[str] = None) -> List[AppNotification]:
        """Fan-out helper: one notification per user, staged on the caller's session."""
        return [self.build(db, uid, title, description, link=link) for uid in dict.fromkeys(user_ids)]


notifications_service = NotificationsService()
