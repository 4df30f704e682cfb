from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.notifications import Notification
from app.db.repo.notifications_repo import NotificationsRepo


class NotificationService:
    @staticmethod
    async def notify(
        session: AsyncSession,
        *,
        user_id: int,
        notification_type: str,
        title: str,
        message: str,
        now_utc: datetime,
        debate_id: UUID | None = None,
        tournament_id: UUID | None = None,
    ) -> Notification:
        return await NotificationsRepo.create(
            session,
            notification=Notification(
                user_id=int(user_id),
                type=notification_type,
                title=title,
                message=message,
                debate_id=debate_id,
                tournament_id=tournament_id,
                created_at=now_utc,
            ),
        )
