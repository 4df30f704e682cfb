from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.notifications import Notification


class NotificationsRepo:
    @staticmethod
    async def create(session: AsyncSession, *, notification: Notification) -> Notification:
        session.add(notification)
        await session.flush()
        return notification
