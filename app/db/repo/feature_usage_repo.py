from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.feature_usage_events import FeatureUsageEvent


class FeatureUsageRepo:
    @staticmethod
    async def create(session: AsyncSession, *, event: FeatureUsageEvent) -> FeatureUsageEvent:
        session.add(event)
        await session.flush()
        return event
