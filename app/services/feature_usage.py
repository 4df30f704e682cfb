from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.feature_usage_events import FeatureUsageEvent
from app.db.repo.feature_usage_repo import FeatureUsageRepo


class FeatureUsageService:
    @staticmethod
    async def record_usage(
        session: AsyncSession,
        *,
        user_id: int,
        feature_key: str,
        now_utc: datetime,
        reference_id: str | None = None,
    ) -> None:
        await FeatureUsageRepo.create(
            session,
            event=FeatureUsageEvent(
                user_id=int(user_id),
                feature_key=feature_key,
                reference_id=reference_id,
                created_at=now_utc,
            ),
        )
