from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.clock import utc_now
from app.db.repo.debates_repo import DebatesRepo
from app.db.session import SessionLocal
from app.game.debates.constants import VERDICT_TRIGGER_APPEAL_RETRY
from app.workers.tasks.appeals_config import SCAN_BATCH_SIZE, STALE_APPEAL_MINUTES
from app.workers.tasks.verdicts import enqueue_verdict_generation

logger = structlog.get_logger("app.workers.tasks.appeals")


async def run_stale_appeal_retry_async(
    *,
    batch_size: int = SCAN_BATCH_SIZE,
    stale_minutes: int = STALE_APPEAL_MINUTES,
    session_factory: async_sessionmaker[AsyncSession] = SessionLocal,
    clock: Callable[[], datetime] = utc_now,
) -> dict[str, int]:
    now_utc = clock()
    appealed_before_utc = now_utc - timedelta(minutes=max(1, int(stale_minutes)))

    async with session_factory.begin() as session:
        stale_ids = await DebatesRepo.list_stale_pending_appeal_ids(
            session,
            appealed_before_utc=appealed_before_utc,
            limit=max(1, int(batch_size)),
        )

    enqueued_total = 0
    for debate_id in stale_ids:
        if enqueue_verdict_generation(debate_id=str(debate_id), trigger=VERDICT_TRIGGER_APPEAL_RETRY):
            enqueued_total += 1

    result = {
        "stale_total": len(stale_ids),
        "enqueued_total": enqueued_total,
        "enqueue_failed_total": len(stale_ids) - enqueued_total,
    }
    logger.info("appeal_retry_sweep_processed", **result)
    return result
