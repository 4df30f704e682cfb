from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.clock import utc_now
from app.db.repo.debates_repo import DebatesRepo
from app.db.session import SessionLocal
from app.game.debates.constants import (
    ROUND_OUTCOME_ADVANCED,
    ROUND_OUTCOME_COMPLETED,
    VERDICT_TRIGGER_ROUND_COMPLETED,
)
from app.game.debates.lifecycle import advance_debate_round
from app.workers.tasks.debate_rounds_config import SWEEP_BATCH_SIZE
from app.workers.tasks.verdicts import enqueue_verdict_generation

logger = structlog.get_logger("app.workers.tasks.debate_rounds")

OUTCOME_FAILED = "FAILED"


async def run_debate_round_sweep_async(
    *,
    batch_size: int = SWEEP_BATCH_SIZE,
    session_factory: async_sessionmaker[AsyncSession] = SessionLocal,
    clock: Callable[[], datetime] = utc_now,
) -> dict[str, object]:
    now_utc = clock()
    resolved_batch_size = max(1, int(batch_size))

    async with session_factory.begin() as session:
        due_ids = await DebatesRepo.list_due_round_deadline_ids(
            session,
            now_utc=now_utc,
            limit=resolved_batch_size,
        )

    advanced_total = 0
    completed_total = 0
    force_completed_total = 0
    noop_total = 0
    failed_total = 0
    verdicts_enqueued_total = 0
    debates: list[dict[str, object]] = []

    for debate_id in due_ids:
        try:
            async with session_factory.begin() as session:
                result = await advance_debate_round(session, debate_id=debate_id, now_utc=now_utc)
        except Exception as exc:
            failed_total += 1
            logger.exception(
                "debate_round_advance_failed",
                debate_id=str(debate_id),
                error_type=type(exc).__name__,
            )
            debates.append(
                {
                    "debate_id": str(debate_id),
                    "outcome": OUTCOME_FAILED,
                    "reason": type(exc).__name__,
                    "current_round": None,
                }
            )
            continue

        if result.outcome == ROUND_OUTCOME_ADVANCED:
            advanced_total += 1
        elif result.outcome == ROUND_OUTCOME_COMPLETED:
            completed_total += 1
            if result.force_completed:
                force_completed_total += 1
        else:
            noop_total += 1
        debates.append(result.as_payload())

        if result.verdict_required and enqueue_verdict_generation(
            debate_id=str(debate_id),
            trigger=VERDICT_TRIGGER_ROUND_COMPLETED,
        ):
            verdicts_enqueued_total += 1

    counters = {
        "batch_size": resolved_batch_size,
        "processed_total": len(due_ids),
        "advanced_total": advanced_total,
        "completed_total": completed_total,
        "force_completed_total": force_completed_total,
        "noop_total": noop_total,
        "failed_total": failed_total,
        "verdicts_enqueued_total": verdicts_enqueued_total,
    }
    logger.info("debate_round_sweep_processed", **counters)
    return {**counters, "debates": debates}
