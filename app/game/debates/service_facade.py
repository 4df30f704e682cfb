from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.clock import utc_now
from app.db.session import SessionLocal
from app.game.debates.constants import VERDICT_TRIGGER_APPEAL, VERDICT_TRIGGER_ROUND_COMPLETED
from app.game.debates.service import check_debate_round, record_debate_verdict, submit_appeal
from app.game.debates.types import (
    AppealSubmitResult,
    DebateRoundStatus,
    JudgeVerdictInput,
    VerdictRecordResult,
)
from app.game.tournaments.progression import progress_tournament

logger = structlog.get_logger("app.game.debates.service_facade")


def _enqueue_verdict(*, debate_id: UUID, trigger: str) -> bool:
    from app.workers.tasks.verdicts import enqueue_verdict_generation

    return enqueue_verdict_generation(debate_id=str(debate_id), trigger=trigger)


class DebateServiceFacade:
    """Owns the unit of work for debate operations and fires follow-up jobs after commit."""

    @staticmethod
    async def submit_appeal(
        *,
        debate_id: UUID,
        requester_id: int,
        reason: str | None,
        verdict_ids: Sequence[UUID | str] | None,
        now_utc: datetime | None = None,
        session_factory: async_sessionmaker[AsyncSession] = SessionLocal,
    ) -> AppealSubmitResult:
        async with session_factory.begin() as session:
            result = await submit_appeal(
                session,
                debate_id=debate_id,
                requester_id=requester_id,
                reason=reason,
                verdict_ids=verdict_ids,
                now_utc=now_utc or utc_now(),
            )
        result.verdict_enqueued = _enqueue_verdict(
            debate_id=debate_id,
            trigger=VERDICT_TRIGGER_APPEAL,
        )
        return result

    @staticmethod
    async def check_debate_round(
        *,
        debate_id: UUID,
        now_utc: datetime | None = None,
        session_factory: async_sessionmaker[AsyncSession] = SessionLocal,
    ) -> DebateRoundStatus:
        async with session_factory.begin() as session:
            status = await check_debate_round(
                session,
                debate_id=debate_id,
                now_utc=now_utc or utc_now(),
            )
        if status.verdict_required:
            _enqueue_verdict(debate_id=debate_id, trigger=VERDICT_TRIGGER_ROUND_COMPLETED)
        return status

    @staticmethod
    async def record_verdict(
        *,
        debate_id: UUID,
        winner_id: int | None,
        judge_verdicts: Sequence[JudgeVerdictInput],
        now_utc: datetime | None = None,
        session_factory: async_sessionmaker[AsyncSession] = SessionLocal,
    ) -> VerdictRecordResult:
        resolved_now = now_utc or utc_now()
        async with session_factory.begin() as session:
            result = await record_debate_verdict(
                session,
                debate_id=debate_id,
                winner_id=winner_id,
                judge_verdicts=judge_verdicts,
                now_utc=resolved_now,
            )

        if result.tournament_id is not None:
            try:
                await progress_tournament(
                    session_factory=session_factory,
                    tournament_id=result.tournament_id,
                    now_utc=resolved_now,
                )
            except Exception as exc:
                logger.warning(
                    "tournament_progression_after_verdict_failed",
                    debate_id=str(debate_id),
                    tournament_id=str(result.tournament_id),
                    error_type=type(exc).__name__,
                )
        return result
