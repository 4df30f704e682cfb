from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.clock import utc_now
from app.db.repo.tournaments_repo import TournamentsRepo
from app.db.session import SessionLocal
from app.economy.prizes.service import PrizeService
from app.game.tournaments.constants import (
    ADVANCE_OUTCOME_ADVANCED,
    ADVANCE_OUTCOME_COMPLETED,
    MIN_PARTICIPANTS_TO_START,
)
from app.game.tournaments.errors import TournamentError
from app.game.tournaments.progression import progress_tournament
from app.game.tournaments.start import start_tournament
from app.workers.tasks.tournaments_config import SWEEP_BATCH_SIZE

logger = structlog.get_logger("app.workers.tasks.tournaments")


async def run_tournament_auto_start_async(
    *,
    batch_size: int = SWEEP_BATCH_SIZE,
    session_factory: async_sessionmaker[AsyncSession] = SessionLocal,
    clock: Callable[[], datetime] = utc_now,
) -> dict[str, int]:
    now_utc = clock()
    async with session_factory.begin() as session:
        candidate_ids = await TournamentsRepo.list_auto_start_candidate_ids(
            session,
            now_utc=now_utc,
            min_participants=MIN_PARTICIPANTS_TO_START,
            limit=max(1, int(batch_size)),
        )

    started_total = 0
    skipped_total = 0
    failed_total = 0
    for tournament_id in candidate_ids:
        try:
            async with session_factory.begin() as session:
                await start_tournament(session, tournament_id=tournament_id, now_utc=now_utc)
        except TournamentError as exc:
            skipped_total += 1
            logger.info(
                "tournament_auto_start_skipped",
                tournament_id=str(tournament_id),
                error_type=type(exc).__name__,
            )
            continue
        except Exception as exc:
            failed_total += 1
            logger.exception(
                "tournament_auto_start_failed",
                tournament_id=str(tournament_id),
                error_type=type(exc).__name__,
            )
            continue
        started_total += 1

    result = {
        "candidates_total": len(candidate_ids),
        "started_total": started_total,
        "skipped_total": skipped_total,
        "failed_total": failed_total,
    }
    logger.info("tournament_auto_start_processed", **result)
    return result


async def run_tournament_progression_async(
    *,
    batch_size: int = SWEEP_BATCH_SIZE,
    session_factory: async_sessionmaker[AsyncSession] = SessionLocal,
    clock: Callable[[], datetime] = utc_now,
) -> dict[str, int]:
    now_utc = clock()
    async with session_factory.begin() as session:
        tournament_ids = await TournamentsRepo.list_in_progress_ids(
            session,
            limit=max(1, int(batch_size)),
        )

    advanced_total = 0
    completed_total = 0
    waiting_total = 0
    failed_total = 0
    for tournament_id in tournament_ids:
        try:
            payload = await progress_tournament(
                session_factory=session_factory,
                tournament_id=tournament_id,
                now_utc=now_utc,
            )
        except Exception as exc:
            failed_total += 1
            logger.exception(
                "tournament_progression_failed",
                tournament_id=str(tournament_id),
                error_type=type(exc).__name__,
            )
            continue

        outcome = payload.get("outcome")
        if outcome == ADVANCE_OUTCOME_ADVANCED:
            advanced_total += 1
        elif outcome == ADVANCE_OUTCOME_COMPLETED:
            completed_total += 1
        else:
            waiting_total += 1

    result = {
        "in_progress_total": len(tournament_ids),
        "advanced_total": advanced_total,
        "completed_total": completed_total,
        "waiting_total": waiting_total,
        "failed_total": failed_total,
    }
    logger.info("tournament_progression_processed", **result)
    return result


async def run_tournament_prize_distribution_async(
    *,
    tournament_id: str,
    session_factory: async_sessionmaker[AsyncSession] = SessionLocal,
    clock: Callable[[], datetime] = utc_now,
) -> dict[str, object]:
    return await PrizeService.distribute_tournament_prizes(
        session_factory=session_factory,
        tournament_id=UUID(tournament_id),
        now_utc=clock(),
    )


async def run_tournament_prize_settlement_async(
    *,
    batch_size: int = SWEEP_BATCH_SIZE,
    session_factory: async_sessionmaker[AsyncSession] = SessionLocal,
    clock: Callable[[], datetime] = utc_now,
) -> dict[str, int]:
    now_utc = clock()
    async with session_factory.begin() as session:
        tournament_ids = await TournamentsRepo.list_prize_settlement_candidate_ids(
            session,
            limit=max(1, int(batch_size)),
        )

    settled_total = 0
    pending_total = 0
    failed_total = 0
    for tournament_id in tournament_ids:
        try:
            payload = await PrizeService.distribute_tournament_prizes(
                session_factory=session_factory,
                tournament_id=tournament_id,
                now_utc=now_utc,
            )
        except Exception as exc:
            failed_total += 1
            logger.exception(
                "tournament_prize_settlement_failed",
                tournament_id=str(tournament_id),
                error_type=type(exc).__name__,
            )
            continue
        if payload.get("settled"):
            settled_total += 1
        else:
            pending_total += 1

    result = {
        "candidates_total": len(tournament_ids),
        "settled_total": settled_total,
        "pending_total": pending_total,
        "failed_total": failed_total,
    }
    logger.info("tournament_prize_settlement_processed", **result)
    return result
