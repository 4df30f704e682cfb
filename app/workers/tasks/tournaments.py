from __future__ import annotations

from app.workers.asyncio_runner import run_async_job
from app.workers.celery_app import celery_app
from app.workers.tasks.tournaments_async import (
    run_tournament_auto_start_async as _run_tournament_auto_start_async,
)
from app.workers.tasks.tournaments_async import (
    run_tournament_prize_distribution_async as _run_tournament_prize_distribution_async,
)
from app.workers.tasks.tournaments_async import (
    run_tournament_prize_settlement_async as _run_tournament_prize_settlement_async,
)
from app.workers.tasks.tournaments_async import (
    run_tournament_progression_async as _run_tournament_progression_async,
)
from app.workers.tasks.tournaments_config import SWEEP_BATCH_SIZE
from app.workers.tasks.tournaments_schedule import configure_tournaments_schedule

run_tournament_auto_start_async = _run_tournament_auto_start_async
run_tournament_progression_async = _run_tournament_progression_async
run_tournament_prize_distribution_async = _run_tournament_prize_distribution_async
run_tournament_prize_settlement_async = _run_tournament_prize_settlement_async

__all__ = [
    "run_tournament_auto_start",
    "run_tournament_auto_start_async",
    "run_tournament_prize_distribution",
    "run_tournament_prize_distribution_async",
    "run_tournament_prize_settlement",
    "run_tournament_prize_settlement_async",
    "run_tournament_progression",
    "run_tournament_progression_async",
]


@celery_app.task(name="app.workers.tasks.tournaments.run_tournament_auto_start")
def run_tournament_auto_start(batch_size: int = SWEEP_BATCH_SIZE) -> dict[str, int]:
    return run_async_job(run_tournament_auto_start_async(batch_size=batch_size))


@celery_app.task(name="app.workers.tasks.tournaments.run_tournament_progression")
def run_tournament_progression(batch_size: int = SWEEP_BATCH_SIZE) -> dict[str, int]:
    return run_async_job(run_tournament_progression_async(batch_size=batch_size))


@celery_app.task(name="app.workers.tasks.tournaments.run_tournament_prize_distribution")
def run_tournament_prize_distribution(tournament_id: str) -> dict[str, object]:
    return run_async_job(run_tournament_prize_distribution_async(tournament_id=tournament_id))


@celery_app.task(name="app.workers.tasks.tournaments.run_tournament_prize_settlement")
def run_tournament_prize_settlement(batch_size: int = SWEEP_BATCH_SIZE) -> dict[str, int]:
    return run_async_job(run_tournament_prize_settlement_async(batch_size=batch_size))


configure_tournaments_schedule(celery_app)
