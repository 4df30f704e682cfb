from __future__ import annotations

from app.workers.asyncio_runner import run_async_job
from app.workers.celery_app import celery_app
from app.workers.tasks.debate_rounds_async import (
    run_debate_round_sweep_async as _run_debate_round_sweep_async,
)
from app.workers.tasks.debate_rounds_config import SWEEP_BATCH_SIZE
from app.workers.tasks.debate_rounds_schedule import configure_debate_rounds_schedule

run_debate_round_sweep_async = _run_debate_round_sweep_async

__all__ = ["run_debate_round_sweep", "run_debate_round_sweep_async"]


@celery_app.task(name="app.workers.tasks.debate_rounds.run_debate_round_sweep")
def run_debate_round_sweep(batch_size: int = SWEEP_BATCH_SIZE) -> dict[str, object]:
    return run_async_job(run_debate_round_sweep_async(batch_size=batch_size))


configure_debate_rounds_schedule(celery_app)
