from __future__ import annotations

from app.workers.asyncio_runner import run_async_job
from app.workers.celery_app import celery_app
from app.workers.tasks.appeals_async import run_stale_appeal_retry_async as _run_stale_appeal_retry_async
from app.workers.tasks.appeals_config import SCAN_BATCH_SIZE, STALE_APPEAL_MINUTES
from app.workers.tasks.appeals_schedule import configure_appeals_schedule

run_stale_appeal_retry_async = _run_stale_appeal_retry_async

__all__ = ["run_stale_appeal_retry", "run_stale_appeal_retry_async"]


@celery_app.task(name="app.workers.tasks.appeals.run_stale_appeal_retry")
def run_stale_appeal_retry(
    batch_size: int = SCAN_BATCH_SIZE,
    stale_minutes: int = STALE_APPEAL_MINUTES,
) -> dict[str, int]:
    return run_async_job(
        run_stale_appeal_retry_async(
            batch_size=batch_size,
            stale_minutes=stale_minutes,
        )
    )


configure_appeals_schedule(celery_app)
