from __future__ import annotations

import random

import structlog
from celery import Task

from app.core.errors import TransientError
from app.workers.asyncio_runner import run_async_job
from app.workers.celery_app import celery_app
from app.workers.tasks.verdicts_async import (
    request_debate_verdict_async as _request_debate_verdict_async,
)
from app.workers.tasks.verdicts_config import TASK_MAX_RETRIES, TASK_RETRY_BACKOFF_MAX_SECONDS

request_debate_verdict_async = _request_debate_verdict_async

logger = structlog.get_logger("app.workers.tasks.verdicts")
RETRY_JITTER_RATIO = 0.25

__all__ = [
    "enqueue_verdict_generation",
    "generate_debate_verdict",
    "request_debate_verdict_async",
]


def _retry_backoff_seconds(
    *,
    next_retry_attempt: int,
    backoff_max_seconds: int,
) -> int:
    safe_retry_attempt = max(1, int(next_retry_attempt))
    safe_backoff_max_seconds = max(1, int(backoff_max_seconds))

    base_delay = min(safe_backoff_max_seconds, 2 ** (safe_retry_attempt - 1))
    max_jitter = max(0, int(base_delay * RETRY_JITTER_RATIO))
    jitter = random.randint(0, max_jitter) if max_jitter > 0 else 0
    return min(safe_backoff_max_seconds, base_delay + jitter)


@celery_app.task(
    name="app.workers.tasks.verdicts.generate_debate_verdict",
    bind=True,
    max_retries=TASK_MAX_RETRIES,
    acks_late=True,
    reject_on_worker_lost=True,
)
def generate_debate_verdict(self: Task, debate_id: str, trigger: str) -> dict[str, object]:
    try:
        return run_async_job(request_debate_verdict_async(debate_id=debate_id, trigger=trigger))
    except TransientError as exc:
        current_retries = max(0, int(getattr(self.request, "retries", 0)))
        if current_retries >= TASK_MAX_RETRIES:
            logger.exception(
                "verdict_generation_failed",
                debate_id=debate_id,
                trigger=trigger,
                retries=current_retries,
                max_retries=TASK_MAX_RETRIES,
            )
            raise

        next_retry_attempt = current_retries + 1
        retry_in_seconds = _retry_backoff_seconds(
            next_retry_attempt=next_retry_attempt,
            backoff_max_seconds=TASK_RETRY_BACKOFF_MAX_SECONDS,
        )
        logger.warning(
            "verdict_generation_retry_scheduled",
            debate_id=debate_id,
            trigger=trigger,
            retry_attempt=next_retry_attempt,
            retry_in_seconds=retry_in_seconds,
            max_retries=TASK_MAX_RETRIES,
        )
        raise self.retry(
            exc=exc,
            countdown=retry_in_seconds,
            max_retries=TASK_MAX_RETRIES,
        )


def enqueue_verdict_generation(*, debate_id: str, trigger: str) -> bool:
    try:
        generate_debate_verdict.delay(debate_id=debate_id, trigger=trigger)
    except Exception as exc:
        logger.warning(
            "verdict_generation_enqueue_failed",
            debate_id=debate_id,
            trigger=trigger,
            error_type=type(exc).__name__,
        )
        return False
    return True
