from __future__ import annotations

from app.workers.tasks.appeals_config import SCAN_INTERVAL_SECONDS


def configure_appeals_schedule(celery_app) -> None:
    celery_app.conf.beat_schedule = celery_app.conf.beat_schedule or {}
    celery_app.conf.beat_schedule.update(
        {
            "debate-appeals-stale-retry": {
                "task": "app.workers.tasks.appeals.run_stale_appeal_retry",
                "schedule": float(SCAN_INTERVAL_SECONDS),
                "options": {"queue": "q_normal"},
            }
        }
    )
