from __future__ import annotations

from app.workers.tasks.debate_rounds_config import SWEEP_INTERVAL_SECONDS


def configure_debate_rounds_schedule(celery_app) -> None:
    celery_app.conf.beat_schedule = celery_app.conf.beat_schedule or {}
    celery_app.conf.beat_schedule.update(
        {
            "debate-rounds-deadline-sweep": {
                "task": "app.workers.tasks.debate_rounds.run_debate_round_sweep",
                "schedule": float(SWEEP_INTERVAL_SECONDS),
                "options": {"queue": "q_normal"},
            }
        }
    )
