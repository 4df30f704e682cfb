from __future__ import annotations

from app.workers.tasks.tournaments_config import SWEEP_INTERVAL_SECONDS


def configure_tournaments_schedule(celery_app) -> None:
    celery_app.conf.beat_schedule = celery_app.conf.beat_schedule or {}
    celery_app.conf.beat_schedule.update(
        {
            "tournaments-auto-start": {
                "task": "app.workers.tasks.tournaments.run_tournament_auto_start",
                "schedule": float(SWEEP_INTERVAL_SECONDS),
                "options": {"queue": "q_normal"},
            },
            "tournaments-progression": {
                "task": "app.workers.tasks.tournaments.run_tournament_progression",
                "schedule": float(SWEEP_INTERVAL_SECONDS),
                "options": {"queue": "q_normal"},
            },
            "tournaments-prize-settlement": {
                "task": "app.workers.tasks.tournaments.run_tournament_prize_settlement",
                "schedule": float(SWEEP_INTERVAL_SECONDS),
                "options": {"queue": "q_normal"},
            },
        }
    )
