from __future__ import annotations

from app.core.config import get_settings

settings = get_settings()

SWEEP_BATCH_SIZE = max(1, min(500, int(settings.tournament_sweep_batch_size)))
SWEEP_INTERVAL_SECONDS = max(60, int(settings.tournament_sweep_interval_seconds))

__all__ = ["SWEEP_BATCH_SIZE", "SWEEP_INTERVAL_SECONDS"]
