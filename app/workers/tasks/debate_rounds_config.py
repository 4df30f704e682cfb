from __future__ import annotations

from app.core.config import get_settings

settings = get_settings()


def _clamp_batch_size(value: int) -> int:
    return max(1, min(1000, int(value)))


SWEEP_BATCH_SIZE = _clamp_batch_size(settings.debate_round_sweep_batch_size)
SWEEP_INTERVAL_SECONDS = max(10, int(settings.debate_round_sweep_interval_seconds))

__all__ = ["SWEEP_BATCH_SIZE", "SWEEP_INTERVAL_SECONDS"]
