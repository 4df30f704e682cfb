from __future__ import annotations

from app.core.config import get_settings

settings = get_settings()

STALE_APPEAL_MINUTES = max(1, int(settings.appeal_retry_stale_minutes))
SCAN_INTERVAL_SECONDS = max(60, int(settings.appeal_retry_scan_interval_seconds))
SCAN_BATCH_SIZE = max(1, min(1000, int(settings.appeal_retry_batch_size)))

__all__ = ["STALE_APPEAL_MINUTES", "SCAN_INTERVAL_SECONDS", "SCAN_BATCH_SIZE"]
