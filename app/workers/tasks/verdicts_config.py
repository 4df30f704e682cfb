from __future__ import annotations

from app.core.config import get_settings

settings = get_settings()

VERDICT_GENERATOR_URL = str(settings.verdict_generator_url)
VERDICT_GENERATOR_TOKEN = str(settings.verdict_generator_token)
VERDICT_TIMEOUT_SECONDS = max(1, min(120, int(settings.verdict_generator_timeout_seconds)))
TASK_MAX_RETRIES = max(0, int(settings.verdict_task_max_retries))
TASK_RETRY_BACKOFF_MAX_SECONDS = max(1, int(settings.verdict_task_retry_backoff_max_seconds))

__all__ = [
    "VERDICT_GENERATOR_URL",
    "VERDICT_GENERATOR_TOKEN",
    "VERDICT_TIMEOUT_SECONDS",
    "TASK_MAX_RETRIES",
    "TASK_RETRY_BACKOFF_MAX_SECONDS",
]
