from __future__ import annotations

from uuid import UUID

import httpx
import structlog

from app.services.verdict_generator import build_verdict_client, request_verdict
from app.workers.tasks.verdicts_config import (
    VERDICT_GENERATOR_TOKEN,
    VERDICT_GENERATOR_URL,
    VERDICT_TIMEOUT_SECONDS,
)

logger = structlog.get_logger("app.workers.tasks.verdicts")


async def request_debate_verdict_async(
    *,
    debate_id: str,
    trigger: str,
    client: httpx.AsyncClient | None = None,
) -> dict[str, object]:
    parsed_debate_id = UUID(debate_id)
    resolved_client = client or build_verdict_client(timeout_seconds=VERDICT_TIMEOUT_SECONDS)
    try:
        await request_verdict(
            client=resolved_client,
            url=VERDICT_GENERATOR_URL,
            token=VERDICT_GENERATOR_TOKEN,
            debate_id=parsed_debate_id,
            trigger=trigger,
        )
    finally:
        if client is None:
            await resolved_client.aclose()

    logger.info("verdict_generation_requested", debate_id=debate_id, trigger=trigger)
    return {"debate_id": debate_id, "trigger": trigger, "requested": True}
