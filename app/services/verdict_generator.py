from __future__ import annotations

from uuid import UUID

import httpx
import structlog

from app.core.errors import TransientError

logger = structlog.get_logger("app.services.verdict_generator")


class VerdictGeneratorUnavailableError(TransientError):
    pass


async def request_verdict(
    *,
    client: httpx.AsyncClient,
    url: str,
    token: str,
    debate_id: UUID,
    trigger: str,
) -> None:
    try:
        response = await client.post(
            url,
            json={"debate_id": str(debate_id), "trigger": trigger},
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning(
            "verdict_generator_request_failed",
            debate_id=str(debate_id),
            trigger=trigger,
            error_type=type(exc).__name__,
        )
        raise VerdictGeneratorUnavailableError(str(exc)) from exc


def build_verdict_client(*, timeout_seconds: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))
