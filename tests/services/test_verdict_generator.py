from __future__ import annotations

import json
from uuid import uuid4

import httpx
import pytest

from app.core.errors import TransientError
from app.services.verdict_generator import VerdictGeneratorUnavailableError, request_verdict


@pytest.mark.asyncio
async def test_request_verdict_posts_debate_with_bearer_token() -> None:
    captured: dict[str, object] = {}
    debate_id = uuid4()

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["authorization"] = request.headers.get("Authorization")
        captured["body"] = json.loads(request.content)
        return httpx.Response(202, json={"queued": True})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        await request_verdict(
            client=client,
            url="http://verdicts.local/api/internal/verdicts",
            token="secret-token",
            debate_id=debate_id,
            trigger="ROUND_COMPLETED",
        )

    assert captured["url"] == "http://verdicts.local/api/internal/verdicts"
    assert captured["authorization"] == "Bearer secret-token"
    assert captured["body"] == {"debate_id": str(debate_id), "trigger": "ROUND_COMPLETED"}


@pytest.mark.asyncio
async def test_request_verdict_server_error_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        del request
        return httpx.Response(503, json={"error": "busy"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(VerdictGeneratorUnavailableError) as exc_info:
            await request_verdict(
                client=client,
                url="http://verdicts.local/api/internal/verdicts",
                token="secret-token",
                debate_id=uuid4(),
                trigger="APPEAL",
            )

    assert isinstance(exc_info.value, TransientError)


@pytest.mark.asyncio
async def test_request_verdict_connection_error_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(VerdictGeneratorUnavailableError):
            await request_verdict(
                client=client,
                url="http://verdicts.local/api/internal/verdicts",
                token="secret-token",
                debate_id=uuid4(),
                trigger="APPEAL_RETRY",
            )
