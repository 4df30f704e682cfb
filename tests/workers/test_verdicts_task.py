from __future__ import annotations

import json
from types import SimpleNamespace
from uuid import uuid4

import httpx
import pytest

from app.core.errors import TransientError
from app.workers.tasks import verdicts, verdicts_async
from app.workers.tasks.verdicts import _retry_backoff_seconds


def test_generate_debate_verdict_task_wrapper(monkeypatch) -> None:
    async def fake_async(*, debate_id: str, trigger: str) -> dict[str, object]:
        return {"debate_id": debate_id, "trigger": trigger, "requested": True}

    monkeypatch.setattr(verdicts, "request_debate_verdict_async", fake_async)

    result = verdicts.generate_debate_verdict(debate_id="d-1", trigger="APPEAL")
    assert result == {"debate_id": "d-1", "trigger": "APPEAL", "requested": True}


def test_generate_debate_verdict_reraises_transient_error_when_called_directly(monkeypatch) -> None:
    async def fake_async(*, debate_id: str, trigger: str) -> dict[str, object]:
        del debate_id, trigger
        raise TransientError("verdict service unavailable")

    monkeypatch.setattr(verdicts, "request_debate_verdict_async", fake_async)

    with pytest.raises(TransientError):
        verdicts.generate_debate_verdict(debate_id="d-1", trigger="ROUND_COMPLETED")


def test_generate_debate_verdict_does_not_retry_other_errors(monkeypatch) -> None:
    async def fake_async(*, debate_id: str, trigger: str) -> dict[str, object]:
        del debate_id, trigger
        raise ValueError("badly formed debate id")

    monkeypatch.setattr(verdicts, "request_debate_verdict_async", fake_async)

    with pytest.raises(ValueError):
        verdicts.generate_debate_verdict(debate_id="nope", trigger="APPEAL")


def test_enqueue_verdict_generation_reports_broker_failures(monkeypatch) -> None:
    def broken_delay(**kwargs):
        del kwargs
        raise ConnectionError("broker down")

    monkeypatch.setattr(verdicts, "generate_debate_verdict", SimpleNamespace(delay=broken_delay))

    assert verdicts.enqueue_verdict_generation(debate_id="d-1", trigger="APPEAL") is False


def test_enqueue_verdict_generation_delays_task(monkeypatch) -> None:
    delayed: list[dict[str, str]] = []
    monkeypatch.setattr(
        verdicts,
        "generate_debate_verdict",
        SimpleNamespace(delay=lambda **kwargs: delayed.append(kwargs)),
    )

    assert verdicts.enqueue_verdict_generation(debate_id="d-2", trigger="APPEAL_RETRY") is True
    assert delayed == [{"debate_id": "d-2", "trigger": "APPEAL_RETRY"}]


def test_retry_backoff_grows_and_stays_capped() -> None:
    assert _retry_backoff_seconds(next_retry_attempt=1, backoff_max_seconds=600) == 1
    assert 8 <= _retry_backoff_seconds(next_retry_attempt=4, backoff_max_seconds=600) <= 10
    assert _retry_backoff_seconds(next_retry_attempt=20, backoff_max_seconds=30) == 30
    assert _retry_backoff_seconds(next_retry_attempt=0, backoff_max_seconds=0) == 1


@pytest.mark.asyncio
async def test_request_debate_verdict_async_uses_given_client() -> None:
    bodies: list[dict[str, str]] = []
    debate_id = str(uuid4())

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(202)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await verdicts_async.request_debate_verdict_async(
            debate_id=debate_id,
            trigger="ROUND_COMPLETED",
            client=client,
        )
        assert not client.is_closed

    assert result == {"debate_id": debate_id, "trigger": "ROUND_COMPLETED", "requested": True}
    assert bodies == [{"debate_id": debate_id, "trigger": "ROUND_COMPLETED"}]
