from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

import pytest

from app.db.repo.debates_repo import DebatesRepo
from app.workers.celery_app import celery_app
from app.workers.tasks import appeals, appeals_async
from tests.session_fixtures import NOW_UTC, FakeSessionFactory


def test_run_stale_appeal_retry_task_wrapper(monkeypatch) -> None:
    async def fake_async(*, batch_size: int, stale_minutes: int) -> dict[str, int]:
        return {"stale_total": batch_size, "enqueued_total": stale_minutes, "enqueue_failed_total": 0}

    monkeypatch.setattr(appeals, "run_stale_appeal_retry_async", fake_async)

    result = appeals.run_stale_appeal_retry(batch_size=3, stale_minutes=20)
    assert result["stale_total"] == 3
    assert result["enqueued_total"] == 20


def test_stale_appeal_retry_is_scheduled() -> None:
    entry = celery_app.conf.beat_schedule["debate-appeals-stale-retry"]

    assert entry["task"] == "app.workers.tasks.appeals.run_stale_appeal_retry"
    assert entry["schedule"] >= 60


@pytest.mark.asyncio
async def test_stale_appeal_retry_reenqueues_with_retry_trigger(monkeypatch) -> None:
    stale_ids = [uuid4(), uuid4(), uuid4()]
    captured: dict[str, object] = {}
    enqueued: list[tuple[str, str]] = []

    async def fake_stale_ids(session, *, appealed_before_utc, limit):
        del session
        captured["appealed_before_utc"] = appealed_before_utc
        captured["limit"] = limit
        return stale_ids

    def fake_enqueue(*, debate_id: str, trigger: str) -> bool:
        enqueued.append((debate_id, trigger))
        return debate_id != str(stale_ids[1])

    monkeypatch.setattr(DebatesRepo, "list_stale_pending_appeal_ids", fake_stale_ids)
    monkeypatch.setattr(appeals_async, "enqueue_verdict_generation", fake_enqueue)

    result = await appeals_async.run_stale_appeal_retry_async(
        batch_size=50,
        stale_minutes=15,
        session_factory=FakeSessionFactory(),
        clock=lambda: NOW_UTC,
    )

    assert captured == {"appealed_before_utc": NOW_UTC - timedelta(minutes=15), "limit": 50}
    assert [trigger for _, trigger in enqueued] == ["APPEAL_RETRY"] * 3
    assert result == {"stale_total": 3, "enqueued_total": 2, "enqueue_failed_total": 1}
