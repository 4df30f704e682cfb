from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from app.db.repo.debate_verdicts_repo import DebateVerdictsRepo
from app.db.repo.debates_repo import DebatesRepo
from app.game.debates import verdicts
from app.game.debates.appeals import apply_appeal, validate_appeal
from app.game.debates.errors import (
    AppealAlreadySubmittedError,
    DebateInvalidStateError,
    VerdictValidationError,
)
from app.game.debates.types import JudgeVerdictInput
from app.services.notifications import NotificationService
from tests.game.debate_fixtures import CHALLENGER_ID, OPPONENT_ID, VALID_REASON, _debate
from tests.session_fixtures import NOW_UTC, FakeSession


def _judges(*scores: tuple[str, str]) -> list[JudgeVerdictInput]:
    return [
        JudgeVerdictInput(
            judge_key=f"judge-{index}",
            winner_id=CHALLENGER_ID,
            challenger_score=Decimal(challenger),
            opponent_score=Decimal(opponent),
        )
        for index, (challenger, opponent) in enumerate(scores, start=1)
    ]


def _patch_verdict_collaborators(monkeypatch, *, debate) -> dict[str, list]:
    captured: dict[str, list] = {"verdicts": [], "notifications": [], "matches": []}

    async def fake_get_for_update(session, debate_id, *, skip_locked: bool = False):
        del session, debate_id, skip_locked
        return debate

    async def fake_create_many(session, *, verdicts):
        del session
        captured["verdicts"].extend(verdicts)

    async def fake_notify(session, **kwargs):
        del session
        captured["notifications"].append(kwargs)

    async def fake_resolve_match(session, *, debate, now_utc, challenger_score, opponent_score):
        del session, now_utc
        captured["matches"].append((debate.id, challenger_score, opponent_score))
        return None

    monkeypatch.setattr(DebatesRepo, "get_by_id_for_update", fake_get_for_update)
    monkeypatch.setattr(DebateVerdictsRepo, "create_many", fake_create_many)
    monkeypatch.setattr(NotificationService, "notify", fake_notify)
    monkeypatch.setattr(verdicts, "resolve_match_for_debate", fake_resolve_match)
    return captured


def test_average_judge_scores_rounds_half_up() -> None:
    assert verdicts.average_judge_scores(_judges(("70", "60"), ("71", "65"))) == (
        Decimal("70.50"),
        Decimal("62.50"),
    )
    assert verdicts.average_judge_scores([]) == (Decimal("0"), Decimal("0"))


@pytest.mark.asyncio
async def test_record_verdict_resolves_pending_appeal_and_keeps_single_appeal(monkeypatch) -> None:
    debate = _debate(status="VERDICT_READY", current_round=3, winner_id=OPPONENT_ID, verdict_date=NOW_UTC)
    apply_appeal(
        debate,
        requester_id=CHALLENGER_ID,
        reason=VALID_REASON,
        verdict_ids=[uuid4()],
        now_utc=NOW_UTC,
    )
    captured = _patch_verdict_collaborators(monkeypatch, debate=debate)

    result = await verdicts.record_debate_verdict(
        FakeSession(),
        debate_id=debate.id,
        winner_id=CHALLENGER_ID,
        judge_verdicts=_judges(("80", "70"), ("78", "72")),
        now_utc=NOW_UTC,
    )

    assert result.appeal_resolved is True
    assert result.tournament_id is None
    assert debate.status == "VERDICT_READY"
    assert debate.appeal_status == "RESOLVED"
    assert debate.appeal_count == 1
    assert debate.winner_id == CHALLENGER_ID
    assert debate.original_winner_id == OPPONENT_ID
    assert len(captured["verdicts"]) == 2
    assert {item["title"] for item in captured["notifications"]} == {"Appeal Resolved"}
    assert captured["matches"] == [(debate.id, Decimal("79.00"), Decimal("71.00"))]

    verdict_id = uuid4()
    with pytest.raises(AppealAlreadySubmittedError):
        validate_appeal(
            debate,
            requester_id=OPPONENT_ID,
            verdict_ids=[verdict_id],
            known_verdict_ids={verdict_id},
            now_utc=NOW_UTC,
        )


@pytest.mark.asyncio
async def test_record_verdict_after_completion_notifies_both_sides(monkeypatch) -> None:
    debate = _debate(status="COMPLETED", current_round=3)
    captured = _patch_verdict_collaborators(monkeypatch, debate=debate)

    result = await verdicts.record_debate_verdict(
        FakeSession(),
        debate_id=debate.id,
        winner_id=OPPONENT_ID,
        judge_verdicts=_judges(("60", "75")),
        now_utc=NOW_UTC,
    )

    assert result.appeal_resolved is False
    assert debate.appeal_count == 0
    assert debate.verdict_reached is True
    assert debate.verdict_date == NOW_UTC
    assert [item["user_id"] for item in captured["notifications"]] == [CHALLENGER_ID, OPPONENT_ID]
    assert {item["title"] for item in captured["notifications"]} == {"Verdict Ready"}


@pytest.mark.asyncio
async def test_record_verdict_rejects_active_debate(monkeypatch) -> None:
    debate = _debate(status="ACTIVE")
    _patch_verdict_collaborators(monkeypatch, debate=debate)

    with pytest.raises(DebateInvalidStateError):
        await verdicts.record_debate_verdict(
            FakeSession(),
            debate_id=debate.id,
            winner_id=CHALLENGER_ID,
            judge_verdicts=_judges(("60", "75")),
            now_utc=NOW_UTC,
        )


@pytest.mark.asyncio
async def test_record_verdict_rejects_outside_winner(monkeypatch) -> None:
    debate = _debate(status="COMPLETED", current_round=3)
    _patch_verdict_collaborators(monkeypatch, debate=debate)

    with pytest.raises(VerdictValidationError):
        await verdicts.record_debate_verdict(
            FakeSession(),
            debate_id=debate.id,
            winner_id=999,
            judge_verdicts=_judges(("60", "75")),
            now_utc=NOW_UTC,
        )
