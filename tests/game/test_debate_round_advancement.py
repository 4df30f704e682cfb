from __future__ import annotations

from datetime import timedelta
from types import SimpleNamespace
from uuid import uuid4

from app.game.debates.advancement import build_round_state, decide_round_advance
from app.game.debates.types import DebateRoundState
from tests.session_fixtures import NOW_UTC


def _state(
    *,
    status: str = "ACTIVE",
    current_round: int,
    total_rounds: int,
    deadline_offset: timedelta,
) -> DebateRoundState:
    return DebateRoundState(
        debate_id=uuid4(),
        status=status,
        current_round=current_round,
        total_rounds=total_rounds,
        round_duration=timedelta(hours=24),
        round_deadline=NOW_UTC + deadline_offset,
    )


def test_no_round_one_statement_force_completes_even_before_deadline() -> None:
    decision = decide_round_advance(
        _state(current_round=2, total_rounds=5, deadline_offset=timedelta(hours=3)),
        statement_rounds=[],
        now_utc=NOW_UTC,
    )

    assert decision.outcome == "COMPLETED"
    assert decision.reason == "no_participation"
    assert decision.force_completed is True
    assert decision.values["status"] == "COMPLETED"
    assert decision.values["round_deadline"] is None
    assert decision.values["verdict_reached"] is True
    assert decision.values["verdict_date"] == NOW_UTC
    assert decision.values["ended_at"] == NOW_UTC
    assert "winner_id" not in decision.values


def test_statements_only_in_later_rounds_still_count_as_no_participation() -> None:
    decision = decide_round_advance(
        _state(current_round=3, total_rounds=3, deadline_offset=-timedelta(minutes=1)),
        statement_rounds=[2, 3],
        now_utc=NOW_UTC,
    )

    assert decision.outcome == "COMPLETED"
    assert decision.force_completed is True


def test_future_deadline_is_noop() -> None:
    state = _state(current_round=1, total_rounds=3, deadline_offset=timedelta(minutes=5))

    first = decide_round_advance(state, statement_rounds=[1], now_utc=NOW_UTC)
    second = decide_round_advance(state, statement_rounds=[1], now_utc=NOW_UTC)

    assert first.outcome == "NOOP"
    assert first.reason == "not_due_yet"
    assert first.values == {}
    assert second == first


def test_non_active_debate_is_noop() -> None:
    decision = decide_round_advance(
        _state(
            status="COMPLETED",
            current_round=3,
            total_rounds=3,
            deadline_offset=-timedelta(hours=1),
        ),
        statement_rounds=[],
        now_utc=NOW_UTC,
    )

    assert decision.outcome == "NOOP"
    assert decision.reason == "not_active"


def test_final_round_past_deadline_completes_without_touching_round() -> None:
    decision = decide_round_advance(
        _state(current_round=3, total_rounds=3, deadline_offset=-timedelta(seconds=1)),
        statement_rounds=[1, 1, 2, 2, 3, 3],
        now_utc=NOW_UTC,
    )

    assert decision.outcome == "COMPLETED"
    assert decision.reason == "final_round_elapsed"
    assert decision.force_completed is False
    assert decision.values["status"] == "COMPLETED"
    assert decision.values["round_deadline"] is None
    assert "current_round" not in decision.values
    assert "verdict_reached" not in decision.values


def test_deadline_expiry_advances_even_with_one_sided_submission() -> None:
    decision = decide_round_advance(
        _state(current_round=2, total_rounds=5, deadline_offset=-timedelta(minutes=1)),
        statement_rounds=[1, 1, 2],
        now_utc=NOW_UTC,
    )

    assert decision.outcome == "ADVANCED"
    assert decision.values["current_round"] == 3
    assert decision.values["round_deadline"] == NOW_UTC + timedelta(hours=24)


def test_build_round_state_reads_debate_fields() -> None:
    debate = SimpleNamespace(
        id=uuid4(),
        status="ACTIVE",
        current_round=2,
        total_rounds=4,
        round_duration_seconds=5400,
        round_deadline=NOW_UTC,
    )

    state = build_round_state(debate)

    assert state.round_duration == timedelta(minutes=90)
    assert state.current_round == 2
    assert state.total_rounds == 4
