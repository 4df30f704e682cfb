from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from app.db.models.debates import Debate
from app.game.debates.constants import (
    DEBATE_STATUS_ACTIVE,
    DEBATE_STATUS_COMPLETED,
    ROUND_OUTCOME_ADVANCED,
    ROUND_OUTCOME_COMPLETED,
    ROUND_OUTCOME_NOOP,
    ROUND_REASON_DEADLINE_PASSED,
    ROUND_REASON_FINAL_ROUND,
    ROUND_REASON_NO_PARTICIPATION,
    ROUND_REASON_NO_STATEMENTS,
    ROUND_REASON_NOT_ACTIVE,
    ROUND_REASON_NOT_DUE,
)
from app.game.debates.types import DebateRoundState, RoundAdvanceDecision


def build_round_state(debate: Debate) -> DebateRoundState:
    return DebateRoundState(
        debate_id=debate.id,
        status=debate.status,
        current_round=int(debate.current_round),
        total_rounds=int(debate.total_rounds),
        round_duration=timedelta(seconds=int(debate.round_duration_seconds)),
        round_deadline=debate.round_deadline,
    )


def _force_completion(*, reason: str, now_utc: datetime) -> RoundAdvanceDecision:
    return RoundAdvanceDecision(
        outcome=ROUND_OUTCOME_COMPLETED,
        reason=reason,
        values={
            "status": DEBATE_STATUS_COMPLETED,
            "ended_at": now_utc,
            "round_deadline": None,
            "verdict_reached": True,
            "verdict_date": now_utc,
            "updated_at": now_utc,
        },
        force_completed=True,
    )


def decide_round_advance(
    state: DebateRoundState,
    *,
    statement_rounds: Iterable[int],
    now_utc: datetime,
) -> RoundAdvanceDecision:
    if state.status != DEBATE_STATUS_ACTIVE:
        return RoundAdvanceDecision(outcome=ROUND_OUTCOME_NOOP, reason=ROUND_REASON_NOT_ACTIVE)

    rounds = [int(value) for value in statement_rounds]
    if 1 not in rounds:
        return _force_completion(reason=ROUND_REASON_NO_PARTICIPATION, now_utc=now_utc)
    if state.current_round > 1 and not rounds:
        return _force_completion(reason=ROUND_REASON_NO_STATEMENTS, now_utc=now_utc)

    if state.round_deadline is not None and state.round_deadline > now_utc:
        return RoundAdvanceDecision(outcome=ROUND_OUTCOME_NOOP, reason=ROUND_REASON_NOT_DUE)

    if state.current_round >= state.total_rounds:
        return RoundAdvanceDecision(
            outcome=ROUND_OUTCOME_COMPLETED,
            reason=ROUND_REASON_FINAL_ROUND,
            values={
                "status": DEBATE_STATUS_COMPLETED,
                "ended_at": now_utc,
                "round_deadline": None,
                "updated_at": now_utc,
            },
        )

    return RoundAdvanceDecision(
        outcome=ROUND_OUTCOME_ADVANCED,
        reason=ROUND_REASON_DEADLINE_PASSED,
        values={
            "current_round": state.current_round + 1,
            "round_deadline": now_utc + state.round_duration,
            "updated_at": now_utc,
        },
    )
