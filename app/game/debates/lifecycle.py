from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import whole_minutes_until
from app.db.repo.debate_statements_repo import DebateStatementsRepo
from app.db.repo.debates_repo import DebatesRepo
from app.game.debates.advancement import build_round_state, decide_round_advance
from app.game.debates.constants import (
    DEBATE_STATUS_ACTIVE,
    ROUND_OUTCOME_COMPLETED,
    ROUND_OUTCOME_NOOP,
    ROUND_REASON_ALREADY_HANDLED,
)
from app.game.debates.errors import DebateNotFoundError
from app.game.debates.types import DebateRoundAdvanceResult, DebateRoundStatus


async def advance_debate_round(
    session: AsyncSession,
    *,
    debate_id: UUID,
    now_utc: datetime,
) -> DebateRoundAdvanceResult:
    debate = await DebatesRepo.get_by_id_for_update(session, debate_id, skip_locked=True)
    if debate is None:
        return DebateRoundAdvanceResult(
            debate_id=debate_id,
            outcome=ROUND_OUTCOME_NOOP,
            reason=ROUND_REASON_ALREADY_HANDLED,
            current_round=None,
        )

    state = build_round_state(debate)
    statement_rounds = await DebateStatementsRepo.list_rounds_by_debate(
        session,
        debate_id=debate_id,
    )
    decision = decide_round_advance(state, statement_rounds=statement_rounds, now_utc=now_utc)
    if decision.outcome == ROUND_OUTCOME_NOOP:
        return DebateRoundAdvanceResult(
            debate_id=debate_id,
            outcome=decision.outcome,
            reason=decision.reason,
            current_round=state.current_round,
        )

    applied = await DebatesRepo.apply_round_transition(
        session,
        debate_id=debate_id,
        expected_round=state.current_round,
        expected_deadline=state.round_deadline,
        values=decision.values,
    )
    if not applied:
        return DebateRoundAdvanceResult(
            debate_id=debate_id,
            outcome=ROUND_OUTCOME_NOOP,
            reason=ROUND_REASON_ALREADY_HANDLED,
            current_round=state.current_round,
        )

    return DebateRoundAdvanceResult(
        debate_id=debate_id,
        outcome=decision.outcome,
        reason=decision.reason,
        current_round=int(decision.values.get("current_round", state.current_round)),
        force_completed=decision.force_completed,
        verdict_required=(
            decision.outcome == ROUND_OUTCOME_COMPLETED and not decision.force_completed
        ),
    )


async def check_debate_round(
    session: AsyncSession,
    *,
    debate_id: UUID,
    now_utc: datetime,
) -> DebateRoundStatus:
    debate = await DebatesRepo.get_by_id(session, debate_id)
    if debate is None:
        raise DebateNotFoundError

    advanced = False
    verdict_required = False
    if (
        debate.status == DEBATE_STATUS_ACTIVE
        and debate.round_deadline is not None
        and debate.round_deadline <= now_utc
    ):
        result = await advance_debate_round(session, debate_id=debate_id, now_utc=now_utc)
        advanced = result.outcome != ROUND_OUTCOME_NOOP
        verdict_required = result.verdict_required
        if advanced:
            await session.refresh(debate)

    minutes_remaining = 0
    if debate.round_deadline is not None:
        minutes_remaining = whole_minutes_until(now_utc=now_utc, deadline=debate.round_deadline)

    return DebateRoundStatus(
        debate_id=debate.id,
        status=debate.status,
        current_round=int(debate.current_round),
        total_rounds=int(debate.total_rounds),
        round_deadline=debate.round_deadline,
        minutes_remaining=minutes_remaining,
        advanced=advanced,
        verdict_required=verdict_required,
    )
