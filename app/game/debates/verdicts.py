from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.debate_verdicts import DebateVerdict
from app.db.repo.debate_verdicts_repo import DebateVerdictsRepo
from app.db.repo.debates_repo import DebatesRepo
from app.game.debates.constants import (
    APPEAL_STATUS_PENDING,
    APPEAL_STATUS_RESOLVED,
    DEBATE_STATUS_APPEALED,
    DEBATE_STATUS_COMPLETED,
    DEBATE_STATUS_VERDICT_READY,
    NOTIFICATION_TYPE_VERDICT_READY,
)
from app.game.debates.errors import (
    DebateInvalidStateError,
    DebateNotFoundError,
    VerdictValidationError,
)
from app.game.debates.types import JudgeVerdictInput, VerdictRecordResult
from app.game.tournaments.outcomes import resolve_match_for_debate
from app.services.notifications import NotificationService

_SCORE_QUANT = Decimal("0.01")


def average_judge_scores(judge_verdicts: Sequence[JudgeVerdictInput]) -> tuple[Decimal, Decimal]:
    if not judge_verdicts:
        return Decimal("0"), Decimal("0")
    total = Decimal(len(judge_verdicts))
    challenger = sum((Decimal(item.challenger_score) for item in judge_verdicts), Decimal("0"))
    opponent = sum((Decimal(item.opponent_score) for item in judge_verdicts), Decimal("0"))
    return (
        (challenger / total).quantize(_SCORE_QUANT, rounding=ROUND_HALF_UP),
        (opponent / total).quantize(_SCORE_QUANT, rounding=ROUND_HALF_UP),
    )


async def record_debate_verdict(
    session: AsyncSession,
    *,
    debate_id: UUID,
    winner_id: int | None,
    judge_verdicts: Sequence[JudgeVerdictInput],
    now_utc: datetime,
) -> VerdictRecordResult:
    debate = await DebatesRepo.get_by_id_for_update(session, debate_id)
    if debate is None:
        raise DebateNotFoundError("Debate not found")
    if debate.status not in (DEBATE_STATUS_COMPLETED, DEBATE_STATUS_APPEALED):
        raise DebateInvalidStateError("Debate is not awaiting a verdict")
    if not judge_verdicts:
        raise VerdictValidationError("At least one judge verdict is required")
    if winner_id is not None and winner_id not in (debate.challenger_id, debate.opponent_id):
        raise VerdictValidationError("Verdict winner must be a debate participant")

    await DebateVerdictsRepo.create_many(
        session,
        verdicts=[
            DebateVerdict(
                id=uuid4(),
                debate_id=debate.id,
                judge_key=item.judge_key,
                winner_id=item.winner_id,
                challenger_score=Decimal(item.challenger_score),
                opponent_score=Decimal(item.opponent_score),
                reasoning=item.reasoning,
                created_at=now_utc,
            )
            for item in judge_verdicts
        ],
    )

    appeal_resolved = (
        debate.status == DEBATE_STATUS_APPEALED and debate.appeal_status == APPEAL_STATUS_PENDING
    )
    if appeal_resolved:
        debate.appeal_status = APPEAL_STATUS_RESOLVED
    debate.status = DEBATE_STATUS_VERDICT_READY
    debate.winner_id = winner_id
    debate.verdict_reached = True
    debate.verdict_date = now_utc
    debate.updated_at = now_utc

    title = "Appeal Resolved" if appeal_resolved else "Verdict Ready"
    for user_id in (debate.challenger_id, debate.opponent_id):
        if user_id is None:
            continue
        await NotificationService.notify(
            session,
            user_id=user_id,
            notification_type=NOTIFICATION_TYPE_VERDICT_READY,
            title=title,
            message=f'The judges have decided "{debate.topic}".',
            debate_id=debate.id,
            now_utc=now_utc,
        )

    challenger_score, opponent_score = average_judge_scores(judge_verdicts)
    tournament_id = await resolve_match_for_debate(
        session,
        debate=debate,
        challenger_score=challenger_score,
        opponent_score=opponent_score,
        now_utc=now_utc,
    )
    return VerdictRecordResult(
        debate_id=debate.id,
        winner_id=winner_id,
        appeal_resolved=appeal_resolved,
        tournament_id=tournament_id,
    )
