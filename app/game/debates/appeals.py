from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.debates import Debate
from app.db.repo.debate_verdicts_repo import DebateVerdictsRepo
from app.db.repo.debates_repo import DebatesRepo
from app.game.debates.constants import (
    APPEAL_REASON_MAX_LENGTH,
    APPEAL_REASON_MIN_LENGTH,
    APPEAL_STATUS_PENDING,
    APPEAL_WINDOW,
    DEBATE_STATUS_APPEALED,
    DEBATE_STATUS_VERDICT_READY,
    MAX_APPEALS_PER_DEBATE,
    NOTIFICATION_TYPE_APPEAL_SUBMITTED,
)
from app.game.debates.errors import (
    AppealAlreadySubmittedError,
    AppealForbiddenError,
    AppealValidationError,
    AppealWindowExpiredError,
    DebateInvalidStateError,
    DebateNotFoundError,
)
from app.game.debates.types import AppealSubmitResult
from app.services.notifications import NotificationService

logger = structlog.get_logger("app.game.debates.appeals")


def normalize_appeal_reason(reason: str | None) -> str:
    normalized = (reason or "").strip()
    if len(normalized) < APPEAL_REASON_MIN_LENGTH:
        raise AppealValidationError(
            f"Appeal reason must be at least {APPEAL_REASON_MIN_LENGTH} characters"
        )
    if len(normalized) > APPEAL_REASON_MAX_LENGTH:
        raise AppealValidationError(
            f"Appeal reason must be at most {APPEAL_REASON_MAX_LENGTH} characters"
        )
    return normalized


def parse_verdict_ids(verdict_ids: Sequence[UUID | str] | None) -> list[UUID]:
    if not verdict_ids:
        raise AppealValidationError("At least one verdict must be selected for appeal")
    parsed: list[UUID] = []
    for raw_id in verdict_ids:
        try:
            verdict_id = raw_id if isinstance(raw_id, UUID) else UUID(str(raw_id))
        except ValueError as exc:
            raise AppealValidationError(f"Invalid verdict id: {raw_id}") from exc
        if verdict_id not in parsed:
            parsed.append(verdict_id)
    return parsed


def validate_appeal(
    debate: Debate,
    *,
    requester_id: int,
    verdict_ids: list[UUID],
    known_verdict_ids: set[UUID],
    now_utc: datetime,
) -> None:
    if any(verdict_id not in known_verdict_ids for verdict_id in verdict_ids):
        raise AppealValidationError("Selected verdicts do not belong to this debate")
    if debate.status != DEBATE_STATUS_VERDICT_READY:
        raise DebateInvalidStateError("Debate verdict is not ready for appeal")
    if debate.winner_id is None:
        raise DebateInvalidStateError("Debate has no winner yet")
    if requester_id not in (debate.challenger_id, debate.opponent_id):
        raise AppealForbiddenError("Only debate participants can appeal")
    if requester_id == debate.winner_id:
        raise AppealForbiddenError("Winners cannot appeal the verdict")
    if int(debate.appeal_count or 0) >= MAX_APPEALS_PER_DEBATE:
        raise AppealAlreadySubmittedError("This debate has already been appealed")
    if debate.verdict_date is not None and now_utc - debate.verdict_date > APPEAL_WINDOW:
        raise AppealWindowExpiredError("Appeal window of 48 hours after the verdict has expired")


def apply_appeal(
    debate: Debate,
    *,
    requester_id: int,
    reason: str,
    verdict_ids: list[UUID],
    now_utc: datetime,
) -> None:
    debate.appealed_at = now_utc
    debate.appeal_status = APPEAL_STATUS_PENDING
    debate.appeal_count = MAX_APPEALS_PER_DEBATE
    debate.appealed_by = requester_id
    debate.original_winner_id = debate.winner_id
    debate.appeal_reason = reason
    debate.appealed_statements = [str(verdict_id) for verdict_id in verdict_ids]
    debate.status = DEBATE_STATUS_APPEALED
    debate.winner_id = None
    debate.updated_at = now_utc


async def submit_appeal(
    session: AsyncSession,
    *,
    debate_id: UUID,
    requester_id: int,
    reason: str | None,
    verdict_ids: Sequence[UUID | str] | None,
    now_utc: datetime,
) -> AppealSubmitResult:
    normalized_reason = normalize_appeal_reason(reason)
    parsed_verdict_ids = parse_verdict_ids(verdict_ids)

    debate = await DebatesRepo.get_by_id_for_update(session, debate_id)
    if debate is None:
        raise DebateNotFoundError("Debate not found")

    known_verdict_ids = await DebateVerdictsRepo.list_ids_by_debate(session, debate_id=debate_id)
    validate_appeal(
        debate,
        requester_id=requester_id,
        verdict_ids=parsed_verdict_ids,
        known_verdict_ids=known_verdict_ids,
        now_utc=now_utc,
    )

    original_winner_id = int(debate.winner_id)
    apply_appeal(
        debate,
        requester_id=requester_id,
        reason=normalized_reason,
        verdict_ids=parsed_verdict_ids,
        now_utc=now_utc,
    )

    opponent_id = (
        debate.opponent_id if requester_id == debate.challenger_id else debate.challenger_id
    )
    if opponent_id is not None:
        await NotificationService.notify(
            session,
            user_id=opponent_id,
            notification_type=NOTIFICATION_TYPE_APPEAL_SUBMITTED,
            title="Verdict Appealed",
            message=(
                f'Your opponent has appealed the verdict in "{debate.topic}". '
                "The debate will be re-evaluated by new judges."
            ),
            debate_id=debate.id,
            now_utc=now_utc,
        )
    await NotificationService.notify(
        session,
        user_id=requester_id,
        notification_type=NOTIFICATION_TYPE_APPEAL_SUBMITTED,
        title="Appeal Submitted",
        message=(
            f'Your appeal for "{debate.topic}" was submitted. '
            "New judges will re-evaluate the debate."
        ),
        debate_id=debate.id,
        now_utc=now_utc,
    )

    logger.info(
        "appeal_submitted",
        debate_id=str(debate.id),
        appealed_by=requester_id,
        original_winner_id=original_winner_id,
        verdicts_total=len(parsed_verdict_ids),
    )
    return AppealSubmitResult(
        debate_id=debate.id,
        appealed_by=requester_id,
        original_winner_id=original_winner_id,
        appealed_at=now_utc,
        appealed_statements=list(debate.appealed_statements or []),
    )
