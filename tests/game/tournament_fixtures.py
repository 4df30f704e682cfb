from __future__ import annotations

from datetime import timedelta
from types import SimpleNamespace
from uuid import UUID, uuid4

from app.game.tournaments.types import BracketEntrant
from tests.session_fixtures import NOW_UTC


def _entrant(
    seed: int,
    *,
    position: str | None = None,
    participant_id: UUID | None = None,
) -> BracketEntrant:
    return BracketEntrant(
        participant_id=participant_id or uuid4(),
        user_id=1000 + seed,
        seed=seed,
        elo_at_start=1500 - seed,
        registered_at=NOW_UTC + timedelta(minutes=seed),
        selected_position=position,
    )


def _participant(
    *,
    user_id: int,
    seed: int,
    status: str = "ACTIVE",
    elo_at_start: int = 1200,
    registered_offset_minutes: int = 0,
    selected_position: str | None = None,
    wins: int = 0,
    cumulative_score: str = "0",
) -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid4(),
        user_id=user_id,
        seed=seed,
        status=status,
        elo_at_start=elo_at_start,
        registered_at=NOW_UTC + timedelta(minutes=registered_offset_minutes),
        selected_position=selected_position,
        wins=wins,
        cumulative_score=cumulative_score,
        eliminated_at=None,
        elimination_round=None,
        elimination_reason=None,
    )


def _tournament(
    *,
    format_code: str = "SINGLE_ELIMINATION",
    status: str = "IN_PROGRESS",
    max_participants: int = 4,
    current_round: int = 1,
    total_rounds: int = 2,
    created_by: int = 1,
    is_private: bool = False,
    invited_user_ids: list[int] | None = None,
    min_elo: int | None = None,
) -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid4(),
        name="Spring Open",
        created_by=created_by,
        format=format_code,
        status=status,
        max_participants=max_participants,
        current_round=current_round,
        total_rounds=total_rounds,
        min_elo=min_elo,
        prize_pool=0,
        prize_distribution=None,
        is_private=is_private,
        invited_user_ids=invited_user_ids or [],
        reseed_method="ELO_BASED",
        round_duration_hours=24,
        start_date=None,
        started_at=None,
        completed_at=None,
        prizes_settled_at=None,
        champion_user_id=None,
        created_at=NOW_UTC,
    )


def _match(
    *,
    tournament_id: UUID,
    round_number: int,
    first,
    second,
    status: str = "IN_PROGRESS",
    debate_id: UUID | None = None,
) -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid4(),
        tournament_id=tournament_id,
        round_number=round_number,
        participant1_id=first.id,
        participant2_id=second.id if second is not None else None,
        debate_id=debate_id if second is not None else None,
        status=status,
        winner_participant_id=None if second is not None else first.id,
        participant1_score=None,
        participant2_score=None,
        resolved_at=None,
    )


def _match_debate(
    *,
    winner_id: int | None,
    status: str = "VERDICT_READY",
    verdict_reached: bool = True,
    debate_id: UUID | None = None,
) -> SimpleNamespace:
    return SimpleNamespace(
        id=debate_id or uuid4(),
        status=status,
        winner_id=winner_id,
        verdict_reached=verdict_reached,
    )
