from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID, uuid4

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.tournament_participants import TournamentParticipant
from app.db.models.tournaments import Tournament
from app.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from app.db.repo.tournaments_repo import TournamentsRepo
from app.game.tournaments.constants import (
    DEFAULT_ROUND_DURATION_HOURS,
    FEATURE_KEY_TOURNAMENT_CREATE,
    PARTICIPANT_STATUS_REGISTERED,
    POSITION_CON,
    POSITION_PRO,
    POSITIONS,
    RESEED_METHOD_ELO_BASED,
    RESEED_METHODS,
    TOURNAMENT_FORMAT_CHAMPIONSHIP,
    TOURNAMENT_FORMATS,
    TOURNAMENT_JOINABLE_STATUSES,
    TOURNAMENT_STATUS_REGISTRATION_OPEN,
    TOURNAMENT_STATUS_UPCOMING,
)
from app.game.tournaments.errors import (
    TournamentAccessError,
    TournamentAlreadyRegisteredError,
    TournamentClosedError,
    TournamentEloTooLowError,
    TournamentFullError,
    TournamentNotFoundError,
    TournamentPositionFullError,
    TournamentPositionRequiredError,
    TournamentValidationError,
)
from app.game.tournaments.internal import bracket_rounds_for_capacity, build_tournament_snapshot
from app.game.tournaments.start import start_locked_tournament
from app.game.tournaments.types import TournamentJoinResult, TournamentSnapshot
from app.services.feature_usage import FeatureUsageService
from app.services.ratings import RatingService

logger = structlog.get_logger("app.game.tournaments.create_join")


def normalize_position(selected_position: str | None) -> str | None:
    if selected_position is None:
        return None
    normalized = selected_position.strip().upper()
    return normalized if normalized in POSITIONS else None


def opposite_position(position: str) -> str:
    return POSITION_CON if position == POSITION_PRO else POSITION_PRO


def can_access_tournament(tournament: Tournament, *, user_id: int) -> bool:
    if not tournament.is_private or int(tournament.created_by) == user_id:
        return True
    return user_id in {int(invited) for invited in tournament.invited_user_ids or []}


def check_position_capacity(
    *,
    participants: Sequence[TournamentParticipant],
    position: str,
    max_participants: int,
) -> None:
    side_total = sum(1 for item in participants if item.selected_position == position)
    if side_total >= max_participants // 2:
        raise TournamentPositionFullError(
            position=position,
            suggested_position=opposite_position(position),
        )


async def create_tournament(
    session: AsyncSession,
    *,
    created_by: int,
    name: str,
    format_code: str,
    max_participants: int,
    now_utc: datetime,
    description: str | None = None,
    min_elo: int | None = None,
    prize_pool: int = 0,
    prize_distribution: dict[str, object] | None = None,
    is_private: bool = False,
    invited_user_ids: Sequence[int] | None = None,
    round_duration_hours: int = DEFAULT_ROUND_DURATION_HOURS,
    start_date: datetime | None = None,
    creator_position: str | None = None,
    reseed_method: str = RESEED_METHOD_ELO_BASED,
) -> TournamentSnapshot:
    resolved_name = (name or "").strip()
    if not resolved_name:
        raise TournamentValidationError("Tournament name is required")
    if format_code not in TOURNAMENT_FORMATS:
        raise TournamentValidationError(f"Unsupported tournament format: {format_code}")
    total_rounds = bracket_rounds_for_capacity(int(max_participants))
    if int(prize_pool) < 0:
        raise TournamentValidationError("Prize pool cannot be negative")
    if int(round_duration_hours) < 1:
        raise TournamentValidationError("Round duration must be at least one hour")
    if reseed_method not in RESEED_METHODS:
        raise TournamentValidationError(f"Unsupported reseed method: {reseed_method}")

    invitees = sorted({int(user_id) for user_id in invited_user_ids or [] if user_id != created_by})
    if is_private and not invitees:
        raise TournamentValidationError("Private tournaments need at least one invited user")

    position = normalize_position(creator_position)
    if format_code == TOURNAMENT_FORMAT_CHAMPIONSHIP and position is None:
        raise TournamentPositionRequiredError("Choose PRO or CON to create a championship")

    tournament = await TournamentsRepo.create(
        session,
        tournament=Tournament(
            id=uuid4(),
            name=resolved_name,
            description=description,
            created_by=created_by,
            format=format_code,
            status=TOURNAMENT_STATUS_UPCOMING,
            max_participants=int(max_participants),
            current_round=0,
            total_rounds=total_rounds,
            min_elo=min_elo,
            prize_pool=int(prize_pool),
            prize_distribution=prize_distribution,
            is_private=is_private,
            invited_user_ids=invitees,
            reseed_method=reseed_method,
            round_duration_hours=int(round_duration_hours),
            start_date=start_date,
            created_at=now_utc,
        ),
    )
    await TournamentParticipantsRepo.create(
        session,
        participant=TournamentParticipant(
            id=uuid4(),
            tournament_id=tournament.id,
            user_id=created_by,
            seed=1,
            elo_at_start=await RatingService.get_user_elo(session, user_id=created_by),
            status=PARTICIPANT_STATUS_REGISTERED,
            wins=0,
            cumulative_score=0,
            selected_position=position if format_code == TOURNAMENT_FORMAT_CHAMPIONSHIP else None,
            registered_at=now_utc,
        ),
    )
    return build_tournament_snapshot(tournament)


async def _try_auto_start(
    session: AsyncSession,
    *,
    tournament: Tournament,
    participants: list[TournamentParticipant],
    now_utc: datetime,
) -> bool:
    try:
        async with session.begin_nested():
            await start_locked_tournament(
                session,
                tournament=tournament,
                participants=participants,
                now_utc=now_utc,
            )
    except Exception as exc:
        logger.warning(
            "tournament_auto_start_failed",
            tournament_id=str(tournament.id),
            error_type=type(exc).__name__,
        )
        await session.refresh(tournament)
        return False
    return True


async def join_tournament(
    session: AsyncSession,
    *,
    tournament_id: UUID,
    user_id: int,
    now_utc: datetime,
    selected_position: str | None = None,
) -> TournamentJoinResult:
    tournament = await TournamentsRepo.get_by_id_for_update(session, tournament_id)
    if tournament is None:
        raise TournamentNotFoundError
    if not can_access_tournament(tournament, user_id=user_id):
        raise TournamentAccessError("This tournament is invite-only")
    if tournament.status not in TOURNAMENT_JOINABLE_STATUSES:
        raise TournamentClosedError("Tournament is not accepting registrations")

    participants = await TournamentParticipantsRepo.list_for_tournament(
        session,
        tournament_id=tournament.id,
        for_update=True,
    )
    if any(int(item.user_id) == user_id for item in participants):
        raise TournamentAlreadyRegisteredError
    if len(participants) >= int(tournament.max_participants):
        raise TournamentFullError

    user_elo = await RatingService.get_user_elo(session, user_id=user_id)
    if tournament.min_elo is not None and user_elo < int(tournament.min_elo):
        raise TournamentEloTooLowError(min_elo=int(tournament.min_elo), user_elo=user_elo)

    position: str | None = None
    if tournament.format == TOURNAMENT_FORMAT_CHAMPIONSHIP:
        position = normalize_position(selected_position)
        if position is None:
            raise TournamentPositionRequiredError("Choose PRO or CON to join this championship")
        check_position_capacity(
            participants=participants,
            position=position,
            max_participants=int(tournament.max_participants),
        )

    participant = await TournamentParticipantsRepo.create(
        session,
        participant=TournamentParticipant(
            id=uuid4(),
            tournament_id=tournament.id,
            user_id=user_id,
            seed=len(participants) + 1,
            elo_at_start=user_elo,
            status=PARTICIPANT_STATUS_REGISTERED,
            wins=0,
            cumulative_score=0,
            selected_position=position,
            registered_at=now_utc,
        ),
    )
    participant_id = participant.id
    seed = int(participant.seed)
    participants.append(participant)

    registration_opened = False
    if tournament.status == TOURNAMENT_STATUS_UPCOMING:
        tournament.status = TOURNAMENT_STATUS_REGISTRATION_OPEN
        await FeatureUsageService.record_usage(
            session,
            user_id=int(tournament.created_by),
            feature_key=FEATURE_KEY_TOURNAMENT_CREATE,
            reference_id=str(tournament.id),
            now_utc=now_utc,
        )
        registration_opened = True

    auto_started = False
    if len(participants) >= int(tournament.max_participants):
        auto_started = await _try_auto_start(
            session,
            tournament=tournament,
            participants=participants,
            now_utc=now_utc,
        )

    return TournamentJoinResult(
        snapshot=build_tournament_snapshot(tournament),
        participant_id=participant_id,
        seed=seed,
        participants_total=len(participants),
        registration_opened=registration_opened,
        auto_started=auto_started,
    )
