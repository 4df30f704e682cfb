from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.tournament_participants import TournamentParticipant
from app.db.models.tournaments import Tournament
from app.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from app.db.repo.tournaments_repo import TournamentsRepo
from app.game.tournaments.constants import (
    MIN_PARTICIPANTS_TO_START,
    NOTIFICATION_TYPE_TOURNAMENT_STARTED,
    PARTICIPANT_STATUS_ACTIVE,
    TOURNAMENT_JOINABLE_STATUSES,
    TOURNAMENT_STATUS_IN_PROGRESS,
)
from app.game.tournaments.errors import (
    TournamentAccessError,
    TournamentAlreadyStartedError,
    TournamentInsufficientParticipantsError,
    TournamentNotFoundError,
)
from app.game.tournaments.internal import (
    build_tournament_snapshot,
    to_entrant,
    total_rounds_for_start,
)
from app.game.tournaments.rounds import create_round
from app.game.tournaments.seeding import reseed_participants
from app.game.tournaments.types import TournamentStartResult
from app.services.notifications import NotificationService


async def start_locked_tournament(
    session: AsyncSession,
    *,
    tournament: Tournament,
    participants: Sequence[TournamentParticipant],
    now_utc: datetime,
) -> TournamentStartResult:
    if tournament.status not in TOURNAMENT_JOINABLE_STATUSES:
        raise TournamentAlreadyStartedError
    if len(participants) < MIN_PARTICIPANTS_TO_START:
        raise TournamentInsufficientParticipantsError

    ordered = reseed_participants(participants, method=tournament.reseed_method)
    for participant in ordered:
        participant.status = PARTICIPANT_STATUS_ACTIVE

    tournament.status = TOURNAMENT_STATUS_IN_PROGRESS
    tournament.current_round = 1
    tournament.total_rounds = total_rounds_for_start(
        format_code=tournament.format,
        participants_total=len(ordered),
    )
    tournament.started_at = now_utc

    round_result = await create_round(
        session,
        tournament=tournament,
        round_number=1,
        entrants=[to_entrant(participant) for participant in ordered],
        now_utc=now_utc,
    )
    for participant in ordered:
        await NotificationService.notify(
            session,
            user_id=participant.user_id,
            notification_type=NOTIFICATION_TYPE_TOURNAMENT_STARTED,
            title="Tournament Started",
            message=f'"{tournament.name}" has started. You are seed #{participant.seed}.',
            tournament_id=tournament.id,
            now_utc=now_utc,
        )

    return TournamentStartResult(
        snapshot=build_tournament_snapshot(tournament),
        round_number=round_result.round_number,
        matches_total=round_result.matches_total,
        byes_total=round_result.byes_total,
    )


async def start_tournament(
    session: AsyncSession,
    *,
    tournament_id: UUID,
    now_utc: datetime,
    requested_by: int | None = None,
) -> TournamentStartResult:
    tournament = await TournamentsRepo.get_by_id_for_update(session, tournament_id)
    if tournament is None:
        raise TournamentNotFoundError
    if requested_by is not None and int(tournament.created_by) != requested_by:
        raise TournamentAccessError("Only the tournament creator can start it")

    participants = await TournamentParticipantsRepo.list_for_tournament(
        session,
        tournament_id=tournament.id,
        for_update=True,
    )
    return await start_locked_tournament(
        session,
        tournament=tournament,
        participants=participants,
        now_utc=now_utc,
    )
