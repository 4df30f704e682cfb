from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.debates import Debate
from app.db.models.tournament_matches import TournamentMatch
from app.db.models.tournament_participants import TournamentParticipant
from app.db.models.tournaments import Tournament
from app.db.repo.tournament_matches_repo import TournamentMatchesRepo
from app.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from app.db.repo.tournaments_repo import TournamentsRepo
from app.game.debates.constants import DEBATE_STATUS_COMPLETED, DEBATE_STATUS_VERDICT_READY
from app.game.tournaments.constants import (
    ELIMINATION_REASON_FINAL_LOSS,
    ELIMINATION_REASON_LOST_MATCH,
    MATCH_STATUS_COMPLETED,
    MATCH_STATUS_IN_PROGRESS,
    PARTICIPANT_STATUS_ACTIVE,
    PARTICIPANT_STATUS_ELIMINATED,
    TOURNAMENT_FORMAT_CHAMPIONSHIP,
    TOURNAMENT_FORMAT_KING_OF_THE_HILL,
    TOURNAMENT_STATUS_IN_PROGRESS,
)


def is_debate_decided(debate: Debate) -> bool:
    if debate.status == DEBATE_STATUS_VERDICT_READY and debate.winner_id is not None:
        return True
    return (
        debate.status in (DEBATE_STATUS_COMPLETED, DEBATE_STATUS_VERDICT_READY)
        and bool(debate.verdict_reached)
        and debate.winner_id is None
    )


def is_final_round(tournament: Tournament, *, round_number: int) -> bool:
    return round_number >= int(tournament.total_rounds)


def loser_eliminated_on_match(tournament: Tournament, *, round_number: int) -> bool:
    if tournament.format == TOURNAMENT_FORMAT_KING_OF_THE_HILL:
        return is_final_round(tournament, round_number=round_number)
    if tournament.format == TOURNAMENT_FORMAT_CHAMPIONSHIP:
        return round_number > 1
    return True


def eliminate_participant(
    participant: TournamentParticipant,
    *,
    round_number: int,
    reason: str,
    now_utc: datetime,
) -> bool:
    if participant.status == PARTICIPANT_STATUS_ELIMINATED:
        return False
    participant.status = PARTICIPANT_STATUS_ELIMINATED
    participant.eliminated_at = now_utc
    participant.elimination_round = round_number
    participant.elimination_reason = reason
    return True


def _walkover_winner(
    first: TournamentParticipant,
    second: TournamentParticipant,
) -> TournamentParticipant:
    return first if int(first.seed) <= int(second.seed) else second


def apply_match_result(
    *,
    tournament: Tournament,
    match: TournamentMatch,
    debate: Debate,
    participants: dict[UUID, TournamentParticipant],
    now_utc: datetime,
    challenger_score: Decimal | None = None,
    opponent_score: Decimal | None = None,
) -> bool:
    if match.status != MATCH_STATUS_IN_PROGRESS or match.participant2_id is None:
        return False
    if not is_debate_decided(debate):
        return False

    first = participants[match.participant1_id]
    second = participants[match.participant2_id]
    if debate.winner_id is not None:
        winner = first if int(debate.winner_id) == int(first.user_id) else second
        winner.wins = int(winner.wins) + 1
    else:
        winner = _walkover_winner(first, second)
    loser = second if winner is first else first

    match.status = MATCH_STATUS_COMPLETED
    match.winner_participant_id = winner.id
    match.participant1_score = challenger_score
    match.participant2_score = opponent_score
    match.resolved_at = now_utc

    if loser_eliminated_on_match(tournament, round_number=int(match.round_number)):
        final_loss = tournament.format == TOURNAMENT_FORMAT_KING_OF_THE_HILL
        eliminate_participant(
            loser,
            round_number=int(match.round_number),
            reason=(
                ELIMINATION_REASON_FINAL_LOSS
                if final_loss
                else ELIMINATION_REASON_LOST_MATCH.format(round_number=match.round_number)
            ),
            now_utc=now_utc,
        )
    return True


async def resolve_match_for_debate(
    session: AsyncSession,
    *,
    debate: Debate,
    now_utc: datetime,
    challenger_score: Decimal | None = None,
    opponent_score: Decimal | None = None,
) -> UUID | None:
    match = await TournamentMatchesRepo.get_by_debate_id(session, debate_id=debate.id)
    if match is None or match.status != MATCH_STATUS_IN_PROGRESS:
        return None

    tournament = await TournamentsRepo.get_by_id_for_update(session, match.tournament_id)
    if tournament is None or tournament.status != TOURNAMENT_STATUS_IN_PROGRESS:
        return None
    await session.refresh(match, with_for_update=True)

    participants = await TournamentParticipantsRepo.list_for_tournament(
        session,
        tournament_id=tournament.id,
        for_update=True,
    )
    applied = apply_match_result(
        tournament=tournament,
        match=match,
        debate=debate,
        participants={participant.id: participant for participant in participants},
        now_utc=now_utc,
        challenger_score=challenger_score,
        opponent_score=opponent_score,
    )
    return tournament.id if applied else None


def active_participants(
    participants: dict[UUID, TournamentParticipant],
) -> list[TournamentParticipant]:
    return [
        participant
        for participant in participants.values()
        if participant.status == PARTICIPANT_STATUS_ACTIVE
    ]
