from __future__ import annotations

from app.db.models.tournament_participants import TournamentParticipant
from app.db.models.tournaments import Tournament
from app.game.tournaments.constants import (
    TOURNAMENT_FORMAT_KING_OF_THE_HILL,
    VALID_BRACKET_SIZES,
)
from app.game.tournaments.errors import TournamentValidationError
from app.game.tournaments.king_of_the_hill import king_of_the_hill_total_rounds
from app.game.tournaments.types import BracketEntrant, TournamentSnapshot


def build_tournament_snapshot(tournament: Tournament) -> TournamentSnapshot:
    return TournamentSnapshot(
        tournament_id=tournament.id,
        name=tournament.name,
        created_by=int(tournament.created_by),
        format=tournament.format,
        status=tournament.status,
        max_participants=int(tournament.max_participants),
        current_round=int(tournament.current_round),
        total_rounds=int(tournament.total_rounds),
        min_elo=tournament.min_elo,
        prize_pool=int(tournament.prize_pool),
        is_private=bool(tournament.is_private),
        start_date=tournament.start_date,
        started_at=tournament.started_at,
        completed_at=tournament.completed_at,
        champion_user_id=tournament.champion_user_id,
        created_at=tournament.created_at,
    )


def bracket_rounds_for_capacity(max_participants: int) -> int:
    if max_participants not in VALID_BRACKET_SIZES:
        raise TournamentValidationError(
            "Max participants must be one of " + ", ".join(str(size) for size in VALID_BRACKET_SIZES)
        )
    return int(max_participants).bit_length() - 1


def total_rounds_for_start(*, format_code: str, participants_total: int) -> int:
    resolved_total = max(2, int(participants_total))
    if format_code == TOURNAMENT_FORMAT_KING_OF_THE_HILL:
        return king_of_the_hill_total_rounds(resolved_total)
    return (resolved_total - 1).bit_length()


def to_entrant(participant: TournamentParticipant) -> BracketEntrant:
    return BracketEntrant(
        participant_id=participant.id,
        user_id=int(participant.user_id),
        seed=int(participant.seed),
        elo_at_start=int(participant.elo_at_start),
        registered_at=participant.registered_at,
        selected_position=participant.selected_position,
    )
