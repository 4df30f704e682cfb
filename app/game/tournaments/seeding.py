from __future__ import annotations

from collections.abc import Sequence

from app.db.models.tournament_participants import TournamentParticipant
from app.game.tournaments.constants import RESEED_METHOD_REGISTRATION_ORDER


def _elo_seed_key(participant: TournamentParticipant) -> tuple[int, object, str]:
    return (-int(participant.elo_at_start), participant.registered_at, str(participant.id))


def _registration_seed_key(participant: TournamentParticipant) -> tuple[object, str]:
    return (participant.registered_at, str(participant.id))


def reseed_participants(
    participants: Sequence[TournamentParticipant],
    *,
    method: str,
) -> list[TournamentParticipant]:
    if method == RESEED_METHOD_REGISTRATION_ORDER:
        ordered = sorted(participants, key=_registration_seed_key)
    else:
        ordered = sorted(participants, key=_elo_seed_key)
    for seed, participant in enumerate(ordered, start=1):
        participant.seed = seed
    return ordered

