from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from app.game.tournaments.constants import POSITIONS
from app.game.tournaments.types import ChampionshipEntry


def _ranking_key(entry: ChampionshipEntry) -> tuple[object, ...]:
    return (
        -entry.score,
        not entry.match_won,
        -entry.score_differential,
        -entry.elo_at_start,
        entry.registered_at,
        str(entry.participant_id),
    )


def rank_position_group(entries: Sequence[ChampionshipEntry]) -> list[ChampionshipEntry]:
    return sorted(entries, key=_ranking_key)


def advancing_per_side(side_total: int) -> int:
    if side_total <= 0:
        return 0
    return max(1, side_total // 2)


def select_first_round_advancers(
    entries: Sequence[ChampionshipEntry],
) -> tuple[list[UUID], list[ChampionshipEntry]]:
    advancing: list[UUID] = []
    eliminated: list[ChampionshipEntry] = []
    for position in POSITIONS:
        ranked = rank_position_group([entry for entry in entries if entry.position == position])
        cutoff = advancing_per_side(len(ranked))
        advancing.extend(entry.participant_id for entry in ranked[:cutoff])
        eliminated.extend(ranked[cutoff:])
    return advancing, eliminated
