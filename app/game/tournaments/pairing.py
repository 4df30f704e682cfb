from __future__ import annotations

from collections.abc import Sequence

from app.game.tournaments.constants import (
    POSITION_CON,
    POSITION_PRO,
    TOURNAMENT_FORMAT_CHAMPIONSHIP,
)
from app.game.tournaments.types import BracketEntrant, BracketPair


def build_seeded_pairs(entrants: Sequence[BracketEntrant]) -> list[BracketPair]:
    ordered = sorted(entrants, key=lambda entrant: (entrant.seed, str(entrant.participant_id)))
    bye: BracketEntrant | None = None
    if len(ordered) % 2 == 1:
        bye = ordered.pop(0)

    pairs = [
        BracketPair(first=ordered[index], second=ordered[len(ordered) - 1 - index])
        for index in range(len(ordered) // 2)
    ]
    if bye is not None:
        pairs.append(BracketPair(first=bye, second=None))
    return pairs


def build_position_pairs(entrants: Sequence[BracketEntrant]) -> list[BracketPair]:
    pros = sorted(
        (entrant for entrant in entrants if entrant.selected_position == POSITION_PRO),
        key=lambda entrant: entrant.seed,
    )
    cons = sorted(
        (entrant for entrant in entrants if entrant.selected_position == POSITION_CON),
        key=lambda entrant: entrant.seed,
    )
    paired_total = min(len(pros), len(cons))
    pairs = [
        BracketPair(first=pros[index], second=cons[paired_total - 1 - index])
        for index in range(paired_total)
    ]

    surplus = pros[paired_total:] + cons[paired_total:]
    surplus.extend(
        entrant
        for entrant in entrants
        if entrant.selected_position not in (POSITION_PRO, POSITION_CON)
    )
    pairs.extend(build_seeded_pairs(surplus))
    return pairs


def build_round_pairs(
    *,
    format_code: str,
    round_number: int,
    entrants: Sequence[BracketEntrant],
) -> list[BracketPair]:
    if format_code == TOURNAMENT_FORMAT_CHAMPIONSHIP and round_number == 1:
        return build_position_pairs(entrants)
    return build_seeded_pairs(entrants)
