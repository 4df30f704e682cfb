from __future__ import annotations

import math
from collections.abc import Sequence
from uuid import UUID

from app.game.tournaments.constants import KOTH_ELIMINATION_SHARE_PERCENT, KOTH_FINALISTS
from app.game.tournaments.types import KingOfTheHillScore


def elimination_cut_size(active_total: int) -> int:
    if active_total <= 1:
        return 0
    return max(1, math.ceil(active_total * KOTH_ELIMINATION_SHARE_PERCENT / 100))


def king_of_the_hill_total_rounds(participants_total: int) -> int:
    remaining = max(KOTH_FINALISTS, int(participants_total))
    group_rounds = 0
    while remaining > KOTH_FINALISTS:
        remaining -= elimination_cut_size(remaining)
        group_rounds += 1
    return group_rounds + 1


def select_king_of_the_hill_eliminations(
    *,
    active_total: int,
    scores: Sequence[KingOfTheHillScore],
) -> list[UUID]:
    non_submitters = sorted(
        (item for item in scores if not item.submitted),
        key=lambda item: (-item.seed, str(item.participant_id)),
    )
    submitters = sorted(
        (item for item in scores if item.submitted),
        key=lambda item: (item.round_score, -item.seed, str(item.participant_id)),
    )

    eliminated = list(non_submitters)
    target = elimination_cut_size(active_total)
    for item in submitters:
        if len(eliminated) >= target:
            break
        eliminated.append(item)

    max_eliminated = max(0, active_total - 1)
    if len(eliminated) > max_eliminated:
        eliminated = sorted(
            eliminated,
            key=lambda item: (item.submitted, item.round_score, -item.seed),
        )[:max_eliminated]
    return [item.participant_id for item in eliminated]
