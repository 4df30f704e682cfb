from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation

from app.economy.prizes.constants import DEFAULT_PRIZE_DISTRIBUTION
from app.economy.prizes.types import PrizeAward, StandingEntry
from app.game.tournaments.constants import MISSING_SEED_RANK


def place_label(place: int) -> str:
    if 10 <= place % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(place % 10, "th")
    return f"{place}{suffix}"


def _default_distribution() -> dict[str, Decimal]:
    return {label: Decimal(value) for label, value in DEFAULT_PRIZE_DISTRIBUTION.items()}


def parse_prize_distribution(raw: object) -> dict[str, Decimal]:
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return _default_distribution()
    if not isinstance(raw, Mapping) or not raw:
        return _default_distribution()

    parsed: dict[str, Decimal] = {}
    for label, value in raw.items():
        if isinstance(value, bool):
            return _default_distribution()
        try:
            percentage = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return _default_distribution()
        if not percentage.is_finite() or percentage < 0:
            return _default_distribution()
        parsed[str(label).strip()] = percentage
    return parsed


def compute_final_standings(entries: Sequence[StandingEntry]) -> list[StandingEntry]:
    return sorted(
        entries,
        key=lambda entry: (
            -int(entry.wins),
            int(entry.seed) if entry.seed is not None else MISSING_SEED_RANK,
            str(entry.participant_id),
        ),
    )


def compute_prize_awards(
    *,
    standings: Sequence[StandingEntry],
    distribution: Mapping[str, Decimal],
    prize_pool: int,
) -> list[PrizeAward]:
    if prize_pool <= 0:
        return []
    awards: list[PrizeAward] = []
    for place, entry in enumerate(standings, start=1):
        label = place_label(place)
        percentage = distribution.get(label)
        if percentage is None:
            continue
        amount = math.floor(Decimal(prize_pool) * percentage / Decimal(100))
        awards.append(
            PrizeAward(
                place=place,
                place_label=label,
                user_id=entry.user_id,
                percentage=percentage,
                amount=int(amount),
            )
        )
    return awards
