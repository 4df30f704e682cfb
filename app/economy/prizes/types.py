from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID


@dataclass(slots=True, frozen=True)
class StandingEntry:
    participant_id: UUID
    user_id: int
    wins: int
    seed: int | None


@dataclass(slots=True, frozen=True)
class PrizeAward:
    place: int
    place_label: str
    user_id: int
    percentage: Decimal
    amount: int
