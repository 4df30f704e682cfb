from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID


@dataclass(slots=True)
class TournamentSnapshot:
    tournament_id: UUID
    name: str
    created_by: int
    format: str
    status: str
    max_participants: int
    current_round: int
    total_rounds: int
    min_elo: int | None
    prize_pool: int
    is_private: bool
    start_date: datetime | None
    started_at: datetime | None
    completed_at: datetime | None
    champion_user_id: int | None
    created_at: datetime


@dataclass(slots=True)
class TournamentJoinResult:
    snapshot: TournamentSnapshot
    participant_id: UUID
    seed: int
    participants_total: int
    registration_opened: bool
    auto_started: bool


@dataclass(slots=True)
class TournamentStartResult:
    snapshot: TournamentSnapshot
    round_number: int
    matches_total: int
    byes_total: int


@dataclass(slots=True, frozen=True)
class BracketEntrant:
    participant_id: UUID
    user_id: int
    seed: int
    elo_at_start: int
    registered_at: datetime
    selected_position: str | None = None


@dataclass(slots=True, frozen=True)
class BracketPair:
    first: BracketEntrant
    second: BracketEntrant | None


@dataclass(slots=True)
class RoundCreationResult:
    round_id: UUID
    round_number: int
    matches_total: int
    byes_total: int


@dataclass(slots=True, frozen=True)
class KingOfTheHillScore:
    participant_id: UUID
    seed: int
    round_score: Decimal
    submitted: bool


@dataclass(slots=True, frozen=True)
class ChampionshipEntry:
    participant_id: UUID
    position: str
    score: Decimal
    score_differential: Decimal
    match_won: bool
    elo_at_start: int
    registered_at: datetime


@dataclass(slots=True)
class TournamentAdvanceResult:
    tournament_id: UUID
    outcome: str
    round_number: int
    matches_resolved: int = 0
    matches_created: int = 0
    eliminated_total: int = 0
    champion_user_id: int | None = None

    @property
    def completed(self) -> bool:
        return self.outcome == "COMPLETED"

    def as_payload(self) -> dict[str, object]:
        return {
            "tournament_id": str(self.tournament_id),
            "outcome": self.outcome,
            "round_number": self.round_number,
            "matches_resolved": self.matches_resolved,
            "matches_created": self.matches_created,
            "eliminated_total": self.eliminated_total,
            "champion_user_id": self.champion_user_id,
        }
