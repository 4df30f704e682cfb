from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID


@dataclass(slots=True, frozen=True)
class DebateRoundState:
    debate_id: UUID
    status: str
    current_round: int
    total_rounds: int
    round_duration: timedelta
    round_deadline: datetime | None


@dataclass(slots=True, frozen=True)
class RoundAdvanceDecision:
    outcome: str
    reason: str
    values: dict[str, object] = field(default_factory=dict)
    force_completed: bool = False


@dataclass(slots=True)
class DebateRoundAdvanceResult:
    debate_id: UUID
    outcome: str
    reason: str
    current_round: int | None
    force_completed: bool = False
    verdict_required: bool = False

    def as_payload(self) -> dict[str, object]:
        return {
            "debate_id": str(self.debate_id),
            "outcome": self.outcome,
            "reason": self.reason,
            "current_round": self.current_round,
            "force_completed": self.force_completed,
        }


@dataclass(slots=True)
class DebateRoundStatus:
    debate_id: UUID
    status: str
    current_round: int
    total_rounds: int
    round_deadline: datetime | None
    minutes_remaining: int
    advanced: bool
    verdict_required: bool = False


@dataclass(slots=True)
class AppealSubmitResult:
    debate_id: UUID
    appealed_by: int
    original_winner_id: int
    appealed_at: datetime
    appealed_statements: list[str]
    verdict_enqueued: bool = False


@dataclass(slots=True, frozen=True)
class JudgeVerdictInput:
    judge_key: str
    winner_id: int | None
    challenger_score: Decimal
    opponent_score: Decimal
    reasoning: str | None = None


@dataclass(slots=True)
class VerdictRecordResult:
    debate_id: UUID
    winner_id: int | None
    appeal_resolved: bool
    tournament_id: UUID | None
