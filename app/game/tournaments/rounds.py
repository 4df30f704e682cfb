from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.debates import Debate
from app.db.models.tournament_matches import TournamentMatch
from app.db.models.tournament_rounds import TournamentRound
from app.db.models.tournaments import Tournament
from app.db.repo.debates_repo import DebatesRepo
from app.db.repo.tournament_matches_repo import TournamentMatchesRepo
from app.db.repo.tournament_rounds_repo import TournamentRoundsRepo
from app.game.debates.constants import DEBATE_STATUS_ACTIVE
from app.game.tournaments.constants import (
    MATCH_DEBATE_TOTAL_ROUNDS,
    MATCH_STATUS_BYE,
    MATCH_STATUS_IN_PROGRESS,
    ROUND_STATUS_IN_PROGRESS,
)
from app.game.tournaments.pairing import build_round_pairs
from app.game.tournaments.types import BracketEntrant, RoundCreationResult

TOURNAMENT_DEBATE_CATEGORY = "TOURNAMENT"


def _build_match_debate(
    *,
    tournament: Tournament,
    round_number: int,
    match_number: int,
    challenger: BracketEntrant,
    opponent: BracketEntrant,
    now_utc: datetime,
) -> Debate:
    round_duration = timedelta(hours=int(tournament.round_duration_hours))
    return Debate(
        id=uuid4(),
        topic=f"{tournament.name}: round {round_number}, match {match_number}",
        category=TOURNAMENT_DEBATE_CATEGORY,
        challenger_id=challenger.user_id,
        opponent_id=opponent.user_id,
        status=DEBATE_STATUS_ACTIVE,
        current_round=1,
        total_rounds=MATCH_DEBATE_TOTAL_ROUNDS,
        round_duration_seconds=int(round_duration.total_seconds()),
        round_deadline=now_utc + round_duration,
        winner_id=None,
        verdict_reached=False,
        started_at=now_utc,
        appeal_count=0,
        created_at=now_utc,
        updated_at=now_utc,
    )


async def create_round(
    session: AsyncSession,
    *,
    tournament: Tournament,
    round_number: int,
    entrants: Sequence[BracketEntrant],
    now_utc: datetime,
) -> RoundCreationResult:
    tournament_round = await TournamentRoundsRepo.create(
        session,
        tournament_round=TournamentRound(
            id=uuid4(),
            tournament_id=tournament.id,
            round_number=round_number,
            status=ROUND_STATUS_IN_PROGRESS,
            started_at=now_utc,
            completed_at=None,
        ),
    )

    pairs = build_round_pairs(
        format_code=tournament.format,
        round_number=round_number,
        entrants=entrants,
    )
    debates: list[Debate] = []
    matches: list[TournamentMatch] = []
    byes_total = 0
    for match_number, pair in enumerate(pairs, start=1):
        if pair.second is None:
            byes_total += 1
            matches.append(
                TournamentMatch(
                    id=uuid4(),
                    tournament_id=tournament.id,
                    round_id=tournament_round.id,
                    round_number=round_number,
                    match_number=match_number,
                    participant1_id=pair.first.participant_id,
                    participant2_id=None,
                    debate_id=None,
                    status=MATCH_STATUS_BYE,
                    winner_participant_id=pair.first.participant_id,
                    created_at=now_utc,
                    resolved_at=now_utc,
                )
            )
            continue

        debate = _build_match_debate(
            tournament=tournament,
            round_number=round_number,
            match_number=match_number,
            challenger=pair.first,
            opponent=pair.second,
            now_utc=now_utc,
        )
        debates.append(debate)
        matches.append(
            TournamentMatch(
                id=uuid4(),
                tournament_id=tournament.id,
                round_id=tournament_round.id,
                round_number=round_number,
                match_number=match_number,
                participant1_id=pair.first.participant_id,
                participant2_id=pair.second.participant_id,
                debate_id=debate.id,
                status=MATCH_STATUS_IN_PROGRESS,
                winner_participant_id=None,
                created_at=now_utc,
                resolved_at=None,
            )
        )

    await DebatesRepo.create_many(session, debates=debates)
    await TournamentMatchesRepo.create_many(session, matches=matches)
    return RoundCreationResult(
        round_id=tournament_round.id,
        round_number=round_number,
        matches_total=len(matches) - byes_total,
        byes_total=byes_total,
    )
