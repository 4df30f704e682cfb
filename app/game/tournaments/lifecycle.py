from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.tournament_matches import TournamentMatch
from app.db.models.tournament_participants import TournamentParticipant
from app.db.models.tournaments import Tournament
from app.db.repo.debate_statements_repo import DebateStatementsRepo
from app.db.repo.debate_verdicts_repo import DebateVerdictsRepo
from app.db.repo.debates_repo import DebatesRepo
from app.db.repo.tournament_matches_repo import TournamentMatchesRepo
from app.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from app.db.repo.tournament_rounds_repo import TournamentRoundsRepo
from app.db.repo.tournaments_repo import TournamentsRepo
from app.game.tournaments.championship import select_first_round_advancers
from app.game.tournaments.constants import (
    ADVANCE_OUTCOME_ADVANCED,
    ADVANCE_OUTCOME_COMPLETED,
    ADVANCE_OUTCOME_NOOP,
    ADVANCE_OUTCOME_WAITING,
    ELIMINATION_REASON_BOTTOM_SCORE,
    ELIMINATION_REASON_NO_SUBMISSION,
    ELIMINATION_REASON_NOT_ADVANCED,
    KOTH_FINALISTS,
    MATCH_STATUS_BYE,
    MATCH_STATUS_IN_PROGRESS,
    MISSING_SEED_RANK,
    NOTIFICATION_TYPE_TOURNAMENT_CHAMPION,
    NOTIFICATION_TYPE_TOURNAMENT_COMPLETED,
    PARTICIPANT_STATUS_ELIMINATED,
    ROUND_STATUS_COMPLETED,
    TOURNAMENT_FORMAT_CHAMPIONSHIP,
    TOURNAMENT_FORMAT_KING_OF_THE_HILL,
    TOURNAMENT_STATUS_IN_PROGRESS,
)
from app.game.tournaments.internal import to_entrant
from app.game.tournaments.king_of_the_hill import select_king_of_the_hill_eliminations
from app.game.tournaments.outcomes import (
    active_participants,
    apply_match_result,
    eliminate_participant,
)
from app.game.tournaments.rounds import create_round
from app.game.tournaments.types import (
    ChampionshipEntry,
    KingOfTheHillScore,
    TournamentAdvanceResult,
)
from app.services.notifications import NotificationService

logger = structlog.get_logger("app.game.tournaments.lifecycle")

_ZERO = Decimal("0")


def _match_sides(
    match: TournamentMatch,
) -> list[tuple[UUID, Decimal | None, Decimal | None]]:
    if match.participant2_id is None:
        return []
    return [
        (match.participant1_id, match.participant1_score, match.participant2_score),
        (match.participant2_id, match.participant2_score, match.participant1_score),
    ]


def accumulate_round_scores(
    *,
    matches: list[TournamentMatch],
    participants: dict[UUID, TournamentParticipant],
) -> None:
    for match in matches:
        for participant_id, own_score, _ in _match_sides(match):
            participant = participants[participant_id]
            participant.cumulative_score = Decimal(participant.cumulative_score or 0) + (
                own_score or _ZERO
            )


async def _close_king_of_the_hill_round(
    session: AsyncSession,
    *,
    round_number: int,
    matches: list[TournamentMatch],
    participants: dict[UUID, TournamentParticipant],
    now_utc: datetime,
) -> int:
    played = [match for match in matches if match.status != MATCH_STATUS_BYE]
    statement_counts = await DebateStatementsRepo.count_by_author(
        session,
        debate_ids=[match.debate_id for match in played if match.debate_id is not None],
    )

    scores: list[KingOfTheHillScore] = []
    for match in played:
        for participant_id, own_score, _ in _match_sides(match):
            participant = participants[participant_id]
            submitted = statement_counts.get((match.debate_id, int(participant.user_id)), 0) > 0
            scores.append(
                KingOfTheHillScore(
                    participant_id=participant_id,
                    seed=int(participant.seed),
                    round_score=own_score or _ZERO,
                    submitted=submitted,
                )
            )

    score_by_id = {item.participant_id: item for item in scores}
    eliminated_total = 0
    for participant_id in select_king_of_the_hill_eliminations(
        active_total=len(active_participants(participants)),
        scores=scores,
    ):
        reason = (
            ELIMINATION_REASON_BOTTOM_SCORE.format(round_number=round_number)
            if score_by_id[participant_id].submitted
            else ELIMINATION_REASON_NO_SUBMISSION
        )
        if eliminate_participant(
            participants[participant_id],
            round_number=round_number,
            reason=reason,
            now_utc=now_utc,
        ):
            eliminated_total += 1
    return eliminated_total


def _close_championship_first_round(
    *,
    matches: list[TournamentMatch],
    participants: dict[UUID, TournamentParticipant],
    now_utc: datetime,
) -> int:
    entries: list[ChampionshipEntry] = []
    for match in matches:
        if match.participant2_id is None:
            participant = participants[match.participant1_id]
            entries.append(
                ChampionshipEntry(
                    participant_id=participant.id,
                    position=participant.selected_position or "",
                    score=_ZERO,
                    score_differential=_ZERO,
                    match_won=True,
                    elo_at_start=int(participant.elo_at_start),
                    registered_at=participant.registered_at,
                )
            )
            continue
        for participant_id, own_score, other_score in _match_sides(match):
            participant = participants[participant_id]
            resolved_own = own_score or _ZERO
            entries.append(
                ChampionshipEntry(
                    participant_id=participant_id,
                    position=participant.selected_position or "",
                    score=resolved_own,
                    score_differential=resolved_own - (other_score or _ZERO),
                    match_won=match.winner_participant_id == participant_id,
                    elo_at_start=int(participant.elo_at_start),
                    registered_at=participant.registered_at,
                )
            )

    _, eliminated = select_first_round_advancers(entries)
    eliminated_total = 0
    for entry in eliminated:
        if eliminate_participant(
            participants[entry.participant_id],
            round_number=1,
            reason=ELIMINATION_REASON_NOT_ADVANCED.format(position=entry.position),
            now_utc=now_utc,
        ):
            eliminated_total += 1
    return eliminated_total


def resolve_champion(participants: dict[UUID, TournamentParticipant]) -> TournamentParticipant | None:
    remaining = active_participants(participants)
    candidates = remaining or list(participants.values())
    if not candidates:
        return None
    return sorted(
        candidates,
        key=lambda item: (
            -int(item.wins),
            int(item.seed) if item.seed is not None else MISSING_SEED_RANK,
            str(item.id),
        ),
    )[0]


async def complete_tournament(
    session: AsyncSession,
    *,
    tournament: Tournament,
    participants: dict[UUID, TournamentParticipant],
    now_utc: datetime,
) -> tuple[bool, int | None]:
    champion = resolve_champion(participants)
    champion_user_id = int(champion.user_id) if champion is not None else None
    completed_now = await TournamentsRepo.mark_completed(
        session,
        tournament_id=tournament.id,
        champion_user_id=champion_user_id,
        now_utc=now_utc,
    )
    if not completed_now:
        return False, None

    if champion is not None and tournament.format == TOURNAMENT_FORMAT_KING_OF_THE_HILL:
        absorbed = sum(
            (
                Decimal(item.cumulative_score or 0)
                for item in participants.values()
                if item.status == PARTICIPANT_STATUS_ELIMINATED
            ),
            _ZERO,
        )
        champion.cumulative_score = Decimal(champion.cumulative_score or 0) + absorbed

    for participant in participants.values():
        is_champion = champion is not None and participant.id == champion.id
        await NotificationService.notify(
            session,
            user_id=participant.user_id,
            notification_type=(
                NOTIFICATION_TYPE_TOURNAMENT_CHAMPION
                if is_champion
                else NOTIFICATION_TYPE_TOURNAMENT_COMPLETED
            ),
            title="Tournament Champion!" if is_champion else "Tournament Completed",
            message=(
                f'You won "{tournament.name}"!'
                if is_champion
                else f'"{tournament.name}" has finished.'
            ),
            tournament_id=tournament.id,
            now_utc=now_utc,
        )
    return True, champion_user_id


async def advance_tournament(
    session: AsyncSession,
    *,
    tournament_id: UUID,
    now_utc: datetime,
) -> TournamentAdvanceResult:
    tournament = await TournamentsRepo.get_by_id_for_update(session, tournament_id)
    if tournament is None or tournament.status != TOURNAMENT_STATUS_IN_PROGRESS:
        return TournamentAdvanceResult(
            tournament_id=tournament_id,
            outcome=ADVANCE_OUTCOME_NOOP,
            round_number=int(tournament.current_round) if tournament is not None else 0,
        )

    round_number = int(tournament.current_round)
    participants = {
        participant.id: participant
        for participant in await TournamentParticipantsRepo.list_for_tournament(
            session,
            tournament_id=tournament.id,
            for_update=True,
        )
    }
    matches = await TournamentMatchesRepo.list_by_round(
        session,
        tournament_id=tournament.id,
        round_number=round_number,
        for_update=True,
    )

    pending = [match for match in matches if match.status == MATCH_STATUS_IN_PROGRESS]
    pending_debate_ids = [match.debate_id for match in pending if match.debate_id is not None]
    debates = {
        debate.id: debate for debate in await DebatesRepo.list_by_ids(session, pending_debate_ids)
    }
    scores = await DebateVerdictsRepo.average_scores_by_debate(
        session,
        debate_ids=pending_debate_ids,
    )
    matches_resolved = 0
    for match in pending:
        debate = debates.get(match.debate_id) if match.debate_id is not None else None
        if debate is None:
            continue
        challenger_score, opponent_score = scores.get(debate.id, (None, None))
        if apply_match_result(
            tournament=tournament,
            match=match,
            debate=debate,
            participants=participants,
            now_utc=now_utc,
            challenger_score=challenger_score,
            opponent_score=opponent_score,
        ):
            matches_resolved += 1

    if any(match.status == MATCH_STATUS_IN_PROGRESS for match in matches):
        return TournamentAdvanceResult(
            tournament_id=tournament.id,
            outcome=ADVANCE_OUTCOME_WAITING,
            round_number=round_number,
            matches_resolved=matches_resolved,
        )

    eliminated_total = 0
    is_last_round = round_number >= int(tournament.total_rounds)
    if tournament.format == TOURNAMENT_FORMAT_KING_OF_THE_HILL:
        accumulate_round_scores(matches=matches, participants=participants)
        if not is_last_round:
            eliminated_total += await _close_king_of_the_hill_round(
                session,
                round_number=round_number,
                matches=matches,
                participants=participants,
                now_utc=now_utc,
            )
    elif tournament.format == TOURNAMENT_FORMAT_CHAMPIONSHIP and round_number == 1:
        eliminated_total += _close_championship_first_round(
            matches=matches,
            participants=participants,
            now_utc=now_utc,
        )

    tournament_round = await TournamentRoundsRepo.get_by_number(
        session,
        tournament_id=tournament.id,
        round_number=round_number,
    )
    if tournament_round is not None:
        tournament_round.status = ROUND_STATUS_COMPLETED
        tournament_round.completed_at = now_utc

    remaining = active_participants(participants)
    if len(remaining) <= 1 or is_last_round:
        completed_now, champion_user_id = await complete_tournament(
            session,
            tournament=tournament,
            participants=participants,
            now_utc=now_utc,
        )
        return TournamentAdvanceResult(
            tournament_id=tournament.id,
            outcome=ADVANCE_OUTCOME_COMPLETED if completed_now else ADVANCE_OUTCOME_NOOP,
            round_number=round_number,
            matches_resolved=matches_resolved,
            eliminated_total=eliminated_total,
            champion_user_id=champion_user_id,
        )

    next_round = round_number + 1
    if tournament.format == TOURNAMENT_FORMAT_KING_OF_THE_HILL and len(remaining) == KOTH_FINALISTS:
        tournament.total_rounds = next_round
    tournament.current_round = next_round
    round_result = await create_round(
        session,
        tournament=tournament,
        round_number=next_round,
        entrants=[to_entrant(participant) for participant in remaining],
        now_utc=now_utc,
    )
    logger.info(
        "tournament_round_advanced",
        tournament_id=str(tournament.id),
        round_number=next_round,
        matches_total=round_result.matches_total,
        byes_total=round_result.byes_total,
    )
    return TournamentAdvanceResult(
        tournament_id=tournament.id,
        outcome=ADVANCE_OUTCOME_ADVANCED,
        round_number=next_round,
        matches_resolved=matches_resolved,
        matches_created=round_result.matches_total,
        eliminated_total=eliminated_total,
    )
