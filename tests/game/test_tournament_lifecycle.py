from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from app.db.repo.debate_statements_repo import DebateStatementsRepo
from app.db.repo.debate_verdicts_repo import DebateVerdictsRepo
from app.db.repo.debates_repo import DebatesRepo
from app.db.repo.tournament_matches_repo import TournamentMatchesRepo
from app.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from app.db.repo.tournament_rounds_repo import TournamentRoundsRepo
from app.db.repo.tournaments_repo import TournamentsRepo
from app.game.tournaments import lifecycle
from app.game.tournaments.lifecycle import advance_tournament, resolve_champion
from app.game.tournaments.types import RoundCreationResult
from app.services.notifications import NotificationService
from tests.game.tournament_fixtures import _match, _match_debate, _participant, _tournament
from tests.session_fixtures import NOW_UTC, FakeSession


def _patch_advance(
    monkeypatch,
    *,
    tournament,
    participants,
    matches,
    debates,
    scores,
    statement_counts=None,
) -> dict[str, list]:
    calls: dict[str, list] = {"completed": [], "notified": [], "rounds_created": []}
    tournament_round = SimpleNamespace(status="IN_PROGRESS", completed_at=None)
    calls["round"] = [tournament_round]

    async def fake_get_for_update(session, tournament_id):
        del session, tournament_id
        return tournament

    async def fake_participants(session, *, tournament_id, for_update: bool = False):
        del session, tournament_id, for_update
        return list(participants)

    async def fake_matches(session, *, tournament_id, round_number, for_update: bool = False):
        del session, tournament_id, round_number, for_update
        return list(matches)

    async def fake_debates(session, debate_ids):
        del session
        return [debate for debate in debates if debate.id in set(debate_ids)]

    async def fake_scores(session, *, debate_ids):
        del session, debate_ids
        return dict(scores)

    async def fake_counts(session, *, debate_ids):
        del session, debate_ids
        return dict(statement_counts or {})

    async def fake_round(session, *, tournament_id, round_number):
        del session, tournament_id, round_number
        return tournament_round

    async def fake_mark_completed(session, *, tournament_id, champion_user_id, now_utc):
        del session, tournament_id
        calls["completed"].append(champion_user_id)
        tournament.status = "COMPLETED"
        tournament.champion_user_id = champion_user_id
        tournament.completed_at = now_utc
        return True

    async def fake_notify(session, **kwargs):
        del session
        calls["notified"].append((kwargs["user_id"], kwargs["notification_type"]))

    async def fake_create_round(session, *, tournament, round_number, entrants, now_utc):
        del session, tournament, now_utc
        calls["rounds_created"].append((round_number, [item.user_id for item in entrants]))
        return RoundCreationResult(
            round_id=uuid4(),
            round_number=round_number,
            matches_total=len(entrants) // 2,
            byes_total=len(entrants) % 2,
        )

    monkeypatch.setattr(TournamentsRepo, "get_by_id_for_update", fake_get_for_update)
    monkeypatch.setattr(TournamentsRepo, "mark_completed", fake_mark_completed)
    monkeypatch.setattr(TournamentParticipantsRepo, "list_for_tournament", fake_participants)
    monkeypatch.setattr(TournamentMatchesRepo, "list_by_round", fake_matches)
    monkeypatch.setattr(DebatesRepo, "list_by_ids", fake_debates)
    monkeypatch.setattr(DebateVerdictsRepo, "average_scores_by_debate", fake_scores)
    monkeypatch.setattr(DebateStatementsRepo, "count_by_author", fake_counts)
    monkeypatch.setattr(TournamentRoundsRepo, "get_by_number", fake_round)
    monkeypatch.setattr(NotificationService, "notify", fake_notify)
    monkeypatch.setattr(lifecycle, "create_round", fake_create_round)
    return calls


@pytest.mark.asyncio
async def test_king_of_the_hill_final_crowns_champion_and_absorbs_scores(monkeypatch) -> None:
    tournament = _tournament(format_code="KING_OF_THE_HILL", current_round=3, total_rounds=3)
    finalist = _participant(user_id=11, seed=1, wins=1, cumulative_score="120")
    runner_up = _participant(user_id=22, seed=2, wins=2, cumulative_score="110")
    out_early = _participant(user_id=33, seed=3, status="ELIMINATED", cumulative_score="40.5")
    out_first = _participant(user_id=44, seed=4, status="ELIMINATED", cumulative_score="30")
    final_debate = _match_debate(winner_id=11)
    final_match = _match(
        tournament_id=tournament.id,
        round_number=3,
        first=finalist,
        second=runner_up,
        debate_id=final_debate.id,
    )
    calls = _patch_advance(
        monkeypatch,
        tournament=tournament,
        participants=[finalist, runner_up, out_early, out_first],
        matches=[final_match],
        debates=[final_debate],
        scores={final_debate.id: (Decimal("80"), Decimal("70"))},
    )

    result = await advance_tournament(FakeSession(), tournament_id=tournament.id, now_utc=NOW_UTC)

    assert result.outcome == "COMPLETED"
    assert result.champion_user_id == 11
    assert calls["completed"] == [11]
    assert runner_up.status == "ELIMINATED"
    assert runner_up.elimination_round == 3
    assert runner_up.elimination_reason == "Lost the final"
    assert runner_up.cumulative_score == Decimal("180")
    assert finalist.cumulative_score == Decimal("450.5")
    assert calls["round"][0].status == "COMPLETED"
    assert calls["notified"][0] == (11, "TOURNAMENT_CHAMPION")
    assert sorted(user_id for user_id, kind in calls["notified"] if kind == "TOURNAMENT_COMPLETED") == [
        22,
        33,
        44,
    ]


@pytest.mark.asyncio
async def test_advance_waits_while_a_match_debate_is_undecided(monkeypatch) -> None:
    tournament = _tournament(format_code="SINGLE_ELIMINATION", current_round=1, total_rounds=2)
    entrants = [_participant(user_id=user_id, seed=seed) for seed, user_id in enumerate((1, 2, 3, 4), 1)]
    decided = _match_debate(winner_id=1)
    running = _match_debate(winner_id=None, status="ACTIVE", verdict_reached=False)
    matches = [
        _match(tournament_id=tournament.id, round_number=1, first=entrants[0], second=entrants[3], debate_id=decided.id),
        _match(tournament_id=tournament.id, round_number=1, first=entrants[1], second=entrants[2], debate_id=running.id),
    ]
    calls = _patch_advance(
        monkeypatch,
        tournament=tournament,
        participants=entrants,
        matches=matches,
        debates=[decided, running],
        scores={},
    )

    result = await advance_tournament(FakeSession(), tournament_id=tournament.id, now_utc=NOW_UTC)

    assert result.outcome == "WAITING"
    assert result.matches_resolved == 1
    assert entrants[3].status == "ELIMINATED"
    assert tournament.current_round == 1
    assert calls["rounds_created"] == []
    assert calls["completed"] == []


@pytest.mark.asyncio
async def test_king_of_the_hill_non_submitters_bring_the_final_forward(monkeypatch) -> None:
    tournament = _tournament(format_code="KING_OF_THE_HILL", current_round=1, total_rounds=3)
    entrants = [_participant(user_id=user_id, seed=user_id) for user_id in (1, 2, 3, 4)]
    first_debate = _match_debate(winner_id=1)
    second_debate = _match_debate(winner_id=2)
    matches = [
        _match(tournament_id=tournament.id, round_number=1, first=entrants[0], second=entrants[3], debate_id=first_debate.id),
        _match(tournament_id=tournament.id, round_number=1, first=entrants[1], second=entrants[2], debate_id=second_debate.id),
    ]
    calls = _patch_advance(
        monkeypatch,
        tournament=tournament,
        participants=entrants,
        matches=matches,
        debates=[first_debate, second_debate],
        scores={
            first_debate.id: (Decimal("80"), Decimal("0")),
            second_debate.id: (Decimal("70"), Decimal("0")),
        },
        statement_counts={(first_debate.id, 1): 3, (second_debate.id, 2): 3},
    )

    result = await advance_tournament(FakeSession(), tournament_id=tournament.id, now_utc=NOW_UTC)

    assert result.outcome == "ADVANCED"
    assert result.round_number == 2
    assert result.eliminated_total == 2
    assert tournament.total_rounds == 2
    assert tournament.current_round == 2
    assert calls["rounds_created"] == [(2, [1, 2])]
    assert entrants[2].elimination_reason == "Did not submit an argument for this round"
    assert entrants[3].status == "ELIMINATED"


@pytest.mark.asyncio
async def test_advance_ignores_tournaments_not_in_progress(monkeypatch) -> None:
    tournament = _tournament(status="COMPLETED", current_round=2)
    _patch_advance(monkeypatch, tournament=tournament, participants=[], matches=[], debates=[], scores={})

    result = await advance_tournament(FakeSession(), tournament_id=tournament.id, now_utc=NOW_UTC)

    assert result.outcome == "NOOP"
    assert result.round_number == 2


def test_resolve_champion_prefers_most_wins_then_best_seed() -> None:
    steady = _participant(user_id=1, seed=3, wins=2)
    favourite = _participant(user_id=2, seed=1, wins=2)
    beaten = _participant(user_id=3, seed=2, wins=3, status="ELIMINATED")

    champion = resolve_champion({item.id: item for item in (steady, favourite, beaten)})

    assert champion is favourite
