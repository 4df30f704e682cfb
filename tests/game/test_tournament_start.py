from __future__ import annotations

from datetime import timedelta

import pytest

from app.db.repo.debates_repo import DebatesRepo
from app.db.repo.tournament_matches_repo import TournamentMatchesRepo
from app.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from app.db.repo.tournament_rounds_repo import TournamentRoundsRepo
from app.db.repo.tournaments_repo import TournamentsRepo
from app.economy.prizes.service import PrizeService
from app.game.tournaments import progression, start
from app.game.tournaments.create_join import create_tournament
from app.game.tournaments.errors import (
    TournamentAccessError,
    TournamentInsufficientParticipantsError,
    TournamentPositionRequiredError,
    TournamentValidationError,
)
from app.game.tournaments.service_facade import TournamentServiceFacade
from app.game.tournaments.start import start_locked_tournament, start_tournament
from app.game.tournaments.types import TournamentAdvanceResult
from app.services.notifications import NotificationService
from app.services.ratings import RatingService
from tests.game.tournament_fixtures import _participant, _tournament
from tests.session_fixtures import NOW_UTC, FakeSession, FakeSessionFactory


def _patch_round_writes(monkeypatch) -> dict[str, list]:
    writes: dict[str, list] = {"rounds": [], "debates": [], "matches": [], "notified": []}

    async def fake_create_round(session, *, tournament_round):
        del session
        writes["rounds"].append(tournament_round)
        return tournament_round

    async def fake_create_debates(session, *, debates):
        del session
        writes["debates"].extend(debates)

    async def fake_create_matches(session, *, matches):
        del session
        writes["matches"].extend(matches)

    async def fake_notify(session, **kwargs):
        del session
        writes["notified"].append(kwargs["message"])

    monkeypatch.setattr(TournamentRoundsRepo, "create", fake_create_round)
    monkeypatch.setattr(DebatesRepo, "create_many", fake_create_debates)
    monkeypatch.setattr(TournamentMatchesRepo, "create_many", fake_create_matches)
    monkeypatch.setattr(NotificationService, "notify", fake_notify)
    return writes


@pytest.mark.asyncio
async def test_start_reseeds_activates_and_opens_round_one(monkeypatch) -> None:
    writes = _patch_round_writes(monkeypatch)
    tournament = _tournament(status="REGISTRATION_OPEN", current_round=0, total_rounds=2)
    participants = [
        _participant(user_id=1, seed=1, status="REGISTERED", elo_at_start=1100),
        _participant(user_id=2, seed=2, status="REGISTERED", elo_at_start=1500),
        _participant(user_id=3, seed=3, status="REGISTERED", elo_at_start=1300),
    ]

    result = await start_locked_tournament(
        FakeSession(),
        tournament=tournament,
        participants=participants,
        now_utc=NOW_UTC,
    )

    assert result.round_number == 1
    assert result.matches_total == 1
    assert result.byes_total == 1
    assert result.snapshot.status == "IN_PROGRESS"
    assert tournament.current_round == 1
    assert tournament.total_rounds == 2
    assert tournament.started_at == NOW_UTC
    assert {item.status for item in participants} == {"ACTIVE"}
    assert [(item.user_id, item.seed) for item in participants] == [(1, 3), (2, 1), (3, 2)]

    debate = writes["debates"][0]
    assert (debate.challenger_id, debate.opponent_id) == (3, 1)
    assert debate.status == "ACTIVE"
    assert debate.total_rounds == 3
    assert debate.round_deadline == NOW_UTC + timedelta(hours=24)

    bye = next(match for match in writes["matches"] if match.status == "BYE")
    assert bye.participant1_id == participants[1].id
    assert bye.winner_participant_id == participants[1].id
    assert bye.debate_id is None
    assert len(writes["notified"]) == 3


@pytest.mark.asyncio
async def test_start_king_of_the_hill_plans_group_rounds_and_final(monkeypatch) -> None:
    _patch_round_writes(monkeypatch)
    tournament = _tournament(
        format_code="KING_OF_THE_HILL",
        status="REGISTRATION_OPEN",
        max_participants=8,
        current_round=0,
    )
    participants = [_participant(user_id=user_id, seed=user_id, status="REGISTERED") for user_id in range(1, 9)]

    await start_locked_tournament(
        FakeSession(),
        tournament=tournament,
        participants=participants,
        now_utc=NOW_UTC,
    )

    assert tournament.total_rounds == 5


@pytest.mark.asyncio
async def test_start_is_the_only_seed_reassignment(monkeypatch) -> None:
    _patch_round_writes(monkeypatch)
    tournament = _tournament(status="REGISTRATION_OPEN", current_round=0)
    participants = [
        _participant(user_id=1, seed=1, status="REGISTERED", elo_at_start=1000),
        _participant(user_id=2, seed=2, status="REGISTERED", elo_at_start=1800),
    ]
    reseed_calls: list[str] = []
    original_reseed = start.reseed_participants

    def counting_reseed(items, *, method):
        reseed_calls.append(method)
        return original_reseed(items, method=method)

    monkeypatch.setattr(start, "reseed_participants", counting_reseed)

    await start_locked_tournament(
        FakeSession(),
        tournament=tournament,
        participants=participants,
        now_utc=NOW_UTC,
    )

    assert reseed_calls == ["ELO_BASED"]
    assert [(item.user_id, item.seed) for item in participants] == [(1, 2), (2, 1)]
    assert not hasattr(TournamentServiceFacade, "reseed_tournament")

@pytest.mark.asyncio
async def test_start_needs_two_participants(monkeypatch) -> None:
    _patch_round_writes(monkeypatch)
    tournament = _tournament(status="REGISTRATION_OPEN", current_round=0)

    with pytest.raises(TournamentInsufficientParticipantsError):
        await start_locked_tournament(
            FakeSession(),
            tournament=tournament,
            participants=[_participant(user_id=1, seed=1, status="REGISTERED")],
            now_utc=NOW_UTC,
        )

    assert tournament.status == "REGISTRATION_OPEN"


@pytest.mark.asyncio
async def test_manual_start_is_reserved_for_the_creator(monkeypatch) -> None:
    tournament = _tournament(status="REGISTRATION_OPEN", created_by=1)

    async def fake_get_for_update(session, tournament_id):
        del session, tournament_id
        return tournament

    async def fake_list(session, *, tournament_id, for_update: bool = False):
        raise AssertionError("participants must not be loaded")

    monkeypatch.setattr(TournamentsRepo, "get_by_id_for_update", fake_get_for_update)
    monkeypatch.setattr(TournamentParticipantsRepo, "list_for_tournament", fake_list)

    with pytest.raises(TournamentAccessError):
        await start_tournament(FakeSession(), tournament_id=tournament.id, now_utc=NOW_UTC, requested_by=9)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "error_type"),
    [
        ({"max_participants": 6}, TournamentValidationError),
        ({"format_code": "ROUND_ROBIN"}, TournamentValidationError),
        ({"name": "   "}, TournamentValidationError),
        ({"is_private": True}, TournamentValidationError),
        ({"prize_pool": -1}, TournamentValidationError),
        ({"format_code": "CHAMPIONSHIP"}, TournamentPositionRequiredError),
    ],
)
async def test_create_tournament_rejects_invalid_settings(monkeypatch, overrides, error_type) -> None:
    async def fail_create(session, **kwargs):
        raise AssertionError("nothing should be written")

    monkeypatch.setattr(TournamentsRepo, "create", fail_create)
    arguments = {
        "created_by": 1,
        "name": "Spring Open",
        "format_code": "SINGLE_ELIMINATION",
        "max_participants": 8,
        "now_utc": NOW_UTC,
    }
    arguments.update(overrides)

    with pytest.raises(error_type):
        await create_tournament(FakeSession(), **arguments)


@pytest.mark.asyncio
async def test_create_tournament_registers_creator_as_first_seed(monkeypatch) -> None:
    created: dict[str, object] = {}

    async def fake_create_tournament(session, *, tournament):
        del session
        created["tournament"] = tournament
        return tournament

    async def fake_create_participant(session, *, participant):
        del session
        created["participant"] = participant
        return participant

    async def fake_elo(session, *, user_id):
        del session, user_id
        return 1450

    monkeypatch.setattr(TournamentsRepo, "create", fake_create_tournament)
    monkeypatch.setattr(TournamentParticipantsRepo, "create", fake_create_participant)
    monkeypatch.setattr(RatingService, "get_user_elo", fake_elo)

    snapshot = await create_tournament(
        FakeSession(),
        created_by=1,
        name="  Championship Cup ",
        format_code="CHAMPIONSHIP",
        max_participants=16,
        now_utc=NOW_UTC,
        creator_position="con",
        invited_user_ids=[1, 5, 5],
    )

    assert snapshot.name == "Championship Cup"
    assert snapshot.status == "UPCOMING"
    assert snapshot.total_rounds == 4
    assert created["tournament"].invited_user_ids == [5]
    participant = created["participant"]
    assert (participant.user_id, participant.seed, participant.elo_at_start) == (1, 1, 1450)
    assert participant.selected_position == "CON"
    assert participant.status == "REGISTERED"


@pytest.mark.asyncio
async def test_progress_tournament_pays_prizes_only_after_completion(monkeypatch) -> None:
    tournament = _tournament()
    outcomes = iter(["WAITING", "COMPLETED"])
    paid: list[object] = []

    async def fake_advance(session, *, tournament_id, now_utc):
        del session, now_utc
        return TournamentAdvanceResult(
            tournament_id=tournament_id,
            outcome=next(outcomes),
            round_number=2,
            champion_user_id=7,
        )

    async def fake_distribute(*, session_factory, tournament_id, now_utc):
        del session_factory, now_utc
        paid.append(tournament_id)
        return {"credited_total": 3}

    monkeypatch.setattr(progression, "advance_tournament", fake_advance)
    monkeypatch.setattr(PrizeService, "distribute_tournament_prizes", fake_distribute)
    session_factory = FakeSessionFactory()

    waiting = await progression.progress_tournament(
        session_factory=session_factory,
        tournament_id=tournament.id,
        now_utc=NOW_UTC,
    )
    completed = await progression.progress_tournament(
        session_factory=session_factory,
        tournament_id=tournament.id,
        now_utc=NOW_UTC,
    )

    assert "prizes" not in waiting
    assert completed["prizes"] == {"credited_total": 3}
    assert paid == [tournament.id]
