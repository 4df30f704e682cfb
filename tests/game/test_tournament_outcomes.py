from __future__ import annotations

from decimal import Decimal

from app.game.tournaments.outcomes import apply_match_result
from tests.game.tournament_fixtures import _match, _match_debate, _participant, _tournament
from tests.session_fixtures import NOW_UTC


def _pairing(tournament, *, round_number: int):
    first = _participant(user_id=11, seed=1)
    second = _participant(user_id=22, seed=2)
    match = _match(
        tournament_id=tournament.id,
        round_number=round_number,
        first=first,
        second=second,
    )
    return first, second, match, {first.id: first, second.id: second}


def test_single_elimination_loser_is_eliminated_and_winner_credited() -> None:
    tournament = _tournament(format_code="SINGLE_ELIMINATION", total_rounds=2)
    first, second, match, participants = _pairing(tournament, round_number=1)

    applied = apply_match_result(
        tournament=tournament,
        match=match,
        debate=_match_debate(winner_id=22),
        participants=participants,
        now_utc=NOW_UTC,
        challenger_score=Decimal("61.50"),
        opponent_score=Decimal("74.00"),
    )

    assert applied is True
    assert match.status == "COMPLETED"
    assert match.winner_participant_id == second.id
    assert match.participant2_score == Decimal("74.00")
    assert second.wins == 1
    assert first.status == "ELIMINATED"
    assert first.elimination_round == 1
    assert first.elimination_reason == "Lost round 1 match"


def test_king_of_the_hill_final_loser_is_eliminated_in_the_final_round() -> None:
    tournament = _tournament(format_code="KING_OF_THE_HILL", current_round=3, total_rounds=3)
    first, second, match, participants = _pairing(tournament, round_number=3)

    apply_match_result(
        tournament=tournament,
        match=match,
        debate=_match_debate(winner_id=11),
        participants=participants,
        now_utc=NOW_UTC,
    )

    assert first.status == "ACTIVE"
    assert second.status == "ELIMINATED"
    assert second.elimination_round == 3
    assert second.elimination_reason == "Lost the final"
    assert second.eliminated_at == NOW_UTC


def test_king_of_the_hill_group_round_loser_stays_active() -> None:
    tournament = _tournament(format_code="KING_OF_THE_HILL", current_round=1, total_rounds=3)
    first, second, match, participants = _pairing(tournament, round_number=1)

    applied = apply_match_result(
        tournament=tournament,
        match=match,
        debate=_match_debate(winner_id=11),
        participants=participants,
        now_utc=NOW_UTC,
    )

    assert applied is True
    assert second.status == "ACTIVE"
    assert first.wins == 1


def test_no_winner_verdict_is_a_walkover_to_the_better_seed() -> None:
    tournament = _tournament(format_code="SINGLE_ELIMINATION")
    first, second, match, participants = _pairing(tournament, round_number=1)

    applied = apply_match_result(
        tournament=tournament,
        match=match,
        debate=_match_debate(winner_id=None, status="COMPLETED", verdict_reached=True),
        participants=participants,
        now_utc=NOW_UTC,
    )

    assert applied is True
    assert match.winner_participant_id == first.id
    assert first.wins == 0
    assert second.status == "ELIMINATED"


def test_undecided_debate_leaves_the_match_open() -> None:
    tournament = _tournament(format_code="SINGLE_ELIMINATION")
    first, second, match, participants = _pairing(tournament, round_number=1)

    applied = apply_match_result(
        tournament=tournament,
        match=match,
        debate=_match_debate(winner_id=None, status="ACTIVE", verdict_reached=False),
        participants=participants,
        now_utc=NOW_UTC,
    )

    assert applied is False
    assert match.status == "IN_PROGRESS"
    assert first.status == "ACTIVE"
    assert second.status == "ACTIVE"
