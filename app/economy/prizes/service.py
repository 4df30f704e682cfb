from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db.models.ledger_entries import LedgerEntry
from app.db.repo.ledger_repo import LedgerRepo
from app.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from app.db.repo.tournaments_repo import TournamentsRepo
from app.db.repo.users_repo import UsersRepo
from app.economy.prizes.constants import (
    NOTIFICATION_TYPE_TOURNAMENT_PRIZE,
    PRIZE_LEDGER_ASSET,
    PRIZE_LEDGER_ENTRY_TYPE,
    PRIZE_LEDGER_SOURCE,
    PRIZE_NOTIFICATION_TITLES,
)
from app.economy.prizes.distribution import (
    compute_final_standings,
    compute_prize_awards,
    parse_prize_distribution,
)
from app.economy.prizes.types import PrizeAward, StandingEntry
from app.game.tournaments.constants import TOURNAMENT_STATUS_COMPLETED
from app.services.notifications import NotificationService

logger = structlog.get_logger("app.economy.prizes")


def _prize_idempotency_key(*, tournament_id: UUID, place: int) -> str:
    return f"tournament_prize:{tournament_id}:{place}"


class PrizeService:
    @staticmethod
    async def credit_award(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        tournament_name: str,
        award: PrizeAward,
        now_utc: datetime,
    ) -> bool:
        idempotency_key = _prize_idempotency_key(tournament_id=tournament_id, place=award.place)
        existing = await LedgerRepo.get_by_idempotency_key(session, idempotency_key)
        if existing is not None:
            return False

        user = await UsersRepo.get_by_id_for_update(session, award.user_id)
        if user is None:
            raise ValueError(f"prize recipient {award.user_id} not found")

        balance_after = int(user.coins_balance) + award.amount
        user.coins_balance = balance_after
        await LedgerRepo.create(
            session,
            entry=LedgerEntry(
                user_id=award.user_id,
                entry_type=PRIZE_LEDGER_ENTRY_TYPE,
                asset=PRIZE_LEDGER_ASSET,
                direction="CREDIT",
                amount=award.amount,
                balance_after=balance_after,
                description=f"{award.place_label} place prize - Tournament: {tournament_name}",
                source=PRIZE_LEDGER_SOURCE,
                idempotency_key=idempotency_key,
                metadata_={
                    "tournament_id": str(tournament_id),
                    "place": award.place,
                    "place_label": award.place_label,
                    "percentage": str(award.percentage),
                },
                created_at=now_utc,
            ),
        )
        await NotificationService.notify(
            session,
            user_id=award.user_id,
            notification_type=NOTIFICATION_TYPE_TOURNAMENT_PRIZE,
            title=PRIZE_NOTIFICATION_TITLES.get(
                award.place_label,
                f"🎖 {award.place_label} Place!",
            ),
            message=(
                f'You finished {award.place_label} in "{tournament_name}" '
                f"and won {award.amount} coins."
            ),
            tournament_id=tournament_id,
            now_utc=now_utc,
        )
        return True

    @staticmethod
    async def distribute_tournament_prizes(
        *,
        session_factory: async_sessionmaker[AsyncSession],
        tournament_id: UUID,
        now_utc: datetime,
    ) -> dict[str, object]:
        async with session_factory.begin() as session:
            tournament = await TournamentsRepo.get_by_id(session, tournament_id)
            if tournament is None:
                return {"tournament_id": str(tournament_id), "places_total": 0, "skipped": "missing"}
            if tournament.status != TOURNAMENT_STATUS_COMPLETED:
                return {
                    "tournament_id": str(tournament_id),
                    "places_total": 0,
                    "skipped": "not_completed",
                }
            if tournament.prizes_settled_at is not None:
                return {
                    "tournament_id": str(tournament_id),
                    "places_total": 0,
                    "skipped": "already_settled",
                }
            tournament_name = tournament.name
            prize_pool = int(tournament.prize_pool)
            distribution = parse_prize_distribution(tournament.prize_distribution)
            participants = await TournamentParticipantsRepo.list_for_tournament(
                session,
                tournament_id=tournament_id,
            )
            standings = compute_final_standings(
                [
                    StandingEntry(
                        participant_id=participant.id,
                        user_id=int(participant.user_id),
                        wins=int(participant.wins),
                        seed=participant.seed,
                    )
                    for participant in participants
                ]
            )

        awards = compute_prize_awards(
            standings=standings,
            distribution=distribution,
            prize_pool=prize_pool,
        )
        credited_total = 0
        skipped_total = 0
        failed_total = 0
        amount_total = 0
        for award in awards:
            if award.amount <= 0:
                skipped_total += 1
                continue
            try:
                async with session_factory.begin() as session:
                    credited = await PrizeService.credit_award(
                        session,
                        tournament_id=tournament_id,
                        tournament_name=tournament_name,
                        award=award,
                        now_utc=now_utc,
                    )
            except Exception:
                failed_total += 1
                logger.exception(
                    "tournament_prize_place_failed",
                    tournament_id=str(tournament_id),
                    place=award.place,
                    user_id=award.user_id,
                )
                continue
            if credited:
                credited_total += 1
                amount_total += award.amount
            else:
                skipped_total += 1

        # Unsettled tournaments are picked up again by the prize settlement sweep.
        settled = False
        if failed_total == 0:
            async with session_factory.begin() as session:
                settled = await TournamentsRepo.mark_prizes_settled(
                    session,
                    tournament_id=tournament_id,
                    now_utc=now_utc,
                )

        result: dict[str, object] = {
            "tournament_id": str(tournament_id),
            "prize_pool": prize_pool,
            "places_total": len(awards),
            "credited_total": credited_total,
            "skipped_total": skipped_total,
            "failed_total": failed_total,
            "amount_total": amount_total,
            "settled": settled,
        }
        logger.info("tournament_prizes_distributed", **result)
        return result
