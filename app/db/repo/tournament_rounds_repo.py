from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.tournament_rounds import TournamentRound


class TournamentRoundsRepo:
    @staticmethod
    async def create(session: AsyncSession, *, tournament_round: TournamentRound) -> TournamentRound:
        session.add(tournament_round)
        await session.flush()
        return tournament_round

    @staticmethod
    async def get_by_number(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        round_number: int,
    ) -> TournamentRound | None:
        stmt = select(TournamentRound).where(
            TournamentRound.tournament_id == tournament_id,
            TournamentRound.round_number == round_number,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
