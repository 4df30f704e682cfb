from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.tournament_matches import TournamentMatch


class TournamentMatchesRepo:
    @staticmethod
    async def create_many(session: AsyncSession, *, matches: list[TournamentMatch]) -> None:
        if not matches:
            return
        session.add_all(matches)
        await session.flush()

    @staticmethod
    async def list_by_round(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        round_number: int,
        for_update: bool = False,
    ) -> list[TournamentMatch]:
        stmt = (
            select(TournamentMatch)
            .where(
                TournamentMatch.tournament_id == tournament_id,
                TournamentMatch.round_number == round_number,
            )
            .order_by(TournamentMatch.match_number.asc())
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_by_debate_id(
        session: AsyncSession,
        *,
        debate_id: UUID,
    ) -> TournamentMatch | None:
        stmt = select(TournamentMatch).where(TournamentMatch.debate_id == debate_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
