from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.debate_verdicts import DebateVerdict


class DebateVerdictsRepo:
    @staticmethod
    async def create_many(session: AsyncSession, *, verdicts: list[DebateVerdict]) -> None:
        if not verdicts:
            return
        session.add_all(verdicts)
        await session.flush()

    @staticmethod
    async def list_ids_by_debate(session: AsyncSession, *, debate_id: UUID) -> set[UUID]:
        stmt = select(DebateVerdict.id).where(DebateVerdict.debate_id == debate_id)
        result = await session.execute(stmt)
        return set(result.scalars().all())

    @staticmethod
    async def average_scores_by_debate(
        session: AsyncSession,
        *,
        debate_ids: list[UUID],
    ) -> dict[UUID, tuple[Decimal, Decimal]]:
        if not debate_ids:
            return {}
        stmt = (
            select(
                DebateVerdict.debate_id,
                func.avg(DebateVerdict.challenger_score),
                func.avg(DebateVerdict.opponent_score),
            )
            .where(DebateVerdict.debate_id.in_(debate_ids))
            .group_by(DebateVerdict.debate_id)
        )
        result = await session.execute(stmt)
        return {
            debate_id: (
                Decimal(challenger_avg).quantize(Decimal("0.01")),
                Decimal(opponent_avg).quantize(Decimal("0.01")),
            )
            for debate_id, challenger_avg, opponent_avg in result.all()
        }
