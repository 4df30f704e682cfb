from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.debate_statements import DebateStatement


class DebateStatementsRepo:
    @staticmethod
    async def create(session: AsyncSession, *, statement: DebateStatement) -> DebateStatement:
        session.add(statement)
        await session.flush()
        return statement

    @staticmethod
    async def list_rounds_by_debate(session: AsyncSession, *, debate_id: UUID) -> list[int]:
        stmt = (
            select(DebateStatement.round)
            .where(DebateStatement.debate_id == debate_id)
            .order_by(DebateStatement.round.asc(), DebateStatement.id.asc())
        )
        result = await session.execute(stmt)
        return [int(value) for value in result.scalars().all()]

    @staticmethod
    async def count_by_author(
        session: AsyncSession,
        *,
        debate_ids: list[UUID],
    ) -> dict[tuple[UUID, int], int]:
        if not debate_ids:
            return {}
        stmt = (
            select(
                DebateStatement.debate_id,
                DebateStatement.author_id,
                func.count(DebateStatement.id),
            )
            .where(DebateStatement.debate_id.in_(debate_ids))
            .group_by(DebateStatement.debate_id, DebateStatement.author_id)
        )
        result = await session.execute(stmt)
        return {
            (debate_id, int(author_id)): int(total)
            for debate_id, author_id, total in result.all()
        }
