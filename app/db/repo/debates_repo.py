from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.debates import Debate


class DebatesRepo:
    @staticmethod
    async def create(session: AsyncSession, *, debate: Debate) -> Debate:
        session.add(debate)
        await session.flush()
        return debate

    @staticmethod
    async def create_many(session: AsyncSession, *, debates: list[Debate]) -> None:
        if not debates:
            return
        session.add_all(debates)
        await session.flush()

    @staticmethod
    async def get_by_id(session: AsyncSession, debate_id: UUID) -> Debate | None:
        return await session.get(Debate, debate_id)

    @staticmethod
    async def get_by_id_for_update(
        session: AsyncSession,
        debate_id: UUID,
        *,
        skip_locked: bool = False,
    ) -> Debate | None:
        stmt = (
            select(Debate)
            .where(Debate.id == debate_id)
            .with_for_update(skip_locked=skip_locked)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_by_ids(session: AsyncSession, debate_ids: list[UUID]) -> list[Debate]:
        if not debate_ids:
            return []
        stmt = select(Debate).where(Debate.id.in_(debate_ids))
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_due_round_deadline_ids(
        session: AsyncSession,
        *,
        now_utc: datetime,
        limit: int,
    ) -> list[UUID]:
        resolved_limit = max(1, int(limit))
        stmt = (
            select(Debate.id)
            .where(
                Debate.status == "ACTIVE",
                Debate.round_deadline.is_not(None),
                Debate.round_deadline <= now_utc,
            )
            .order_by(Debate.round_deadline.asc())
            .limit(resolved_limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_stale_pending_appeal_ids(
        session: AsyncSession,
        *,
        appealed_before_utc: datetime,
        limit: int,
    ) -> list[UUID]:
        resolved_limit = max(1, int(limit))
        stmt = (
            select(Debate.id)
            .where(
                Debate.status == "APPEALED",
                Debate.appeal_status == "PENDING",
                Debate.appealed_at <= appealed_before_utc,
            )
            .order_by(Debate.appealed_at.asc())
            .limit(resolved_limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def apply_round_transition(
        session: AsyncSession,
        *,
        debate_id: UUID,
        expected_round: int,
        expected_deadline: datetime | None,
        values: dict[str, object],
    ) -> bool:
        deadline_clause = (
            Debate.round_deadline.is_(None)
            if expected_deadline is None
            else Debate.round_deadline == expected_deadline
        )
        stmt = (
            update(Debate)
            .where(
                Debate.id == debate_id,
                Debate.status == "ACTIVE",
                Debate.current_round == expected_round,
                deadline_clause,
            )
            .values(**values)
            .returning(Debate.id)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
