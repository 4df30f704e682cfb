from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.tournament_participants import TournamentParticipant
from app.db.models.tournaments import Tournament


class TournamentsRepo:
    @staticmethod
    async def create(session: AsyncSession, *, tournament: Tournament) -> Tournament:
        session.add(tournament)
        await session.flush()
        return tournament

    @staticmethod
    async def get_by_id(session: AsyncSession, tournament_id: UUID) -> Tournament | None:
        return await session.get(Tournament, tournament_id)

    @staticmethod
    async def get_by_id_for_update(
        session: AsyncSession,
        tournament_id: UUID,
        *,
        skip_locked: bool = False,
    ) -> Tournament | None:
        stmt = (
            select(Tournament)
            .where(Tournament.id == tournament_id)
            .with_for_update(skip_locked=skip_locked)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_auto_start_candidate_ids(
        session: AsyncSession,
        *,
        now_utc: datetime,
        min_participants: int,
        limit: int,
    ) -> list[UUID]:
        resolved_limit = max(1, int(limit))
        participants_total = (
            select(func.count(TournamentParticipant.id))
            .where(TournamentParticipant.tournament_id == Tournament.id)
            .correlate(Tournament)
            .scalar_subquery()
        )
        stmt = (
            select(Tournament.id)
            .where(
                Tournament.status == "REGISTRATION_OPEN",
                or_(
                    participants_total >= Tournament.max_participants,
                    and_(
                        Tournament.start_date.is_not(None),
                        Tournament.start_date <= now_utc,
                        participants_total >= min_participants,
                    ),
                ),
            )
            .order_by(Tournament.created_at.asc())
            .limit(resolved_limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_in_progress_ids(session: AsyncSession, *, limit: int) -> list[UUID]:
        resolved_limit = max(1, int(limit))
        stmt = (
            select(Tournament.id)
            .where(Tournament.status == "IN_PROGRESS")
            .order_by(Tournament.started_at.asc())
            .limit(resolved_limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def mark_completed(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        champion_user_id: int | None,
        now_utc: datetime,
    ) -> bool:
        stmt = (
            update(Tournament)
            .where(
                Tournament.id == tournament_id,
                Tournament.status == "IN_PROGRESS",
            )
            .values(
                status="COMPLETED",
                champion_user_id=champion_user_id,
                completed_at=now_utc,
            )
            .returning(Tournament.id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def list_prize_settlement_candidate_ids(
        session: AsyncSession,
        *,
        limit: int,
    ) -> list[UUID]:
        resolved_limit = max(1, int(limit))
        stmt = (
            select(Tournament.id)
            .where(
                Tournament.status == "COMPLETED",
                Tournament.prize_pool > 0,
                Tournament.prizes_settled_at.is_(None),
            )
            .order_by(Tournament.completed_at.asc())
            .limit(resolved_limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def mark_prizes_settled(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        now_utc: datetime,
    ) -> bool:
        stmt = (
            update(Tournament)
            .where(
                Tournament.id == tournament_id,
                Tournament.prizes_settled_at.is_(None),
            )
            .values(prizes_settled_at=now_utc)
            .returning(Tournament.id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
