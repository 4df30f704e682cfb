from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.game.tournaments.constants import DEFAULT_ROUND_DURATION_HOURS, RESEED_METHOD_ELO_BASED
from app.game.tournaments.service import (
    advance_tournament,
    create_tournament,
    join_tournament,
    start_tournament,
)
from app.game.tournaments.types import (
    TournamentAdvanceResult,
    TournamentJoinResult,
    TournamentSnapshot,
    TournamentStartResult,
)


class TournamentServiceFacade:
    """Facade for tournament orchestration APIs used by request handlers and workers."""

    @staticmethod
    async def create_tournament(
        session: AsyncSession,
        *,
        created_by: int,
        name: str,
        format_code: str,
        max_participants: int,
        now_utc: datetime,
        description: str | None = None,
        min_elo: int | None = None,
        prize_pool: int = 0,
        prize_distribution: dict[str, object] | None = None,
        is_private: bool = False,
        invited_user_ids: Sequence[int] | None = None,
        round_duration_hours: int = DEFAULT_ROUND_DURATION_HOURS,
        start_date: datetime | None = None,
        creator_position: str | None = None,
        reseed_method: str = RESEED_METHOD_ELO_BASED,
    ) -> TournamentSnapshot:
        return await create_tournament(
            session,
            created_by=created_by,
            name=name,
            format_code=format_code,
            max_participants=max_participants,
            now_utc=now_utc,
            description=description,
            min_elo=min_elo,
            prize_pool=prize_pool,
            prize_distribution=prize_distribution,
            is_private=is_private,
            invited_user_ids=invited_user_ids,
            round_duration_hours=round_duration_hours,
            start_date=start_date,
            creator_position=creator_position,
            reseed_method=reseed_method,
        )

    @staticmethod
    async def join_tournament(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        user_id: int,
        now_utc: datetime,
        selected_position: str | None = None,
    ) -> TournamentJoinResult:
        return await join_tournament(
            session,
            tournament_id=tournament_id,
            user_id=user_id,
            now_utc=now_utc,
            selected_position=selected_position,
        )

    @staticmethod
    async def start_tournament(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        requested_by: int,
        now_utc: datetime,
    ) -> TournamentStartResult:
        return await start_tournament(
            session,
            tournament_id=tournament_id,
            requested_by=requested_by,
            now_utc=now_utc,
        )

    @staticmethod
    async def advance_tournament(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        now_utc: datetime,
    ) -> TournamentAdvanceResult:
        return await advance_tournament(session, tournament_id=tournament_id, now_utc=now_utc)
