from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.economy.prizes.service import PrizeService
from app.game.tournaments.lifecycle import advance_tournament


async def progress_tournament(
    *,
    session_factory: async_sessionmaker[AsyncSession],
    tournament_id: UUID,
    now_utc: datetime,
) -> dict[str, object]:
    async with session_factory.begin() as session:
        result = await advance_tournament(session, tournament_id=tournament_id, now_utc=now_utc)

    payload = result.as_payload()
    if result.completed:
        payload["prizes"] = await PrizeService.distribute_tournament_prizes(
            session_factory=session_factory,
            tournament_id=tournament_id,
            now_utc=now_utc,
        )
    return payload
