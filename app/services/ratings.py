from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError
from app.db.repo.users_repo import UsersRepo


class UserNotFoundError(NotFoundError):
    pass


class RatingService:
    @staticmethod
    async def get_user_elo(session: AsyncSession, *, user_id: int) -> int:
        elo_rating = await UsersRepo.get_elo_rating(session, int(user_id))
        if elo_rating is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return elo_rating
