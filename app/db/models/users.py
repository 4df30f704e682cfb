from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("elo_rating >= 0", name="ck_users_elo_rating_non_negative"),
        CheckConstraint("coins_balance >= 0", name="ck_users_coins_balance_non_negative"),
        Index("idx_users_username", "username"),
        Index("idx_users_elo_rating", "elo_rating"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    username: Mapped[str | None] = mapped_column(Text, nullable=True)
    elo_rating: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("1200"))
    coins_balance: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )
