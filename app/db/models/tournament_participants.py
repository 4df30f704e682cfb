from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class TournamentParticipant(Base):
    __tablename__ = "tournament_participants"
    __table_args__ = (
        UniqueConstraint(
            "tournament_id",
            "user_id",
            name="uq_tournament_participants_tournament_user",
        ),
        CheckConstraint(
            "status IN ('REGISTERED','ACTIVE','ELIMINATED')",
            name="ck_tournament_participants_status",
        ),
        CheckConstraint(
            "selected_position IS NULL OR selected_position IN ('PRO','CON')",
            name="ck_tournament_participants_selected_position",
        ),
        CheckConstraint("wins >= 0", name="ck_tournament_participants_wins_non_negative"),
        CheckConstraint("seed >= 1", name="ck_tournament_participants_seed_positive"),
        Index("idx_tournament_participants_tournament_status", "tournament_id", "status"),
        Index("idx_tournament_participants_user", "user_id"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    tournament_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("tournaments.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    seed: Mapped[int] = mapped_column(Integer, nullable=False)
    elo_at_start: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    cumulative_score: Mapped[Decimal] = mapped_column(
        Numeric(8, 2),
        nullable=False,
        server_default=text("0"),
    )
    selected_position: Mapped[str | None] = mapped_column(String(8), nullable=True)
    registered_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    eliminated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    elimination_round: Mapped[int | None] = mapped_column(Integer, nullable=True)
    elimination_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
