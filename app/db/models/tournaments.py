from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class Tournament(Base):
    __tablename__ = "tournaments"
    __table_args__ = (
        CheckConstraint(
            "format IN ('SINGLE_ELIMINATION','KING_OF_THE_HILL','CHAMPIONSHIP')",
            name="ck_tournaments_format",
        ),
        CheckConstraint(
            "status IN ('UPCOMING','REGISTRATION_OPEN','IN_PROGRESS','COMPLETED')",
            name="ck_tournaments_status",
        ),
        CheckConstraint(
            "max_participants IN (4, 8, 16, 32, 64)",
            name="ck_tournaments_max_participants_bracket",
        ),
        CheckConstraint("current_round >= 0", name="ck_tournaments_current_round_non_negative"),
        CheckConstraint("total_rounds >= 1", name="ck_tournaments_total_rounds_positive"),
        CheckConstraint("prize_pool >= 0", name="ck_tournaments_prize_pool_non_negative"),
        CheckConstraint(
            "round_duration_hours >= 1",
            name="ck_tournaments_round_duration_positive",
        ),
        CheckConstraint(
            "reseed_method IN ('ELO_BASED','REGISTRATION_ORDER')",
            name="ck_tournaments_reseed_method",
        ),
        Index("idx_tournaments_status_start_date", "status", "start_date"),
        Index("idx_tournaments_created_by_created", "created_by", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    format: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(24), nullable=False)
    max_participants: Mapped[int] = mapped_column(Integer, nullable=False)
    current_round: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    total_rounds: Mapped[int] = mapped_column(Integer, nullable=False)
    min_elo: Mapped[int | None] = mapped_column(Integer, nullable=True)
    prize_pool: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    prize_distribution: Mapped[dict[str, object] | None] = mapped_column(JSONB, nullable=True)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    invited_user_ids: Mapped[list[int]] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'[]'::jsonb"),
    )
    reseed_method: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        server_default=text("'ELO_BASED'"),
    )
    round_duration_hours: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        server_default=text("24"),
    )
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    prizes_settled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    champion_user_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("users.id"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
