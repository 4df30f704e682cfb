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


class Debate(Base):
    __tablename__ = "debates"
    __table_args__ = (
        CheckConstraint(
            "status IN ('WAITING','ACTIVE','COMPLETED','VERDICT_READY','APPEALED')",
            name="ck_debates_status",
        ),
        CheckConstraint(
            "appeal_status IS NULL OR appeal_status IN ('PENDING','RESOLVED')",
            name="ck_debates_appeal_status",
        ),
        CheckConstraint("appeal_count IN (0, 1)", name="ck_debates_appeal_count_single"),
        CheckConstraint(
            "current_round >= 1 AND current_round <= total_rounds",
            name="ck_debates_current_round_range",
        ),
        CheckConstraint("round_duration_seconds > 0", name="ck_debates_round_duration_positive"),
        CheckConstraint(
            "(status = 'ACTIVE') = (round_deadline IS NOT NULL)",
            name="ck_debates_round_deadline_iff_active",
        ),
        CheckConstraint(
            "opponent_id IS NULL OR opponent_id <> challenger_id",
            name="ck_debates_no_self_debate",
        ),
        Index("idx_debates_status_round_deadline", "status", "round_deadline"),
        Index("idx_debates_appeal_status_appealed_at", "appeal_status", "appealed_at"),
        Index("idx_debates_challenger_created", "challenger_id", "created_at"),
        Index("idx_debates_opponent_created", "opponent_id", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    topic: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    challenger_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    opponent_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("users.id"),
        nullable=True,
    )
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    current_round: Mapped[int] = mapped_column(Integer, nullable=False)
    total_rounds: Mapped[int] = mapped_column(Integer, nullable=False)
    round_duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    round_deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    winner_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=True)
    verdict_reached: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("false"),
    )
    verdict_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    appeal_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    appealed_by: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("users.id"),
        nullable=True,
    )
    appealed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    appeal_status: Mapped[str | None] = mapped_column(String(16), nullable=True)
    original_winner_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("users.id"),
        nullable=True,
    )
    appeal_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    appealed_statements: Mapped[list[str] | None] = mapped_column(JSONB, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
