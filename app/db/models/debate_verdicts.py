from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class DebateVerdict(Base):
    __tablename__ = "debate_verdicts"
    __table_args__ = (
        CheckConstraint(
            "challenger_score >= 0 AND challenger_score <= 100",
            name="ck_debate_verdicts_challenger_score_range",
        ),
        CheckConstraint(
            "opponent_score >= 0 AND opponent_score <= 100",
            name="ck_debate_verdicts_opponent_score_range",
        ),
        Index("idx_debate_verdicts_debate_created", "debate_id", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    debate_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("debates.id", ondelete="CASCADE"),
        nullable=False,
    )
    judge_key: Mapped[str] = mapped_column(String(64), nullable=False)
    winner_id: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=True)
    challenger_score: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    opponent_score: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    reasoning: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
