from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class DebateStatement(Base):
    __tablename__ = "debate_statements"
    __table_args__ = (
        UniqueConstraint(
            "debate_id",
            "author_id",
            "round",
            name="uq_debate_statements_debate_author_round",
        ),
        CheckConstraint("round >= 1", name="ck_debate_statements_round_positive"),
        Index("idx_debate_statements_debate_round", "debate_id", "round"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    debate_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("debates.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    round: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
