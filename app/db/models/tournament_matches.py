from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class TournamentMatch(Base):
    __tablename__ = "tournament_matches"
    __table_args__ = (
        UniqueConstraint("round_id", "match_number", name="uq_tournament_matches_round_match"),
        CheckConstraint(
            "status IN ('IN_PROGRESS','COMPLETED','BYE')",
            name="ck_tournament_matches_status",
        ),
        CheckConstraint(
            "participant2_id IS NULL OR participant1_id <> participant2_id",
            name="ck_tournament_matches_no_self_pair",
        ),
        CheckConstraint(
            "(status = 'BYE') = (participant2_id IS NULL)",
            name="ck_tournament_matches_bye_iff_single",
        ),
        Index("idx_tournament_matches_tournament_round", "tournament_id", "round_number"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    tournament_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("tournaments.id", ondelete="CASCADE"),
        nullable=False,
    )
    round_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("tournament_rounds.id", ondelete="CASCADE"),
        nullable=False,
    )
    round_number: Mapped[int] = mapped_column(Integer, nullable=False)
    match_number: Mapped[int] = mapped_column(Integer, nullable=False)
    participant1_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("tournament_participants.id"),
        nullable=False,
    )
    participant2_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("tournament_participants.id"),
        nullable=True,
    )
    debate_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("debates.id"),
        unique=True,
        nullable=True,
    )
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    winner_participant_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("tournament_participants.id"),
        nullable=True,
    )
    participant1_score: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)
    participant2_score: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
