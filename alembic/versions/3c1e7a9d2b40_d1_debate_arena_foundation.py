"""d1_debate_arena_foundation

Revision ID: 3c1e7a9d2b40
Revises:
Create Date: 2026-10-17 00:00:00.000000
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "3c1e7a9d2b40"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("username", sa.Text(), nullable=True),
        sa.Column("elo_rating", sa.Integer(), nullable=False, server_default="1200"),
        sa.Column("coins_balance", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint("elo_rating >= 0", name="ck_users_elo_rating_non_negative"),
        sa.CheckConstraint("coins_balance >= 0", name="ck_users_coins_balance_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_username", "users", ["username"])
    op.create_index("idx_users_elo_rating", "users", ["elo_rating"])

    op.create_table(
        "debates",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("topic", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=True),
        sa.Column("challenger_id", sa.BigInteger(), nullable=False),
        sa.Column("opponent_id", sa.BigInteger(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("current_round", sa.Integer(), nullable=False),
        sa.Column("total_rounds", sa.Integer(), nullable=False),
        sa.Column("round_duration_seconds", sa.Integer(), nullable=False),
        sa.Column("round_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("winner_id", sa.BigInteger(), nullable=True),
        sa.Column("verdict_reached", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("verdict_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("appeal_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("appealed_by", sa.BigInteger(), nullable=True),
        sa.Column("appealed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("appeal_status", sa.String(length=16), nullable=True),
        sa.Column("original_winner_id", sa.BigInteger(), nullable=True),
        sa.Column("appeal_reason", sa.Text(), nullable=True),
        sa.Column("appealed_statements", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('WAITING','ACTIVE','COMPLETED','VERDICT_READY','APPEALED')",
            name="ck_debates_status",
        ),
        sa.CheckConstraint(
            "appeal_status IS NULL OR appeal_status IN ('PENDING','RESOLVED')",
            name="ck_debates_appeal_status",
        ),
        sa.CheckConstraint("appeal_count IN (0, 1)", name="ck_debates_appeal_count_single"),
        sa.CheckConstraint(
            "current_round >= 1 AND current_round <= total_rounds",
            name="ck_debates_current_round_range",
        ),
        sa.CheckConstraint("round_duration_seconds > 0", name="ck_debates_round_duration_positive"),
        sa.CheckConstraint(
            "(status = 'ACTIVE') = (round_deadline IS NOT NULL)",
            name="ck_debates_round_deadline_iff_active",
        ),
        sa.CheckConstraint(
            "opponent_id IS NULL OR opponent_id <> challenger_id",
            name="ck_debates_no_self_debate",
        ),
        sa.ForeignKeyConstraint(["challenger_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["opponent_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["winner_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["appealed_by"], ["users.id"]),
        sa.ForeignKeyConstraint(["original_winner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_debates_status_round_deadline", "debates", ["status", "round_deadline"])
    op.create_index(
        "idx_debates_appeal_status_appealed_at",
        "debates",
        ["appeal_status", "appealed_at"],
    )
    op.create_index("idx_debates_challenger_created", "debates", ["challenger_id", "created_at"])
    op.create_index("idx_debates_opponent_created", "debates", ["opponent_id", "created_at"])

    op.create_table(
        "debate_statements",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("debate_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("author_id", sa.BigInteger(), nullable=False),
        sa.Column("round", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("round >= 1", name="ck_debate_statements_round_positive"),
        sa.ForeignKeyConstraint(["debate_id"], ["debates.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "debate_id",
            "author_id",
            "round",
            name="uq_debate_statements_debate_author_round",
        ),
    )
    op.create_index(
        "idx_debate_statements_debate_round",
        "debate_statements",
        ["debate_id", "round"],
    )

    op.create_table(
        "debate_verdicts",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("debate_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("judge_key", sa.String(length=64), nullable=False),
        sa.Column("winner_id", sa.BigInteger(), nullable=True),
        sa.Column("challenger_score", sa.Numeric(5, 2), nullable=False),
        sa.Column("opponent_score", sa.Numeric(5, 2), nullable=False),
        sa.Column("reasoning", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "challenger_score >= 0 AND challenger_score <= 100",
            name="ck_debate_verdicts_challenger_score_range",
        ),
        sa.CheckConstraint(
            "opponent_score >= 0 AND opponent_score <= 100",
            name="ck_debate_verdicts_opponent_score_range",
        ),
        sa.ForeignKeyConstraint(["debate_id"], ["debates.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["winner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_debate_verdicts_debate_created",
        "debate_verdicts",
        ["debate_id", "created_at"],
    )

    op.create_table(
        "tournaments",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_by", sa.BigInteger(), nullable=False),
        sa.Column("format", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=24), nullable=False),
        sa.Column("max_participants", sa.Integer(), nullable=False),
        sa.Column("current_round", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_rounds", sa.Integer(), nullable=False),
        sa.Column("min_elo", sa.Integer(), nullable=True),
        sa.Column("prize_pool", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("prize_distribution", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column(
            "invited_user_ids",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "reseed_method",
            sa.String(length=16),
            nullable=False,
            server_default=sa.text("'ELO_BASED'"),
        ),
        sa.Column("round_duration_hours", sa.Integer(), nullable=False, server_default="24"),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("prizes_settled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("champion_user_id", sa.BigInteger(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "format IN ('SINGLE_ELIMINATION','KING_OF_THE_HILL','CHAMPIONSHIP')",
            name="ck_tournaments_format",
        ),
        sa.CheckConstraint(
            "status IN ('UPCOMING','REGISTRATION_OPEN','IN_PROGRESS','COMPLETED')",
            name="ck_tournaments_status",
        ),
        sa.CheckConstraint(
            "max_participants IN (4, 8, 16, 32, 64)",
            name="ck_tournaments_max_participants_bracket",
        ),
        sa.CheckConstraint("current_round >= 0", name="ck_tournaments_current_round_non_negative"),
        sa.CheckConstraint("total_rounds >= 1", name="ck_tournaments_total_rounds_positive"),
        sa.CheckConstraint("prize_pool >= 0", name="ck_tournaments_prize_pool_non_negative"),
        sa.CheckConstraint(
            "round_duration_hours >= 1",
            name="ck_tournaments_round_duration_positive",
        ),
        sa.CheckConstraint(
            "reseed_method IN ('ELO_BASED','REGISTRATION_ORDER')",
            name="ck_tournaments_reseed_method",
        ),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.ForeignKeyConstraint(["champion_user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tournaments_status_start_date", "tournaments", ["status", "start_date"])
    op.create_index(
        "idx_tournaments_created_by_created",
        "tournaments",
        ["created_by", "created_at"],
    )

    op.create_table(
        "tournament_participants",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("tournament_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("seed", sa.Integer(), nullable=False),
        sa.Column("elo_at_start", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("wins", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("cumulative_score", sa.Numeric(8, 2), nullable=False, server_default="0"),
        sa.Column("selected_position", sa.String(length=8), nullable=True),
        sa.Column("registered_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("eliminated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("elimination_round", sa.Integer(), nullable=True),
        sa.Column("elimination_reason", sa.Text(), nullable=True),
        sa.CheckConstraint(
            "status IN ('REGISTERED','ACTIVE','ELIMINATED')",
            name="ck_tournament_participants_status",
        ),
        sa.CheckConstraint(
            "selected_position IS NULL OR selected_position IN ('PRO','CON')",
            name="ck_tournament_participants_selected_position",
        ),
        sa.CheckConstraint("wins >= 0", name="ck_tournament_participants_wins_non_negative"),
        sa.CheckConstraint("seed >= 1", name="ck_tournament_participants_seed_positive"),
        sa.ForeignKeyConstraint(["tournament_id"], ["tournaments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "tournament_id",
            "user_id",
            name="uq_tournament_participants_tournament_user",
        ),
    )
    op.create_index(
        "idx_tournament_participants_tournament_status",
        "tournament_participants",
        ["tournament_id", "status"],
    )
    op.create_index("idx_tournament_participants_user", "tournament_participants", ["user_id"])

    op.create_table(
        "tournament_rounds",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("tournament_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("round_number", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("round_number >= 1", name="ck_tournament_rounds_round_number_positive"),
        sa.CheckConstraint(
            "status IN ('IN_PROGRESS','COMPLETED')",
            name="ck_tournament_rounds_status",
        ),
        sa.ForeignKeyConstraint(["tournament_id"], ["tournaments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "tournament_id",
            "round_number",
            name="uq_tournament_rounds_tournament_round",
        ),
    )

    op.create_table(
        "tournament_matches",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("tournament_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("round_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("round_number", sa.Integer(), nullable=False),
        sa.Column("match_number", sa.Integer(), nullable=False),
        sa.Column("participant1_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("participant2_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("debate_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("winner_participant_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("participant1_score", sa.Numeric(6, 2), nullable=True),
        sa.Column("participant2_score", sa.Numeric(6, 2), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('IN_PROGRESS','COMPLETED','BYE')",
            name="ck_tournament_matches_status",
        ),
        sa.CheckConstraint(
            "participant2_id IS NULL OR participant1_id <> participant2_id",
            name="ck_tournament_matches_no_self_pair",
        ),
        sa.CheckConstraint(
            "(status = 'BYE') = (participant2_id IS NULL)",
            name="ck_tournament_matches_bye_iff_single",
        ),
        sa.ForeignKeyConstraint(["tournament_id"], ["tournaments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["round_id"], ["tournament_rounds.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["participant1_id"], ["tournament_participants.id"]),
        sa.ForeignKeyConstraint(["participant2_id"], ["tournament_participants.id"]),
        sa.ForeignKeyConstraint(["winner_participant_id"], ["tournament_participants.id"]),
        sa.ForeignKeyConstraint(["debate_id"], ["debates.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("round_id", "match_number", name="uq_tournament_matches_round_match"),
        sa.UniqueConstraint("debate_id", name="uq_tournament_matches_debate_id"),
    )
    op.create_index(
        "idx_tournament_matches_tournament_round",
        "tournament_matches",
        ["tournament_id", "round_number"],
    )

    op.create_table(
        "ledger_entries",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("entry_type", sa.String(length=32), nullable=False),
        sa.Column("asset", sa.String(length=32), nullable=False),
        sa.Column("direction", sa.String(length=8), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("balance_after", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("source", sa.String(length=32), nullable=False),
        sa.Column("idempotency_key", sa.String(length=96), nullable=False),
        sa.Column(
            "metadata",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("amount > 0", name="ck_ledger_entries_amount_positive"),
        sa.CheckConstraint("asset IN ('COINS')", name="ck_ledger_entries_asset"),
        sa.CheckConstraint("direction IN ('CREDIT','DEBIT')", name="ck_ledger_entries_direction"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("idempotency_key", name="uq_ledger_entries_idempotency_key"),
    )
    op.create_index("idx_ledger_user_created", "ledger_entries", ["user_id", "created_at"])
    op.create_index("idx_ledger_type", "ledger_entries", ["entry_type"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=128), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("debate_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("tournament_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["debate_id"], ["debates.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["tournament_id"], ["tournaments.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_notifications_user_created", "notifications", ["user_id", "created_at"])
    op.create_index("idx_notifications_unread", "notifications", ["user_id", "read_at"])

    op.create_table(
        "feature_usage_events",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("feature_key", sa.String(length=64), nullable=False),
        sa.Column("reference_id", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_feature_usage_user_feature_created",
        "feature_usage_events",
        ["user_id", "feature_key", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("idx_feature_usage_user_feature_created", table_name="feature_usage_events")
    op.drop_table("feature_usage_events")
    op.drop_index("idx_notifications_unread", table_name="notifications")
    op.drop_index("idx_notifications_user_created", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("idx_ledger_type", table_name="ledger_entries")
    op.drop_index("idx_ledger_user_created", table_name="ledger_entries")
    op.drop_table("ledger_entries")
    op.drop_index("idx_tournament_matches_tournament_round", table_name="tournament_matches")
    op.drop_table("tournament_matches")
    op.drop_table("tournament_rounds")
    op.drop_index("idx_tournament_participants_user", table_name="tournament_participants")
    op.drop_index(
        "idx_tournament_participants_tournament_status",
        table_name="tournament_participants",
    )
    op.drop_table("tournament_participants")
    op.drop_index("idx_tournaments_created_by_created", table_name="tournaments")
    op.drop_index("idx_tournaments_status_start_date", table_name="tournaments")
    op.drop_table("tournaments")
    op.drop_index("idx_debate_verdicts_debate_created", table_name="debate_verdicts")
    op.drop_table("debate_verdicts")
    op.drop_index("idx_debate_statements_debate_round", table_name="debate_statements")
    op.drop_table("debate_statements")
    op.drop_index("idx_debates_opponent_created", table_name="debates")
    op.drop_index("idx_debates_challenger_created", table_name="debates")
    op.drop_index("idx_debates_appeal_status_appealed_at", table_name="debates")
    op.drop_index("idx_debates_status_round_deadline", table_name="debates")
    op.drop_table("debates")
    op.drop_index("idx_users_elo_rating", table_name="users")
    op.drop_index("idx_users_username", table_name="users")
    op.drop_table("users")
