"""create quiz tables

Revision ID: 3f9c2b1d7a10
Revises:
Create Date: 2025-06-02
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f9c2b1d7a10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("surname", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_table(
        "scenarios",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("scenario_name", sa.String(255), nullable=False),
        sa.UniqueConstraint("scenario_name", name="uq_scenarios_name"),
    )
    op.create_table(
        "question_difficulties",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("question_difficulty_name", sa.String(100), nullable=False),
        sa.Column("time", sa.Integer(), nullable=False),
        sa.UniqueConstraint("question_difficulty_name", name="uq_question_difficulties_name"),
    )
    op.create_table(
        "questions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("scenario_id", sa.Integer(), sa.ForeignKey("scenarios.id"), nullable=False),
        sa.Column(
            "question_difficulty_id",
            sa.Integer(),
            sa.ForeignKey("question_difficulties.id"),
            nullable=False,
        ),
    )
    op.create_index("ix_questions_scenario_id", "questions", ["scenario_id"])
    op.create_index("ix_questions_question_difficulty_id", "questions", ["question_difficulty_id"])

    op.create_table(
        "options",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("question_id", sa.Integer(), sa.ForeignKey("questions.id"), nullable=False),
        sa.Column("option_text", sa.String(500), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("question_id", "option_text", name="uq_options_question_text"),
    )
    op.create_index("ix_options_question_id", "options", ["question_id"])

    op.create_table(
        "history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("feedback", sa.String(255), nullable=True),
        sa.Column(
            "timestamp", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    )
    op.create_index("ix_history_user_id", "history", ["user_id"])
    op.create_index("ix_history_timestamp", "history", ["timestamp"])

    op.create_table(
        "history_questions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("history_id", sa.Integer(), sa.ForeignKey("history.id"), nullable=False),
        sa.Column("question_id", sa.Integer(), sa.ForeignKey("questions.id"), nullable=False),
        sa.Column("option_id", sa.Integer(), sa.ForeignKey("options.id"), nullable=False),
    )
    op.create_index("ix_history_questions_history_id", "history_questions", ["history_id"])


def downgrade() -> None:
    op.drop_table("history_questions")
    op.drop_table("history")
    op.drop_table("options")
    op.drop_table("questions")
    op.drop_table("question_difficulties")
    op.drop_table("scenarios")
    op.drop_table("users")
