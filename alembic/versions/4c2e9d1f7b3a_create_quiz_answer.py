"""quiz_answer: create graded attempt table

Revision ID: 4c2e9d1f7b3a
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "4c2e9d1f7b3a"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "quiz_answer",
        sa.Column("quiz_answer_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("content_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("grade", sa.Float(), nullable=True),
        sa.Column("total_points", sa.Integer(), nullable=True),
        # Null while a free-text answer awaits manual review
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("quiz_url", sa.String(length=500), nullable=False),
        sa.Column("quiz_answer_url", sa.String(length=500), nullable=False),
    )
    op.create_index("ix_quiz_answer_quiz_answer_id", "quiz_answer", ["quiz_answer_id"])
    op.create_index("ix_quiz_answer_content_id", "quiz_answer", ["content_id"])
    op.create_index("ix_quiz_answer_user_id", "quiz_answer", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_quiz_answer_user_id", table_name="quiz_answer")
    op.drop_index("ix_quiz_answer_content_id", table_name="quiz_answer")
    op.drop_index("ix_quiz_answer_quiz_answer_id", table_name="quiz_answer")
    op.drop_table("quiz_answer")
