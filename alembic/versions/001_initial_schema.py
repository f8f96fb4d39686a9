"""Initial schema: users, weight_logs, workout_sessions, exercises, cardio_sessions, exercise_names.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("height_cm", sa.Float(), nullable=True),
        sa.Column("sex", sa.String(length=10), nullable=True),
        sa.Column("activity_level", sa.String(length=32), nullable=True),
        sa.Column("target_weight", sa.Float(), nullable=True),
        sa.Column("weekly_goal", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )

    op.create_table(
        "weight_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("time_of_day", sa.String(length=20), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE", name="fk_weight_logs_user_id_users"),
        sa.PrimaryKeyConstraint("id", name="pk_weight_logs"),
    )
    op.create_index("ix_weight_logs_user_date", "weight_logs", ["user_id", "date"], unique=False)

    op.create_table(
        "workout_sessions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE", name="fk_workout_sessions_user_id_users"),
        sa.PrimaryKeyConstraint("id", name="pk_workout_sessions"),
    )
    op.create_index("ix_workout_sessions_user_date", "workout_sessions", ["user_id", "date"], unique=False)

    op.create_table(
        "exercises",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("exercise_name", sa.String(length=255), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=False),
        sa.Column("sets", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("weight_unit", sa.String(length=10), nullable=False, server_default="lbs"),
        sa.Column("raw_voice_input", sa.Text(), nullable=True),
        sa.Column("manually_edited", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("reps >= 1", name="ck_exercises_reps_positive"),
        sa.CheckConstraint("sets >= 1", name="ck_exercises_sets_positive"),
        sa.ForeignKeyConstraint(["session_id"], ["workout_sessions.id"], ondelete="CASCADE", name="fk_exercises_session_id_workout_sessions"),
        sa.PrimaryKeyConstraint("id", name="pk_exercises"),
    )
    op.create_index("ix_exercises_session_id", "exercises", ["session_id"], unique=False)

    op.create_table(
        "cardio_sessions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("activity_type", sa.String(length=100), nullable=False),
        sa.Column("duration_minutes", sa.Float(), nullable=False),
        sa.Column("distance_km", sa.Float(), nullable=True),
        sa.Column("calories_burned", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["session_id"], ["workout_sessions.id"], ondelete="CASCADE", name="fk_cardio_sessions_session_id_workout_sessions"),
        sa.PrimaryKeyConstraint("id", name="pk_cardio_sessions"),
    )
    op.create_index("ix_cardio_sessions_session_id", "cardio_sessions", ["session_id"], unique=False)

    op.create_table(
        "exercise_names",
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("last_used", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("name", name="pk_exercise_names"),
    )


def downgrade() -> None:
    op.drop_table("exercise_names")
    op.drop_index("ix_cardio_sessions_session_id", table_name="cardio_sessions")
    op.drop_table("cardio_sessions")
    op.drop_index("ix_exercises_session_id", table_name="exercises")
    op.drop_table("exercises")
    op.drop_index("ix_workout_sessions_user_date", table_name="workout_sessions")
    op.drop_table("workout_sessions")
    op.drop_index("ix_weight_logs_user_date", table_name="weight_logs")
    op.drop_table("weight_logs")
    op.drop_table("users")
