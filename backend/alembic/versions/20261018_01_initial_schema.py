"""initial schema

Revision ID: 20261018_01
Revises: 
Create Date: 2026-10-18 09:30:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261018_01"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=40), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)

    op.create_table(
        "batches",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_user_id", sa.Integer(), nullable=True),
        sa.Column("batch_number", sa.String(length=50), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("brew_size", sa.Float(), nullable=False),
        sa.Column("tea_type", sa.String(length=60), nullable=False),
        sa.Column("sugar_type", sa.String(length=60), nullable=False),
        sa.Column("method", sa.String(length=30), nullable=True),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("start_ph", sa.Float(), nullable=True),
        sa.Column("start_brix", sa.Float(), nullable=True),
        sa.Column("end_ph", sa.Float(), nullable=True),
        sa.Column("end_brix", sa.Float(), nullable=True),
        sa.Column("taste_profile", sa.String(length=40), nullable=True),
        sa.Column("primary_ferment_complete", sa.Boolean(), nullable=False),
        sa.Column("secondary_start_date", sa.Date(), nullable=True),
        sa.Column("secondary_end_date", sa.Date(), nullable=True),
        sa.Column("flavoring_method", sa.String(length=40), nullable=True),
        sa.Column("flavor_ingredients", sa.Text(), nullable=True),
        sa.Column("filtering_method", sa.String(length=40), nullable=True),
        sa.Column("clarity_achieved", sa.String(length=40), nullable=True),
        sa.Column("ready_to_bottle", sa.Boolean(), nullable=False),
        sa.Column("final_ph", sa.Float(), nullable=True),
        sa.Column("final_brix", sa.Float(), nullable=True),
        sa.Column("final_taste_notes", sa.Text(), nullable=True),
        sa.Column("carbonation_temp", sa.Float(), nullable=True),
        sa.Column("target_co2_volume", sa.Float(), nullable=True),
        sa.Column("carbonation_status", sa.String(length=20), nullable=True),
        sa.Column("packaging_date", sa.Date(), nullable=True),
        sa.Column("packaging_type", sa.String(length=20), nullable=True),
        sa.Column("pasteurized", sa.Boolean(), nullable=False),
        sa.Column("starter_volume", sa.Float(), nullable=True),
        sa.Column("tea_weight", sa.Float(), nullable=True),
        sa.Column("water_volume", sa.Float(), nullable=True),
        sa.Column("sugar_amount", sa.Float(), nullable=True),
        sa.Column("alcohol_estimate", sa.Float(), nullable=True),
        sa.Column("force_carb_psi", sa.Integer(), nullable=True),
        sa.Column("carb_time_estimate", sa.Integer(), nullable=True),
        sa.Column("progress_percentage", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=30), nullable=False),
        sa.Column("last_entry_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["owner_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_batches_id"), "batches", ["id"], unique=False)
    op.create_index(op.f("ix_batches_owner_user_id"), "batches", ["owner_user_id"], unique=False)

    op.create_table(
        "batch_analyses",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("batch_id", sa.Integer(), nullable=False),
        sa.Column("insights", sa.Text(), nullable=False),
        sa.Column("recommendations", sa.JSON(), nullable=False),
        sa.Column("alerts", sa.JSON(), nullable=False),
        sa.Column("health_score", sa.Integer(), nullable=False),
        sa.Column("analyzed_data", sa.JSON(), nullable=False),
        sa.Column("source", sa.String(length=20), nullable=False),
        sa.Column("analyzed_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["batch_id"], ["batches.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_batch_analyses_id"), "batch_analyses", ["id"], unique=False)
    op.create_index(op.f("ix_batch_analyses_batch_id"), "batch_analyses", ["batch_id"], unique=False)

    op.create_table(
        "batch_intervals",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("batch_id", sa.Integer(), nullable=False),
        sa.Column("recorded_at", sa.DateTime(), nullable=False),
        sa.Column("ph_level", sa.Float(), nullable=True),
        sa.Column("brix_level", sa.Float(), nullable=True),
        sa.Column("temperature", sa.Float(), nullable=True),
        sa.Column("taste_notes_json", sa.Text(), nullable=True),
        sa.Column("visual_notes_json", sa.Text(), nullable=True),
        sa.Column("aroma_notes_json", sa.Text(), nullable=True),
        sa.Column("ai_analysis", sa.Text(), nullable=True),
        sa.Column("health_score", sa.Integer(), nullable=True),
        sa.Column("recommendations", sa.JSON(), nullable=True),
        sa.Column("analysis_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["batch_id"], ["batches.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_batch_intervals_id"), "batch_intervals", ["id"], unique=False)
    op.create_index(op.f("ix_batch_intervals_batch_id"), "batch_intervals", ["batch_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_batch_intervals_batch_id"), table_name="batch_intervals")
    op.drop_index(op.f("ix_batch_intervals_id"), table_name="batch_intervals")
    op.drop_table("batch_intervals")

    op.drop_index(op.f("ix_batch_analyses_batch_id"), table_name="batch_analyses")
    op.drop_index(op.f("ix_batch_analyses_id"), table_name="batch_analyses")
    op.drop_table("batch_analyses")

    op.drop_index(op.f("ix_batches_owner_user_id"), table_name="batches")
    op.drop_index(op.f("ix_batches_id"), table_name="batches")
    op.drop_table("batches")

    op.drop_index(op.f("ix_users_id"), table_name="users")
    op.drop_table("users")
