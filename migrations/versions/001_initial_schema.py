"""Initial schema: screens, admins, bookings.

Revision ID: 001_initial
Revises:
Create Date: 2025-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "screens",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("specs", sa.String(), nullable=False),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("image_hint", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_screens_name"), "screens", ["name"], unique=True)

    op.create_table(
        "admins",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_admins_username"), "admins", ["username"], unique=True)

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("screen_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("time_slot", sa.String(), nullable=False),
        sa.Column("user_name", sa.String(), nullable=False),
        sa.Column("user_contact_number", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["screen_id"], ["screens.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("screen_id", "date", "time_slot", name="uq_bookings_screen_date_slot"),
    )
    op.create_index(op.f("ix_bookings_screen_id"), "bookings", ["screen_id"], unique=False)
    op.create_index(op.f("ix_bookings_date"), "bookings", ["date"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_bookings_date"), table_name="bookings")
    op.drop_index(op.f("ix_bookings_screen_id"), table_name="bookings")
    op.drop_table("bookings")
    op.drop_index(op.f("ix_admins_username"), table_name="admins")
    op.drop_table("admins")
    op.drop_index(op.f("ix_screens_name"), table_name="screens")
    op.drop_table("screens")
