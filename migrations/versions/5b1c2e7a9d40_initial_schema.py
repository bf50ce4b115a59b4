"""initial schema

Revision ID: 5b1c2e7a9d40
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b1c2e7a9d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_on", sa.DateTime(timezone=True), nullable=True),
        sa.Column("modified_on", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Create users, channels with their member index, messages, locations and friendships."""
    op.create_table(
        "user",
        sa.Column("uuid", sa.String(length=36), nullable=False),
        sa.Column("fullname", sa.Text(), nullable=False),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "channel",
        sa.Column("uuid", sa.String(length=36), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("user_uuids", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_table(
        "channel_member",
        sa.Column("channel_uuid", sa.String(length=36), nullable=False),
        sa.Column("user_uuid", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(["channel_uuid"], ["channel.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("channel_uuid", "user_uuid"),
    )
    op.create_index(
        op.f("ix_channel_member_user_uuid"), "channel_member", ["user_uuid"], unique=False
    )
    op.create_table(
        "message",
        sa.Column("uuid", sa.String(length=36), nullable=False),
        sa.Column("channel_uuid", sa.String(length=36), nullable=False),
        sa.Column("user_uuid", sa.String(length=36), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["channel_uuid"], ["channel.uuid"]),
        sa.ForeignKeyConstraint(["user_uuid"], ["user.uuid"]),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index(op.f("ix_message_channel_uuid"), "message", ["channel_uuid"], unique=False)
    op.create_table(
        "location",
        sa.Column("uuid", sa.String(length=36), nullable=False),
        sa.Column("channel_uuid", sa.String(length=36), nullable=False),
        sa.Column("user_uuid", sa.String(length=36), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("weather", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["channel_uuid"], ["channel.uuid"]),
        sa.ForeignKeyConstraint(["user_uuid"], ["user.uuid"]),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index(op.f("ix_location_channel_uuid"), "location", ["channel_uuid"], unique=False)
    op.create_index(op.f("ix_location_user_uuid"), "location", ["user_uuid"], unique=False)
    op.create_table(
        "friendship",
        sa.Column("uuid", sa.String(length=36), nullable=False),
        sa.Column("user1_uuid", sa.String(length=36), nullable=False),
        sa.Column("user2_uuid", sa.String(length=36), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user1_uuid"], ["user.uuid"]),
        sa.ForeignKeyConstraint(["user2_uuid"], ["user.uuid"]),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index(op.f("ix_friendship_user1_uuid"), "friendship", ["user1_uuid"], unique=False)
    op.create_index(op.f("ix_friendship_user2_uuid"), "friendship", ["user2_uuid"], unique=False)


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index(op.f("ix_friendship_user2_uuid"), table_name="friendship")
    op.drop_index(op.f("ix_friendship_user1_uuid"), table_name="friendship")
    op.drop_table("friendship")
    op.drop_index(op.f("ix_location_user_uuid"), table_name="location")
    op.drop_index(op.f("ix_location_channel_uuid"), table_name="location")
    op.drop_table("location")
    op.drop_index(op.f("ix_message_channel_uuid"), table_name="message")
    op.drop_table("message")
    op.drop_index(op.f("ix_channel_member_user_uuid"), table_name="channel_member")
    op.drop_table("channel_member")
    op.drop_table("channel")
    op.drop_table("user")
