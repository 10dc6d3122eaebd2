"""create game tables

Revision ID: 3c9d1e7a2b40
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c9d1e7a2b40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("username", sa.String(18), nullable=False, unique=True),
        sa.Column("codeword_hash", sa.String(255), nullable=False),
        sa.Column("symbol", sa.String(16), nullable=False),
        sa.Column("profile_image", sa.String(255), nullable=True),
        sa.Column("is_game_master", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_table(
        "votes",
        sa.Column(
            "voter_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "target_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_table(
        "messages",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "sender_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "receiver_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("media_url", sa.String(500), nullable=True),
        sa.Column("media_type", sa.String(100), nullable=True),
    )
    op.create_index("ix_messages_private_created", "messages", ["is_private", "created_at"])
    op.create_index("ix_messages_receiver", "messages", ["receiver_id"])
    op.create_table(
        "announcements",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "game_master_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("media_url", sa.String(500), nullable=True),
        sa.Column("media_type", sa.String(100), nullable=True),
    )
    op.create_table(
        "card_draws",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("card_id", sa.String(50), nullable=False),
        sa.Column("card_title", sa.String(100), nullable=False),
        sa.Column("card_type", sa.String(20), nullable=False),
        sa.Column("card_effect", sa.Text(), nullable=False),
        sa.Column("drawn_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_card_draws_user_drawn", "card_draws", ["user_id", "drawn_at"])


def downgrade() -> None:
    op.drop_index("ix_card_draws_user_drawn", table_name="card_draws")
    op.drop_table("card_draws")
    op.drop_table("announcements")
    op.drop_index("ix_messages_receiver", table_name="messages")
    op.drop_index("ix_messages_private_created", table_name="messages")
    op.drop_table("messages")
    op.drop_table("votes")
    op.drop_table("users")
