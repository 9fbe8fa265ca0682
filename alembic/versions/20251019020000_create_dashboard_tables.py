"""Create feature toggles, system logs, game builds and message board tables.

Revision ID: 20251019020000
Revises: 20251019010000
Create Date: 2025-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20251019020000"
down_revision: Union[str, None] = "20251019010000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "feature_toggles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("feature_name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_feature_toggles_feature_name"), "feature_toggles", ["feature_name"], unique=True
    )

    op.create_table(
        "system_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("action", sa.String(length=100), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_system_logs_user_id"), "system_logs", ["user_id"], unique=False)
    op.create_index(op.f("ix_system_logs_action"), "system_logs", ["action"], unique=False)
    op.create_index(op.f("ix_system_logs_created_at"), "system_logs", ["created_at"], unique=False)

    op.create_table(
        "game_builds",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("version", sa.String(length=50), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("download_url", sa.String(length=500), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("test_instructions", sa.Text(), nullable=True),
        sa.Column("known_issues", sa.Text(), nullable=True),
        sa.Column("uploaded_by", sa.Integer(), nullable=True),
        sa.Column(
            "upload_date",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.ForeignKeyConstraint(["uploaded_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_game_builds_uploaded_by"), "game_builds", ["uploaded_by"], unique=False)
    op.create_index(op.f("ix_game_builds_is_active"), "game_builds", ["is_active"], unique=False)

    op.create_table(
        "message_posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["message_posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_message_posts_author_id"), "message_posts", ["author_id"], unique=False)
    op.create_index(op.f("ix_message_posts_parent_id"), "message_posts", ["parent_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_message_posts_parent_id"), table_name="message_posts")
    op.drop_index(op.f("ix_message_posts_author_id"), table_name="message_posts")
    op.drop_table("message_posts")
    op.drop_index(op.f("ix_game_builds_is_active"), table_name="game_builds")
    op.drop_index(op.f("ix_game_builds_uploaded_by"), table_name="game_builds")
    op.drop_table("game_builds")
    op.drop_index(op.f("ix_system_logs_created_at"), table_name="system_logs")
    op.drop_index(op.f("ix_system_logs_action"), table_name="system_logs")
    op.drop_index(op.f("ix_system_logs_user_id"), table_name="system_logs")
    op.drop_table("system_logs")
    op.drop_index(op.f("ix_feature_toggles_feature_name"), table_name="feature_toggles")
    op.drop_table("feature_toggles")
