"""Create team announcements, bug reports, download history and consent log tables.

Revision ID: 20251020000000
Revises: 20251019020000
Create Date: 2025-10-20

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20251020000000"
down_revision: Union[str, None] = "20251019020000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "team_announcements",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=True),
        sa.Column("is_sticky", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("target_roles", sa.JSON(), nullable=False),
        _created_at(),
        _created_at("updated_at"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_team_announcements_author_id"), "team_announcements", ["author_id"], unique=False
    )

    op.create_table(
        "bug_reports",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("priority", sa.String(length=20), nullable=False, server_default="medium"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="open"),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("build_id", sa.Integer(), nullable=True),
        sa.Column("reported_by", sa.Integer(), nullable=True),
        sa.Column("assigned_to", sa.Integer(), nullable=True),
        _created_at(),
        _created_at("updated_at"),
        sa.ForeignKeyConstraint(["build_id"], ["game_builds.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["reported_by"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["assigned_to"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("priority", "status", "build_id", "reported_by", "assigned_to"):
        op.create_index(op.f(f"ix_bug_reports_{column}"), "bug_reports", [column], unique=False)

    op.create_table(
        "download_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("build_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        _created_at("download_date"),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.String(length=512), nullable=True),
        sa.ForeignKeyConstraint(["build_id"], ["game_builds.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("build_id", "user_id", "download_date"):
        op.create_index(
            op.f(f"ix_download_history_{column}"), "download_history", [column], unique=False
        )

    op.create_table(
        "user_consent_log",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("consent_type", sa.String(length=20), nullable=False),
        sa.Column("consent_given", sa.Boolean(), nullable=False),
        sa.Column("document_version", sa.String(length=20), nullable=True),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.String(length=512), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_user_consent_log_user_id"), "user_consent_log", ["user_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_user_consent_log_user_id"), table_name="user_consent_log")
    op.drop_table("user_consent_log")
    for column in ("download_date", "user_id", "build_id"):
        op.drop_index(op.f(f"ix_download_history_{column}"), table_name="download_history")
    op.drop_table("download_history")
    for column in ("assigned_to", "reported_by", "build_id", "status", "priority"):
        op.drop_index(op.f(f"ix_bug_reports_{column}"), table_name="bug_reports")
    op.drop_table("bug_reports")
    op.drop_index(op.f("ix_team_announcements_author_id"), table_name="team_announcements")
    op.drop_table("team_announcements")
