"""initial_schema

Create the schema for the interaction and moderation core:
- Users (projection of the sign-in service's accounts, with roles)
- Posts (publication state, moderation state, denormalized counters)
- Reactions (post likes, post bookmarks, comment likes)
- Shares (append-only)
- Post flags (abuse reports with a review lifecycle)
- Comments (two-level threads, soft delete) and comment flags
- Post views (append-only analytics log)

Revision ID: 3c1f9e2a7b40
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9e2a7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUM_TYPES = {
    "post_status": ("DRAFT", "PUBLISHED", "SCHEDULED", "ARCHIVED", "DELETED"),
    "moderation_status": (
        "PENDING",
        "APPROVED",
        "REJECTED",
        "FLAGGED",
        "UNDER_REVIEW",
    ),
    "flag_status": ("PENDING", "RESOLVED", "DISMISSED"),
    "flag_reason": (
        "SPAM",
        "HARASSMENT",
        "HATE_SPEECH",
        "INAPPROPRIATE_CONTENT",
        "COPYRIGHT_VIOLATION",
        "MISINFORMATION",
        "VIOLENCE",
        "ADULT_CONTENT",
        "OTHER",
    ),
    "comment_status": ("PUBLISHED", "DELETED"),
}


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("NOW()"),
        nullable=False,
    )


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUM_TYPES[name], name=name, create_type=False)


def _counter_column(name: str) -> sa.Column:
    return sa.Column(name, sa.Integer(), server_default=sa.text("0"), nullable=False)


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("handle", sa.String(length=255), nullable=False),
        sa.Column(
            "roles",
            postgresql.ARRAY(sa.String(length=20)),
            server_default=sa.text("'{USER}'"),
            nullable=False,
        ),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("handle"),
    )

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        _id_column(),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("author_handle", sa.String(length=255), nullable=False),
        sa.Column(
            "status",
            _enum("post_status"),
            server_default=sa.text("'PUBLISHED'"),
            nullable=False,
        ),
        sa.Column(
            "moderation_status",
            _enum("moderation_status"),
            server_default=sa.text("'PENDING'"),
            nullable=True,
        ),
        sa.Column("moderated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("moderated_by", sa.String(length=255), nullable=True),
        sa.Column("moderation_notes", sa.Text(), nullable=True),
        _counter_column("like_count"),
        _counter_column("bookmark_count"),
        _counter_column("comment_count"),
        _counter_column("share_count"),
        _counter_column("view_count"),
        _counter_column("flag_count"),
        sa.Column("allow_likes", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("allow_bookmarks", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("allow_comments", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("allow_shares", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
        sa.CheckConstraint(
            "like_count >= 0 AND bookmark_count >= 0 AND comment_count >= 0 "
            "AND share_count >= 0 AND view_count >= 0 AND flag_count >= 0",
            name="post_counters_non_negative",
        ),
    )
    op.create_index("idx_posts_author_handle", "posts", ["author_handle"])
    op.create_index("idx_posts_moderation_status", "posts", ["moderation_status"])

    # ========================================================================
    # COMMENTS table (created before comment_likes for the foreign key)
    # ========================================================================
    op.create_table(
        "comments",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_handle", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "status",
            _enum("comment_status"),
            server_default=sa.text("'PUBLISHED'"),
            nullable=False,
        ),
        _counter_column("like_count"),
        _counter_column("flag_count"),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "like_count >= 0 AND flag_count >= 0",
            name="comment_counters_non_negative",
        ),
    )
    op.create_index("idx_comments_post_parent", "comments", ["post_id", "parent_id"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])

    # ========================================================================
    # REACTION tables (one per kind)
    # ========================================================================
    for table, target, target_table, constraint in (
        ("post_likes", "post_id", "posts", "uq_post_like"),
        ("post_bookmarks", "post_id", "posts", "uq_post_bookmark"),
        ("comment_likes", "comment_id", "comments", "uq_comment_like"),
    ):
        op.create_table(
            table,
            _id_column(),
            sa.Column(target, sa.UUID(), nullable=False),
            sa.Column("user_handle", sa.String(length=255), nullable=False),
            _timestamp_column("created_at"),
            sa.ForeignKeyConstraint([target], [f"{target_table}.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint(target, "user_handle", name=constraint),
        )
        op.create_index(f"idx_{table}_user_handle", table, ["user_handle"])

    # ========================================================================
    # SHARES table
    # ========================================================================
    op.create_table(
        "post_shares",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("user_handle", sa.String(length=255), nullable=True),
        sa.Column("platform", sa.String(length=50), nullable=False),
        _timestamp_column("shared_at"),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_post_shares_post_id", "post_shares", ["post_id"])

    # ========================================================================
    # POST FLAGS table
    # ========================================================================
    op.create_table(
        "post_flags",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("user_handle", sa.String(length=255), nullable=False),
        sa.Column("reason", _enum("flag_reason"), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status",
            _enum("flag_status"),
            server_default=sa.text("'PENDING'"),
            nullable=False,
        ),
        _timestamp_column("created_at"),
        sa.Column("reviewed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("reviewed_by", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_post_flags_post_user", "post_flags", ["post_id", "user_handle"])
    op.execute(
        "CREATE INDEX idx_post_flags_status_created "
        "ON post_flags (status, created_at DESC)"
    )
    op.create_index(
        "idx_post_flags_unique_pending",
        "post_flags",
        ["post_id", "user_handle"],
        unique=True,
        postgresql_where=sa.text("status = 'PENDING'"),
    )

    # ========================================================================
    # COMMENT FLAGS table
    # ========================================================================
    op.create_table(
        "comment_flags",
        _id_column(),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("user_handle", sa.String(length=255), nullable=False),
        sa.Column("reason", _enum("flag_reason"), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "user_handle", name="uq_comment_flag"),
    )

    # ========================================================================
    # POST VIEWS table
    # ========================================================================
    op.create_table(
        "post_views",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("user_handle", sa.String(length=255), nullable=True),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("referrer", sa.Text(), nullable=True),
        _timestamp_column("viewed_at"),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.execute(
        "CREATE INDEX idx_post_views_post_user_viewed "
        "ON post_views (post_id, user_handle, viewed_at DESC)"
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("post_views")
    op.drop_table("comment_flags")
    op.drop_table("post_flags")
    op.drop_table("post_shares")
    op.drop_table("comment_likes")
    op.drop_table("post_bookmarks")
    op.drop_table("post_likes")
    op.drop_table("comments")
    op.drop_table("posts")
    op.drop_table("users")

    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
