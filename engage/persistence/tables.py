"""SQLAlchemy table definitions for the interaction and moderation core.

Tables are used through SQLAlchemy Core and mapped to pydantic models by hand
in ``mappers``. They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

POST_STATUSES = ("DRAFT", "PUBLISHED", "SCHEDULED", "ARCHIVED", "DELETED")
MODERATION_STATUSES = ("PENDING", "APPROVED", "REJECTED", "FLAGGED", "UNDER_REVIEW")
FLAG_STATUSES = ("PENDING", "RESOLVED", "DISMISSED")
FLAG_REASONS = (
    "SPAM",
    "HARASSMENT",
    "HATE_SPEECH",
    "INAPPROPRIATE_CONTENT",
    "COPYRIGHT_VIOLATION",
    "MISINFORMATION",
    "VIOLENCE",
    "ADULT_CONTENT",
    "OTHER",
)
COMMENT_STATUSES = ("PUBLISHED", "DELETED")

# ============================================================================
# USERS TABLE (projection of the sign-in service's accounts)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("handle", String(255), nullable=False, unique=True),
    Column("roles", ARRAY(String(20)), nullable=False, server_default="{USER}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("slug", String(100), nullable=False, unique=True),
    Column("title", String(300), nullable=False),
    Column("author_handle", String(255), nullable=False),
    Column(
        "status",
        Enum(*POST_STATUSES, name="post_status", create_type=False),
        nullable=False,
        server_default="PUBLISHED",
    ),
    Column(
        "moderation_status",
        Enum(*MODERATION_STATUSES, name="moderation_status", create_type=False),
        nullable=True,
        server_default="PENDING",
    ),
    Column("moderated_at", TIMESTAMP(timezone=True), nullable=True),
    Column("moderated_by", String(255), nullable=True),
    Column("moderation_notes", Text, nullable=True),
    # Denormalized counters, only ever changed by relative deltas
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column("bookmark_count", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("share_count", Integer, nullable=False, server_default="0"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    Column("flag_count", Integer, nullable=False, server_default="0"),
    Column("allow_likes", Boolean, nullable=False, server_default="true"),
    Column("allow_bookmarks", Boolean, nullable=False, server_default="true"),
    Column("allow_comments", Boolean, nullable=False, server_default="true"),
    Column("allow_shares", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "like_count >= 0 AND bookmark_count >= 0 AND comment_count >= 0 "
        "AND share_count >= 0 AND view_count >= 0 AND flag_count >= 0",
        name="post_counters_non_negative",
    ),
)

Index("idx_posts_author_handle", posts_table.c.author_handle)
Index("idx_posts_moderation_status", posts_table.c.moderation_status)

# ============================================================================
# REACTION TABLES (one per kind, unique per target and user)
# ============================================================================
post_likes_table = Table(
    "post_likes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_handle", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("post_id", "user_handle", name="uq_post_like"),
)

Index("idx_post_likes_user_handle", post_likes_table.c.user_handle)

post_bookmarks_table = Table(
    "post_bookmarks",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_handle", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("post_id", "user_handle", name="uq_post_bookmark"),
)

Index("idx_post_bookmarks_user_handle", post_bookmarks_table.c.user_handle)

comment_likes_table = Table(
    "comment_likes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_handle", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_handle", name="uq_comment_like"),
)

Index("idx_comment_likes_user_handle", comment_likes_table.c.user_handle)

# ============================================================================
# SHARES TABLE (append-only)
# ============================================================================
post_shares_table = Table(
    "post_shares",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_handle", String(255), nullable=True),
    Column("platform", String(50), nullable=False),
    Column(
        "shared_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_post_shares_post_id", post_shares_table.c.post_id)

# ============================================================================
# POST FLAGS TABLE
# ============================================================================
post_flags_table = Table(
    "post_flags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_handle", String(255), nullable=False),
    Column(
        "reason",
        Enum(*FLAG_REASONS, name="flag_reason", create_type=False),
        nullable=False,
    ),
    Column("description", Text, nullable=True),
    Column(
        "status",
        Enum(*FLAG_STATUSES, name="flag_status", create_type=False),
        nullable=False,
        server_default="PENDING",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("reviewed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("reviewed_by", String(255), nullable=True),
)

Index("idx_post_flags_post_user", post_flags_table.c.post_id, post_flags_table.c.user_handle)
Index("idx_post_flags_status_created", post_flags_table.c.status, post_flags_table.c.created_at.desc())

# At most one pending flag per reporter and post, whatever the refile policy
Index(
    "idx_post_flags_unique_pending",
    post_flags_table.c.post_id,
    post_flags_table.c.user_handle,
    unique=True,
    postgresql_where=post_flags_table.c.status == "PENDING",
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("author_handle", String(255), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "status",
        Enum(*COMMENT_STATUSES, name="comment_status", create_type=False),
        nullable=False,
        server_default="PUBLISHED",
    ),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column("flag_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "like_count >= 0 AND flag_count >= 0", name="comment_counters_non_negative"
    ),
)

Index("idx_comments_post_parent", comments_table.c.post_id, comments_table.c.parent_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# ============================================================================
# COMMENT FLAGS TABLE
# ============================================================================
comment_flags_table = Table(
    "comment_flags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_handle", String(255), nullable=False),
    Column(
        "reason",
        Enum(*FLAG_REASONS, name="flag_reason", create_type=False),
        nullable=False,
    ),
    Column("description", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_handle", name="uq_comment_flag"),
)

# ============================================================================
# POST VIEWS TABLE (append-only analytics log)
# ============================================================================
post_views_table = Table(
    "post_views",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_handle", String(255), nullable=True),
    Column("ip_address", String(64), nullable=True),
    Column("user_agent", Text, nullable=True),
    Column("referrer", Text, nullable=True),
    Column(
        "viewed_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Supports the cool-down lookup (latest view by user on post)
Index(
    "idx_post_views_post_user_viewed",
    post_views_table.c.post_id,
    post_views_table.c.user_handle,
    post_views_table.c.viewed_at.desc(),
)
