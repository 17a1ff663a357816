"""SQLAlchemy table definitions for Roost.

These tables match the schema defined in the Alembic migrations. Constraint
names are referenced by the repositories when translating integrity errors.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("handle", String(32), nullable=False),
    Column("display_name", String(50), nullable=False),
    Column("email", String(255), nullable=False),
    Column("icon", Text, nullable=False),
    Column("is_admin", Boolean, nullable=False, server_default="false"),
    Column("is_banned", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("handle", name="uq_users_handle"),
    UniqueConstraint("email", name="uq_users_email"),
)

# ============================================================================
# NESTS TABLE
# ============================================================================
nests_table = Table(
    "nests",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("title", String(50), nullable=False),
    Column("display_name", String(50), nullable=False),
    Column("description", String(500), nullable=False, server_default=""),
    Column("icon", Text, nullable=False),
    Column(
        "moderator_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("title", name="uq_nests_title"),
)

Index("idx_nests_moderator_id", nests_table.c.moderator_id)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("title", String(200), nullable=False),
    Column("content", Text, nullable=False, server_default=""),
    Column(
        "author_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "nest_id",
        UUID(as_uuid=True),
        ForeignKey("nests.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_nest_id", posts_table.c.nest_id)
Index("idx_posts_author_id", posts_table.c.author_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "post_id",
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "author_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("content", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
)

Index("idx_comments_post_id", comments_table.c.post_id, comments_table.c.created_at)

# ============================================================================
# MEDIA TABLE
# ============================================================================
media_table = Table(
    "media",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "post_id",
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("content_url", Text, nullable=False),
    Column("alt_text", String(300), nullable=False, server_default=""),
)

Index("idx_media_post_id", media_table.c.post_id)

# ============================================================================
# POST VOTES TABLE
# ============================================================================
post_votes_table = Table(
    "post_votes",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "post_id",
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("post_id", "user_id", name="uq_post_votes_post_user"),
    CheckConstraint("value IN (-1, 1)", name="ck_post_votes_value"),
)

Index("idx_post_votes_user_id", post_votes_table.c.user_id)
