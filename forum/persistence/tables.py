"""SQLAlchemy table definitions for the forum.

These table definitions are used with SQLAlchemy Core and manual mappers.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
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
# MEMBERS TABLE (read-only projection of user accounts)
# ============================================================================
members_table = Table(
    "members",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("display_name", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# COMMUNITY BANS / MODERATORS (administered elsewhere, read here)
# ============================================================================
community_bans_table = Table(
    "community_bans",
    metadata,
    Column("community_id", UUID(as_uuid=True), nullable=False),
    Column(
        "member_id",
        UUID(as_uuid=True),
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("community_id", "member_id", name="pk_community_bans"),
)

community_moderators_table = Table(
    "community_moderators",
    metadata,
    Column("community_id", UUID(as_uuid=True), nullable=False),
    Column(
        "member_id",
        UUID(as_uuid=True),
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "role",
        Enum("admin", "moderator", name="community_role", create_type=False),
        nullable=False,
        server_default="moderator",
    ),
    PrimaryKeyConstraint("community_id", "member_id", name="pk_community_moderators"),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("community_id", UUID(as_uuid=True), nullable=False),
    Column(
        "author_id",
        UUID(as_uuid=True),
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("title", String(300), nullable=False),
    Column(
        "status",
        Enum("draft", "published", "archived", name="post_status", create_type=False),
        nullable=False,
        server_default="published",
    ),
    Column("up_count", Integer, nullable=False, server_default="0"),
    Column("down_count", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("version", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("up_count >= 0", name="posts_up_count_non_negative"),
    CheckConstraint("down_count >= 0", name="posts_down_count_non_negative"),
    CheckConstraint("comment_count >= 0", name="posts_comment_count_non_negative"),
)

Index("idx_posts_community_id", posts_table.c.community_id)
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
        "parent_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="RESTRICT"),
        nullable=True,
    ),
    Column(
        "author_id",
        UUID(as_uuid=True),
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("body", Text, nullable=False),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column(
        "status",
        Enum("visible", "deleted", name="comment_status", create_type=False),
        nullable=False,
        server_default="visible",
    ),
    Column("up_count", Integer, nullable=False, server_default="0"),
    Column("down_count", Integer, nullable=False, server_default="0"),
    Column("version", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("depth >= 0", name="depth_non_negative"),
    CheckConstraint(
        "(depth = 0) = (parent_id IS NULL)", name="depth_matches_parent"
    ),
    CheckConstraint("up_count >= 0", name="comments_up_count_non_negative"),
    CheckConstraint("down_count >= 0", name="comments_down_count_non_negative"),
)

# Listing pages: roots and replies of one parent, oldest first
Index(
    "idx_comments_post_parent_created",
    comments_table.c.post_id,
    comments_table.c.parent_id,
    comments_table.c.created_at,
)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "votable_type",
        Enum("post", "comment", name="votable_type", create_type=False),
        nullable=False,
    ),
    Column("votable_id", UUID(as_uuid=True), nullable=False),
    Column(
        "voter_id",
        UUID(as_uuid=True),
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("value IN (1, -1)", name="vote_value_up_or_down"),
    UniqueConstraint("votable_type", "votable_id", "voter_id", name="unique_vote"),
)

Index("idx_votes_voter_id", votes_table.c.voter_id)
