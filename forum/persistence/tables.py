"""SQLAlchemy table definitions for the forum.

Tables are used with SQLAlchemy Core; rows are mapped to the immutable
domain models by hand (see mappers.py). They match the schema defined in
the Alembic migrations.

Users live in the external auth service, so author and voter IDs are
plain UUID columns without foreign keys.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
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
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("author_id", UUID, nullable=False),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=True),
    Column("community", String(100), nullable=False),
    # Running total of vote values, may go negative
    Column("score", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_community", posts_table.c.community)
Index("idx_posts_created_at", posts_table.c.created_at)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("author_id", UUID, nullable=False),
    Column("content", Text, nullable=False),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("depth >= 0", name="depth_non_negative"),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# VOTES TABLE (Polymorphic: posts and comments)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, nullable=False),
    Column(
        "item_kind",
        Enum("post", "comment", name="item_kind", create_type=False),
        nullable=False,
    ),
    Column("item_id", UUID, nullable=False),
    Column("value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "item_kind", "item_id", name="unique_vote"),
    CheckConstraint("value IN (-1, 1)", name="vote_value_valid"),
)

Index("idx_votes_user_id", votes_table.c.user_id)
Index("idx_votes_item", votes_table.c.item_kind, votes_table.c.item_id)
