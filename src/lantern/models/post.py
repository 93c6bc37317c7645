# src/lantern/models/post.py
"""SQLAlchemy model for posts."""

from sqlalchemy import BigInteger, CheckConstraint, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lantern.db.session import Base

POST_STATE_HELD = "held"
POST_STATE_PUBLISHED = "published"
POST_STATES = frozenset({POST_STATE_HELD, POST_STATE_PUBLISHED})


class Post(Base):
    """Anonymous confession submitted to a channel.

    Posts start in the held queue unless auto-publish lets unflagged text
    through; only published posts are visible on the public board.
    """

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint("state IN ('held', 'published')", name="ck_posts_state"),
        Index("ix_posts_state_ts", "state", "ts"),
    )

    # Opaque random token; never derived from the submitter.
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    channel: Mapped[str] = mapped_column(Text, nullable=False, default="confess-here")
    state: Mapped[str] = mapped_column(String(16), nullable=False, default=POST_STATE_HELD)
    # Epoch milliseconds, strictly increasing per process.
    ts: Mapped[int] = mapped_column(BigInteger, nullable=False)
