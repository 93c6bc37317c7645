# src/lantern/models/reaction.py
"""Models capturing reactions on posts."""

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lantern.db.session import Base


class Reaction(Base):
    """Running counter of one reaction kind on one post."""

    __tablename__ = "reactions"
    __table_args__ = (
        # One counter per (post, kind); the upsert in PostRepository relies on it.
        UniqueConstraint("post_id", "kind", name="uq_reactions_post_kind"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # No foreign key: rows are removed explicitly when the post is deleted.
    post_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    kind: Mapped[str] = mapped_column(Text, nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
