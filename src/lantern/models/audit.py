# src/lantern/models/audit.py
"""Append-only audit trail for moderation and admin actions."""

from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from lantern.db.session import Base

AUDIT_ACTION_FLAGGED = "flagged"
AUDIT_ACTION_UPDATE_POST = "update_post"
AUDIT_ACTION_DELETE_POST = "delete_post"


class AuditEntry(Base):
    """Record of an action taken against a post.

    Entries outlive the posts they reference, so ``target`` may dangle.
    """

    __tablename__ = "audit"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    action: Mapped[str] = mapped_column(Text, nullable=False)
    target: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    ts: Mapped[int] = mapped_column(BigInteger, nullable=False)
