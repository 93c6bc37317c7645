"""Data access helpers for posts, reactions and the audit trail."""
from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from lantern.db.time import next_timestamp_ms, now_ms
from lantern.models import AuditEntry, Post, Reaction
from lantern.models.audit import AUDIT_ACTION_FLAGGED
from lantern.models.post import POST_STATE_HELD, POST_STATE_PUBLISHED

__all__ = ["PostRepository"]

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class PostRepository:
    """Thin wrapper around database access for post entities.

    Each mutating method commits its own unit of work; nothing spans calls.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: str) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def create(self, *, post_id: str, text: str, channel: str, state: str) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        post = Post(
            id=post_id,
            text=text,
            channel=channel,
            state=state,
            ts=next_timestamp_ms(),
        )
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        return post

    def list_published(self, channel: str | None = None) -> list[Post]:
        """Return published posts newest first, optionally for one channel."""
        stmt = select(Post).where(Post.state == POST_STATE_PUBLISHED)
        if channel:
            stmt = stmt.where(Post.channel == channel)
        stmt = stmt.order_by(Post.ts.desc())
        return list(self.session.scalars(stmt))

    def list_all(self) -> list[Post]:
        """Return every post regardless of state, newest first."""
        return list(self.session.scalars(select(Post).order_by(Post.ts.desc())))

    def update_fields(
        self,
        post_id: str,
        *,
        state: str | None = None,
        text: str | None = None,
    ) -> Post | None:
        """Apply the provided fields to a post and return it afterwards."""
        values: dict[str, str] = {}
        if state:
            values["state"] = state
        if text:
            values["text"] = text
        if values:
            self.session.execute(update(Post).where(Post.id == post_id).values(**values))
            self.session.commit()
        return self._fresh(post_id)

    def delete(self, post_id: str) -> None:
        """Delete a post together with its reactions; audit rows are kept."""
        self.session.execute(delete(Post).where(Post.id == post_id))
        self.session.execute(delete(Reaction).where(Reaction.post_id == post_id))
        self.session.commit()

    def increment_reaction(self, post_id: str, kind: str) -> None:
        """Add one to the (post, kind) counter, creating it on first use.

        SQLite and PostgreSQL get a single ``INSERT ... ON CONFLICT DO UPDATE``
        statement, so concurrent reactions cannot lose increments.
        """
        dialect = self.session.get_bind().dialect.name
        insert_factory = _UPSERT_DIALECTS.get(dialect)
        if insert_factory is not None:
            table = Reaction.__table__
            stmt = insert_factory(table).values(post_id=post_id, kind=kind, count=1)
            stmt = stmt.on_conflict_do_update(
                index_elements=["post_id", "kind"],
                set_={"count": table.c.count + 1},
            )
            self.session.execute(stmt)
        else:
            # Other backends: an UPDATE first, falling back to an INSERT for new kinds.
            result = self.session.execute(
                update(Reaction)
                .where(Reaction.post_id == post_id, Reaction.kind == kind)
                .values(count=Reaction.count + 1)
            )
            if result.rowcount == 0:
                self.session.add(Reaction(post_id=post_id, kind=kind, count=1))
        self.session.commit()

    def reaction_counts(self, post_id: str) -> dict[str, int]:
        """Return a mapping of reaction kind to count for one post."""
        rows = self.session.execute(
            select(Reaction.kind, Reaction.count)
            .where(Reaction.post_id == post_id)
            .order_by(Reaction.id)
        )
        return {kind: count for kind, count in rows}

    def flag_for_review(self, post_id: str, reason: str) -> AuditEntry:
        """Force a post back into the held queue and record why.

        Missing posts are not an error: the UPDATE matches nothing and the
        ``flagged`` entry is still written.
        """
        self.session.execute(
            update(Post).where(Post.id == post_id).values(state=POST_STATE_HELD)
        )
        return self.log_audit(action=AUDIT_ACTION_FLAGGED, target=post_id, details=reason)

    def log_audit(
        self,
        *,
        action: str,
        target: str | None,
        details: str | None,
    ) -> AuditEntry:
        """Append an audit entry."""
        entry = AuditEntry(action=action, target=target, details=details, ts=now_ms())
        self.session.add(entry)
        self.session.commit()
        return entry

    def list_audit(self, target: str | None = None) -> list[AuditEntry]:
        """Return audit entries newest first, optionally for one target."""
        stmt = select(AuditEntry)
        if target:
            stmt = stmt.where(AuditEntry.target == target)
        stmt = stmt.order_by(AuditEntry.id.desc())
        return list(self.session.scalars(stmt))

    def _fresh(self, post_id: str) -> Post | None:
        post = self.get_by_id(post_id)
        if post is not None:
            self.session.refresh(post)
        return post
