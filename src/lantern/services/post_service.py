"""Post lifecycle: submission, moderation gating, reactions and admin actions."""
from __future__ import annotations

import json
import logging
import secrets

from lantern.models import AuditEntry, Post
from lantern.models.audit import AUDIT_ACTION_DELETE_POST, AUDIT_ACTION_UPDATE_POST
from lantern.models.post import POST_STATE_HELD, POST_STATE_PUBLISHED, POST_STATES
from lantern.repositories.post_repo import PostRepository
from lantern.services.context import ServiceContext
from lantern.services.moderation import check_for_flags

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL = "confess-here"
DEFAULT_REPORT_REASON = "reported by user"


class PostValidationError(ValueError):
    """Raised when a request is missing a required field or carries a bad value."""


class PostNotFoundError(LookupError):
    """Raised when an operation needs a post that does not exist."""

    def __init__(self, post_id: str) -> None:
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id


def new_post_id() -> str:
    """Return a fresh opaque post identifier."""
    return secrets.token_hex(8)


def initial_state(text: str, *, auto_publish: bool) -> str:
    """Decide the state of a new post.

    Flagged text is always held; otherwise the auto-publish flag decides.
    """
    if check_for_flags(text):
        return POST_STATE_HELD
    return POST_STATE_PUBLISHED if auto_publish else POST_STATE_HELD


class PostService:
    """Service orchestrating the post lifecycle on top of the repository."""

    def __init__(
        self,
        repo: PostRepository,
        context: ServiceContext,
        *,
        default_channel: str = DEFAULT_CHANNEL,
    ) -> None:
        self.repo = repo
        self.context = context
        self.default_channel = default_channel

    def create(self, text: str | None, channel: str | None = None) -> Post:
        """Create a post from a public submission.

        Args:
            text: Confession body; surrounding whitespace is stripped.
            channel: Target channel; falls back to the default channel.

        Returns:
            The persisted post.

        Raises:
            PostValidationError: If the text is missing or blank.
        """
        if not text or not text.strip():
            raise PostValidationError("text required")
        body = text.strip()
        post = self.repo.create(
            post_id=new_post_id(),
            text=body,
            channel=channel or self.default_channel,
            state=initial_state(body, auto_publish=self.context.auto_publish),
        )
        if check_for_flags(body):
            logger.info("Post %s held by keyword filter", post.id)
        return post

    def list_published(self, channel: str | None = None) -> list[Post]:
        """Return published posts newest first."""
        return self.repo.list_published(channel)

    def list_all(self) -> list[Post]:
        """Return every post newest first."""
        return self.repo.list_all()

    def export(self) -> list[Post]:
        """Return the full post set for download."""
        return self.repo.list_all()

    def add_reaction(self, post_id: str, kind: str | None) -> tuple[Post, dict[str, int]]:
        """Increment a reaction counter and return the post with all its counts.

        Raises:
            PostValidationError: If ``kind`` is missing.
            PostNotFoundError: If the post does not exist; nothing is written.
        """
        if not kind:
            raise PostValidationError("kind required")
        post = self.repo.get_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        self.repo.increment_reaction(post_id, kind)
        return post, self.repo.reaction_counts(post_id)

    def report(self, post_id: str, reason: str | None = None) -> AuditEntry:
        """Send a post back to the held queue and log a ``flagged`` entry."""
        entry = self.repo.flag_for_review(post_id, reason or DEFAULT_REPORT_REASON)
        logger.info("Post %s reported for review", post_id)
        return entry

    def admin_update(
        self,
        post_id: str,
        *,
        state: str | None = None,
        text: str | None = None,
    ) -> Post:
        """Apply an admin edit and record the attempt in the audit log.

        Falsy values are treated as not provided. The audit entry is written
        even when nothing changes or the post does not exist.

        Raises:
            PostValidationError: If ``state`` is not a known post state.
            PostNotFoundError: If the post does not exist.
        """
        if state and state not in POST_STATES:
            raise PostValidationError(f"state must be one of {sorted(POST_STATES)}")
        post = self.repo.update_fields(post_id, state=state, text=text)
        self.repo.log_audit(
            action=AUDIT_ACTION_UPDATE_POST,
            target=post_id,
            details=json.dumps({"state": state, "text": text}),
        )
        if post is None:
            raise PostNotFoundError(post_id)
        logger.info("Admin updated post %s", post_id)
        return post

    def admin_delete(self, post_id: str) -> None:
        """Delete a post and its reactions, keeping its audit history."""
        self.repo.delete(post_id)
        self.repo.log_audit(action=AUDIT_ACTION_DELETE_POST, target=post_id, details="{}")
        logger.info("Admin deleted post %s", post_id)

    def toggle_auto_publish(self) -> bool:
        """Flip the auto-publish flag; return the new value."""
        return self.context.toggle_auto_publish()

    def list_audit(self, target: str | None = None) -> list[AuditEntry]:
        """Return audit entries newest first."""
        return self.repo.list_audit(target)
