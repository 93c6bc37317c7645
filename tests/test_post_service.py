# tests/test_post_service.py
"""Service-level tests for the post lifecycle."""

import json

import pytest

from lantern.models import AuditEntry, Post, Reaction
from lantern.services.post_service import (
    PostNotFoundError,
    PostService,
    PostValidationError,
)


class TestCreate:
    def test_clean_text_held_without_auto_publish(self, post_service: PostService) -> None:
        post = post_service.create("hello world", "general")
        assert post.state == "held"
        assert post.channel == "general"

    def test_clean_text_published_with_auto_publish(self, post_service: PostService) -> None:
        post_service.context.auto_publish = True
        assert post_service.create("hello world").state == "published"

    def test_flagged_text_always_held(self, post_service: PostService) -> None:
        post_service.context.auto_publish = True
        for text in ("I want to die", "BOMB threat", "please shut up"):
            assert post_service.create(text).state == "held"

    @pytest.mark.parametrize("text", [None, "", "   ", "\n\t"])
    def test_blank_text_rejected(self, post_service: PostService, text) -> None:
        with pytest.raises(PostValidationError):
            post_service.create(text)

    def test_ids_are_unique_and_timestamps_increase(self, post_service: PostService) -> None:
        posts = [post_service.create(f"note number {i}") for i in range(20)]
        assert len({post.id for post in posts}) == 20
        timestamps = [post.ts for post in posts]
        assert timestamps == sorted(timestamps)
        assert len(set(timestamps)) == 20

    def test_custom_default_channel(self, repo, service_context) -> None:
        service = PostService(repo, service_context, default_channel="lobby")
        assert service.create("hello world").channel == "lobby"


class TestReactions:
    def test_counts_are_independent_per_kind(self, post_service: PostService, db_session) -> None:
        post = post_service.create("hello world")
        post_service.add_reaction(post.id, "heart")
        post_service.add_reaction(post.id, "heart")
        _, counts = post_service.add_reaction(post.id, "hug")
        assert counts == {"heart": 2, "hug": 1}
        # One row per (post, kind).
        assert db_session.query(Reaction).filter(Reaction.post_id == post.id).count() == 2

    def test_missing_kind(self, post_service: PostService) -> None:
        post = post_service.create("hello world")
        with pytest.raises(PostValidationError):
            post_service.add_reaction(post.id, None)

    def test_missing_post(self, post_service: PostService, db_session) -> None:
        with pytest.raises(PostNotFoundError):
            post_service.add_reaction("missing", "heart")
        assert db_session.query(Reaction).count() == 0


class TestReport:
    def test_report_holds_published_post(self, post_service: PostService) -> None:
        post_service.context.auto_publish = True
        post = post_service.create("hello world")
        assert post.state == "published"

        entry = post_service.report(post.id)
        assert entry.action == "flagged"
        assert entry.target == post.id
        assert post_service.repo.get_by_id(post.id).state == "held"

    def test_report_missing_post_appends_one_entry(self, post_service: PostService, db_session) -> None:
        post_service.report("missing", "odd")
        entries = db_session.query(AuditEntry).all()
        assert [(e.action, e.target, e.details) for e in entries] == [("flagged", "missing", "odd")]


class TestAdminActions:
    def test_update_logs_attempt(self, post_service: PostService) -> None:
        post = post_service.create("hello world")
        updated = post_service.admin_update(post.id, state="published", text=None)
        assert updated.state == "published"
        assert updated.text == "hello world"

        entry = post_service.list_audit(post.id)[0]
        assert entry.action == "update_post"
        assert json.loads(entry.details) == {"state": "published", "text": None}

    def test_update_invalid_state_writes_nothing(self, post_service: PostService) -> None:
        post = post_service.create("hello world")
        with pytest.raises(PostValidationError):
            post_service.admin_update(post.id, state="hidden")
        assert post_service.list_audit(post.id) == []

    def test_update_missing_post(self, post_service: PostService) -> None:
        with pytest.raises(PostNotFoundError):
            post_service.admin_update("missing", text="new words")
        assert len(post_service.list_audit("missing")) == 1

    def test_delete_cascades_reactions_only(self, post_service: PostService, db_session) -> None:
        post = post_service.create("hello world")
        post_id = post.id
        post_service.add_reaction(post_id, "heart")
        post_service.report(post_id)

        post_service.admin_delete(post_id)

        assert db_session.get(Post, post_id) is None
        assert db_session.query(Reaction).filter(Reaction.post_id == post_id).count() == 0
        assert post_id not in [p.id for p in post_service.list_all()]
        actions = [entry.action for entry in post_service.list_audit(post_id)]
        assert actions == ["delete_post", "flagged"]

    def test_toggle_auto_publish(self, post_service: PostService) -> None:
        assert post_service.toggle_auto_publish() is True
        assert post_service.toggle_auto_publish() is False

    def test_export_matches_list_all(self, post_service: PostService) -> None:
        post_service.create("first note")
        post_service.create("second note")
        assert [p.id for p in post_service.export()] == [p.id for p in post_service.list_all()]
