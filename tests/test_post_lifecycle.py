"""Tests for editor setup and post save outcome effects."""

from __future__ import annotations

import pytest

from scribe.actions import CreateNotice, RequestMetaBoxUpdates, ResetBlocks, ResetPost, SetupNewPost
from scribe.blocks.models import BlockTypeDescriptor, Post
from scribe.blocks.registry import BlockTypeRegistry
from scribe.post.lifecycle import (
    request_post_update_failure,
    request_post_update_success,
    setup_editor,
)
from scribe.post.state import EditorState, MetaBoxState


@pytest.fixture
def saving_registry() -> BlockTypeRegistry:
    return BlockTypeRegistry(
        [BlockTypeDescriptor(name="core/test-block", save=lambda attributes: "Saved")],
        id_factory=lambda: "uid",
    )


def _notice(status: str, content: str) -> CreateNotice:
    return CreateNotice(status=status, content=content, notice_id="SAVE_POST_NOTICE_ID")


class TestSetupEditor:
    def test_resets_post_without_content(self, saving_registry: BlockTypeRegistry) -> None:
        post = Post(id=1, title="A History of Pork", content="", status="draft")

        assert setup_editor(post, saving_registry) == [ResetPost(post=post)]

    def test_resets_blocks_from_content(self, saving_registry: BlockTypeRegistry) -> None:
        post = Post(
            id=1,
            title="A History of Pork",
            content="<!-- wp:core/test-block -->Saved<!-- /wp:core/test-block -->",
            status="draft",
        )

        actions = setup_editor(post, saving_registry)

        assert len(actions) == 2
        assert actions[0] == ResetPost(post=post)
        assert isinstance(actions[1], ResetBlocks)
        assert [b.name for b in actions[1].blocks] == ["core/test-block"]

    def test_sets_up_new_post(self, saving_registry: BlockTypeRegistry) -> None:
        post = Post(id=1, title="A History of Pork", content="", status="auto-draft")

        assert setup_editor(post, saving_registry) == [
            ResetPost(post=post),
            SetupNewPost(edits={"title": "A History of Pork"}),
        ]


class TestRequestPostUpdateSuccess:
    def test_requests_dirty_meta_box_updates(self) -> None:
        state = EditorState(
            meta_boxes={
                "normal": MetaBoxState(is_active=True, is_dirty=True),
                "advanced": MetaBoxState(is_active=True, is_dirty=False),
                "side": MetaBoxState(is_active=True, is_dirty=True),
                "other": MetaBoxState(is_active=False, is_dirty=True),
            }
        )
        post = Post(id=1, status="draft")

        actions = request_post_update_success(post, post, state)

        assert actions == [RequestMetaBoxUpdates(locations=("normal", "side"))]

    def test_draft_save_is_silent(self) -> None:
        post = Post(id=1, status="draft")

        assert request_post_update_success(post, post, EditorState()) == []

    @pytest.mark.parametrize(
        ("status", "message"),
        [
            ("publish", "Post published!"),
            ("private", "Post published privately!"),
            ("future", "Post scheduled!"),
        ],
    )
    def test_notice_when_post_goes_public(self, status: str, message: str) -> None:
        actions = request_post_update_success(
            Post(id=1, status=status),
            Post(id=1, status="draft"),
            EditorState(),
        )

        assert actions == [_notice("success", message)]

    def test_notice_when_published_post_updated(self) -> None:
        post = Post(id=1, status="publish")

        assert request_post_update_success(post, post, EditorState()) == [
            _notice("success", "Post updated!")
        ]

    def test_notice_when_reverted_to_draft(self) -> None:
        actions = request_post_update_success(
            Post(id=1, status="draft"),
            Post(id=1, status="publish"),
            EditorState(),
        )

        assert actions == [_notice("success", "Post reverted to draft.")]

    def test_notice_comes_before_meta_box_updates(self) -> None:
        state = EditorState(meta_boxes={"side": MetaBoxState(is_active=True, is_dirty=True)})

        actions = request_post_update_success(
            Post(id=1, status="publish"),
            Post(id=1, status="draft"),
            state,
        )

        assert actions == [
            _notice("success", "Post published!"),
            RequestMetaBoxUpdates(locations=("side",)),
        ]


class TestRequestPostUpdateFailure:
    def test_forwards_error_message(self) -> None:
        actions = request_post_update_failure(
            Post(id=1, status="draft"),
            {},
            {"code": "rest_forbidden", "message": "Sorry, you are not allowed."},
        )

        assert actions == [_notice("error", "Sorry, you are not allowed.")]

    @pytest.mark.parametrize(
        ("target", "message"),
        [
            ("publish", "Publishing failed."),
            ("private", "Publishing failed."),
            ("future", "Scheduling failed."),
            ("draft", "Updating failed."),
        ],
    )
    def test_message_from_target_status(self, target: str, message: str) -> None:
        actions = request_post_update_failure(Post(id=1, status="draft"), {"status": target}, None)

        assert actions == [_notice("error", message)]

    def test_published_post_update_failure(self) -> None:
        actions = request_post_update_failure(
            Post(id=1, status="publish"),
            {"status": "publish"},
            {},
        )

        assert actions == [_notice("error", "Updating failed.")]
