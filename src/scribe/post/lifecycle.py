"""Post lifecycle effects: editor setup and save outcomes."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..actions import (
    Action,
    CreateNotice,
    ResetPost,
    SetupNewPost,
    request_meta_box_updates,
    reset_blocks,
)
from ..blocks.models import Post
from ..blocks.registry import BlockTypeRegistry
from ..blocks.serializer import parse_blocks
from ..config import EDITOR
from .state import EditorState

logger = logging.getLogger(__name__)

PUBLISH_STATUSES = frozenset({EDITOR.STATUS_PUBLISH, EDITOR.STATUS_PRIVATE, EDITOR.STATUS_FUTURE})

_PUBLISHED_MESSAGES = {
    EDITOR.STATUS_PUBLISH: "Post published!",
    EDITOR.STATUS_PRIVATE: "Post published privately!",
    EDITOR.STATUS_FUTURE: "Post scheduled!",
}

_FAILURE_MESSAGES = {
    EDITOR.STATUS_PUBLISH: "Publishing failed.",
    EDITOR.STATUS_PRIVATE: "Publishing failed.",
    EDITOR.STATUS_FUTURE: "Scheduling failed.",
}


def setup_editor(post: Post, registry: BlockTypeRegistry) -> list[Action]:
    """Actions initializing the editor for ``post``.

    Always resets the post; parses its content into blocks when there is
    any; starts new-post setup for auto-drafts.
    """
    actions: list[Action] = [ResetPost(post=post)]

    if post.content:
        actions.append(reset_blocks(parse_blocks(post.content, registry)))

    if post.status == EDITOR.STATUS_AUTO_DRAFT:
        actions.append(SetupNewPost(edits={"title": post.title}))

    return actions


def _success_notice(post: Post, previous_post: Post) -> str | None:
    was_published = previous_post.status in PUBLISH_STATUSES
    will_publish = post.status in PUBLISH_STATUSES

    if not was_published and not will_publish:
        return None
    if was_published and not will_publish:
        return "Post reverted to draft."
    if not was_published:
        return _PUBLISHED_MESSAGES[post.status]
    return "Post updated!"


def request_post_update_success(
    post: Post,
    previous_post: Post,
    state: EditorState,
) -> list[Action]:
    """Actions following a successful post save.

    Emits a notice when the save changed the post's public visibility or
    updated a published post, then asks dirty meta boxes to save.
    """
    actions: list[Action] = []

    message = _success_notice(post, previous_post)
    if message:
        actions.append(
            CreateNotice(status="success", content=message, notice_id=EDITOR.SAVE_POST_NOTICE_ID)
        )

    dirty_meta_boxes = state.get_dirty_meta_boxes()
    if dirty_meta_boxes:
        actions.append(request_meta_box_updates(dirty_meta_boxes))

    return actions


def request_post_update_failure(
    post: Post,
    edits: Mapping[str, Any],
    error: Mapping[str, Any] | None,
) -> list[Action]:
    """Error notice for a failed post save."""
    message = (error or {}).get("message")
    if not message:
        target_status = edits.get("status")
        if post.status not in PUBLISH_STATUSES and target_status in _FAILURE_MESSAGES:
            message = _FAILURE_MESSAGES[target_status]
        else:
            message = "Updating failed."

    logger.warning("Post %s failed to save: %s", post.id, message)
    return [CreateNotice(status="error", content=message, notice_id=EDITOR.SAVE_POST_NOTICE_ID)]
