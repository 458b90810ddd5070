"""Tests for the autosave policy."""

from __future__ import annotations

import pytest

from scribe.actions import EditPost, SavePost
from scribe.blocks.models import Block, Post
from scribe.post.autosave import AutosaveFlags, decide, decide_for_flags
from scribe.post.state import EditorState

NEW_POST = [EditPost(edits={"status": "draft"}), SavePost()]
SAVE = [SavePost()]


@pytest.mark.parametrize(
    ("saveable", "dirty", "published", "is_new", "expected"),
    [
        (False, False, False, False, []),
        (False, False, False, True, []),
        (False, False, True, False, []),
        (False, False, True, True, []),
        (False, True, False, False, []),
        (False, True, False, True, []),
        (False, True, True, False, []),
        (False, True, True, True, []),
        (True, False, False, False, []),
        (True, False, False, True, NEW_POST),
        (True, False, True, False, []),
        (True, False, True, True, []),
        (True, True, False, False, SAVE),
        (True, True, False, True, NEW_POST),
        (True, True, True, False, []),
        (True, True, True, True, []),
    ],
)
def test_decision_table(
    saveable: bool,
    dirty: bool,
    published: bool,
    is_new: bool,
    expected: list,
) -> None:
    flags = AutosaveFlags(saveable=saveable, dirty=dirty, published=published, is_new=is_new)

    assert decide_for_flags(flags) == expected


class TestDecideFromState:
    """Flags derived from an editor state snapshot."""

    def test_new_post_with_title_becomes_draft(self) -> None:
        state = EditorState(post=Post(id=1, status="auto-draft"), edits={"title": "Hello"})

        assert decide(state) == NEW_POST

    def test_dirty_draft_is_saved(self) -> None:
        state = EditorState(post=Post(id=1, title="Hello", status="draft"), dirty=True)

        assert decide(state) == SAVE

    def test_clean_draft_is_left_alone(self) -> None:
        state = EditorState(post=Post(id=1, title="Hello", status="draft"))

        assert decide(state) == []

    def test_empty_post_is_not_saveable(self) -> None:
        state = EditorState(post=Post(id=1, title="  ", status="auto-draft"), dirty=True)

        assert decide(state) == []

    def test_blocks_make_post_saveable(self) -> None:
        state = EditorState(
            post=Post(id=1, status="draft"),
            blocks=(Block(id="a", name="core/test-block"),),
            dirty=True,
        )

        assert decide(state) == SAVE

    @pytest.mark.parametrize("status", ["publish", "private"])
    def test_published_posts_are_not_autosaved(self, status: str) -> None:
        state = EditorState(post=Post(id=1, title="Hello", status=status), dirty=True)

        assert decide(state) == []

    def test_flags_from_state(self) -> None:
        state = EditorState(post=Post(id=1, status="auto-draft"), edits={"content": "x"})

        assert AutosaveFlags.from_state(state) == AutosaveFlags(
            saveable=True,
            dirty=True,
            published=False,
            is_new=True,
        )
