"""Autosave policy.

Decides, from the post's state flags alone, which actions an autosave
tick should dispatch. No I/O; the actual save happens when the state
container handles ``SAVE_POST``.

| saveable | dirty | published | new | actions                      |
|----------|-------|-----------|-----|------------------------------|
| no       | any   | any       | any | none                         |
| yes      | any   | yes       | any | none (publish autosave gap)  |
| yes      | any   | no        | yes | edit status=draft, save post |
| yes      | yes   | no        | no  | save post                    |
| yes      | no    | no        | no  | none                         |
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..actions import Action, edit_post, save_post
from ..config import EDITOR
from .state import EditorState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutosaveFlags:
    saveable: bool
    dirty: bool
    published: bool
    is_new: bool

    @classmethod
    def from_state(cls, state: EditorState) -> AutosaveFlags:
        return cls(
            saveable=state.is_edited_post_saveable(),
            dirty=state.is_edited_post_dirty(),
            published=state.is_current_post_published(),
            is_new=state.is_edited_post_new(),
        )


def decide_for_flags(flags: AutosaveFlags) -> list[Action]:
    """Actions for one autosave tick."""
    if not flags.saveable:
        return []

    if flags.published:
        # Autosaving published posts (revisions) is not defined yet.
        logger.debug("Skipping autosave for published post")
        return []

    # A new post leaves the auto-draft state even when clean
    if flags.is_new:
        return [edit_post({"status": EDITOR.STATUS_DRAFT}), save_post()]

    if flags.dirty:
        return [save_post()]

    return []


def decide(state: EditorState) -> list[Action]:
    """Actions for one autosave tick, from the current state snapshot."""
    return decide_for_flags(AutosaveFlags.from_state(state))
