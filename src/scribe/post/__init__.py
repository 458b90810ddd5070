"""Post state, autosave policy and post lifecycle effects."""

from __future__ import annotations

from .autosave import AutosaveFlags, decide, decide_for_flags
from .lifecycle import request_post_update_failure, request_post_update_success, setup_editor
from .state import EditorState, MetaBoxState

__all__ = [
    "AutosaveFlags",
    "EditorState",
    "MetaBoxState",
    "decide",
    "decide_for_flags",
    "request_post_update_failure",
    "request_post_update_success",
    "setup_editor",
]
