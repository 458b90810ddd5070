"""Editor state snapshot and selectors.

Effect handlers read state only through these selectors. The snapshot is
immutable; the state container builds a new one after every reduced
action, and handlers request changes by dispatching actions.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..blocks.models import Block, Post, ReusableBlock
from ..config import EDITOR
from ..errors import BlockNotFoundError, ReusableBlockNotFoundError

PUBLISHED_STATUSES = frozenset({EDITOR.STATUS_PUBLISH, EDITOR.STATUS_PRIVATE})


@dataclass(frozen=True)
class MetaBoxState:
    """A meta box panel location (``normal``, ``side``, ``advanced``)."""

    is_active: bool = False
    is_dirty: bool = False


@dataclass(frozen=True)
class EditorState:
    """Read-only view of the editor's document and post state.

    ``blocks`` keeps document order; ``edits`` holds unsaved post field
    changes (``title``, ``content``, ``status``).
    """

    post: Post = field(default_factory=lambda: Post(id=None))
    edits: Mapping[str, Any] = field(default_factory=dict)
    blocks: tuple[Block, ...] = ()
    reusable_blocks: Mapping[str, ReusableBlock] = field(default_factory=dict)
    meta_boxes: Mapping[str, MetaBoxState] = field(default_factory=dict)
    dirty: bool = False

    # =========================================================================
    # Blocks
    # =========================================================================

    def get_blocks(self) -> list[Block]:
        return list(self.blocks)

    def get_block(self, uid: str) -> Block:
        """The block with ``uid``.

        Raises:
            BlockNotFoundError: If no such block is in the document.
        """
        for block in self.blocks:
            if block.id == uid:
                return block
        raise BlockNotFoundError(uid)

    def get_reusable_block(self, ref: str) -> ReusableBlock:
        """The reusable block with id ``ref``.

        Raises:
            ReusableBlockNotFoundError: If it has not been fetched or created.
        """
        try:
            return self.reusable_blocks[ref]
        except KeyError:
            raise ReusableBlockNotFoundError(ref) from None

    # =========================================================================
    # Post
    # =========================================================================

    def get_edited_post_attribute(self, name: str) -> Any:
        if name in self.edits:
            return self.edits[name]
        return getattr(self.post, name, None)

    def is_edited_post_new(self) -> bool:
        return self.post.status == EDITOR.STATUS_AUTO_DRAFT

    def is_edited_post_dirty(self) -> bool:
        return self.dirty or bool(self.edits)

    def is_current_post_published(self) -> bool:
        return self.post.status in PUBLISHED_STATUSES

    def is_edited_post_saveable(self) -> bool:
        """A post is saveable once it has a title, content or any block."""
        title = self.get_edited_post_attribute("title") or ""
        content = self.get_edited_post_attribute("content") or ""
        return bool(title.strip() or content.strip() or self.blocks)

    # =========================================================================
    # Meta boxes
    # =========================================================================

    def get_dirty_meta_boxes(self) -> list[str]:
        """Locations of active meta boxes with unsaved changes."""
        return [
            location
            for location, meta_box in self.meta_boxes.items()
            if meta_box.is_active and meta_box.is_dirty
        ]
