"""Converting blocks between static and reusable form."""

from __future__ import annotations

from collections.abc import Callable
from uuid import uuid4

from ..actions import Action, SaveReusableBlock, UpdateReusableBlock, replace_blocks
from ..blocks.models import ReusableBlock
from ..blocks.registry import BlockTypeRegistry
from ..config import EDITOR
from ..post.state import EditorState


def _new_id() -> str:
    return str(uuid4())


class BlockConversionService:
    """Turns static blocks into reusable ones and back.

    Args:
        registry: Used to build replacement blocks.
        new_id: Generates identifiers for new reusable blocks and the
            blocks that replace converted ones.
    """

    def __init__(
        self,
        registry: BlockTypeRegistry,
        *,
        new_id: Callable[[], str] = _new_id,
    ) -> None:
        self._registry = registry
        self._new_id = new_id

    def to_reusable(self, uid: str, state: EditorState) -> list[Action]:
        """Actions creating a reusable block from block ``uid``.

        The new reusable block is stored in state, saved remotely, and the
        original block is replaced by a wrapper referencing it.
        """
        block = state.get_block(uid)
        reusable_block = ReusableBlock(
            id=self._new_id(),
            name=EDITOR.UNTITLED_REUSABLE_BLOCK,
            type=block.name,
            attributes=dict(block.attributes),
        )
        wrapper = self._registry.create_block(
            EDITOR.REUSABLE_BLOCK_TYPE,
            {"ref": reusable_block.id},
            block_id=self._new_id(),
        )
        return [
            UpdateReusableBlock(id=reusable_block.id, reusable_block=reusable_block),
            SaveReusableBlock(id=reusable_block.id),
            replace_blocks([block.id], [wrapper]),
        ]

    def to_static(self, uid: str, state: EditorState) -> list[Action]:
        """Actions replacing wrapper block ``uid`` with a copy of what it references."""
        wrapper = state.get_block(uid)
        reusable_block = state.get_reusable_block(wrapper.attributes["ref"])
        block = self._registry.create_block(
            reusable_block.type,
            reusable_block.attributes,
            block_id=self._new_id(),
        )
        return [replace_blocks([wrapper.id], [block])]
