"""Merging adjacent blocks.

Given two neighbouring blocks, decide whether they can become one:

1. If the first block's type has no ``merge`` function, only move focus
   to it.
2. Blocks of the same type are merged directly.
3. Blocks of different types are merged only when the second block's type
   declares a ``to`` transform targeting the first block's type. The first
   matching rule in declaration order wins.
4. Anything else is a no-op.
"""

from __future__ import annotations

import logging

from ..actions import Action, focus_block, replace_blocks
from .models import Block
from .registry import BlockTypeRegistry

logger = logging.getLogger(__name__)


class BlockMergeResolver:
    """Decides the follow-up actions for a block merge."""

    def __init__(self, registry: BlockTypeRegistry) -> None:
        self._registry = registry

    def merge(self, block_a: Block, block_b: Block) -> list[Action]:
        """Actions merging ``block_b`` into ``block_a``.

        Returns:
            ``[focus]`` when the first type cannot merge, ``[focus(offset=-1),
            replace]`` on a merge, ``[]`` when no bridge exists.
        """
        descriptor_a = self._registry.get_descriptor(block_a.name)
        if descriptor_a is None or descriptor_a.merge is None:
            return [focus_block(block_a.id)]

        block_to_merge = block_b
        if block_a.name != block_b.name:
            block_to_merge = self._transform(block_b, block_a.name)
            if block_to_merge is None:
                return []

        updated_attributes = descriptor_a.merge(block_a.attributes, block_to_merge.attributes)
        merged = block_a.with_attributes(updated_attributes)

        return [
            focus_block(block_a.id, {"offset": -1}),
            replace_blocks([block_a.id, block_b.id], [merged]),
        ]

    def _transform(self, block: Block, target_name: str) -> Block | None:
        descriptor = self._registry.get_descriptor(block.name)
        if descriptor is None:
            logger.debug("No descriptor for %s; not merging into %s", block.name, target_name)
            return None

        rule = descriptor.find_transform_to(target_name)
        if rule is None:
            logger.debug("No transform from %s to %s", block.name, target_name)
            return None

        transformed = rule.transform(block.attributes)
        if transformed.name != target_name:
            logger.debug(
                "Transform from %s produced %s instead of %s",
                block.name,
                transformed.name,
                target_name,
            )
            return None
        return transformed
