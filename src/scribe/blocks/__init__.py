"""Block models, type registry and markup serialization.

Import the merge resolver from ``scribe.blocks.merge``.
"""

from __future__ import annotations

from .models import (
    AttributeSpec,
    Block,
    BlockTypeDescriptor,
    Post,
    ReusableBlock,
    TransformRule,
)
from .registry import BlockTypeRegistry, attribute_schema
from .serializer import parse_blocks, parse_first_block, serialize, serialize_block

__all__ = [
    "AttributeSpec",
    "Block",
    "BlockTypeDescriptor",
    "BlockTypeRegistry",
    "Post",
    "ReusableBlock",
    "TransformRule",
    "attribute_schema",
    "parse_blocks",
    "parse_first_block",
    "serialize",
    "serialize_block",
]
