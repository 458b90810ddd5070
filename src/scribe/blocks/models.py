"""Data models for the block-based content system.

This module defines the core data structures shared by the effect
handlers: blocks, block type descriptors and their transform rules,
reusable blocks and posts.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

# Attribute value types a schema may declare, mapped to the Python types
# a JSON decoder produces for them.
ATTRIBUTE_TYPES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "number": (int, float),
    "integer": (int,),
    "boolean": (bool,),
    "array": (list,),
    "object": (dict,),
    "null": (type(None),),
}

MergeFn = Callable[[Mapping[str, Any], Mapping[str, Any]], Mapping[str, Any]]
SaveFn = Callable[[Mapping[str, Any]], "str | None"]


@dataclass(frozen=True)
class Block:
    """A content block in the editor.

    ``name`` is the namespaced block type name (``core/paragraph``).
    Handlers never mutate a block; they build a new one and dispatch it.
    """

    id: str
    name: str
    attributes: dict[str, Any] = field(default_factory=dict)

    def with_attributes(self, updates: Mapping[str, Any]) -> Block:
        """Copy of this block with ``updates`` shallowly overlaid."""
        return Block(id=self.id, name=self.name, attributes={**self.attributes, **updates})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "uid": self.id,
            "name": self.name,
            "attributes": dict(self.attributes),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Block:
        """Create from dictionary. Accepts ``uid`` or ``id`` for the identifier."""
        return cls(
            id=data.get("uid", data.get("id")),
            name=data["name"],
            attributes=dict(data.get("attributes") or {}),
        )


@dataclass(frozen=True)
class AttributeSpec:
    """Declared type and default of one block attribute."""

    type: str | None = None
    default: Any = None
    # "html" reads the value from the block's inner markup instead of the
    # comment delimiter
    source: str | None = None

    def accepts(self, value: Any) -> bool:
        """Check whether ``value`` matches the declared JSON type."""
        if self.type is None:
            return True
        expected = ATTRIBUTE_TYPES.get(self.type)
        if expected is None:
            return True
        # bool is an int subclass; keep it out of numeric attributes
        if isinstance(value, bool) and self.type in ("number", "integer"):
            return False
        return isinstance(value, expected)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AttributeSpec:
        return cls(
            type=data.get("type"),
            default=data.get("default"),
            source=data.get("source"),
        )


@dataclass(frozen=True)
class TransformRule:
    """Declared bridge converting a block of one type into another.

    Only ``direction == "to"`` rules of kind ``"block"`` take part in
    merging.
    """

    blocks: frozenset[str]
    transform: Callable[[Mapping[str, Any]], Block]
    direction: str = "to"
    kind: str = "block"

    def targets(self, type_name: str) -> bool:
        return self.direction == "to" and self.kind == "block" and type_name in self.blocks


@dataclass(frozen=True)
class BlockTypeDescriptor:
    """Capabilities of a registered block type.

    Immutable once registered. ``merge`` and ``save`` are optional.
    """

    name: str
    title: str = ""
    category: str = "common"
    attributes: Mapping[str, AttributeSpec] = field(default_factory=dict)
    merge: MergeFn | None = None
    transforms: tuple[TransformRule, ...] = ()
    save: SaveFn | None = None

    def find_transform_to(self, type_name: str) -> TransformRule | None:
        """First ``to`` transform targeting ``type_name``, in declaration order."""
        for rule in self.transforms:
            if rule.targets(type_name):
                return rule
        return None

    def inner_markup(self, attributes: Mapping[str, Any]) -> str:
        """Inner markup produced by ``save``; empty when there is none."""
        if self.save is None:
            return ""
        return self.save(attributes) or ""


@dataclass(frozen=True)
class ReusableBlock:
    """A block definition persisted independently of any post.

    ``type`` is the wrapped block's type name.
    """

    id: str
    name: str
    type: str
    attributes: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "attributes": dict(self.attributes),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ReusableBlock:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            type=data["type"],
            attributes=dict(data.get("attributes") or {}),
        )


def _raw(value: Any) -> str:
    """Unwrap REST-style ``{"raw": ...}`` fields to plain strings."""
    if isinstance(value, Mapping):
        return value.get("raw") or ""
    return value or ""


@dataclass(frozen=True)
class Post:
    """The post being edited.

    ``title`` and ``content`` hold raw (unrendered) values.
    """

    id: int | str | None
    title: str = ""
    content: str = ""
    status: str = "auto-draft"
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "title": {"raw": self.title},
            "content": {"raw": self.content},
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Post:
        """Create from a REST API post object or a flat dictionary."""
        known = {"id", "title", "content", "status"}
        return cls(
            id=data.get("id"),
            title=_raw(data.get("title")),
            content=_raw(data.get("content")),
            status=data.get("status") or "auto-draft",
            extra={k: v for k, v in data.items() if k not in known},
        )
