"""Block type registry.

An explicit, injectable lookup service for block type descriptors. The
merge resolver, conversion service and serializer all receive a registry
instead of reading a process-wide global, so tests build one per case.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any
from uuid import uuid4

from ..errors import BlockTypeNotRegisteredError, ValidationError
from .models import AttributeSpec, Block, BlockTypeDescriptor

logger = logging.getLogger(__name__)

BLOCK_NAME_RE = re.compile(r"^[a-z0-9-]+/[a-z0-9-]+$")

IdFactory = Callable[[], str]


def _new_uid() -> str:
    return str(uuid4())


class BlockTypeRegistry:
    """Maps block type names to their descriptors."""

    def __init__(
        self,
        descriptors: Iterable[BlockTypeDescriptor] = (),
        *,
        id_factory: IdFactory = _new_uid,
    ) -> None:
        self._descriptors: dict[str, BlockTypeDescriptor] = {}
        self._id_factory = id_factory
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: BlockTypeDescriptor) -> BlockTypeDescriptor:
        """Register a block type.

        Raises:
            ValidationError: If the name is malformed or already taken.
        """
        if not BLOCK_NAME_RE.match(descriptor.name):
            raise ValidationError(
                "Block names must contain a namespace prefix and only lowercase "
                "alphanumerics or dashes",
                field="name",
                value=descriptor.name,
                constraint="namespace/slug",
            )
        if descriptor.name in self._descriptors:
            raise ValidationError(
                f"Block type is already registered: {descriptor.name}",
                field="name",
                value=descriptor.name,
                constraint="unique",
            )
        self._descriptors[descriptor.name] = descriptor
        return descriptor

    def unregister(self, name: str) -> BlockTypeDescriptor:
        try:
            return self._descriptors.pop(name)
        except KeyError:
            raise BlockTypeNotRegisteredError(name) from None

    def get_descriptor(self, name: str) -> BlockTypeDescriptor | None:
        return self._descriptors.get(name)

    def get_block_types(self) -> list[BlockTypeDescriptor]:
        return list(self._descriptors.values())

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def sanitize_attributes(
        self,
        name: str,
        attributes: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        """Fit ``attributes`` to the schema declared for ``name``.

        Undeclared keys and values of the wrong type are dropped; declared
        attributes missing from the input get their default. Types without
        a schema keep their attributes as given.
        """
        attributes = dict(attributes or {})
        descriptor = self.get_descriptor(name)
        if descriptor is None or not descriptor.attributes:
            return attributes

        result: dict[str, Any] = {}
        for key, spec in descriptor.attributes.items():
            if key in attributes:
                value = attributes[key]
                if spec.accepts(value):
                    result[key] = value
                    continue
                logger.debug(
                    "Dropping attribute %s=%r on %s: expected %s",
                    key,
                    value,
                    name,
                    spec.type,
                )
            if spec.default is not None:
                result[key] = spec.default
        return result

    def create_block(
        self,
        name: str,
        attributes: Mapping[str, Any] | None = None,
        *,
        block_id: str | None = None,
        strict: bool = False,
    ) -> Block:
        """Build a new block of type ``name``.

        Args:
            name: Block type name.
            attributes: Initial attributes, fitted to the type's schema.
            block_id: Identifier for the new block. Generated when omitted.
            strict: Raise for unregistered types instead of passing the
                attributes through.

        Raises:
            BlockTypeNotRegisteredError: If ``strict`` and ``name`` is unknown.
        """
        if strict and name not in self._descriptors:
            raise BlockTypeNotRegisteredError(name)
        return Block(
            id=block_id if block_id is not None else self._id_factory(),
            name=name,
            attributes=self.sanitize_attributes(name, attributes),
        )


def attribute_schema(spec: Mapping[str, Mapping[str, Any]]) -> dict[str, AttributeSpec]:
    """Build an attribute schema from its dictionary form.

    Example:
        attribute_schema({"content": {"type": "string"}})
    """
    return {key: AttributeSpec.from_dict(value) for key, value in spec.items()}
