"""Comment-delimited block markup.

Blocks are stored in post content and in reusable block records as HTML
comments wrapping an optional inner fragment:

    <!-- wp:paragraph {"align":"left"} -->
    <p>Hello</p>
    <!-- /wp:paragraph -->

    <!-- wp:acme/gallery {"ids":[1,2]} /-->

This covers the subset the effect handlers depend on: turning a block's
type and attributes into one fragment and reading fragments back. It is
not a full grammar (no inner block trees).
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..config import EDITOR
from ..errors import ValidationError
from .models import Block
from .registry import BlockTypeRegistry

logger = logging.getLogger(__name__)

DELIMITER_RE = re.compile(
    r"<!--\s+(?P<closer>/)?wp:(?P<namespace>[a-z0-9-]+/)?(?P<name>[a-z0-9-]+)"
    r"\s+(?P<attrs>\{(?:(?!\}\s+/?-->).)*?\}\s+)?(?P<void>/)?-->",
    re.DOTALL,
)

_DEFAULT_PREFIX = EDITOR.DEFAULT_NAMESPACE + "/"


# =============================================================================
# Serialization
# =============================================================================


def serialized_block_name(name: str) -> str:
    """Name as written in a delimiter; the default namespace is implied."""
    if name.startswith(_DEFAULT_PREFIX):
        return name[len(_DEFAULT_PREFIX):]
    return name


def serialize_attributes(attributes: Mapping[str, Any]) -> str:
    """Compact JSON with ``--`` escaped so the comment stays well formed."""
    encoded = json.dumps(attributes, separators=(",", ":"), ensure_ascii=False)
    return encoded.replace("--", "\\u002d\\u002d")


def comment_delimited(name: str, attributes: Mapping[str, Any], inner: str = "") -> str:
    """Wrap ``inner`` markup in the delimiters for block type ``name``.

    Attributes are left out entirely when empty; a block with no inner
    markup is written in the self-closing form.
    """
    serialized_name = serialized_block_name(name)
    serialized_attrs = serialize_attributes(attributes) + " " if attributes else ""
    if not inner:
        return f"<!-- wp:{serialized_name} {serialized_attrs}/-->"
    return (
        f"<!-- wp:{serialized_name} {serialized_attrs}-->\n"
        f"{inner}\n"
        f"<!-- /wp:{serialized_name} -->"
    )


def serialize_block(
    name: str,
    attributes: Mapping[str, Any],
    registry: BlockTypeRegistry | None = None,
) -> str:
    """Serialize a block type name and its attributes to markup.

    When the type is registered and its ``save`` produces inner markup,
    attributes read from inner markup are written there instead of the
    comment. Without inner markup every attribute stays in the comment.
    """
    descriptor = registry.get_descriptor(name) if registry is not None else None
    if descriptor is None:
        return comment_delimited(name, attributes)

    inner = descriptor.inner_markup(attributes)
    if not inner:
        return comment_delimited(name, attributes)

    comment_attrs = {
        key: value
        for key, value in attributes.items()
        if not (key in descriptor.attributes and descriptor.attributes[key].source)
    }
    return comment_delimited(name, comment_attrs, inner)


def serialize(blocks: list[Block], registry: BlockTypeRegistry | None = None) -> str:
    """Serialize a sequence of blocks, separated by blank lines."""
    return "\n\n".join(serialize_block(b.name, b.attributes, registry) for b in blocks)


# =============================================================================
# Parsing
# =============================================================================


@dataclass(frozen=True)
class _Opener:
    name: str
    attributes: dict[str, Any]
    start: int
    inner_start: int


def _full_name(match: re.Match[str]) -> str:
    namespace = match.group("namespace") or _DEFAULT_PREFIX
    return namespace + match.group("name")


def _decode_attributes(match: re.Match[str]) -> dict[str, Any]:
    raw = match.group("attrs")
    if not raw:
        return {}
    try:
        attributes = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(
            f"Invalid block attributes: {exc.msg}",
            field="attributes",
            value=raw,
        ) from exc
    if not isinstance(attributes, dict):
        raise ValidationError("Block attributes must be an object", field="attributes", value=raw)
    return attributes


def _build_block(
    registry: BlockTypeRegistry,
    name: str,
    attributes: dict[str, Any],
    inner: str,
) -> Block:
    descriptor = registry.get_descriptor(name)
    if descriptor is not None and inner.strip():
        for key, spec in descriptor.attributes.items():
            if spec.source == "html":
                attributes = {**attributes, key: inner.strip()}
    return registry.create_block(name, attributes)


def _freeform(registry: BlockTypeRegistry, text: str) -> Block | None:
    if not text.strip():
        return None
    return registry.create_block(EDITOR.FREEFORM_BLOCK_TYPE, {"content": text.strip()})


def parse_blocks(markup: str, registry: BlockTypeRegistry) -> list[Block]:
    """Parse markup into its top-level blocks, in document order.

    Args:
        markup: Post or record content.
        registry: Used to fit attributes to each type's schema and to
            assign identifiers.

    Returns:
        Top-level blocks. Text outside any delimiter becomes a freeform
        block.

    Raises:
        ValidationError: If a delimiter carries attributes that are not a
            JSON object.
    """
    blocks: list[Block] = []
    stack: list[_Opener] = []
    cursor = 0

    def emit(block: Block | None) -> None:
        if block is not None:
            blocks.append(block)

    for match in DELIMITER_RE.finditer(markup):
        name = _full_name(match)

        if match.group("closer"):
            if not stack:
                logger.debug("Ignoring stray closing delimiter for %s", name)
                emit(_freeform(registry, markup[cursor:match.start()]))
                cursor = match.end()
                continue
            opener = stack.pop()
            if opener.name != name:
                logger.debug("Closing delimiter %s does not match opener %s", name, opener.name)
            if not stack:
                inner = markup[opener.inner_start:match.start()]
                emit(_build_block(registry, opener.name, opener.attributes, inner))
                cursor = match.end()
            continue

        if stack:
            # Nested delimiter, part of the outer block's inner markup
            if not match.group("void"):
                stack.append(_Opener(name, {}, match.start(), match.end()))
            continue

        emit(_freeform(registry, markup[cursor:match.start()]))
        attributes = _decode_attributes(match)
        if match.group("void"):
            emit(_build_block(registry, name, attributes, ""))
            cursor = match.end()
        else:
            stack.append(_Opener(name, attributes, match.start(), match.end()))

    if stack:
        opener = stack[0]
        logger.debug("Unclosed block %s runs to end of markup", opener.name)
        emit(_build_block(registry, opener.name, opener.attributes, markup[opener.inner_start:]))
    else:
        emit(_freeform(registry, markup[cursor:]))

    return blocks


def parse_first_block(markup: str, registry: BlockTypeRegistry) -> Block:
    """The first top-level block in ``markup``.

    Raises:
        ValidationError: If the markup holds no block.
    """
    blocks = parse_blocks(markup, registry)
    if not blocks:
        raise ValidationError("Markup does not contain a block", field="content", value=markup)
    return blocks[0]
