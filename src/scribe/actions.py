"""Editor actions.

Every action is a frozen dataclass with a wire ``type`` tag, so the set of
actions the effects layer consumes and produces is closed and each
variant's payload is typed. ``to_dict()`` gives the ``{type, ...payload}``
form the state container and the UI exchange.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

from .blocks.models import Block, Post, ReusableBlock


def _plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


@dataclass(frozen=True)
class Action:
    """Base class for all actions."""

    type: ClassVar[str] = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        for f in fields(self):
            result[_camel(f.name)] = _plain(getattr(self, f.name))
        return result


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


# =============================================================================
# Blocks
# =============================================================================


@dataclass(frozen=True)
class MergeBlocks(Action):
    type: ClassVar[str] = "MERGE_BLOCKS"

    block_a: Block
    block_b: Block


@dataclass(frozen=True)
class FocusBlock(Action):
    """Move editing focus to a block.

    ``offset`` is the caret position; -1 puts it at the end of the block's
    original content.
    """

    type: ClassVar[str] = "FOCUS_BLOCK"

    uid: str
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ReplaceBlocks(Action):
    type: ClassVar[str] = "REPLACE_BLOCKS"

    uids: tuple[str, ...]
    blocks: tuple[Block, ...]


@dataclass(frozen=True)
class ResetBlocks(Action):
    type: ClassVar[str] = "RESET_BLOCKS"

    blocks: tuple[Block, ...]


# =============================================================================
# Post
# =============================================================================


@dataclass(frozen=True)
class SetupEditor(Action):
    type: ClassVar[str] = "SETUP_EDITOR"

    post: Post
    settings: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ResetPost(Action):
    type: ClassVar[str] = "RESET_POST"

    post: Post


@dataclass(frozen=True)
class SetupNewPost(Action):
    type: ClassVar[str] = "SETUP_NEW_POST"

    edits: dict[str, Any]


@dataclass(frozen=True)
class EditPost(Action):
    type: ClassVar[str] = "EDIT_POST"

    edits: dict[str, Any]


@dataclass(frozen=True)
class SavePost(Action):
    type: ClassVar[str] = "SAVE_POST"


@dataclass(frozen=True)
class Autosave(Action):
    type: ClassVar[str] = "AUTOSAVE"


@dataclass(frozen=True)
class RequestPostUpdateSuccess(Action):
    type: ClassVar[str] = "REQUEST_POST_UPDATE_SUCCESS"

    post: Post
    previous_post: Post


@dataclass(frozen=True)
class RequestPostUpdateFailure(Action):
    type: ClassVar[str] = "REQUEST_POST_UPDATE_FAILURE"

    post: Post
    edits: dict[str, Any] = field(default_factory=dict)
    error: dict[str, Any] | None = None


@dataclass(frozen=True)
class RequestMetaBoxUpdates(Action):
    type: ClassVar[str] = "REQUEST_META_BOX_UPDATES"

    locations: tuple[str, ...]


@dataclass(frozen=True)
class CreateNotice(Action):
    type: ClassVar[str] = "CREATE_NOTICE"

    status: str
    content: str
    notice_id: str


# =============================================================================
# Reusable blocks
# =============================================================================


@dataclass(frozen=True)
class FetchReusableBlocks(Action):
    """Fetch every reusable block, or only ``id`` when given."""

    type: ClassVar[str] = "FETCH_REUSABLE_BLOCKS"

    id: str | None = None


@dataclass(frozen=True)
class FetchReusableBlocksSuccess(Action):
    type: ClassVar[str] = "FETCH_REUSABLE_BLOCKS_SUCCESS"

    reusable_blocks: tuple[ReusableBlock, ...]


@dataclass(frozen=True)
class FetchReusableBlocksFailure(Action):
    type: ClassVar[str] = "FETCH_REUSABLE_BLOCKS_FAILURE"

    error: dict[str, str]


@dataclass(frozen=True)
class UpdateReusableBlock(Action):
    type: ClassVar[str] = "UPDATE_REUSABLE_BLOCK"

    id: str
    reusable_block: ReusableBlock


@dataclass(frozen=True)
class SaveReusableBlock(Action):
    type: ClassVar[str] = "SAVE_REUSABLE_BLOCK"

    id: str


@dataclass(frozen=True)
class SaveReusableBlockSuccess(Action):
    type: ClassVar[str] = "SAVE_REUSABLE_BLOCK_SUCCESS"

    id: str


@dataclass(frozen=True)
class SaveReusableBlockFailure(Action):
    type: ClassVar[str] = "SAVE_REUSABLE_BLOCK_FAILURE"

    id: str


@dataclass(frozen=True)
class ConvertBlockToStatic(Action):
    type: ClassVar[str] = "CONVERT_BLOCK_TO_STATIC"

    uid: str


@dataclass(frozen=True)
class ConvertBlockToReusable(Action):
    type: ClassVar[str] = "CONVERT_BLOCK_TO_REUSABLE"

    uid: str


# =============================================================================
# Action creators
# =============================================================================


def focus_block(uid: str, config: dict[str, Any] | None = None) -> FocusBlock:
    return FocusBlock(uid=uid, config=dict(config or {}))


def replace_blocks(
    uids: list[str] | tuple[str, ...],
    blocks: Block | list[Block] | tuple[Block, ...],
) -> ReplaceBlocks:
    """Replace the blocks ``uids`` with ``blocks`` (a single block is allowed)."""
    if isinstance(blocks, Block):
        blocks = (blocks,)
    return ReplaceBlocks(uids=tuple(uids), blocks=tuple(blocks))


def reset_blocks(blocks: list[Block] | tuple[Block, ...]) -> ResetBlocks:
    return ResetBlocks(blocks=tuple(blocks))


def edit_post(edits: dict[str, Any]) -> EditPost:
    return EditPost(edits=dict(edits))


def save_post() -> SavePost:
    return SavePost()


def request_meta_box_updates(locations: list[str] | tuple[str, ...]) -> RequestMetaBoxUpdates:
    return RequestMetaBoxUpdates(locations=tuple(locations))


def fetch_reusable_blocks_success(reusable_blocks: list[ReusableBlock]) -> FetchReusableBlocksSuccess:
    return FetchReusableBlocksSuccess(reusable_blocks=tuple(reusable_blocks))
