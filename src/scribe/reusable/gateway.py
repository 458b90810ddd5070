"""Reusable block gateway.

Translates between remote records ``{id, name, content}`` and
``ReusableBlock`` values ``{id, name, type, attributes}``: the block type
and attributes live in ``content`` as one comment-delimited fragment.
"""

from __future__ import annotations

import logging

from ..actions import (
    Action,
    FetchReusableBlocksFailure,
    SaveReusableBlockFailure,
    SaveReusableBlockSuccess,
    fetch_reusable_blocks_success,
)
from ..blocks.models import ReusableBlock
from ..blocks.registry import BlockTypeRegistry
from ..blocks.serializer import parse_first_block, serialize_block
from ..config import EDITOR
from ..errors import TransportError
from .store import RemoteReusableBlock, ReusableBlockStore

logger = logging.getLogger(__name__)


def error_payload(exc: BaseException) -> dict[str, str]:
    """The ``{code, message}`` a fetch failure reports for ``exc``.

    Only an error the remote API described itself is forwarded; anything
    else, including failures detected locally, becomes the generic unknown
    error.
    """
    if isinstance(exc, TransportError):
        return exc.to_payload()
    code = getattr(exc, "code", None)
    message = getattr(exc, "message", None)
    if isinstance(code, str) and isinstance(message, str):
        return {"code": code, "message": message}
    return {
        "code": EDITOR.UNKNOWN_ERROR_CODE,
        "message": EDITOR.UNKNOWN_ERROR_MESSAGE,
    }


class ReusableBlockGateway:
    """Fetches and saves reusable blocks through a ``ReusableBlockStore``."""

    def __init__(self, store: ReusableBlockStore, registry: BlockTypeRegistry) -> None:
        self._store = store
        self._registry = registry

    def to_reusable_block(self, record: RemoteReusableBlock) -> ReusableBlock:
        """Project a remote record onto the first block in its content."""
        block = parse_first_block(record.content, self._registry)
        return ReusableBlock(
            id=record.id,
            name=record.name,
            type=block.name,
            attributes=dict(block.attributes),
        )

    def to_record(self, reusable_block: ReusableBlock) -> RemoteReusableBlock:
        """Serialize a reusable block into the record shape the store keeps."""
        return RemoteReusableBlock(
            id=reusable_block.id,
            name=reusable_block.name,
            content=serialize_block(reusable_block.type, reusable_block.attributes, self._registry),
        )

    async def fetch_all(self) -> list[ReusableBlock]:
        records = await self._store.fetch_all()
        logger.debug("Fetched %d reusable blocks", len(records))
        return [self.to_reusable_block(record) for record in records]

    async def fetch_one(self, id: str) -> ReusableBlock:
        record = await self._store.fetch_one(id)
        return self.to_reusable_block(record)

    async def fetch(self, id: str | None = None) -> list[ReusableBlock]:
        """One reusable block when ``id`` is given, else all of them."""
        if id is None:
            return await self.fetch_all()
        return [await self.fetch_one(id)]

    async def save(self, record: RemoteReusableBlock) -> None:
        await self._store.save(record)
        logger.debug("Saved reusable block %s", record.id)

    # =========================================================================
    # Outcome actions
    # =========================================================================

    async def fetch_reusable_blocks(self, id: str | None = None) -> Action:
        """Fetch and resolve to a success or failure action; never raises."""
        try:
            reusable_blocks = await self.fetch(id)
        except Exception as exc:
            if isinstance(exc, TransportError):
                logger.warning(
                    "Fetching reusable blocks failed: %s (%s)",
                    exc.message,
                    exc.code or exc.reason,
                )
            else:
                logger.error("Fetching reusable blocks failed: %s", exc, exc_info=True)
            return FetchReusableBlocksFailure(error=error_payload(exc))
        return fetch_reusable_blocks_success(reusable_blocks)

    async def save_reusable_block(self, reusable_block: ReusableBlock) -> Action:
        """Save and resolve to a success or failure action; never raises.

        Failures carry only the id, not the error detail.
        """
        try:
            await self.save(self.to_record(reusable_block))
        except Exception as exc:
            logger.warning("Saving reusable block %s failed: %s", reusable_block.id, exc)
            return SaveReusableBlockFailure(id=reusable_block.id)
        return SaveReusableBlockSuccess(id=reusable_block.id)
