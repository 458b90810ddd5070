"""Action effect router.

Maps each action class to the effect that reacts to it. Effects come in
two kinds:

- synchronous: ``(action, context) -> list[Action]``; the router
  dispatches the returned actions in order before ``handle`` returns.
- asynchronous: ``(action, context) -> Awaitable[None]``; the effect reads
  state synchronously, then returns a coroutine that dispatches its own
  outcome. The router runs it as a task on the current event loop.

Actions without an effect are ignored. The registry is a flat dict so
adding an effect is a one-line change.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from .actions import (
    Action,
    Autosave,
    ConvertBlockToReusable,
    ConvertBlockToStatic,
    FetchReusableBlocks,
    MergeBlocks,
    RequestPostUpdateFailure,
    RequestPostUpdateSuccess,
    SaveReusableBlock,
    SetupEditor,
)
from .blocks.merge import BlockMergeResolver
from .blocks.registry import BlockTypeRegistry
from .post import lifecycle
from .post.autosave import decide as decide_autosave
from .post.state import EditorState
from .reusable.conversion import BlockConversionService
from .reusable.gateway import ReusableBlockGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectContext:
    """What an effect may touch: a state snapshot getter and dispatch."""

    get_state: Callable[[], EditorState]
    dispatch: Callable[[Action], Any]


class EffectRouter:
    """Routes dispatched actions to their effects.

    Args:
        registry: Block type registry shared by merge, conversion and
            parsing.
        gateway: Reusable block gateway for fetch/save effects.
        conversion: Conversion service; built from ``registry`` when
            omitted.
    """

    def __init__(
        self,
        registry: BlockTypeRegistry,
        gateway: ReusableBlockGateway,
        *,
        conversion: BlockConversionService | None = None,
    ) -> None:
        self._registry = registry
        self._gateway = gateway
        self._merge = BlockMergeResolver(registry)
        self._conversion = conversion or BlockConversionService(registry)
        self._pending: set[asyncio.Task[None]] = set()

        self._effects: dict[type[Action], tuple[Callable[..., Any], bool]] = {
            # blocks
            MergeBlocks: (self._merge_blocks, False),
            # post
            Autosave: (self._autosave, False),
            SetupEditor: (self._setup_editor, False),
            RequestPostUpdateSuccess: (self._request_post_update_success, False),
            RequestPostUpdateFailure: (self._request_post_update_failure, False),
            # reusable blocks
            FetchReusableBlocks: (self._fetch_reusable_blocks, True),
            SaveReusableBlock: (self._save_reusable_block, True),
            ConvertBlockToStatic: (self._convert_block_to_static, False),
            ConvertBlockToReusable: (self._convert_block_to_reusable, False),
        }

    @property
    def handled_actions(self) -> frozenset[type[Action]]:
        return frozenset(self._effects)

    @property
    def pending(self) -> int:
        """Number of asynchronous effects still in flight."""
        return len(self._pending)

    def handle(self, action: Action, context: EffectContext) -> asyncio.Task[None] | None:
        """Run the effect for ``action``.

        Returns:
            The task running an asynchronous effect, else None.

        Raises:
            RuntimeError: If an asynchronous effect is triggered outside a
                running event loop.
        """
        entry = self._effects.get(type(action))
        if entry is None:
            return None

        effect, is_async = entry
        if not is_async:
            for follow_up in effect(action, context):
                context.dispatch(follow_up)
            return None

        # No loop, no effect: the effect is not called before this succeeds
        loop = asyncio.get_running_loop()
        task = loop.create_task(effect(action, context))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every asynchronous effect started so far."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # =========================================================================
    # Synchronous effects
    # =========================================================================

    def _merge_blocks(self, action: MergeBlocks, context: EffectContext) -> list[Action]:
        return self._merge.merge(action.block_a, action.block_b)

    def _autosave(self, action: Autosave, context: EffectContext) -> list[Action]:
        return decide_autosave(context.get_state())

    def _setup_editor(self, action: SetupEditor, context: EffectContext) -> list[Action]:
        return lifecycle.setup_editor(action.post, self._registry)

    def _request_post_update_success(
        self,
        action: RequestPostUpdateSuccess,
        context: EffectContext,
    ) -> list[Action]:
        return lifecycle.request_post_update_success(
            action.post,
            action.previous_post,
            context.get_state(),
        )

    def _request_post_update_failure(
        self,
        action: RequestPostUpdateFailure,
        context: EffectContext,
    ) -> list[Action]:
        return lifecycle.request_post_update_failure(action.post, action.edits, action.error)

    def _convert_block_to_static(
        self,
        action: ConvertBlockToStatic,
        context: EffectContext,
    ) -> list[Action]:
        return self._conversion.to_static(action.uid, context.get_state())

    def _convert_block_to_reusable(
        self,
        action: ConvertBlockToReusable,
        context: EffectContext,
    ) -> list[Action]:
        return self._conversion.to_reusable(action.uid, context.get_state())

    # =========================================================================
    # Asynchronous effects
    # =========================================================================

    async def _fetch_reusable_blocks(
        self,
        action: FetchReusableBlocks,
        context: EffectContext,
    ) -> None:
        outcome = await self._gateway.fetch_reusable_blocks(action.id)
        context.dispatch(outcome)

    def _save_reusable_block(
        self,
        action: SaveReusableBlock,
        context: EffectContext,
    ) -> Awaitable[None]:
        # State is read now, not when the task first runs
        reusable_block = context.get_state().get_reusable_block(action.id)

        async def run() -> None:
            outcome = await self._gateway.save_reusable_block(reusable_block)
            context.dispatch(outcome)

        return run()
