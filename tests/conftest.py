from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

import pytest

from scribe.actions import Action
from scribe.blocks.models import BlockTypeDescriptor
from scribe.blocks.registry import BlockTypeRegistry, attribute_schema
from scribe.effects import EffectContext
from scribe.post.state import EditorState
from scribe.reusable.store import RemoteReusableBlock, ReusableBlockStore

MOCK_UUID = "this-is-a-mock-uuid"

T = TypeVar("T")


class FakeReusableBlockStore(ReusableBlockStore):
    """In-memory store that records calls and can be told to fail."""

    def __init__(
        self,
        records: Iterable[RemoteReusableBlock] = (),
        *,
        error: Exception | None = None,
    ) -> None:
        self.records = {record.id: record for record in records}
        self.error = error
        self.fetched_ids: list[str] = []
        self.saved: list[RemoteReusableBlock] = []

    async def fetch_all(self) -> list[RemoteReusableBlock]:
        if self.error is not None:
            raise self.error
        return list(self.records.values())

    async def fetch_one(self, id: str) -> RemoteReusableBlock:
        self.fetched_ids.append(id)
        if self.error is not None:
            raise self.error
        return self.records[id]

    async def save(self, record: RemoteReusableBlock) -> None:
        if self.error is not None:
            raise self.error
        self.saved.append(record)
        self.records[record.id] = record


class RecordingStore:
    """Stands in for the state container: serves a snapshot, records dispatches."""

    def __init__(self, state: EditorState | None = None) -> None:
        self.state = state or EditorState()
        self.dispatched: list[Action] = []

    def get_state(self) -> EditorState:
        return self.state

    def dispatch(self, action: Action) -> None:
        self.dispatched.append(action)

    @property
    def context(self) -> EffectContext:
        return EffectContext(get_state=self.get_state, dispatch=self.dispatch)


@pytest.fixture
def registry() -> BlockTypeRegistry:
    """Registry with a simple test block and the reusable wrapper block."""
    return BlockTypeRegistry(
        [
            BlockTypeDescriptor(
                name="core/test-block",
                title="Test block",
                attributes=attribute_schema({"name": {"type": "string"}}),
            ),
            BlockTypeDescriptor(
                name="core/reusable-block",
                title="Reusable Block",
                attributes=attribute_schema({"ref": {"type": "string"}}),
            ),
        ],
        id_factory=lambda: MOCK_UUID,
    )


@pytest.fixture
def fake_store_cls() -> type[FakeReusableBlockStore]:
    return FakeReusableBlockStore


@pytest.fixture
def recording_store_cls() -> type[RecordingStore]:
    return RecordingStore


def _run_async(coro: Awaitable[T]) -> T:
    """Run a coroutine on a fresh event loop, without pytest-asyncio."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def run_async() -> Callable[[Awaitable[Any]], Any]:
    return _run_async
