"""Tests for converting blocks between static and reusable form."""

from __future__ import annotations

import itertools

import pytest

from scribe.actions import ReplaceBlocks, SaveReusableBlock, UpdateReusableBlock
from scribe.blocks.models import Block, ReusableBlock
from scribe.blocks.registry import BlockTypeRegistry
from scribe.errors import BlockNotFoundError, ReusableBlockNotFoundError
from scribe.post.state import EditorState
from scribe.reusable.conversion import BlockConversionService

MOCK_UUID = "this-is-a-mock-uuid"


@pytest.fixture
def conversion(registry: BlockTypeRegistry) -> BlockConversionService:
    return BlockConversionService(registry, new_id=lambda: MOCK_UUID)


class TestConvertToReusable:
    def test_creates_saves_and_references_reusable_block(
        self, conversion: BlockConversionService
    ) -> None:
        static_block = Block(
            id="353d5b0e-c6ff-4a4d-94a7-b8ce3b2e2fa6",
            name="core/test-block",
            attributes={"name": "Big Bird"},
        )
        state = EditorState(blocks=(static_block,))

        actions = conversion.to_reusable(static_block.id, state)

        assert actions == [
            UpdateReusableBlock(
                id=MOCK_UUID,
                reusable_block=ReusableBlock(
                    id=MOCK_UUID,
                    name="Untitled block",
                    type="core/test-block",
                    attributes={"name": "Big Bird"},
                ),
            ),
            SaveReusableBlock(id=MOCK_UUID),
            ReplaceBlocks(
                uids=(static_block.id,),
                blocks=(
                    Block(
                        id=MOCK_UUID,
                        name="core/reusable-block",
                        attributes={"ref": MOCK_UUID},
                    ),
                ),
            ),
        ]

    def test_reusable_and_wrapper_ids_come_from_generator(self, registry: BlockTypeRegistry) -> None:
        counter = itertools.count(1)
        conversion = BlockConversionService(registry, new_id=lambda: f"id-{next(counter)}")
        state = EditorState(blocks=(Block(id="b", name="core/test-block"),))

        update, save, replace = conversion.to_reusable("b", state)

        assert update.id == "id-1"
        assert save.id == "id-1"
        assert replace.blocks[0].id == "id-2"
        assert replace.blocks[0].attributes == {"ref": "id-1"}

    def test_missing_block_raises(self, conversion: BlockConversionService) -> None:
        with pytest.raises(BlockNotFoundError):
            conversion.to_reusable("missing", EditorState())


class TestConvertToStatic:
    def test_replaces_wrapper_with_copy(self, conversion: BlockConversionService) -> None:
        reusable_block = ReusableBlock(
            id="358b59ee-bab3-4d6f-8445-e8c6971a5605",
            name="My cool block",
            type="core/test-block",
            attributes={"name": "Big Bird"},
        )
        wrapper = Block(
            id="d6b55aa9-16b5-4123-9675-749d75a7f14d",
            name="core/reusable-block",
            attributes={"ref": reusable_block.id},
        )
        state = EditorState(
            blocks=(wrapper,),
            reusable_blocks={reusable_block.id: reusable_block},
        )

        actions = conversion.to_static(wrapper.id, state)

        assert actions == [
            ReplaceBlocks(
                uids=(wrapper.id,),
                blocks=(
                    Block(
                        id=MOCK_UUID,
                        name="core/test-block",
                        attributes={"name": "Big Bird"},
                    ),
                ),
            ),
        ]

    def test_copy_does_not_share_attributes(self, conversion: BlockConversionService) -> None:
        reusable_block = ReusableBlock(
            id="r1",
            name="",
            type="core/test-block",
            attributes={"name": "Big Bird"},
        )
        state = EditorState(
            blocks=(Block(id="w", name="core/reusable-block", attributes={"ref": "r1"}),),
            reusable_blocks={"r1": reusable_block},
        )

        replace = conversion.to_static("w", state)[0]

        assert replace.blocks[0].attributes is not reusable_block.attributes

    def test_unknown_reference_raises(self, conversion: BlockConversionService) -> None:
        state = EditorState(
            blocks=(Block(id="w", name="core/reusable-block", attributes={"ref": "gone"}),)
        )

        with pytest.raises(ReusableBlockNotFoundError):
            conversion.to_static("w", state)
