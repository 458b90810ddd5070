"""Reusable blocks: remote store, gateway and static/reusable conversion."""

from __future__ import annotations

from .conversion import BlockConversionService
from .gateway import ReusableBlockGateway, error_payload
from .store import HttpReusableBlockStore, RemoteReusableBlock, ReusableBlockStore

__all__ = [
    "BlockConversionService",
    "HttpReusableBlockStore",
    "RemoteReusableBlock",
    "ReusableBlockGateway",
    "ReusableBlockStore",
    "error_payload",
]
