"""Scribe - side-effect coordination for a block-based content editor.

Given a dispatched action and the current editor state, decides which
follow-up actions to dispatch: merging blocks, converting between static
and reusable blocks, persisting reusable blocks remotely and autosaving
posts.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .effects import EffectContext, EffectRouter

__all__ = ["EffectContext", "EffectRouter", "__version__"]
