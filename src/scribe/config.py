"""Centralized configuration constants for the editor effects layer.

This module provides a single source of truth for:
- Timeouts for calls to the remote REST API
- Retry budget for transient transport failures
- Editor defaults (wrapper block type, placeholder titles, error payloads)

Constants can be overridden via environment variables where noted.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


# =============================================================================
# Helper functions
# =============================================================================


def _env_int(name: str, default: int, min_val: int | None = None) -> int:
    """Get integer from environment with optional minimum enforcement."""
    val = int(os.environ.get(name, str(default)))
    if min_val is not None and val < min_val:
        return min_val
    return val


def _env_float(name: str, default: float) -> float:
    return float(os.environ.get(name, str(default)))


# =============================================================================
# Timeouts (in seconds)
# =============================================================================


@dataclass(frozen=True)
class Timeouts:
    """Timeout values for remote operations."""

    HTTP_REQUEST: float = _env_float("SCRIBE_HTTP_TIMEOUT", 10.0)
    HTTP_CONNECT: float = _env_float("SCRIBE_HTTP_CONNECT_TIMEOUT", 5.0)


TIMEOUTS = Timeouts()


# =============================================================================
# Retry Policy
# =============================================================================


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff for transient transport failures.

    At least one attempt is always made.
    """

    MAX_ATTEMPTS: int = _env_int("SCRIBE_HTTP_MAX_ATTEMPTS", 3, min_val=1)
    WAIT_MIN: float = 1.0
    WAIT_MAX: float = 4.0
    RETRY_STATUSES: frozenset[int] = frozenset({502, 503, 504})


RETRY = RetryPolicy()


# =============================================================================
# Editor Defaults
# =============================================================================


@dataclass(frozen=True)
class EditorDefaults:
    """Names and messages shared by the effect handlers."""

    DEFAULT_NAMESPACE: str = "core"
    REUSABLE_BLOCK_TYPE: str = "core/reusable-block"
    FREEFORM_BLOCK_TYPE: str = "core/freeform"
    UNTITLED_REUSABLE_BLOCK: str = "Untitled block"

    # Post status values
    STATUS_AUTO_DRAFT: str = "auto-draft"
    STATUS_DRAFT: str = "draft"
    STATUS_PUBLISH: str = "publish"
    STATUS_PRIVATE: str = "private"
    STATUS_FUTURE: str = "future"

    # Fallback payload for transport failures without structured detail
    UNKNOWN_ERROR_CODE: str = "unknown_error"
    UNKNOWN_ERROR_MESSAGE: str = "An unknown error occurred."

    SAVE_POST_NOTICE_ID: str = "SAVE_POST_NOTICE_ID"


EDITOR = EditorDefaults()
