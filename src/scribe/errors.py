"""Scribe Error Hierarchy.

Provides a structured error hierarchy for the effects layer:
- ScribeError: Base exception for all application errors
- ValidationError: Bad block type names, malformed markup or records
- NotFoundError: A block or reusable block id absent from editor state
- BlockTypeNotRegisteredError: Strict block creation for an unknown type
- TransportError: Remote store request failed

Handlers never raise these across the effect boundary for recoverable
conditions; they turn them into failure actions instead. NotFoundError is
the exception: referencing an id that is not in state is a caller bug and
propagates from the state accessor.

Usage:
    from scribe.errors import TransportError

    raise TransportError("Invalid post ID.", code="rest_post_invalid_id", status=404)
"""

from __future__ import annotations

from typing import Any

from .config import EDITOR


# =============================================================================
# Error Base Class
# =============================================================================


class ScribeError(Exception):
    """Base exception for all scribe errors.

    ``kind`` tags the error family in log records; ``context`` carries the
    identifiers involved (block ids, type names, status codes).
    """

    kind = "scribe"

    def __init__(
        self,
        message: str,
        *,
        recoverable: bool = False,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable
        self.context = dict(context) if context else {}

    def to_dict(self) -> dict[str, Any]:
        """Flatten into one record; context entries that are None are left out."""
        record: dict[str, Any] = {
            "type": self.kind,
            "message": self.message,
            "recoverable": self.recoverable,
        }
        record.update((key, val) for key, val in self.context.items() if val is not None)
        return record


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(ScribeError):
    """Block names, markup or records that do not have the expected shape.

    Example:
        raise ValidationError("Block names must contain a namespace", field="name")
    """

    kind = "validation"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
    ) -> None:
        details = {
            "field": field,
            "constraint": constraint,
            "value": None if value is None else _clip(str(value)),
        }
        super().__init__(message, context={k: v for k, v in details.items() if v})
        self.field = field
        self.constraint = constraint


# =============================================================================
# Lookup Errors
# =============================================================================


class NotFoundError(ScribeError):
    """An identifier is not present in editor state."""

    kind = "not_found"

    def __init__(self, entity: str, identifier: str) -> None:
        super().__init__(
            f"{entity} not found: {identifier}",
            context={"entity": entity, "id": identifier},
        )
        self.entity = entity
        self.identifier = identifier


class BlockNotFoundError(NotFoundError):
    def __init__(self, block_id: str) -> None:
        super().__init__("Block", block_id)


class ReusableBlockNotFoundError(NotFoundError):
    def __init__(self, reusable_block_id: str) -> None:
        super().__init__("Reusable block", reusable_block_id)


class BlockTypeNotRegisteredError(ScribeError):
    """Block type name has no registered descriptor."""

    kind = "block_type"

    def __init__(self, type_name: str) -> None:
        super().__init__(
            f"Block type is not registered: {type_name}",
            context={"type_name": type_name},
        )
        self.type_name = type_name


# =============================================================================
# Transport Errors
# =============================================================================


class TransportError(ScribeError):
    """Remote store request failed.

    ``code`` is set only when the remote API reported a structured
    ``{code, message}`` error; fetch failures forward exactly that pair.
    Failures detected locally (timeouts, unreachable host, error statuses
    without an API error body, unreadable responses) leave ``code`` unset
    and describe themselves through ``reason`` instead.
    """

    kind = "transport"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        reason: str | None = None,
        status: int | None = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(
            message,
            recoverable=recoverable,
            context={"code": code, "reason": reason, "status": status},
        )
        self.code = code
        self.reason = reason
        self.status = status

    @property
    def structured(self) -> bool:
        """Whether the remote API supplied the error code."""
        return self.code is not None

    def to_payload(self) -> dict[str, str]:
        """The ``{code, message}`` pair carried by failure actions.

        Errors the API did not describe become the generic unknown error.
        """
        if self.code is None:
            return {
                "code": EDITOR.UNKNOWN_ERROR_CODE,
                "message": EDITOR.UNKNOWN_ERROR_MESSAGE,
            }
        return {"code": self.code, "message": self.message}


def _clip(value: str, limit: int = 100) -> str:
    """Shorten long markup or record values before they reach a log line."""
    return value if len(value) <= limit else value[:limit] + "..."
