from __future__ import annotations

from scribe.errors import (
    BlockNotFoundError,
    BlockTypeNotRegisteredError,
    NotFoundError,
    ReusableBlockNotFoundError,
    ScribeError,
    TransportError,
    ValidationError,
)


def test_scribe_error_to_dict_drops_empty_context() -> None:
    error = ScribeError("boom", recoverable=True, context={"a": 1, "b": None})

    assert error.to_dict() == {
        "type": "scribe",
        "message": "boom",
        "recoverable": True,
        "a": 1,
    }


def test_validation_error_context_truncates_value() -> None:
    error = ValidationError("bad", field="content", value="x" * 150, constraint="block")

    assert error.field == "content"
    assert error.context["constraint"] == "block"
    assert error.context["value"] == "x" * 100 + "..."
    assert not error.recoverable


def test_not_found_errors() -> None:
    block_error = BlockNotFoundError("abc")
    reusable_error = ReusableBlockNotFoundError("r1")

    assert isinstance(block_error, NotFoundError)
    assert str(block_error) == "Block not found: abc"
    assert reusable_error.identifier == "r1"
    assert reusable_error.context == {"entity": "Reusable block", "id": "r1"}
    assert block_error.to_dict()["type"] == "not_found"


def test_block_type_not_registered() -> None:
    error = BlockTypeNotRegisteredError("core/missing")

    assert isinstance(error, ScribeError)
    assert error.to_dict()["type_name"] == "core/missing"


def test_transport_error_payload() -> None:
    error = TransportError("Sorry", code="rest_forbidden", status=403)

    assert error.structured
    assert error.to_payload() == {"code": "rest_forbidden", "message": "Sorry"}
    assert error.to_dict() == {
        "type": "transport",
        "message": "Sorry",
        "recoverable": False,
        "code": "rest_forbidden",
        "status": 403,
    }


def test_locally_detected_transport_error_has_generic_payload() -> None:
    error = TransportError("Request to /blocks timed out", reason="timeout", recoverable=True)

    assert not error.structured
    assert error.to_payload() == {
        "code": "unknown_error",
        "message": "An unknown error occurred.",
    }
    assert error.to_dict() == {
        "type": "transport",
        "message": "Request to /blocks timed out",
        "recoverable": True,
        "reason": "timeout",
    }
