"""Tests for shared error helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from vpc_common.errors import (
    DecodingError,
    ProviderCommunicationError,
    ProvisionError,
    ResolutionError,
    error_to_payload,
    wrap_error,
)


pytestmark = pytest.mark.unit_common


def test_error_to_payload_normalizes_context() -> None:
    err = ProvisionError(
        "boom",
        context={
            "path": Path("/tmp/vpc"),
            "count": 3,
            "nested": {"value": Path("nested")},
            "items": (Path("a"), "b"),
        },
    )
    payload = error_to_payload(err)
    assert payload["error_type"] == "ProvisionError"
    assert payload["error"] == "boom"
    assert payload["error_context"]["path"].endswith("vpc")
    assert payload["error_context"]["count"] == 3
    assert payload["error_context"]["nested"]["value"] == "nested"
    assert payload["error_context"]["items"] == ["a", "b"]


def test_wrap_error_chains_cause() -> None:
    cause = RuntimeError("socket closed")
    err = wrap_error(ProviderCommunicationError, "list_keys failed", cause=cause)

    assert isinstance(err, ProviderCommunicationError)
    assert err.__cause__ is cause
    assert err.to_dict() == {
        "type": "ProviderCommunicationError",
        "message": "list_keys failed",
        "context": {},
    }


def test_taxonomy() -> None:
    assert issubclass(ResolutionError, ProvisionError)
    assert issubclass(DecodingError, ProviderCommunicationError)
    assert not issubclass(ProviderCommunicationError, ProvisionError)
