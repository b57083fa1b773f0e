"""
Relay response validation.

Nodes answer a relay with either

    {"response": "<payload>", "signature": "<hex>", ...}

or an error envelope

    {"error": {"code": 66, "codespace": "pocketcore", "message": "..."}}
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from relayer.schemas.errors import ErrorCodes, RelayError
from relayer.schemas.relay import RelayResponse


def _raise_node_error(error: Any) -> None:
    if isinstance(error, dict):
        message = str(error.get("message") or "Relay failed")
        node_code = error.get("code")
        raise RelayError(
            message,
            node_code=node_code if isinstance(node_code, int) else None,
            codespace=error.get("codespace"),
        )
    raise RelayError(str(error) or "Relay failed")


def validate_relay_response(raw: Any) -> RelayResponse:
    """
    Turn a node's raw answer into a RelayResponse.

    Raises:
        RelayError: The node reported an error, or the answer is not a
            relay response at all.
    """
    if isinstance(raw, dict) and raw.get("error") is not None:
        _raise_node_error(raw["error"])

    if not isinstance(raw, dict):
        raise RelayError(
            f"Expected a JSON object, got {type(raw).__name__}",
            code=ErrorCodes.MALFORMED_RELAY_RESPONSE,
        )

    try:
        return RelayResponse.model_validate(raw)
    except ValidationError as e:
        raise RelayError(
            "Relay response is missing its payload or signature",
            code=ErrorCodes.MALFORMED_RELAY_RESPONSE,
            details={"keys": sorted(raw)},
        ) from e
