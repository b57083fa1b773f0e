"""
Relayer Schemas
File: canonical.py

Purpose: Deterministic serialization of hashed and wire structures.

CRITICAL: Service nodes recompute the same hashes from the same JSON text,
so the output of this module must be byte-for-byte stable. Key order is
taken from each model's explicit field list, never sorted and never
discovered by reflection.
"""

import json
import math
import re
from typing import Any, Protocol, runtime_checkable

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")

_SURROGATE_PAIR = re.compile("[\ud800-\udbff][\udc00-\udfff]")
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


@runtime_checkable
class CanonicalModel(Protocol):
    """Anything that can render itself as an ordered canonical dict."""

    def to_canonical_dict(self) -> dict[str, Any]:
        ...


def _validate_float(value: float, path: str = "") -> None:
    """
    Validate that a float is finite (not NaN or Infinity).

    Raises:
        CanonicalizationException: If the float is NaN or Infinity.
    """
    if not math.isfinite(value):
        raise CanonicalizationException(
            message=f"Non-finite float value encountered: {value}",
            details={"path": path, "value": str(value)},
        )


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Unlike a generic dump, None values are kept: a relay without headers
    hashes `"headers":null`, exactly what the node sees on the wire.

    Args:
        value: Any Python value to canonicalize.
        path: Current path for error reporting.

    Returns:
        A JSON-serializable representation whose dicts keep their order.

    Raises:
        CanonicalizationException: If the value cannot be canonicalized.
    """
    if value is None:
        return None

    if isinstance(value, bool):
        # Must check bool before int since bool is subclass of int
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        _validate_float(value, path)
        return value

    if isinstance(value, str):
        return value

    if isinstance(value, CanonicalModel):
        return canonicalize_value(value.to_canonical_dict(), path)

    if isinstance(value, dict):
        canonical: dict[str, Any] = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise CanonicalizationException(
                    message=f"Object keys must be strings, got {type(k).__name__}",
                    details={"path": path, "key": repr(k)},
                )
            canonical[k] = canonicalize_value(v, f"{path}.{k}" if path else k)
        return canonical

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, bytes):
        return value.hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def _escape_surrogates(text: str) -> str:
    """
    Make text containing surrogate code points encodable as UTF-8.

    A high/low pair is joined into the character it encodes; a lone
    surrogate is written as a lowercase \\uXXXX escape, which is what the
    network's JSON.stringify produces for the same string.
    """
    text = _SURROGATE_PAIR.sub(
        lambda m: m.group().encode("utf-16-le", "surrogatepass").decode("utf-16-le"),
        text,
    )
    return _LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", text)


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to its canonical JSON string.

    The output has:
        - Keys in the order the object declares them
        - No extra whitespace
        - None kept as null
        - Non-ASCII characters emitted as-is, lone surrogates escaped
        - No NaN/Infinity floats

    Raises:
        CanonicalizationException: If serialization fails.

    Example:
        >>> dumps_canonical({"version": "0.0.1", "signature": ""})
        '{"version":"0.0.1","signature":""}'
    """
    try:
        canonicalized = canonicalize_value(obj)
        text = json.dumps(
            canonicalized,
            sort_keys=False,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
            allow_nan=False,
        )
    except CanonicalizationException:
        raise
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e
    if _LONE_SURROGATE.search(text):
        text = _escape_surrogates(text)
    return text
