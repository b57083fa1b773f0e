"""
Hashing Utilities

Canonical hashing for relay proofs.

This module provides:
- SHA3-256 hashing for raw bytes
- Canonical hashing for models and plain values (via dumps_canonical)
- Lowercase hex output, no prefix, as service nodes expect it

Security/Determinism Notes:
- SHA3-256 here is the NIST variant, not legacy Keccak-256
- Hash the UTF-8 bytes of the canonical JSON exactly as produced
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Any

from relayer.schemas.canonical import dumps_canonical


def sha3_256(data: bytes) -> bytes:
    """
    Compute SHA3-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA3-256 digest

    Example:
        >>> sha3_256(b"").hex()
        'a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a'
    """
    return hashlib.sha3_256(data).digest()


def hash_canonical(obj: Any) -> str:
    """
    Hash an object using its canonical JSON serialization.

    Rule: digest = sha3_256(dumps_canonical(obj).encode("utf-8")).hex()

    Args:
        obj: A model implementing to_canonical_dict(), or a dict, list or
             primitive. Dicts are hashed in their own key order.

    Returns:
        64-character lowercase hex digest

    Raises:
        CanonicalizationException: If object cannot be canonically serialized
    """
    canonical_json = dumps_canonical(obj)
    return sha3_256(canonical_json.encode("utf-8")).hex()


__all__ = [
    "sha3_256",
    "hash_canonical",
]
