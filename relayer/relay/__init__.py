"""
Relay construction: node selection, proofs, orchestration and response
validation.
"""

from .proof import (
    MAX_ENTROPY,
    build_unsigned_proof,
    generate_entropy,
    generate_proof_bytes,
    hash_aat,
    hash_request,
)
from .relayer import Relayer, relay
from .session import get_random_session_node, is_node_in_session
from .validation import validate_relay_response

__all__ = [
    "MAX_ENTROPY",
    "build_unsigned_proof",
    "generate_entropy",
    "generate_proof_bytes",
    "hash_aat",
    "hash_request",
    "Relayer",
    "relay",
    "get_random_session_node",
    "is_node_in_session",
    "validate_relay_response",
]
