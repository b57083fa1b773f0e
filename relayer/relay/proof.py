"""
Relay proof construction.

A proof commits to the relay in two digests:

    token        = H(aat with its signature blanked)
    request_hash = H({"payload": ..., "meta": ...})

and the servicer checks the client's signature over

    H({"entropy", "session_block_height", "servicer_pub_key", "blockchain",
       "signature": "", "token", "request_hash"})

where H is SHA3-256 over canonical JSON. Key order in each object is
fixed by the models' to_canonical_dict().
"""

from __future__ import annotations

import random
from typing import Optional

from relayer.crypto.hashing import hash_canonical
from relayer.schemas.relay import PocketAAT, RequestHash, UnsignedProof

# Exclusive upper bound for proof entropy
MAX_ENTROPY = 99_999_999_999_999


def generate_entropy(rng: Optional[random.Random] = None) -> int:
    """Draw fresh proof entropy in [0, MAX_ENTROPY)."""
    rng = rng or random.SystemRandom()
    return rng.randrange(MAX_ENTROPY)


def hash_aat(aat: PocketAAT) -> str:
    """Digest of the AAT, ignoring the application's signature."""
    return hash_canonical(aat.to_token_dict())


def hash_request(request_hash: RequestHash) -> str:
    """Digest identifying a relay's (payload, meta) pair."""
    return hash_canonical(request_hash)


def build_unsigned_proof(
    *,
    entropy: int,
    session_block_height: int,
    servicer_public_key: str,
    blockchain: str,
    aat: PocketAAT,
    request_hash: str,
) -> UnsignedProof:
    return UnsignedProof(
        entropy=entropy,
        session_block_height=session_block_height,
        servicer_pub_key=servicer_public_key,
        blockchain=blockchain,
        token=hash_aat(aat),
        request_hash=request_hash,
    )


def generate_proof_bytes(
    *,
    entropy: int,
    session_block_height: int,
    servicer_public_key: str,
    blockchain: str,
    aat: PocketAAT,
    request_hash: RequestHash | str,
) -> str:
    """
    Digest the signer must sign for a relay.

    Args:
        entropy: Fresh per-relay random integer
        session_block_height: Height of the session the relay belongs to
        servicer_public_key: Public key of the node that will serve the relay
        blockchain: Relay chain id
        aat: Application authentication token
        request_hash: The (payload, meta) pair that will be sent, or its
            digest from hash_request when the caller already has it

    Returns:
        64-character lowercase hex SHA3-256 digest
    """
    if isinstance(request_hash, RequestHash):
        request_hash = hash_request(request_hash)
    unsigned = build_unsigned_proof(
        entropy=entropy,
        session_block_height=session_block_height,
        servicer_public_key=servicer_public_key,
        blockchain=blockchain,
        aat=aat,
        request_hash=request_hash,
    )
    return hash_canonical(unsigned)
