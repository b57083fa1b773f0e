"""
Signers

The relayer only needs two things from a signer: its public key and a
signature over a proof digest. AbstractSigner is that contract; KeyManager
implements it with an ed25519 key held in memory.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Union

from nacl import signing
from nacl.encoding import HexEncoder, RawEncoder
from nacl.exceptions import BadSignatureError

Payload = Union[str, bytes]


def _payload_bytes(payload: Payload) -> bytes:
    """Hex strings (proof digests) are decoded; raw bytes pass through."""
    if isinstance(payload, bytes):
        return payload
    try:
        return bytes.fromhex(payload)
    except ValueError as e:
        raise ValueError(f"Payload string must be hex encoded: {e}") from e


class AbstractSigner(ABC):
    """Signing collaborator used to authorize relay proofs."""

    @abstractmethod
    def get_public_key(self) -> str:
        """Return the hex encoded public key."""

    @abstractmethod
    def sign(self, payload: Payload) -> str:
        """Sign a hex digest (or raw bytes) and return a hex signature."""


class KeyManager(AbstractSigner):
    """
    ed25519 signer backed by PyNaCl.

    Usage:
        signer = KeyManager.from_private_key(os.environ["RELAYER_PRIVATE_KEY"])
        signature = signer.sign(proof_digest)
    """

    def __init__(self, signing_key: signing.SigningKey) -> None:
        self._signing_key = signing_key
        self._verify_key = signing_key.verify_key

    @classmethod
    def from_private_key(cls, private_key: str) -> "KeyManager":
        """
        Load a key from hex.

        Accepts a 32-byte seed or the 64-byte seed+public key form that
        wallets export. In the 64-byte form the trailing public key must
        match the one derived from the seed.
        """
        raw = bytes.fromhex(private_key.strip().removeprefix("0x"))
        if len(raw) == 64:
            seed, public = raw[:32], raw[32:]
            key = signing.SigningKey(seed)
            if bytes(key.verify_key) != public:
                raise ValueError("Private key does not match its embedded public key")
            return cls(key)
        if len(raw) == 32:
            return cls(signing.SigningKey(raw))
        raise ValueError(f"Private key must be 32 or 64 bytes, got {len(raw)}")

    def get_public_key(self) -> str:
        return self._verify_key.encode(encoder=HexEncoder).decode("ascii")

    def get_private_key(self) -> str:
        """Hex of seed followed by public key."""
        return (bytes(self._signing_key) + bytes(self._verify_key)).hex()

    def sign(self, payload: Payload) -> str:
        signed = self._signing_key.sign(_payload_bytes(payload), encoder=RawEncoder)
        return signed.signature.hex()

    def verify(self, payload: Payload, signature: str) -> bool:
        try:
            self._verify_key.verify(_payload_bytes(payload), bytes.fromhex(signature))
        except (BadSignatureError, ValueError):
            return False
        return True
