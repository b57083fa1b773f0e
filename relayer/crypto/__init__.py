"""
Cryptographic utilities: canonical hashing and proof signers.
"""
from .hashing import (
    hash_canonical,
    sha3_256,
)
from .signer import AbstractSigner, KeyManager

__all__ = [
    "hash_canonical",
    "sha3_256",
    "AbstractSigner",
    "KeyManager",
]
