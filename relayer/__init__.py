"""
Client-side relayer: builds signed relay proofs, sends relays to session
nodes and validates their answers.
"""

from relayer.config import RequestOptions, RuntimeConfig
from relayer.crypto import AbstractSigner, KeyManager
from relayer.provider import AbstractProvider, JsonRpcProvider
from relayer.relay import Relayer
from relayer.schemas import (
    MissingSignerError,
    Node,
    NodeNotInSessionError,
    NoServiceNodeError,
    PocketAAT,
    RelayError,
    RelayerException,
    RelayResponse,
    Session,
    SessionHeader,
)

__version__ = "0.1.0"

__all__ = [
    "RequestOptions",
    "RuntimeConfig",
    "AbstractSigner",
    "KeyManager",
    "AbstractProvider",
    "JsonRpcProvider",
    "Relayer",
    "MissingSignerError",
    "Node",
    "NodeNotInSessionError",
    "NoServiceNodeError",
    "PocketAAT",
    "RelayError",
    "RelayerException",
    "RelayResponse",
    "Session",
    "SessionHeader",
]
