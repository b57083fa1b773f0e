"""
Relayer Schemas

Public API for models, canonical serialization and errors.
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    CanonicalModel,
    canonicalize_value,
    dumps_canonical,
)

from .errors import (
    CanonicalizationException,
    ConfigurationError,
    DispatchError,
    EmptySessionError,
    ErrorCodes,
    MissingSignerError,
    NodeNotInSessionError,
    NoServiceNodeError,
    RelayError,
    RelayerException,
    TransportError,
)

from .relay import (
    DispatchRequest,
    Node,
    PocketAAT,
    RelayMeta,
    RelayPayload,
    RelayProof,
    RelayRequest,
    RelayResponse,
    RequestHash,
    Session,
    SessionHeader,
    UnsignedProof,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "CanonicalModel",
    "canonicalize_value",
    "dumps_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigurationError",
    "DispatchError",
    "EmptySessionError",
    "ErrorCodes",
    "MissingSignerError",
    "NodeNotInSessionError",
    "NoServiceNodeError",
    "RelayError",
    "RelayerException",
    "TransportError",
    # Models
    "DispatchRequest",
    "Node",
    "PocketAAT",
    "RelayMeta",
    "RelayPayload",
    "RelayProof",
    "RelayRequest",
    "RelayResponse",
    "RequestHash",
    "Session",
    "SessionHeader",
    "UnsignedProof",
]
