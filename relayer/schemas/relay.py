"""
Relayer Schemas
File: relay.py

Purpose: Session, token and relay models.

Every model that is hashed or sent to a service node implements
`to_canonical_dict()`, which lists its fields in the network's order.
Do not reorder those dicts: the order is part of the hash.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Session
# =============================================================================

class Node(BaseModel):
    """
    A service node as reported by the dispatcher.

    Identity is the public key; the remaining staking fields are kept for
    callers that want to inspect them but play no part in relaying.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    public_key: str = Field(..., min_length=1)
    service_url: str = Field(..., min_length=1)
    chains: tuple[str, ...] = Field(default_factory=tuple)
    address: str | None = None
    jailed: bool = False
    status: int | None = None
    tokens: str | None = None
    unstaking_time: str | None = None


class SessionHeader(BaseModel):
    """Identifies a session: (application, chain, block height)."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    application_public_key: str = Field(..., alias="app_public_key")
    chain: str = Field(..., min_length=1)
    session_block_height: int = Field(default=0, alias="session_height", ge=0)

    def to_canonical_dict(self) -> dict[str, Any]:
        return {
            "app_public_key": self.application_public_key,
            "chain": self.chain,
            "session_height": self.session_block_height,
        }


class Session(BaseModel):
    """A block-bounded grant of service nodes for one application and chain."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    header: SessionHeader
    key: str | None = None
    nodes: tuple[Node, ...] = Field(default_factory=tuple)

    @property
    def public_keys(self) -> list[str]:
        return [node.public_key for node in self.nodes]


class DispatchRequest(BaseModel):
    """Body of a dispatch call asking the network for a session."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    session_header: SessionHeader

    def to_canonical_dict(self) -> dict[str, Any]:
        return self.session_header.to_canonical_dict()


# =============================================================================
# Application Authentication Token
# =============================================================================

class PocketAAT(BaseModel):
    """
    Application Authentication Token.

    Proves that the application identified by `application_public_key`
    allowed `client_public_key` to relay on its behalf.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    version: str = Field(..., min_length=1)
    application_public_key: str = Field(..., alias="app_pub_key")
    client_public_key: str = Field(..., alias="client_pub_key")
    application_signature: str = Field(default="", alias="signature")

    def to_token_dict(self) -> dict[str, Any]:
        """
        Fields hashed into a proof's `token`.

        The application signature is blanked: it authenticates the token
        itself and is checked separately by the node.
        """
        return {
            "version": self.version,
            "app_pub_key": self.application_public_key,
            "client_pub_key": self.client_public_key,
            "signature": "",
        }

    def to_canonical_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "app_pub_key": self.application_public_key,
            "client_pub_key": self.client_public_key,
            "signature": self.application_signature,
        }


# =============================================================================
# Relay request
# =============================================================================

class RelayPayload(BaseModel):
    """The application-level request carried by a relay."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    data: str
    method: str = ""
    path: str = ""
    headers: dict[str, str] | None = None

    def to_canonical_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "method": self.method,
            "path": self.path,
            "headers": self.headers,
        }


class RelayMeta(BaseModel):
    """Block height at which the relay is valid."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    block_height: int = Field(..., ge=0)

    def to_canonical_dict(self) -> dict[str, Any]:
        return {"block_height": self.block_height}


class RequestHash(BaseModel):
    """The (payload, meta) pair whose digest identifies a relay request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    payload: RelayPayload
    meta: RelayMeta

    def to_canonical_dict(self) -> dict[str, Any]:
        return {
            "payload": self.payload.to_canonical_dict(),
            "meta": self.meta.to_canonical_dict(),
        }


class UnsignedProof(BaseModel):
    """
    The proof as it is hashed before signing.

    `token` and `request_hash` are digests, not the structures themselves.
    The `signature` slot is always rendered empty so the node can rebuild
    the same text from a signed proof.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    entropy: int = Field(..., ge=0)
    session_block_height: int = Field(..., ge=0)
    servicer_pub_key: str = Field(..., min_length=1)
    blockchain: str = Field(..., min_length=1)
    token: str
    request_hash: str

    def to_canonical_dict(self) -> dict[str, Any]:
        return {
            "entropy": self.entropy,
            "session_block_height": self.session_block_height,
            "servicer_pub_key": self.servicer_pub_key,
            "blockchain": self.blockchain,
            "signature": "",
            "token": self.token,
            "request_hash": self.request_hash,
        }


class RelayProof(BaseModel):
    """Signed proof that a relay was authorized for a given servicer."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    entropy: int = Field(..., ge=0)
    session_block_height: int = Field(..., ge=0)
    servicer_pub_key: str = Field(..., min_length=1)
    blockchain: str = Field(..., min_length=1)
    aat: PocketAAT
    signature: str
    request_hash: str

    def to_canonical_dict(self) -> dict[str, Any]:
        return {
            "entropy": self.entropy,
            "session_block_height": self.session_block_height,
            "servicer_pub_key": self.servicer_pub_key,
            "blockchain": self.blockchain,
            "aat": self.aat.to_canonical_dict(),
            "signature": self.signature,
            "request_hash": self.request_hash,
        }


class RelayRequest(BaseModel):
    """The wire-level unit sent to a service node."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    payload: RelayPayload
    meta: RelayMeta
    proof: RelayProof

    def to_canonical_dict(self) -> dict[str, Any]:
        return {
            "payload": self.payload.to_canonical_dict(),
            "meta": self.meta.to_canonical_dict(),
            "proof": self.proof.to_canonical_dict(),
        }

    @property
    def request_hash_input(self) -> RequestHash:
        return RequestHash(payload=self.payload, meta=self.meta)


# =============================================================================
# Relay response
# =============================================================================

class RelayResponse(BaseModel):
    """A successful answer from a service node."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    signature: str
    payload: str = Field(..., alias="response")
    proof: dict[str, Any] | None = None
