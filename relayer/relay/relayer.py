"""
Relay orchestration.

`relay()` is the whole algorithm with every collaborator passed in.
`Relayer` binds a signer and a provider so callers only pass relay data.

Usage:
    relayer = Relayer(signer=KeyManager.from_private_key(key),
                      provider=JsonRpcProvider(dispatchers))
    session = relayer.get_new_session(chain="0021", application_public_key=app_key)
    response = relayer.relay(blockchain="0021", data=body, aat=aat, session=session)
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from relayer.config.runtime import RequestOptions, RuntimeConfig, get_default_config
from relayer.crypto.signer import AbstractSigner
from relayer.provider.base import AbstractProvider
from relayer.provider.jsonrpc import JsonRpcProvider
from relayer.schemas.errors import (
    MissingSignerError,
    NodeNotInSessionError,
    NoServiceNodeError,
)
from relayer.schemas.relay import (
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
)

from .proof import generate_entropy, generate_proof_bytes, hash_request
from .session import get_random_session_node, is_node_in_session
from .validation import validate_relay_response

logger = logging.getLogger(__name__)


def relay(
    *,
    blockchain: str,
    data: str,
    aat: PocketAAT,
    session: Session,
    signer: Optional[AbstractSigner],
    provider: AbstractProvider,
    headers: Optional[dict[str, str]] = None,
    method: str = "",
    node: Optional[Node] = None,
    path: str = "",
    options: Optional[RequestOptions] = None,
    rng: Optional[random.Random] = None,
) -> RelayResponse:
    """
    Build, sign and send one relay, then validate the node's answer.

    Exactly one request reaches the provider; nothing is sent when a
    precondition fails.

    Raises:
        MissingSignerError: No signer was supplied.
        NoServiceNodeError: No node was supplied and the session is empty.
        NodeNotInSessionError: The supplied node is not in the session.
        RelayError: The node answered with an error.
    """
    if signer is None:
        raise MissingSignerError()

    rng = rng or random.SystemRandom()

    if node is None:
        if not session.nodes:
            raise NoServiceNodeError(details={"session_key": session.key})
        service_node = get_random_session_node(session, rng)
        logger.debug(f"Selected node {service_node.public_key} from {len(session.nodes)}")
    else:
        service_node = node

    if not is_node_in_session(session, service_node):
        raise NodeNotInSessionError(service_node.public_key, session.key)

    session_block_height = session.header.session_block_height
    payload = RelayPayload(data=data, method=method, path=path, headers=headers)
    meta = RelayMeta(block_height=session_block_height)

    # Computed once; the signed digest and the sent proof must agree.
    request_hash = hash_request(RequestHash(payload=payload, meta=meta))

    entropy = generate_entropy(rng)
    proof_bytes = generate_proof_bytes(
        entropy=entropy,
        session_block_height=session_block_height,
        servicer_public_key=service_node.public_key,
        blockchain=blockchain,
        aat=aat,
        request_hash=request_hash,
    )
    signature = signer.sign(proof_bytes)

    proof = RelayProof(
        entropy=entropy,
        session_block_height=session_block_height,
        servicer_pub_key=service_node.public_key,
        blockchain=blockchain,
        aat=aat,
        signature=signature,
        request_hash=request_hash,
    )
    relay_request = RelayRequest(payload=payload, meta=meta, proof=proof)

    logger.info(f"Sending relay for {blockchain} to {service_node.service_url}")
    raw = provider.send(relay_request, service_node.service_url, options)
    return validate_relay_response(raw)


class Relayer:
    """
    Relay client bound to a signer and a provider.

    Args:
        signer: Signs relay proofs; also supplies the default application key
        provider: Transport; when omitted, a JsonRpcProvider built from the
            environment configuration (see get_default_config)
        dispatchers: Dispatcher URLs; override the configured ones
        rng: Random source for node selection and entropy
    """

    def __init__(
        self,
        signer: Optional[AbstractSigner] = None,
        provider: Optional[AbstractProvider] = None,
        dispatchers: Optional[Sequence[str]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.signer = signer
        if provider is None:
            config = get_default_config()
            if dispatchers is None:
                dispatchers = config.dispatchers
            provider = JsonRpcProvider(dispatchers, options=config.options, rng=rng)
        self.dispatchers = list(dispatchers or ())
        self.provider = provider
        self.rng = rng

    @classmethod
    def from_config(
        cls,
        config: RuntimeConfig,
        signer: Optional[AbstractSigner] = None,
    ) -> "Relayer":
        provider = JsonRpcProvider(config.dispatchers, options=config.options)
        return cls(signer=signer, provider=provider, dispatchers=config.dispatchers)

    def get_new_session(
        self,
        chain: str,
        application_public_key: Optional[str] = None,
        session_block_height: int = 0,
        options: Optional[RequestOptions] = None,
    ) -> Session:
        """Ask the network for the current session of an application on a chain."""
        if application_public_key is None:
            if self.signer is None:
                raise MissingSignerError(
                    "An application public key or a signer is required to get a session"
                )
            application_public_key = self.signer.get_public_key()

        request = DispatchRequest(
            session_header=SessionHeader(
                application_public_key=application_public_key,
                chain=chain,
                session_block_height=session_block_height,
            )
        )
        return self.provider.dispatch(request, options)

    def relay(
        self,
        *,
        blockchain: str,
        data: str,
        aat: PocketAAT,
        session: Session,
        headers: Optional[dict[str, str]] = None,
        method: str = "",
        node: Optional[Node] = None,
        path: str = "",
        options: Optional[RequestOptions] = None,
    ) -> RelayResponse:
        """Send a relay with this instance's signer and provider."""
        if self.signer is None:
            raise MissingSignerError()
        return relay(
            blockchain=blockchain,
            data=data,
            aat=aat,
            session=session,
            signer=self.signer,
            provider=self.provider,
            headers=headers,
            method=method,
            node=node,
            path=path,
            options=options,
            rng=self.rng,
        )
