"""
Common test fixtures shared by all modules.

Provides factory functions for relayer data structures and recording
stand-ins for the signer and transport collaborators:
- Node / Session / PocketAAT factories
- FakeSigner: records what it was asked to sign
- FakeProvider: records dispatch and send calls, returns canned answers
- SequenceRandom: random source that replays a fixed list of draws
"""

import random
from typing import Any, Optional, Sequence

from relayer.config.runtime import RequestOptions
from relayer.crypto.signer import AbstractSigner
from relayer.provider.base import AbstractProvider
from relayer.schemas.relay import (
    DispatchRequest,
    Node,
    PocketAAT,
    RelayRequest,
    Session,
    SessionHeader,
)

APP_PUBLIC_KEY = "a" * 64
CLIENT_PUBLIC_KEY = "c" * 64
CHAIN = "0021"


# =============================================================================
# Model Factories
# =============================================================================

def make_node(
    index: int = 0,
    public_key: Optional[str] = None,
    service_url: Optional[str] = None,
    chains: Sequence[str] = (CHAIN,),
) -> Node:
    """Create a Node whose key and URL are derived from `index`."""
    return Node(
        public_key=public_key or f"{index:02x}" * 32,
        service_url=service_url or f"https://node{index}.example.com:443",
        chains=list(chains),
    )


def make_session(
    node_count: int = 3,
    session_block_height: int = 101,
    chain: str = CHAIN,
    nodes: Optional[Sequence[Node]] = None,
    key: str = "session-key-001",
) -> Session:
    """
    Create a Session for testing.

    Nodes default to make_node(1) .. make_node(node_count).
    """
    if nodes is None:
        nodes = [make_node(i) for i in range(1, node_count + 1)]
    return Session(
        header=SessionHeader(
            application_public_key=APP_PUBLIC_KEY,
            chain=chain,
            session_block_height=session_block_height,
        ),
        key=key,
        nodes=list(nodes),
    )


def make_aat(
    version: str = "0.0.1",
    application_signature: str = "f" * 128,
) -> PocketAAT:
    """Create a PocketAAT for testing."""
    return PocketAAT(
        version=version,
        application_public_key=APP_PUBLIC_KEY,
        client_public_key=CLIENT_PUBLIC_KEY,
        application_signature=application_signature,
    )


def make_relay_answer(payload: str = '{"result":"0x1"}') -> dict[str, Any]:
    """A successful raw node answer."""
    return {"response": payload, "signature": "e" * 128}


# =============================================================================
# Collaborator Stand-ins
# =============================================================================

class FakeSigner(AbstractSigner):
    """Signer that returns a predictable signature and remembers payloads."""

    def __init__(self, public_key: str = CLIENT_PUBLIC_KEY) -> None:
        self.public_key = public_key
        self.signed: list[Any] = []

    def get_public_key(self) -> str:
        return self.public_key

    def sign(self, payload: Any) -> str:
        self.signed.append(payload)
        return f"signed:{payload}"


class FakeProvider(AbstractProvider):
    """Provider that records calls instead of touching the network."""

    def __init__(
        self,
        session: Optional[Session] = None,
        answer: Any = None,
    ) -> None:
        self.session = session
        self.answer = answer if answer is not None else make_relay_answer()
        self.dispatched: list[tuple[DispatchRequest, Optional[RequestOptions]]] = []
        self.sent: list[tuple[RelayRequest, str, Optional[RequestOptions]]] = []

    def dispatch(
        self,
        request: DispatchRequest,
        options: Optional[RequestOptions] = None,
    ) -> Session:
        self.dispatched.append((request, options))
        return self.session

    def send(
        self,
        relay_request: RelayRequest,
        service_url: str,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        self.sent.append((relay_request, service_url, options))
        return self.answer


class SequenceRandom(random.Random):
    """
    Random source that replays `values` for randrange().

    Each draw must fit the requested range; a test that over-draws fails
    loudly instead of silently wrapping.
    """

    def __init__(self, values: Sequence[int]) -> None:
        super().__init__(0)
        self._values = list(values)

    def randrange(self, start, stop=None, step=1):
        if stop is None:
            start, stop = 0, start
        if not self._values:
            raise AssertionError("SequenceRandom exhausted")
        value = self._values.pop(0)
        assert start <= value < stop, f"{value} not in [{start}, {stop})"
        return value
