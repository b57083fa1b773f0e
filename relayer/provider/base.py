"""
Transport contract consumed by the relayer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from relayer.config.runtime import RequestOptions
from relayer.schemas.relay import DispatchRequest, RelayRequest, Session


class AbstractProvider(ABC):
    """
    Talks to the network on the relayer's behalf.

    Implementations own delivery concerns (timeouts, TLS, retries); the
    relayer calls each method exactly once per operation.
    """

    @abstractmethod
    def dispatch(
        self,
        request: DispatchRequest,
        options: Optional[RequestOptions] = None,
    ) -> Session:
        """Obtain the current session for a session header."""

    @abstractmethod
    def send(
        self,
        relay_request: RelayRequest,
        service_url: str,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Deliver a relay to a service node and return its decoded body."""
