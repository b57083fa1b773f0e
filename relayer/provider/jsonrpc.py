"""
JSON-over-HTTP transport.

Dispatch and relay calls are plain JSON POSTs:

    <dispatcher>/v1/client/dispatch   {"app_public_key", "chain", "session_height"}
    <service_url>/v1/client/relay     {"payload", "meta", "proof"}

The relay body is written with the same canonical serializer the proof
hashes use, so the node reads back exactly the payload and meta that were
hashed into `request_hash`.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from relayer.config.runtime import RequestOptions
from relayer.http.client import HttpClient, HttpError, HttpResponse
from relayer.schemas.canonical import dumps_canonical
from relayer.schemas.errors import DispatchError, TransportError
from relayer.schemas.relay import DispatchRequest, RelayRequest, Session

from .base import AbstractProvider

logger = logging.getLogger(__name__)

DISPATCH_ROUTE = "/v1/client/dispatch"
RELAY_ROUTE = "/v1/client/relay"

_JSON_HEADERS = {"Content-Type": "application/json"}


def _join(base_url: str, route: str) -> str:
    return base_url.rstrip("/") + route


class JsonRpcProvider(AbstractProvider):
    """
    Transport over a pooled HttpClient.

    Args:
        dispatchers: Base URLs of dispatcher nodes
        http_client: Client to use; built from `options` when omitted
        options: Default request options
        rng: Random source used to pick a dispatcher
    """

    def __init__(
        self,
        dispatchers: Sequence[str] = (),
        *,
        http_client: Optional[HttpClient] = None,
        options: Optional[RequestOptions] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.dispatchers = list(dispatchers)
        self.options = options or RequestOptions()
        self.rng = rng or random.SystemRandom()
        self.http = http_client or HttpClient(
            timeout=self.options.timeout_seconds,
            max_retries=self.options.retry_attempts,
            verify=self.options.reject_self_signed_certificates,
        )

    def _post(self, url: str, body: str, options: RequestOptions) -> HttpResponse:
        try:
            return self.http.post(
                url,
                data=body.encode("utf-8"),
                headers=_JSON_HEADERS,
                timeout=options.timeout_seconds,
                verify=options.reject_self_signed_certificates,
            )
        except HttpError as e:
            raise TransportError(
                f"Request to {url} failed: {e}",
                status_code=e.status_code,
                url=url,
            ) from e

    @staticmethod
    def _decode(response: HttpResponse, url: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Non-JSON response from {url} (HTTP {response.status_code})",
                status_code=response.status_code,
                url=url,
                details={"body": response.text[:200]},
            ) from e

    def pick_dispatcher(self) -> str:
        if not self.dispatchers:
            raise DispatchError("No dispatchers configured")
        return self.dispatchers[self.rng.randrange(len(self.dispatchers))]

    def dispatch(
        self,
        request: DispatchRequest,
        options: Optional[RequestOptions] = None,
    ) -> Session:
        options = options or self.options
        url = _join(self.pick_dispatcher(), DISPATCH_ROUTE)
        logger.debug(f"Dispatching session for chain {request.session_header.chain} via {url}")

        response = self._post(url, dumps_canonical(request), options)
        body = self._decode(response, url)

        if not response.ok or not isinstance(body, dict) or "session" not in body:
            raise DispatchError(
                f"Dispatch failed (HTTP {response.status_code})",
                details={"url": url, "body": body},
            )

        try:
            session = Session.model_validate(body["session"])
        except ValidationError as e:
            raise DispatchError(
                f"Dispatcher returned an invalid session: {e}",
                details={"url": url},
            ) from e

        logger.info(
            f"Session {session.key} at height {session.header.session_block_height} "
            f"with {len(session.nodes)} nodes"
        )
        return session

    def send(
        self,
        relay_request: RelayRequest,
        service_url: str,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """
        POST the relay and return the decoded JSON body.

        Error statuses with a JSON body are returned, not raised: the body
        carries the node's error, which the response validator classifies.
        """
        options = options or self.options
        url = _join(service_url, RELAY_ROUTE)

        response = self._post(url, dumps_canonical(relay_request), options)
        if not response.ok:
            logger.debug(f"Relay to {url} answered HTTP {response.status_code}")
        return self._decode(response, url)

    def close(self) -> None:
        self.http.close()
