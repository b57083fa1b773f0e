"""
Relayer Schemas
File: errors.py

Purpose: Error taxonomy for relay construction, dispatch and response
handling. Every failure raised by the relayer derives from RelayerException
and carries a stable machine-readable code.
"""

from typing import Any


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the relayer."""

    # Serialization
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Relay preconditions
    MISSING_SIGNER = "MISSING_SIGNER"
    NO_SERVICE_NODE = "NO_SERVICE_NODE"
    EMPTY_SESSION = "EMPTY_SESSION"
    NODE_NOT_IN_SESSION = "NODE_NOT_IN_SESSION"

    # Node-reported failures
    RELAY_ERROR = "RELAY_ERROR"
    MALFORMED_RELAY_RESPONSE = "MALFORMED_RELAY_RESPONSE"

    # Transport
    DISPATCH_ERROR = "DISPATCH_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"

    # Configuration
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class RelayerException(Exception):
    """
    Base exception for all relayer errors.

    Carries a code, a human-readable message, structured details and a
    hint telling the caller whether trying again can succeed.
    """

    def __init__(
        self,
        message: str,
        code: str = "RELAYER_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Structured representation, used by the CLI for JSON output."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(RelayerException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class MissingSignerError(RelayerException):
    """No signer was supplied; a relay proof cannot be signed."""

    def __init__(self, message: str = "You need a signer to send a relay") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.MISSING_SIGNER,
            retryable=False,
        )


class NoServiceNodeError(RelayerException):
    """The session offers no node to serve the relay."""

    def __init__(
        self,
        message: str = "Couldn't find a service node",
        code: str = ErrorCodes.NO_SERVICE_NODE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details=details,
            retryable=True,
        )


class EmptySessionError(NoServiceNodeError):
    """Random selection was requested over a session without nodes."""

    def __init__(self, session_key: str | None = None) -> None:
        details = {"session_key": session_key} if session_key else None
        super().__init__(
            message="Session has no nodes to select from",
            code=ErrorCodes.EMPTY_SESSION,
            details=details,
        )


class NodeNotInSessionError(RelayerException):
    """The node supplied by the caller is not part of the session."""

    def __init__(self, public_key: str, session_key: str | None = None) -> None:
        details: dict[str, Any] = {"public_key": public_key}
        if session_key:
            details["session_key"] = session_key
        super().__init__(
            message="Node is not in the current session",
            code=ErrorCodes.NODE_NOT_IN_SESSION,
            details=details,
            retryable=False,
        )
        self.public_key = public_key


class RelayError(RelayerException):
    """
    The service node answered the relay with an error.

    `node_code` and `codespace` are reported by the node; `code` stays a
    relayer error code so callers can branch on it uniformly.
    """

    def __init__(
        self,
        message: str,
        node_code: int | None = None,
        codespace: str | None = None,
        code: str = ErrorCodes.RELAY_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if node_code is not None:
            full_details["node_code"] = node_code
        if codespace:
            full_details["codespace"] = codespace
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=True,
        )
        self.node_code = node_code
        self.codespace = codespace


class DispatchError(RelayerException):
    """A session could not be obtained from the dispatchers."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.DISPATCH_ERROR,
            details=details,
            retryable=True,
        )


class TransportError(RelayerException):
    """A request could not be delivered or its answer could not be read."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if status_code is not None:
            full_details["status_code"] = status_code
        if url:
            full_details["url"] = url
        super().__init__(
            message=message,
            code=ErrorCodes.TRANSPORT_ERROR,
            details=full_details,
            retryable=True,
        )
        self.status_code = status_code


class ConfigurationError(RelayerException):
    """Exception raised for invalid configuration values."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
    ) -> None:
        details = {"field_path": field_path} if field_path else None
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=details,
            retryable=False,
        )
