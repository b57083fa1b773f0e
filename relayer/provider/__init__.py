"""
Transports that deliver dispatch and relay calls to the network.
"""

from .base import AbstractProvider
from .jsonrpc import DISPATCH_ROUTE, RELAY_ROUTE, JsonRpcProvider

__all__ = [
    "AbstractProvider",
    "DISPATCH_ROUTE",
    "RELAY_ROUTE",
    "JsonRpcProvider",
]
