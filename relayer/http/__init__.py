"""
HTTP Client Module

Pooled HTTP client used by the JSON transport.
"""

from .client import HttpClient, HttpError, HttpResponse

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
]
