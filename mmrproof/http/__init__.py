"""
HTTP transport for indexer queries.
"""
from .client import HttpClient, HttpError, HttpResponse, HttpTimeoutError

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "HttpTimeoutError",
]
