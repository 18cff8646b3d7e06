"""External API client implementations."""

from .session_client import HttpSessionClient

__all__ = [
    "HttpSessionClient",
]
