"""In-memory repository implementations."""

from .session import InMemorySessionIdentityStore

__all__ = [
    "InMemorySessionIdentityStore",
]
