"""Repository implementations."""

from linkage.persistence.repository.inmemory import InMemorySessionIdentityStore

__all__ = [
    "InMemorySessionIdentityStore",
]
