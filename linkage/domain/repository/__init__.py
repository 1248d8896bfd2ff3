"""Repository interfaces for the linking domain.

Interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from linkage.domain.repository.session import SessionIdentityStore

__all__ = [
    "SessionIdentityStore",
]
