"""Domain model entities for account linking."""

from linkage.domain.model.link import (
    LinkOperation,
    LinkRequest,
    MergeResult,
    UnlinkRequest,
)
from linkage.domain.model.session import SessionIdentities
from linkage.domain.model.user_record import UserRecord

__all__ = [
    "LinkOperation",
    "LinkRequest",
    "MergeResult",
    "SessionIdentities",
    "UnlinkRequest",
    "UserRecord",
]
