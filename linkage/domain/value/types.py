"""Domain value objects for account linking."""

from enum import Enum

from linkage.domain.base import ValueObject


class LinkState(str, Enum):
    """State of a link or unlink operation.

    Link flows move through the states in declaration order up to
    ``SESSION_UPDATED``; ``FAILED`` is reachable from any non-terminal state.
    Unlink flows use ``UNLINK_REQUESTED`` and ``UNLINKED``.
    """

    INITIATED = "initiated"
    TARGET_FETCHED = "target_fetched"
    VERIFIED = "verified"
    MERGED = "merged"
    LINKED = "linked"
    SESSION_UPDATED = "session_updated"
    FAILED = "failed"

    UNLINK_REQUESTED = "unlink_requested"
    UNLINKED = "unlinked"


class IdentityRef(ValueObject):
    """One provider account attached to a directory user.

    Within a user's identity list the first entry is the primary identity,
    whose provider and id make up the user's canonical user id.
    """

    provider: str
    identity_id: str  # Provider-local id ("user_id" on the wire)
    connection: str | None = None
    is_social: bool | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Identity key within a user's identity list."""
        return (self.provider, self.identity_id)
