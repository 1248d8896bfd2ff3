"""Link operation entities."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import Field

from linkage.domain.base import DomainModel
from linkage.domain.error import BusinessRuleViolationError
from linkage.domain.value import IdentityRef, LinkState, MappingValue, UserId

# Each non-terminal state has exactly one successor; FAILED is reachable from
# any of them.
_TRANSITIONS: dict[LinkState, LinkState] = {
    LinkState.INITIATED: LinkState.TARGET_FETCHED,
    LinkState.TARGET_FETCHED: LinkState.VERIFIED,
    LinkState.VERIFIED: LinkState.MERGED,
    LinkState.MERGED: LinkState.LINKED,
    LinkState.LINKED: LinkState.SESSION_UPDATED,
    LinkState.UNLINK_REQUESTED: LinkState.UNLINKED,
}

TERMINAL_STATES = frozenset(
    {LinkState.SESSION_UPDATED, LinkState.UNLINKED, LinkState.FAILED}
)


class LinkRequest(DomainModel):
    """Request to link ``target_user_id`` into ``primary_user_id``."""

    primary_user_id: UserId
    target_user_id: UserId


class UnlinkRequest(DomainModel):
    """Request to detach one identity from ``root_user_id``."""

    root_user_id: UserId
    provider: str
    identity_id: str


class MergeResult(DomainModel):
    """Merged metadata documents, ready to be committed to the primary user."""

    merged_user_metadata: MappingValue
    merged_app_metadata: MappingValue


class LinkOperation(DomainModel):
    """Progress record of one link or unlink flow.

    Immutable; ``advance`` and ``fail`` return the next record.
    """

    id: UUID = Field(default_factory=uuid4)
    state: LinkState = LinkState.INITIATED
    history: tuple[LinkState, ...] = (LinkState.INITIATED,)
    error: Exception | None = None
    identities: tuple[IdentityRef, ...] = ()
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def start(cls, state: LinkState = LinkState.INITIATED) -> "LinkOperation":
        """Begin a flow in its initial state.

        Args:
            state: ``INITIATED`` for links, ``UNLINK_REQUESTED`` for unlinks
        """
        if state not in (LinkState.INITIATED, LinkState.UNLINK_REQUESTED):
            raise BusinessRuleViolationError(f"Cannot start an operation in {state.value}")
        return cls(state=state, history=(state,))

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def failed_at(self) -> LinkState | None:
        """State the flow was in when it failed, if it failed."""
        if self.state is not LinkState.FAILED:
            return None
        return self.history[-2]

    def advance(self, state: LinkState) -> "LinkOperation":
        """Move to the next state.

        Raises:
            BusinessRuleViolationError: If ``state`` does not follow the current state
        """
        if _TRANSITIONS.get(self.state) is not state:
            raise BusinessRuleViolationError(
                f"Invalid transition {self.state.value} -> {state.value}"
            )
        return self.model_copy(update={"state": state, "history": (*self.history, state)})

    def fail(self, error: Exception) -> "LinkOperation":
        """Move to ``FAILED``, keeping the originating error."""
        if self.is_terminal:
            raise BusinessRuleViolationError(
                f"Operation already finished in {self.state.value}"
            )
        return self.model_copy(
            update={
                "state": LinkState.FAILED,
                "history": (*self.history, LinkState.FAILED),
                "error": error,
            }
        )

    def with_identities(self, identities: tuple[IdentityRef, ...]) -> "LinkOperation":
        """Record the identity list returned by the directory."""
        return self.model_copy(update={"identities": identities})
