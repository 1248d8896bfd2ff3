"""In-memory session identity store."""

from typing import Optional

from linkage.domain.model.session import SessionIdentities
from linkage.domain.repository.session import SessionIdentityStore
from linkage.domain.value import SessionId


class InMemorySessionIdentityStore(SessionIdentityStore):
    """Process-local implementation of SessionIdentityStore."""

    def __init__(self) -> None:
        self._views: dict[SessionId, SessionIdentities] = {}

    async def get(self, session_id: SessionId) -> Optional[SessionIdentities]:
        """Get cached identities for a session."""
        return self._views.get(session_id)

    async def put(self, view: SessionIdentities) -> SessionIdentities:
        """Replace cached identities for a session."""
        self._views[view.session_id] = view
        return view
