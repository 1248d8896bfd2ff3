"""Session identity store interface."""

from abc import ABC, abstractmethod
from typing import Optional

from linkage.domain.model.session import SessionIdentities
from linkage.domain.value import SessionId


class SessionIdentityStore(ABC):
    """Store for the per-session cached identity lists."""

    @abstractmethod
    async def get(self, session_id: SessionId) -> Optional[SessionIdentities]:
        """Get the cached identities for a session.

        Args:
            session_id: Caller session id

        Returns:
            Cached view if present, None otherwise
        """
        pass

    @abstractmethod
    async def put(self, view: SessionIdentities) -> SessionIdentities:
        """Replace the cached identities for ``view.session_id``.

        Args:
            view: The complete new view

        Returns:
            The stored view
        """
        pass
