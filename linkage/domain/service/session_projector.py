"""Session projector domain service."""

from collections.abc import Sequence

import logfire

from linkage.domain.model import SessionIdentities
from linkage.domain.repository import SessionIdentityStore
from linkage.domain.value import IdentityRef, SessionId, UserId



class SessionProjector:
    """Keeps the caller session's identity view in step with the directory."""

    def __init__(self, session_store: SessionIdentityStore) -> None:
        """Initialize session projector.

        Args:
            session_store: Store holding per-session identity views
        """
        self.session_store = session_store

    async def project(
        self,
        session_id: SessionId,
        user_id: UserId,
        identities: Sequence[IdentityRef],
    ) -> SessionIdentities:
        """Overwrite the session's identities with the directory's list.

        The previous view is discarded, not merged.

        Args:
            session_id: Caller session id
            user_id: User the identities belong to
            identities: Identity list returned by the directory

        Returns:
            The stored view
        """
        with logfire.span(
            "session_projector.project",
            session_id=session_id,
            user_id=str(user_id),
        ):
            view = SessionIdentities(
                session_id=session_id,
                user_id=user_id,
                identities=tuple(identities),
            )
            stored = await self.session_store.put(view)
            logfire.info(
                "Session identities replaced",
                session_id=session_id,
                user_id=str(user_id),
                count=len(stored.identities),
            )
            return stored

    async def current(self, session_id: SessionId) -> SessionIdentities | None:
        """Get the session's current identity view, if any."""
        return await self.session_store.get(session_id)
