"""In-process identity directory.

Deterministic stand-in for the Management API, used as the mock directory
component and in tests. Status codes mirror what the remote API reports.
"""

from typing import Iterable

import logfire

from linkage.domain.error import DirectoryError, NotFoundError
from linkage.domain.model import UserRecord
from linkage.domain.service.directory import IdentityDirectory
from linkage.domain.value import IdentityRef, MappingValue, UserId


class InMemoryDirectory(IdentityDirectory):
    """Identity directory holding users in a dict keyed by user id."""

    def __init__(self, users: Iterable[UserRecord] = ()) -> None:
        self._users: dict[UserId, UserRecord] = {}
        for user in users:
            self.add_user(user)

    def add_user(self, user: UserRecord) -> UserRecord:
        """Insert or replace a user."""
        self._users[user.user_id] = user
        return user

    async def _search_verified_by_email(
        self, email: str, exclude_user_id: UserId
    ) -> list[UserRecord]:
        return [
            user
            for user in self._users.values()
            if user.email_verified
            and user.email == email
            and user.user_id != exclude_user_id
        ]

    async def get_user(self, user_id: UserId) -> UserRecord:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("User", str(user_id))
        return user

    async def update_metadata(
        self,
        user_id: UserId,
        user_metadata: MappingValue,
        app_metadata: MappingValue,
    ) -> UserRecord:
        user = self._users.get(user_id)
        if user is None:
            raise DirectoryError("Metadata update failed: 404", status_code=404)
        updated = user.model_copy(
            update={"user_metadata": user_metadata, "app_metadata": app_metadata}
        )
        self._users[user_id] = updated
        return updated

    async def link_identity(
        self, root_user_id: UserId, provider: str, local_id: str
    ) -> list[IdentityRef]:
        root = self._users.get(root_user_id)
        if root is None:
            raise DirectoryError("Identity link failed: 404", status_code=404)

        secondary_id = UserId(f"{provider}|{local_id}")
        if root.has_identity(provider, local_id):
            raise DirectoryError("Identity link failed: 409", status_code=409)
        secondary = self._users.get(secondary_id)
        if secondary is None:
            raise DirectoryError("Identity link failed: 400", status_code=400)

        # The secondary user stops existing on its own
        del self._users[secondary_id]
        linked = root.model_copy(
            update={"identities": root.identities + secondary.identities}
        )
        self._users[root_user_id] = linked
        logfire.debug(
            "In-memory identity linked",
            root_user_id=str(root_user_id),
            provider=provider,
        )
        return list(linked.identities)

    async def unlink_identity(
        self, root_user_id: UserId, provider: str, local_id: str
    ) -> list[IdentityRef]:
        root = self._users.get(root_user_id)
        if root is None:
            raise DirectoryError("Identity unlink failed: 404", status_code=404)

        detached = next(
            (i for i in root.identities[1:] if i.key == (provider, local_id)), None
        )
        if detached is None:
            raise DirectoryError("Identity unlink failed: 400", status_code=400)

        remaining = tuple(i for i in root.identities if i != detached)
        self._users[root_user_id] = root.model_copy(update={"identities": remaining})

        # The detached account becomes a standalone user again, without the
        # metadata it had before linking
        standalone = UserRecord(
            user_id=UserId(f"{provider}|{local_id}"),
            email=root.email,
            email_verified=root.email_verified,
            identities=(detached,),
        )
        self._users[standalone.user_id] = standalone
        logfire.debug(
            "In-memory identity unlinked",
            root_user_id=str(root_user_id),
            provider=provider,
        )
        return list(remaining)
