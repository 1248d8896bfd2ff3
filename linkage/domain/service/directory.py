"""Identity directory interface.

The identity directory (an Auth0-style Management API) is the system of
record for users. Domain services receive an ``IdentityDirectory`` as a
constructor dependency; implementations live in ``linkage.adapter.directory``.

The client performs no retries. Every operation can be retried by the caller.
"""

from abc import ABC, abstractmethod

from linkage.domain.error import UnverifiedEmailError
from linkage.domain.model.user_record import UserRecord
from linkage.domain.value import IdentityRef, MappingValue, UserId


class IdentityDirectory(ABC):
    """Identity directory client."""

    async def find_by_verified_email(
        self, email: str | None, exclude_user_id: UserId, email_verified: bool
    ) -> list[UserRecord]:
        """Find other users holding the same verified email.

        Args:
            email: Caller's email
            exclude_user_id: Caller's own user id, left out of the results
            email_verified: Whether the caller's email is verified

        Returns:
            Users with ``email`` verified, excluding ``exclude_user_id``

        Raises:
            UnverifiedEmailError: If the caller's email is missing or unverified
            DirectoryError: If the search call fails
        """
        if not email_verified or not email:
            raise UnverifiedEmailError(str(exclude_user_id))
        return await self._search_verified_by_email(email, exclude_user_id)

    @abstractmethod
    async def _search_verified_by_email(
        self, email: str, exclude_user_id: UserId
    ) -> list[UserRecord]:
        """Run the directory search behind ``find_by_verified_email``."""
        pass

    @abstractmethod
    async def get_user(self, user_id: UserId) -> UserRecord:
        """Fetch a user.

        Args:
            user_id: Directory user id

        Returns:
            The user record

        Raises:
            NotFoundError: If no such user exists
            DirectoryError: If the call fails otherwise
        """
        pass

    @abstractmethod
    async def update_metadata(
        self,
        user_id: UserId,
        user_metadata: MappingValue,
        app_metadata: MappingValue,
    ) -> UserRecord:
        """Replace a user's metadata documents.

        Args:
            user_id: Directory user id
            user_metadata: New user metadata
            app_metadata: New app metadata

        Returns:
            The updated user record

        Raises:
            DirectoryError: If the remote call does not succeed
        """
        pass

    @abstractmethod
    async def link_identity(
        self, root_user_id: UserId, provider: str, local_id: str
    ) -> list[IdentityRef]:
        """Attach another account's identity to ``root_user_id``.

        Args:
            root_user_id: User that keeps its id
            provider: Provider of the account being linked
            local_id: Provider-local id of the account being linked

        Returns:
            The root user's identity list after linking

        Raises:
            DirectoryError: If the remote status is not 201 Created
            DirectoryPayloadError: If the call succeeded but the response
                body is unreadable
        """
        pass

    @abstractmethod
    async def unlink_identity(
        self, root_user_id: UserId, provider: str, local_id: str
    ) -> list[IdentityRef]:
        """Detach an identity from ``root_user_id``.

        Args:
            root_user_id: User the identity is attached to
            provider: Provider of the identity
            local_id: Provider-local id of the identity

        Returns:
            The root user's remaining identities

        Raises:
            DirectoryError: If the remote status is not 200 OK
            DirectoryPayloadError: If the call succeeded but the response
                body is unreadable
        """
        pass
