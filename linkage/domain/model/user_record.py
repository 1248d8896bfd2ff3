"""User record entity.

Transient copy of a user as held by the identity directory, which remains
the system of record.
"""

from pydantic import Field

from linkage.domain.base import DomainModel
from linkage.domain.value import IdentityRef, MappingValue, UserId


class UserRecord(DomainModel):
    """Directory user with its metadata documents and linked identities."""

    user_id: UserId
    email: str | None = None
    email_verified: bool = False
    user_metadata: MappingValue = Field(default_factory=MappingValue)  # User-editable
    app_metadata: MappingValue = Field(default_factory=MappingValue)  # Application-editable
    identities: tuple[IdentityRef, ...] = ()

    def has_identity(self, provider: str, identity_id: str) -> bool:
        """Check whether an identity is linked to this user.

        Args:
            provider: Identity provider
            identity_id: Provider-local identity id

        Returns:
            True if the identity is in this user's identity list
        """
        return any(i.key == (provider, identity_id) for i in self.identities)
