"""Response models shared by identity use cases."""

from pydantic import BaseModel

from linkage.domain.model import UserRecord
from linkage.domain.value import IdentityRef


class IdentityInfo(BaseModel):
    """Linked identity information for responses."""

    provider: str
    identity_id: str
    connection: str | None = None
    is_social: bool | None = None

    @classmethod
    def from_ref(cls, identity: IdentityRef) -> "IdentityInfo":
        return cls(
            provider=identity.provider,
            identity_id=identity.identity_id,
            connection=identity.connection,
            is_social=identity.is_social,
        )


class CandidateInfo(BaseModel):
    """Link candidate information for responses."""

    user_id: str
    email: str | None
    identities: list[IdentityInfo]

    @classmethod
    def from_record(cls, user: UserRecord) -> "CandidateInfo":
        return cls(
            user_id=str(user.user_id),
            email=user.email,
            identities=[IdentityInfo.from_ref(i) for i in user.identities],
        )
