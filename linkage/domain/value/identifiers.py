"""Strongly typed identifiers for directory entities.

Directory user ids are opaque strings of the form ``<provider>|<localId>``,
for example ``auth0|5f7c8ec7c33c6c004bbafe82`` or ``google-oauth2|1034``.
"""

from typing import NewType

from pydantic import ConfigDict, RootModel, field_validator

SessionId = NewType("SessionId", str)


class UserId(RootModel[str]):
    """Directory user id.

    Only the first ``|`` separates the provider from the local id; local ids
    issued by some connections contain ``|`` themselves. Serializes as the
    plain string.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.root

    @field_validator("root")
    @classmethod
    def validate_user_id_format(cls, v: str) -> str:
        """Validate the ``<provider>|<localId>`` shape."""
        provider, separator, local_id = v.partition("|")
        if not separator or not provider or not local_id:
            raise ValueError("User id must have the form '<provider>|<localId>'")
        return v

    @property
    def provider(self) -> str:
        """Provider part of the user id."""
        return self.root.partition("|")[0]

    @property
    def local_id(self) -> str:
        """Provider-local part of the user id."""
        return self.root.partition("|")[2]
