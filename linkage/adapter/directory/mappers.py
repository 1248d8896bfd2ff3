"""Mappers between Management API payloads and domain models.

Wire shapes (Management API v2):

    user:     {"user_id": "auth0|1", "email": "...", "email_verified": true,
               "user_metadata": {...}, "app_metadata": {...},
               "identities": [identity, ...]}
    identity: {"provider": "google-oauth2", "user_id": "1034",
               "connection": "google-oauth2", "isSocial": true}
"""

from typing import Any

from pydantic import ValidationError

from linkage.domain.model import UserRecord
from linkage.domain.value import IdentityRef, MappingValue, UserId, document_from_json


class MalformedPayloadError(ValueError):
    """Management API returned a payload that does not match the wire shape."""


def identity_from_json(data: Any) -> IdentityRef:
    """Build an identity from its wire representation.

    Raises:
        MalformedPayloadError: If required fields are missing
    """
    try:
        return IdentityRef(
            provider=data["provider"],
            # Some connections report numeric ids
            identity_id=str(data["user_id"]),
            connection=data.get("connection"),
            is_social=data.get("isSocial"),
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        raise MalformedPayloadError(f"Malformed identity payload: {e}") from e


def identities_from_json(data: Any) -> list[IdentityRef]:
    """Build an identity list from its wire representation.

    Raises:
        MalformedPayloadError: If the payload is not a list of identities
    """
    if not isinstance(data, list):
        raise MalformedPayloadError("Identity list payload must be a JSON array")
    return [identity_from_json(item) for item in data]


def user_record_from_json(data: Any) -> UserRecord:
    """Build a user record from its wire representation.

    Missing metadata documents are treated as empty.

    Raises:
        MalformedPayloadError: If required fields are missing or malformed
    """
    try:
        return UserRecord(
            user_id=UserId(data["user_id"]),
            email=data.get("email"),
            email_verified=bool(data.get("email_verified", False)),
            user_metadata=document_from_json(data.get("user_metadata")),
            app_metadata=document_from_json(data.get("app_metadata")),
            identities=tuple(identities_from_json(data.get("identities", []))),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        # pydantic's ValidationError is a ValueError
        raise MalformedPayloadError(f"Malformed user payload: {e}") from e


def metadata_update_to_json(
    user_metadata: MappingValue, app_metadata: MappingValue
) -> dict[str, Any]:
    """Body of a metadata PATCH request."""
    return {
        "user_metadata": user_metadata.to_json(),
        "app_metadata": app_metadata.to_json(),
    }
