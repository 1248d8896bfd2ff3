"""Test configuration and fixtures."""

from typing import Any

import logfire
import pytest

from linkage.domain.model import UserRecord
from linkage.domain.value import IdentityRef, UserId, document_from_json


@pytest.fixture(scope="session", autouse=True)
def configure_logfire_for_tests():
    """Keep Logfire local and quiet during tests."""
    logfire.configure(send_to_logfire=False, console=False)


def make_user(
    user_id: str,
    email: str | None = "a@b.com",
    email_verified: bool = True,
    user_metadata: dict[str, Any] | None = None,
    app_metadata: dict[str, Any] | None = None,
    extra_identities: list[IdentityRef] | None = None,
) -> UserRecord:
    """Helper function to build a directory user for tests.

    The primary identity is derived from ``user_id`` the way the directory
    does it.

    Args:
        user_id: ``provider|localId``
        email: User email
        email_verified: Whether the email is verified
        user_metadata: Plain JSON user metadata
        app_metadata: Plain JSON app metadata
        extra_identities: Identities already linked to the user

    Returns:
        UserRecord
    """
    uid = UserId(user_id)
    primary = IdentityRef(
        provider=uid.provider, identity_id=uid.local_id, connection=uid.provider
    )
    return UserRecord(
        user_id=uid,
        email=email,
        email_verified=email_verified,
        user_metadata=document_from_json(user_metadata),
        app_metadata=document_from_json(app_metadata),
        identities=(primary, *(extra_identities or [])),
    )
