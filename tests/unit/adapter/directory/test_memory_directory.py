"""Unit tests for InMemoryDirectory."""

import pytest

from linkage.adapter.directory import InMemoryDirectory
from linkage.domain.error import DirectoryError, NotFoundError
from linkage.domain.value import IdentityRef, UserId, document_from_json
from tests.conftest import make_user


class TestInMemoryDirectory:
    """Tests for InMemoryDirectory."""

    @pytest.mark.asyncio
    async def test_get_missing_user(self):
        """Should raise NotFoundError for unknown users."""
        directory = InMemoryDirectory()

        with pytest.raises(NotFoundError):
            await directory.get_user(UserId("auth0|1"))

    @pytest.mark.asyncio
    async def test_update_metadata_replaces_documents(self):
        """Should store the new documents."""
        directory = InMemoryDirectory([make_user("auth0|1", user_metadata={"a": 1})])

        updated = await directory.update_metadata(
            UserId("auth0|1"),
            document_from_json({"b": 2}),
            document_from_json({"plan": "pro"}),
        )

        assert updated.user_metadata.to_json() == {"b": 2}
        assert (await directory.get_user(UserId("auth0|1"))).app_metadata.to_json() == {
            "plan": "pro"
        }

    @pytest.mark.asyncio
    async def test_link_absorbs_secondary(self):
        """Linked secondary stops existing on its own."""
        directory = InMemoryDirectory(
            [make_user("auth0|1"), make_user("google-oauth2|2")]
        )

        identities = await directory.link_identity(
            UserId("auth0|1"), "google-oauth2", "2"
        )

        assert [i.key for i in identities] == [("auth0", "1"), ("google-oauth2", "2")]
        with pytest.raises(NotFoundError):
            await directory.get_user(UserId("google-oauth2|2"))

    @pytest.mark.asyncio
    async def test_link_twice_conflicts(self):
        """Should report 409 for an identity already linked."""
        google = IdentityRef(provider="google-oauth2", identity_id="2")
        directory = InMemoryDirectory(
            [make_user("auth0|1", extra_identities=[google])]
        )

        with pytest.raises(DirectoryError) as exc_info:
            await directory.link_identity(UserId("auth0|1"), "google-oauth2", "2")

        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_link_unknown_secondary(self):
        """Should report 400 for an unknown secondary."""
        directory = InMemoryDirectory([make_user("auth0|1")])

        with pytest.raises(DirectoryError) as exc_info:
            await directory.link_identity(UserId("auth0|1"), "github", "9")

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_unlink_restores_standalone_user(self):
        """Detached identity becomes a user with empty metadata."""
        google = IdentityRef(provider="google-oauth2", identity_id="2")
        directory = InMemoryDirectory(
            [
                make_user(
                    "auth0|1", user_metadata={"lang": "en"}, extra_identities=[google]
                )
            ]
        )

        remaining = await directory.unlink_identity(
            UserId("auth0|1"), "google-oauth2", "2"
        )

        assert [i.key for i in remaining] == [("auth0", "1")]
        standalone = await directory.get_user(UserId("google-oauth2|2"))
        assert standalone.identities == (google,)
        assert standalone.user_metadata.to_json() == {}

    @pytest.mark.asyncio
    async def test_unlink_primary_identity_rejected(self):
        """Should not detach the primary identity."""
        directory = InMemoryDirectory([make_user("auth0|1")])

        with pytest.raises(DirectoryError) as exc_info:
            await directory.unlink_identity(UserId("auth0|1"), "auth0", "1")

        assert exc_info.value.status_code == 400
