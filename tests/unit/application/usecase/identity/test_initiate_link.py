"""Unit tests for InitiateLinkUseCase and GetSessionIdentitiesUseCase."""

import pytest

from linkage.application.usecase.identity import (
    GetSessionIdentitiesUseCase,
    InitiateLinkUseCase,
)
from linkage.application.usecase.identity.get_session_identities import (
    GetSessionIdentitiesRequest,
)
from linkage.application.usecase.identity.initiate_link import InitiateLinkRequest
from linkage.domain.error import LinkError, VerificationError
from linkage.domain.service import IdentityDirectory
from linkage.domain.value import UserId
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestInitiateLinkUseCase:
    """Tests for InitiateLinkUseCase."""

    @pytest.mark.asyncio
    async def test_link_success_updates_session(self, unit_env):
        """Linking should return the identities and cache them for the session."""
        # Arrange
        directory = await unit_env.get(IdentityDirectory)
        directory.add_user(make_user("auth0|1", user_metadata={"lang": "en"}))
        directory.add_user(
            make_user("google-oauth2|2", user_metadata={"lang": "fr", "tags": ["x"]})
        )
        use_case = await unit_env.get(InitiateLinkUseCase)
        get_identities = await unit_env.get(GetSessionIdentitiesUseCase)

        # Act
        response = await use_case.execute(
            InitiateLinkRequest(
                primary_user_id="auth0|1",
                target_user_id="google-oauth2|2",
                session_id="s1",
            )
        )

        # Assert
        assert response.primary_user_id == "auth0|1"
        assert [(i.provider, i.identity_id) for i in response.identities] == [
            ("auth0", "1"),
            ("google-oauth2", "2"),
        ]
        view = await get_identities.execute(GetSessionIdentitiesRequest(session_id="s1"))
        assert view is not None
        assert view.identities == response.identities

        primary = await directory.get_user(UserId("auth0|1"))
        assert primary.user_metadata.to_json() == {"lang": "en", "tags": ["x"]}

    @pytest.mark.asyncio
    async def test_link_unverified_target(self, unit_env):
        """Should raise LinkError and leave the session empty."""
        # Arrange
        directory = await unit_env.get(IdentityDirectory)
        directory.add_user(make_user("auth0|1"))
        directory.add_user(make_user("google-oauth2|2", email_verified=False))
        use_case = await unit_env.get(InitiateLinkUseCase)
        get_identities = await unit_env.get(GetSessionIdentitiesUseCase)

        # Act & Assert
        with pytest.raises(LinkError) as exc_info:
            await use_case.execute(
                InitiateLinkRequest(
                    primary_user_id="auth0|1",
                    target_user_id="google-oauth2|2",
                    session_id="s1",
                )
            )

        assert isinstance(exc_info.value.cause, VerificationError)
        assert (
            await get_identities.execute(GetSessionIdentitiesRequest(session_id="s1"))
            is None
        )

    @pytest.mark.asyncio
    async def test_malformed_target_id(self, unit_env):
        """Should reject a target id without a provider."""
        use_case = await unit_env.get(InitiateLinkUseCase)

        with pytest.raises(ValueError):
            await use_case.execute(
                InitiateLinkRequest(
                    primary_user_id="auth0|1",
                    target_user_id="no-provider",
                    session_id="s1",
                )
            )
