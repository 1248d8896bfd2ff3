"""Management API directory client.

Talks to an Auth0-style Management API v2 with a bearer token scoped to
``update:users``. One HTTP request per operation, no retries.
"""

from typing import Any
from urllib.parse import quote

import httpx
import logfire

from linkage.adapter.directory.mappers import (
    identities_from_json,
    metadata_update_to_json,
    user_record_from_json,
)
from linkage.domain.error import DirectoryError, DirectoryPayloadError, NotFoundError
from linkage.domain.model import UserRecord
from linkage.domain.service.directory import IdentityDirectory
from linkage.domain.value import IdentityRef, MappingValue, UserId


def _quote(segment: str) -> str:
    return quote(segment, safe="")


def _escape_query_value(value: str) -> str:
    """Escape a value for a quoted Lucene search term."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


class ManagementApiDirectory(IdentityDirectory):
    """Identity directory backed by the Management API."""

    def __init__(self, base_url: str, api_token: str, timeout: float = 30.0) -> None:
        """Initialize Management API client.

        Args:
            base_url: Tenant base URL, e.g. https://example.eu.auth0.com
            api_token: Management API token with update:users scope
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/api/v2"
        self.timeout = timeout
        self._headers = {
            "Authorization": f"Bearer {api_token}",
            "Accept": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request to the Management API.

        Raises:
            DirectoryError: If no response was received
        """
        url = f"{self.api_url}{path}"
        try:
            async with httpx.AsyncClient() as client:
                return await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=self._headers,
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error(
                "Directory HTTP error", method=method, path=path, error=str(e)
            )
            raise DirectoryError(f"HTTP error calling directory: {e}") from e

    def _fail(self, operation: str, response: httpx.Response) -> DirectoryError:
        logfire.error(
            "Directory call failed",
            operation=operation,
            status_code=response.status_code,
            error=response.text,
        )
        return DirectoryError(
            f"{operation} failed: {response.status_code}",
            status_code=response.status_code,
        )

    def _decode(self, operation: str, response: httpx.Response, decode) -> Any:
        try:
            return decode(response.json())
        except ValueError as e:
            # Covers json.JSONDecodeError and MalformedPayloadError
            logfire.error(
                "Directory returned malformed payload",
                operation=operation,
                error=str(e),
            )
            raise DirectoryPayloadError(
                f"{operation} returned a malformed payload: {e}",
                status_code=response.status_code,
            ) from e

    async def _search_verified_by_email(
        self, email: str, exclude_user_id: UserId
    ) -> list[UserRecord]:
        query = (
            f'email:"{_escape_query_value(email)}" AND email_verified:true '
            f'AND NOT user_id:"{_escape_query_value(str(exclude_user_id))}"'
        )
        with logfire.span(
            "management_api_directory.find_by_verified_email",
            exclude_user_id=str(exclude_user_id),
        ):
            response = await self._request(
                "GET", "/users", params={"q": query, "search_engine": "v3"}
            )
            if response.status_code != 200:
                raise self._fail("User search", response)

            users = self._decode(
                "User search",
                response,
                lambda data: [user_record_from_json(item) for item in data],
            )
            # The search index can lag behind writes
            return [
                user
                for user in users
                if user.email_verified
                and user.email == email
                and user.user_id != exclude_user_id
            ]

    async def get_user(self, user_id: UserId) -> UserRecord:
        with logfire.span("management_api_directory.get_user", user_id=str(user_id)):
            response = await self._request("GET", f"/users/{_quote(str(user_id))}")
            if response.status_code == 404:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            if response.status_code != 200:
                raise self._fail("Get user", response)
            return self._decode("Get user", response, user_record_from_json)

    async def update_metadata(
        self,
        user_id: UserId,
        user_metadata: MappingValue,
        app_metadata: MappingValue,
    ) -> UserRecord:
        with logfire.span(
            "management_api_directory.update_metadata", user_id=str(user_id)
        ):
            response = await self._request(
                "PATCH",
                f"/users/{_quote(str(user_id))}",
                json=metadata_update_to_json(user_metadata, app_metadata),
            )
            if response.status_code != 200:
                raise self._fail("Metadata update", response)
            logfire.info("User metadata updated", user_id=str(user_id))
            return self._decode("Metadata update", response, user_record_from_json)

    async def link_identity(
        self, root_user_id: UserId, provider: str, local_id: str
    ) -> list[IdentityRef]:
        with logfire.span(
            "management_api_directory.link_identity",
            root_user_id=str(root_user_id),
            provider=provider,
        ):
            response = await self._request(
                "POST",
                f"/users/{_quote(str(root_user_id))}/identities",
                json={"provider": provider, "user_id": local_id},
            )
            if response.status_code != 201:
                raise self._fail("Identity link", response)
            logfire.info(
                "Identity linked",
                root_user_id=str(root_user_id),
                provider=provider,
                identity_id=local_id,
            )
            return self._decode("Identity link", response, identities_from_json)

    async def unlink_identity(
        self, root_user_id: UserId, provider: str, local_id: str
    ) -> list[IdentityRef]:
        with logfire.span(
            "management_api_directory.unlink_identity",
            root_user_id=str(root_user_id),
            provider=provider,
        ):
            response = await self._request(
                "DELETE",
                f"/users/{_quote(str(root_user_id))}/identities/"
                f"{_quote(provider)}/{_quote(local_id)}",
            )
            if response.status_code != 200:
                raise self._fail("Identity unlink", response)
            logfire.info(
                "Identity unlinked",
                root_user_id=str(root_user_id),
                provider=provider,
                identity_id=local_id,
            )
            return self._decode("Identity unlink", response, identities_from_json)
