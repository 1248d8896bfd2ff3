"""Identity linking routes.

The caller is identified by a session token issued by the embedding
application, sent either as ``Authorization: Bearer <token>`` or in the
``session_token`` cookie.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, HTTPException, status
from pydantic import BaseModel, Field

from linkage.application.usecase.identity import (
    GetSessionIdentitiesUseCase,
    InitiateLinkUseCase,
    SuggestLinkCandidatesUseCase,
    UnlinkIdentityUseCase,
)
from linkage.application.usecase.identity.get_session_identities import (
    GetSessionIdentitiesRequest,
    GetSessionIdentitiesResponse,
)
from linkage.application.usecase.identity.initiate_link import (
    InitiateLinkRequest,
    InitiateLinkResponse,
)
from linkage.application.usecase.identity.suggest_link_candidates import (
    SuggestLinkCandidatesRequest,
    SuggestLinkCandidatesResponse,
)
from linkage.application.usecase.identity.unlink_identity import (
    UnlinkIdentityRequest,
    UnlinkIdentityResponse,
)
from linkage.domain.error import (
    CandidateLookupError,
    DirectoryError,
    LinkError,
    NotFoundError,
    UnlinkError,
    UnverifiedEmailError,
    VerificationError,
)
from linkage.domain.service import JWTService
from linkage.util.jwt import JWTError, TokenPayload

router = APIRouter(prefix="/identities", tags=["identities"], route_class=DishkaRoute)


class LinkAPIRequest(BaseModel):
    """API request for linking an account."""

    target_user_id: str = Field(pattern=r"^[^|]+\|.+$")


def _authenticate(
    jwt_service: JWTService, authorization: str | None, session_token: str | None
) -> TokenPayload:
    """Resolve the caller from the bearer header or session cookie.

    Raises:
        HTTPException: 401 if no valid token was presented
    """
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[len("bearer ") :].strip()
    elif session_token:
        token = session_token

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        return jwt_service.authenticate(token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


def _status_for(cause: Exception) -> int:
    """HTTP status for an originating domain error."""
    if isinstance(cause, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(cause, (VerificationError, UnverifiedEmailError)):
        return status.HTTP_403_FORBIDDEN
    if isinstance(cause, DirectoryError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.get("", response_model=GetSessionIdentitiesResponse)
async def get_session_identities(
    get_session_identities_use_case: FromDishka[GetSessionIdentitiesUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    session_token: str | None = Cookie(default=None),
) -> GetSessionIdentitiesResponse:
    """Get the identities cached for the caller's session.

    Raises:
        HTTPException: 401 if not authenticated, 404 if nothing is cached yet
    """
    payload = _authenticate(jwt_service, authorization, session_token)

    view = await get_session_identities_use_case.execute(
        GetSessionIdentitiesRequest(session_id=payload.sid)
    )
    if view is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No identities cached for this session",
        )
    return view


@router.get("/candidates", response_model=SuggestLinkCandidatesResponse)
async def suggest_link_candidates(
    suggest_link_candidates_use_case: FromDishka[SuggestLinkCandidatesUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    session_token: str | None = Cookie(default=None),
) -> SuggestLinkCandidatesResponse:
    """List accounts sharing the caller's verified email.

    Example:
        GET /identities/candidates
        Authorization: Bearer ...

        Response:
        {
            "candidates": [
                {
                    "user_id": "google-oauth2|1034",
                    "email": "alice@example.com",
                    "identities": [{"provider": "google-oauth2", "identity_id": "1034", ...}]
                }
            ]
        }
    """
    payload = _authenticate(jwt_service, authorization, session_token)

    try:
        return await suggest_link_candidates_use_case.execute(
            SuggestLinkCandidatesRequest(user_id=payload.sub)
        )
    except CandidateLookupError as e:
        raise HTTPException(status_code=_status_for(e.cause), detail=str(e.cause))


@router.post(
    "/link",
    response_model=InitiateLinkResponse,
    status_code=status.HTTP_201_CREATED,
)
async def link_identity(
    request: LinkAPIRequest,
    initiate_link_use_case: FromDishka[InitiateLinkUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    session_token: str | None = Cookie(default=None),
) -> InitiateLinkResponse:
    """Link another account into the caller's account.

    Example:
        POST /identities/link
        Authorization: Bearer ...

        Request:
        {"target_user_id": "google-oauth2|1034"}

        Response (201):
        {
            "primary_user_id": "auth0|5f7c8ec7c33c6c004bbafe82",
            "identities": [...]
        }

    Failures respond with ``{"message", "state", "metadata_committed"}``;
    ``metadata_committed`` tells the client whether only the link step
    needs retrying.
    """
    payload = _authenticate(jwt_service, authorization, session_token)

    try:
        return await initiate_link_use_case.execute(
            InitiateLinkRequest(
                primary_user_id=payload.sub,
                target_user_id=request.target_user_id,
                session_id=payload.sid,
            )
        )
    except LinkError as e:
        raise HTTPException(
            status_code=_status_for(e.cause),
            detail={
                "message": str(e.cause),
                "state": e.state.value,
                "metadata_committed": e.metadata_committed,
            },
        )


@router.delete("/{provider}/{identity_id}", response_model=UnlinkIdentityResponse)
async def unlink_identity(
    provider: str,
    identity_id: str,
    unlink_identity_use_case: FromDishka[UnlinkIdentityUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    session_token: str | None = Cookie(default=None),
) -> UnlinkIdentityResponse:
    """Detach a linked identity from the caller's account.

    Example:
        DELETE /identities/google-oauth2/1034
        Authorization: Bearer ...

        Response:
        {
            "root_user_id": "auth0|5f7c8ec7c33c6c004bbafe82",
            "identities": [...]
        }
    """
    payload = _authenticate(jwt_service, authorization, session_token)

    try:
        return await unlink_identity_use_case.execute(
            UnlinkIdentityRequest(
                root_user_id=payload.sub,
                provider=provider,
                identity_id=identity_id,
                session_id=payload.sid,
            )
        )
    except UnlinkError as e:
        raise HTTPException(status_code=_status_for(e.cause), detail=str(e.cause))
