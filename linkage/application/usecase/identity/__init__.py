"""Identity linking use cases."""

from .get_session_identities import GetSessionIdentitiesUseCase
from .initiate_link import InitiateLinkUseCase
from .suggest_link_candidates import SuggestLinkCandidatesUseCase
from .unlink_identity import UnlinkIdentityUseCase

__all__ = [
    "GetSessionIdentitiesUseCase",
    "InitiateLinkUseCase",
    "SuggestLinkCandidatesUseCase",
    "UnlinkIdentityUseCase",
]
