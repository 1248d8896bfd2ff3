"""Domain services."""

from .directory import IdentityDirectory
from .jwt_service import JWTService
from .linking_service import AccountLinkingService
from .merge import merge_metadata, merge_records
from .session_projector import SessionProjector

__all__ = [
    "AccountLinkingService",
    "IdentityDirectory",
    "JWTService",
    "SessionProjector",
    "merge_metadata",
    "merge_records",
]
