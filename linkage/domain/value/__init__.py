"""Domain value objects for account linking."""

from linkage.domain.value.identifiers import SessionId, UserId
from linkage.domain.value.metadata import (
    MappingValue,
    MetadataValue,
    ScalarValue,
    SequenceValue,
    document_from_json,
    metadata_from_json,
)
from linkage.domain.value.types import IdentityRef, LinkState

__all__ = [
    # Identifiers
    "SessionId",
    "UserId",
    # Metadata
    "MappingValue",
    "MetadataValue",
    "ScalarValue",
    "SequenceValue",
    "document_from_json",
    "metadata_from_json",
    # Types
    "IdentityRef",
    "LinkState",
]
