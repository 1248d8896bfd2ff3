"""Metadata merge.

Reconciles the primary user's metadata with a secondary user's before the
secondary is linked in. Rules, applied key by key and recursively:

- key only in secondary: secondary's value
- both sequences: secondary's items followed by primary's items
- both mappings: merged recursively
- anything else (scalars, or different kinds): primary's value

Inputs are never modified.
"""

from linkage.domain.model import MergeResult, UserRecord
from linkage.domain.value import MappingValue, MetadataValue, SequenceValue


def merge_metadata(primary: MappingValue, secondary: MappingValue) -> MappingValue:
    """Merge two metadata documents, primary taking precedence.

    Args:
        primary: Document of the surviving user
        secondary: Document of the user being absorbed

    Returns:
        New merged document. Primary's keys come first in primary order,
        followed by secondary-only keys in secondary order.
    """
    entries: dict[str, MetadataValue] = {}

    for key, value in primary.entries.items():
        other = secondary.get(key)
        entries[key] = value if other is None else _merge_value(value, other)

    for key, value in secondary.entries.items():
        if key not in primary:
            entries[key] = value

    return MappingValue(entries=entries)


def _merge_value(primary: MetadataValue, secondary: MetadataValue) -> MetadataValue:
    if primary.kind != secondary.kind:
        return primary

    if primary.kind == "sequence":
        # Secondary first; primary entries display last
        return SequenceValue(items=secondary.items + primary.items)

    if primary.kind == "mapping":
        return merge_metadata(primary, secondary)

    return primary


def merge_records(primary: UserRecord, secondary: UserRecord) -> MergeResult:
    """Merge both metadata documents of two users.

    Args:
        primary: Surviving user
        secondary: User being absorbed

    Returns:
        Merged user and app metadata
    """
    return MergeResult(
        merged_user_metadata=merge_metadata(
            primary.user_metadata, secondary.user_metadata
        ),
        merged_app_metadata=merge_metadata(
            primary.app_metadata, secondary.app_metadata
        ),
    )
