"""Metadata value objects.

User and app metadata are arbitrary JSON-like documents. They are modelled
as a recursive tagged variant so that code walking them (the merge engine in
particular) branches on ``kind`` instead of probing runtime types:

- ``ScalarValue``: string, number, boolean or null
- ``SequenceValue``: ordered items
- ``MappingValue``: string-keyed entries (a metadata document is a mapping)
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import Field

from linkage.domain.base import ValueObject

JsonScalar = str | bool | int | float | None


class ScalarValue(ValueObject):
    """Leaf metadata value."""

    kind: Literal["scalar"] = "scalar"
    value: JsonScalar = None

    def to_json(self) -> JsonScalar:
        return self.value


class SequenceValue(ValueObject):
    """Ordered list of metadata values."""

    kind: Literal["sequence"] = "sequence"
    items: tuple["MetadataValue", ...] = ()

    def to_json(self) -> list[Any]:
        return [item.to_json() for item in self.items]


class MappingValue(ValueObject):
    """String-keyed metadata mapping.

    Entry order is preserved and carried through to ``to_json``.
    """

    kind: Literal["mapping"] = "mapping"
    entries: dict[str, "MetadataValue"] = Field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        return {key: value.to_json() for key, value in self.entries.items()}

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def get(self, key: str) -> "MetadataValue | None":
        """Get the value stored under ``key``, if any."""
        return self.entries.get(key)


MetadataValue = Annotated[
    Union[ScalarValue, SequenceValue, MappingValue], Field(discriminator="kind")
]

SequenceValue.model_rebuild()
MappingValue.model_rebuild()


def metadata_from_json(data: Any) -> ScalarValue | SequenceValue | MappingValue:
    """Convert plain JSON-like data into a metadata value.

    Args:
        data: Decoded JSON (dict, list/tuple, str, int, float, bool or None)

    Returns:
        Equivalent tagged metadata value

    Raises:
        pydantic.ValidationError: If a leaf is not a JSON scalar
    """
    if isinstance(data, Mapping):
        return MappingValue(
            entries={str(key): metadata_from_json(value) for key, value in data.items()}
        )
    if isinstance(data, (list, tuple)):
        return SequenceValue(items=tuple(metadata_from_json(item) for item in data))
    return ScalarValue(value=data)


def document_from_json(data: Mapping[str, Any] | None) -> MappingValue:
    """Convert a metadata document, treating a missing document as empty.

    Args:
        data: Decoded JSON object or None

    Returns:
        Metadata document
    """
    if data is None:
        return MappingValue()
    if not isinstance(data, Mapping):
        raise ValueError("Metadata document must be a JSON object")
    return MappingValue(
        entries={str(key): metadata_from_json(value) for key, value in data.items()}
    )
