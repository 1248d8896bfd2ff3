"""Immutable pydantic bases shared by domain values and records."""

from pydantic import BaseModel, ConfigDict

_FROZEN = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class ValueObject(BaseModel):
    """Value compared field by field, e.g. an identity or a metadata node."""

    model_config = _FROZEN


class DomainModel(BaseModel):
    """Domain record.

    Records read from the directory are snapshots; changes go through
    ``model_copy(update=...)`` and are written back explicitly.
    """

    model_config = _FROZEN
