from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
    )


class FrozenDomainModel(DomainModel):
    """Value that is never mutated once built; derive changes with ``model_copy``."""

    model_config = ConfigDict(frozen=True)
