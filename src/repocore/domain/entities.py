"""Entities and the data-layer models that produce them.

Entities are frozen pydantic models: immutable, compared by the values of
their declared fields. Models are whatever the remote side speaks; the
orchestrator only needs them to satisfy :class:`EntityModel`.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, Self, runtime_checkable

from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Base for domain objects. Equality is over the declared fields."""

    model_config = ConfigDict(frozen=True)


@runtime_checkable
class EntityModel[E](Protocol):
    """Contract for a wire-level model that maps to exactly one entity."""

    def to_entity(self) -> E:
        """Convert this model into its domain entity."""
        ...  # pragma: no cover

    def to_wire(self) -> dict[str, Any]:
        """Serialize this model into its wire (JSON-compatible) shape."""
        ...  # pragma: no cover


class WireModel(BaseModel):
    """Convenience base for JSON-shaped models.

    Subclasses declare their wire fields and implement ``to_entity``; a
    subclass without it cannot be instantiated. ``to_wire`` and ``from_wire``
    come from pydantic serialization.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @abstractmethod
    def to_entity(self) -> Any:
        """Convert this model into its domain entity."""

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_wire(cls, payload: dict[str, Any]) -> Self:
        return cls.model_validate(payload)
