"""Base model for all domain entities."""

from datetime import datetime, timezone
from typing import Any, Self

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Base class for all domain models.

    Domain models are immutable; changes go through ``evolve``.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )

    def evolve(self, **changes: Any) -> Self:
        """Return a validated copy with ``changes`` applied.

        Unlike ``model_copy(update=...)`` the field constraints are checked,
        so an oversized value raises pydantic's ``ValidationError``.
        """
        return self.model_validate({**self.model_dump(), **changes})
