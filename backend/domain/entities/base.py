"""
Entity base class.

Gives every aggregate an opaque identity, audit timestamps and the
optimistic-concurrency version the repositories check on write.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from utils.clock import utcnow


def generate_id() -> str:
    """
    Generate a new entity id.

    Returns:
        str: A new UUID4 string
    """
    return str(uuid.uuid4())


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not str(value).strip()


@dataclass(eq=False)
class Entity:
    """
    Base for objects with identity.

    Two entities are equal when they are the same type with the same id,
    regardless of their current attribute values.
    """

    id: str = field(default_factory=generate_id, kw_only=True)
    created_at: datetime = field(default_factory=utcnow, kw_only=True)
    updated_at: Optional[datetime] = field(default=None, kw_only=True)
    version: int = field(default=0, kw_only=True)

    def mark_as_updated(self, now: Optional[datetime] = None) -> None:
        """Stamp updated_at."""
        self.updated_at = now if now is not None else utcnow()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))
