"""
Value types shared by the filtering pipeline, the store and the CLI.

Identifiers are plain ``uuid.UUID`` values. Criteria and services are frozen
dataclasses so they can be hashed and deduplicated in sets.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Optional
from uuid import UUID

Identifier = UUID

CRITERIA_FIELDS = ("ids", "managers", "subdivisions")


def _as_frozenset(values: Optional[Iterable[UUID]]) -> FrozenSet[UUID]:
    if values is None:
        return frozenset()
    if isinstance(values, (str, bytes, Mapping)):
        raise TypeError(
            f"Criteria values must be a collection of identifiers, got {type(values).__name__}"
        )
    return frozenset(values)


@dataclass(frozen=True)
class SearchCriteria:
    """Sets of acceptable values per searchable attribute."""

    ids: FrozenSet[UUID] = field(default_factory=frozenset)
    managers: FrozenSet[UUID] = field(default_factory=frozenset)
    subdivisions: FrozenSet[UUID] = field(default_factory=frozenset)

    def __post_init__(self):
        # Accept None and arbitrary iterables, store frozensets.
        for name in CRITERIA_FIELDS:
            object.__setattr__(self, name, _as_frozenset(getattr(self, name)))

    @classmethod
    def coerce(cls, value) -> "SearchCriteria":
        """
        Build a normalized criteria value from whatever the caller handed in.

        Accepts ``None``, an existing ``SearchCriteria`` or any object exposing
        ``ids``/``managers``/``subdivisions`` attributes (missing attributes and
        ``None`` values become empty sets). The input is never modified.

        Raises:
            TypeError: If given a mapping, or a field holding a string or mapping
        """
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            raise TypeError("Mappings are not criteria objects; use schema.parse_criteria")
        return cls(**{name: getattr(value, name, None) for name in CRITERIA_FIELDS})

    def non_empty_fields(self) -> tuple:
        return tuple(name for name in CRITERIA_FIELDS if getattr(self, name))


@dataclass(frozen=True)
class ItService:
    """
    An IT service as returned by a candidate store.

    The same shape doubles as a match pattern: a field left as ``None`` on a
    pattern accepts any value.
    """

    id: Optional[UUID] = None
    manager: Optional[UUID] = None
    subdivision: Optional[UUID] = None

    def with_attribute(self, name: str, value: Optional[UUID]) -> "ItService":
        return replace(self, **{name: value})

    def with_id(self, value: UUID) -> "ItService":
        return replace(self, id=value)
