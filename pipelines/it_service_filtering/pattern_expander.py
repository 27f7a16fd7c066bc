"""
Match Pattern Expansion.

Responsibilities:
- Turn attribute-value sets into the cartesian family of match patterns.

Non-Responsibilities:
- No matching against candidates.
- No identifier allow-list logic.

Invariant:
An empty filter set leaves its attribute as a wildcard; it never
eliminates the patterns built so far.
"""

from typing import FrozenSet, Iterable, Sequence, Tuple

from itservices.models import ItService, SearchCriteria

# (criteria field, service attribute), applied in this order
ATTRIBUTE_FILTERS: Tuple[Tuple[str, str], ...] = (
    ("managers", "manager"),
    ("subdivisions", "subdivision"),
)
ID_FILTER: Tuple[str, str] = ("ids", "id")


def emit_with_values(
    patterns: Iterable[ItService],
    attribute: str,
    values: FrozenSet,
) -> list:
    """Replace each pattern by one copy per value, or keep it if values is empty."""
    if not values:
        return list(patterns)
    return [p.with_attribute(attribute, v) for p in patterns for v in values]


def _expand(criteria: SearchCriteria, filters: Sequence[Tuple[str, str]]) -> FrozenSet[ItService]:
    patterns = [ItService()]
    for field_name, attribute in filters:
        patterns = emit_with_values(patterns, attribute, getattr(criteria, field_name))
    return frozenset(patterns)


def expand(criteria: SearchCriteria) -> FrozenSet[ItService]:
    """Patterns over managers and subdivisions; ids are applied later as an allow-list."""
    return _expand(criteria, ATTRIBUTE_FILTERS)


def expand_with_ids(criteria: SearchCriteria) -> FrozenSet[ItService]:
    """Same expansion with ids as the leading dimension, for candidate generation."""
    return _expand(criteria, (ID_FILTER,) + ATTRIBUTE_FILTERS)
