"""
Criteria Classification.

Responsibilities:
- Report which filter sets of a criteria value are non-empty.

Non-Responsibilities:
- No retrieval.
- No matching.

Invariant:
Absent and empty filter sets are indistinguishable here.
"""

from itservices.models import CRITERIA_FIELDS, SearchCriteria


def only_identifiers_present(criteria: SearchCriteria) -> bool:
    return not criteria.managers and not criteria.subdivisions


def count_non_empty_criteria(criteria: SearchCriteria) -> int:
    return sum(1 for name in CRITERIA_FIELDS if getattr(criteria, name))


def has_exactly_one_non_empty_criterion(criteria: SearchCriteria) -> bool:
    return count_non_empty_criteria(criteria) == 1
