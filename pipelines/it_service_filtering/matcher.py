"""
Partial Attribute Matching.

Responsibilities:
- Decide whether a candidate satisfies a pattern.

Non-Responsibilities:
- No pattern construction.
- No identifier filtering.

Invariant:
Only the pattern's unset attributes are wildcards. Candidate attributes are
always compared, including when they are None.
"""

from typing import Iterable

from itservices.models import ItService

MATCH_ATTRIBUTES = ("manager", "subdivision")


def matches(candidate: ItService, pattern: ItService) -> bool:
    for attribute in MATCH_ATTRIBUTES:
        expected = getattr(pattern, attribute)
        if expected is not None and getattr(candidate, attribute) != expected:
            return False
    return True


def matches_any(candidate: ItService, patterns: Iterable[ItService]) -> bool:
    return any(matches(candidate, p) for p in patterns)
