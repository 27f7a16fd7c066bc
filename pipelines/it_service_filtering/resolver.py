"""
IT-Service Resolution Orchestrator.

Responsibilities:
- Normalize criteria once, without touching the caller's object.
- Short-circuit requests that need no retrieval.
- Coordinate candidate selection, pattern expansion and matching.
- Apply the identifier allow-list last.

Non-Responsibilities:
- No database access of its own.
- No retries; retrieval failures propagate as RetrievalError.

Invariant:
This module must be deterministic given the same inputs and a
deterministic candidate fetcher, and must never return None.
"""

from typing import Optional, Set
from uuid import UUID

from itservices.logger import StructuredLogger, get_library_logger
from itservices.models import SearchCriteria

from .candidate_selector import CandidateFetcher, RetrievalError
from .classifier import has_exactly_one_non_empty_criterion, only_identifiers_present
from .matcher import matches_any
from .pattern_expander import expand


def resolve(
    criteria: Optional[SearchCriteria],
    fetch_candidates: CandidateFetcher,
    logger: Optional[StructuredLogger] = None,
) -> Set[UUID]:
    """
    Resolve the IT-service identifiers satisfying ``criteria``.

    Args:
        criteria: Requested filters, or None for "nothing"
        fetch_candidates: Callable returning candidate services for the criteria
        logger: Logger to report to (default: the configured global logger, else a silent one)

    Returns:
        Set of matching identifiers, empty when nothing matches

    Raises:
        RetrievalError: If the candidate fetcher fails
    """
    logger = logger or get_library_logger()
    normalized = SearchCriteria.coerce(criteria)

    if criteria is None or only_identifiers_present(normalized):
        result = set(normalized.ids)
        logger.debug("Resolved without retrieval", ids=len(result))
        logger.record_resolution("short_circuit", len(result))
        return result

    try:
        candidates = list(fetch_candidates(normalized))
    except RetrievalError as e:
        logger.error(f"Candidate retrieval failed: {e}", filters=normalized.non_empty_fields())
        logger.record_fetch_failure(type(e.__cause__ or e).__name__)
        raise
    logger.record_fetch(len(candidates))

    if has_exactly_one_non_empty_criterion(normalized):
        result = {c.id for c in candidates if c.id is not None}
        logger.debug(
            "Resolved from a single filter",
            filter=normalized.non_empty_fields()[0],
            candidates=len(candidates),
            ids=len(result),
        )
        logger.record_resolution("single_criterion", len(result))
        return result

    patterns = expand(normalized)
    logger.record_patterns(len(patterns))

    matched = [c for c in candidates if matches_any(c, patterns)]
    ids = [c.id for c in matched if c.id is not None]
    if normalized.ids:
        ids = [i for i in ids if i in normalized.ids]
    result = set(ids)

    logger.debug(
        "Resolved by pattern matching",
        filters=normalized.non_empty_fields(),
        patterns=len(patterns),
        candidates=len(candidates),
        matched=len(matched),
        ids=len(result),
    )
    logger.record_resolution("pattern_match", len(result))
    return result
