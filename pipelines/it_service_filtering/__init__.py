from .candidate_selector import (
    CandidateFetcher,
    CartesianCandidateSelector,
    RepositoryCandidateSelector,
    RetrievalError,
)
from .classifier import (
    count_non_empty_criteria,
    has_exactly_one_non_empty_criterion,
    only_identifiers_present,
)
from .matcher import MATCH_ATTRIBUTES, matches, matches_any
from .pattern_expander import expand, expand_with_ids
from .resolver import resolve

__all__ = [
    "CandidateFetcher",
    "CartesianCandidateSelector",
    "RepositoryCandidateSelector",
    "RetrievalError",
    "count_non_empty_criteria",
    "has_exactly_one_non_empty_criterion",
    "only_identifiers_present",
    "MATCH_ATTRIBUTES",
    "matches",
    "matches_any",
    "expand",
    "expand_with_ids",
    "resolve",
]
