"""
Candidate Selection Logic.

Responsibilities:
- Supply IT services that plausibly satisfy the attribute filters.
- Report retrieval problems as RetrievalError.

Non-Responsibilities:
- No pattern matching.
- No identifier allow-list logic.

Invariant:
Candidate selection must never exclude a valid match.
It may include false positives but never false negatives.
"""

import uuid
from pathlib import Path
from typing import Callable, List, Optional

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from itservices.database import get_session
from itservices.logger import StructuredLogger, get_library_logger
from itservices.models import ItService, SearchCriteria
from itservices.retry import RetryError, exponential_backoff
from storage.repositories.it_services import ItServiceRepository

from .pattern_expander import expand_with_ids

CandidateFetcher = Callable[[SearchCriteria], List[ItService]]


class RetrievalError(Exception):
    """Raised when candidates could not be fetched from the backing store."""
    pass


class CartesianCandidateSelector:
    """
    In-memory stand-in for a real store.

    Materializes one service per combination of ids x managers x subdivisions,
    treating an empty set as a single wildcard slot. Services left without an
    id get a fresh one from ``id_factory``.
    """

    def __init__(self, id_factory: Callable[[], uuid.UUID] = uuid.uuid4):
        self.id_factory = id_factory

    def __call__(self, criteria: SearchCriteria) -> List[ItService]:
        criteria = SearchCriteria.coerce(criteria)
        return [
            s if s.id is not None else s.with_id(self.id_factory())
            for s in expand_with_ids(criteria)
        ]


class RepositoryCandidateSelector:
    """Fetch candidates from the SQLAlchemy store, retrying transient errors."""

    def __init__(
        self,
        session_factory: Callable,
        max_retries: int = 3,
        base_delay: float = 0.5,
        logger: Optional[StructuredLogger] = None,
    ):
        self.session_factory = session_factory
        self.max_retries = max_retries
        self.base_delay = base_delay
        self._logger = logger

    @classmethod
    def for_database(cls, db_path: Path, **kwargs) -> "RepositoryCandidateSelector":
        return cls(lambda: get_session(db_path), **kwargs)

    @property
    def logger(self) -> StructuredLogger:
        return self._logger or get_library_logger()

    def _query(self, criteria: SearchCriteria) -> List[ItService]:
        session = self.session_factory()
        try:
            repo = ItServiceRepository(session)
            # ids are an allow-list applied by the resolver, not a lookup key
            return repo.find_matching(criteria.managers, criteria.subdivisions)
        finally:
            session.close()

    def _on_retry(self, attempt: int, error: Exception, delay: float):
        self.logger.warning(
            "Candidate fetch failed, retrying",
            attempt=attempt,
            delay=delay,
            error=str(error),
        )

    def __call__(self, criteria: SearchCriteria) -> List[ItService]:
        criteria = SearchCriteria.coerce(criteria)
        query = exponential_backoff(
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            exceptions=(OperationalError,),
            on_retry=self._on_retry,
        )(self._query)
        try:
            return query(criteria)
        except (RetryError, SQLAlchemyError) as e:
            raise RetrievalError(f"Candidate retrieval failed: {e}") from e
