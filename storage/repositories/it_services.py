"""
IT Services Repository.

Responsibilities:
- CRUD operations for the it_services table.
- Attribute-set lookups used by candidate selection.

Non-Responsibilities:
- No pattern matching.
- No identifier allow-list logic.

Invariant:
Repositories must not encode domain decisions.
"""

from typing import Iterable, List, Optional
from uuid import UUID

from itservices.database import ItServiceRecord
from itservices.models import ItService


def _to_text(value: Optional[UUID]) -> Optional[str]:
    return str(value) if value is not None else None


def _to_uuid(value: Optional[str]) -> Optional[UUID]:
    return UUID(value) if value is not None else None


def to_service(record: ItServiceRecord) -> ItService:
    return ItService(
        id=_to_uuid(record.id),
        manager=_to_uuid(record.manager),
        subdivision=_to_uuid(record.subdivision),
    )


class ItServiceRepository:
    def __init__(self, session):
        self.session = session

    def get(self, service_id: UUID) -> Optional[ItService]:
        record = self.session.get(ItServiceRecord, str(service_id))
        return to_service(record) if record is not None else None

    def all(self) -> List[ItService]:
        records = self.session.query(ItServiceRecord).order_by(ItServiceRecord.id).all()
        return [to_service(r) for r in records]

    def upsert(self, service: ItService) -> str:
        """Insert or update a service. Returns "new", "updated" or "no-change"."""
        if service.id is None:
            raise ValueError("Cannot store an IT service without an id")

        record = self.session.get(ItServiceRecord, str(service.id))
        if record is None:
            self.session.add(
                ItServiceRecord(
                    id=str(service.id),
                    manager=_to_text(service.manager),
                    subdivision=_to_text(service.subdivision),
                )
            )
            return "new"

        manager = _to_text(service.manager)
        subdivision = _to_text(service.subdivision)
        if record.manager == manager and record.subdivision == subdivision:
            return "no-change"
        record.manager = manager
        record.subdivision = subdivision
        return "updated"

    def add_all(self, services: Iterable[ItService]) -> dict:
        """Upsert services in one transaction and return status counts."""
        counts = {"new": 0, "updated": 0, "no-change": 0}
        try:
            for service in services:
                counts[self.upsert(service)] += 1
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return counts

    def find_matching(
        self,
        managers: Iterable[UUID] = (),
        subdivisions: Iterable[UUID] = (),
    ) -> List[ItService]:
        """
        Return services whose manager/subdivision fall in the given sets.

        An empty set applies no restriction on that attribute.
        """
        query = self.session.query(ItServiceRecord)
        managers = [str(m) for m in managers]
        subdivisions = [str(s) for s in subdivisions]
        if managers:
            query = query.filter(ItServiceRecord.manager.in_(managers))
        if subdivisions:
            query = query.filter(ItServiceRecord.subdivision.in_(subdivisions))
        return [to_service(r) for r in query.all()]
