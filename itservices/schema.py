from typing import Any, Dict, List, Optional
from uuid import UUID

from .models import CRITERIA_FIELDS, ItService, SearchCriteria

SERVICE_REQUIRED_FIELDS = ["id"]
SERVICE_OPTIONAL_FIELDS = ["manager", "subdivision"]


def _is_uuid(v: Any) -> bool:
    if isinstance(v, UUID):
        return True
    if not isinstance(v, str):
        return False
    try:
        UUID(v.strip())
        return True
    except ValueError:
        return False


def _to_uuid(v: Any) -> Optional[UUID]:
    if v is None or isinstance(v, UUID):
        return v
    return UUID(v.strip())


def validate_criteria(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Each filter may be missing, null, or a list of UUID strings.
    """
    if not isinstance(data, dict):
        return ["Criteria must be a JSON object"]

    errors: List[str] = []

    for key in data:
        if key not in CRITERIA_FIELDS:
            errors.append(f"Unknown criteria field: {key}")

    for f in CRITERIA_FIELDS:
        values = data.get(f)
        if values is None:
            continue
        if not isinstance(values, (list, tuple, set, frozenset)):
            errors.append(f"Field '{f}' must be a list of UUIDs")
            continue
        for v in values:
            if not _is_uuid(v):
                errors.append(f"Field '{f}' contains an invalid UUID: {v!r}")

    return errors


def parse_criteria(data: Dict[str, Any]) -> SearchCriteria:
    errors = validate_criteria(data)
    if errors:
        raise ValueError("; ".join(errors))
    return SearchCriteria(
        **{f: {_to_uuid(v) for v in (data.get(f) or [])} for f in CRITERIA_FIELDS}
    )


def validate_service(data: Dict[str, Any]) -> List[str]:
    """Validate a stored IT service record (id required, attributes optional)."""
    if not isinstance(data, dict):
        return ["Service must be a JSON object"]

    errors: List[str] = []

    for f in SERVICE_REQUIRED_FIELDS:
        if data.get(f) is None:
            errors.append(f"Missing required field: {f}")
        elif not _is_uuid(data[f]):
            errors.append(f"Field '{f}' must be a UUID")

    for f in SERVICE_OPTIONAL_FIELDS:
        if data.get(f) is not None and not _is_uuid(data[f]):
            errors.append(f"Field '{f}' must be a UUID if provided")

    return errors


def parse_service(data: Dict[str, Any]) -> ItService:
    errors = validate_service(data)
    if errors:
        raise ValueError("; ".join(errors))
    return ItService(
        id=_to_uuid(data["id"]),
        manager=_to_uuid(data.get("manager")),
        subdivision=_to_uuid(data.get("subdivision")),
    )
