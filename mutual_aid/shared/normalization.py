from __future__ import annotations
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping, TypeVar
from mutual_aid.domain.relief_request import ReliefRequest, RequestStatus, RequestType


logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

def _safe_str(value: Any) -> str | None:
    """Return value as string, or None if the value itself is None."""

    if value is None:
        return None
    return str(value)

def _first_present(raw: Mapping[str, Any], camel_key: str, snake_key: str) -> Any:
    # camel-case wins unless missing or null
    value = raw.get(camel_key)
    if value is None:
        value = raw.get(snake_key)
    return value

def coerce_enum(enum_cls: type[E], value: Any) -> E | Any:
    """Map a wire value (member value or member name) onto enum_cls.
        Unknown values are returned unchanged.
        """

    if value is None or isinstance(value, enum_cls):
        return value

    try:
        return enum_cls(value)
    except ValueError:
        pass

    if isinstance(value, str) and value in enum_cls.__members__:
        return enum_cls.__members__[value]

    logger.warning("Unknown %s value %r; keeping raw value", enum_cls.__name__, value)
    return value

def parse_created_at(value: Any) -> datetime | None:
    """Convert a createdAt wire value (ISO string or epoch) into a datetime.
        Returns None for missing or unparseable values.
        """

    if value is None:
        return None

    if isinstance(value, datetime):
        return value

    # epoch numbers are milliseconds; bool is an int subclass but never a timestamp
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            logger.warning("Invalid epoch createdAt %r: %s", value, exc)
            return None

    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            logger.warning("Invalid createdAt string %r", value)
            return None

    logger.warning("Unsupported createdAt type %s", type(value).__name__)
    return None

def normalize_request(raw: Mapping[str, Any]) -> ReliefRequest:
    """Build the canonical ReliefRequest from a raw API record.
        Accepts both camel-case and snake-case keys for the contact and
        timestamp fields; camel-case takes precedence.
        """

    return ReliefRequest(
        id=_safe_str(raw.get("id")),                                                               # type: ignore[arg-type]
        type=coerce_enum(RequestType, raw.get("type")),
        status=coerce_enum(RequestStatus, raw.get("status")),
        contact_person=_safe_str(_first_present(raw, "contactPerson", "contact_person")),
        contact_phone=_safe_str(_first_present(raw, "contactPhone", "contact_phone")),
        address=_safe_str(raw.get("address")),
        description=_safe_str(raw.get("description")),
        created_at=parse_created_at(_first_present(raw, "createdAt", "created_at")),
    )

def normalize_requests(items: Iterable[Any]) -> list[ReliefRequest]:
    normalized: list[ReliefRequest] = []
    for item in items:
        if not isinstance(item, Mapping):
            logger.warning("Skipping non-object item in response: %r", item)
            continue
        normalized.append(normalize_request(item))
    return normalized
