from __future__ import annotations
import logging
from datetime import date, datetime, timezone, tzinfo
from enum import Enum
from typing import Any, Sequence
from mutual_aid.domain.relief_request import ReliefRequest
from mutual_aid.shared.errors import EmptyExportError


logger = logging.getLogger(__name__)

CSV_MIME_TYPE = "text/csv;charset=utf-8"
BOM = "\ufeff"

# ID, Type, Status, Contact Person, Contact Phone, Address, Description, Created-At
CSV_HEADERS = ["ID", "類型", "狀態", "聯絡人", "聯絡電話", "地址", "需求說明", "建立時間"]

_CHARS_NEEDING_QUOTES = ('"', ",", "\n")

def escape_csv_value(value: Any) -> str:
    """Quote a field if it contains a double quote, comma or newline.
        Internal double quotes are doubled. None and empty values become "".
        """

    if value is None or value == "":
        return ""
    if isinstance(value, Enum):
        value = value.value

    text = str(value)
    if any(ch in text for ch in _CHARS_NEEDING_QUOTES):
        return '"' + text.replace('"', '""') + '"'
    return text

def format_created_at(value: datetime | None, tz: tzinfo | None = None) -> str:
    """Format a timestamp the way a zh-TW locale displays it, e.g. 2025/10/3 下午2:05:09.
        Aware values are converted to tz (system local time when tz is None).
        """

    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(tz)

    meridiem = "上午" if value.hour < 12 else "下午"
    hour = value.hour % 12 or 12
    return (
        f"{value.year}/{value.month}/{value.day} "
        f"{meridiem}{hour}:{value.minute:02d}:{value.second:02d}"
    )

def _row(req: ReliefRequest, tz: tzinfo | None) -> list[str]:
    return [
        escape_csv_value(req.id),
        escape_csv_value(req.type),
        escape_csv_value(req.status),
        escape_csv_value(req.contact_person),
        escape_csv_value(req.contact_phone),
        escape_csv_value(req.address),
        escape_csv_value(req.description),
        escape_csv_value(format_created_at(req.created_at, tz)),
    ]

def build_csv(requests: Sequence[ReliefRequest], tz: tzinfo | None = None) -> str:
    """Serialize requests into a BOM-prefixed CSV document, one row per request."""

    if not requests:
        logger.warning("CSV export requested with no relief requests")
        raise EmptyExportError("目前沒有任何需求可匯出。")

    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(_row(req, tz)) for req in requests)

    logger.info("Built CSV export with %d rows", len(requests))
    return BOM + "\n".join(lines)

def csv_filename(platform_name: str, today: date | None = None) -> str:
    if today is None:
        today = datetime.now(timezone.utc).date()
    return f"{platform_name}_需求列表_{today:%Y%m%d}.csv"
