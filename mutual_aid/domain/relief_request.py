from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class RequestType(str, Enum):
    VOLUNTEER = "志工人力"
    SUPPLY = "物資需求"

class RequestStatus(str, Enum):
    NEW = "待處理"
    IN_PROGRESS = "處理中"
    COMPLETED = "已完成"


@dataclass(slots=True)
class ReliefRequest:
    id: str
    type: RequestType | str
    status: RequestStatus | str
    contact_person: str | None = None
    contact_phone: str | None = None
    address: str | None = None
    description: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class RequestDraft:
    """Caller-supplied fields of a new request.
        id, status and created_at are assigned by the server and cannot be set here.
        """

    type: RequestType
    contact_person: str
    contact_phone: str
    address: str
    description: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "type": _wire_value(self.type),
            "contactPerson": self.contact_person,
            "contactPhone": self.contact_phone,
            "address": self.address,
            "description": self.description,
        }

def _wire_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value
