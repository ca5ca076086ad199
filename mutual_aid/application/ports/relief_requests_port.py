from __future__ import annotations
from typing import Any, Mapping, Protocol, Sequence
from mutual_aid.domain.relief_request import RequestDraft, RequestStatus


class ReliefRequestsPort(Protocol):
    """Remote source of relief requests; returns raw records in either naming convention."""

    def list_requests(self) -> Sequence[Mapping[str, Any]]:
        ...

    def create_request(self, draft: RequestDraft) -> Mapping[str, Any]:
        ...

    def update_status(self, request_id: str, status: RequestStatus) -> Mapping[str, Any]:
        ...
