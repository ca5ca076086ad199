from __future__ import annotations
from typing import Iterable, Sequence
from mutual_aid.domain.relief_request import ReliefRequest, RequestType
from mutual_aid.shared.normalization import coerce_enum


ALL = "all"

# filter choices in display order
TYPE_FILTERS: tuple[str | RequestType, ...] = (ALL, RequestType.VOLUNTEER, RequestType.SUPPLY)

def _matches_type(req: ReliefRequest, type_filter: RequestType | str) -> bool:
    if type_filter == ALL:
        return True
    return req.type == type_filter

def _matches_search(req: ReliefRequest, needle: str) -> bool:
    if not needle:
        return True
    for field in (req.contact_person, req.address, req.description):
        if field and needle in field.lower():
            return True
    return False

def filter_requests(
    requests: Iterable[ReliefRequest],
    type_filter: RequestType | str = ALL,
    search_term: str = "",
) -> list[ReliefRequest]:
    """Return the visible subset of requests, in their original order.

        type_filter is ALL or a RequestType (member, label or name).
        search_term is matched case-insensitively as a substring of the
        contact person, address or description; an empty term matches
        everything. The input is never modified.
        """

    if type_filter != ALL:
        type_filter = coerce_enum(RequestType, type_filter)
    needle = (search_term or "").lower()

    return [
        req
        for req in requests
        if _matches_type(req, type_filter) and _matches_search(req, needle)
    ]

def count_by_type(requests: Sequence[ReliefRequest]) -> dict[RequestType, int]:
    counts = {request_type: 0 for request_type in RequestType}
    for req in requests:
        if isinstance(req.type, RequestType):
            counts[req.type] += 1
    return counts
