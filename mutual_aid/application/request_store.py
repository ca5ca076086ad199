from __future__ import annotations
import logging
from typing import Optional
from mutual_aid.application.ports.relief_requests_port import ReliefRequestsPort
from mutual_aid.domain.relief_request import ReliefRequest, RequestDraft, RequestStatus
from mutual_aid.infrastructure.relief_api_client import ReliefAPIError
from mutual_aid.shared.errors import RequestLoadError, RequestMutationError
from mutual_aid.shared.normalization import normalize_request, normalize_requests


logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "無法載入需求列表，請稍後再試。"

class RequestStore:
    """Ordered in-memory collection of canonical relief requests.

        Every mutation goes through the remote source first; the local
        collection only changes once that call has succeeded, and always with
        the server's normalized record. Concurrent calls are not coordinated:
        whichever response arrives last wins.
        """

    def __init__(self, client: ReliefRequestsPort) -> None:
        self._client = client
        self._requests: list[ReliefRequest] = []
        self.is_loading = False
        self.load_error: Optional[str] = None

    @property
    def requests(self) -> tuple[ReliefRequest, ...]:
        return tuple(self._requests)

    def get(self, request_id: str) -> Optional[ReliefRequest]:
        for req in self._requests:
            if req.id == request_id:
                return req
        return None

    def load_all(self) -> list[ReliefRequest]:
        """Replace the whole collection with the server's list, in server order.
            On failure the current collection is kept, load_error is set and
            RequestLoadError is raised.
            """

        self.is_loading = True
        self.load_error = None
        try:
            raw_items = self._client.list_requests()
            loaded = normalize_requests(raw_items)
        except ReliefAPIError as exc:
            logger.error("Failed to load relief requests: %s", exc)
            self.load_error = LOAD_ERROR_MESSAGE
            raise RequestLoadError(str(exc)) from exc
        finally:
            self.is_loading = False

        self._requests = loaded
        logger.info("Loaded %d relief requests", len(loaded))
        return list(loaded)

    def create(self, draft: RequestDraft) -> ReliefRequest:
        try:
            raw = self._client.create_request(draft)
        except ReliefAPIError as exc:
            logger.error("Failed to create relief request: %s", exc)
            raise RequestMutationError("Failed to create relief request") from exc

        created = normalize_request(raw)
        # a concurrent load_all may already hold this id; keep one record per id
        self._requests = [created, *(req for req in self._requests if req.id != created.id)]
        logger.info("Created relief request %s (%s)", created.id, created.type)
        return created

    def update_status(self, request_id: str, new_status: RequestStatus) -> ReliefRequest:
        """Set a new status on the server and replace the local record in place.
            Any status may replace any other; no transition order is enforced.
            """

        try:
            raw = self._client.update_status(request_id, new_status)
        except ReliefAPIError as exc:
            logger.error("Failed to update status of relief request %s: %s", request_id, exc)
            raise RequestMutationError(
                f"Failed to update status of relief request {request_id}"
            ) from exc

        updated = normalize_request(raw)

        replaced = False
        merged: list[ReliefRequest] = []
        for req in self._requests:
            if req.id == request_id:
                merged.append(updated)
                replaced = True
            else:
                merged.append(req)

        if not replaced:
            logger.warning(
                "Relief request %s updated on server but not present locally; collection unchanged",
                request_id,
            )
            return updated

        self._requests = merged
        logger.info("Relief request %s status set to %s", request_id, updated.status)
        return updated
