from __future__ import annotations
import logging
import time
from typing import Any, Dict, List
from urllib.parse import quote
import requests
from requests import HTTPError, RequestException
from mutual_aid.config import ReliefAPIConfig
from mutual_aid.domain.relief_request import RequestDraft, RequestStatus


logger = logging.getLogger(__name__)

class ReliefAPIError(RuntimeError):
    """Raised when the relief API call fails, or its response cannot be parsed."""

class ReliefAPIClient:
    """HTTP client for the relief requests API.
        Returns raw JSON records; mapping them into ReliefRequest objects is
        left to the normalizer so both field naming conventions are handled
        in one place.
        """

    def __init__(
        self,
        config: ReliefAPIConfig,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
    ) -> None:
        self._config = config
        self._session = requests.Session()
        self._max_retries = max_retries
        self._backoff_factor = backoff_factor

    def _url(self, path: str) -> str:
        return f"{self._config.base_url}{path}"

    def list_requests(self) -> List[Dict[str, Any]]:
        """GET /api/requests, retried with exponential backoff on HTTP/network errors."""

        url = self._url("/api/requests")
        response: requests.Response | None = None
        last_exc: Exception | None = None

        for attempt in range(1, self._max_retries + 1):
            try:
                response = self._session.get(url, timeout=self._config.timeout_seconds)
                response.raise_for_status()
                break
            except (HTTPError, RequestException) as exc:
                last_exc = exc
                if attempt == self._max_retries:
                    msg = (
                        f"Error calling relief API after {self._max_retries} "
                        f"attempts: {exc}"
                    )
                    logger.error(msg)
                    raise ReliefAPIError(msg) from exc

                sleep_seconds = self._backoff_factor * (2 ** (attempt - 1))
                logger.warning(
                    "Relief API list call failed on attempt %d/%d: %s; "
                    "retrying in %.1f seconds",
                    attempt,
                    self._max_retries,
                    exc,
                    sleep_seconds,
                )
                time.sleep(sleep_seconds)

        if response is None:
            msg = "Relief API list call failed without a response object"
            logger.error(msg)
            if last_exc is not None:
                raise ReliefAPIError(msg) from last_exc
            raise ReliefAPIError(msg)

        data = self._parse_json(response)
        if not isinstance(data, list):
            msg = f"Unexpected response format from relief API: {type(data).__name__}"
            logger.error(msg)
            raise ReliefAPIError(msg)

        logger.info("Fetched %d relief requests", len(data))
        return data

    def create_request(self, draft: RequestDraft) -> Dict[str, Any]:
        """POST /api/requests. Not retried: a repeated POST could register the request twice."""

        return self._send_once("POST", self._url("/api/requests"), draft.to_payload())

    def update_status(self, request_id: str, status: RequestStatus) -> Dict[str, Any]:
        url = self._url(f"/api/requests/{quote(str(request_id), safe='')}/status")
        status_value = status.value if isinstance(status, RequestStatus) else status
        return self._send_once("PATCH", url, {"status": status_value})

    def _send_once(self, method: str, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._session.request(
                method,
                url,
                json=payload,
                timeout=self._config.timeout_seconds,
            )
            response.raise_for_status()
        except (HTTPError, RequestException) as exc:
            msg = f"Error calling relief API {method} {url}: {exc}"
            logger.error(msg)
            raise ReliefAPIError(msg) from exc

        data = self._parse_json(response)
        if not isinstance(data, dict):
            msg = f"Expected a single request object from relief API, got {type(data).__name__}"
            logger.error(msg)
            raise ReliefAPIError(msg)
        return data

    def _parse_json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            msg = "Failed to parse relief API response as JSON"
            logger.error(msg)
            raise ReliefAPIError(msg) from exc
