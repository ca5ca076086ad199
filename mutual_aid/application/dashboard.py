from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from mutual_aid.application.ports.report_exporter_port import ReportExporterPort
from mutual_aid.application.request_filter import ALL, filter_requests
from mutual_aid.application.request_store import RequestStore
from mutual_aid.domain.relief_request import ReliefRequest, RequestDraft, RequestStatus, RequestType
from mutual_aid.application.errors import (
    EmptyExportError,
    ReportGenerationError,
    RequestLoadError,
    RequestMutationError,
)


logger = logging.getLogger(__name__)

CREATE_FAILED_NOTICE = "新增需求時發生錯誤，請重試。"
UPDATE_FAILED_NOTICE = "更新狀態時發生錯誤，請重試。"
EXPORT_FAILED_NOTICE = "匯出檔案時發生錯誤，請重試。"
NOTHING_TO_EXPORT_NOTICE = "目前沒有任何需求可匯出。"


@dataclass(frozen=True)
class RequestCard:
    request: ReliefRequest
    status_actions: tuple[RequestStatus, ...]

@dataclass(frozen=True)
class DashboardView:
    is_loading: bool
    error: Optional[str]
    cards: tuple[RequestCard, ...] = ()

    @property
    def can_retry(self) -> bool:
        return self.error is not None

@dataclass
class DashboardPresenter:
    """Read-only projection of the store plus the actions a dashboard offers.

        Failures from the store are turned into notices here so the caller
        stays interactive; nothing in this class mutates requests directly.
        """

    store: RequestStore
    exporter: ReportExporterPort
    type_filter: RequestType | str = ALL
    search_term: str = ""
    notices: list[str] = field(default_factory=list)

    def start(self) -> bool:
        return self.retry()

    def retry(self) -> bool:
        try:
            self.store.load_all()
        except RequestLoadError:
            return False
        return True

    def view(self) -> DashboardView:
        if self.store.is_loading or self.store.load_error is not None:
            return DashboardView(
                is_loading=self.store.is_loading,
                error=self.store.load_error,
            )

        visible = filter_requests(self.store.requests, self.type_filter, self.search_term)
        cards = tuple(
            RequestCard(
                request=req,
                status_actions=tuple(s for s in RequestStatus if s != req.status),
            )
            for req in visible
        )
        return DashboardView(is_loading=False, error=None, cards=cards)

    def submit(self, draft: RequestDraft) -> bool:
        try:
            self.store.create(draft)
        except RequestMutationError:
            self.notices.append(CREATE_FAILED_NOTICE)
            return False
        return True

    def change_status(self, request_id: str, status: RequestStatus) -> bool:
        try:
            self.store.update_status(request_id, status)
        except RequestMutationError:
            self.notices.append(UPDATE_FAILED_NOTICE)
            return False
        return True

    def export(self) -> Optional[Path]:
        # exports the whole collection, not only the visible subset
        try:
            return self.exporter.export(self.store.requests)
        except EmptyExportError:
            self.notices.append(NOTHING_TO_EXPORT_NOTICE)
        except ReportGenerationError as exc:
            logger.error("Export failed: %s", exc)
            self.notices.append(EXPORT_FAILED_NOTICE)
        return None

    def drain_notices(self) -> list[str]:
        notices, self.notices = self.notices, []
        return notices
