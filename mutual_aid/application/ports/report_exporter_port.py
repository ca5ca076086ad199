from __future__ import annotations
from pathlib import Path
from typing import Protocol, Sequence
from mutual_aid.domain.relief_request import ReliefRequest


class ReportExporterPort(Protocol):
    def export(self, requests: Sequence[ReliefRequest]) -> Path:
        """Persist an export of the requests and return its path."""
        ...
