from __future__ import annotations
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence
from mutual_aid.application.ports.report_exporter_port import ReportExporterPort
from mutual_aid.domain.relief_request import ReliefRequest
from mutual_aid.infrastructure.excel import build_excel
from mutual_aid.infrastructure.save_csv import save_csv
from mutual_aid.shared.errors import ReportGenerationError


logger = logging.getLogger(__name__)

class CsvReportExporter(ReportExporterPort):
    def __init__(self, output_dir: str | Path, platform_name: str) -> None:
        self._output_dir = Path(output_dir)
        self._platform_name = platform_name

    def export(self, requests: Sequence[ReliefRequest]) -> Path:
        return save_csv(requests, self._output_dir, self._platform_name)

class ExcelReportExporter(ReportExporterPort):
    def __init__(self, output_dir: str | Path, platform_name: str) -> None:
        self._output_dir = Path(output_dir)
        self._platform_name = platform_name

    def export(self, requests: Sequence[ReliefRequest]) -> Path:
        excel_bytes = build_excel(requests)

        stamp = datetime.now(timezone.utc).strftime("%Y%m%d")
        path = self._output_dir / f"{self._platform_name}_需求列表_{stamp}.xlsx"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(excel_bytes)
        except OSError as exc:
            logger.error("Could not write Excel export to %s: %s", path, exc)
            raise ReportGenerationError(f"Failed to write Excel export to {path}") from exc

        logger.info("Excel export generated at %s", path.resolve())
        return path.resolve()
