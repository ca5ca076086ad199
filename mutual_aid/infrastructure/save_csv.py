from __future__ import annotations
import logging
from datetime import date
from pathlib import Path
from typing import Sequence
from mutual_aid.domain.relief_request import ReliefRequest
from mutual_aid.infrastructure.csv_export import build_csv, csv_filename
from mutual_aid.shared.errors import ReportGenerationError


logger = logging.getLogger(__name__)

def save_csv(
    requests: Sequence[ReliefRequest],
    output_dir: str | Path,
    platform_name: str,
    today: date | None = None,
) -> Path:
    """Write the CSV export as UTF-8 (with BOM) and return the file path.
        EmptyExportError from build_csv propagates untouched; nothing is written.
        """

    document = build_csv(requests)

    path = Path(output_dir) / csv_filename(platform_name, today)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(document.encode("utf-8"))
    except OSError as exc:
        logger.error("Could not write CSV export to %s: %s", path, exc)
        raise ReportGenerationError(f"Failed to write CSV export to {path}") from exc

    logger.info("CSV export generated at %s", path.resolve())
    return path.resolve()
