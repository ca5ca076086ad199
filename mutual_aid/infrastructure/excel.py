from __future__ import annotations
import logging
from datetime import tzinfo
from io import BytesIO
from typing import Any, Sequence
from openpyxl import Workbook
from openpyxl.styles import Font, Border, Side, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet
from mutual_aid.domain.relief_request import ReliefRequest
from mutual_aid.infrastructure.csv_export import CSV_HEADERS, format_created_at
from mutual_aid.shared.errors import EmptyExportError, ReportGenerationError


logger = logging.getLogger(__name__)

def _label(value: Any) -> str:
    if value is None:
        return ""
    return str(getattr(value, "value", value))

def build_excel(requests: Sequence[ReliefRequest], tz: tzinfo | None = None) -> bytes:
    # same columns and row order as the CSV export
    if not requests:
        logger.warning("Excel export requested with no relief requests")
        raise EmptyExportError("目前沒有任何需求可匯出。")

    try:
        wb = Workbook()

        ws_raw = wb.active
        if ws_raw is None or not isinstance(ws_raw, Worksheet):
            logger.error("Active sheet is not a Worksheet or is None: %r", ws_raw)
            raise ReportGenerationError("Failed to get active worksheet")
        ws: Worksheet = ws_raw

        ws.title = "需求列表"

        # styles
        header_font = Font(bold=True, size=12)
        header_fill = PatternFill(fill_type="solid", fgColor="C7D2FE")
        border_side = Side(border_style="thin", color="000000")
        default_border = Border(
            left=border_side,
            right=border_side,
            top=border_side,
            bottom=border_side,
        )

        ws.append(CSV_HEADERS)

        for req in requests:
            ws.append(
                [
                    _label(req.id),
                    _label(req.type),
                    _label(req.status),
                    req.contact_person or "",
                    req.contact_phone or "",
                    req.address or "",
                    req.description or "",
                    format_created_at(req.created_at, tz),
                ]
            )

        for row_idx, row in enumerate(
                ws.iter_rows(
                    min_row=1,
                    max_row=ws.max_row,
                    max_col=ws.max_column,
                ),
                start=1,
        ):
            for cell in row:
                cell.border = default_border
                if row_idx == 1:
                    cell.font = header_font
                    cell.fill = header_fill

        # auto-fit by setting column width from max content length
        for column_cells in ws.columns:
            col_index: Any = column_cells[0].column
            if not isinstance(col_index, int):
                logger.warning("Unexpected column index type: %r (%r)", col_index, type(col_index))
                continue

            max_length = max(
                (len(str(cell.value)) for cell in column_cells if cell.value is not None),
                default=0,
            )
            ws.column_dimensions[get_column_letter(col_index)].width = max_length + 2

        with BytesIO() as buffer:
            wb.save(buffer)
            return buffer.getvalue()

    except ReportGenerationError:
        raise
    except Exception as exc:
        logger.exception("Failed to build Excel export")
        raise ReportGenerationError("Failed to build Excel export") from exc
