from datetime import datetime
from io import BytesIO
from pathlib import Path
import pytest
from openpyxl import load_workbook
from mutual_aid.domain.relief_request import ReliefRequest, RequestStatus, RequestType
from mutual_aid.infrastructure.csv_export import CSV_HEADERS
from mutual_aid.infrastructure.excel import build_excel
from mutual_aid.infrastructure.report_exporters import CsvReportExporter, ExcelReportExporter
from mutual_aid.shared.errors import EmptyExportError


def _requests() -> list[ReliefRequest]:
    return [
        ReliefRequest(
            id="r-2",
            type=RequestType.SUPPLY,
            status=RequestStatus.IN_PROGRESS,
            contact_person="林太太",
            contact_phone=None,
            address="光復車站",
            description="飲用水",
            created_at=datetime(2025, 10, 1, 15, 0, 0),
        ),
        ReliefRequest(id="r-1", type=RequestType.VOLUNTEER, status=RequestStatus.NEW),
    ]

def test_build_excel_keeps_columns_and_order() -> None:
    data = build_excel(_requests())

    wb = load_workbook(BytesIO(data))
    ws = wb.active
    rows = list(ws.iter_rows(values_only=True))

    assert list(rows[0]) == CSV_HEADERS
    assert rows[1][:3] == ("r-2", "物資需求", "處理中")
    assert rows[1][7] == "2025/10/1 下午3:00:00"
    assert rows[2][0] == "r-1"
    assert ws.title == "需求列表"

def test_build_excel_empty_raises() -> None:
    with pytest.raises(EmptyExportError):
        build_excel([])

def test_excel_exporter_writes_xlsx(tmp_path: Path) -> None:
    path = ExcelReportExporter(tmp_path, "互助網").export(_requests())

    assert path.suffix == ".xlsx"
    assert path.name.startswith("互助網_需求列表_")
    assert path.is_file()

def test_csv_exporter_writes_csv(tmp_path: Path) -> None:
    path = CsvReportExporter(tmp_path, "互助網").export(_requests())

    assert path.name.startswith("互助網_需求列表_")
    assert path.suffix == ".csv"
    assert path.read_text(encoding="utf-8-sig").startswith("ID,")
