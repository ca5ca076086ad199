import argparse
import logging
from mutual_aid.application.dashboard import DashboardPresenter
from mutual_aid.application.request_filter import ALL, count_by_type
from mutual_aid.application.request_store import RequestStore
from mutual_aid.infrastructure.config_loader import load_relief_api_config, load_export_config
from mutual_aid.infrastructure.relief_api_client import ReliefAPIClient
from mutual_aid.infrastructure.report_exporters import CsvReportExporter, ExcelReportExporter


logger = logging.getLogger(__name__)

def logging_conf() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Load relief requests and optionally export them.")
    p.add_argument("--type", default=ALL, help="'all', a request type name (VOLUNTEER, SUPPLY) or its label")
    p.add_argument("--search", default="", help="case-insensitive text to find in contact, address or description")
    p.add_argument("--export", action="store_true", help="write the full list to a CSV file")
    p.add_argument("--excel", action="store_true", help="write the full list to an Excel file")
    return p.parse_args()

def main() -> None:
    logging_conf()
    args = _parse_args()

    api_config = load_relief_api_config()
    export_config = load_export_config()

    store = RequestStore(ReliefAPIClient(api_config))
    exporter_cls = ExcelReportExporter if args.excel else CsvReportExporter
    presenter = DashboardPresenter(
        store=store,
        exporter=exporter_cls(export_config.output_dir, export_config.platform_name),
        type_filter=args.type,
        search_term=args.search,
    )

    if not presenter.start():
        logger.error("Dashboard unavailable: %s", presenter.view().error)
        raise SystemExit(1)

    counts = count_by_type(store.requests)
    logger.info(
        "Loaded %d requests (%s)",
        len(store.requests),
        ", ".join(f"{t.value}={n}" for t, n in counts.items()),
    )

    for card in presenter.view().cards:
        req = card.request
        logger.info(
            "[%s] %s %s - %s, %s",
            getattr(req.status, "value", req.status),
            getattr(req.type, "value", req.type),
            req.id,
            req.contact_person,
            req.address,
        )

    if args.export or args.excel:
        path = presenter.export()
        if path is not None:
            logger.info("Export written to %s", path)

    for notice in presenter.drain_notices():
        logger.warning(notice)

if __name__ == "__main__":
    main()
