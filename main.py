"""
main.py
-------
Command-line entry point for the dashboard data layer.

Responsibilities:
    - Build the process-wide Database and open its pool (unless SKIP_DB is set).
    - Run one query or export command and print the result.
    - Close the pool on the way out.

Examples:
    python main.py cards
    python main.py invoices -q paid -p 2
    python main.py --log-level DEBUG customer-names
    python main.py export -q acme --format xlsx -o invoices.xlsx
"""

import argparse
import asyncio
import json
import sys
from dataclasses import asdict, is_dataclass

from db.connection import Database
from services.export_service import ExportService
from services.query_service import QueryService
from utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the invoice dashboard database.")
    parser.add_argument("--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("cards", help="Dashboard card totals")
    sub.add_parser("revenue", help="Monthly revenue")
    sub.add_parser("latest", help="Five most recent invoices")

    invoices = sub.add_parser("invoices", help="Filtered, paginated invoices")
    invoices.add_argument("-q", "--query", default="")
    invoices.add_argument("-p", "--page", type=int, default=1)

    invoice = sub.add_parser("invoice", help="One invoice, as loaded for editing")
    invoice.add_argument("invoice_id")

    customers = sub.add_parser("customers", help="Customers with invoice totals")
    customers.add_argument("-q", "--query", default="")

    sub.add_parser("customer-names", help="Every customer's id and name, for the invoice form")

    export = sub.add_parser("export", help="Export matching invoices to a file")
    export.add_argument("-q", "--query", default="")
    export.add_argument("--format", choices=("csv", "xlsx"), default="csv")
    export.add_argument("-o", "--output", required=True)

    return parser


def _to_jsonable(value):
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    return value


async def run_query(service: QueryService, args: argparse.Namespace):
    """Dispatch a query sub-command to the QueryService."""
    if args.command == "cards":
        return await service.fetch_card_data()
    if args.command == "revenue":
        return await service.fetch_revenue()
    if args.command == "latest":
        return await service.fetch_latest_invoices()
    if args.command == "invoices":
        rows, pages = await asyncio.gather(
            service.fetch_filtered_invoices(args.query, args.page),
            service.fetch_invoices_pages(args.query),
        )
        return {"page": args.page, "total_pages": pages, "invoices": _to_jsonable(rows)}
    if args.command == "invoice":
        return await service.fetch_invoice_by_id(args.invoice_id)
    if args.command == "customers":
        return await service.fetch_filtered_customers(args.query)
    if args.command == "customer-names":
        return await service.fetch_customers()
    raise ValueError(f"Unknown command: {args.command}")


def run_export(db: Database, args: argparse.Namespace) -> None:
    exporter = ExportService(db)
    if args.format == "xlsx":
        buffer = exporter.export_invoices_excel(args.query)
    else:
        buffer = exporter.export_invoices_csv(args.query)
    with open(args.output, "wb") as fh:
        fh.write(buffer.getvalue())
    logger.info(f"Wrote {args.output}")


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the command, and always release the pool."""
    args = build_parser().parse_args(argv)
    if args.log_level:
        configure_logging(args.log_level)

    db = Database()
    db.open()
    try:
        if args.command == "export":
            if db.skipped:
                logger.error("Export needs database access; unset SKIP_DB.")
                return 1
            run_export(db, args)
            return 0

        result = asyncio.run(run_query(QueryService(db), args))
        print(json.dumps(_to_jsonable(result), indent=2, default=str))
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
