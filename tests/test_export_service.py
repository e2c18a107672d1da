"""
Tests for CSV / Excel exports.
"""
from datetime import date
from decimal import Decimal

import pandas as pd
import psycopg2
import pytest

from services.export_service import CUSTOMER_COLUMNS, INVOICE_COLUMNS, ExportService

INVOICES = [
    ("inv-1", "c1", "Lee Robinson", "lee@robinson.com", "/lee.png", date(2024, 6, 5), 125000, "paid"),
    ("inv-2", "c2", "Amy Burns", "amy@burns.com", "/amy.png", date(2024, 6, 1), 15795, "pending"),
]
CUSTOMERS = [
    ("c2", "Amy Burns", "amy@burns.com", "/amy.png", 1, Decimal(15795), Decimal(0)),
    ("c1", "Lee Robinson", "lee@robinson.com", "/lee.png", 1, Decimal(0), Decimal(125000)),
]


@pytest.fixture
def exporter(database, backend):
    backend.respond("FROM invoices JOIN customers", INVOICES)
    backend.respond("LEFT JOIN invoices", CUSTOMERS)
    return ExportService(database)


class TestCsvExport:

    def test_rows_and_amount_units(self, exporter):
        df = pd.read_csv(exporter.export_invoices_csv("lee"), encoding="utf-8-sig")
        assert list(df.columns) == INVOICE_COLUMNS
        assert df["Invoice"].tolist() == ["inv-1", "inv-2"]
        assert df["Amount"].tolist() == [1250.0, 157.95]
        assert df["Date"].tolist() == ["2024-06-05", "2024-06-01"]

    def test_export_is_not_paginated(self, exporter, backend):
        exporter.export_invoices_csv("")
        _, params = backend.executed[-1]
        assert params["limit"] is None
        assert params["offset"] == 0

    def test_empty_result_keeps_header(self, database, backend):
        buffer = ExportService(database).export_invoices_csv("nothing")
        df = pd.read_csv(buffer, encoding="utf-8-sig")
        assert list(df.columns) == INVOICE_COLUMNS
        assert df.empty

    def test_errors_propagate(self, database, backend):
        """Exports are explicit operator actions: failures are not swallowed."""
        backend.error = psycopg2.OperationalError("connection refused")
        with pytest.raises(psycopg2.OperationalError):
            ExportService(database).export_invoices_csv("")


class TestExcelExport:

    def test_has_invoice_and_customer_sheets(self, exporter):
        sheets = pd.read_excel(exporter.export_invoices_excel("a"), sheet_name=None)
        assert set(sheets) == {"Invoices", "Customers"}
        assert list(sheets["Customers"].columns) == CUSTOMER_COLUMNS
        assert sheets["Customers"]["Customer"].tolist() == ["Amy Burns", "Lee Robinson"]
        assert sheets["Customers"]["Paid"].tolist() == [0.0, 1250.0]
        assert sheets["Invoices"]["Status"].tolist() == ["paid", "pending"]
