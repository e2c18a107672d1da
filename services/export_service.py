"""
services/export_service.py
---------------------------
Generates CSV and Excel exports of invoice and customer data.
"""

import io

import pandas as pd

from db.connection import Database
from repositories.customer_repo import CustomerRepository
from repositories.invoice_repo import InvoiceRepository
from utils.logger import get_logger
from utils.money import cents_to_units

logger = get_logger(__name__)

INVOICE_COLUMNS = ["Invoice", "Date", "Customer", "Email", "Amount", "Status"]
CUSTOMER_COLUMNS = ["Customer", "Email", "Invoices", "Pending", "Paid"]


class ExportService:
    """Builds downloadable reports in CSV and Excel formats."""

    def __init__(self, db: Database):
        self.invoice_repo = InvoiceRepository(db)
        self.customer_repo = CustomerRepository(db)

    def _invoices_frame(self, query: str) -> pd.DataFrame:
        invoices = self.invoice_repo.get_filtered(query)
        data = [
            {
                "Invoice": inv.id,
                "Date": inv.date.isoformat() if inv.date else "",
                "Customer": inv.name,
                "Email": inv.email,
                "Amount": float(cents_to_units(inv.amount)),
                "Status": inv.status,
            }
            for inv in invoices
        ]
        return pd.DataFrame(data, columns=INVOICE_COLUMNS)

    def _customers_frame(self, query: str) -> pd.DataFrame:
        customers = self.customer_repo.get_filtered_with_totals(query)
        data = [
            {
                "Customer": c.name,
                "Email": c.email,
                "Invoices": c.total_invoices,
                "Pending": float(cents_to_units(c.total_pending)),
                "Paid": float(cents_to_units(c.total_paid)),
            }
            for c in customers
        ]
        return pd.DataFrame(data, columns=CUSTOMER_COLUMNS)

    def export_invoices_csv(self, query: str = "") -> io.BytesIO:
        """
        Export every invoice matching ``query`` as a CSV file.

        Args:
            query: Same free-text filter as the invoices table.

        Returns:
            A BytesIO buffer containing the CSV data.
        """
        df = self._invoices_frame(query)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} invoices as CSV (query={query!r})")
        return buffer

    def export_invoices_excel(self, query: str = "") -> io.BytesIO:
        """
        Export invoices and customer totals matching ``query`` as an Excel (.xlsx) file.

        Returns:
            A BytesIO buffer with an "Invoices" sheet and a "Customers" sheet.
        """
        invoices = self._invoices_frame(query)
        customers = self._customers_frame(query)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            invoices.to_excel(writer, sheet_name="Invoices", index=False)
            customers.to_excel(writer, sheet_name="Customers", index=False)

        buffer.seek(0)
        logger.info(
            f"Exported {len(invoices)} invoices and {len(customers)} customers as Excel (query={query!r})"
        )
        return buffer
