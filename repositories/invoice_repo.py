"""
repositories/invoice_repo.py
-----------------------------
Data access layer for invoices.
All SQL queries against the `invoices` table live here.
"""

from typing import Optional

from db.connection import Database
from models.invoice import InvoiceForm, InvoiceRow, LatestInvoice
from utils.money import cents_to_units

# Case-insensitive substring match on customer and invoice fields.
# Shared by the paginated listing and the page count so both see the same rows.
SEARCH_CONDITION = """
    customers.name ILIKE %(pattern)s OR
    customers.email ILIKE %(pattern)s OR
    invoices.amount::text ILIKE %(pattern)s OR
    invoices.date::text ILIKE %(pattern)s OR
    invoices.status ILIKE %(pattern)s
"""


def search_pattern(query: str) -> str:
    """Wrap a free-text query for use with ILIKE."""
    return f"%{query}%"


class InvoiceRepository:
    """Read-only queries on the invoices table."""

    def __init__(self, db: Database):
        self.db = db

    # ── LISTS ─────────────────────────────────────────────

    def get_latest(self, limit: int = 5) -> list[LatestInvoice]:
        """
        Fetch the most recent invoices with their customer.

        Returns:
            List of LatestInvoice ordered by date descending.
        """
        sql = """
            SELECT invoices.id, customers.name, customers.image_url, customers.email, invoices.amount
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            ORDER BY invoices.date DESC
            LIMIT %s;
        """
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (limit,))
                return [
                    LatestInvoice(id=r[0], name=r[1], image_url=r[2], email=r[3], amount=r[4])
                    for r in cur.fetchall()
                ]
        finally:
            self.db.release_connection(conn)

    def get_filtered(
        self, query: str, limit: Optional[int] = None, offset: int = 0
    ) -> list[InvoiceRow]:
        """
        Fetch invoices matching a free-text query.

        Args:
            query: Substring matched against customer name/email and
                invoice amount/date/status.
            limit: Maximum rows to return (None for all rows).
            offset: Rows to skip.

        Returns:
            List of InvoiceRow ordered by date descending.
        """
        sql = f"""
            SELECT
                invoices.id,
                invoices.customer_id,
                customers.name,
                customers.email,
                customers.image_url,
                invoices.date,
                invoices.amount,
                invoices.status
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            WHERE {SEARCH_CONDITION}
            ORDER BY invoices.date DESC
            LIMIT %(limit)s OFFSET %(offset)s;
        """
        params = {"pattern": search_pattern(query), "limit": limit, "offset": offset}
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return [self._row_to_invoice(r) for r in cur.fetchall()]
        finally:
            self.db.release_connection(conn)

    # ── SINGLE RECORD ─────────────────────────────────────

    def get_form_by_id(self, invoice_id: str) -> Optional[InvoiceForm]:
        """
        Fetch one invoice for editing.

        Returns:
            An InvoiceForm with the amount in currency units, or None if not found.
        """
        sql = "SELECT id, customer_id, amount, status FROM invoices WHERE id = %s;"
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (invoice_id,))
                row = cur.fetchone()
                if row:
                    return InvoiceForm(
                        id=row[0],
                        customer_id=row[1],
                        amount=cents_to_units(row[2]),
                        status=row[3],
                    )
                return None
        finally:
            self.db.release_connection(conn)

    # ── AGGREGATES ────────────────────────────────────────

    def count_filtered(self, query: str) -> int:
        """Count invoices matching a free-text query."""
        sql = f"""
            SELECT COUNT(*)
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            WHERE {SEARCH_CONDITION};
        """
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, {"pattern": search_pattern(query)})
                row = cur.fetchone()
                return int(row[0]) if row and row[0] is not None else 0
        finally:
            self.db.release_connection(conn)

    def count_all(self) -> int:
        """Count every invoice."""
        sql = "SELECT COUNT(*) FROM invoices;"
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                row = cur.fetchone()
                return int(row[0]) if row and row[0] is not None else 0
        finally:
            self.db.release_connection(conn)

    def get_status_totals(self) -> dict:
        """
        Sum invoice amounts per status.

        Returns:
            Dict with keys 'paid' and 'pending', in cents (0 when empty).
        """
        sql = """
            SELECT
                COALESCE(SUM(CASE WHEN status = 'paid' THEN amount ELSE 0 END), 0) AS paid,
                COALESCE(SUM(CASE WHEN status = 'pending' THEN amount ELSE 0 END), 0) AS pending
            FROM invoices;
        """
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                row = cur.fetchone()
                if not row:
                    return {"paid": 0, "pending": 0}
                return {"paid": int(row[0] or 0), "pending": int(row[1] or 0)}
        finally:
            self.db.release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_invoice(row: tuple) -> InvoiceRow:
        """Convert a database row tuple to an InvoiceRow."""
        return InvoiceRow(
            id=row[0],
            customer_id=row[1],
            name=row[2],
            email=row[3],
            image_url=row[4],
            date=row[5],
            amount=row[6],
            status=row[7],
        )
