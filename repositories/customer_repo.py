"""
repositories/customer_repo.py
------------------------------
Data access layer for customer records.
"""

from db.connection import Database
from models.customer import CustomerField, CustomerTableRow
from repositories.invoice_repo import search_pattern


class CustomerRepository:
    """Read-only queries on the customers table."""

    def __init__(self, db: Database):
        self.db = db

    def get_all_fields(self) -> list[CustomerField]:
        """Get every customer's id and name, alphabetically."""
        sql = "SELECT id, name FROM customers ORDER BY name ASC;"
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [CustomerField(id=r[0], name=r[1]) for r in cur.fetchall()]
        finally:
            self.db.release_connection(conn)

    def get_filtered_with_totals(self, query: str) -> list[CustomerTableRow]:
        """
        Fetch customers whose name or email contains ``query``, with invoice totals.

        Customers without invoices are kept (LEFT JOIN) and get zero totals.
        PostgreSQL returns SUM over integers as NUMERIC; totals are coerced to int.

        Returns:
            List of CustomerTableRow ordered by name.
        """
        sql = """
            SELECT
                customers.id,
                customers.name,
                customers.email,
                customers.image_url,
                COUNT(invoices.id) AS total_invoices,
                COALESCE(SUM(CASE WHEN invoices.status = 'pending' THEN invoices.amount ELSE 0 END), 0) AS total_pending,
                COALESCE(SUM(CASE WHEN invoices.status = 'paid' THEN invoices.amount ELSE 0 END), 0) AS total_paid
            FROM customers
            LEFT JOIN invoices ON customers.id = invoices.customer_id
            WHERE
                customers.name ILIKE %(pattern)s OR
                customers.email ILIKE %(pattern)s
            GROUP BY customers.id, customers.name, customers.email, customers.image_url
            ORDER BY customers.name ASC;
        """
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, {"pattern": search_pattern(query)})
                return [self._row_to_table_row(r) for r in cur.fetchall()]
        finally:
            self.db.release_connection(conn)

    def count_all(self) -> int:
        """Count every customer."""
        sql = "SELECT COUNT(*) FROM customers;"
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                row = cur.fetchone()
                return int(row[0]) if row and row[0] is not None else 0
        finally:
            self.db.release_connection(conn)

    @staticmethod
    def _row_to_table_row(row: tuple) -> CustomerTableRow:
        return CustomerTableRow(
            id=row[0],
            name=row[1],
            email=row[2],
            image_url=row[3],
            total_invoices=int(row[4] or 0),
            total_pending=int(row[5] or 0),
            total_paid=int(row[6] or 0),
        )
