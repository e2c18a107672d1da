"""
services/query_service.py
--------------------------
Async query functions backing the dashboard pages.

Every operation runs its repository call on a worker thread, so callers on
the event loop are never blocked. Failures never reach the caller: they are
logged with a label naming the operation and replaced by that operation's
default (empty list, 0, an all-zero CardData or None). The dashboard shows
empty data during a database outage instead of an error page.
"""

import asyncio
import math
from typing import Optional

from db.connection import Database
from models.customer import CustomerField, CustomerTableRow
from models.dashboard import CardData
from models.invoice import InvoiceForm, InvoiceRow, LatestInvoice
from models.revenue import Revenue
from repositories.customer_repo import CustomerRepository
from repositories.invoice_repo import InvoiceRepository
from repositories.revenue_repo import RevenueRepository
from utils.logger import get_logger

logger = get_logger(__name__)

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5


class QueryService:
    """Read operations for the dashboard, sharing one Database handle."""

    def __init__(self, db: Database):
        self.db = db
        self.invoice_repo = InvoiceRepository(db)
        self.customer_repo = CustomerRepository(db)
        self.revenue_repo = RevenueRepository(db)

    # ── REVENUE ───────────────────────────────────────────

    async def fetch_revenue(self) -> list[Revenue]:
        """All revenue rows, or [] on failure."""
        if self.db.skipped:
            return []
        try:
            return await asyncio.to_thread(self.revenue_repo.get_all)
        except Exception as e:
            logger.error(f"DB error (revenue): {e}")
            return []

    # ── INVOICES ──────────────────────────────────────────

    async def fetch_latest_invoices(self) -> list[LatestInvoice]:
        """The five most recent invoices, or [] on failure."""
        if self.db.skipped:
            return []
        try:
            return await asyncio.to_thread(self.invoice_repo.get_latest, LATEST_INVOICES_LIMIT)
        except Exception as e:
            logger.error(f"DB error (latest invoices): {e}")
            return []

    async def fetch_card_data(self) -> CardData:
        """
        Counts and totals for the dashboard cards.

        The three queries run concurrently and are joined; if any of them
        fails the whole summary falls back to zeros.
        """
        if self.db.skipped:
            return CardData()
        try:
            invoice_count, customer_count, totals = await asyncio.gather(
                asyncio.to_thread(self.invoice_repo.count_all),
                asyncio.to_thread(self.customer_repo.count_all),
                asyncio.to_thread(self.invoice_repo.get_status_totals),
            )
        except Exception as e:
            logger.error(f"DB error (cards): {e}")
            return CardData()
        return CardData(
            number_of_invoices=invoice_count,
            number_of_customers=customer_count,
            total_paid_invoices=totals["paid"],
            total_pending_invoices=totals["pending"],
        )

    async def fetch_filtered_invoices(self, query: str, current_page: int) -> list[InvoiceRow]:
        """
        One page of invoices matching ``query``, newest first.

        Args:
            query: Free-text filter (may be empty to match everything).
            current_page: 1-based page number. Not validated; pages below 1
                yield a negative offset, which PostgreSQL rejects (-> []).
        """
        if self.db.skipped:
            return []
        offset = (current_page - 1) * ITEMS_PER_PAGE
        try:
            return await asyncio.to_thread(
                self.invoice_repo.get_filtered, query, ITEMS_PER_PAGE, offset
            )
        except Exception as e:
            logger.error(f"DB error (filtered invoices): {e}")
            return []

    async def fetch_invoices_pages(self, query: str) -> int:
        """Number of pages needed to list every invoice matching ``query``, or 0 on failure."""
        if self.db.skipped:
            return 0
        try:
            count = await asyncio.to_thread(self.invoice_repo.count_filtered, query)
        except Exception as e:
            logger.error(f"DB error (invoice pages): {e}")
            return 0
        return math.ceil(count / ITEMS_PER_PAGE)

    async def fetch_invoice_by_id(self, invoice_id: str) -> Optional[InvoiceForm]:
        """The invoice for the edit form, amount in currency units; None if absent or on failure."""
        if self.db.skipped:
            return None
        try:
            return await asyncio.to_thread(self.invoice_repo.get_form_by_id, invoice_id)
        except Exception as e:
            logger.error(f"DB error (invoice by id): {e}")
            return None

    # ── CUSTOMERS ─────────────────────────────────────────

    async def fetch_customers(self) -> list[CustomerField]:
        if self.db.skipped:
            return []
        try:
            return await asyncio.to_thread(self.customer_repo.get_all_fields)
        except Exception as e:
            logger.error(f"DB error (customers): {e}")
            return []

    async def fetch_filtered_customers(self, query: str) -> list[CustomerTableRow]:
        """Customers whose name or email matches ``query``, with invoice totals in cents."""
        if self.db.skipped:
            return []
        try:
            return await asyncio.to_thread(self.customer_repo.get_filtered_with_totals, query)
        except Exception as e:
            logger.error(f"DB error (filtered customers): {e}")
            return []
