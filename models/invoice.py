"""
models/invoice.py
-----------------
Read models for invoices as the dashboard consumes them.
Amounts are integer cents unless stated otherwise.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass
class LatestInvoice:
    """
    One row of the "latest invoices" card.

    Attributes:
        id: Invoice identifier.
        name: Customer name.
        image_url: Customer avatar path.
        email: Customer email.
        amount: Invoice amount in cents.
    """
    id: str
    name: str
    image_url: str
    email: str
    amount: int


@dataclass
class InvoiceRow:
    """
    One row of the paginated invoices table (invoice joined with its customer).

    Attributes:
        id: Invoice identifier.
        customer_id: Owning customer identifier.
        name: Customer name.
        email: Customer email.
        image_url: Customer avatar path.
        date: Invoice date.
        amount: Invoice amount in cents.
        status: 'pending' or 'paid'.
    """
    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: date
    amount: int
    status: str  # 'pending' | 'paid'


@dataclass
class InvoiceForm:
    """
    An invoice loaded for the edit form.

    Unlike the list projections, ``amount`` is in currency units
    (cents / 100), as the form edits it.
    """
    id: str
    customer_id: str
    amount: Decimal
    status: str

    def __str__(self) -> str:
        return f"{self.id} | {self.amount:.2f} | {self.status}"
