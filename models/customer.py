"""
models/customer.py
------------------
Read models for customers.
"""

from dataclasses import dataclass


@dataclass
class CustomerField:
    """A customer as offered in the invoice form's select box."""
    id: str
    name: str


@dataclass
class CustomerTableRow:
    """
    A customer with totals over their invoices.

    Attributes:
        id: Customer identifier.
        name: Customer name.
        email: Customer email.
        image_url: Customer avatar path.
        total_invoices: Number of invoices (0 when the customer has none).
        total_pending: Sum of pending invoice amounts in cents.
        total_paid: Sum of paid invoice amounts in cents.
    """
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int = 0
    total_pending: int = 0
    total_paid: int = 0
