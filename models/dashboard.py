"""
models/dashboard.py
-------------------
Aggregate figures shown on the dashboard cards.
"""

from dataclasses import dataclass


@dataclass
class CardData:
    """
    Dashboard summary, computed on every call and never persisted.

    The defaults (all zero) double as the value returned when the
    database is unavailable.

    Attributes:
        number_of_invoices: Count of all invoices.
        number_of_customers: Count of all customers.
        total_paid_invoices: Sum of paid invoice amounts in cents.
        total_pending_invoices: Sum of pending invoice amounts in cents.
    """
    number_of_invoices: int = 0
    number_of_customers: int = 0
    total_paid_invoices: int = 0
    total_pending_invoices: int = 0
