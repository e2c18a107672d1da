"""
utils/money.py
--------------
Amounts are stored as integer cents; forms and exports work in currency units.
"""

from decimal import Decimal

_CENTS = Decimal("0.01")


def cents_to_units(cents) -> Decimal:
    """
    Convert an integer cents value to an exact decimal amount.

    >>> cents_to_units(125000)
    Decimal('1250.00')
    """
    return (Decimal(cents or 0) / 100).quantize(_CENTS)
