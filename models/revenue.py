"""
models/revenue.py
-----------------
Monthly revenue, as stored in the reporting table.
"""

from dataclasses import dataclass


@dataclass
class Revenue:
    month: str
    revenue: int
