"""
repositories/revenue_repo.py
-----------------------------
Data access layer for the read-only revenue reporting table.
"""

from db.connection import Database
from models.revenue import Revenue


class RevenueRepository:
    """Queries on the revenue table."""

    def __init__(self, db: Database):
        self.db = db

    def get_all(self) -> list[Revenue]:
        """Fetch every (month, revenue) row."""
        sql = "SELECT month, revenue FROM revenue;"
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [Revenue(month=r[0], revenue=r[1]) for r in cur.fetchall()]
        finally:
            self.db.release_connection(conn)
