"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool: queries are executed on worker
threads so the async query layer never blocks the event loop.
"""

import threading
import time

import psycopg2
from psycopg2 import pool

import config
from utils.logger import get_logger

logger = get_logger(__name__)


class Database:
    """
    Process-scoped handle on the connection pool.

    Build one at start-up, call ``open()``, hand it to the query layer and
    call ``close()`` on shutdown. With ``skip=True`` no pool is ever created
    and every consumer is expected to short-circuit to its default.

    psycopg2 has no notion of idle timeout or connection lifetime, so both
    are enforced here whenever a connection is borrowed.
    """

    def __init__(
        self,
        dsn: str = config.POSTGRES_URL,
        *,
        skip: bool = config.SKIP_DB,
        sslmode: str = config.POSTGRES_SSLMODE,
        min_conn: int = config.DB_POOL_MIN,
        max_conn: int = config.DB_POOL_MAX,
        idle_timeout: float = config.DB_IDLE_TIMEOUT,
        connect_timeout: int = config.DB_CONNECT_TIMEOUT,
        max_lifetime: float = config.DB_MAX_LIFETIME,
    ):
        self.dsn = dsn
        self.sslmode = sslmode
        self.min_conn = min_conn
        self.max_conn = max_conn
        self.idle_timeout = idle_timeout
        self.connect_timeout = connect_timeout
        self.max_lifetime = max_lifetime
        self._skip = skip
        self._pool: pool.ThreadedConnectionPool | None = None
        # connection -> monotonic timestamps
        self._created_at: dict = {}
        self._released_at: dict = {}
        self._lock = threading.Lock()

    @property
    def skipped(self) -> bool:
        """True when database access is disabled for this process."""
        return self._skip

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    # ── LIFECYCLE ─────────────────────────────────────────

    def open(self) -> None:
        """
        Initialize the connection pool. No-op in skip mode or if already open.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._skip:
            logger.info("SKIP_DB is set; database access disabled.")
            return
        if self._pool is not None:
            return
        try:
            self._pool = pool.ThreadedConnectionPool(
                self.min_conn,
                self.max_conn,
                self.dsn,
                sslmode=self.sslmode,
                connect_timeout=self.connect_timeout,
            )
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise
        # The pool opens min_conn connections up front; they age and idle from now.
        now = time.monotonic()
        with self._lock:
            for conn in getattr(self._pool, "_pool", ()):
                self._created_at[conn] = now
                self._released_at[conn] = now

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is None:
            return
        self._pool.closeall()
        self._pool = None
        with self._lock:
            self._created_at.clear()
            self._released_at.clear()
        logger.info("Database connection pool closed.")

    # ── CONNECTIONS ───────────────────────────────────────

    def get_connection(self):
        """
        Borrow a connection from the pool.

        Connections idle for longer than ``idle_timeout`` or older than
        ``max_lifetime`` are closed and replaced before being handed out.

        Returns:
            A psycopg2 connection object.

        Raises:
            RuntimeError: If the pool is not open (or database access is skipped).
        """
        if self._pool is None:
            raise RuntimeError("Database pool not initialized. Call open() first.")
        while True:
            conn = self._pool.getconn()
            if not self._expired(conn):
                return conn
            self._discard(conn)

    def release_connection(self, conn) -> None:
        """
        Return a connection back to the pool.

        Args:
            conn: The psycopg2 connection to release.
        """
        if self._pool is None:
            return
        if conn.closed:
            self._discard(conn)
            return
        with self._lock:
            self._released_at[conn] = time.monotonic()
        self._pool.putconn(conn)

    # ── HELPERS ───────────────────────────────────────────

    def _expired(self, conn) -> bool:
        now = time.monotonic()
        with self._lock:
            created = self._created_at.setdefault(conn, now)
            released = self._released_at.pop(conn, None)
        if conn.closed:
            return True
        if now - created >= self.max_lifetime:
            return True
        return released is not None and now - released >= self.idle_timeout

    def _discard(self, conn) -> None:
        with self._lock:
            self._created_at.pop(conn, None)
            self._released_at.pop(conn, None)
        self._pool.putconn(conn, close=True)
