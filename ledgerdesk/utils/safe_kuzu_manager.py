"""
Safe KuzuDB Connection Manager

Provides thread-safe access to KuzuDB connections with per-operation
connections and lazy schema initialization.
"""

import threading
import logging
import kuzu  # type: ignore
import os
import time
from pathlib import Path
from typing import Optional, Dict, Any, List, Generator
from contextlib import contextmanager
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

# Logging controls
_QUERY_LOG_ENABLED = os.getenv('KUZU_QUERY_LOG', 'false').lower() in ('1', 'true', 'on', 'yes')
try:
    _SLOW_QUERY_MS = int(os.getenv('KUZU_SLOW_QUERY_MS', '150'))
except ValueError:
    _SLOW_QUERY_MS = 150

SCHEMA_STATEMENTS = (
    """
    CREATE NODE TABLE IF NOT EXISTS Book(
        id STRING,
        title STRING,
        author STRING,
        created_at TIMESTAMP,
        updated_at TIMESTAMP,
        PRIMARY KEY(id)
    )
    """,
    """
    CREATE NODE TABLE IF NOT EXISTS DeliveryFee(
        invoice_number STRING,
        fee_cents INT64,
        created_at TIMESTAMP,
        updated_at TIMESTAMP,
        PRIMARY KEY(invoice_number)
    )
    """,
)


def default_database_path() -> str:
    kuzu_path = os.getenv('KUZU_DB_PATH')
    if kuzu_path:
        return kuzu_path
    return os.path.join('data', 'kuzu', 'ledgerdesk.db')


def to_kuzu_timestamp(value: Optional[datetime]) -> Optional[datetime]:
    """Kuzu TIMESTAMP columns take naive datetimes; store everything as naive UTC."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def from_kuzu_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


class SafeKuzuManager:
    """
    Thread-safe KuzuDB connection manager.

    Key Features:
    - Thread-safe initialization with proper locking
    - Connection-per-operation pattern to avoid shared state
    - Automatic connection cleanup
    - Schema created on first use
    """

    def __init__(self, database_path: Optional[str] = None):
        """Initialize manager state (no heavy I/O)."""
        self.database_path = database_path or default_database_path()

        # Thread safety controls
        self._lock = threading.RLock()  # Reentrant lock for nested calls
        self._database: Optional[kuzu.Database] = None
        self._is_initialized = False

        logger.info(f"SafeKuzuManager initialized for database: {self.database_path}")

    def _initialize_database(self) -> None:
        """
        Open the database and create the schema.

        Called with the manager lock held, only once per manager.
        """
        if self._is_initialized:
            return

        start_time = time.time()
        Path(self.database_path).parent.mkdir(parents=True, exist_ok=True)
        self._database = kuzu.Database(self.database_path)

        conn = kuzu.Connection(self._database)
        try:
            for statement in SCHEMA_STATEMENTS:
                conn.execute(statement)
        finally:
            conn.close()

        self._is_initialized = True
        logger.info(f"Kuzu connected at {self.database_path} "
                    f"(schema ready in {time.time() - start_time:.3f}s)")

    @contextmanager
    def get_connection(self, operation: str = "unknown") -> Generator[kuzu.Connection, None, None]:
        """
        Get a KuzuDB connection with automatic cleanup.

        Example:
            with manager.get_connection(operation="list_books") as conn:
                result = conn.execute("MATCH (b:Book) RETURN b.title")
        """
        thread_id = threading.get_ident()

        with self._lock:
            if not self._is_initialized:
                self._initialize_database()
            if self._database is None:
                raise RuntimeError("KuzuDB database not properly initialized")

            connection = kuzu.Connection(self._database)
            logger.debug(f"[THREAD-{thread_id}] Opened connection for operation '{operation}'")

        # Yield connection for use (outside the lock)
        try:
            yield connection
        except Exception as e:
            logger.debug(f"[THREAD-{thread_id}] Error during KuzuDB operation '{operation}': {e}")
            raise
        finally:
            connection.close()
            logger.debug(f"[THREAD-{thread_id}] Closed connection for operation '{operation}'")

    def execute_query(self, query: str, params: Optional[Dict[str, Any]] = None,
                      operation: str = "query") -> List[Dict[str, Any]]:
        """
        Execute a query and return its rows as dictionaries keyed by column name.

        Rows are materialized before the connection is closed, so callers never
        hold a result that outlives its connection.
        """
        if _QUERY_LOG_ENABLED:
            q_snippet = ' '.join(query.split())[:120]
            logger.info(f"[KUZU] execute_query op='{operation}' q='{q_snippet}'")

        with self.get_connection(operation=operation) as conn:
            t0 = time.time()
            result = conn.execute(query, params or {})
            # Handle both single QueryResult and list[QueryResult]
            if isinstance(result, list):
                result = result[-1] if result else None
            rows = _convert_query_result_to_list(result)
            elapsed_ms = (time.time() - t0) * 1000
            if elapsed_ms >= _SLOW_QUERY_MS:
                logger.warning(f"[KUZU] Slow query op='{operation}' took {elapsed_ms:.0f}ms")
            return rows

    def close(self) -> None:
        """Release the underlying database handle."""
        with self._lock:
            if self._database is not None:
                self._database.close()
            self._database = None
            self._is_initialized = False


def _convert_query_result_to_list(result) -> List[Dict[str, Any]]:
    """Convert KuzuDB query result to list of dictionaries."""
    if result is None:
        return []

    columns = result.get_column_names()
    data = []
    while result.has_next():
        row = result.get_next()
        data.append({columns[i]: row[i] for i in range(len(columns))})
    return data


_safe_kuzu_manager: Optional[SafeKuzuManager] = None
_manager_lock = threading.Lock()


def get_safe_kuzu_manager() -> SafeKuzuManager:
    """Get the process-wide KuzuDB manager instance."""
    global _safe_kuzu_manager

    # Double-checked locking pattern for thread-safe singleton
    if _safe_kuzu_manager is None:
        with _manager_lock:
            if _safe_kuzu_manager is None:
                _safe_kuzu_manager = SafeKuzuManager()
                logger.info("Global SafeKuzuManager instance created")

    return _safe_kuzu_manager


def reset_safe_kuzu_manager(database_path: Optional[str] = None) -> None:
    """
    Reset the global SafeKuzuManager instance.

    Closes the previous manager, if any. Optionally provide a database_path to
    immediately seed a new manager with that path.
    """
    global _safe_kuzu_manager
    with _manager_lock:
        if _safe_kuzu_manager is not None:
            _safe_kuzu_manager.close()
        _safe_kuzu_manager = SafeKuzuManager(database_path) if database_path else None
