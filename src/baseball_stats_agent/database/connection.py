from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Protocol, runtime_checkable

from loguru import logger

QUERY_TIMEOUT_SECONDS = 30
LOGIN_TIMEOUT_SECONDS = 15


@runtime_checkable
class Database(Protocol):
    def connect(self) -> Any:
        """Return a context manager yielding a DB-API connection, closed on exit."""
        ...


class SqlServerDatabase:
    """Lahman database hosted on SQL Server, reached through ODBC."""

    def __init__(self, connection_string: str, query_timeout: int = QUERY_TIMEOUT_SECONDS):
        self._connection_string = connection_string
        self._query_timeout = query_timeout

    @property
    def query_timeout(self) -> int:
        return self._query_timeout

    @contextmanager
    def connect(self) -> Iterator[Any]:
        import pyodbc

        conn = pyodbc.connect(self._connection_string, timeout=LOGIN_TIMEOUT_SECONDS, autocommit=True)
        # pyodbc applies Connection.timeout to every statement on this connection
        conn.timeout = self._query_timeout
        logger.debug(f"Opened SQL Server connection (query timeout {self._query_timeout}s)")
        try:
            yield conn
        finally:
            conn.close()
