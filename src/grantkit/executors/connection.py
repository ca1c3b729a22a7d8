"""
SQL connection seam used by executors and readers.

Connection management and authentication live outside grantkit. Anything
that can run a statement and return rows for a query can drive a
reconciliation pass.
"""

import logging
from contextlib import closing
from typing import Any, List, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)

Row = Tuple[Any, ...]


class SqlConnection(Protocol):
    """Minimal SQL capability a reconciliation pass needs."""

    def execute(self, statement: str) -> None:
        """Run a DDL statement. Raises on failure."""
        ...

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        """Run a query with qmark parameters and return all rows."""
        ...


class DbApiConnection:
    """
    SqlConnection over a PEP 249 connection.

    Works with any driver using the qmark parameter style, such as
    hdbcli.dbapi for SAP HANA:

        from hdbcli import dbapi
        conn = DbApiConnection(dbapi.connect(address=host, port=443, user=u, password=p))
    """

    def __init__(self, connection: Any):
        """
        Initialize the adapter.

        Args:
            connection: An open DB-API 2.0 connection, owned by the caller
        """
        self.connection = connection

    def execute(self, statement: str) -> None:
        with closing(self.connection.cursor()) as cursor:
            cursor.execute(statement)

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        with closing(self.connection.cursor()) as cursor:
            cursor.execute(sql, tuple(params))
            rows = cursor.fetchall()
        logger.debug(f"Query returned {len(rows)} row(s)")
        return [tuple(row) for row in rows]
