# =============================================================================
# File:        dbmanager/db/base_driver.py
# Purpose:     Common interface and shared statement execution for all
#              DB drivers (SQLite, MySQL)
# =============================================================================
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence, Tuple

from dbmanager.db.dialect import Dialect
from dbmanager.db.query import (
    ConnectionConfig,
    DBConnectionError,
    DriverCapabilities,
    QueryError,
)


class BaseDBDriver(ABC):
    """
    One connection per driver. Every statement runs under an RLock so the
    manager's worker threads and the caller's thread never share a cursor.
    Subclasses provide the connection, value adaptation and the few
    statements that differ per backend.
    """

    dialect: Dialect
    placeholder = "?"

    def __init__(self, config: ConnectionConfig):
        self.config = config
        self.conn = None
        self._lock = threading.RLock()
        self._tx_depth = 0

    # --- Meta/capabilities ---
    @abstractmethod
    def capabilities(self) -> DriverCapabilities:
        """Return DriverCapabilities for this backend."""

    # --- Lifecycle / connection ---
    @abstractmethod
    def _open(self):
        """Open and return a DB-API connection."""

    @abstractmethod
    def is_open(self) -> bool:
        """True when the underlying connection is usable."""

    @property
    @abstractmethod
    def db_errors(self) -> Tuple[type, ...]:
        """DB-API exception classes of the backend library."""

    def connect(self) -> None:
        with self._lock:
            self.close()
            try:
                self.conn = self._open()
            except self.db_errors as e:
                self.conn = None
                raise DBConnectionError(f"{self.dialect.name} connect failed: {e}") from e
            self._tx_depth = 0

    def close(self) -> None:
        with self._lock:
            if self.conn is None:
                return
            try:
                self.conn.close()
            except self.db_errors:
                pass
            finally:
                self.conn = None
                self._tx_depth = 0

    # --- Statement preparation ---
    def adapt_value(self, value: Any) -> Any:
        return value

    def prepare(self, sql: str, params: Sequence[Any]) -> Tuple[str, List[Any]]:
        return sql, [self.adapt_value(p) for p in params]

    # --- Execution ---
    def _require_conn(self):
        if self.conn is None:
            raise DBConnectionError("Not connected")
        return self.conn

    def execute(self, sql: str, params: Sequence[Any] = ()) -> Tuple[int, Optional[int]]:
        """Run a write statement. Returns (rowcount, lastrowid)."""
        with self._lock:
            conn = self._require_conn()
            final_sql, final_params = self.prepare(sql, params)
            cur = conn.cursor()
            try:
                cur.execute(final_sql, final_params)
                # sqlite3 reports -1 for DDL and other non-DML statements
                rowcount = max(cur.rowcount if cur.rowcount is not None else 0, 0)
                return rowcount, cur.lastrowid
            except self.db_errors as e:
                raise QueryError(f"{e} [sql: {sql}]") from e
            finally:
                cur.close()

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        with self._lock:
            conn = self._require_conn()
            final_sql, final_params = self.prepare(sql, params)
            cur = conn.cursor()
            try:
                cur.execute(final_sql, final_params)
                rows = cur.fetchall()
                names = [d[0] for d in (cur.description or [])]
            except self.db_errors as e:
                raise QueryError(f"{e} [sql: {sql}]") from e
            finally:
                cur.close()
        return [dict(zip(names, row)) for row in rows]

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        rows = self.fetch_all(sql, params)
        return rows[0] if rows else None

    def fetch_scalar(self, sql: str, params: Sequence[Any] = ()) -> Any:
        row = self.fetch_one(sql, params)
        if not row:
            return None
        return next(iter(row.values()))

    # --- Transactions (savepoints for nesting) ---
    @contextmanager
    def transaction(self):
        """
        Holds the driver lock until the block ends, so statements from other
        threads (the manager's workers included) wait for it. Waiting on a
        Future of this driver inside the block deadlocks.
        """
        with self._lock:
            self._require_conn()
            depth = self._tx_depth + 1
            if depth == 1:
                self._raw("BEGIN")
            else:
                self._raw(f"SAVEPOINT sp_{depth}")
            self._tx_depth = depth
            try:
                yield self
            except BaseException:
                self._tx_depth = depth - 1
                if depth == 1:
                    self._raw("ROLLBACK")
                else:
                    self._raw(f"ROLLBACK TO SAVEPOINT sp_{depth}")
                    self._raw(f"RELEASE SAVEPOINT sp_{depth}")
                raise
            self._tx_depth = depth - 1
            if depth == 1:
                self._raw("COMMIT")
            else:
                self._raw(f"RELEASE SAVEPOINT sp_{depth}")

    @property
    def in_transaction(self) -> bool:
        return self._tx_depth > 0

    def _raw(self, sql: str) -> None:
        cur = self._require_conn().cursor()
        try:
            cur.execute(sql)
        except self.db_errors as e:
            raise QueryError(f"{e} [sql: {sql}]") from e
        finally:
            cur.close()

    # --- Schema ---
    def create_table(self, table: str, columns: Sequence[Any], drop_if_exists: bool = False) -> str:
        sql = self.dialect.create_table_sql(table, columns)
        with self._lock:
            if drop_if_exists:
                self.execute(self.dialect.drop_table_sql(table))
            self.execute(sql)
        return sql

    def insert(self, table: str, values: Dict[str, Any]) -> int:
        q = self.dialect.quote
        cols = list(values.keys())
        if cols:
            cols_sql = ", ".join(q(c) for c in cols)
            params_sql = ", ".join([self.placeholder] * len(cols))
            sql = f"INSERT INTO {q(table)} ({cols_sql}) VALUES ({params_sql})"
        else:
            sql = self.default_values_insert(table)
        _, last_id = self.execute(sql, [values[c] for c in cols])
        return int(last_id) if last_id is not None else -1

    def default_values_insert(self, table: str) -> str:
        return f"INSERT INTO {self.dialect.quote(table)} DEFAULT VALUES"

    @abstractmethod
    def table_exists(self, table: str) -> bool:
        """Check the catalog for a table of this name."""

    @abstractmethod
    def truncate(self, table: str) -> None:
        """Remove all rows and restart the id sequence."""

    def __repr__(self):
        state = "open" if self.conn is not None else "closed"
        return f"<{self.__class__.__name__} {self.config.database!r} {state}>"
