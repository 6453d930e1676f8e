# =============================================================================
# File:        dbmanager/db/sqlite_driver.py
# Purpose:     SQLite driver (embedded single-file backend):
#              - PRAGMA tuning (WAL, synchronous, busy_timeout) from .env
#              - autocommit connection, explicit BEGIN/SAVEPOINT transactions
#              - sqlite_master / sqlite_sequence based maintenance
# =============================================================================
from __future__ import annotations

import os
import sqlite3
from datetime import date, datetime
from typing import Any, Tuple

from dbmanager.config.env import EnvLoader
from dbmanager.db.base_driver import BaseDBDriver
from dbmanager.db.dialect import SQLiteDialect
from dbmanager.db.query import ConnectionConfig, DBConnectionError, DriverCapabilities

MEMORY = ":memory:"


class SQLiteDriver(BaseDBDriver):
    dialect = SQLiteDialect()

    def __init__(self, config: ConnectionConfig):
        super().__init__(config)
        path = config.database
        self.db_file = path if path == MEMORY or path.startswith("file:") else os.path.abspath(path)

    @property
    def db_errors(self) -> Tuple[type, ...]:
        return (sqlite3.Error,)

    # --- lifecycle ---
    def _open(self):
        if self.db_file != MEMORY and not self.db_file.startswith("file:"):
            if os.path.isdir(self.db_file):
                raise DBConnectionError(
                    f"SQLite path '{self.db_file}' is a directory; expected a path to a .db file."
                )
            dirpath = os.path.dirname(self.db_file) or "."
            os.makedirs(dirpath, exist_ok=True)

        # isolation_level=None -> autocommit, transactions are explicit BEGIN/COMMIT
        conn = sqlite3.connect(
            self.db_file,
            isolation_level=None,
            timeout=float(self.config.connect_timeout or 5),
            check_same_thread=False,
            uri=self.db_file.startswith("file:"),
        )
        try:
            self._apply_pragmas(conn)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def _apply_pragmas(self, conn) -> None:
        """
        Optional .env variables:
          - SQLITE_JOURNAL_MODE=wal|delete|truncate|persist|off|memory
          - SQLITE_SYNCHRONOUS=OFF|NORMAL|FULL|EXTRA
          - SQLITE_BUSY_TIMEOUT_MS=4000
        """
        cur = conn.cursor()
        try:
            cur.execute("PRAGMA foreign_keys = ON;")

            jm = (EnvLoader.get("SQLITE_JOURNAL_MODE", None) or "").strip().lower()
            if jm in ("wal", "delete", "truncate", "persist", "off", "memory") and self.db_file != MEMORY:
                cur.execute(f"PRAGMA journal_mode = {jm};")

            sync = (EnvLoader.get("SQLITE_SYNCHRONOUS", "NORMAL") or "NORMAL").strip().upper()
            if sync not in ("OFF", "NORMAL", "FULL", "EXTRA"):
                sync = "NORMAL"
            cur.execute(f"PRAGMA synchronous = {sync};")

            bt = EnvLoader.get_int("SQLITE_BUSY_TIMEOUT_MS", 4000)
            cur.execute(f"PRAGMA busy_timeout = {int(bt)};")
        finally:
            cur.close()

    def is_open(self) -> bool:
        if self.conn is None:
            return False
        try:
            self.conn.total_changes  # raises ProgrammingError once closed
            return True
        except sqlite3.ProgrammingError:
            return False

    # --- capabilities ---
    def capabilities(self) -> DriverCapabilities:
        return DriverCapabilities(
            operators=frozenset({"=", "LIKE", ">", "<"}),
            order_by=True,
            limit_offset=True,
            transactions=True,
            savepoints=True,
            truncate=False,
            create_database=False,
        )

    # --- values ---
    def adapt_value(self, value: Any) -> Any:
        # sqlite3's default datetime adapters are deprecated; store ISO-8601 text
        if isinstance(value, datetime):
            return value.isoformat(sep=" ")
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, bool):
            return int(value)
        return value

    # --- maintenance ---
    def table_exists(self, table: str) -> bool:
        row = self.fetch_one(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
            [table],
        )
        return row is not None

    def truncate(self, table: str) -> None:
        q = self.dialect.quote(table)
        with self.transaction():
            self.execute(f"DELETE FROM {q}")
            if self.table_exists("sqlite_sequence"):
                self.execute("DELETE FROM sqlite_sequence WHERE name = ?", [table])
