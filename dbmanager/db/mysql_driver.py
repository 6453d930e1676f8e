# =============================================================================
# File:        dbmanager/db/mysql_driver.py
# Purpose:     MySQL driver (networked backend) on top of PyMySQL:
#              - optional CREATE DATABASE IF NOT EXISTS before connecting
#              - utf8mb4 autocommit connection, explicit transactions
#              - '?' placeholders rewritten to PyMySQL's '%s'
# =============================================================================
from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

import pymysql

from dbmanager.db.base_driver import BaseDBDriver
from dbmanager.db.dialect import MySQLDialect
from dbmanager.db.query import DriverCapabilities
from dbmanager.managers.log_manager import LogManager


def qmark_to_format(sql: str, has_params: bool = True) -> str:
    """
    Rewrite '?' placeholders (outside quoted literals/identifiers) to '%s'.
    With parameters PyMySQL applies '%' formatting to the whole statement,
    so every literal '%' is doubled as well.
    """
    if not has_params:
        return sql
    out: List[str] = []
    quote: Optional[str] = None
    i = 0
    n = len(sql)
    while i < n:
        ch = sql[i]
        if ch == "%":
            out.append("%%")
        elif quote:
            out.append(ch)
            if ch == "\\" and quote != "`" and i + 1 < n:
                i += 1
                nxt = sql[i]
                out.append("%%" if nxt == "%" else nxt)
            elif ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
            out.append(ch)
        elif ch == "?":
            out.append("%s")
        else:
            out.append(ch)
        i += 1
    return "".join(out)


class MySQLDriver(BaseDBDriver):
    dialect = MySQLDialect()

    @property
    def db_errors(self) -> Tuple[type, ...]:
        return (pymysql.MySQLError,)

    def _connect_kwargs(self, with_database: bool = True) -> dict:
        kwargs = {
            "host": self.config.host,
            "port": int(self.config.port),
            "user": self.config.user,
            "password": self.config.password or "",
            "charset": "utf8mb4",
            "autocommit": True,
            "connect_timeout": int(self.config.connect_timeout or 10),
        }
        if with_database:
            kwargs["database"] = self.config.database
        kwargs.update(self.config.options or {})
        return kwargs

    # --- lifecycle ---
    def _open(self):
        if self.config.create_database:
            self._ensure_database()
        return pymysql.connect(**self._connect_kwargs())

    def _ensure_database(self) -> None:
        """Server level connection without a schema -> CREATE DATABASE IF NOT EXISTS."""
        name = self.dialect.quote(self.config.database)
        try:
            tmp = pymysql.connect(**self._connect_kwargs(with_database=False))
        except pymysql.MySQLError as e:
            LogManager.warning(f"[DBManager] database creation skipped: {e}")
            return
        try:
            with tmp.cursor() as cur:
                cur.execute(
                    f"CREATE DATABASE IF NOT EXISTS {name} "
                    "DEFAULT CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
                )
        except pymysql.MySQLError as e:
            LogManager.warning(f"[DBManager] database creation error: {e}")
        finally:
            tmp.close()

    def is_open(self) -> bool:
        return self.conn is not None and bool(getattr(self.conn, "open", False))

    # --- capabilities ---
    def capabilities(self) -> DriverCapabilities:
        return DriverCapabilities(
            operators=frozenset({"=", "LIKE", ">", "<"}),
            order_by=True,
            limit_offset=True,
            transactions=True,
            savepoints=True,
            truncate=True,
            create_database=True,
        )

    # --- values / placeholders ---
    def adapt_value(self, value: Any) -> Any:
        if isinstance(value, bool):
            return 1 if value else 0
        return value

    def prepare(self, sql: str, params: Sequence[Any]):
        values = [self.adapt_value(p) for p in params]
        if not values:
            return sql, None
        return qmark_to_format(sql), values

    def default_values_insert(self, table: str) -> str:
        return f"INSERT INTO {self.dialect.quote(table)} () VALUES ()"

    # --- maintenance ---
    def table_exists(self, table: str) -> bool:
        row = self.fetch_one(
            "SELECT table_name FROM information_schema.tables WHERE table_schema = ? AND table_name = ?",
            [self.config.database, table],
        )
        return row is not None

    def truncate(self, table: str) -> None:
        self.execute(f"TRUNCATE TABLE {self.dialect.quote(table)}")
