# =============================================================================
# File:        dbmanager/db/dialect.py
# Purpose:     SQL rendering per backend: identifiers, column types,
#              DEFAULT clauses and CREATE/DROP TABLE statements
# =============================================================================
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Iterable

from dbmanager.db.query import InvalidIdentifier

_SAFE_IDENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def safe_ident(name: str) -> str:
    if not isinstance(name, str) or not _SAFE_IDENT.match(name):
        raise InvalidIdentifier(f"Invalid identifier: {name!r}")
    return name


class Dialect:
    """Base rendering rules; column types are written in the SQLite flavour and mapped per backend."""

    name = "generic"
    quote_char = '"'
    id_column = "id INTEGER PRIMARY KEY"
    table_suffix = ""

    def quote(self, name: str) -> str:
        ident = safe_ident(name)
        return f"{self.quote_char}{ident}{self.quote_char}"

    def map_type(self, column_type: str) -> str:
        return column_type

    def render_literal(self, value: Any) -> str:
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, (int, float)):
            return repr(value) if isinstance(value, float) else str(value)
        if isinstance(value, datetime):
            value = value.isoformat(sep=" ")
        elif isinstance(value, date):
            value = value.isoformat()
        text = str(value).replace("'", "''")
        return f"'{text}'"

    def render_default(self, column_type: str, value: Any) -> str:
        return f"DEFAULT {self.render_literal(value)}"

    def render_column(self, column) -> str:
        column_type = self.map_type(column.type)
        parts = [self.quote(column.name), column_type]
        if column.default is not None:
            parts.append(self.render_default(column_type, column.default))
        if column.constraints:
            parts.append(column.constraints.strip())
        return " ".join(parts)

    def create_table_sql(self, table: str, columns: Iterable) -> str:
        body = [self.id_column] + [self.render_column(c) for c in columns if c.name != "id"]
        sql = f"CREATE TABLE IF NOT EXISTS {self.quote(table)} ({', '.join(body)})"
        if self.table_suffix:
            sql += " " + self.table_suffix
        return sql

    def drop_table_sql(self, table: str) -> str:
        return f"DROP TABLE IF EXISTS {self.quote(table)}"


class SQLiteDialect(Dialect):
    name = "sqlite"
    quote_char = '"'
    id_column = '"id" INTEGER PRIMARY KEY AUTOINCREMENT'


class MySQLDialect(Dialect):
    name = "mysql"
    quote_char = "`"
    id_column = "`id` INT AUTO_INCREMENT PRIMARY KEY"
    table_suffix = "ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci"

    TYPE_MAP = {
        "INTEGER": "INT",
        "REAL": "DOUBLE",
        "BOOLEAN": "TINYINT(1)",
        "TEXT": "TEXT",
        "DATE": "DATE",
        "TIMESTAMP": "TIMESTAMP",
    }
    # BLOB/TEXT/JSON columns only accept expression defaults
    EXPRESSION_DEFAULT_TYPES = ("TEXT", "TINYTEXT", "MEDIUMTEXT", "LONGTEXT", "BLOB", "JSON")

    def render_literal(self, value: Any) -> str:
        # backslash is an escape character in MySQL string literals
        if isinstance(value, str):
            value = value.replace("\\", "\\\\")
        return super().render_literal(value)

    def map_type(self, column_type: str) -> str:
        normalized = (column_type or "").strip()
        if normalized.upper().startswith("VARCHAR"):
            return normalized
        return self.TYPE_MAP.get(normalized.upper(), normalized)

    def render_default(self, column_type: str, value: Any) -> str:
        literal = self.render_literal(value)
        if column_type.upper() in self.EXPRESSION_DEFAULT_TYPES:
            return f"DEFAULT ({literal})"
        return f"DEFAULT {literal}"
