# =============================================================================
# File:        dbmanager/db/table_builder.py
# Purpose:     Fluent table definition (columns, defaults, constraints)
#              on top of the active driver's dialect
# =============================================================================
from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional


@dataclass
class ColumnDefinition:
    name: str
    type: str
    constraints: Optional[str] = None
    default: Any = None


class TableBuilder:
    """
    Collects column definitions in declaration order. Types are written in
    the SQLite flavour (VARCHAR(n), INTEGER, REAL, BOOLEAN, TEXT, DATE,
    TIMESTAMP); the MySQL dialect maps them when the DDL is rendered.
    Every table also gets an implicit auto-increment ``id`` primary key.
    """

    def __init__(self, database, table_name: str):
        self.database = database
        self.table_name = table_name
        self._columns: Dict[str, ColumnDefinition] = {}
        self.created = False

    # ---------- columns ----------
    def add_column(self, name: str, column_type: str, constraints: Optional[str] = None,
                   default: Any = None) -> "TableBuilder":
        self._columns[name] = ColumnDefinition(name, column_type, constraints, default)
        return self

    def add_string(self, name: str, length: int = 255) -> "TableBuilder":
        return self.add_column(name, f"VARCHAR({int(length)})")

    def add_integer(self, name: str) -> "TableBuilder":
        return self.add_column(name, "INTEGER")

    def add_double(self, name: str) -> "TableBuilder":
        return self.add_column(name, "REAL")

    def add_boolean(self, name: str) -> "TableBuilder":
        return self.add_column(name, "BOOLEAN")

    def add_text(self, name: str) -> "TableBuilder":
        return self.add_column(name, "TEXT")

    def add_date(self, name: str) -> "TableBuilder":
        return self.add_column(name, "DATE")

    def add_timestamp(self, name: str) -> "TableBuilder":
        return self.add_column(name, "TIMESTAMP")

    # ---------- columns with defaults ----------
    def add_string_default(self, name: str, default: str, length: int = 255) -> "TableBuilder":
        return self.add_column(name, f"VARCHAR({int(length)})", default=default)

    def add_integer_default(self, name: str, default: int) -> "TableBuilder":
        return self.add_column(name, "INTEGER", default=int(default))

    def add_double_default(self, name: str, default: float) -> "TableBuilder":
        return self.add_column(name, "REAL", default=float(default))

    def add_boolean_default(self, name: str, default: bool) -> "TableBuilder":
        return self.add_column(name, "BOOLEAN", default=bool(default))

    def add_text_default(self, name: str, default: str) -> "TableBuilder":
        return self.add_column(name, "TEXT", default=default)

    # ---------- inspection ----------
    @property
    def columns(self) -> List[ColumnDefinition]:
        return list(self._columns.values())

    def build_sql(self) -> str:
        return self.database.driver.dialect.create_table_sql(self.table_name, self.columns)

    # ---------- execution ----------
    def _run(self, drop_if_exists: bool):
        self.created = self.database.create_table_from(self.table_name, self.columns, drop_if_exists)
        return self.database

    def create(self):
        """CREATE TABLE IF NOT EXISTS; returns the manager for chaining."""
        return self._run(False)

    def create_or_replace(self):
        """DROP TABLE IF EXISTS + CREATE; returns the manager for chaining."""
        return self._run(True)

    def create_async(self, callback: Optional[Callable[[Any], None]] = None) -> Future:
        return self.database.submit(self._run, False, callback=callback)

    def create_or_replace_async(self, callback: Optional[Callable[[Any], None]] = None) -> Future:
        return self.database.submit(self._run, True, callback=callback)
