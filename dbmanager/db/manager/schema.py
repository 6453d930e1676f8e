# =============================================================================
# File:        dbmanager/db/manager/schema.py
# Purpose:     Table creation and row insertion (TableBuilder/InsertBuilder
#              entry points + the statements behind them)
# =============================================================================
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from dbmanager.db.insert_builder import InsertBuilder
from dbmanager.db.table_builder import ColumnDefinition, TableBuilder
from dbmanager.managers.error_manager import ErrorManager
from .helpers import _log, _requires_connection


class DBSchemaMixin:
    _schemas: Dict[str, List[ColumnDefinition]]

    # ---------- builders ----------
    def create_table(self, table: str) -> TableBuilder:
        return TableBuilder(self, table)

    def insert(self, table: str) -> InsertBuilder:
        return InsertBuilder(self, table)

    def table_columns(self, table: str) -> List[ColumnDefinition]:
        """Column definitions registered by the last create of ``table``."""
        return list(self._schemas.get(table, []))

    # ---------- statements ----------
    @_requires_connection(False)
    def create_table_from(self, table: str, columns: Sequence[ColumnDefinition],
                          drop_if_exists: bool = False) -> bool:
        try:
            self.driver.create_table(table, list(columns), drop_if_exists=drop_if_exists)
            self._schemas[table] = list(columns)
            _log("success", f"table created: {table}")
            return True
        except Exception as e:
            _log("error", f"table creation error: {table}: {e}")
            ErrorManager.create(e)
            return False

    @_requires_connection(-1)
    def insert_row(self, table: str, values: Dict[str, Any]) -> int:
        """Insert one row, filling unset columns that have a registered default."""
        try:
            row = dict(values or {})
            for column in self._schemas.get(table, []):
                if column.name not in row and column.default is not None:
                    row[column.name] = column.default
            new_id = self.driver.insert(table, row)
            _log("info", f"data inserted into table: {table}, id: {new_id}")
            return new_id
        except Exception as e:
            _log("error", f"data insertion error: {table}: {e}")
            ErrorManager.create(e)
            return -1
