# =============================================================================
# File:        dbmanager/db/manager/maintenance.py
# Purpose:     Truncate, table existence and raw parameterised statements
# =============================================================================
from __future__ import annotations

from typing import Any, Dict, List

from dbmanager.managers.error_manager import ErrorManager
from .helpers import _log, _requires_connection


class DBMaintenanceMixin:
    @_requires_connection(False)
    def truncate_table(self, table: str) -> bool:
        """SQLite: DELETE + sqlite_sequence reset; MySQL: TRUNCATE TABLE."""
        try:
            self.driver.truncate(table)
            _log("info", f"table truncated: {table}")
            return True
        except Exception as e:
            _log("error", f"truncate table error: {table}: {e}")
            ErrorManager.create(e)
            return False

    @_requires_connection(False)
    def table_exists(self, table: str) -> bool:
        try:
            return self.driver.table_exists(table)
        except Exception as e:
            ErrorManager.create(e)
            return False

    @_requires_connection(-1)
    def execute_update(self, sql: str, *params: Any) -> int:
        """
        INSERT/UPDATE/DELETE/DDL with '?' placeholders on both backends.
        Returns the affected row count, -1 on error.
        """
        try:
            rowcount, _ = self.driver.execute(sql, list(params))
            return rowcount
        except Exception as e:
            _log("error", f"execute update error: {e}")
            ErrorManager.create(e)
            return -1

    @_requires_connection([])
    def execute_query(self, sql: str, *params: Any) -> List[Dict[str, Any]]:
        try:
            return self.driver.fetch_all(sql, list(params))
        except Exception as e:
            _log("error", f"execute query error: {e}")
            ErrorManager.create(e)
            return []
