# =============================================================================
# File:        dbmanager/db/manager/crud.py
# Purpose:     Reads: select by id, QueryBuilder execution and the typed
#              getters over the manager's current row
# =============================================================================
from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional

from dbmanager.db.query_builder import QueryBuilder
from dbmanager.db.query_result import QueryResult
from dbmanager.managers.error_manager import ErrorManager
from .helpers import _log, _requires_connection


class DBCrudMixin:
    _values: Dict[str, Any]
    _values_lock: threading.Lock

    def _load_row(self, row: Optional[Dict[str, Any]]) -> bool:
        if row is None:
            return False
        with self._values_lock:
            self._values = dict(row)
        return True

    # ---------- single row ----------
    @_requires_connection(False)
    def select(self, table: str, id_value: Any) -> bool:
        """Load the row with ``id = id_value`` into the current row."""
        try:
            q = self.driver.dialect.quote
            row = self.driver.fetch_one(f"SELECT * FROM {q(table)} WHERE {q('id')} = ?", [id_value])
            return self._load_row(row)
        except Exception as e:
            _log("error", f"data retrieval error: {table}#{id_value}: {e}")
            ErrorManager.create(e)
            return False

    def current_row(self) -> QueryResult:
        with self._values_lock:
            return QueryResult(self._values)

    def get_string(self, column: str, default: str = "") -> str:
        return self.current_row().get_string(column, default)

    def get_integer(self, column: str, default: int = 0) -> int:
        return self.current_row().get_int(column, default)

    def get_double(self, column: str, default: float = 0.0) -> float:
        return self.current_row().get_double(column, default)

    def get_boolean(self, column: str, default: bool = False) -> bool:
        return self.current_row().get_boolean(column, default)

    # ---------- QueryBuilder ----------
    def query(self, table: str) -> QueryBuilder:
        return QueryBuilder(self, table)

    @_requires_connection(False)
    def select_by_query(self, builder: QueryBuilder) -> bool:
        try:
            row = self.driver.fetch_one(builder.build_query(False), builder.parameters)
            return self._load_row(row)
        except Exception as e:
            _log("error", f"query retrieval error: {builder.table}: {e}")
            ErrorManager.create(e)
            return False

    @_requires_connection([])
    def select_multiple_by_query(self, builder: QueryBuilder) -> List[Dict[str, Any]]:
        try:
            return self.driver.fetch_all(builder.build_query(False), builder.parameters)
        except Exception as e:
            _log("error", f"multiple query retrieval error: {builder.table}: {e}")
            ErrorManager.create(e)
            return []

    @_requires_connection(0)
    def count_by_query(self, builder: QueryBuilder) -> int:
        try:
            value = self.driver.fetch_scalar(builder.build_query(True), builder.parameters)
            return int(value or 0)
        except Exception as e:
            _log("error", f"count query error: {builder.table}: {e}")
            ErrorManager.create(e)
            return 0
