# =============================================================================
# File:        dbmanager/db/insert_builder.py
# Purpose:     Fluent single-row insert; unset columns fall back to the
#              defaults registered when the table was created
# =============================================================================
from __future__ import annotations

from concurrent.futures import Future
from datetime import date
from typing import Any, Callable, Dict, Optional


class InsertBuilder:
    def __init__(self, database, table_name: str):
        self.database = database
        self.table_name = table_name
        self._values: Dict[str, Any] = {}
        self.last_insert_id = -1

    def set_value(self, column: str, value: Any) -> "InsertBuilder":
        self._values[column] = value
        return self

    def set_string(self, column: str, value: Optional[str]) -> "InsertBuilder":
        return self.set_value(column, value if value is not None else "")

    def set_integer(self, column: str, value: int) -> "InsertBuilder":
        return self.set_value(column, int(value))

    def set_double(self, column: str, value: float) -> "InsertBuilder":
        return self.set_value(column, float(value))

    def set_boolean(self, column: str, value: bool) -> "InsertBuilder":
        return self.set_value(column, bool(value))

    def set_date(self, column: str, value: date) -> "InsertBuilder":
        return self.set_value(column, value)

    @property
    def values(self) -> Dict[str, Any]:
        return dict(self._values)

    def execute(self) -> int:
        """Insert the row. Returns the generated id or -1 on failure."""
        self.last_insert_id = self.database.insert_row(self.table_name, self._values)
        return self.last_insert_id

    def execute_async(self, callback: Optional[Callable[[int], None]] = None) -> Future:
        return self.database.submit(self.execute, callback=callback)
