# =============================================================================
# File:        dbmanager/db/query_builder.py
# Purpose:     Fluent SELECT / COUNT builder executed through DBManager
# =============================================================================

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Callable, Dict, List, Optional, Tuple

from dbmanager.db.query import CapabilityNotSupported, Condition
from dbmanager.db.query_result import QueryResult


class QueryBuilder:
    """
    Conditions are joined left to right exactly as they are added
    (``where`` -> AND, ``or_where`` -> OR), without parentheses.
    """

    def __init__(self, database, table: str):
        self.database = database
        self.table = table
        self._conditions: List[Condition] = []
        self._order: Optional[Tuple[str, bool]] = None
        self._limit: Optional[Tuple[int, Optional[int]]] = None

    # ---------- conditions ----------
    def _add(self, column: str, operator: str, value: Any, connector: str = "AND") -> "QueryBuilder":
        self._conditions.append(Condition(column, operator, value, connector))
        return self

    def where(self, column: str, value: Any) -> "QueryBuilder":
        return self._add(column, "=", value)

    def where_like(self, column: str, pattern: str) -> "QueryBuilder":
        """Pattern is used as given; include the % wildcards yourself."""
        return self._add(column, "LIKE", pattern)

    def where_greater_than(self, column: str, value: Any) -> "QueryBuilder":
        return self._add(column, ">", value)

    def where_less_than(self, column: str, value: Any) -> "QueryBuilder":
        return self._add(column, "<", value)

    def or_where(self, column: str, value: Any) -> "QueryBuilder":
        return self._add(column, "=", value, connector="OR")

    # ---------- ordering / paging ----------
    def order_by(self, column: str, ascending: bool = True) -> "QueryBuilder":
        self._order = (column, bool(ascending))
        return self

    def limit(self, limit: int, offset: Optional[int] = None) -> "QueryBuilder":
        self._limit = (int(limit), int(offset) if offset is not None else None)
        return self

    # ---------- SQL ----------
    @property
    def conditions(self) -> List[Condition]:
        return list(self._conditions)

    @property
    def parameters(self) -> List[Any]:
        return [c.value for c in self._conditions]

    def build_query(self, select_count: bool = False) -> str:
        driver = self.database.driver
        q = driver.dialect.quote
        placeholder = driver.placeholder
        operators = driver.capabilities().operators

        head = "SELECT COUNT(*) FROM " if select_count else "SELECT * FROM "
        sql = head + q(self.table)

        if self._conditions:
            parts: List[str] = []
            for i, cond in enumerate(self._conditions):
                if cond.operator not in operators:
                    raise CapabilityNotSupported(f"operator {cond.operator!r} not supported by {driver.dialect.name}")
                if i > 0:
                    parts.append(cond.connector)
                parts.append(f"{q(cond.column)} {cond.operator} {placeholder}")
            sql += " WHERE " + " ".join(parts)

        if not select_count and self._order:
            column, ascending = self._order
            sql += f" ORDER BY {q(column)} {'ASC' if ascending else 'DESC'}"

        if not select_count and self._limit:
            limit, offset = self._limit
            sql += f" LIMIT {limit}"
            if offset is not None:
                sql += f" OFFSET {offset}"

        return sql

    # ---------- execution ----------
    def first(self) -> bool:
        """Load the first matching row into the manager's current row."""
        return self.database.select_by_query(self)

    def get(self) -> List[Dict[str, Any]]:
        return self.database.select_multiple_by_query(self)

    def results(self) -> List[QueryResult]:
        return QueryResult.from_list(self.get())

    def count(self) -> int:
        return self.database.count_by_query(self)

    def exists(self) -> bool:
        return self.count() > 0

    def first_async(self, callback: Optional[Callable[[bool], None]] = None) -> Future:
        return self.database.submit(self.first, callback=callback)

    def get_async(self, callback: Optional[Callable[[List[Dict[str, Any]]], None]] = None) -> Future:
        return self.database.submit(self.get, callback=callback)

    def count_async(self, callback: Optional[Callable[[int], None]] = None) -> Future:
        return self.database.submit(self.count, callback=callback)

    def __repr__(self):
        return f"<QueryBuilder {self.table!r} conditions={len(self._conditions)}>"
