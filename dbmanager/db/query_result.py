# =============================================================================
# File:        dbmanager/db/query_result.py
# Purpose:     Row wrapper with typed, default-aware accessors
# =============================================================================
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

# DECIMAL columns and SUM/AVG come back as Decimal from PyMySQL
_NUMERIC = (int, float, Decimal)


class QueryResult:
    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(data or {})

    @classmethod
    def from_list(cls, rows: Iterable[Dict[str, Any]]) -> List["QueryResult"]:
        return [cls(row) for row in (rows or [])]

    # ---------- typed accessors ----------
    def get_string(self, key: str, default: str = "") -> str:
        value = self._data.get(key)
        return str(value) if value is not None else default

    def get_int(self, key: str, default: int = 0) -> int:
        value = self._data.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, _NUMERIC):
            return int(value)
        try:
            return int(str(value).strip())
        except ValueError:
            return default

    def get_long(self, key: str, default: int = 0) -> int:
        return self.get_int(key, default)

    def get_double(self, key: str, default: float = 0.0) -> float:
        value = self._data.get(key)
        if value is None:
            return default
        if isinstance(value, _NUMERIC):
            return float(value)
        try:
            return float(str(value).strip())
        except ValueError:
            return default

    def get_boolean(self, key: str, default: bool = False) -> bool:
        value = self._data.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, _NUMERIC):
            return int(value) != 0
        return str(value).strip().lower() in ("true", "1")

    def get_date(self, key: str, default: Optional[date] = None) -> Optional[date]:
        """date/datetime values as-is; ISO-8601 text (SQLite) is parsed, date-only text to a date."""
        value = self._data.get(key)
        if value is None:
            return default
        if isinstance(value, (datetime, date)):
            return value
        if isinstance(value, str):
            text = value.strip()
            try:
                if len(text) == 10:
                    return date.fromisoformat(text)
                return datetime.fromisoformat(text)
            except ValueError:
                return default
        return default

    # ---------- mapping helpers ----------
    def has(self, key: str) -> bool:
        return self._data.get(key) is not None

    @property
    def columns(self) -> List[str]:
        return list(self._data.keys())

    @property
    def data(self) -> Dict[str, Any]:
        return dict(self._data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __eq__(self, other):
        if isinstance(other, QueryResult):
            return self._data == other._data
        return NotImplemented

    def __repr__(self):
        return f"QueryResult({self._data!r})"
