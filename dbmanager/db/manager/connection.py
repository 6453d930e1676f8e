# =============================================================================
# File:        dbmanager/db/manager/connection.py
# Purpose:     Connection lifecycle: connect / reconnect / close and the
#              automatic reconnect used before every data operation
# =============================================================================
from __future__ import annotations

from concurrent.futures import Future
from typing import Callable, Optional

from dbmanager.managers.error_manager import ErrorManager
from .helpers import _log


class DBConnectionMixin:
    _connected: bool = False

    def connect(self) -> bool:
        try:
            self.driver.connect()
            self._connected = True
            _log("success", f"connection successful: {self.config.database} ({self.config.database_type.value})")
            return True
        except Exception as e:
            self._connected = False
            _log("error", f"connection error: {e}")
            ErrorManager.create(e)
            return False

    def is_connected(self) -> bool:
        return bool(self._connected and self.driver.is_open())

    def reconnect(self) -> bool:
        """Close the connection (workers stay alive) and connect again."""
        self._close_connection()
        return self.connect()

    def ensure_connection(self) -> bool:
        if not self.is_connected():
            _log("warning", "connection not available, reconnecting")
            return self.reconnect()
        return True

    def close(self) -> None:
        """Drain and stop background workers, then close the connection."""
        self._shutdown_executor()
        self._close_connection()

    def _close_connection(self) -> None:
        was_open = self.driver.is_open()
        try:
            self.driver.close()
        except Exception as e:
            ErrorManager.create(e)
        finally:
            self._connected = False
        if was_open:
            _log("info", "connection closed")

    def connect_async(self, callback: Optional[Callable[[bool], None]] = None) -> Future:
        return self.submit(self.connect, callback=callback)

    def reconnect_async(self, callback: Optional[Callable[[bool], None]] = None) -> Future:
        return self.submit(self.reconnect, callback=callback)

    # ---------- context manager ----------
    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
