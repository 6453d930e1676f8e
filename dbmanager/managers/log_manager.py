# ============================================================================
# File:       dbmanager/managers/log_manager.py
# Purpose:    Class level logging API over LogHandler
# ============================================================================

import threading
from collections import deque

from dbmanager.handlers.log_handler import LogHandler
from dbmanager.helpers.core_helper import safe_call


class LogManager:
    max_entries = 1000
    _log_entries = deque(maxlen=max_entries)
    _lock = threading.Lock()

    @classmethod
    def initialize(cls, max_entries: int = None):
        """Starts an empty in-memory list keeping only the newest ``max_entries``."""
        with cls._lock:
            if max_entries is not None:
                cls.max_entries = max_entries
            cls._log_entries = deque(maxlen=cls.max_entries)

    @classmethod
    def create(cls, level: str, message: str):
        """
        Central log entry point. Keeps the entry in memory and delegates to LogHandler.
        Falls back to LogHandler._write when there is no method for the level.
        """
        level_upper = (level or "").upper()
        level_lower = level_upper.lower()

        with cls._lock:
            cls._log_entries.append((level_upper, message))

        method = getattr(LogHandler, level_lower, None)
        if callable(method):
            safe_call(method, message)
            return

        safe_call(LogHandler._write, level_upper, message)

    @classmethod
    def read(cls, last_only: bool = False):
        if last_only and cls._log_entries:
            return cls._log_entries[-1]
        return list(cls._log_entries)

    @classmethod
    def delete(cls, index: int = None):
        with cls._lock:
            if index is None:
                cls._log_entries.clear()
            elif 0 <= index < len(cls._log_entries):
                del cls._log_entries[index]

    # === shortcuts ===

    @classmethod
    def debug(cls, message: str):
        cls.create("DEBUG", message)

    @classmethod
    def info(cls, message: str):
        cls.create("INFO", message)

    @classmethod
    def warning(cls, message: str):
        cls.create("WARNING", message)

    @classmethod
    def success(cls, message: str):
        cls.create("SUCCESS", message)

    @classmethod
    def error(cls, message: str):
        cls.create("ERROR", message)

    @classmethod
    def critical(cls, message: str):
        cls.create("CRITICAL", message)
