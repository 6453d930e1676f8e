# ========================================================================
# File:       dbmanager/managers/error_manager.py
# Purpose:    Error registry (safe logging of every recorded error)
# ========================================================================

import threading
from collections import deque

from dbmanager.config.env import EnvLoader
from dbmanager.handlers.error_handler import ErrorHandler
from dbmanager.managers.log_manager import LogManager
from dbmanager.helpers.core_helper import safe_call


class ErrorManager:
    max_errors = 500
    _errors = deque(maxlen=max_errors)
    _dev_mode = None
    _lock = threading.Lock()

    @classmethod
    def initialize(cls, dev_mode: bool = None, max_errors: int = None):
        cls._dev_mode = dev_mode
        with cls._lock:
            if max_errors is not None:
                cls.max_errors = max_errors
            cls._errors = deque(cls._errors, maxlen=cls.max_errors)

    @classmethod
    def dev_mode(cls) -> bool:
        if cls._dev_mode is None:
            return EnvLoader.get_bool("APP_DEBUG", True)
        return cls._dev_mode

    @classmethod
    def create(cls, error: Exception):
        with cls._lock:
            cls._errors.append(error)
        formatted = ErrorHandler.format_error(error)
        trace = ErrorHandler.get_traceback(error)

        if cls.dev_mode():
            print(f"[ERROR]: {formatted}\n{trace}")

        safe_call(LogManager.create, "error", f"{formatted}\n{trace}")

    @classmethod
    def read(cls, last_only: bool = True):
        if last_only:
            return cls._errors[-1] if cls._errors else None
        return list(cls._errors)

    @classmethod
    def delete(cls, index: int = None):
        with cls._lock:
            if index is None:
                cls._errors.clear()
            elif 0 <= index < len(cls._errors):
                del cls._errors[index]
