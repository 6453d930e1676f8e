# =============================================================================
# File:        dbmanager/db/manager/helpers.py
# Purpose:     Shared helpers for the DBManager mixins
# =============================================================================
from __future__ import annotations

import copy
from concurrent.futures import Future
from functools import wraps
from typing import Any, Callable

from dbmanager.managers.error_manager import ErrorManager
from dbmanager.managers.log_manager import LogManager


def _log(level: str, msg: str):
    getattr(LogManager, level, LogManager.info)(f"[DBManager] {msg}")


def _requires_connection(fallback: Any = None):
    """
    Decorator: make sure the manager is connected (reconnecting if needed)
    before the call; when that fails the call returns ``fallback``.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(self, *a, **kw):
            if not self.ensure_connection():
                return copy.copy(fallback)
            return fn(self, *a, **kw)
        return wrapper
    return decorator


def _deliver(future: Future, callback: Callable[[Any], None]) -> None:
    """Done-callback bridge: hand the plain result to a user callback."""
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        ErrorManager.create(error)
        return
    try:
        callback(future.result())
    except Exception as e:
        ErrorManager.create(e)
