# =============================================================================
# File:        dbmanager/db/manager/async_ops.py
# Purpose:     Background execution on a per-manager thread pool; every
#              *_async call returns a Future and takes an optional callback
# =============================================================================
from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, List, Dict, Optional

from .helpers import _deliver


class DBAsyncMixin:
    _executor: Optional[ThreadPoolExecutor] = None
    _executor_closed: bool = False
    _max_workers: int = 4

    @property
    def _thread_prefix(self) -> str:
        return f"dbmanager-{id(self):x}"

    @property
    def executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                if self._executor_closed:
                    raise RuntimeError("cannot schedule new work after close()")
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix=self._thread_prefix,
                )
            return self._executor

    def submit(self, fn: Callable[..., Any], *args, callback: Optional[Callable[[Any], None]] = None,
               **kwargs) -> Future:
        future = self.executor.submit(fn, *args, **kwargs)
        if callback is not None:
            future.add_done_callback(lambda f: _deliver(f, callback))
        return future

    def _shutdown_executor(self) -> None:
        with self._executor_lock:
            self._executor_closed = True
            executor, self._executor = self._executor, None
        if executor is None:
            return
        # a worker closing its own manager must not wait on itself
        on_worker = threading.current_thread().name.startswith(self._thread_prefix)
        executor.shutdown(wait=not on_worker)

    # ---------- async variants ----------
    def select_async(self, table: str, id_value: Any,
                     callback: Optional[Callable[[bool], None]] = None) -> Future:
        return self.submit(self.select, table, id_value, callback=callback)

    def truncate_table_async(self, table: str, callback: Optional[Callable[[bool], None]] = None) -> Future:
        return self.submit(self.truncate_table, table, callback=callback)

    def table_exists_async(self, table: str, callback: Optional[Callable[[bool], None]] = None) -> Future:
        return self.submit(self.table_exists, table, callback=callback)

    def execute_update_async(self, sql: str, *params,
                             callback: Optional[Callable[[int], None]] = None) -> Future:
        return self.submit(self.execute_update, sql, *params, callback=callback)

    def execute_query_async(self, sql: str, *params,
                            callback: Optional[Callable[[List[Dict[str, Any]]], None]] = None) -> Future:
        return self.submit(self.execute_query, sql, *params, callback=callback)
