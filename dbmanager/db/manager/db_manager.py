# =============================================================================
# File:        dbmanager/db/manager/db_manager.py
# Purpose:     Thin facade class that combines all mixins into DBManager
# =============================================================================
from __future__ import annotations

import threading
from typing import Optional

from dbmanager.db.query import ConnectionConfig

from .config import DBConfigMixin
from .connection import DBConnectionMixin
from .async_ops import DBAsyncMixin
from .schema import DBSchemaMixin
from .crud import DBCrudMixin
from .maintenance import DBMaintenanceMixin
from .transactions import DBTransactionsMixin


class DBManager(DBConfigMixin, DBConnectionMixin, DBAsyncMixin, DBSchemaMixin,
                DBCrudMixin, DBMaintenanceMixin, DBTransactionsMixin):
    """
    Central DB class over SQLite (file) or MySQL (server).

    DBManager("users.db")                             -> SQLite
    DBManager("example", "localhost", "root", "")     -> MySQL
    DBManager.from_env() / DBManager.from_config(cfg)

    - connect(), reconnect(), close(), is_connected(), *_async variants
    - create_table() -> TableBuilder, insert() -> InsertBuilder, query() -> QueryBuilder
    - select(), get_string()/get_integer()/get_double()/get_boolean()
    - truncate_table(), table_exists(), execute_update(), execute_query()
    - transaction(), dialect_query(), capabilities()
    """

    def __init__(self, database_name: Optional[str] = None, host: Optional[str] = None,
                 user: Optional[str] = None, password: Optional[str] = None, *,
                 port: Optional[int] = None, config: Optional[ConnectionConfig] = None,
                 max_workers: Optional[int] = None):
        if config is None:
            if host is None:
                config = ConnectionConfig.sqlite(database_name)
            else:
                config = ConnectionConfig.mysql(database_name, host=host, user=user,
                                                password=password, port=port)
        self._values = {}
        self._values_lock = threading.Lock()
        self._schemas = {}
        self._executor = None
        self._executor_closed = False
        self._executor_lock = threading.Lock()
        self._connected = False
        self._setup(config, max_workers)

    def __repr__(self):
        state = "connected" if self.is_connected() else "disconnected"
        return f"<DBManager {self.config.database_type.value}:{self.config.database!r} {state}>"
