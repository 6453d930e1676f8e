# =============================================================================
# File:        dbmanager/db/manager/config.py
# Purpose:     Connection config resolution, driver selection and
#              capability / state overview
# =============================================================================
from __future__ import annotations

from typing import Any, Dict, Optional

from dbmanager.config.env import EnvLoader
from dbmanager.db.base_driver import BaseDBDriver
from dbmanager.db.query import ConnectionConfig, DatabaseType, DriverCapabilities
from dbmanager.db.mysql_driver import MySQLDriver
from dbmanager.db.sqlite_driver import SQLiteDriver

from .helpers import _log


def _build_driver(config: ConnectionConfig) -> BaseDBDriver:
    """Uniform driver selection by database type."""
    if config.database_type is DatabaseType.SQLITE:
        return SQLiteDriver(config)
    return MySQLDriver(config)


class DBConfigMixin:
    config: ConnectionConfig
    driver: BaseDBDriver

    def _setup(self, config: ConnectionConfig, max_workers: Optional[int] = None) -> None:
        self.config = config
        self.driver = _build_driver(config)
        self._max_workers = max_workers or EnvLoader.get_int("DB_EXECUTOR_WORKERS", 4) or 4
        _log("debug", f"configured -> {config.describe()}")

    @classmethod
    def from_config(cls, config: ConnectionConfig, max_workers: Optional[int] = None):
        return cls(config=config, max_workers=max_workers)

    @classmethod
    def from_env(cls, max_workers: Optional[int] = None):
        """DB_DRIVER, DB_NAME, SQLITE_PATH, MYSQL_* from .env / os.environ."""
        return cls(config=ConnectionConfig.from_env(), max_workers=max_workers)

    # ---------- state overview ----------
    @property
    def database_type(self) -> DatabaseType:
        return self.config.database_type

    @property
    def database_name(self) -> str:
        return self.config.database

    def get_database_type(self) -> DatabaseType:
        return self.config.database_type

    def active_config(self) -> Dict[str, Any]:
        return self.config.describe()

    def get_driver_name(self) -> str:
        return self.driver.__class__.__name__

    def capabilities(self) -> DriverCapabilities:
        return self.driver.capabilities()

    def dialect_query(self, sqlite_query: str, mysql_query: str) -> str:
        """Pick the statement written for the active backend."""
        return sqlite_query if self.config.database_type is DatabaseType.SQLITE else mysql_query
