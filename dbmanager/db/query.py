# =============================================================================
# File:        dbmanager/db/query.py
# Purpose:     Exceptions, database types, capabilities, connection config
#              and WHERE conditions shared by drivers and builders
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Set

from dbmanager.config.env import EnvLoader
from dbmanager.helpers.core_helper import masked


# ---------- Exceptions ----------
class DBError(Exception):
    """Base error of the DB layer."""
    pass


class DBConfigError(DBError):
    """Invalid or incomplete connection configuration."""
    pass


class DBConnectionError(DBError):
    """Connection could not be opened or is not available."""
    pass


class QueryError(DBError):
    """Statement failed on the database side."""
    pass


class InvalidIdentifier(DBError, ValueError):
    """Table or column name that cannot be used as an SQL identifier."""
    pass


class CapabilityNotSupported(DBError):
    """Driver does not support the requested feature."""
    pass


# ---------- Database types ----------
class DatabaseType(Enum):
    SQLITE = "sqlite"
    MYSQL = "mysql"

    @classmethod
    def parse(cls, value: Any) -> "DatabaseType":
        if isinstance(value, cls):
            return value
        key = (str(value or "")).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise DBConfigError(f"Unknown DB_DRIVER: {value!r} (expected 'sqlite' or 'mysql')")


# ---------- Capabilities ----------
@dataclass(frozen=True)
class DriverCapabilities:
    operators: Set[str] = frozenset()
    order_by: bool = False
    limit_offset: bool = False
    transactions: bool = False
    savepoints: bool = False
    truncate: bool = False  # native TRUNCATE TABLE
    create_database: bool = False


# ---------- Connection config ----------
DEFAULT_MYSQL_PORT = 3306
DEFAULT_SQLITE_PATH = "data/db/app.db"


@dataclass
class ConnectionConfig:
    database_type: DatabaseType
    database: str
    host: Optional[str] = None
    port: int = DEFAULT_MYSQL_PORT
    user: Optional[str] = None
    password: Optional[str] = None
    connect_timeout: int = 10
    create_database: bool = True
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.database_type = DatabaseType.parse(self.database_type)
        if not self.database:
            raise DBConfigError("Database name (or SQLite file path) is required")
        if self.database_type is DatabaseType.MYSQL:
            self.host, port = _split_host(self.host or "localhost")
            if port is not None and self.port == DEFAULT_MYSQL_PORT:
                self.port = port
            self.port = int(self.port)

    # --- constructors ---
    @classmethod
    def sqlite(cls, path: str, **options) -> "ConnectionConfig":
        return cls(DatabaseType.SQLITE, path, options=options)

    @classmethod
    def mysql(cls, database: str, host: str = "localhost", user: Optional[str] = None,
              password: Optional[str] = None, port: Optional[int] = None, **kwargs) -> "ConnectionConfig":
        host_name, host_port = _split_host(host or "localhost")
        return cls(
            DatabaseType.MYSQL,
            database,
            host=host_name,
            port=int(port or host_port or DEFAULT_MYSQL_PORT),
            user=user,
            password=password,
            **kwargs,
        )

    @classmethod
    def from_env(cls) -> "ConnectionConfig":
        """
        DB_DRIVER=sqlite -> SQLITE_PATH (or DB_NAME) as the database file
        DB_DRIVER=mysql  -> DB_NAME + MYSQL_HOST/MYSQL_PORT/MYSQL_USER/MYSQL_PASSWORD
        """
        EnvLoader.load()
        db_type = DatabaseType.parse(EnvLoader.get("DB_DRIVER", "sqlite") or "sqlite")
        timeout = EnvLoader.get_int("DB_CONNECT_TIMEOUT", 10)

        if db_type is DatabaseType.SQLITE:
            path = EnvLoader.get("SQLITE_PATH") or EnvLoader.get("DB_NAME") or DEFAULT_SQLITE_PATH
            return cls(db_type, path.strip(), connect_timeout=timeout)

        database = (EnvLoader.get("DB_NAME") or "").strip()
        if not database:
            raise DBConfigError("DB_NAME is required when DB_DRIVER=mysql")
        return cls.mysql(
            database,
            host=EnvLoader.get("MYSQL_HOST", "localhost"),
            user=EnvLoader.get("MYSQL_USER", "root"),
            password=EnvLoader.get("MYSQL_PASSWORD", ""),
            port=EnvLoader.get_int("MYSQL_PORT", 0) or None,
            connect_timeout=timeout,
            create_database=EnvLoader.get_bool("MYSQL_CREATE_DATABASE", True),
        )

    def describe(self) -> Dict[str, Any]:
        data = {"driver": self.database_type.value, "database": self.database}
        if self.database_type is DatabaseType.MYSQL:
            data.update({"host": self.host, "port": self.port, "user": self.user, "password": self.password})
        return masked(data)


def _split_host(host: str):
    """'db.local:3307' -> ('db.local', 3307); 'db.local' -> ('db.local', None)."""
    host = (host or "").strip()
    if host.count(":") == 1:
        name, _, port = host.partition(":")
        if port.isdigit():
            return name or "localhost", int(port)
    return host or "localhost", None


# ---------- WHERE conditions ----------
@dataclass(frozen=True)
class Condition:
    column: str
    operator: str
    value: Any
    connector: str = "AND"
