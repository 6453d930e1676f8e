import os
import sys
import threading
import time
from pathlib import Path

import pytest

# project root on sys.path when tests run from any working directory
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dbmanager.config.env import EnvLoader
from dbmanager.db.manager.db_manager import DBManager
from dbmanager.managers.error_manager import ErrorManager
from dbmanager.managers.log_manager import LogManager

_ENV_KEYS = [
    "DB_DRIVER", "DB_NAME", "SQLITE_PATH", "SQLITE_JOURNAL_MODE", "SQLITE_SYNCHRONOUS",
    "SQLITE_BUSY_TIMEOUT_MS", "MYSQL_HOST", "MYSQL_PORT", "MYSQL_USER", "MYSQL_PASSWORD",
    "MYSQL_CREATE_DATABASE", "DB_CONNECT_TIMEOUT", "DB_EXECUTOR_WORKERS", "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """
    - no .env from the working tree, no DB_* variables from the shell
    - logs go to a per-test file, errors are not echoed
    - error and log registries start empty
    """
    monkeypatch.setattr(EnvLoader, "_loaded", True)
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    log_path = tmp_path / "logs" / "test.log"
    monkeypatch.setenv("LOG_FILE_PATH", str(log_path))
    monkeypatch.setenv("APP_DEBUG", "false")
    ErrorManager.initialize(dev_mode=None)
    ErrorManager.delete()
    LogManager.initialize()
    yield log_path
    ErrorManager.delete()


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "db" / "test.db")


@pytest.fixture
def db(db_path):
    manager = DBManager(db_path)
    assert manager.connect()
    yield manager
    manager.close()


@pytest.fixture
def users_table(db):
    """Create the standard users table and insert 3 rows; returns (id1, id2, id3)."""
    (db.create_table("users")
        .add_string("username", 50)
        .add_string("email", 100)
        .add_integer_default("loginCount", 0)
        .add_double_default("money", 0.0)
        .add_boolean_default("active", False)
        .add_string_default("level", "beginner")
        .add_timestamp("lastLogin")
        .add_text_default("notes", "New user")
        .create_or_replace())
    id1 = (db.insert("users").set_string("username", "johndoe").set_string("email", "john@example.com")
           .set_integer("loginCount", 5).set_double("money", 100.0).set_boolean("active", True)
           .set_string("level", "advanced").execute())
    id2 = (db.insert("users").set_string("username", "janedoe").set_string("email", "jane@example.com")
           .execute())
    id3 = (db.insert("users").set_string("username", "bobsmith").set_string("email", "bob@example.com")
           .set_integer("loginCount", 2).set_double("money", 50.5).set_boolean("active", True)
           .execute())
    return id1, id2, id3


def _wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def wait_for():
    return _wait_for


@pytest.fixture
def event():
    return threading.Event()
