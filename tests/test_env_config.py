import pytest

from dbmanager.config.env import EnvLoader
from dbmanager.db.manager.db_manager import DBManager
from dbmanager.db.query import ConnectionConfig, DatabaseType, DBConfigError


def test_env_loader_typed_getters(monkeypatch):
    monkeypatch.setenv("X_FLAG", "Yes")
    monkeypatch.setenv("X_NUM", " 42 ")
    monkeypatch.setenv("X_BAD", "abc")
    assert EnvLoader.get_bool("X_FLAG") is True
    assert EnvLoader.get_bool("X_MISSING", True) is True
    assert EnvLoader.get_int("X_NUM") == 42
    assert EnvLoader.get_int("X_BAD", 7) == 7
    assert EnvLoader.debug_info()["loaded"] is True


def test_from_env_defaults_to_sqlite(monkeypatch, tmp_path):
    monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "env.db"))
    cfg = ConnectionConfig.from_env()
    assert cfg.database_type is DatabaseType.SQLITE
    assert cfg.database == str(tmp_path / "env.db")


def test_from_env_mysql(monkeypatch):
    monkeypatch.setenv("DB_DRIVER", "MySQL")
    monkeypatch.setenv("DB_NAME", "example")
    monkeypatch.setenv("MYSQL_HOST", "db.local:3307")
    monkeypatch.setenv("MYSQL_USER", "app")
    monkeypatch.setenv("MYSQL_PASSWORD", "secret")
    monkeypatch.setenv("MYSQL_CREATE_DATABASE", "false")
    cfg = ConnectionConfig.from_env()
    assert cfg.database_type is DatabaseType.MYSQL
    assert (cfg.host, cfg.port, cfg.user) == ("db.local", 3307, "app")
    assert cfg.create_database is False


def test_from_env_mysql_requires_db_name(monkeypatch):
    monkeypatch.setenv("DB_DRIVER", "mysql")
    with pytest.raises(DBConfigError):
        ConnectionConfig.from_env()


def test_unknown_driver_is_rejected(monkeypatch):
    monkeypatch.setenv("DB_DRIVER", "oracle")
    with pytest.raises(DBConfigError):
        ConnectionConfig.from_env()


def test_explicit_port_wins_over_host_port():
    cfg = ConnectionConfig.mysql("example", host="db.local:3307", port=3310)
    assert (cfg.host, cfg.port) == ("db.local", 3310)
    assert ConnectionConfig.mysql("example", host="db.local").port == 3306


def test_describe_masks_password():
    cfg = ConnectionConfig.mysql("example", host="localhost", user="root", password="hunter2")
    info = cfg.describe()
    assert info["password"] == "***"
    assert info["driver"] == "mysql" and info["database"] == "example"


def test_missing_database_name_is_rejected():
    with pytest.raises(DBConfigError):
        ConnectionConfig.sqlite("")


def test_constructor_selects_driver(tmp_path):
    sqlite_db = DBManager(str(tmp_path / "a.db"))
    mysql_db = DBManager("example", "localhost", "root", "")
    assert sqlite_db.database_type is DatabaseType.SQLITE
    assert sqlite_db.get_driver_name() == "SQLiteDriver"
    assert mysql_db.database_type is DatabaseType.MYSQL
    assert mysql_db.get_driver_name() == "MySQLDriver"
    assert mysql_db.active_config()["host"] == "localhost"


def test_from_env_builds_manager(monkeypatch, tmp_path):
    monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "env.db"))
    db = DBManager.from_env()
    assert db.database_name == str(tmp_path / "env.db")
    assert db.connect()
    db.close()


def test_dialect_query(tmp_path):
    sqlite_db = DBManager(str(tmp_path / "a.db"))
    mysql_db = DBManager("example", "localhost", "root", "")
    assert sqlite_db.dialect_query("A", "B") == "A"
    assert mysql_db.dialect_query("A", "B") == "B"
