import pytest

from dbmanager.db.dialect import MySQLDialect, SQLiteDialect, safe_ident
from dbmanager.db.manager.db_manager import DBManager
from dbmanager.db.query import InvalidIdentifier
from dbmanager.db.table_builder import ColumnDefinition


def _users(builder):
    return (builder
            .add_string("username", 50)
            .add_integer_default("loginCount", 0)
            .add_boolean_default("active", False)
            .add_text_default("notes", "New user"))


def test_sqlite_create_table_sql(tmp_path):
    db = DBManager(str(tmp_path / "x.db"))
    sql = _users(db.create_table("users")).build_sql()
    assert sql == (
        'CREATE TABLE IF NOT EXISTS "users" ('
        '"id" INTEGER PRIMARY KEY AUTOINCREMENT, '
        '"username" VARCHAR(50), '
        '"loginCount" INTEGER DEFAULT 0, '
        '"active" BOOLEAN DEFAULT 0, '
        '"notes" TEXT DEFAULT \'New user\')'
    )


def test_mysql_create_table_sql_maps_types():
    db = DBManager("example", "localhost", "root", "")
    sql = _users(db.create_table("users")).add_double("money").add_timestamp("lastLogin").build_sql()
    assert sql == (
        "CREATE TABLE IF NOT EXISTS `users` ("
        "`id` INT AUTO_INCREMENT PRIMARY KEY, "
        "`username` VARCHAR(50), "
        "`loginCount` INT DEFAULT 0, "
        "`active` TINYINT(1) DEFAULT 0, "
        "`notes` TEXT DEFAULT ('New user'), "
        "`money` DOUBLE, "
        "`lastLogin` TIMESTAMP"
        ") ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci"
    )


@pytest.mark.parametrize("sqlite_type, mysql_type", [
    ("VARCHAR(80)", "VARCHAR(80)"),
    ("INTEGER", "INT"),
    ("REAL", "DOUBLE"),
    ("BOOLEAN", "TINYINT(1)"),
    ("DATE", "DATE"),
    ("DECIMAL(10,2)", "DECIMAL(10,2)"),
])
def test_mysql_type_mapping(sqlite_type, mysql_type):
    assert MySQLDialect().map_type(sqlite_type) == mysql_type


def test_defaults_and_constraints_rendering():
    dialect = SQLiteDialect()
    col = ColumnDefinition("name", "VARCHAR(20)", "NOT NULL UNIQUE", "O'Brien")
    assert dialect.render_column(col) == "\"name\" VARCHAR(20) DEFAULT 'O''Brien' NOT NULL UNIQUE"
    assert dialect.render_literal(True) == "1"
    assert dialect.render_literal(2.5) == "2.5"


def test_explicit_id_column_is_not_duplicated():
    sql = SQLiteDialect().create_table_sql("t", [ColumnDefinition("id", "INTEGER"), ColumnDefinition("a", "TEXT")])
    assert sql.count('"id"') == 1


@pytest.mark.parametrize("name", ["users; DROP TABLE x", "1abc", "", "a-b", None])
def test_invalid_identifiers(name):
    with pytest.raises(InvalidIdentifier):
        safe_ident(name)


def test_backslashes_in_defaults():
    col = ColumnDefinition("path", "VARCHAR(100)", default="C:\\new")
    assert MySQLDialect().render_column(col) == "`path` VARCHAR(100) DEFAULT 'C:\\\\new'"
    assert SQLiteDialect().render_column(col) == "\"path\" VARCHAR(100) DEFAULT 'C:\\new'"
    assert MySQLDialect().render_literal("it's") == "'it''s'"
