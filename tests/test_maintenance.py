import time

import pytest

from dbmanager.managers.error_manager import ErrorManager

TABLE_TX = "tst_orders_tx"


def _orders(db):
    db.create_table(TABLE_TX).add_string("code", 20).add_integer_default("amount", 0).create_or_replace()


def _add(db, code, amount):
    return db.insert(TABLE_TX).set_string("code", code).set_integer("amount", amount).execute()


def _codes(db):
    return [r["code"] for r in db.query(TABLE_TX).order_by("id").get()]


# ---------- truncate / exists ----------

def test_truncate_resets_rows_and_ids(db, users_table):
    assert db.truncate_table("users")
    assert db.query("users").count() == 0
    new_id = db.insert("users").set_string("username", "again").execute()
    assert new_id == 1


def test_truncate_missing_table(db):
    assert db.truncate_table("missing") is False
    assert ErrorManager.read() is not None


def test_table_exists(db, users_table):
    assert db.table_exists("users")
    assert not db.table_exists("no_such_table")


# ---------- raw statements ----------

def test_execute_update_returns_rowcount(db, users_table):
    _, id2, _ = users_table
    updated = db.execute_update(
        "UPDATE users SET loginCount = loginCount + 1, level = ? WHERE id = ?", "intermediate", id2
    )
    assert updated == 1
    assert db.select("users", id2)
    assert db.get_integer("loginCount") == 1
    assert db.get_string("level") == "intermediate"

    assert db.execute_update("UPDATE users SET active = ?", True) == 3
    assert db.query("users").where("active", True).count() == 3


def test_execute_update_ddl_returns_zero(db):
    assert db.execute_update("CREATE TABLE plain_t (a INTEGER)") == 0
    assert db.table_exists("plain_t")
    assert db.execute_update("DROP TABLE plain_t") == 0
    assert not db.table_exists("plain_t")
    assert ErrorManager.read() is None


def test_execute_update_error_returns_minus_one(db):
    assert db.execute_update("UPDATE nowhere SET a = 1") == -1
    assert "nowhere" in str(ErrorManager.read())


def test_execute_query(db, users_table):
    rows = db.execute_query("SELECT username FROM users WHERE money > ? ORDER BY id", 10)
    assert rows == [{"username": "johndoe"}, {"username": "bobsmith"}]
    assert db.execute_query("SELECT * FROM nowhere") == []


def test_percent_literals_are_left_alone(db, users_table):
    rows = db.execute_query("SELECT username FROM users WHERE username LIKE '%doe' ORDER BY id")
    assert [r["username"] for r in rows] == ["johndoe", "janedoe"]


# ---------- transactions ----------

def test_transaction_commit(db):
    _orders(db)
    with db.transaction():
        _add(db, "ORD-1", 100)
        _add(db, "ORD-2", 200)
    assert _codes(db) == ["ORD-1", "ORD-2"]


def test_transaction_rollback(db):
    _orders(db)
    _add(db, "ORD-1", 100)
    with pytest.raises(RuntimeError):
        with db.transaction():
            _add(db, "ORD-3", 300)
            raise RuntimeError("fail")
    assert _codes(db) == ["ORD-1"]
    assert not db.driver.in_transaction


def test_nested_transaction_rolls_back_inner_only(db):
    _orders(db)
    with db.transaction():
        _add(db, "A", 1)
        with pytest.raises(ValueError):
            with db.transaction():
                _add(db, "B", 2)
                raise ValueError("inner")
        _add(db, "C", 3)
    assert _codes(db) == ["A", "C"]


def test_failed_statement_inside_transaction_does_not_abort_it(db):
    _orders(db)
    with db.transaction():
        _add(db, "A", 1)
        assert db.execute_update("UPDATE nowhere SET a = 1") == -1
        _add(db, "B", 2)
    assert _codes(db) == ["A", "B"]


def test_async_work_waits_for_open_transaction(db):
    _orders(db)
    with db.transaction():
        _add(db, "A", 1)
        pending = db.insert(TABLE_TX).set_string("code", "B").execute_async()
        time.sleep(0.2)
        assert not pending.done()
    assert pending.result(timeout=5) == 2
    assert _codes(db) == ["A", "B"]


# ---------- async ----------

def test_maintenance_async_variants(db, users_table):
    assert db.table_exists_async("users").result(timeout=5) is True
    assert db.execute_update_async("UPDATE users SET money = ?", 1.0).result(timeout=5) == 3
    rows = db.execute_query_async("SELECT COUNT(*) AS n FROM users WHERE money = ?", 1.0).result(timeout=5)
    assert rows == [{"n": 3}]
    assert db.select_async("users", users_table[2]).result(timeout=5) is True
    assert db.get_string("username") == "bobsmith"
    assert db.truncate_table_async("users").result(timeout=5) is True
    assert db.query("users").count() == 0
