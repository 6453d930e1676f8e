from datetime import date, datetime
from decimal import Decimal

from dbmanager.db.query_result import QueryResult


def _row():
    return QueryResult({
        "id": 7,
        "username": "johndoe",
        "loginCount": "12",
        "money": 100,
        "active": 1,
        "flag": "true",
        "bad": "n/a",
        "joined": "2024-01-02",
        "lastLogin": "2024-05-17 09:30:00",
        "missing": None,
    })


def test_typed_getters():
    row = _row()
    assert row.get_string("username") == "johndoe"
    assert row.get_string("id") == "7"
    assert row.get_int("loginCount") == 12
    assert row.get_long("id") == 7
    assert row.get_double("money") == 100.0
    assert row.get_boolean("active") is True
    assert row.get_boolean("flag") is True


def test_defaults_for_missing_null_and_unparsable():
    row = _row()
    assert row.get_string("missing", "x") == "x"
    assert row.get_string("nope") == ""
    assert row.get_int("bad", 3) == 3
    assert row.get_double("bad", 1.5) == 1.5
    assert row.get_boolean("nope", True) is True
    assert row.get_date("bad") is None


def test_get_date_parses_iso_text():
    row = _row()
    joined = row.get_date("joined")
    assert joined == date(2024, 1, 2) and not isinstance(joined, datetime)
    assert row.get_date("lastLogin") == datetime(2024, 5, 17, 9, 30)
    native = QueryResult({"d": date(2020, 2, 29)})
    assert native.get_date("d") == date(2020, 2, 29)


def test_mapping_helpers():
    row = _row()
    assert row.has("username") and not row.has("missing")
    assert "missing" in row
    assert row["id"] == 7
    assert row.columns[0] == "id"
    copy = row.data
    copy["id"] = 8
    assert row["id"] == 7
    assert row == QueryResult(row.data)


def test_from_list():
    rows = QueryResult.from_list([{"a": 1}, {"a": 2}])
    assert [r.get_int("a") for r in rows] == [1, 2]
    assert QueryResult.from_list(None) == []


def test_decimal_values_are_numeric():
    row = QueryResult({"total": Decimal("12.50"), "one": Decimal("1.00"), "zero": Decimal("0")})
    assert row.get_int("total") == 12
    assert row.get_long("total") == 12
    assert row.get_double("total") == 12.5
    assert row.get_boolean("one") is True
    assert row.get_boolean("zero", True) is False
