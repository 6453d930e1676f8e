# =============================================================================
# File:        dbmanager/example.py
# Purpose:     Demo of the whole DBManager surface against SQLite or MySQL
# Run:         dbmanager-example --driver sqlite --database users.db
#              dbmanager-example --driver mysql --database example --host localhost --user root
# =============================================================================
from __future__ import annotations

import argparse
import sys
from datetime import datetime
from typing import List, Optional

from dbmanager.config.env import EnvLoader
from dbmanager.db.manager.db_manager import DBManager
from dbmanager.db.query import ConnectionConfig, DatabaseType


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="dbmanager-example", description="DBManager feature demo")
    p.add_argument("--driver", choices=[t.value for t in DatabaseType], default=None,
                   help="backend (default: DB_DRIVER or sqlite)")
    p.add_argument("--database", default=None, help="SQLite file or MySQL schema (default: from .env)")
    p.add_argument("--host", default=None, help="MySQL host[:port]")
    p.add_argument("--user", default=None, help="MySQL user")
    p.add_argument("--password", default=None, help="MySQL password")
    return p


def resolve_config(args: argparse.Namespace) -> ConnectionConfig:
    EnvLoader.load()
    driver = DatabaseType.parse(args.driver or EnvLoader.get("DB_DRIVER", "sqlite") or "sqlite")
    if driver is DatabaseType.SQLITE:
        path = args.database or EnvLoader.get("SQLITE_PATH") or "users.db"
        return ConnectionConfig.sqlite(path)
    return ConnectionConfig.mysql(
        args.database or EnvLoader.get("DB_NAME", "example"),
        host=args.host or EnvLoader.get("MYSQL_HOST", "localhost"),
        user=args.user or EnvLoader.get("MYSQL_USER", "root"),
        password=args.password if args.password is not None else EnvLoader.get("MYSQL_PASSWORD", ""),
        port=EnvLoader.get_int("MYSQL_PORT", 0) or None,
    )


def print_user_info(db: DBManager) -> None:
    print("User details:")
    print(f"- Username: {db.get_string('username', 'unknown')}")
    print(f"- Email: {db.get_string('email', 'unknown')}")
    print(f"- Name: {db.get_string('firstName')} {db.get_string('lastName')}")
    print(f"- Login count: {db.get_integer('loginCount', 0)}")
    print(f"- Money: ${db.get_double('money', 0.0)}")
    print(f"- Active: {db.get_boolean('active', False)}")
    print(f"- Level: {db.get_string('level', 'unknown')}")
    print(f"- Notes: {db.get_string('notes')}")


def run_demo(db: DBManager) -> int:
    print(f"Database type: {db.database_type.name}")
    if not db.is_connected():
        print("Database connection failed.")
        return 1
    print("Database connection is active.\n")

    print("Creating users table...")
    (db.create_table("users")
        .add_string("username", 50)
        .add_string("email", 100)
        .add_string("firstName")
        .add_string("lastName")
        .add_integer_default("loginCount", 0)
        .add_double_default("money", 0.0)
        .add_boolean_default("active", False)
        .add_string_default("level", "beginner")
        .add_timestamp("lastLogin")
        .add_text_default("notes", "New user")
        .create_or_replace())

    print("\nInserting test users...")
    user1_id = (db.insert("users")
                .set_string("username", "johndoe")
                .set_string("email", "john@example.com")
                .set_string("firstName", "John")
                .set_string("lastName", "Doe")
                .set_integer("loginCount", 5)
                .set_double("money", 100.0)
                .set_boolean("active", True)
                .set_string("level", "advanced")
                .set_date("lastLogin", datetime.now().replace(microsecond=0))
                .set_string("notes", "Regular user")
                .execute())

    # defaults fill the remaining columns
    user2_id = (db.insert("users")
                .set_string("username", "janedoe")
                .set_string("email", "jane@example.com")
                .set_string("firstName", "Jane")
                .set_string("lastName", "Doe")
                .execute())

    pending = (db.insert("users")
               .set_string("username", "bobsmith")
               .set_string("email", "bob@example.com")
               .set_string("firstName", "Bob")
               .set_string("lastName", "Smith")
               .set_boolean("active", False)
               .execute_async(lambda new_id: print(f"Async user added with ID: {new_id}")))
    pending.result(timeout=30)

    print("\nReading user 1 data...")
    if db.select("users", user1_id):
        print_user_info(db)

    print("\nReading user 2 with QueryBuilder...")
    if db.query("users").where("username", "janedoe").first():
        print_user_info(db)

    print("\nActive users with login count > 0:")
    for user in (db.query("users")
                 .where("active", True)
                 .where_greater_than("loginCount", 0)
                 .order_by("money", ascending=False)
                 .get()):
        print(f"- {user['username']}: ${user['money']}, Login count: {user['loginCount']}")

    print("\nUsers with 'doe' in username:")
    for user in db.query("users").where_like("username", "%doe%").results():
        print(f"- {user.get_string('username')} ({user.get_string('firstName')} {user.get_string('lastName')})")

    print("\nUsers who are either not active or beginners:")
    for user in db.query("users").where("active", False).or_where("level", "beginner").results():
        print(f"- {user.get_string('username')} (Active: {user.get_boolean('active')}, "
              f"Level: {user.get_string('level')})")

    print("\nUser statistics:")
    print(f"- Total users: {db.query('users').count()}")
    print(f"- Active users: {db.query('users').where('active', True).count()}")
    print(f"- Beginner users: {db.query('users').where('level', 'beginner').count()}")

    print("\nUpdating user data...")
    updated = db.execute_update(
        "UPDATE users SET loginCount = loginCount + 1, level = ? WHERE id = ?", "intermediate", user2_id
    )
    print(f"Updated {updated} rows")
    if db.select("users", user2_id):
        print("User after update:")
        print(f"- Username: {db.get_string('username')}")
        print(f"- Login count: {db.get_integer('loginCount', 0)}")
        print(f"- Level: {db.get_string('level')}")

    print("\nTop 2 users with highest money:")
    for user in db.query("users").order_by("money", ascending=False).limit(2).get():
        print(f"- {user['username']}: ${user['money']}")

    print(f"\nUsers table exists: {db.table_exists('users')}")

    print("\nTruncating users table...")
    db.truncate_table("users")
    print(f"Remaining users after truncate: {db.query('users').count()}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    db = DBManager.from_config(resolve_config(args))
    db.connect()
    print(f"\n{db.database_type.name} database test:")
    print("=" * 24)
    try:
        return run_demo(db)
    finally:
        print("\nClosing database connection...")
        db.close()
        print("Database operations completed.")


if __name__ == "__main__":
    sys.exit(main())
