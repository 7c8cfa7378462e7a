"""Schema and demo-data setup used by ``create_app`` and the scripts/ helpers."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from werkzeug.security import generate_password_hash

from .connection import DBConfig, DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

DEMO_STAFF = (
    # username, password, role, full_name, position
    ("admin", "admin123", "admin", "Portal Administrator", None),
    ("faculty", "faculty123", "faculty", "Faculty Demo", None),
    ("sbo", "sbo123", "sbo", "SBO Officer Demo", "Secretary"),
)

_CREATE_DB_OR_USE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")


def _factory(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_dict(db_config))


def _strip_create_db_and_use(sql: str) -> str:
    # the target database comes from DB_CONFIG, not from the script
    return _CREATE_DB_OR_USE.sub("", sql)


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a SQL script on ``;`` while leaving quoted semicolons alone."""
    buf: list[str] = []
    quote = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    factory = _factory(db_config)
    name = factory.config.database
    with db_cursor(factory, dictionary=False, with_database=False) as (_, cur):
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed and run every statement of ``schema_path``."""
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    applied = 0
    with db_cursor(_factory(db_config), dictionary=False) as (_, cur):
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            applied += 1
    logger.info("Applied %d schema statements from %s", applied, schema_path)
    return applied


def ensure_demo_accounts(db_config: dict) -> None:
    """Create or refresh one staff account per staff role."""
    with db_cursor(_factory(db_config), dictionary=False) as (_, cur):
        for username, password, role, full_name, position in DEMO_STAFF:
            cur.execute(
                """
                INSERT INTO staff_accounts (username, role, full_name, position, password_hash)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    full_name = VALUES(full_name),
                    position = VALUES(position),
                    password_hash = VALUES(password_hash)
                """,
                (username, role, full_name, position, generate_password_hash(password)),
            )
    logger.info("Demo staff accounts ready: %s", ", ".join(u for u, *_ in DEMO_STAFF))


def list_tables(db_config: dict) -> list[str]:
    with db_cursor(_factory(db_config), dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]


def describe_table(db_config: dict, table: str) -> list[str]:
    """Column names of ``table``, in declaration order."""
    if table not in list_tables(db_config):
        raise LookupError(f"Table {table!r} does not exist")
    with db_cursor(_factory(db_config), dictionary=False) as (_, cur):
        cur.execute(f"SHOW COLUMNS FROM `{table}`")
        return [row[0] for row in cur.fetchall()]
