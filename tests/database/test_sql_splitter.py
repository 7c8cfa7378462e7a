from pathlib import Path

from src.qr_attendance.qr_attendance.database.bootstrap import _strip_create_db_and_use, iter_sql_statements


def test_splits_on_semicolons_outside_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nINSERT INTO t VALUES (\"c;d\");  \n SELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_escaped_quote_does_not_end_string():
    sql = "INSERT INTO t VALUES ('it\\'s; fine');"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('it\\'s; fine')"]


def test_blank_statements_are_skipped():
    assert list(iter_sql_statements(";;  ;\n")) == []


def test_schema_file_creates_the_portal_tables():
    schema = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
    statements = list(iter_sql_statements(_strip_create_db_and_use(schema.read_text(encoding="utf-8"))))

    created = [s for s in statements if "CREATE TABLE" in s]
    assert len(created) == 3
    assert not any(s.lstrip().upper().startswith(("CREATE DATABASE", "USE ")) for s in statements)
