from __future__ import annotations

from timeclock.database.bootstrap import SCHEMA_PATH, iter_sql_statements, strip_create_db_and_use


def test_strip_create_db_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE t (id INT);\n"

    assert strip_create_db_and_use(sql).strip() == "CREATE TABLE t (id INT);"


def test_iter_sql_statements_respects_quotes_and_comments():
    sql = """
    -- comment; not a statement
    INSERT INTO t VALUES ('a;b');
    INSERT INTO t VALUES ("it\\"s;");
    SELECT 1
    """

    statements = list(iter_sql_statements(sql))

    assert statements == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("it\\"s;")',
        "SELECT 1",
    ]


def test_schema_declares_one_open_shift_per_employee():
    statements = list(iter_sql_statements(strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))))
    shifts = next(s for s in statements if "CREATE TABLE" in s and "attendance_shifts" in s)

    assert "open_employee_id" in shifts
    assert "UNIQUE" in shifts
    assert "ON DELETE RESTRICT" in shifts
