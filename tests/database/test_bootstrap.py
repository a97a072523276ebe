from __future__ import annotations

from payroll_system.database.bootstrap import SCHEMA_PATH, _strip_create_db_and_use, iter_sql_statements
from payroll_system.database.mysql_base import is_duplicate_key


def test_split_ignores_semicolons_in_quotes_and_comments():
    sql = """
    -- comment; not a statement
    INSERT INTO t VALUES ('a;b');
    CREATE TABLE `odd;name` (id INT);
    SELECT 1
    """

    stmts = list(iter_sql_statements(sql))

    assert stmts == ["INSERT INTO t VALUES ('a;b')", "CREATE TABLE `odd;name` (id INT)", "SELECT 1"]


def test_strip_create_database_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS payroll_db;\nUSE payroll_db;\nCREATE TABLE x (id INT);\n"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE x (id INT)"]


def test_packaged_schema_has_all_tables():
    sql = _strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))
    stmts = list(iter_sql_statements(sql))

    names = [s.split("(")[0].split()[-1] for s in stmts]
    assert names == ["employees", "attendance_records", "leave_requests", "salary_history", "hold_ledger"]
    salary = stmts[3]
    assert "UNIQUE" in salary and "employee_id" in salary and "month" in salary


class _Err(Exception):
    def __init__(self, errno):
        self.errno = errno


def test_is_duplicate_key():
    assert is_duplicate_key(_Err(1062))
    assert not is_duplicate_key(_Err(1213))
    assert not is_duplicate_key(ValueError())
