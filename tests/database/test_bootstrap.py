from __future__ import annotations

from src.gymflow.gymflow.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from src.gymflow.gymflow.main import SCHEMA_PATH


def test_iter_sql_statements_keeps_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nCREATE TABLE x (id INT);  \n"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "CREATE TABLE x (id INT)"]


def test_strip_create_db_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS gymflow_db;\nUSE gymflow_db;\nCREATE TABLE users (id INT);\n"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE users (id INT)"]


def test_schema_file_declares_all_tables():
    statements = list(iter_sql_statements(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))))
    created = " ".join(statements).lower()

    for table in ("users", "workout_plans", "class_sessions", "attendance_records", "workout_completions", "equipment"):
        assert f"create table if not exists {table}" in created
