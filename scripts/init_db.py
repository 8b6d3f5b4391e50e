from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.gymflow.gymflow.database.bootstrap import apply_schema, ensure_admin_user, list_tables
from src.gymflow.gymflow.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
    admin_password = getattr(settings, "ADMIN_PASSWORD", "")
    if admin_password:
        ensure_admin_user(conn, username=getattr(settings, "ADMIN_USERNAME", "admin"), password=admin_password)

    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(list_tables(conn))})"
    )


if __name__ == "__main__":
    main()
