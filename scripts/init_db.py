from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.employee_directory.employee_directory.database.bootstrap import apply_schema, list_tables
from src.employee_directory.employee_directory.database.connection import DBConfig
from src.employee_directory.employee_directory.main import load_app_settings


def main() -> None:
    settings = load_app_settings()
    db_config = DBConfig.from_url(settings.database_url)

    apply_schema(db_config)
    tables = list_tables(db_config)
    print(f"OK: Applied schema.sql -> {db_config.safe_repr()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
