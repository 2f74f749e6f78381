from __future__ import annotations

import argparse
import importlib

from dotenv import load_dotenv

from config import get_settings_module

from attendance_payroll.database.bootstrap import apply_schema, list_tables, seed_demo_data


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply the database schema (and optionally demo data).")
    parser.add_argument("--seed", action="store_true", help="also insert the demo company, shift and accounts")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    if args.seed:
        seed_demo_data(db_config)

    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
