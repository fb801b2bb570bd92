"""Prepare the MySQL database: apply schema.sql, optionally seed the demo cohort.

    python scripts/init_db.py            # schema only
    python scripts/init_db.py --seed     # schema + demo cohort
    python scripts/init_db.py --check    # report missing tables, change nothing
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.geo_attendance.geo_attendance.database.bootstrap import apply_schema, apply_seed_sql, missing_tables
from src.geo_attendance.geo_attendance.database.connection import DBConfig


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--seed", action="store_true", help="also load database/seed.sql")
    parser.add_argument("--check", action="store_true", help="only report missing tables")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = DBConfig.from_dict(db_config).describe()

    if args.check:
        missing = missing_tables(db_config)
        if missing:
            raise SystemExit(f"MISSING in {target}: {', '.join(missing)}")
        print(f"OK: {target} has every table")
        return

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"OK: Applied schema.sql -> {target}")

    if args.seed:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        print(f"OK: Seeded demo cohort -> {target}")

    missing = missing_tables(db_config)
    if missing:
        raise SystemExit(f"ERROR: still missing after init: {', '.join(missing)}")


if __name__ == "__main__":
    main()
