from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_console.attendance_console.database.bootstrap import apply_seed_sql, ensure_admin_user


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    parser = argparse.ArgumentParser(description="Load demo shifts/employees and create the console administrator.")
    parser.add_argument("--email", default=getattr(settings, "ADMIN_EMAIL", "admin@example.com"))
    parser.add_argument("--password", default=getattr(settings, "ADMIN_PASSWORD", ""))
    parser.add_argument("--skip-demo", action="store_true", help="only create the administrator")
    args = parser.parse_args()

    if len(args.password or "") < 6:
        parser.error("administrator password must be at least 6 characters (set ADMIN_PASSWORD or --password)")

    if not args.skip_demo:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_admin_user(db_config, email=args.email, password=args.password)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
