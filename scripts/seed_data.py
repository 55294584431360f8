from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from src.officeroute.officeroute.database.bootstrap import ensure_bootstrap_data
from src.officeroute.officeroute.database.connection import open_database
from src.officeroute.officeroute.main import load_settings


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()

    db = open_database(settings["DATABASE_URL"])
    seeded = ensure_bootstrap_data(
        db,
        admin_password=str(settings.get("BOOTSTRAP_ADMIN_PASSWORD", "admin123")),
        employee_password=str(settings.get("BOOTSTRAP_EMPLOYEE_PASSWORD", "staff123")),
    )
    print(f"OK: {'seeded' if seeded else 'already seeded'} -> {db.engine.url}")


if __name__ == "__main__":
    main()
