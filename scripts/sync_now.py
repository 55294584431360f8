"""Run one reconciliation with the remote endpoint from the command line.

Usage: python scripts/sync_now.py [ENDPOINT_URL]
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from src.officeroute.officeroute.container import build_container
from src.officeroute.officeroute.main import load_settings


def main(argv: list[str]) -> int:
    load_dotenv(override=False)
    settings = load_settings({"AUTO_SYNC": False})
    logging.basicConfig(level=str(settings.get("LOG_LEVEL", "INFO")).upper())

    container = build_container(settings=settings)
    result = container.sync_reconciler.sync(argv[1] if len(argv) > 1 else None)
    print(result.message)
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
