"""Run the absence sweep once, outside the scheduler.

Usage:
    python scripts/run_sweep.py                 # same-day sweep for every tenant
    python scripts/run_sweep.py --tenant ACME   # same-day sweep for one tenant
    python scripts/run_sweep.py --backfill 30   # backfill the trailing 30 days
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_attendance.hr_attendance.container import build_container


def main() -> None:
    parser = argparse.ArgumentParser(description="Mark absent employees")
    parser.add_argument("--tenant", help="only sweep this tenant code")
    parser.add_argument("--backfill", type=int, metavar="DAYS", help="backfill the trailing DAYS days instead")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        jwt_secret=settings.JWT_SECRET or "unused",
        backfill_days=int(getattr(settings, "BACKFILL_DAYS", 30)),
    )
    if args.backfill is not None:
        results = container.sweep_service.backfill(days=args.backfill)
    else:
        results = [container.sweep_service.sweep_today(tenant_code=args.tenant)]
    print(json.dumps([r.to_dict() for r in results], indent=2))


if __name__ == "__main__":
    main()
