"""Print a bearer token for local testing.

Usage: python scripts/issue_token.py <employee_id> <tenant_code> [role]
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_attendance.hr_attendance.auth.tokens import TokenService
from src.hr_attendance.hr_attendance.core.enums import Role


def main(argv: list[str]) -> int:
    if len(argv) not in (2, 3):
        print(__doc__.strip())
        return 2

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    tokens = TokenService(settings.JWT_SECRET, algorithm=getattr(settings, "JWT_ALGORITHM", "HS256"))
    role = Role(argv[2]) if len(argv) == 3 else Role.EMPLOYEE
    print(tokens.issue(int(argv[0]), argv[1], role))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
