"""Settings shared by every environment; environment modules override."""

import os


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance"),
}

JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Background jobs
SCHEDULER_ENABLED = _flag("SCHEDULER_ENABLED", "1")
# IANA zone name; empty means the server's local zone
SCHEDULER_TIMEZONE = os.getenv("SCHEDULER_TIMEZONE") or None
ABSENCE_SWEEP_HOUR = int(os.getenv("ABSENCE_SWEEP_HOUR", "10"))
ABSENCE_SWEEP_MINUTE = int(os.getenv("ABSENCE_SWEEP_MINUTE", "30"))
OVERDUE_CHECK_MINUTES = int(os.getenv("OVERDUE_CHECK_MINUTES", "30"))
BACKFILL_DAYS = int(os.getenv("BACKFILL_DAYS", "30"))
STARTUP_CATCHUP_DELAY_SECONDS = int(os.getenv("STARTUP_CATCHUP_DELAY_SECONDS", "10"))
MISFIRE_GRACE_SECONDS = int(os.getenv("MISFIRE_GRACE_SECONDS", "900"))

AUTO_INIT_DB = _flag("AUTO_INIT_DB")
AUTO_SEED_DB = _flag("AUTO_SEED_DB")
