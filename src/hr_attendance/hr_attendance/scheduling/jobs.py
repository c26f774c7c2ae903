"""Background jobs: daily absence sweep, overdue-task check, startup catch-up.

Jobs run in-process on an APScheduler BackgroundScheduler. Every job body
is idempotent, so coalesced or repeated runs are harmless.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from apscheduler.schedulers.background import BackgroundScheduler

from ..core.constants import (
    DEFAULT_MISFIRE_GRACE_SECONDS,
    DEFAULT_OVERDUE_CHECK_MINUTES,
    DEFAULT_STARTUP_DELAY_SECONDS,
    DEFAULT_SWEEP_HOUR,
    DEFAULT_SWEEP_MINUTE,
)

logger = logging.getLogger(__name__)

ABSENCE_SWEEP_JOB_ID = "absence-sweep"
OVERDUE_TASKS_JOB_ID = "overdue-tasks"
STARTUP_CATCHUP_JOB_ID = "startup-catchup"


def run_absence_sweep(container) -> None:
    try:
        container.sweep_service.sweep_today()
    except Exception:
        logger.exception("Scheduled absence sweep failed")


def run_overdue_check(container) -> None:
    try:
        container.task_service.mark_overdue_tasks()
    except Exception:
        logger.exception("Scheduled overdue-task check failed")


def run_startup_catchup(container) -> None:
    logger.info("Running startup catch-up")
    run_overdue_check(container)
    try:
        container.sweep_service.backfill()
    except Exception:
        logger.exception("Startup absence backfill failed")


def build_scheduler(settings) -> BackgroundScheduler:
    options = {
        "job_defaults": {
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": int(getattr(settings, "MISFIRE_GRACE_SECONDS", DEFAULT_MISFIRE_GRACE_SECONDS)),
        }
    }
    timezone = getattr(settings, "SCHEDULER_TIMEZONE", None)
    if timezone:
        options["timezone"] = timezone
    return BackgroundScheduler(**options)


def register_jobs(
    scheduler: BackgroundScheduler,
    container,
    *,
    sweep_hour: int = DEFAULT_SWEEP_HOUR,
    sweep_minute: int = DEFAULT_SWEEP_MINUTE,
    overdue_minutes: int = DEFAULT_OVERDUE_CHECK_MINUTES,
    startup_delay_seconds: int = DEFAULT_STARTUP_DELAY_SECONDS,
    now: datetime | None = None,
) -> None:
    now = now or datetime.now(scheduler.timezone)
    scheduler.add_job(
        run_absence_sweep,
        "cron",
        hour=sweep_hour,
        minute=sweep_minute,
        args=[container],
        id=ABSENCE_SWEEP_JOB_ID,
        replace_existing=True,
    )
    scheduler.add_job(
        run_overdue_check,
        "interval",
        minutes=overdue_minutes,
        args=[container],
        id=OVERDUE_TASKS_JOB_ID,
        replace_existing=True,
    )
    # Boot-time catch-up for days missed while the process was down.
    scheduler.add_job(
        run_startup_catchup,
        "date",
        run_date=now + timedelta(seconds=startup_delay_seconds),
        args=[container],
        id=STARTUP_CATCHUP_JOB_ID,
        replace_existing=True,
    )


def start_scheduler(container, settings) -> BackgroundScheduler:
    scheduler = build_scheduler(settings)
    register_jobs(
        scheduler,
        container,
        sweep_hour=int(getattr(settings, "ABSENCE_SWEEP_HOUR", DEFAULT_SWEEP_HOUR)),
        sweep_minute=int(getattr(settings, "ABSENCE_SWEEP_MINUTE", DEFAULT_SWEEP_MINUTE)),
        overdue_minutes=int(getattr(settings, "OVERDUE_CHECK_MINUTES", DEFAULT_OVERDUE_CHECK_MINUTES)),
        startup_delay_seconds=int(getattr(settings, "STARTUP_CATCHUP_DELAY_SECONDS", DEFAULT_STARTUP_DELAY_SECONDS)),
    )
    scheduler.start()
    logger.info("Scheduler started with jobs: %s", ", ".join(job.id for job in scheduler.get_jobs()))
    return scheduler
