from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .scheduling.jobs import start_scheduler

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=SQL_DIR / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=SQL_DIR / "seed.sql")
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_algorithm=getattr(settings, "JWT_ALGORITHM", "HS256"),
            backfill_days=int(getattr(settings, "BACKFILL_DAYS", 30)),
        )

    register_attendance(app, container)

    scheduler = None
    if getattr(settings, "SCHEDULER_ENABLED", False):
        scheduler = start_scheduler(container, settings)
    app.extensions["scheduler"] = scheduler

    @app.route("/api", methods=["GET"], endpoint="health")
    def health():
        return jsonify({
            "success": True,
            "message": "HR attendance API is running",
            "data": {
                "scheduler_running": bool(scheduler and scheduler.running),
                "jobs": [job.id for job in scheduler.get_jobs()] if scheduler else [],
            },
        })

    return app
