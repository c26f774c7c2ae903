from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, g, jsonify, request

from ..auth.decorators import build_guards
from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_int
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from ..container import Container

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)
_HANDLED_ERRORS = tuple(cls for cls, _ in _STATUS_BY_ERROR)


def _ok(message: str, data=None, status: int = 200):
    return jsonify({"success": True, "message": message, "data": data}), status


def _optional_date(name: str):
    value = request.args.get(name)
    return parse_iso_date(value) if value else None


def register(app: Flask, container: Container) -> None:
    token_required, admin_required = build_guards(container.tokens)
    service = container.attendance_service

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except _HANDLED_ERRORS as e:
                status = next(code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls))
                return jsonify({"success": False, "message": str(e)}), status
            except Exception:
                logger.exception("Unhandled error in %s", request.path)
                return jsonify({"success": False, "message": "Internal server error"}), 500

        return wrapper

    @app.route("/api/attendance/in", methods=["POST"], endpoint="attendance_clock_in")
    @token_required
    @json_errors
    def clock_in():
        record = service.clock_in(g.identity.employee_id, g.identity.tenant_code)
        return _ok("Clocked in", record.to_dict(), 201)

    @app.route("/api/attendance/out", methods=["POST"], endpoint="attendance_clock_out")
    @token_required
    @json_errors
    def clock_out():
        record = service.clock_out(g.identity.employee_id, g.identity.tenant_code)
        return _ok("Clocked out", record.to_dict())

    @app.route("/api/attendance/status", methods=["GET"], endpoint="attendance_today_status")
    @token_required
    @json_errors
    def today_status():
        status = service.today_status(g.identity.employee_id, g.identity.tenant_code)
        return _ok("Today's status", status.to_dict())

    @app.route("/api/attendance/list", methods=["GET"], endpoint="attendance_month_list")
    @token_required
    @json_errors
    def month_list():
        year = request.args.get("year")
        month = request.args.get("month")
        rows = service.month_records(
            g.identity.employee_id,
            g.identity.tenant_code,
            year=require_int(year, "year") if year else None,
            month=require_int(month, "month") if month else None,
        )
        return _ok("Attendance list", [r.to_dict() for r in rows])

    @app.route("/api/attendance/all", methods=["GET"], endpoint="attendance_all")
    @admin_required
    @json_errors
    def all_records():
        rows = service.records_for_tenant(g.identity.tenant_code, day=_optional_date("date"))
        return _ok("Attendance records", rows)

    @app.route("/api/attendance/user/<int:employee_id>", methods=["GET"], endpoint="attendance_by_employee")
    @admin_required
    @json_errors
    def by_employee(employee_id: int):
        records = service.records_for_employee(g.identity.tenant_code, employee_id, day=_optional_date("date"))
        return _ok("Attendance records", [r.to_dict() for r in records])

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="attendance_manual")
    @admin_required
    @json_errors
    def manual():
        record = service.create_manual(g.identity.tenant_code, request.get_json(silent=True) or {})
        return _ok("Attendance saved", record.to_dict(), 201)

    @app.route("/api/attendance/<record_id>", methods=["PUT"], endpoint="attendance_update")
    @admin_required
    @json_errors
    def update(record_id: str):
        record = service.update_record(g.identity.tenant_code, record_id, request.get_json(silent=True) or {})
        return _ok("Attendance updated", record.to_dict())

    @app.route("/api/attendance/<record_id>", methods=["DELETE"], endpoint="attendance_delete")
    @admin_required
    @json_errors
    def delete(record_id: str):
        service.delete_record(g.identity.tenant_code, record_id)
        return _ok("Attendance deleted")

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @admin_required
    @json_errors
    def stats():
        result = service.stats(
            g.identity.tenant_code,
            start=_optional_date("start_date"),
            end=_optional_date("end_date"),
        )
        return _ok("Attendance stats", result.to_dict())

    @app.route("/api/attendance/sweep", methods=["POST"], endpoint="attendance_sweep")
    @admin_required
    @json_errors
    def sweep():
        result = container.sweep_service.sweep_today(tenant_code=g.identity.tenant_code)
        return _ok("Absence sweep finished", result.to_dict())
