from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response, json_body
from ..common.validators import is_blank
from ..core.exceptions import DomainError, MissingFields
from ..container import Container
from .model import to_document


def register(app: Flask, container: Container) -> None:
    tracker = container.attendance_tracker

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in():
        data = json_body()
        try:
            record = tracker.clock_in(data.get("employeeId"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Clocked in", "attendance": to_document(record)})

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out():
        data = json_body()
        try:
            record = tracker.clock_out(data.get("employeeId"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Clocked out", "attendance": to_document(record)})

    @app.route("/api/attendance/status/<employee_id>", methods=["GET"], endpoint="attendance_status")
    def attendance_status(employee_id: str):
        try:
            state = tracker.status(employee_id)
        except DomainError as e:
            return error_response(e)
        return jsonify(
            {
                "success": True,
                "employeeId": state.employee_id,
                "isClockedIn": state.is_clocked_in,
                "attendance": to_document(state.record) if state.record else None,
            }
        )

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_history")
    def attendance_history():
        employee_id = request.args.get("employeeId")
        try:
            if is_blank(employee_id):
                raise MissingFields("employeeId is required")
            records = tracker.history(
                employee_id,
                start=request.args.get("startDate") or None,
                end=request.args.get("endDate") or None,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify([to_document(r) for r in records])

    @app.route("/api/admin/stats", methods=["GET"], endpoint="admin_stats")
    def admin_stats():
        try:
            stats = tracker.daily_stats()
        except DomainError as e:
            return error_response(e)
        return jsonify(
            {
                "success": True,
                "date": stats.date,
                "presentCount": stats.present_count,
                "activeCount": stats.active_count,
                "totalActiveEmployees": stats.total_active_employees,
                "totalEmployees": stats.total_employees,
            }
        )
