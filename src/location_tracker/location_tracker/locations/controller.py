from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response, json_body
from ..common.validators import is_blank, parse_limit
from ..core.constants import DEFAULT_ACTIVITY_LIMIT, DEFAULT_SEARCH_LIMIT
from ..core.exceptions import DomainError
from ..container import Container
from .model import to_document


def register(app: Flask, container: Container) -> None:
    ledger = container.location_ledger

    def _arg(name: str):
        value = request.args.get(name)
        return None if is_blank(value) else value

    @app.route("/api/locations", methods=["POST"], endpoint="record_location")
    def record_location():
        data = json_body()
        try:
            fix = ledger.record(
                data.get("employeeId"),
                data.get("latitude"),
                data.get("longitude"),
                device_id=data.get("deviceId"),
                speed=data.get("speed"),
                accuracy=data.get("accuracy"),
                battery=data.get("battery"),
                timestamp=data.get("timestamp"),
            )
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "message": "Location recorded", "location": to_document(fix)})

    @app.route("/api/locations", methods=["GET"], endpoint="search_locations")
    def search_locations():
        try:
            fixes = ledger.search(
                employee_id=_arg("employeeId"),
                device_id=_arg("deviceId"),
                date=_arg("date"),
                start=_arg("startDate"),
                end=_arg("endDate"),
                limit=parse_limit(_arg("limit"), DEFAULT_SEARCH_LIMIT),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify([to_document(f) for f in fixes])

    @app.route("/api/locations/latest", methods=["GET"], endpoint="latest_locations")
    def latest_locations():
        try:
            fixes = ledger.latest_per_employee()
        except DomainError as e:
            return error_response(e)
        return jsonify([to_document(f) for f in fixes])

    @app.route("/api/employees/<employee_id>/locations", methods=["GET"], endpoint="employee_locations")
    def employee_locations(employee_id: str):
        try:
            fixes = ledger.recent_activity(
                employee_id,
                start=_arg("startDate"),
                end=_arg("endDate"),
                limit=parse_limit(_arg("limit"), DEFAULT_ACTIVITY_LIMIT),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify([to_document(f) for f in fixes])

    @app.route("/api/employees/<employee_id>/path", methods=["GET"], endpoint="employee_path")
    def employee_path(employee_id: str):
        start, end = _arg("startDate"), _arg("endDate")
        try:
            if start is not None or end is not None:
                fixes = ledger.history_range(employee_id, start, end)
            else:
                fixes = ledger.history(employee_id, date=_arg("date"))
        except DomainError as e:
            return error_response(e)
        return jsonify([to_document(f) for f in fixes])
