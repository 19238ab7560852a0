from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import error_response, json_body
from ..core.exceptions import DomainError
from ..container import Container
from .model import public_view


def register(app: Flask, container: Container) -> None:
    directory = container.employee_directory

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    def create_employee():
        data = json_body()
        try:
            employee = directory.create(
                employee_id=data.get("employeeId"),
                name=data.get("name"),
                email=data.get("email"),
                phone=data.get("phone"),
                department=data.get("department"),
                device_id=data.get("deviceId"),
                password=data.get("password"),
            )
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "message": "Employee added successfully",
                "employee": public_view(employee),
            }
        )

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        try:
            employees = directory.list_all()
        except DomainError as e:
            return error_response(e)
        return jsonify([public_view(e) for e in employees])

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: str):
        try:
            employee = directory.get(employee_id)
        except DomainError as e:
            return error_response(e)
        return jsonify(public_view(employee))

    @app.route("/api/employees/<employee_id>/password", methods=["PUT"], endpoint="change_password")
    def change_password(employee_id: str):
        data = json_body()
        try:
            directory.change_password(
                employee_id,
                old_password=data.get("oldPassword"),
                new_password=data.get("newPassword"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Password updated successfully"})

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        try:
            result = directory.authenticate(data.get("employeeId"), data.get("password"))
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "message": "Login successful",
                "employee": public_view(result.employee),
                "requiresPasswordChange": result.requires_password_change,
            }
        )
