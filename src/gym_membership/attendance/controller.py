from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<int:member_id>", methods=["GET"], endpoint="member_attendance")
    def member_attendance(member_id: int):
        rows = container.attendance_service.history(member_id)
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/attendance/checkin/<int:member_id>", methods=["POST"], endpoint="checkin")
    def checkin(member_id: int):
        record = container.attendance_service.check_in(member_id)
        return jsonify({"id": record.attendance_id, "message": "Check-in recorded successfully"}), 201

    @app.route("/api/attendance/checkout/<int:attendance_id>", methods=["POST"], endpoint="checkout")
    def checkout(attendance_id: int):
        duration = container.attendance_service.check_out(attendance_id)
        return jsonify({"message": "Check-out recorded successfully", "durationMinutes": duration})

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="attendance_report")
    def attendance_report():
        value = request.args.get("date")
        day = parse_iso_date(value) if value else None
        return jsonify(container.attendance_service.statistics(day=day).to_dict())
