from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.request_utils import json_body, query_flag, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _present(record):
        names = container.member_service.display_names()
        return record.to_dict(member_name=names.get(record.member_id))

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        records = service.list(
            member_id=query_int("member_id"),
            month=request.args.get("month") or None,
            work_date=request.args.get("date") or None,
            open_only=query_flag("open"),
        )
        names = container.member_service.display_names()
        return jsonify(
            {"success": True, "data": [r.to_dict(member_name=names.get(r.member_id)) for r in records]}
        )

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_get")
    def attendance_get(attendance_id: int):
        return jsonify({"success": True, "data": _present(service.get(attendance_id))})

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    def attendance_clock_in():
        data = json_body()
        attendance_id = service.clock_in(
            member_id=data.get("member_id"),
            location=data.get("location"),
            work_date=data.get("date"),
            clock_in=data.get("clock_in"),
        )
        return jsonify({"success": True, "data": _present(service.get(attendance_id))}), 201

    @app.route("/api/attendance/<int:attendance_id>/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    def attendance_clock_out(attendance_id: int):
        data = json_body()
        service.clock_out(attendance_id, data.get("clock_out"))
        return jsonify({"success": True, "data": _present(service.get(attendance_id))})

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    def attendance_delete(attendance_id: int):
        service.delete(attendance_id)
        return jsonify({"success": True})
