from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.request_utils import json_body, query_int
from ..container import Container

_FIELD_ALIASES = {"date": "work_date"}


def register(app: Flask, container: Container) -> None:
    service = container.shift_service

    def _present(shift):
        names = container.member_service.display_names()
        return shift.to_dict(member_name=names.get(shift.member_id))

    @app.route("/api/shifts", methods=["GET"], endpoint="shifts_list")
    def shifts_list():
        shifts = service.list(
            member_id=query_int("member_id"),
            month=request.args.get("month") or None,
            status=request.args.get("status") or None,
        )
        names = container.member_service.display_names()
        return jsonify({"success": True, "data": [s.to_dict(member_name=names.get(s.member_id)) for s in shifts]})

    @app.route("/api/shifts", methods=["POST"], endpoint="shifts_submit")
    def shifts_submit():
        data = json_body()
        shift_id = service.submit(
            member_id=data.get("member_id"),
            location=data.get("location"),
            work_date=data.get("date"),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            transport_fee=data.get("transport_fee"),
        )
        return jsonify({"success": True, "data": _present(service.get(shift_id))}), 201

    @app.route("/api/shifts/<int:shift_id>", methods=["PUT"], endpoint="shifts_update")
    def shifts_update(shift_id: int):
        changes = {_FIELD_ALIASES.get(k, k): v for k, v in json_body().items()}
        return jsonify({"success": True, "data": _present(service.update(shift_id, **changes))})

    @app.route("/api/shifts/<int:shift_id>/approve", methods=["POST"], endpoint="shifts_approve")
    def shifts_approve(shift_id: int):
        return jsonify({"success": True, "data": _present(service.approve(shift_id))})

    @app.route("/api/shifts/<int:shift_id>/reject", methods=["POST"], endpoint="shifts_reject")
    def shifts_reject(shift_id: int):
        return jsonify({"success": True, "data": _present(service.reject(shift_id))})

    @app.route("/api/shifts/<int:shift_id>", methods=["DELETE"], endpoint="shifts_delete")
    def shifts_delete(shift_id: int):
        service.delete(shift_id)
        return jsonify({"success": True})
