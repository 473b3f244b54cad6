from __future__ import annotations

from flask import Flask, jsonify

from ..common.request_utils import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members", methods=["GET"], endpoint="members_list")
    def members_list():
        return jsonify({"success": True, "data": [m.to_dict() for m in container.member_service.list()]})

    @app.route("/api/members", methods=["POST"], endpoint="members_create")
    def members_create():
        data = json_body()
        member_id = container.member_service.register(
            name=data.get("name"),
            email=data.get("email"),
            transport_fee=data.get("transport_fee", 0),
        )
        return jsonify({"success": True, "data": container.member_service.get(member_id).to_dict()}), 201

    @app.route("/api/members/<int:member_id>", methods=["GET"], endpoint="members_get")
    def members_get(member_id: int):
        return jsonify({"success": True, "data": container.member_service.get(member_id).to_dict()})

    @app.route("/api/members/<int:member_id>", methods=["PUT"], endpoint="members_update")
    def members_update(member_id: int):
        member = container.member_service.update(member_id, **json_body())
        return jsonify({"success": True, "data": member.to_dict()})

    @app.route("/api/members/<int:member_id>", methods=["DELETE"], endpoint="members_delete")
    def members_delete(member_id: int):
        container.member_service.delete(member_id)
        return jsonify({"success": True})
