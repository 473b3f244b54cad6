from __future__ import annotations

from flask import Flask, jsonify

from ..common.request_utils import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.location_service

    @app.route("/api/locations", methods=["GET"], endpoint="locations_list")
    def locations_list():
        return jsonify({"success": True, "data": [loc.to_dict() for loc in service.list()]})

    @app.route("/api/locations", methods=["POST"], endpoint="locations_create")
    def locations_create():
        data = json_body()
        location_id = service.create(
            name=data.get("name"),
            hourly_wage=data.get("hourly_wage"),
            category=data.get("type"),
            transport_fee=data.get("transport_fee"),
            logo=data.get("logo"),
            member_transport_fees=data.get("member_transport_fees"),
        )
        return jsonify({"success": True, "data": service.get(location_id).to_dict()}), 201

    @app.route("/api/locations/<int:location_id>", methods=["GET"], endpoint="locations_get")
    def locations_get(location_id: int):
        return jsonify({"success": True, "data": service.get(location_id).to_dict()})

    @app.route("/api/locations/<int:location_id>", methods=["PUT"], endpoint="locations_update")
    def locations_update(location_id: int):
        data = json_body()
        if "type" in data:
            data["category"] = data.pop("type")
        location = service.update(location_id, **data) if data else service.get(location_id)
        return jsonify({"success": True, "data": location.to_dict()})

    @app.route("/api/locations/<int:location_id>", methods=["DELETE"], endpoint="locations_delete")
    def locations_delete(location_id: int):
        service.delete(location_id)
        return jsonify({"success": True})
