from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.request_utils import query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    def _name(member_id: int):
        return container.member_service.display_names().get(member_id)

    @app.route("/api/payroll/<month>", methods=["GET"], endpoint="payroll_month")
    def payroll_month(month: str):
        names = container.member_service.display_names()
        summaries = service.summarize_month(month)
        return jsonify(
            {"success": True, "data": [s.to_dict(member_name=names.get(s.member_id)) for s in summaries]}
        )

    @app.route("/api/payroll/<int:member_id>/<month>", methods=["GET"], endpoint="payroll_member")
    def payroll_member(member_id: int, month: str):
        summary = service.summarize(member_id, month)
        return jsonify({"success": True, "data": summary.to_dict(member_name=_name(member_id))})

    @app.route("/api/payroll/<int:member_id>/<month>/statement", methods=["GET"], endpoint="payroll_statement")
    def payroll_statement(member_id: int, month: str):
        statement = service.statement(member_id, month)
        return jsonify({"success": True, "data": statement.to_dict(member_name=_name(member_id))})

    @app.route("/api/payroll/<int:member_id>/<month>/projected", methods=["GET"], endpoint="payroll_projected")
    def payroll_projected(member_id: int, month: str):
        summary = service.projected(member_id, month)
        return jsonify({"success": True, "data": summary.to_dict(member_name=_name(member_id))})

    @app.route("/api/payroll/<int:member_id>/<month>/finalize", methods=["POST"], endpoint="payroll_finalize")
    def payroll_finalize(member_id: int, month: str):
        record = service.finalize(member_id, month)
        return jsonify({"success": True, "data": record.to_dict(member_name=_name(member_id))}), 201

    @app.route("/api/salary", methods=["GET"], endpoint="salary_list")
    def salary_list():
        names = container.member_service.display_names()
        records = service.list_finalized(member_id=query_int("member_id"), month=request.args.get("month") or None)
        return jsonify({"success": True, "data": [r.to_dict(member_name=names.get(r.member_id)) for r in records]})

    @app.route("/api/salary/<int:member_id>/<month>", methods=["GET"], endpoint="salary_get")
    def salary_get(member_id: int, month: str):
        record = service.get_finalized(member_id, month)
        return jsonify({"success": True, "data": record.to_dict(member_name=_name(member_id))})

    @app.route("/api/salary/<int:salary_id>", methods=["DELETE"], endpoint="salary_delete")
    def salary_delete(salary_id: int):
        service.delete_finalized(salary_id)
        return jsonify({"success": True})
