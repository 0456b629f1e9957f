from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from ..common.web import current_actor_id, error_response, login_required
from ..container import Container
from ..core.constants import message
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/approvals", methods=["GET"], endpoint="list_approvals")
    @login_required
    def list_approvals():
        records = container.approval_service.list_pending_approvals(actor_id=current_actor_id())
        return jsonify({"result": True, "approvals": [asdict(r) for r in records]})

    @app.route("/approvals/pending", methods=["GET"], endpoint="has_approvals")
    @login_required
    def has_approvals():
        pending = container.approval_service.has_pending_approvals(actor_id=current_actor_id())
        return jsonify({"result": True, "pending": pending})

    @app.route("/approvals/<int:attendance_id>/approve", methods=["POST"], endpoint="approve_request")
    @login_required
    def approve_request(attendance_id: int):
        try:
            record = container.approval_service.approve_request(
                actor_id=current_actor_id(),
                attendance_id=attendance_id,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"result": True, "returnmessage": message("approve_successful"), "attendance": asdict(record)})

    @app.route("/approvals/<int:attendance_id>/deny", methods=["POST"], endpoint="deny_request")
    @login_required
    def deny_request(attendance_id: int):
        try:
            container.approval_service.deny_request(actor_id=current_actor_id(), attendance_id=attendance_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"result": True, "returnmessage": message("deny_successful")})
