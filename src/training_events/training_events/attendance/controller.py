from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import parse_flag, parse_int
from ..common.web import current_actor_id, error_response, login_required
from ..container import Container
from ..core.exceptions import DomainError
from .transitions import AttendanceSubmission, removal_label


def register(app: Flask, container: Container) -> None:
    @app.route("/trainingevent/<int:event_id>/attendance", methods=["GET"], endpoint="attendance_form")
    @login_required
    def attendance_form(event_id: int):
        args = request.args
        try:
            event = container.events_repo.get_by_id(event_id)
            defaults = container.attendance_service.load_form_defaults(
                event_id=event_id,
                user_id=parse_int(args.get("userid"), "userid", default=current_actor_id()),
                company_id=parse_int(args.get("companyid"), "companyid"),
                course_module_id=parse_int(args.get("cmid"), "cmid"),
                attendance_id=parse_int(args.get("attendanceid"), "attendanceid"),
                waitlisted=parse_flag(args.get("waitlisted")),
                request_type=parse_int(args.get("requesttype"), "requesttype"),
                refresh=parse_flag(args.get("dorefresh")),
            )
        except DomainError as e:
            return error_response(e)

        approval_type = int(event.approval_type) if event else 0
        defaults["removeme_label"] = removal_label(attending=bool(defaults["attendanceid"]), approval_type=approval_type)
        return jsonify(defaults)

    @app.route("/trainingevent/<int:event_id>/attendance", methods=["POST"], endpoint="submit_attendance")
    @login_required
    def submit_attendance(event_id: int):
        form = dict(request.get_json(silent=True) or request.form.to_dict())
        form.setdefault("trainingeventid", event_id)
        try:
            submission = AttendanceSubmission.from_form(form)
            result = container.attendance_service.process_submission(
                actor_id=current_actor_id(),
                submission=submission,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(result.as_response())
