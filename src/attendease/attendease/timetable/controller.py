from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ScheduleRejected, ValidationError
from ..container import Container
from .service import PeriodInput

logger = logging.getLogger(__name__)


def _fail(message: str, status: int, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def _current_role() -> Role:
    return Role(session.get("role"))


def register(app: Flask, container: Container) -> None:
    service = container.timetable_service

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                _current_role()
            except ValueError:
                return _fail("Authentication required. Please login.", 401)
            return view(*args, **kwargs)

        return wrapper

    def handle_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ScheduleRejected as e:
                return _fail(
                    str(e),
                    400,
                    reason=e.reason.value,
                    conflicts=[c.to_dict() for c in e.conflicts],
                )
            except ValidationError as e:
                return _fail(str(e), 400)
            except AuthorizationError as e:
                return _fail(str(e), 403)
            except NotFoundError as e:
                return _fail(str(e), 404)
            except Exception:
                logger.exception("Timetable request failed: %s %s", request.method, request.path)
                return _fail("Server error", 500)

        return wrapper

    def _body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @app.route("/api/timetable/<class_name>/<int:semester>", methods=["GET"], endpoint="timetable_get")
    @login_required
    @handle_errors
    def timetable_get(class_name: str, semester: int):
        timetable = service.get_timetable(class_name=class_name, semester=semester)
        return jsonify({"success": True, "data": timetable.to_dict()})

    @app.route("/api/timetable/<class_name>/<int:semester>/periods", methods=["POST"], endpoint="timetable_add_period")
    @login_required
    @handle_errors
    def timetable_add_period(class_name: str, semester: int):
        data = _body()
        timetable = service.add_period(
            current_role=_current_role(),
            class_name=class_name,
            semester=semester,
            data=PeriodInput.from_mapping(data),
            department=data.get("department"),
            academic_year=data.get("academicYear"),
            updated_by=session.get("user_id"),
        )
        return jsonify({"success": True, "data": timetable.to_dict(), "message": "Schedule saved successfully"})

    @app.route(
        "/api/timetable/<class_name>/<int:semester>/periods/check",
        methods=["POST"],
        endpoint="timetable_check_period",
    )
    @login_required
    @handle_errors
    def timetable_check_period(class_name: str, semester: int):
        decision = service.check_period(
            class_name=class_name,
            semester=semester,
            data=PeriodInput.from_mapping(_body()),
        )
        return jsonify({"success": True, "data": decision.to_dict()})

    @app.route(
        "/api/timetable/<class_name>/<int:semester>/periods/<day>/<int:index>",
        methods=["PUT"],
        endpoint="timetable_update_period",
    )
    @login_required
    @handle_errors
    def timetable_update_period(class_name: str, semester: int, day: str, index: int):
        data = _body()
        payload = PeriodInput.from_mapping(data, day=data.get("day") or day)
        timetable = service.update_period(
            current_role=_current_role(),
            class_name=class_name,
            semester=semester,
            day=day,
            index=index,
            data=payload,
            updated_by=session.get("user_id"),
        )
        return jsonify({"success": True, "data": timetable.to_dict(), "message": "Timetable updated successfully"})

    @app.route(
        "/api/timetable/<class_name>/<int:semester>/periods/<day>/<int:index>",
        methods=["DELETE"],
        endpoint="timetable_delete_period",
    )
    @login_required
    @handle_errors
    def timetable_delete_period(class_name: str, semester: int, day: str, index: int):
        removed = service.delete_period(
            current_role=_current_role(),
            class_name=class_name,
            semester=semester,
            day=day,
            index=index,
        )
        return jsonify({"success": True, "data": removed.to_dict(), "message": "Schedule deleted successfully"})

    @app.route("/api/timetable/<class_name>/<int:semester>/days/<day>", methods=["PUT"], endpoint="timetable_replace_day")
    @login_required
    @handle_errors
    def timetable_replace_day(class_name: str, semester: int, day: str):
        periods = _body().get("periods")
        if not isinstance(periods, list) or not all(isinstance(p, dict) for p in periods):
            raise ValidationError("periods must be a list of objects")
        timetable = service.replace_day(
            current_role=_current_role(),
            class_name=class_name,
            semester=semester,
            day=day,
            periods=periods,
            updated_by=session.get("user_id"),
        )
        return jsonify({"success": True, "data": timetable.to_dict(), "message": "Timetable updated successfully"})

    @app.route("/api/timetable/<class_name>/<int:semester>", methods=["DELETE"], endpoint="timetable_delete")
    @login_required
    @handle_errors
    def timetable_delete(class_name: str, semester: int):
        service.delete_timetable(current_role=_current_role(), class_name=class_name, semester=semester)
        return jsonify({"success": True, "message": "Timetable deleted successfully"})

    @app.route("/api/faculty/<instructor>/timetable", methods=["GET"], endpoint="faculty_timetable")
    @login_required
    @handle_errors
    def faculty_timetable(instructor: str):
        periods = service.instructor_timetable(instructor=instructor, semester=request.args.get("semester"))
        return jsonify({"success": True, "data": [p.to_dict() for p in periods]})
