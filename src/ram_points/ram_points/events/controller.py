from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.constants import DEFAULT_EVENT_POINTS
from ..core.exceptions import ValidationError
from ..imports.roster_reader import read_roster
from .model import Event


def event_to_json(event: Event) -> dict:
    return {
        "id": event.event_id,
        "name": event.name,
        "date": event.event_date.isoformat(),
        "points": event.points,
    }


def _uploaded_rows():
    """Rows from a multipart ``roster`` file or a JSON ``rows`` list; None when neither is sent."""

    upload = request.files.get("roster")
    if upload is not None and upload.filename:
        return list(read_roster(upload.stream, upload.filename))

    data = request.get_json(silent=True) or {}
    rows = data.get("rows")
    if rows is None:
        return None
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise ValidationError("rows must be a list of objects")
    return rows


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events", methods=["GET"], endpoint="list_events")
    def list_events():
        return jsonify([event_to_json(e) for e in container.event_service.list_events()])

    @app.route("/api/events", methods=["POST"], endpoint="create_event")
    def create_event():
        data = request.form or (request.get_json(silent=True) or {})
        name = data.get("name", "")
        event_date = data.get("date", "")
        points = data.get("points", DEFAULT_EVENT_POINTS)

        rows = _uploaded_rows()
        if rows is None:
            event = container.event_service.create_event(name=name, event_date=event_date, points=points)
            return jsonify({"event": event_to_json(event), "import": None}), 201

        event, summary = container.event_service.create_event_with_roster(
            name=name, event_date=event_date, points=points, rows=rows
        )
        return jsonify({"event": event_to_json(event), "import": summary.to_dict()}), 201

    @app.route("/api/events/<int:event_id>", methods=["GET"], endpoint="get_event")
    def get_event(event_id: int):
        event = container.event_service.get_event(event_id)
        records = container.attendance_repo.list_for_event(event_id)
        payload = event_to_json(event)
        payload["attendance"] = [{"memberId": r.member_id, "points": r.points} for r in records]
        return jsonify(payload)

    @app.route("/api/events/<int:event_id>", methods=["DELETE"], endpoint="delete_event")
    def delete_event(event_id: int):
        return jsonify(container.event_service.delete_event(event_id).to_dict())

    @app.route("/api/events/<int:event_id>/import", methods=["POST"], endpoint="import_roster")
    def import_roster(event_id: int):
        rows = _uploaded_rows()
        if rows is None:
            raise ValidationError("Send a roster file or a rows list")
        return jsonify(container.importer.import_rows(event_id, rows).to_dict())
