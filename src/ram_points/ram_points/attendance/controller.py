from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route(
        "/api/events/<int:event_id>/attendance/<int:member_id>",
        methods=["PUT"],
        endpoint="grant_attendance",
    )
    def grant_attendance(event_id: int, member_id: int):
        data = request.get_json(silent=True) or {}
        result = container.attendance_service.grant_attendance(
            event_id=event_id, member_id=member_id, points=data.get("points")
        )
        return jsonify(
            {
                "eventId": result.event_id,
                "memberId": result.member_id,
                "points": result.points,
                "previousPoints": result.previous_points,
                "created": result.created,
                "delta": result.delta,
            }
        ), (201 if result.created else 200)

    @app.route("/api/members/<int:member_id>/attendance", methods=["GET"], endpoint="member_attendance")
    def member_attendance(member_id: int):
        rows = container.attendance_service.history_for_member(member_id)
        return jsonify(
            [
                {
                    "eventId": r.event_id,
                    "eventName": r.event_name,
                    "date": r.event_date.isoformat(),
                    "points": r.points,
                }
                for r in rows
            ]
        )
