from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from .model import Member


def member_to_json(member: Member) -> dict:
    return {
        "id": member.member_id,
        "computingId": member.computing_id,
        "name": member.name,
        "email": member.email,
        "isExec": member.is_exec,
        "totalPoints": member.total_points,
        "spring2025Total": member.spring_2025_total,
        "fall2025Total": member.fall_2025_total,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members", methods=["GET"], endpoint="list_members")
    def list_members():
        members = container.member_service.search(request.args.get("q"))
        return jsonify([member_to_json(m) for m in members])

    @app.route("/api/members", methods=["POST"], endpoint="add_member")
    def add_member():
        data = request.get_json(silent=True) or {}
        member = container.member_service.add_member(
            name=data.get("name", ""),
            computing_id=data.get("computingId", ""),
            email=data.get("email", ""),
            is_exec=bool(data.get("isExec", False)),
        )
        return jsonify(member_to_json(member)), 201

    @app.route("/api/members/<int:member_id>", methods=["GET"], endpoint="get_member")
    def get_member(member_id: int):
        return jsonify(member_to_json(container.member_service.get_member(member_id)))

    @app.route("/api/members/by-computing-id/<computing_id>", methods=["GET"], endpoint="get_member_by_computing_id")
    def get_member_by_computing_id(computing_id: str):
        return jsonify(member_to_json(container.member_service.get_by_computing_id(computing_id)))

    @app.route("/api/members/<int:member_id>", methods=["DELETE"], endpoint="delete_member")
    def delete_member(member_id: int):
        summary = container.member_service.delete_member(member_id)
        return jsonify(
            {
                "memberId": summary.member_id,
                "recordsRemoved": summary.records_removed,
                "pointsRemoved": summary.points_removed,
            }
        )
