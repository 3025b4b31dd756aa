from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from .aggregator import RecomputeResult


def _result_to_json(result: RecomputeResult) -> dict:
    return {
        "memberId": result.member_id,
        "before": result.before.as_columns(),
        "after": result.after.as_columns(),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/maintenance/drift", methods=["GET"], endpoint="find_drift")
    def find_drift():
        return jsonify([_result_to_json(r) for r in container.aggregator.find_drift()])

    @app.route("/api/maintenance/recompute", methods=["POST"], endpoint="recompute_totals")
    def recompute_totals():
        drifted = container.aggregator.recompute_all()
        return jsonify({"repaired": [_result_to_json(r) for r in drifted]})
