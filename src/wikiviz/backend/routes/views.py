"""Dashboard view routes, /api/gender, /api/discoveries."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from wikiviz import aggregate, dashboard
from wikiviz.exceptions import NoLocatedDiscoveries

views_bp = Blueprint("views", __name__)


@views_bp.route("/gender", methods=["GET"])
def gender():
    """Gender representation per decade."""
    field = request.args.get("field", aggregate.ALL)
    mode = request.args.get("mode", "percentage")
    if mode not in dashboard.MODES:
        return jsonify({"error": f"Unknown mode '{mode}'"}), 400

    result = dashboard.gender_representation(
        current_app.config["CACHE"],
        field=field,
        mode=mode,
        ttl_minutes=current_app.config["CACHE_TTL_MINUTES"],
    )
    return jsonify(result.model_dump())


@views_bp.route("/discoveries", methods=["GET"])
def discoveries():
    """Located scientific discoveries and their decade timeline."""
    start = request.args.get("start", aggregate.TIMELINE_START, type=int)
    end = request.args.get("end", aggregate.TIMELINE_END, type=int)
    field = request.args.get("field", aggregate.ALL)
    decade = request.args.get("decade", type=int)

    try:
        result = dashboard.scientific_discoveries(
            current_app.config["CACHE"],
            start=start,
            end=end,
            field=field,
            ttl_minutes=current_app.config["CACHE_TTL_MINUTES"],
            decade=decade,
        )
    except NoLocatedDiscoveries as exc:
        return jsonify({"error": str(exc)}), 502
    return jsonify(result.model_dump())
