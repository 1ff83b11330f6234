"""SPARQL proxy routes, /api/sparql/*."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from wikiviz.backend.services.sparql_service import SparqlService

sparql_bp = Blueprint("sparql", __name__)


def _get_svc() -> SparqlService:
    return SparqlService(
        current_app.config["CACHE"],
        current_app.config["CACHE_TTL_MINUTES"],
    )


@sparql_bp.route("/query", methods=["POST"])
def proxy_query():
    """Run a SPARQL query against Wikidata through the shared cache.

    Solves CORS by making the request server-side.
    """
    data = request.get_json(force=True)
    query = data.get("query", "")
    ttl_minutes = data.get("ttl_minutes")
    flatten = data.get("normalize", True)

    if not query:
        return jsonify({"error": "Missing 'query'"}), 400
    if ttl_minutes is not None and (
        isinstance(ttl_minutes, bool) or not isinstance(ttl_minutes, (int, float))
    ):
        return jsonify({"error": "'ttl_minutes' must be a number"}), 400
    if not isinstance(flatten, bool):
        return jsonify({"error": "'normalize' must be a boolean"}), 400

    result = _get_svc().execute(
        query=query,
        ttl_minutes=ttl_minutes,
        flatten=flatten,
    )
    return jsonify(result.model_dump())
