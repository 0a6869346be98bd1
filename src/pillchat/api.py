"""JSON endpoints the request orchestrator talks to.

Successful calls answer ``{"description": ...}`` with status 200. Failures
answer ``{"error": ...}`` with a 4xx/5xx status.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from flask import Flask, jsonify, request
from loguru import logger

from .service import InvalidRequest, Pharmacist

ANALYZE_IMAGE = "analyze-image"
DRUG_DETAILS = "drug-details"

FAILURE_DETAILS = {
    ANALYZE_IMAGE: "Failed to analyze image",
    DRUG_DETAILS: "Failed to get drug details",
}


def dispatch(
    pharmacist: Pharmacist, route: str, payload: Any
) -> Tuple[Dict[str, str], int]:
    """Run one request against the pharmacist and shape the JSON reply."""
    if route not in FAILURE_DETAILS:
        return {"error": f"Unknown route: {route}"}, 404
    if not isinstance(payload, dict):
        return {"error": "Request body must be a JSON object"}, 400

    try:
        if route == ANALYZE_IMAGE:
            description = pharmacist.analyze(
                payload.get("imageData"), payload.get("prompt")
            )
        else:
            description = pharmacist.drug_details(
                payload.get("drugName"), payload.get("dosage")
            )
    except InvalidRequest as e:
        logger.info("Rejected {} request: {}", route, e)
        return {"error": str(e)}, 400
    except Exception as e:
        logger.exception("Error handling {} request", route)
        return {"error": f"{FAILURE_DETAILS[route]}: {e}"}, 500

    return {"description": description}, 200


def register_routes(server: Flask, pharmacist: Pharmacist, prefix: str = "/api"):
    """Mount the endpoints on a Flask server (for Dash apps, ``app.server``)."""

    def _endpoint(route):
        def view():
            body, status = dispatch(pharmacist, route, request.get_json(silent=True))
            return jsonify(body), status

        return view

    for route in FAILURE_DETAILS:
        server.add_url_rule(
            f"{prefix}/{route}",
            endpoint=f"pillchat_{route.replace('-', '_')}",
            view_func=_endpoint(route),
            methods=["POST"],
        )

    def health():
        return jsonify(
            {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
        )

    server.add_url_rule(
        f"{prefix}/health", endpoint="pillchat_health", view_func=health, methods=["GET"]
    )
