"""
Main routes (health check).
"""

from flask import Blueprint, current_app, jsonify

main_bp = Blueprint("main", __name__)


@main_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with catalog status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {},
    }

    catalog = current_app.config.get("CATALOG_SERVICE")
    if catalog and catalog.sauces():
        health_status["checks"]["catalog"] = f"{len(catalog.sauces())} sauces"
    else:
        health_status["checks"]["catalog"] = "empty"
        health_status["status"] = "degraded"

    return jsonify(health_status)
