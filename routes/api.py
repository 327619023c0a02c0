"""
Catalog and draft API routes.

Handles:
- /api/catalog/sauces, /api/catalog/packages - Read-only catalog
- /api/draft - Current draft, start over, saved-draft info
- /api/draft/event-details, /api/draft/special-instructions - Event form
"""

from flask import Blueprint, current_app, jsonify

from core.exceptions import WingPlannerError
from logging_config import get_logger
from routes.context import (
    get_catalog,
    get_draft_service,
    json_body,
    require_int,
    sanitize_list,
    sanitize_text,
)


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.route("/catalog/sauces", methods=["GET"])
def catalog_sauces():
    return jsonify({"sauces": [s.to_dict() for s in get_catalog().sauces()]})


@api_bp.route("/catalog/packages", methods=["GET"])
def catalog_packages():
    return jsonify({"packages": get_catalog().packages()})


@api_bp.route("/draft", methods=["GET"])
def get_draft():
    service = get_draft_service()
    return jsonify(service.store.get_state().to_dict())


@api_bp.route("/draft", methods=["DELETE"])
def start_over():
    """Discard the draft ("start over")."""
    service = get_draft_service()
    service.start_over()
    logger.info("Customer started over")
    return jsonify(service.store.get_state().to_dict())


@api_bp.route("/draft/info", methods=["GET"])
def draft_info():
    """Metadata of the saved draft, for the "continue where you left off" prompt."""
    info = get_draft_service().store.draft_info()
    return jsonify({"hasDraft": info is not None, "draft": info})


@api_bp.route("/draft/event-details", methods=["POST"])
def set_event_details():
    """
    Update the event details.

    Body: {"guestCount": int, "eventType": str, "dietaryNeeds": [str]}
    All fields optional; only the given ones change.
    """
    body = json_body()
    changes = {}

    if "guestCount" in body:
        guest_count = require_int(body, "guestCount")
        min_guests = current_app.config["MIN_GUEST_COUNT"]
        max_guests = current_app.config["MAX_GUEST_COUNT"]
        if not min_guests <= guest_count <= max_guests:
            raise WingPlannerError(
                f"Guest count must be between {min_guests} and {max_guests}",
                {"field": "guestCount", "value": guest_count},
            )
        changes["guest_count"] = guest_count

    if "eventType" in body:
        changes["event_type"] = sanitize_text(body.get("eventType"), max_length=50)

    if "dietaryNeeds" in body:
        changes["dietary_needs"] = sanitize_list(body.get("dietaryNeeds"))

    state = get_draft_service().set_event_details(**changes)
    return jsonify(state.to_dict())


@api_bp.route("/draft/special-instructions", methods=["POST"])
def set_special_instructions():
    text = sanitize_text(json_body().get("text"))
    service = get_draft_service()
    service.set_special_instructions(text)
    return jsonify({"specialInstructions": text})
