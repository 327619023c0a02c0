"""
Wing distribution routes.

The planner first asks how the group eats (a distribution preference), then
splits the chosen package's wings accordingly. Customers can also type the
three counts by hand.
"""

from flask import Blueprint, jsonify

from core.exceptions import WingPlannerError
from logging_config import get_logger
from models.results import MinimumViolation
from models.wings import BONE_IN_STYLES
from routes.context import get_catalog, get_draft_service, json_body, require_int, require_str


# Module logger
logger = get_logger(__name__)

distribution_bp = Blueprint("distribution", __name__, url_prefix="/api/distribution")


@distribution_bp.route("/preview", methods=["POST"])
def preview():
    """
    Translate a preference for the draft's guest count.

    Body: {"preference": "few-vegetarian"}
    """
    preference = require_str(json_body(), "preference")
    result = get_draft_service().preview_distribution(preference)
    return jsonify(result.to_dict())


@distribution_bp.route("/apply", methods=["POST"])
def apply():
    """
    Split a package's wings according to a preference and store the result.

    Body: {"preference": str, "totalWings": int} or {"preference": str, "packageId": str}

    Returns 422 with the violation when the half-dozen minimum does not fit.
    """
    body = json_body()
    preference = require_str(body, "preference")
    if "packageId" in body:
        total_wings = get_catalog().get_package(require_str(body, "packageId"))["totalWings"]
    else:
        total_wings = require_int(body, "totalWings", minimum=0)

    service = get_draft_service()
    result = service.choose_distribution(preference, total_wings)
    if isinstance(result, MinimumViolation):
        logger.info(f"Package of {total_wings} wings too small for '{preference}'")
        return jsonify(result.to_dict()), 422

    return jsonify({
        "valid": True,
        "wingDistribution": result.to_dict(),
        "draft": service.store.get_state().to_dict(),
    })


@distribution_bp.route("", methods=["PUT"])
def set_manual():
    """
    Store hand-entered counts.

    Body: {"boneless": int, "boneIn": int, "cauliflower": int, "boneInStyle"?: str}
    """
    body = json_body()
    boneless = require_int(body, "boneless")
    bone_in = require_int(body, "boneIn")
    cauliflower = require_int(body, "cauliflower")

    bone_in_style = body.get("boneInStyle")
    if bone_in_style is not None and bone_in_style not in BONE_IN_STYLES:
        raise WingPlannerError(
            f"Unknown bone-in style: {bone_in_style}",
            {"field": "boneInStyle", "known": list(BONE_IN_STYLES)},
        )

    service = get_draft_service()
    validation = service.set_wing_distribution(boneless, bone_in, cauliflower, bone_in_style)
    if not validation.valid:
        return jsonify(validation.to_dict()), 422

    return jsonify({
        "valid": True,
        "wingDistribution": service.store.get_state().wing_distribution.to_dict(),
    })
