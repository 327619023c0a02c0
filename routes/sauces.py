"""
Sauce selection and wing type editor routes.

Handles:
- /api/sauces/selection - Choose sauces (ids from the catalog)
- /api/sauces/preset, /api/sauces/reset-preset - Preset allocation
- /api/sauces/assignments/<wing_type>/<sauce_id> - Per-sauce editor row
- /api/sauces/validation, /summary, /containers - Read-only results
"""

from flask import Blueprint, jsonify

from core.exceptions import WingPlannerError
from logging_config import get_logger
from models.sauce import assignments_to_dict
from modules.preset_allocator import PRESET_LABELS, preset_preview
from routes.context import get_catalog, get_draft_service, json_body, require_int, require_str


# Module logger
logger = get_logger(__name__)

sauces_bp = Blueprint("sauces", __name__, url_prefix="/api/sauces")


def _sauce_state_response(service):
    sauce_state = service.store.get_state().sauce_assignments
    return jsonify(sauce_state.to_dict())


@sauces_bp.route("/selection", methods=["POST"])
def select_sauces():
    """
    Replace the selected sauces.

    Body: {"sauceIds": ["buffalo", "bbq"]} (selection order is kept)
    """
    sauce_ids = json_body().get("sauceIds")
    if not isinstance(sauce_ids, list):
        raise WingPlannerError("sauceIds must be a list", {"field": "sauceIds"})

    catalog = get_catalog()
    sauces = []
    for sauce_id in sauce_ids:
        sauce = catalog.get_sauce(str(sauce_id))
        if all(s.id != sauce.id for s in sauces):
            sauces.append(sauce)

    service = get_draft_service()
    service.select_sauces(sauces)
    return _sauce_state_response(service)


@sauces_bp.route("/presets", methods=["GET"])
def list_presets():
    """Presets with a preview of what each would assign for the current draft."""
    state = get_draft_service().store.get_state()
    sauces = state.sauce_assignments.selected_sauces
    return jsonify({
        "appliedPreset": state.sauce_assignments.applied_preset,
        "presets": [
            {
                "id": preset_id,
                "label": label,
                "preview": preset_preview(preset_id, sauces, state.wing_distribution),
            }
            for preset_id, label in PRESET_LABELS.items()
        ],
    })


@sauces_bp.route("/preset", methods=["POST"])
def apply_preset():
    """
    Fill every wing type with a preset.

    Body: {"presetId": "even-mix"}
    """
    preset_id = require_str(json_body(), "presetId")
    service = get_draft_service()
    service.apply_preset(preset_id)
    return _sauce_state_response(service)


@sauces_bp.route("/reset-preset", methods=["POST"])
def reset_preset():
    """Undo manual edits by re-running the applied preset."""
    service = get_draft_service()
    reset = service.reset_to_preset()
    state = service.store.get_state().sauce_assignments
    return jsonify({"reset": reset, **state.to_dict()})


@sauces_bp.route("/assignments/<wing_type>/<sauce_id>", methods=["PATCH"])
def edit_assignment(wing_type, sauce_id):
    """
    Edit one editor row.

    Body: {"wingCount"?: int, "applicationMethod"?: "tossed" | "on-the-side"}
    """
    body = json_body()
    if "wingCount" not in body and "applicationMethod" not in body:
        raise WingPlannerError("Nothing to change", {"fields": ["wingCount", "applicationMethod"]})
    wing_count = require_int(body, "wingCount") if "wingCount" in body else None
    method = require_str(body, "applicationMethod") if "applicationMethod" in body else None

    service = get_draft_service()
    logger.debug(f"Editing {wing_type}/{sauce_id}: {body}")
    validation = service.edit_assignment(wing_type, sauce_id, wing_count=wing_count, method=method)

    assignments = service.store.get_state().sauce_assignments.assignments
    return jsonify({
        "validation": validation.to_dict(),
        "assignments": assignments_to_dict(assignments)[wing_type],
    })


@sauces_bp.route("/validation", methods=["GET"])
def validation():
    return jsonify(get_draft_service().validation().to_dict())


@sauces_bp.route("/summary", methods=["GET"])
def summary():
    return jsonify(get_draft_service().summary().to_dict())


@sauces_bp.route("/containers", methods=["GET"])
def containers():
    return jsonify(get_draft_service().containers())
