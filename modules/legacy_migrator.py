"""
Upgrade of drafts saved before per-wing-type sauce assignments existed.

Older drafts kept a flat sauce list under ``currentConfig.sauces``, one entry
per sauce with a single ``wingCount`` and no wing type, and nested the wing
distribution under ``currentConfig``. There is no way to tell from that shape
which wing type each sauce was meant for, so migration hands each active wing
type one whole sauce (the one-per-type preset) and drops the old per-sauce
counts.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import replace
from typing import Dict, Any, List

from logging_config import get_logger
from models.draft import SauceAssignmentState
from models.results import SauceAssignmentSummary
from models.sauce import Sauce, empty_assignments
from models.wings import WingDistribution
from modules.preset_allocator import ONE_PER_TYPE, apply_preset
from modules.summary_aggregator import calculate_sauce_assignment_summary


logger = get_logger(__name__)


def _legacy_wing_count(entry: Dict[str, Any]) -> int:
    # Early drafts called the field "quantity"
    value = entry.get("wingCount", entry.get("quantity", 0))
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _legacy_sauce(entry: Dict[str, Any]) -> Sauce:
    """The sauce exactly as the old draft described it (no catalog fallbacks)."""
    return replace(Sauce.from_dict(entry), name=entry.get("name", ""))


def migrate_sauce_data(
    old_sauce_list: List[Dict[str, Any]],
    wing_distribution: WingDistribution,
) -> SauceAssignmentState:
    """
    Convert a flat legacy sauce list into per-wing-type assignments.

    Args:
        old_sauce_list: Entries like ``{"id", "name", "wingCount", "category"?,
            "isDryRub"?, "heatLevel"?, "imageUrl"?}``
        wing_distribution: The draft's wing distribution

    Returns:
        SauceAssignmentState with preset 'one-per-type', or an empty state
        with ``applied_preset=None`` when no entry had wings
    """
    kept = [entry for entry in old_sauce_list or [] if _legacy_wing_count(entry) > 0]
    selected = [_legacy_sauce(entry) for entry in kept]

    if not selected:
        return SauceAssignmentState(
            selected_sauces=[],
            applied_preset=None,
            assignments=empty_assignments(),
            summary=SauceAssignmentSummary(),
        )

    assignments = apply_preset(ONE_PER_TYPE, selected, wing_distribution)
    logger.info(
        f"Migrated {len(selected)} legacy sauces "
        f"({len(old_sauce_list) - len(kept)} without wings dropped)"
    )
    return SauceAssignmentState(
        selected_sauces=selected,
        applied_preset=ONE_PER_TYPE,
        assignments=assignments,
        summary=calculate_sauce_assignment_summary(assignments, wing_distribution),
    )


def is_legacy_draft(state: Dict[str, Any]) -> bool:
    """True for a persisted draft state that still uses the flat sauce shape."""
    current_config = state.get("currentConfig") or {}
    if "sauceAssignments" in current_config:
        return False
    return "sauces" in current_config or "wingDistribution" in current_config


def upgrade_draft(state: Dict[str, Any]) -> Dict[str, Any]:
    """
    Rewrite a legacy draft state dict into the current wire shape.

    The input is not modified. Keys the current draft does not know about
    (dips, sides, pricing, ...) are dropped by ``DraftState.from_dict`` later.
    """
    upgraded = deepcopy(state)
    current_config = upgraded.setdefault("currentConfig", {})

    nested_distribution = current_config.pop("wingDistribution", None)
    if "wingDistribution" not in upgraded and nested_distribution is not None:
        upgraded["wingDistribution"] = nested_distribution

    distribution = WingDistribution.from_dict(upgraded.get("wingDistribution"))
    legacy_sauces = current_config.pop("sauces", [])
    current_config["sauceAssignments"] = migrate_sauce_data(legacy_sauces, distribution).to_dict()

    return upgraded
