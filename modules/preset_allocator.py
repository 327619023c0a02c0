"""
Sauce allocation presets.

Given the customer's chosen sauces and the wing distribution, a preset fills
in every wing type's assignment list:

    all-same      First sauce on every wing of every type
    even-mix      Each type split evenly across all sauces; the remainder
                  goes one wing each to the first sauces in selection order
    one-per-type  One sauce per active wing type, wrapping around the sauce
                  list when there are more types than sauces
    custom        Nothing filled in; the customer uses the editor

Wing types with zero wings always get an empty list. Every generated
assignment is tossed; the editor is where a customer switches a sauce to
on-the-side.
"""

from __future__ import annotations

from typing import Callable, Dict, Sequence

from logging_config import get_logger
from models.sauce import AssignmentsByWingType, Sauce, SauceAssignment, empty_assignments
from models.wings import WingDistribution


logger = get_logger(__name__)

ALL_SAME = "all-same"
EVEN_MIX = "even-mix"
ONE_PER_TYPE = "one-per-type"
CUSTOM = "custom"

PRESETS = (ALL_SAME, EVEN_MIX, ONE_PER_TYPE, CUSTOM)

PRESET_LABELS = {
    ALL_SAME: "All Same",
    EVEN_MIX: "Even Mix",
    ONE_PER_TYPE: "One Per Type",
    CUSTOM: "Custom",
}


def _all_same(sauces: Sequence[Sauce], distribution: WingDistribution) -> AssignmentsByWingType:
    assignments = empty_assignments()
    if not sauces:
        return assignments

    sauce = sauces[0]
    for wing_type in distribution.active_wing_types():
        assignments[wing_type] = [
            SauceAssignment.for_sauce(sauce, distribution.count_for(wing_type))
        ]
    return assignments


def _even_mix(sauces: Sequence[Sauce], distribution: WingDistribution) -> AssignmentsByWingType:
    assignments = empty_assignments()
    n = len(sauces)
    if n == 0:
        return assignments

    for wing_type in distribution.active_wing_types():
        base, remainder = divmod(distribution.count_for(wing_type), n)
        assignments[wing_type] = [
            SauceAssignment.for_sauce(sauce, base + 1 if index < remainder else base)
            for index, sauce in enumerate(sauces)
        ]
    return assignments


def _one_per_type(sauces: Sequence[Sauce], distribution: WingDistribution) -> AssignmentsByWingType:
    assignments = empty_assignments()
    n = len(sauces)
    if n == 0:
        return assignments

    for index, wing_type in enumerate(distribution.active_wing_types()):
        sauce = sauces[index % n]
        assignments[wing_type] = [
            SauceAssignment.for_sauce(sauce, distribution.count_for(wing_type))
        ]
    return assignments


def _custom(sauces: Sequence[Sauce], distribution: WingDistribution) -> AssignmentsByWingType:
    return empty_assignments()


_STRATEGIES: Dict[str, Callable[[Sequence[Sauce], WingDistribution], AssignmentsByWingType]] = {
    ALL_SAME: _all_same,
    EVEN_MIX: _even_mix,
    ONE_PER_TYPE: _one_per_type,
    CUSTOM: _custom,
}


def apply_preset(
    preset_id: str,
    sauces: Sequence[Sauce],
    wing_distribution: WingDistribution,
) -> AssignmentsByWingType:
    """
    Build assignments for every wing type using a preset.

    An unrecognised preset id falls back to ``custom`` (all lists empty)
    rather than raising: the editor underneath should stay usable.

    Args:
        preset_id: One of PRESETS
        sauces: Selected sauces, in the order the customer picked them
        wing_distribution: Wing counts per type

    Returns:
        Mapping of every wing type to its assignment list
    """
    strategy = _STRATEGIES.get(preset_id)
    if strategy is None:
        logger.warning(f"Unknown sauce preset '{preset_id}', leaving assignments empty")
        strategy = _custom

    assignments = strategy(sauces, wing_distribution)
    logger.debug(
        f"Preset {preset_id} over {len(sauces)} sauces: "
        + ", ".join(
            f"{wing_type}={sum(a.wing_count for a in items)}"
            for wing_type, items in assignments.items()
        )
    )
    return assignments


def preset_preview(
    preset_id: str,
    sauces: Sequence[Sauce],
    wing_distribution: WingDistribution,
) -> Dict[str, str]:
    """
    Short per-wing-type description of what a preset would produce.

    Used by the preset picker, e.g. ``{"boneless": "Buffalo (25), BBQ (25)"}``.
    Wing types without wings are left out.
    """
    preview = {}
    for wing_type, items in apply_preset(preset_id, sauces, wing_distribution).items():
        if not wing_distribution.count_for(wing_type):
            continue
        if items:
            preview[wing_type] = ", ".join(f"{a.sauce_name} ({a.wing_count})" for a in items)
        else:
            preview[wing_type] = "Assign manually"
    return preview
