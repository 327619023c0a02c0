"""
Operational totals for a set of sauce assignments.

Containers: an on-the-side sauce ships in cups, one cup per two wings,
rounded up per assignment. Two separate 1-wing on-the-side assignments need
two cups, not one. Tossed sauces need no cups, and cups are free.
"""

from __future__ import annotations

import math
from typing import Dict, Optional

from models.results import ContainerDetails, SauceAssignmentSummary
from models.sauce import ApplicationMethod, AssignmentsByWingType, SauceAssignment
from models.wings import WING_TYPES, WingDistribution
from modules.assignment_validator import validate_all_assignments, validate_each_wing_type


WINGS_PER_CONTAINER = 2


def container_count(wing_count: int) -> int:
    """Cups needed for ``wing_count`` on-the-side wings."""
    if wing_count <= 0:
        return 0
    return math.ceil(wing_count / WINGS_PER_CONTAINER)


def _containers_for(assignment: SauceAssignment) -> int:
    if assignment.application_method != ApplicationMethod.ON_THE_SIDE:
        return 0
    return container_count(assignment.wing_count)


def calculate_sauce_assignment_summary(
    assignments: AssignmentsByWingType,
    wing_distribution: Optional[WingDistribution] = None,
) -> SauceAssignmentSummary:
    """
    Reduce assignments to wing totals, per-method totals and container count.

    Pure: the input is not modified and repeated calls give equal results.

    Args:
        assignments: Assignments per wing type
        wing_distribution: Wing totals to validate against; when omitted each
            wing type is validated against its own assigned total

    Returns:
        SauceAssignmentSummary including per-type and overall validations
    """
    tossed = 0
    on_the_side = 0
    containers = 0

    for wing_type in WING_TYPES:
        for assignment in assignments.get(wing_type, []):
            if assignment.application_method == ApplicationMethod.ON_THE_SIDE:
                on_the_side += assignment.wing_count
            else:
                tossed += assignment.wing_count
            containers += _containers_for(assignment)

    if wing_distribution is None:
        wing_distribution = _distribution_from_assignments(assignments)

    validations: Dict[str, object] = {
        result.wing_type: result
        for result in validate_each_wing_type(assignments, wing_distribution)
    }
    validations["overall"] = validate_all_assignments(assignments, wing_distribution)

    return SauceAssignmentSummary(
        total_wings_assigned=tossed + on_the_side,
        tossed=tossed,
        on_the_side=on_the_side,
        containers_needed=containers,
        validations=validations,
    )


def _distribution_from_assignments(assignments: AssignmentsByWingType) -> WingDistribution:
    totals = {
        wing_type: sum(a.wing_count for a in assignments.get(wing_type, []))
        for wing_type in WING_TYPES
    }
    return WingDistribution(
        boneless=totals["boneless"],
        bone_in=totals["boneIn"],
        cauliflower=totals["cauliflower"],
    )


def container_breakdown(assignments: AssignmentsByWingType) -> Dict[str, int]:
    """Containers per wing type plus ``total``."""
    breakdown = {wing_type: 0 for wing_type in WING_TYPES}
    for wing_type in WING_TYPES:
        breakdown[wing_type] = sum(_containers_for(a) for a in assignments.get(wing_type, []))
    breakdown["total"] = sum(breakdown[wing_type] for wing_type in WING_TYPES)
    return breakdown


def container_details(assignment: SauceAssignment) -> ContainerDetails:
    """Container requirement text for one editor row."""
    needed = _containers_for(assignment)

    if needed == 0:
        display_text = "No containers"
    elif needed == 1:
        display_text = "1 container"
    else:
        display_text = f"{needed} containers"

    return ContainerDetails(
        needed=needed,
        display_text=display_text,
        is_free=True,
        note="FREE with sauce assignment" if needed > 0 else None,
    )
