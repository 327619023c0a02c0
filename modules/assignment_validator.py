"""
Validation of sauce assignments against wing totals.

Problems are returned as messages, never raised. Several can be reported for
the same wing type (a negative count and an over-assignment, say).
"""

from __future__ import annotations

from typing import List, Sequence

from models.results import AssignmentValidation, WingTypeValidation
from models.sauce import (
    MAX_HEAT_LEVEL,
    MIN_HEAT_LEVEL,
    ApplicationMethod,
    AssignmentsByWingType,
    Sauce,
    SauceAssignment,
    SauceCategory,
)
from models.wings import WING_TYPES, WingDistribution
from modules.arithmetic import round_half_up


NEGATIVE_COUNT_ERROR = "Wing count cannot be negative"
DRY_RUB_ON_SIDE_ERROR = "Dry rubs cannot be served on-the-side"


def validate_wing_type_assignment(
    wing_type: str,
    assignments: Sequence[SauceAssignment],
    total_wings: int,
) -> WingTypeValidation:
    """
    Check one wing type's assignments against its wing total.

    Negative counts are still added into ``assigned_total`` so the number
    the customer sees matches what they typed.

    Args:
        wing_type: Wing type identifier (used in the result only)
        assignments: Assignment list for that wing type
        total_wings: Wings of that type in the order

    Returns:
        WingTypeValidation; valid only with no errors and an exact total
    """
    assigned_total = sum(a.wing_count for a in assignments)

    if total_wings == 0:
        return WingTypeValidation(
            wing_type=wing_type,
            valid=True,
            assigned_total=assigned_total,
            total_wings=0,
            percent_complete=100,
            errors=[],
        )

    errors: List[str] = []

    if any(a.wing_count < 0 for a in assignments):
        errors.append(NEGATIVE_COUNT_ERROR)

    if any(
        a.sauce_category == SauceCategory.DRY_RUB
        and a.application_method == ApplicationMethod.ON_THE_SIDE
        for a in assignments
    ):
        errors.append(DRY_RUB_ON_SIDE_ERROR)

    if assigned_total < total_wings:
        errors.append(f"Assign {total_wings - assigned_total} more wings")
    elif assigned_total > total_wings:
        errors.append(f"Remove {assigned_total - total_wings} wings")

    return WingTypeValidation(
        wing_type=wing_type,
        valid=not errors and assigned_total == total_wings,
        assigned_total=assigned_total,
        total_wings=total_wings,
        percent_complete=round_half_up(assigned_total / total_wings * 100),
        errors=errors,
    )


def validate_all_assignments(
    assignments: AssignmentsByWingType,
    wing_distribution: WingDistribution,
) -> AssignmentValidation:
    """
    Validate every wing type; errors are prefixed with the wing type name.

    Returns:
        AssignmentValidation, valid only if all three wing types are
    """
    errors: List[str] = []
    valid = True

    for result in validate_each_wing_type(assignments, wing_distribution):
        valid = valid and result.valid
        errors.extend(f"{result.wing_type}: {error}" for error in result.errors)

    return AssignmentValidation(valid=valid, errors=errors)


def validate_each_wing_type(
    assignments: AssignmentsByWingType,
    wing_distribution: WingDistribution,
) -> List[WingTypeValidation]:
    """Per-wing-type results in canonical order."""
    return [
        validate_wing_type_assignment(
            wing_type,
            assignments.get(wing_type, []),
            wing_distribution.count_for(wing_type),
        )
        for wing_type in WING_TYPES
    ]


def validate_sauce(sauce: Sauce) -> List[str]:
    """Cross-field checks for a catalog sauce record."""
    errors = []
    if sauce.category == SauceCategory.DRY_RUB and not sauce.is_dry_rub:
        errors.append(f"{sauce.name} is categorized as a dry rub but not flagged isDryRub")
    if sauce.is_dry_rub and sauce.category != SauceCategory.DRY_RUB:
        errors.append(f"{sauce.name} is flagged isDryRub but categorized as {sauce.category}")
    if not MIN_HEAT_LEVEL <= sauce.heat_level <= MAX_HEAT_LEVEL:
        errors.append(f"{sauce.name} heat level {sauce.heat_level} is outside 0..5")
    return errors
