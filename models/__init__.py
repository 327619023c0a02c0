"""
Data models for Wing Planner.

This module contains dataclasses for:
- WingDistribution / DistributionPreference: how wings split across types
- Sauce / SauceAssignment: catalog sauces and per-wing-type allocations
- Result types: translation, validation and summary results
- DraftState: the persisted in-progress order

Every model converts to and from the camelCase wire shape with
to_dict()/from_dict(), which is what the session and the JSON API carry.
"""

from .wings import (
    WingType,
    WING_TYPES,
    WING_TYPE_LABELS,
    BONE_IN_STYLES,
    DISTRIBUTION_SOURCES,
    WingDistribution,
    DistributionPreference,
    DISTRIBUTION_PREFERENCES,
)
from .sauce import (
    SauceCategory,
    SAUCE_CATEGORIES,
    ApplicationMethod,
    APPLICATION_METHODS,
    Sauce,
    SauceAssignment,
    AssignmentsByWingType,
    empty_assignments,
    assignments_to_dict,
    assignments_from_dict,
)
from .results import (
    TranslationResult,
    MinimumViolation,
    WingTypeValidation,
    AssignmentValidation,
    SauceAssignmentSummary,
    ContainerDetails,
)
from .draft import (
    DraftSection,
    EventDetails,
    SauceAssignmentState,
    CurrentConfig,
    DraftState,
)

__all__ = [
    # Wing models
    "WingType",
    "WING_TYPES",
    "WING_TYPE_LABELS",
    "BONE_IN_STYLES",
    "DISTRIBUTION_SOURCES",
    "WingDistribution",
    "DistributionPreference",
    "DISTRIBUTION_PREFERENCES",
    # Sauce models
    "SauceCategory",
    "SAUCE_CATEGORIES",
    "ApplicationMethod",
    "APPLICATION_METHODS",
    "Sauce",
    "SauceAssignment",
    "AssignmentsByWingType",
    "empty_assignments",
    "assignments_to_dict",
    "assignments_from_dict",
    # Results
    "TranslationResult",
    "MinimumViolation",
    "WingTypeValidation",
    "AssignmentValidation",
    "SauceAssignmentSummary",
    "ContainerDetails",
    # Draft models
    "DraftSection",
    "EventDetails",
    "SauceAssignmentState",
    "CurrentConfig",
    "DraftState",
]
