"""
Core module for Wing Planner.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
"""

from .exceptions import (
    WingPlannerError,
    CatalogLoadError,
    UnknownPreferenceError,
    UnknownWingTypeError,
    UnknownSauceError,
    UnknownPackageError,
    SauceNotSelectedError,
    InvalidDraftSectionError,
)

__all__ = [
    "WingPlannerError",
    "CatalogLoadError",
    "UnknownPreferenceError",
    "UnknownWingTypeError",
    "UnknownSauceError",
    "UnknownPackageError",
    "SauceNotSelectedError",
    "InvalidDraftSectionError",
]
