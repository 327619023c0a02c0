"""
Custom exceptions for Wing Planner.

Exception Hierarchy:
    WingPlannerError (base)
    ├── CatalogLoadError         - Catalog file missing or malformed (startup failure)
    ├── UnknownPreferenceError   - Distribution preference key not recognised
    ├── UnknownWingTypeError     - Wing type outside boneless/boneIn/cauliflower
    ├── UnknownSauceError        - Sauce id not present in the catalog
    ├── UnknownPackageError      - Package id not present in the catalog
    ├── SauceNotSelectedError    - Editing a sauce that is not part of the draft
    └── InvalidDraftSectionError - Update targets a section/field the draft lacks

Usage:
    Startup errors (CatalogLoadError) cause the app to fail fast.
    The rest are caller mistakes and surface as HTTP 4xx responses.

    Domain outcomes such as over-assigned wing types, dry rubs served on the
    side or a package too small for the half-dozen minimum are NOT
    exceptions. They are returned as structured results with ``valid=False``.
"""

from typing import Optional, Dict, Any, Iterable


class WingPlannerError(Exception):
    """
    Base exception for all Wing Planner errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# STARTUP ERRORS - Application will not start if these occur
# =============================================================================

class CatalogLoadError(WingPlannerError):
    """
    The sauce/package catalog could not be read.

    Typical causes:
    - WING_CATALOG_PATH points to a missing file
    - The file is not valid JSON or lacks the "sauces" list
    """

    def __init__(self, catalog_path: str, reason: str):
        message = f"Cannot load catalog from {catalog_path}: {reason}"
        details = {
            "catalog_path": catalog_path,
            "resolution": "Check WING_CATALOG_PATH in .env and the catalog export",
        }
        super().__init__(message, details)
        self.catalog_path = catalog_path


# =============================================================================
# REQUEST ERRORS - The operation is rejected, the draft is left untouched
# =============================================================================

class UnknownPreferenceError(WingPlannerError):
    """A distribution preference key that is not in the lookup table."""

    def __init__(self, preference: str, known: Iterable[str]):
        message = f"Unknown distribution preference: {preference}"
        super().__init__(message, {"preference": preference, "known": sorted(known)})
        self.preference = preference


class UnknownWingTypeError(WingPlannerError):
    """A wing type other than boneless, boneIn or cauliflower."""

    def __init__(self, wing_type: str):
        message = f"Unknown wing type: {wing_type}"
        super().__init__(message, {"wing_type": wing_type})
        self.wing_type = wing_type


class UnknownSauceError(WingPlannerError):
    """A sauce id the catalog does not contain."""

    status_code = 404

    def __init__(self, sauce_id: str):
        message = f"Unknown sauce: {sauce_id}"
        super().__init__(message, {"sauce_id": sauce_id})
        self.sauce_id = sauce_id


class SauceNotSelectedError(WingPlannerError):
    """
    An edit referenced a sauce the customer has not selected.

    The wing-type editor only offers selected sauces, so this indicates a
    stale client or a hand-crafted request.
    """

    def __init__(self, sauce_id: str, wing_type: Optional[str] = None):
        message = f"Sauce {sauce_id} is not part of the current selection"
        details: Dict[str, Any] = {"sauce_id": sauce_id}
        if wing_type:
            details["wing_type"] = wing_type
        super().__init__(message, details)
        self.sauce_id = sauce_id
        self.wing_type = wing_type


class InvalidDraftSectionError(WingPlannerError):
    """A draft update named a section or field that does not exist, or gave a field the wrong type."""

    def __init__(self, section: Any, field_name: Optional[str] = None, reason: Optional[str] = None):
        if reason and field_name:
            message = f"Invalid value for {section}.{field_name}: {reason}"
        elif reason:
            message = f"Invalid value for draft section {section}: {reason}"
        elif field_name:
            message = f"Draft section {section} has no field {field_name}"
        else:
            message = f"Unknown draft section: {section}"
        super().__init__(message, {"section": str(section), "field": field_name})
        self.section = section
        self.field_name = field_name


class UnknownPackageError(WingPlannerError):
    """A catering package id the catalog does not contain."""

    status_code = 404

    def __init__(self, package_id: str):
        message = f"Unknown package: {package_id}"
        super().__init__(message, {"package_id": package_id})
        self.package_id = package_id
