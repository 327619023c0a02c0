"""
Result models returned by the allocation modules.

Domain problems are reported through these results rather than exceptions:
callers branch on ``valid``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

from .wings import WING_TYPES


@dataclass(frozen=True)
class TranslationResult:
    """A distribution preference resolved against a guest count."""

    selection: str
    traditional_pct: int
    plant_based_pct: int
    reasoning: str
    traditional_guests: int
    """Approximate guests eating traditional wings (informational)."""

    plant_based_guests: int
    """Approximate guests eating plant-based wings (informational)."""

    display_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selection": self.selection,
            "traditional": self.traditional_pct,
            "plantBased": self.plant_based_pct,
            "reasoning": self.reasoning,
            "tradGuests": self.traditional_guests,
            "vegGuests": self.plant_based_guests,
            "displayText": self.display_text,
        }


@dataclass(frozen=True)
class MinimumViolation:
    """
    The half-dozen minimum cannot be met within the package's wing total.

    The customer has to pick a bigger package or a different preference;
    nothing is clamped automatically.
    """

    message: str
    required_wings: int
    total_wings: int
    valid: bool = False
    error: str = "minimum-violation"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "error": self.error,
            "message": self.message,
            "requiredWings": self.required_wings,
            "totalWings": self.total_wings,
        }


@dataclass
class WingTypeValidation:
    """Validation of one wing type's assignment list against its total."""

    wing_type: str
    valid: bool
    assigned_total: int
    total_wings: int
    percent_complete: int
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wingType": self.wing_type,
            "valid": self.valid,
            "assignedTotal": self.assigned_total,
            "totalWings": self.total_wings,
            "percentComplete": self.percent_complete,
            "errors": list(self.errors),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WingTypeValidation":
        return cls(
            wing_type=data.get("wingType", ""),
            valid=bool(data.get("valid", False)),
            assigned_total=int(data.get("assignedTotal", 0)),
            total_wings=int(data.get("totalWings", 0)),
            percent_complete=int(data.get("percentComplete", 0)),
            errors=list(data.get("errors", [])),
        )


@dataclass
class AssignmentValidation:
    """Whole-order validity: valid only when every wing type is."""

    valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssignmentValidation":
        return cls(valid=bool(data.get("valid", False)), errors=list(data.get("errors", [])))


@dataclass
class SauceAssignmentSummary:
    """
    Operational totals derived from a full set of sauce assignments.

    Never edited by hand: recomputed whenever assignments change.
    """

    total_wings_assigned: int = 0
    tossed: int = 0
    on_the_side: int = 0
    containers_needed: int = 0
    validations: Dict[str, Any] = field(default_factory=dict)
    """Per wing type ``WingTypeValidation`` plus ``overall`` ``AssignmentValidation``."""

    @property
    def by_application_method(self) -> Dict[str, int]:
        return {"tossed": self.tossed, "onTheSide": self.on_the_side}

    def to_dict(self) -> Dict[str, Any]:
        validations = {
            key: value.to_dict() for key, value in self.validations.items()
        }
        return {
            "totalWingsAssigned": self.total_wings_assigned,
            "byApplicationMethod": self.by_application_method,
            "containersNeeded": self.containers_needed,
            "validations": validations,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SauceAssignmentSummary":
        data = data or {}
        by_method = data.get("byApplicationMethod", {})
        raw_validations = data.get("validations", {})

        validations: Dict[str, Any] = {}
        for wing_type in WING_TYPES:
            if wing_type in raw_validations:
                validations[wing_type] = WingTypeValidation.from_dict(raw_validations[wing_type])
        if "overall" in raw_validations:
            validations["overall"] = AssignmentValidation.from_dict(raw_validations["overall"])

        return cls(
            total_wings_assigned=int(data.get("totalWingsAssigned", 0)),
            tossed=int(by_method.get("tossed", 0)),
            on_the_side=int(by_method.get("onTheSide", 0)),
            containers_needed=int(data.get("containersNeeded", 0)),
            validations=validations,
        )


@dataclass(frozen=True)
class ContainerDetails:
    """Container requirement for a single assignment, for the editor rows."""

    needed: int
    display_text: str
    is_free: bool = True
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "needed": self.needed,
            "displayText": self.display_text,
            "isFree": self.is_free,
            "note": self.note,
        }
