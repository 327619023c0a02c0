"""
Sauce and sauce assignment models.

Catalog records arrive from the menu store with optional and sometimes
inconsistent fields. ``Sauce.from_dict`` is the one place they are
normalized; everything downstream works with the typed ``Sauce``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Any, List, Optional

from .wings import WING_TYPES


class SauceCategory:
    """Sauce categories used by the menu store."""

    SIGNATURE_SAUCE = "signature-sauce"
    DRY_RUB = "dry-rub"
    DIPPING_SAUCE = "dipping-sauce"


SAUCE_CATEGORIES = (
    SauceCategory.SIGNATURE_SAUCE,
    SauceCategory.DRY_RUB,
    SauceCategory.DIPPING_SAUCE,
)


class ApplicationMethod:
    """How a sauce reaches the wings."""

    TOSSED = "tossed"
    ON_THE_SIDE = "on-the-side"


APPLICATION_METHODS = (ApplicationMethod.TOSSED, ApplicationMethod.ON_THE_SIDE)

MIN_HEAT_LEVEL = 0
MAX_HEAT_LEVEL = 5


@dataclass
class Sauce:
    """A sauce the customer can choose for their wings."""

    id: str
    """Unique sauce id (e.g., 'buffalo')."""

    name: str
    """Display name."""

    category: str = SauceCategory.SIGNATURE_SAUCE
    """One of SAUCE_CATEGORIES."""

    is_dry_rub: bool = False
    """Explicit dry-rub flag from the catalog."""

    heat_level: int = 0
    """Heat level 0..5."""

    image_url: Optional[str] = None
    """Optional photo for the picker."""

    @property
    def treated_as_dry_rub(self) -> bool:
        """True when either the flag or the category marks this as a dry rub."""
        return self.is_dry_rub or self.category == SauceCategory.DRY_RUB

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "isDryRub": self.is_dry_rub,
            "heatLevel": self.heat_level,
        }
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sauce":
        """
        Create a Sauce from a catalog or session record.

        Normalization rules:
            - missing name -> the id
            - missing category -> 'signature-sauce'
            - missing isDryRub -> derived from category == 'dry-rub'
            - missing/non-numeric heatLevel -> 0

        Explicit values are kept as given, even when they disagree with each
        other or a heat level is outside 0..5; ``validate_sauce`` reports such
        records.
        """
        sauce_id = str(data["id"])
        name = data.get("name")
        if name is None:
            name = sauce_id

        category = data.get("category") or SauceCategory.SIGNATURE_SAUCE

        is_dry_rub = data.get("isDryRub")
        if is_dry_rub is None:
            is_dry_rub = category == SauceCategory.DRY_RUB

        try:
            heat_level = int(data.get("heatLevel") or 0)
        except (TypeError, ValueError):
            heat_level = 0

        return cls(
            id=sauce_id,
            name=name,
            category=category,
            is_dry_rub=bool(is_dry_rub),
            heat_level=heat_level,
            image_url=data.get("imageUrl"),
        )


@dataclass
class SauceAssignment:
    """A number of wings of one wing type that get one sauce."""

    sauce_id: str
    sauce_name: str
    sauce_category: str
    wing_count: int
    application_method: str = ApplicationMethod.TOSSED

    @property
    def is_dry_rub(self) -> bool:
        return self.sauce_category == SauceCategory.DRY_RUB

    @classmethod
    def for_sauce(cls, sauce: Sauce, wing_count: int) -> "SauceAssignment":
        """New tossed assignment of ``wing_count`` wings to ``sauce``."""
        category = SauceCategory.DRY_RUB if sauce.treated_as_dry_rub else sauce.category
        return cls(
            sauce_id=sauce.id,
            sauce_name=sauce.name,
            sauce_category=category,
            wing_count=wing_count,
            application_method=ApplicationMethod.TOSSED,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sauceId": self.sauce_id,
            "sauceName": self.sauce_name,
            "sauceCategory": self.sauce_category,
            "wingCount": self.wing_count,
            "applicationMethod": self.application_method,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SauceAssignment":
        return cls(
            sauce_id=data.get("sauceId", ""),
            sauce_name=data.get("sauceName", ""),
            sauce_category=data.get("sauceCategory") or SauceCategory.SIGNATURE_SAUCE,
            wing_count=int(data.get("wingCount") or 0),
            application_method=data.get("applicationMethod") or ApplicationMethod.TOSSED,
        )


# Mapping wing type -> assignments for that type
AssignmentsByWingType = Dict[str, List[SauceAssignment]]


def empty_assignments() -> AssignmentsByWingType:
    """Every wing type mapped to an empty list."""
    return {wing_type: [] for wing_type in WING_TYPES}


def assignments_to_dict(assignments: AssignmentsByWingType) -> Dict[str, List[Dict[str, Any]]]:
    return {
        wing_type: [a.to_dict() for a in assignments.get(wing_type, [])]
        for wing_type in WING_TYPES
    }


def assignments_from_dict(data: Optional[Dict[str, Any]]) -> AssignmentsByWingType:
    """Parse the wire shape; wing types that are missing become empty lists."""
    data = data or {}
    return {
        wing_type: [SauceAssignment.from_dict(item) for item in (data.get(wing_type) or [])]
        for wing_type in WING_TYPES
    }
