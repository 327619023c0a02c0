"""
Wing type and wing distribution models.

A catering order splits its wings across three fulfillment categories. The
kitchen prepares each category separately, so every downstream calculation
(sauce allocation, validation, containers) works per wing type.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Any, List, Mapping, Optional


class WingType:
    """Wing type identifiers as they appear on the wire."""

    BONELESS = "boneless"
    BONE_IN = "boneIn"
    CAULIFLOWER = "cauliflower"


# Canonical order. Allocation strategies that walk wing types use this order.
WING_TYPES = (WingType.BONELESS, WingType.BONE_IN, WingType.CAULIFLOWER)

WING_TYPE_LABELS = {
    WingType.BONELESS: "Boneless",
    WingType.BONE_IN: "Bone-In",
    WingType.CAULIFLOWER: "Cauliflower",
}

BONE_IN_STYLES = ("mixed", "allDrums", "allFlats")

# Older drafts stored the short style names
_BONE_IN_STYLE_ALIASES = {"drums": "allDrums", "flats": "allFlats"}

DISTRIBUTION_SOURCES = ("manual", "conversational-wizard", "smart-defaults")


@dataclass
class WingDistribution:
    """
    How many wings of each type the order contains.

    The sum of the three counts is the authoritative total used for sauce
    allocation and validation.
    """

    boneless: int = 0
    """Boneless wing count."""

    bone_in: int = 0
    """Bone-in wing count."""

    cauliflower: int = 0
    """Plant-based cauliflower wing count."""

    bone_in_style: str = "mixed"
    """Bone-in cut preference: 'mixed', 'allDrums', 'allFlats'."""

    distribution_source: Optional[str] = "manual"
    """Who produced the split: 'manual', 'conversational-wizard', 'smart-defaults'."""

    @property
    def total(self) -> int:
        """Total wings across all types."""
        return self.boneless + self.bone_in + self.cauliflower

    def count_for(self, wing_type: str) -> int:
        """Wing count for a wing type identifier ("boneless", "boneIn", ...)."""
        return self.as_counts().get(wing_type, 0)

    def as_counts(self) -> Dict[str, int]:
        """Counts keyed by wing type, in canonical order."""
        return {
            WingType.BONELESS: self.boneless,
            WingType.BONE_IN: self.bone_in,
            WingType.CAULIFLOWER: self.cauliflower,
        }

    def active_wing_types(self) -> List[str]:
        """Wing types with a non-zero count, in canonical order."""
        return [wing_type for wing_type, count in self.as_counts().items() if count > 0]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire/session shape."""
        return {
            "boneless": self.boneless,
            "boneIn": self.bone_in,
            "cauliflower": self.cauliflower,
            "boneInStyle": self.bone_in_style,
            "distributionSource": self.distribution_source,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "WingDistribution":
        """
        Create from the wire shape.

        Missing counts are treated as 0, so partial shapes such as
        ``{"boneless": 80}`` are accepted.
        """
        data = data or {}
        style = data.get("boneInStyle") or "mixed"
        style = _BONE_IN_STYLE_ALIASES.get(style, style)
        return cls(
            boneless=int(data.get("boneless") or 0),
            bone_in=int(data.get("boneIn") or 0),
            cauliflower=int(data.get("cauliflower") or 0),
            bone_in_style=style,
            distribution_source=data.get("distributionSource", "manual"),
        )


@dataclass(frozen=True)
class DistributionPreference:
    """A named traditional/plant-based split offered by the planner."""

    key: str
    traditional_pct: int
    plant_based_pct: int
    label: str
    description: str
    reasoning: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "traditional": self.traditional_pct,
            "plantBased": self.plant_based_pct,
            "label": self.label,
            "description": self.description,
            "reasoning": self.reasoning,
        }


DISTRIBUTION_PREFERENCES: Mapping[str, DistributionPreference] = MappingProxyType({
    "all-traditional": DistributionPreference(
        key="all-traditional",
        traditional_pct=100,
        plant_based_pct=0,
        label="Everyone eats traditional wings",
        description="Perfect for groups who love classic bone-in or boneless wings",
        reasoning="All traditional wings (bone-in or boneless)",
    ),
    "few-vegetarian": DistributionPreference(
        key="few-vegetarian",
        traditional_pct=75,
        plant_based_pct=25,
        label="A few people need vegetarian options",
        description="Great when you have 1-2 vegetarians in a larger group",
        reasoning="Mostly traditional wings with vegetarian options for a few guests",
    ),
    "half-vegetarian": DistributionPreference(
        key="half-vegetarian",
        traditional_pct=50,
        plant_based_pct=50,
        label="About half the group is vegetarian",
        description="Balanced mix for diverse groups",
        reasoning="Equal split between traditional and plant-based wings",
    ),
    "mostly-vegetarian": DistributionPreference(
        key="mostly-vegetarian",
        traditional_pct=25,
        plant_based_pct=75,
        label="Mostly vegetarian, some meat-eaters",
        description="Ideal when most guests prefer plant-based",
        reasoning="Mostly plant-based wings with traditional options for some guests",
    ),
    "all-vegetarian": DistributionPreference(
        key="all-vegetarian",
        traditional_pct=0,
        plant_based_pct=100,
        label="Everyone is vegetarian/vegan",
        description="All cauliflower wings for fully plant-based events",
        reasoning="All plant-based cauliflower wings",
    ),
})
