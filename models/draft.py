"""
Draft order models.

A draft is the customer's in-progress catering configuration: event details,
wing distribution and sauce assignments. It is held by ``DraftStore`` and
persisted to the browser session between requests.

Wire shape (camelCase, as the front end reads it):

    {
        "draftId": "...",
        "eventDetails": {...},
        "wingDistribution": {...},
        "currentConfig": {
            "sauceAssignments": {
                "selectedSauces": [...],
                "appliedPreset": "even-mix",
                "assignments": {"boneless": [...], "boneIn": [...], "cauliflower": [...]},
                "summary": {...}
            },
            "specialInstructions": ""
        },
        "lastUpdated": "2025-11-03T10:15:30+00:00",
        "savedAt": "2025-11-03T10:15:30+00:00"
    }
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional
from uuid import uuid4

from .results import SauceAssignmentSummary
from .sauce import (
    AssignmentsByWingType,
    Sauce,
    assignments_from_dict,
    assignments_to_dict,
    empty_assignments,
)
from .wings import WingDistribution


class DraftSection(enum.Enum):
    """Substructures of the draft that can be updated as a unit."""

    EVENT_DETAILS = "eventDetails"
    WING_DISTRIBUTION = "wingDistribution"
    CURRENT_CONFIG = "currentConfig"
    SAUCE_ASSIGNMENTS = "currentConfig.sauceAssignments"


@dataclass
class EventDetails:
    """What the customer told us about the event."""

    guest_count: int = 10
    event_type: str = ""
    """'corporate', 'sports', 'party', 'other' or empty."""

    dietary_needs: List[str] = field(default_factory=list)
    distribution_preference: Optional[str] = None
    """Last distribution preference key chosen in the planner."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "guestCount": self.guest_count,
            "eventType": self.event_type,
            "dietaryNeeds": list(self.dietary_needs),
            "distributionPreference": self.distribution_preference,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EventDetails":
        data = data or {}
        return cls(
            guest_count=int(data.get("guestCount", 10)),
            event_type=data.get("eventType", ""),
            dietary_needs=list(data.get("dietaryNeeds", [])),
            distribution_preference=data.get("distributionPreference"),
        )


@dataclass
class SauceAssignmentState:
    """Selected sauces, the preset that produced the assignments, and totals."""

    selected_sauces: List[Sauce] = field(default_factory=list)
    applied_preset: Optional[str] = None
    assignments: AssignmentsByWingType = field(default_factory=empty_assignments)
    summary: SauceAssignmentSummary = field(default_factory=SauceAssignmentSummary)

    def find_selected(self, sauce_id: str) -> Optional[Sauce]:
        for sauce in self.selected_sauces:
            if sauce.id == sauce_id:
                return sauce
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selectedSauces": [s.to_dict() for s in self.selected_sauces],
            "appliedPreset": self.applied_preset,
            "assignments": assignments_to_dict(self.assignments),
            "summary": self.summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SauceAssignmentState":
        data = data or {}
        return cls(
            selected_sauces=[Sauce.from_dict(s) for s in data.get("selectedSauces", [])],
            applied_preset=data.get("appliedPreset"),
            assignments=assignments_from_dict(data.get("assignments")),
            summary=SauceAssignmentSummary.from_dict(data.get("summary")),
        )


@dataclass
class CurrentConfig:
    """The customizable part of the order."""

    sauce_assignments: SauceAssignmentState = field(default_factory=SauceAssignmentState)
    special_instructions: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sauceAssignments": self.sauce_assignments.to_dict(),
            "specialInstructions": self.special_instructions,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CurrentConfig":
        data = data or {}
        return cls(
            sauce_assignments=SauceAssignmentState.from_dict(data.get("sauceAssignments")),
            special_instructions=data.get("specialInstructions", ""),
        )


def _new_draft_id() -> str:
    return uuid4().hex


@dataclass
class DraftState:
    """
    The complete draft.

    Lifecycle:
        1. Created when the customer starts the planner
        2. Updated on every edit (preset, per-sauce quantity, method toggle, reset)
        3. Persisted after each update, restored on the next request
        4. Discarded on "start over" or once older than the expiry window
    """

    draft_id: str = field(default_factory=_new_draft_id)
    event_details: EventDetails = field(default_factory=EventDetails)
    wing_distribution: WingDistribution = field(
        default_factory=lambda: WingDistribution(distribution_source=None)
    )
    current_config: CurrentConfig = field(default_factory=CurrentConfig)
    last_updated: Optional[str] = None
    saved_at: Optional[str] = None

    @property
    def sauce_assignments(self) -> SauceAssignmentState:
        return self.current_config.sauce_assignments

    def to_dict(self) -> Dict[str, Any]:
        return {
            "draftId": self.draft_id,
            "eventDetails": self.event_details.to_dict(),
            "wingDistribution": self.wing_distribution.to_dict(),
            "currentConfig": self.current_config.to_dict(),
            "lastUpdated": self.last_updated,
            "savedAt": self.saved_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DraftState":
        return cls(
            draft_id=data.get("draftId") or _new_draft_id(),
            event_details=EventDetails.from_dict(data.get("eventDetails")),
            wing_distribution=WingDistribution.from_dict(data.get("wingDistribution")),
            current_config=CurrentConfig.from_dict(data.get("currentConfig")),
            last_updated=data.get("lastUpdated"),
            saved_at=data.get("savedAt"),
        )
