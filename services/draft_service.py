"""
Draft editing service.

Every user-facing edit of the planner goes through here: event details, the
wing distribution, sauce selection, presets and the per-sauce editor. The
service combines the pure allocation modules with a ``DraftStore``; it holds
no state of its own.

Usage:
    store = DraftStore(SessionDraftStorage(session))
    store.load_draft()
    service = DraftService(store)

    result = service.choose_distribution("few-vegetarian", total_wings=80)
    if isinstance(result, MinimumViolation):
        # show result.message, nothing was stored
    service.select_sauces([buffalo, bbq])
    service.apply_preset("even-mix")
    service.set_application_method("boneless", "bbq", "on-the-side")
    service.validation().valid
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Union

from core.exceptions import SauceNotSelectedError, UnknownWingTypeError, WingPlannerError
from logging_config import get_logger
from models.draft import DraftSection, DraftState
from models.results import (
    AssignmentValidation,
    MinimumViolation,
    SauceAssignmentSummary,
    TranslationResult,
    WingTypeValidation,
)
from models.sauce import (
    APPLICATION_METHODS,
    AssignmentsByWingType,
    Sauce,
    SauceAssignment,
)
from models.wings import WING_TYPES, WingDistribution
from modules import preset_allocator
from modules.assignment_validator import validate_all_assignments, validate_wing_type_assignment
from modules.quantity_translator import QuantityTranslator
from modules.summary_aggregator import (
    calculate_sauce_assignment_summary,
    container_breakdown,
    container_details,
)
from services.draft_store import DraftStore


logger = get_logger(__name__)

# Presets that fill assignments automatically and are re-run when inputs change
_AUTO_PRESETS = (
    preset_allocator.ALL_SAME,
    preset_allocator.EVEN_MIX,
    preset_allocator.ONE_PER_TYPE,
)


class DraftService:
    """
    Applies planner edits to a draft.

    Args:
        store: The draft to edit
        translator: Quantity translator (default: built from Config)
    """

    def __init__(self, store: DraftStore, translator: Optional[QuantityTranslator] = None):
        self.store = store
        self.translator = translator or QuantityTranslator()

    # ======================================================================
    # EVENT DETAILS
    # ======================================================================

    def set_event_details(self, **changes) -> DraftState:
        """Merge changes (guest_count, event_type, dietary_needs) into the event details."""
        self.store.update_state(DraftSection.EVENT_DETAILS, changes)
        return self.store.get_state()

    def set_special_instructions(self, text: str) -> None:
        self.store.update_state(DraftSection.CURRENT_CONFIG, {"special_instructions": text})

    # ======================================================================
    # WING DISTRIBUTION
    # ======================================================================

    def preview_distribution(self, preference: str) -> TranslationResult:
        """Translate a preference for the draft's guest count without storing anything."""
        guest_count = self.store.get_state().event_details.guest_count
        return self.translator.translate(preference, guest_count)

    def choose_distribution(
        self, preference: str, total_wings: int
    ) -> Union[WingDistribution, MinimumViolation]:
        """
        Split a package's wings according to a distribution preference.

        On success the distribution and the preference are stored and an
        automatic sauce preset is re-run against the new counts. A
        MinimumViolation is returned as-is and leaves the draft untouched.
        """
        result = self.translator.apply(preference, total_wings)
        if isinstance(result, MinimumViolation):
            return result

        state = self.store.get_state()
        updates = {
            DraftSection.EVENT_DETAILS: {"distribution_preference": preference},
            DraftSection.WING_DISTRIBUTION: result,
        }
        reapplied = self._reapply_preset(state.sauce_assignments.applied_preset,
                                         state.sauce_assignments.selected_sauces, result)
        if reapplied is not None:
            updates[DraftSection.SAUCE_ASSIGNMENTS] = {"assignments": reapplied}

        self.store.batch_update(updates)
        logger.info(f"Distribution '{preference}' applied to {total_wings} wings")
        return result

    def set_wing_distribution(
        self,
        boneless: int,
        bone_in: int,
        cauliflower: int,
        bone_in_style: Optional[str] = None,
    ) -> AssignmentValidation:
        """
        Store a hand-entered distribution.

        Each count must be 0 or at least the half-dozen minimum; an invalid
        distribution is reported and not stored.
        """
        state = self.store.get_state()
        distribution = WingDistribution(
            boneless=boneless,
            bone_in=bone_in,
            cauliflower=cauliflower,
            bone_in_style=bone_in_style or state.wing_distribution.bone_in_style,
            distribution_source="manual",
        )
        validation = self.translator.validate_wing_distribution(distribution)
        if not validation.valid:
            return validation

        updates = {DraftSection.WING_DISTRIBUTION: distribution}
        reapplied = self._reapply_preset(state.sauce_assignments.applied_preset,
                                         state.sauce_assignments.selected_sauces, distribution)
        if reapplied is not None:
            updates[DraftSection.SAUCE_ASSIGNMENTS] = {"assignments": reapplied}
        self.store.batch_update(updates)
        return validation

    # ======================================================================
    # SAUCES AND PRESETS
    # ======================================================================

    def select_sauces(self, sauces: Sequence[Sauce]) -> AssignmentsByWingType:
        """
        Replace the selected sauces.

        An automatic preset is re-run over the new selection. Under ``custom``
        the existing assignments are kept except for deselected sauces.
        """
        state = self.store.get_state()
        sauce_state = state.sauce_assignments
        selected = list(sauces)

        assignments = self._reapply_preset(sauce_state.applied_preset, selected,
                                           state.wing_distribution)
        if assignments is None:
            selected_ids = {s.id for s in selected}
            assignments = {
                wing_type: [a for a in sauce_state.assignments.get(wing_type, [])
                            if a.sauce_id in selected_ids]
                for wing_type in WING_TYPES
            }

        self.store.update_state(
            DraftSection.SAUCE_ASSIGNMENTS,
            {"selected_sauces": selected, "assignments": assignments},
        )
        logger.debug(f"Selected sauces: {[s.id for s in selected]}")
        return assignments

    def apply_preset(self, preset_id: str) -> AssignmentsByWingType:
        """Fill assignments with a preset; an unknown id behaves as custom."""
        if preset_id not in preset_allocator.PRESETS:
            preset_id = preset_allocator.CUSTOM

        state = self.store.get_state()
        assignments = preset_allocator.apply_preset(
            preset_id, state.sauce_assignments.selected_sauces, state.wing_distribution
        )
        self.store.update_state(
            DraftSection.SAUCE_ASSIGNMENTS,
            {"applied_preset": preset_id, "assignments": assignments},
        )
        logger.info(f"Preset '{preset_id}' applied")
        return assignments

    def reset_to_preset(self) -> bool:
        """
        Discard manual edits by re-running the applied preset.

        Returns:
            False (and changes nothing) when no automatic preset is applied
        """
        applied = self.store.get_state().sauce_assignments.applied_preset
        if applied not in _AUTO_PRESETS:
            logger.warning(f"Nothing to reset: applied preset is {applied!r}")
            return False
        self.apply_preset(applied)
        return True

    # ======================================================================
    # WING TYPE EDITOR
    # ======================================================================

    def edit_assignment(
        self,
        wing_type: str,
        sauce_id: str,
        wing_count: Optional[int] = None,
        method: Optional[str] = None,
    ) -> WingTypeValidation:
        """
        Change the wing count and/or application method of one editor row.

        Both values are checked before the draft is touched and are stored in
        a single update, so a rejected edit changes nothing. Negative or
        over-allocating counts are stored as typed; the returned validation
        reports them.
        """
        if wing_count is None and method is None:
            raise WingPlannerError("Nothing to change", {"fields": ["wingCount", "applicationMethod"]})
        if method is not None and method not in APPLICATION_METHODS:
            raise WingPlannerError(
                f"Unknown application method: {method}",
                {"method": method, "known": list(APPLICATION_METHODS)},
            )
        if wing_type not in WING_TYPES:
            raise UnknownWingTypeError(wing_type)

        state = self.store.get_state()
        sauce_state = state.sauce_assignments
        sauce = sauce_state.find_selected(sauce_id)
        if sauce is None:
            raise SauceNotSelectedError(sauce_id, wing_type)

        assignments = sauce_state.assignments
        items = assignments.setdefault(wing_type, [])
        assignment = next((a for a in items if a.sauce_id == sauce_id), None)
        if assignment is None:
            assignment = SauceAssignment.for_sauce(sauce, 0)
            items.append(assignment)
        if wing_count is not None:
            assignment.wing_count = wing_count
        if method is not None:
            assignment.application_method = method

        self.store.update_state(
            DraftSection.SAUCE_ASSIGNMENTS,
            {
                "assignments": assignments,
                "applied_preset": sauce_state.applied_preset or preset_allocator.CUSTOM,
            },
        )
        return validate_wing_type_assignment(
            wing_type, items, state.wing_distribution.count_for(wing_type)
        )

    def set_sauce_wing_count(
        self, wing_type: str, sauce_id: str, wing_count: int
    ) -> WingTypeValidation:
        """Set how many wings of a type get a sauce."""
        return self.edit_assignment(wing_type, sauce_id, wing_count=wing_count)

    def set_application_method(
        self, wing_type: str, sauce_id: str, method: str
    ) -> WingTypeValidation:
        """Toggle tossed / on-the-side for one sauce of a wing type."""
        return self.edit_assignment(wing_type, sauce_id, method=method)

    # ======================================================================
    # READS
    # ======================================================================

    def validation(self) -> AssignmentValidation:
        state = self.store.get_state()
        return validate_all_assignments(state.sauce_assignments.assignments,
                                        state.wing_distribution)

    def summary(self) -> SauceAssignmentSummary:
        state = self.store.get_state()
        return calculate_sauce_assignment_summary(state.sauce_assignments.assignments,
                                                  state.wing_distribution)

    def containers(self) -> Dict[str, object]:
        """Container totals per wing type plus per-row details for the editor."""
        assignments = self.store.get_state().sauce_assignments.assignments
        rows: Dict[str, List[dict]] = {
            wing_type: [
                {"sauceId": a.sauce_id, **container_details(a).to_dict()}
                for a in assignments.get(wing_type, [])
            ]
            for wing_type in WING_TYPES
        }
        return {"breakdown": container_breakdown(assignments), "rows": rows}

    def start_over(self) -> None:
        self.store.reset(clear_draft=True)

    # ------------------------------------------------------------------ helpers
    @staticmethod
    def _reapply_preset(
        applied_preset: Optional[str],
        sauces: Sequence[Sauce],
        distribution: WingDistribution,
    ) -> Optional[AssignmentsByWingType]:
        if applied_preset not in _AUTO_PRESETS:
            return None
        return preset_allocator.apply_preset(applied_preset, sauces, distribution)
