"""Translate a plain-language dietary preference into wing quantities."""

from __future__ import annotations

import math
from typing import Union

from config import Config
from core.exceptions import UnknownPreferenceError
from logging_config import get_logger
from models.results import AssignmentValidation, MinimumViolation, TranslationResult
from models.wings import (
    DISTRIBUTION_PREFERENCES,
    WING_TYPES,
    DistributionPreference,
    WingDistribution,
)
from modules.arithmetic import round_half_up


logger = get_logger(__name__)

DistributionInput = Union[TranslationResult, DistributionPreference, str]


class QuantityTranslator:
    """
    Turns a distribution preference into a concrete ``WingDistribution``.

    Traditional wings are split between boneless and bone-in; plant-based
    wings are all cauliflower. Any category that ends up with fewer than
    the minimum (but more than zero) wings is bumped to the minimum, and if
    that no longer fits the package the caller gets a ``MinimumViolation``.
    """

    def __init__(self, min_quantity: int = None, boneless_share_percent: float = None) -> None:
        self.min_quantity = (
            Config.MIN_WINGS_PER_TYPE if min_quantity is None else min_quantity
        )
        self.boneless_share_percent = (
            Config.BONELESS_SHARE_PERCENT
            if boneless_share_percent is None
            else boneless_share_percent
        )

    @staticmethod
    def get_preference(preference: str) -> DistributionPreference:
        """Look up a preference key, raising UnknownPreferenceError if absent."""
        try:
            return DISTRIBUTION_PREFERENCES[preference]
        except KeyError:
            raise UnknownPreferenceError(preference, DISTRIBUTION_PREFERENCES.keys()) from None

    def translate(self, preference: str, guest_count: int) -> TranslationResult:
        """
        Resolve a preference for an event's guest count.

        The guest numbers are informational only (they feed the "~19 guests
        with traditional" text); wing counts come from ``apply``.

        Args:
            preference: Preference key, e.g. "few-vegetarian"
            guest_count: Number of guests at the event

        Returns:
            TranslationResult with percentages, reasoning and display text
        """
        preset = self.get_preference(preference)

        traditional_guests = round_half_up(guest_count * preset.traditional_pct / 100)
        plant_based_guests = round_half_up(guest_count * preset.plant_based_pct / 100)

        return TranslationResult(
            selection=preference,
            traditional_pct=preset.traditional_pct,
            plant_based_pct=preset.plant_based_pct,
            reasoning=preset.reasoning,
            traditional_guests=traditional_guests,
            plant_based_guests=plant_based_guests,
            display_text=self._format_display_text(preset, traditional_guests, plant_based_guests),
        )

    def apply(
        self, distribution: DistributionInput, total_wings: int
    ) -> Union[WingDistribution, MinimumViolation]:
        """
        Compute per-wing-type quantities for a package of ``total_wings``.

        Args:
            distribution: TranslationResult, DistributionPreference or preference key
            total_wings: Wings included in the chosen package

        Returns:
            WingDistribution summing to ``total_wings``, or MinimumViolation
            when the half-dozen minimum cannot fit
        """
        traditional_pct = self._traditional_pct(distribution)

        # Derive plant-based from traditional so the pair always sums to the total
        traditional = round_half_up(total_wings * traditional_pct / 100)
        plant_based = total_wings - traditional

        traditional = self._apply_minimum(traditional)
        plant_based = self._apply_minimum(plant_based)

        required = traditional + plant_based
        if required > total_wings:
            logger.info(
                f"Minimum violation: need {required} wings, package has {total_wings}"
            )
            return MinimumViolation(
                message=(
                    f"With the minimum ½ dozen ({self.min_quantity} wings) per type, "
                    f"we need {required} wings but package has {total_wings}. "
                    "Please choose a larger package or adjust your distribution."
                ),
                required_wings=required,
                total_wings=total_wings,
            )

        boneless = math.floor(traditional * self.boneless_share_percent / 100)
        counts = {
            "boneless": boneless,
            "boneIn": traditional - boneless,
            "cauliflower": plant_based,
        }

        drift = total_wings - sum(counts.values())
        if drift:
            # max() keeps the first of equal values, so ties favour canonical order
            largest = max(WING_TYPES, key=lambda wing_type: counts[wing_type])
            counts[largest] += drift
            logger.debug(f"Reconciled {drift:+d} wings of rounding drift into {largest}")

        result = WingDistribution(
            boneless=counts["boneless"],
            bone_in=counts["boneIn"],
            cauliflower=counts["cauliflower"],
            bone_in_style="mixed",
            distribution_source="conversational-wizard",
        )
        logger.debug(f"Applied {traditional_pct}% traditional to {total_wings} wings: {result.to_dict()}")
        return result

    def validate_wing_distribution(self, distribution: WingDistribution) -> AssignmentValidation:
        """
        Check a (possibly hand-edited) distribution against the minimum rule.

        Each wing type must be 0 or at least the minimum.
        """
        errors = []
        for wing_type, count in distribution.as_counts().items():
            if count < 0:
                errors.append(f"{wing_type} wings cannot be negative")
            elif 0 < count < self.min_quantity:
                errors.append(
                    f"{wing_type} wings must be at least {self.min_quantity} (½ dozen) or 0"
                )
        return AssignmentValidation(valid=not errors, errors=errors)

    # ------------------------------------------------------------------ helpers
    def _traditional_pct(self, distribution: DistributionInput) -> int:
        if isinstance(distribution, TranslationResult):
            return distribution.traditional_pct
        if isinstance(distribution, DistributionPreference):
            return distribution.traditional_pct
        return self.get_preference(distribution).traditional_pct

    def _apply_minimum(self, count: int) -> int:
        if 0 < count < self.min_quantity:
            return self.min_quantity
        return count

    @staticmethod
    def _format_display_text(
        preset: DistributionPreference, traditional_guests: int, plant_based_guests: int
    ) -> str:
        if preset.traditional_pct == 100:
            return f"{traditional_guests} guests with traditional wings"
        if preset.plant_based_pct == 100:
            return f"{plant_based_guests} guests with plant-based wings"
        return f"~{traditional_guests} guests with traditional, ~{plant_based_guests} with plant-based"
