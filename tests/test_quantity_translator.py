"""
Unit tests for the Quantity Translator.

Covers preference lookup, guest display text, the wing split and the
half-dozen minimum.
"""

import pytest

from core.exceptions import UnknownPreferenceError
from models.results import MinimumViolation
from models.wings import DISTRIBUTION_PREFERENCES, WingDistribution
from modules.arithmetic import round_half_up
from modules.quantity_translator import QuantityTranslator


@pytest.fixture
def translator():
    return QuantityTranslator(min_quantity=6, boneless_share_percent=60)


class TestRoundHalfUp:
    """Rounding matches the front end, not Python's round()."""

    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(7.5) == 8
        assert round_half_up(-2.5) == -2

    def test_other_values_round_to_nearest(self):
        assert round_half_up(93.75) == 94
        assert round_half_up(6.25) == 6
        assert round_half_up(0) == 0


class TestTranslate:

    def test_mixed_preference_display_text(self, translator):
        result = translator.translate("few-vegetarian", 25)

        assert result.traditional_pct == 75
        assert result.plant_based_pct == 25
        assert result.traditional_guests == 19
        assert result.plant_based_guests == 6
        assert result.display_text == "~19 guests with traditional, ~6 with plant-based"

    def test_all_traditional_display_text(self, translator):
        result = translator.translate("all-traditional", 30)
        assert result.display_text == "30 guests with traditional wings"

    def test_all_vegetarian_display_text(self, translator):
        result = translator.translate("all-vegetarian", 12)
        assert result.display_text == "12 guests with plant-based wings"

    def test_reasoning_comes_from_preference(self, translator):
        result = translator.translate("half-vegetarian", 20)
        assert result.reasoning == DISTRIBUTION_PREFERENCES["half-vegetarian"].reasoning

    def test_unknown_preference_raises(self, translator):
        with pytest.raises(UnknownPreferenceError) as exc_info:
            translator.translate("carnivore", 20)
        assert "carnivore" in str(exc_info.value)

    def test_to_dict_uses_wire_keys(self, translator):
        data = translator.translate("few-vegetarian", 25).to_dict()
        assert data["tradGuests"] == 19
        assert data["vegGuests"] == 6
        assert data["displayText"].startswith("~19")


class TestApply:

    def test_few_vegetarian_80(self, translator):
        result = translator.apply("few-vegetarian", 80)

        assert isinstance(result, WingDistribution)
        assert (result.boneless, result.bone_in, result.cauliflower) == (36, 24, 20)
        assert result.total == 80
        assert result.distribution_source == "conversational-wizard"
        assert result.bone_in_style == "mixed"

    def test_half_vegetarian_50(self, translator):
        result = translator.apply("half-vegetarian", 50)
        assert (result.boneless, result.bone_in, result.cauliflower) == (15, 10, 25)

    def test_all_traditional_has_no_cauliflower(self, translator):
        result = translator.apply("all-traditional", 50)
        assert (result.boneless, result.bone_in, result.cauliflower) == (30, 20, 0)

    def test_all_vegetarian_is_all_cauliflower(self, translator):
        result = translator.apply("all-vegetarian", 40)
        assert (result.boneless, result.bone_in, result.cauliflower) == (0, 0, 40)

    def test_total_always_preserved(self, translator):
        for key in DISTRIBUTION_PREFERENCES:
            for total in (24, 50, 80, 99, 150, 301):
                result = translator.apply(key, total)
                if isinstance(result, WingDistribution):
                    assert result.total == total, (key, total)

    def test_accepts_translation_result(self, translator):
        translation = translator.translate("few-vegetarian", 25)
        result = translator.apply(translation, 80)
        assert result.total == 80
        assert result.cauliflower == 20

    def test_zero_total_gives_empty_distribution(self, translator):
        result = translator.apply("half-vegetarian", 0)
        assert isinstance(result, WingDistribution)
        assert result.total == 0


class TestMinimumViolation:

    def test_package_too_small_for_minimum(self, translator):
        # 75% of 10 -> 8 traditional, 2 plant-based bumped to 6
        result = translator.apply("few-vegetarian", 10)

        assert isinstance(result, MinimumViolation)
        assert result.valid is False
        assert result.error == "minimum-violation"
        assert result.required_wings == 14
        assert result.total_wings == 10
        assert "we need 14 wings but package has 10" in result.message
        assert "(6 wings)" in result.message

    def test_custom_minimum(self):
        translator = QuantityTranslator(min_quantity=12, boneless_share_percent=60)
        result = translator.apply("few-vegetarian", 40)

        assert isinstance(result, MinimumViolation)
        assert result.required_wings == 42

    def test_exact_zero_category_is_not_bumped(self, translator):
        result = translator.apply("all-traditional", 10)
        assert isinstance(result, WingDistribution)
        assert result.cauliflower == 0


class TestValidateWingDistribution:

    def test_valid_distribution(self, translator):
        validation = translator.validate_wing_distribution(
            WingDistribution(boneless=30, bone_in=20, cauliflower=0)
        )
        assert validation.valid is True
        assert validation.errors == []

    def test_below_minimum(self, translator):
        validation = translator.validate_wing_distribution(WingDistribution(boneless=4))
        assert validation.valid is False
        assert validation.errors == ["boneless wings must be at least 6 (½ dozen) or 0"]

    def test_negative(self, translator):
        validation = translator.validate_wing_distribution(
            WingDistribution(boneless=12, cauliflower=-6)
        )
        assert validation.errors == ["cauliflower wings cannot be negative"]
