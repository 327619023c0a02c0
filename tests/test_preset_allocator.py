"""
Unit tests for the sauce preset strategies.
"""

import pytest

from models.sauce import ApplicationMethod, SauceCategory
from models.wings import WING_TYPES, WingDistribution
from modules.assignment_validator import validate_all_assignments
from modules.preset_allocator import (
    ALL_SAME,
    CUSTOM,
    EVEN_MIX,
    ONE_PER_TYPE,
    apply_preset,
    preset_preview,
)
from modules.summary_aggregator import calculate_sauce_assignment_summary


def counts(items):
    return [a.wing_count for a in items]


def sauce_ids(items):
    return [a.sauce_id for a in items]


class TestAllSame:

    def test_first_sauce_gets_every_wing(self, buffalo, bbq, distribution_50_30):
        assignments = apply_preset(ALL_SAME, [buffalo, bbq], distribution_50_30)

        assert sauce_ids(assignments["boneless"]) == ["buffalo"]
        assert counts(assignments["boneless"]) == [50]
        assert counts(assignments["boneIn"]) == [30]
        assert assignments["cauliflower"] == []


class TestEvenMix:

    def test_remainder_goes_to_first_sauces(self, buffalo, bbq, lemon_pepper):
        distribution = WingDistribution(boneless=80)
        assignments = apply_preset(EVEN_MIX, [buffalo, bbq, lemon_pepper], distribution)

        assert counts(assignments["boneless"]) == [27, 27, 26]
        assert sauce_ids(assignments["boneless"]) == ["buffalo", "bbq", "lemon-pepper"]

    def test_exact_division(self, buffalo, bbq, lemon_pepper):
        distribution = WingDistribution(boneless=60)
        assignments = apply_preset(EVEN_MIX, [buffalo, bbq, lemon_pepper], distribution)
        assert counts(assignments["boneless"]) == [20, 20, 20]

    def test_more_sauces_than_wings(self, buffalo, bbq, lemon_pepper):
        distribution = WingDistribution(boneless=2)
        assignments = apply_preset(EVEN_MIX, [buffalo, bbq, lemon_pepper], distribution)
        assert counts(assignments["boneless"]) == [1, 1, 0]

    def test_dry_rub_keeps_category(self, buffalo, lemon_pepper):
        distribution = WingDistribution(boneless=20)
        assignments = apply_preset(EVEN_MIX, [buffalo, lemon_pepper], distribution)
        assert assignments["boneless"][1].sauce_category == SauceCategory.DRY_RUB


class TestOnePerType:

    def test_wraps_around_sauce_list(self, buffalo, bbq):
        distribution = WingDistribution(boneless=30, bone_in=30, cauliflower=20)
        assignments = apply_preset(ONE_PER_TYPE, [buffalo, bbq], distribution)

        assert sauce_ids(assignments["boneless"]) == ["buffalo"]
        assert sauce_ids(assignments["boneIn"]) == ["bbq"]
        assert sauce_ids(assignments["cauliflower"]) == ["buffalo"]
        assert counts(assignments["cauliflower"]) == [20]

    def test_skips_zero_types_when_cycling(self, buffalo, bbq):
        distribution = WingDistribution(boneless=50, bone_in=0, cauliflower=30)
        assignments = apply_preset(ONE_PER_TYPE, [buffalo, bbq], distribution)

        assert sauce_ids(assignments["boneless"]) == ["buffalo"]
        assert assignments["boneIn"] == []
        assert sauce_ids(assignments["cauliflower"]) == ["bbq"]


class TestDegenerateInput:

    @pytest.mark.parametrize("preset_id", [ALL_SAME, EVEN_MIX, ONE_PER_TYPE, CUSTOM])
    def test_no_sauces_gives_empty_lists(self, preset_id, distribution_50_30):
        assignments = apply_preset(preset_id, [], distribution_50_30)
        assert assignments == {wing_type: [] for wing_type in WING_TYPES}

    @pytest.mark.parametrize("preset_id", [ALL_SAME, EVEN_MIX, ONE_PER_TYPE])
    def test_zero_types_stay_empty(self, preset_id, buffalo, bbq, distribution_50_30):
        assignments = apply_preset(preset_id, [buffalo, bbq], distribution_50_30)
        assert assignments["cauliflower"] == []

    @pytest.mark.parametrize("preset_id", [ALL_SAME, EVEN_MIX, ONE_PER_TYPE])
    def test_sum_equals_type_total(self, preset_id, buffalo, bbq, lemon_pepper):
        distribution = WingDistribution(boneless=47, bone_in=31, cauliflower=13)
        assignments = apply_preset(preset_id, [buffalo, bbq, lemon_pepper], distribution)
        for wing_type in WING_TYPES:
            assert sum(counts(assignments[wing_type])) == distribution.count_for(wing_type)

    def test_custom_is_empty(self, buffalo, bbq, distribution_50_30):
        assignments = apply_preset(CUSTOM, [buffalo, bbq], distribution_50_30)
        assert all(items == [] for items in assignments.values())

    def test_unknown_preset_behaves_as_custom(self, buffalo, distribution_50_30):
        assignments = apply_preset("chef-special", [buffalo], distribution_50_30)
        assert assignments == {wing_type: [] for wing_type in WING_TYPES}

    def test_generated_assignments_are_tossed(self, buffalo, bbq, distribution_50_30):
        assignments = apply_preset(EVEN_MIX, [buffalo, bbq], distribution_50_30)
        methods = {a.application_method for items in assignments.values() for a in items}
        assert methods == {ApplicationMethod.TOSSED}


class TestPresetPreview:

    def test_even_mix_preview(self, buffalo, bbq, distribution_50_30):
        preview = preset_preview(EVEN_MIX, [buffalo, bbq], distribution_50_30)
        assert preview == {
            "boneless": "Buffalo (25), BBQ (25)",
            "boneIn": "Buffalo (15), BBQ (15)",
        }

    def test_custom_preview(self, buffalo, distribution_50_30):
        preview = preset_preview(CUSTOM, [buffalo], distribution_50_30)
        assert preview == {"boneless": "Assign manually", "boneIn": "Assign manually"}


class TestPresetToSummary:
    """Preset output flows through validation and summary unchanged."""

    def test_even_mix_end_to_end(self, buffalo, bbq, distribution_50_30):
        assignments = apply_preset(EVEN_MIX, [buffalo, bbq], distribution_50_30)

        validation = validate_all_assignments(assignments, distribution_50_30)
        assert validation.valid is True
        assert validation.errors == []

        summary = calculate_sauce_assignment_summary(assignments, distribution_50_30)
        assert summary.total_wings_assigned == 80
        assert summary.containers_needed == 0
        assert summary.by_application_method == {"tossed": 80, "onTheSide": 0}
