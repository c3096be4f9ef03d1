"""
BrewCalc Water Chemistry Tests

- Water profiles (hardness, residual alkalinity, Cl:SO4)
- Salt additions
- Ratio correction and target-seeking adjustment
"""

import math

import pytest

from brewcalc.core.decorators import InvalidRecipe
from brewcalc.ingredients import ValueRange
from brewcalc.ingredients.salts import Ion, get_acid, get_salt
from brewcalc.services.water import WaterProfile, get_all_profiles, get_profile
from brewcalc.services.water_chemistry import (
    HARDNESS_PER_PPM_MAGNESIUM, WATER_PH_SHIFT_PER_RA, add_acid, add_salt, adjust_water, harden_water, ion_balance,
    ratio_correction, water_ph_shift,
)


def _profile(**kwargs):
    values = dict(name="test", calcium=0, magnesium=0, sodium=0, chloride=0, sulfate=0, alkalinity=0)
    values.update(kwargs)
    return WaterProfile(**values)


class TestWaterProfile:
    def test_papaioea(self):
        water = get_profile("papaioea")
        assert water.calcium == pytest.approx(38.6)
        assert water.hardness == pytest.approx(38.6 / 1.4 + 7 / 1.7)
        assert water.residual_alkalinity() == pytest.approx(120 - water.hardness)
        assert water.bicarbonate == pytest.approx(146.4)

    def test_ratio_for_ro_water_is_none(self):
        assert get_profile("ro").chloride_sulfate_ratio() is None

    def test_ratio_without_sulfate_is_infinite(self):
        assert math.isinf(_profile(chloride=20).chloride_sulfate_ratio())

    def test_from_dict_accepts_bicarbonate(self):
        water = WaterProfile.from_dict({"name": "well", "calcium": 50, "bicarbonate": 122})
        assert water.alkalinity == pytest.approx(100)
        assert water.to_dict()["name"] == "well"

    def test_unknown_profile(self):
        with pytest.raises(InvalidRecipe):
            get_profile("atlantis")

    def test_all_profiles_listed(self):
        assert {"ro", "distilled", "papaioea", "burton"} <= set(get_all_profiles())


class TestSaltAdditions:
    def test_gypsum_adds_calcium_and_sulfate(self):
        water = add_salt(get_profile("ro"), get_salt("gypsum"), 100)
        assert water.calcium == pytest.approx(23.28, abs=0.05)
        assert water.sulfate == pytest.approx(55.79, abs=0.05)
        assert water.chloride == 0

    def test_calcium_chloride_counts_both_chlorides(self):
        salt = get_salt("calcium_chloride")
        water = add_salt(get_profile("ro"), salt, 100)
        assert water.chloride == pytest.approx(100 * salt.ion_fraction(Ion.CHLORIDE))
        assert water.chloride > water.calcium

    def test_baking_soda_raises_alkalinity(self):
        water = add_salt(get_profile("ro"), get_salt("baking_soda"), 100)
        assert water.sodium == pytest.approx(27.37, abs=0.05)
        assert water.alkalinity == pytest.approx(72.63 / 1.22, abs=0.05)

    def test_slaked_lime_hydroxide_is_not_tracked(self):
        water = add_salt(get_profile("ro"), get_salt("slaked_lime"), 50)
        assert water.calcium > 0
        assert water.alkalinity == 0

    def test_acid_leaves_profile_unchanged(self):
        water = get_profile("papaioea")
        assert add_acid(water, get_acid("lactic_acid"), 100) == water

    def test_source_profile_is_not_mutated(self):
        water = get_profile("ro")
        add_salt(water, get_salt("gypsum"), 100)
        assert water.calcium == 0


class TestIonBalance:
    def test_ro_is_balanced(self):
        assert ion_balance(get_profile("ro")) == 0

    def test_single_salt_is_balanced(self):
        water = add_salt(get_profile("ro"), get_salt("table_salt"), 100)
        assert ion_balance(water) == pytest.approx(0, abs=1e-9)

    def test_ph_shift_follows_residual_alkalinity(self):
        water = _profile(alkalinity=100)
        assert water_ph_shift(water) == pytest.approx(100 * WATER_PH_SHIFT_PER_RA)


class TestRatioCorrection:
    def test_low_ratio_adds_chloride(self):
        water = _profile(chloride=20, sulfate=40)
        dose, unresolved = ratio_correction(water, ValueRange(1.0, 2.0), [get_salt("calcium_chloride")])
        assert unresolved is None
        assert dose.salt.key == "calcium_chloride"
        assert add_salt(water, dose.salt, dose.ppm).chloride_sulfate_ratio() == pytest.approx(1.0)

    def test_high_ratio_adds_sulfate(self):
        water = get_profile("papaioea")
        dose, _ = ratio_correction(water, ValueRange(0.5, 1.5), [get_salt("gypsum")])
        assert add_salt(water, dose.salt, dose.ppm).chloride_sulfate_ratio() == pytest.approx(1.5)

    def test_high_ratio_without_sulfate_salt(self):
        water = _profile(chloride=40, sulfate=10)
        assert ratio_correction(water, ValueRange(0.5, 1.5), [get_salt("table_salt")]) == (None, "high")

    def test_in_window_or_undefined(self):
        assert ratio_correction(_profile(chloride=10, sulfate=10), ValueRange(0.5, 1.5), []) == (None, None)
        assert ratio_correction(get_profile("ro"), ValueRange(0.5, 1.5), []) == (None, None)


class TestAdjustWater:
    def test_acid_brings_ph_down(self):
        adjustment = adjust_water(get_profile("ro"), 5.7, 5.4, None, [], [get_acid("lactic_acid")])
        assert len(adjustment.acids) == 1
        assert adjustment.acids[0].ppm == pytest.approx(90)
        assert adjustment.predicted_ph == pytest.approx(5.4)

    def test_baking_soda_brings_ph_up(self):
        adjustment = adjust_water(get_profile("ro"), 5.2, 5.4, None, [get_salt("baking_soda")], [])
        assert adjustment.uses("baking_soda")
        treated = adjustment.apply(get_profile("ro"))
        assert 5.2 + water_ph_shift(treated) == pytest.approx(5.4)

    def test_nothing_available(self):
        adjustment = adjust_water(get_profile("papaioea"), 5.8, 5.4, None, [], [])
        assert adjustment.salts == []
        assert adjustment.acids == []
        assert adjustment.predicted_ph > 5.4

    def test_ratio_salt_then_acid(self):
        adjustment = adjust_water(
            get_profile("papaioea"), 5.56, 5.4, ValueRange(0.5, 1.5),
            [get_salt("gypsum"), get_salt("calcium_chloride")], [get_acid("lactic_acid")],
        )
        assert [s.salt.key for s in adjustment.salts] == ["gypsum"]
        assert adjustment.ratio_before == pytest.approx(21.9 / 12.5)
        assert adjustment.acids[0].ppm > 0
        assert adjustment.unresolved_ratio is None

    def test_hardening_without_acid(self):
        salts = [get_salt("epsom"), get_salt("gypsum"), get_salt("calcium_chloride")]
        adjustment = adjust_water(get_profile("papaioea"), 5.8, 5.4, None, salts, [])
        assert adjustment.acids == []
        assert {s.salt.key for s in adjustment.salts} == {"epsom", "gypsum", "calcium_chloride"}
        assert adjustment.predicted_ph == pytest.approx(5.4, abs=1e-6)

        treated = adjustment.apply(get_profile("papaioea"))
        hardness_needed = 120.0 + 0.4 / WATER_PH_SHIFT_PER_RA
        assert treated.magnesium == pytest.approx(hardness_needed / HARDNESS_PER_PPM_MAGNESIUM)
        assert treated.residual_alkalinity() == pytest.approx(-0.4 / WATER_PH_SHIFT_PER_RA, abs=1e-3)
        # Gypsum and calcium chloride alternate around a balanced ratio
        assert treated.chloride_sulfate_ratio() == pytest.approx(1.0, abs=0.02)

    def test_hardening_steers_toward_ratio_window(self):
        salts = [get_salt("gypsum"), get_salt("calcium_chloride")]
        adjustment = adjust_water(get_profile("ro"), 5.8, 5.4, ValueRange(1.5, 2.5), salts, [])
        treated = adjustment.apply(get_profile("ro"))
        assert treated.chloride_sulfate_ratio() == pytest.approx(2.0, abs=0.05)
        assert adjustment.predicted_ph == pytest.approx(5.4, abs=1e-6)

    def test_gypsum_alone(self):
        adjustment = adjust_water(get_profile("papaioea"), 5.8, 5.4, None, [get_salt("gypsum")], [])
        assert [s.salt.key for s in adjustment.salts] == ["gypsum"]
        treated = adjustment.apply(get_profile("papaioea"))
        assert treated.magnesium == pytest.approx(7.0)
        assert adjustment.predicted_ph == pytest.approx(5.4, abs=1e-6)

    def test_epsom_alone_falls_short(self):
        adjustment = adjust_water(get_profile("papaioea"), 5.8, 5.4, None, [get_salt("epsom")], [])
        assert [s.salt.key for s in adjustment.salts] == ["epsom"]
        untreated = 5.8 + water_ph_shift(get_profile("papaioea"))
        assert 5.4 < adjustment.predicted_ph < untreated

    def test_acid_preferred_over_hardening(self):
        adjustment = adjust_water(
            get_profile("papaioea"), 5.8, 5.4, None, [get_salt("gypsum")], [get_acid("lactic_acid")],
        )
        assert adjustment.salts == []
        assert len(adjustment.acids) == 1

    def test_already_hard_enough(self):
        doses, profile = harden_water(get_profile("burton"), 50.0, 1.0, [get_salt("gypsum")])
        assert doses == []
        assert profile == get_profile("burton")
