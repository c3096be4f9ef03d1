"""
BrewCalc Ingredient & Style Reference Data Tests
"""

import pytest

from brewcalc.core.decorators import InvalidRecipe
from brewcalc.ingredients import ValueRange, union_ranges
from brewcalc.ingredients.doses import HopsProportion, MaltDose, MaltProportion
from brewcalc.ingredients.hops import get_hops
from brewcalc.ingredients.malts import MALTS, MaltCategory, get_malt
from brewcalc.ingredients.salts import SALTS, Ion, get_acid, get_salt, meq_to_ppm, ppm_to_meq
from brewcalc.ingredients.styles import get_style
from brewcalc.ingredients.sugars import get_sugar
from brewcalc.ingredients.yeasts import Flocculation, get_yeast


class TestValueRange:
    def test_contains_is_inclusive(self):
        r = ValueRange(4.3, 5.6)
        assert r.contains(4.3)
        assert r.contains(5.6)
        assert not r.contains(5.61)

    def test_union(self):
        assert union_ranges([ValueRange(1.054, 1.060), ValueRange(1.052, 1.057)]) == (1.052, 1.060)

    def test_midpoint_and_str(self):
        r = ValueRange(10.0, 12.0)
        assert r.midpoint == 11.0
        assert str(r) == "10-12"


class TestLookups:
    @pytest.mark.parametrize("getter", [get_malt, get_hops, get_sugar, get_yeast, get_salt, get_acid, get_style])
    def test_unknown_key_is_invalid_recipe(self, getter):
        with pytest.raises(InvalidRecipe):
            getter("no_such_thing")

    def test_keys_are_case_insensitive(self):
        assert get_malt("Weyermann_Munich_2").key == "weyermann_munich_2"


class TestMalts:
    def test_base_malts_have_distilled_ph(self):
        for malt in MALTS.values():
            if malt.category == MaltCategory.BASE:
                assert malt.distilled_ph is not None

    def test_color(self):
        munich = get_malt("weyermann_munich_2")
        assert munich.ebc == pytest.approx(22.5)
        assert 8 < munich.lovibond < 10

    def test_proportion_from_dict(self):
        entry = MaltProportion.from_dict({"malt": "weyermann_vienna", "proportion": 40})
        assert entry.malt.name == "Weyermann Vienna Malt"
        assert entry.to_dict() == {"malt": "weyermann_vienna", "proportion": 40.0}

    def test_dose_str(self):
        assert "Munich" in str(MaltDose(get_malt("weyermann_munich_2"), 1.234))


class TestHopsAndYeast:
    def test_hops_proportion(self):
        entry = HopsProportion.from_dict({"hops": "saaz", "proportion": 1, "timing_min": 60})
        assert entry.timing_min == 60.0
        assert 0 < entry.hops.alpha_acid < 0.1

    def test_yeast_midpoints(self):
        yeast = get_yeast("wlp835")
        assert yeast.temp == pytest.approx(11.0)
        assert yeast.attenuation == pytest.approx(0.73)
        assert yeast.alcohol_tolerance == pytest.approx(0.10)
        assert yeast.flocculation == Flocculation.MEDIUM
        assert not yeast.is_dry


class TestSaltsAndIons:
    @pytest.mark.parametrize("key", sorted(SALTS))
    def test_ion_fractions_sum_to_one(self, key):
        salt = SALTS[key]
        assert sum(salt.ion_fraction(ion) for ion in set(salt.ions)) == pytest.approx(1.0)

    def test_gypsum_composition(self):
        gypsum = get_salt("gypsum")
        assert gypsum.molecular_weight == pytest.approx(172.17, abs=0.05)
        assert gypsum.ion_fraction(Ion.CALCIUM) == pytest.approx(0.2328, abs=1e-3)
        assert gypsum.provides(Ion.SULFATE)
        assert not gypsum.provides(Ion.CHLORIDE)

    def test_equivalents(self):
        assert ppm_to_meq(40.078, Ion.CALCIUM) == pytest.approx(2.0)
        assert meq_to_ppm(1, Ion.CHLORIDE) == pytest.approx(35.45)

    def test_water_has_no_equivalent_weight(self):
        with pytest.raises(ValueError):
            Ion.WATER.equivalent_weight


class TestSugars:
    def test_ppg_relative_to_sucrose(self):
        assert get_sugar("sucrose").ppg == pytest.approx(46)
        assert get_sugar("dextrose").ppg == pytest.approx(41.86)

    def test_priming_warmer_beer_needs_more(self):
        dextrose = get_sugar("dextrose")
        cold = dextrose.priming_amount(2.4, 19, 4)
        warm = dextrose.priming_amount(2.4, 19, 20)
        assert 0 < cold < warm


class TestStyles:
    def test_marzen_union_ranges(self):
        marzen = get_style("marzen")
        assert marzen.original_gravity_range == (1.052, 1.060)
        assert marzen.final_gravity_range == (1.010, 1.020)
        assert marzen.abv_range == (5.1, 6.3)
        assert marzen.bitterness_range == (18.0, 25.0)
        assert marzen.color_range == (4.0, 17.0)

    def test_recommendations(self):
        assert get_style("marzen").recommended_boil_length() == 80
        assert get_style("weissbier").recommended_boil_length() == 75
        assert get_style("best_bitter").recommended_boil_length() == 50
        assert get_style("marzen").recommended_conditioning_days() == 49
        assert get_style("best_bitter").recommended_conditioning_days() == 14
