"""
BrewCalc Calculator Test Suite

- Gravity and dilution
- Tinseth bitterness
- Morey color
- Attenuation and ABV
- Hydrometer / refractometer correction
- Keg carbonation pressure
"""

import pytest

from brewcalc.core.units import gallons_to_liters, lb_to_kg, ounces_to_grams, plato_to_sg
from brewcalc.ingredients.doses import HopsDose, MaltDose, SugarDose
from brewcalc.ingredients.hops import Hops
from brewcalc.ingredients.malts import get_malt
from brewcalc.ingredients.sugars import get_sugar
from brewcalc.services.calculator import (
    attenuated_gravity, calculate_abv, correct_hydrometer_reading, correct_refractometer_reading,
    crystal_attenuation_reduction, dilute_gravity, keg_pressure_psi, malt_color_units, morey_srm,
    specific_gravity, tinseth_ibu,
)

ONE_GALLON = gallons_to_liters(1)
TEN_PERCENT = Hops("test", "Test Hops", 0.10)


class TestGravity:
    def test_one_pound_per_gallon_is_ppg(self):
        doses = [MaltDose(get_malt("gladfield_german_pilsner"), lb_to_kg(1))]
        assert specific_gravity(doses, [], ONE_GALLON, 1.0) == pytest.approx(1.0363)

    def test_efficiency_scales_malt_only(self):
        malts = [MaltDose(get_malt("gladfield_german_pilsner"), lb_to_kg(1))]
        sugars = [SugarDose(get_sugar("sucrose"), lb_to_kg(1))]
        assert specific_gravity(malts, sugars, ONE_GALLON, 0.5) == pytest.approx(1 + (36.3 * 0.5 + 46) / 1000)

    def test_dilution(self):
        assert dilute_gravity(1.060, 10, 12) == pytest.approx(1.050)


class TestTinseth:
    def test_reference_addition(self):
        # 1 oz of 10% AA hops for 60 min in 5 gallons of 1.050 wort
        dose = HopsDose(TEN_PERCENT, ounces_to_grams(1), 60)
        assert tinseth_ibu([dose], 1.050, gallons_to_liters(5)) == pytest.approx(34.55, abs=0.05)

    def test_additions_sum(self):
        bittering = HopsDose(TEN_PERCENT, 20, 60)
        flavour = HopsDose(TEN_PERCENT, 15, 15)
        both = tinseth_ibu([bittering, flavour], 1.050, 20)
        assert both == pytest.approx(tinseth_ibu([bittering], 1.050, 20) + tinseth_ibu([flavour], 1.050, 20))

    def test_flameout_and_empty(self):
        assert tinseth_ibu([HopsDose(TEN_PERCENT, 20, 0)], 1.050, 20) == 0
        assert tinseth_ibu([], 1.050, 20) == 0

    def test_bigger_wort_lower_utilization(self):
        dose = [HopsDose(TEN_PERCENT, 20, 60)]
        assert tinseth_ibu(dose, 1.080, 20) < tinseth_ibu(dose, 1.040, 20)


class TestColor:
    def test_morey(self):
        doses = [MaltDose(get_malt("weyermann_munich_2"), 2.0)]
        mcu = malt_color_units(doses, [], 20)
        assert morey_srm(doses, [], 20) == pytest.approx(1.4922 * mcu ** 0.6859)

    def test_no_color(self):
        assert morey_srm([], [], 20) == 0
        assert morey_srm([], [SugarDose(get_sugar("sucrose"), 1.0)], 20) == 0

    def test_dark_sugar_adds_color(self):
        assert morey_srm([], [SugarDose(get_sugar("brown_sugar"), 1.0)], 20) > 0


class TestFermentation:
    def test_abv(self):
        assert calculate_abv(1.050, 1.010) == pytest.approx(5.34, abs=0.01)

    def test_attenuated_gravity(self):
        assert attenuated_gravity(1.050, 0.75) == pytest.approx(1.0125)

    def test_crystal_reduction(self):
        base = [MaltDose(get_malt("gladfield_german_pilsner"), 4.0)]
        crystal = base + [MaltDose(get_malt("weyermann_caramunich_2"), 0.5)]
        assert crystal_attenuation_reduction(base, 20) == 0
        assert 0 < crystal_attenuation_reduction(crystal, 20) < 0.1


class TestHydrometer:
    def test_at_calibration_temperature(self):
        assert correct_hydrometer_reading(1.050, 20) == pytest.approx(1.050)

    def test_warm_sample_reads_low(self):
        assert correct_hydrometer_reading(1.050, 30) > 1.050
        assert correct_hydrometer_reading(1.050, 30) == pytest.approx(1.0525, abs=5e-4)


class TestRefractometer:
    def test_typical_ale(self):
        result = correct_refractometer_reading(8.0, 15.0)
        assert result["original_gravity"] == pytest.approx(plato_to_sg(15.0 / 1.04))
        assert 1.005 < result["final_gravity"] < result["original_gravity"]
        assert 4.0 < result["abv"] < 8.0
        assert 0 < result["apparent_attenuation"] < 1


class TestCarbonation:
    def test_keg_pressure(self):
        assert keg_pressure_psi(4, 2.5) == pytest.approx(12.29, abs=0.05)

    def test_never_negative(self):
        assert keg_pressure_psi(0, 0.5) == 0
