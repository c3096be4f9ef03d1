"""
BrewCalc Unit Conversion Tests
"""

import pytest

from brewcalc.core import units


class TestVolumeAndWeight:
    def test_gallon(self):
        assert units.liters_to_gallons(3.785411784) == pytest.approx(1.0)
        assert units.gallons_to_liters(5) == pytest.approx(18.927, abs=1e-3)

    def test_quarts(self):
        assert units.liters_to_quarts(units.gallons_to_liters(1)) == pytest.approx(4.0)

    def test_pounds_and_ounces(self):
        assert units.kg_to_lb(1) == pytest.approx(2.20462, abs=1e-5)
        assert units.lb_to_kg(units.kg_to_lb(3.2)) == pytest.approx(3.2)
        assert units.grams_to_ounces(28.349523125) == pytest.approx(1.0)

    def test_milliliters(self):
        assert units.liters_to_milliliters(4.25) == pytest.approx(4250)
        assert units.milliliters_to_liters(500) == pytest.approx(0.5)


class TestTemperature:
    @pytest.mark.parametrize("celsius,fahrenheit", [(0, 32), (100, 212), (-40, -40), (66.7, 152.06)])
    def test_known_points(self, celsius, fahrenheit):
        assert units.c_to_f(celsius) == pytest.approx(fahrenheit)
        assert units.f_to_c(fahrenheit) == pytest.approx(celsius)


class TestColor:
    def test_ebc_srm(self):
        assert units.ebc_to_srm(19.7) == pytest.approx(10.0)
        assert units.srm_to_ebc(10) == pytest.approx(19.7)

    def test_lovibond(self):
        # SRM = 1.3546 L - 0.76
        assert units.lovibond_to_srm(10) == pytest.approx(12.786)
        assert units.srm_to_lovibond(units.lovibond_to_srm(40)) == pytest.approx(40)

    def test_ebc_lovibond_roundtrip(self):
        assert units.lovibond_to_ebc(units.ebc_to_lovibond(70)) == pytest.approx(70)


class TestGravity:
    def test_plato(self):
        assert units.sg_to_plato(1.040) == pytest.approx(10.0, abs=0.1)
        assert units.plato_to_sg(12) == pytest.approx(1.048, abs=1e-3)

    @pytest.mark.parametrize("sg", [1.000, 1.010, 1.030, 1.056, 1.090, 1.120])
    def test_plato_round_trip(self, sg):
        assert units.plato_to_sg(units.sg_to_plato(sg)) == pytest.approx(sg, abs=1e-9)

    @pytest.mark.parametrize("plato", [0.0, 4.0, 12.0, 20.0, 28.0])
    def test_sg_round_trip(self, plato):
        assert units.sg_to_plato(units.plato_to_sg(plato)) == pytest.approx(plato, abs=1e-6)

    def test_gravity_points(self):
        assert units.gravity_points(1.056) == pytest.approx(56)


class TestConcentration:
    def test_german_hardness(self):
        assert units.ppm_to_dh(17.8) == pytest.approx(1.0)
        assert units.dh_to_ppm(2) == pytest.approx(35.6)

    def test_bicarbonate_alkalinity(self):
        assert units.bicarbonate_to_alkalinity(122) == pytest.approx(100)
        assert units.alkalinity_to_bicarbonate(100) == pytest.approx(122)
