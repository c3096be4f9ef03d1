"""
BrewCalc - Sugar Reference Data

Fermentability is the fraction that ferments like pure sucrose.
Unfermentability is what remains as final gravity; it is not simply
1 - fermentability since some of the weight is water.
"""

from dataclasses import dataclass

from brewcalc.core.decorators import InvalidRecipe
from brewcalc.core.units import c_to_f, liters_to_gallons

# Points per pound per gallon of pure sucrose
SUCROSE_PPG = 46.0


@dataclass(frozen=True)
class Sugar:
    key: str
    name: str
    fermentability: float
    unfermentability: float = 0.0
    ebc: float = 0.0

    @property
    def ppg(self) -> float:
        return self.fermentability * SUCROSE_PPG

    def priming_amount(self, co2_volume: float, beer_volume_l: float, beer_temp_c: float) -> float:
        """
        Grams of this sugar that carbonate the beer to co2_volume.
        Residual CO2 depends on the warmest temperature the beer reached.
        (Brew By the Numbers, Zymurgy Summer 1995)
        """
        temp_f = c_to_f(beer_temp_c)
        residual_co2 = 3.0378 - 0.050062 * temp_f + 0.00026555 * temp_f ** 2
        return 15.195 * liters_to_gallons(beer_volume_l) * (co2_volume - residual_co2) / self.fermentability

    def __str__(self):
        return f"[{self.name}]"


SUGARS = {s.key: s for s in [
    Sugar("sucrose", "Sucrose", 1.00),
    Sugar("fructose", "Fructose", 1.00),
    Sugar("turbinado", "Turbinado", 1.00),
    Sugar("dextrose", "Dextrose", 0.91),
    Sugar("invert_sugar", "Invert Sugar", 0.91),
    Sugar("brown_sugar", "Brown Sugar", 0.89, ebc=15.0),
    Sugar("maltodextrin", "Maltodextrin", 0.03, 0.97),
    Sugar("maple_syrup", "Maple Syrup", 0.77, 0.02, ebc=10.0),
    Sugar("honey", "Honey", 0.74, 0.075, ebc=5.0),
    Sugar("corn_syrup", "Corn Syrup", 0.69, 0.05, ebc=2.0),
    Sugar("dme", "Dry Malt Extract", 0.68, 0.12, ebc=4.0),
    Sugar("light_lme", "Light Liquid Malt Extract", 0.68, 0.12, ebc=8.0),
]}


def get_sugar(key: str) -> Sugar:
    sugar = SUGARS.get(key.lower())
    if sugar is None:
        raise InvalidRecipe(f"Unknown sugar: {key}")
    return sugar
