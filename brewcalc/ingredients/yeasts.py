"""
BrewCalc - Yeast Reference Data

Ranges are manufacturer figures. FAN requirements are minimums at a
standard gravity of 1.040 (worts generally want 180-200 ppm, more for
high gravity).
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

from brewcalc.core.decorators import InvalidRecipe
from brewcalc.ingredients import ValueRange

# Sources put dry yeast between 5 and 20 billion cells/gram depending on
# viability. Fermentis guarantees 6b; home tests show closer to 20b.
CELLS_PER_GRAM_DRY = 13_000_000_000


class Flocculation(IntEnum):
    LOW = 1
    LOW_MEDIUM = 2
    MEDIUM = 3
    MEDIUM_HIGH = 4
    HIGH = 5
    VERY_HIGH = 6


@dataclass(frozen=True)
class Yeast:
    key: str
    name: str
    temp_range: ValueRange
    attenuation_range: ValueRange
    alcohol_tolerance_range: ValueRange
    flocculation: Flocculation
    is_dry: bool
    fan_requirement: float
    # (grams, liters) when the maker publishes one
    pitching_rate: Optional[Tuple[float, float]] = None

    @property
    def temp(self) -> float:
        return self.temp_range.midpoint

    @property
    def attenuation(self) -> float:
        return self.attenuation_range.midpoint

    @property
    def alcohol_tolerance(self) -> float:
        return self.alcohol_tolerance_range.midpoint

    def __str__(self):
        return f"[{self.name}]"


def _yeast(key, name, temp, attenuation, tolerance, floc, is_dry, fan, pitching_rate=None):
    return Yeast(key, name, ValueRange(*temp), ValueRange(*attenuation), ValueRange(*tolerance),
                 floc, is_dry, fan, pitching_rate)


F = Flocculation

YEASTS = {y.key: y for y in [
    _yeast("kveik_voss", "Kveik Voss", (25.0, 40.0), (0.76, 0.82), (0.12, 0.12), F.VERY_HIGH, True, 180.0),
    _yeast("lutra_kveik", "Lutra Kveik OYL-071", (12.0, 35.0), (0.75, 0.82), (0.15, 0.15), F.MEDIUM_HIGH, False, 180.0),
    _yeast("lallemand_munich_classic", "Lallemand Munich Classic German Wheat-Style Ale Yeast",
           (17.0, 25.0), (0.76, 0.83), (0.12, 0.12), F.LOW, True, 180.0, (75.0, 100.0)),
    _yeast("lallemand_nottingham", "Lallemand Nottingham Ale Yeast",
           (10.0, 22.0), (0.78, 0.84), (0.14, 0.14), F.HIGH, True, 150.0, (75.0, 100.0)),
    _yeast("lallemand_windsor", "Lallemand Windsor Ale Yeast",
           (15.0, 22.0), (0.65, 0.72), (0.12, 0.12), F.LOW, True, 150.0),
    _yeast("safale_s04", "Safale S-04", (15.0, 20.0), (0.74, 0.82), (0.09, 0.11), F.HIGH, True, 150.0),
    _yeast("safale_s33", "Safale S-33", (15.0, 20.0), (0.68, 0.72), (0.09, 0.11), F.MEDIUM, True, 150.0),
    _yeast("safale_t58", "Safale T-58", (18.0, 26.0), (0.72, 0.78), (0.09, 0.11), F.MEDIUM, True, 150.0),
    _yeast("safale_us05", "Safale US-05", (18.0, 26.0), (0.78, 0.82), (0.09, 0.11), F.MEDIUM, True, 150.0),
    _yeast("safale_w68", "Safale W-68", (18.0, 26.0), (0.78, 0.84), (0.09, 0.11), F.MEDIUM, True, 150.0),
    _yeast("safale_wb06", "Safale WB-06", (18.0, 26.0), (0.86, 0.90), (0.09, 0.11), F.LOW, True, 150.0),
    _yeast("saflager_w3470", "SafLager W-34/70", (12.0, 18.0), (0.80, 0.84), (0.09, 0.11), F.HIGH, True, 100.0),
    _yeast("wlp300", "White Labs Hefeweizen Ale Yeast WLP300",
           (20.0, 22.0), (0.72, 0.76), (0.08, 0.12), F.LOW, False, 180.0),
    _yeast("wlp351", "White Labs Bavarian Weizen Ale Yeast WLP351",
           (19.0, 21.0), (0.75, 0.82), (0.15, 0.15), F.LOW, False, 100.0),
    _yeast("wlp380", "White Labs Hefeweizen IV Ale Yeast WLP380",
           (19.0, 21.0), (0.73, 0.80), (0.05, 0.10), F.LOW, False, 150.0),
    _yeast("wlp820", "White Labs Oktoberfest/Märzen WLP820",
           (11.0, 14.0), (0.65, 0.73), (0.05, 0.10), F.MEDIUM, False, 100.0),
    _yeast("wlp830", "White Labs German Lager Yeast WLP830",
           (10.0, 13.0), (0.74, 0.79), (0.05, 0.10), F.MEDIUM, False, 100.0),
    _yeast("wlp833", "White Labs German Bock Lager Yeast WLP833",
           (9.0, 13.0), (0.70, 0.76), (0.05, 0.10), F.MEDIUM, False, 100.0),
    _yeast("wlp835", "White Labs German X Lager Yeast WLP835",
           (10.0, 12.0), (0.70, 0.76), (0.08, 0.12), F.MEDIUM, False, 100.0),
    _yeast("wlp838", "White Labs Southern German Lager Yeast WLP838",
           (10.0, 13.0), (0.68, 0.76), (0.05, 0.10), F.MEDIUM_HIGH, False, 100.0),
]}


def get_yeast(key: str) -> Yeast:
    yeast = YEASTS.get(key.lower())
    if yeast is None:
        raise InvalidRecipe(f"Unknown yeast: {key}")
    return yeast
