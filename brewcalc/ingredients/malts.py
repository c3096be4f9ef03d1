"""
BrewCalc - Malt Reference Data

Color and extract figures come from maltster spec sheets. Distilled-water
mash pH applies to base malts; acidity (mEq/kg) applies to everything else.
FAN is the free amino nitrogen of a 12 °P congress wort, in mg/L.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from brewcalc.core.decorators import InvalidRecipe
from brewcalc.core.units import ebc_to_lovibond
from brewcalc.ingredients import ValueRange


class MaltCategory(str, Enum):
    BASE = "base"
    CRYSTAL = "crystal"
    ROASTED = "roasted"
    SPECIAL = "special"


class MaltAcidCategory(str, Enum):
    NONE = "none"
    LIGHT = "light"
    CRYSTAL = "crystal"
    DARK = "dark"
    ACIDULATED = "acidulated"


@dataclass(frozen=True)
class Malt:
    key: str
    name: str
    category: MaltCategory
    acid_category: MaltAcidCategory
    ebc_range: ValueRange
    recommended_max_percent: float
    ppg: float
    distilled_ph: Optional[float] = None
    acidity_meq_per_kg: float = 0.0
    fan_ppm: float = 0.0

    @property
    def ebc(self) -> float:
        return self.ebc_range.midpoint

    @property
    def lovibond(self) -> float:
        return ebc_to_lovibond(self.ebc)

    @property
    def is_base(self) -> bool:
        return self.category == MaltCategory.BASE

    def __str__(self):
        return f"[{self.name}]"


def _malt(key, name, category, acid_category, ebc, max_percent, ppg, **kwargs):
    return Malt(key, name, category, acid_category, ValueRange(*ebc), max_percent, ppg, **kwargs)


B, C, R, S = MaltCategory.BASE, MaltCategory.CRYSTAL, MaltCategory.ROASTED, MaltCategory.SPECIAL

MALTS = {m.key: m for m in [
    _malt("gladfield_german_pilsner", "Gladfield German Pilsner Malt", B, MaltAcidCategory.LIGHT,
          (3.0, 4.5), 100.0, 36.3, distilled_ph=5.75, fan_ppm=150.0),
    _malt("gladfield_wheat", "Gladfield Wheat Malt", B, MaltAcidCategory.LIGHT,
          (3.2, 4.2), 70.0, 38.8, distilled_ph=6.0, fan_ppm=110.0),
    _malt("weyermann_munich_1", "Weyermann Munich Malt I", B, MaltAcidCategory.LIGHT,
          (12.0, 18.0), 100.0, 38.0, distilled_ph=5.6, fan_ppm=140.0),
    _malt("weyermann_munich_2", "Weyermann Munich Malt II", B, MaltAcidCategory.LIGHT,
          (20.0, 25.0), 100.0, 37.0, distilled_ph=5.5, fan_ppm=130.0),
    _malt("weyermann_vienna", "Weyermann Vienna Malt", B, MaltAcidCategory.LIGHT,
          (6.0, 9.0), 100.0, 37.0, distilled_ph=5.65, fan_ppm=145.0),
    _malt("weyermann_wheat_pale", "Weyermann Wheat Malt Pale", B, MaltAcidCategory.LIGHT,
          (3.0, 5.0), 80.0, 36.0, distilled_ph=6.0, fan_ppm=110.0),
    _malt("weyermann_caramunich_2", "Weyermann CaraMunich Malt II", C, MaltAcidCategory.CRYSTAL,
          (110.0, 130.0), 10.0, 34.0, acidity_meq_per_kg=20.6, fan_ppm=40.0),
    _malt("weyermann_melanoidin", "Weyermann Melanoidin Malt", C, MaltAcidCategory.CRYSTAL,
          (60.0, 80.0), 20.0, 34.5, acidity_meq_per_kg=12.0, fan_ppm=80.0),
    _malt("weyermann_carafa_special_2", "Weyermann Carafa Special II", R, MaltAcidCategory.DARK,
          (1100.0, 1200.0), 5.0, 32.0, acidity_meq_per_kg=40.0),
    # ~0.1 pH drop per 1% of grist in a 3 L/kg mash
    _malt("weyermann_acidulated", "Weyermann Acidulated Malt", S, MaltAcidCategory.ACIDULATED,
          (2.0, 5.0), 5.0, 27.0, acidity_meq_per_kg=215.0, fan_ppm=100.0),
    _malt("oat_hulls", "Oat Hulls", S, MaltAcidCategory.NONE, (0.0, 0.0), 5.0, 0.0),
    _malt("rice_hulls", "Rice Hulls", S, MaltAcidCategory.NONE, (0.0, 0.0), 8.0, 0.0),
]}


def get_malt(key: str) -> Malt:
    malt = MALTS.get(key.lower())
    if malt is None:
        raise InvalidRecipe(f"Unknown malt: {key}")
    return malt
