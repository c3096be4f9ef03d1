"""
BrewCalc - Water Salts and Acids

Each salt is listed as its constituent ions with multiplicity (waters of
hydration included), so ion mass fractions fall out of the atomic weights.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from brewcalc.core.decorators import InvalidRecipe

ATOMIC_WEIGHTS = {
    "H": 1.008,
    "C": 12.011,
    "O": 15.999,
    "Na": 22.990,
    "Mg": 24.305,
    "S": 32.06,
    "Cl": 35.45,
    "Ca": 40.078,
}


class Ion(Enum):
    # (atoms, charge)
    CALCIUM = (("Ca",), 2)
    MAGNESIUM = (("Mg",), 2)
    SODIUM = (("Na",), 1)
    HYDROGEN = (("H",), 1)
    SULFATE = (("S", "O", "O", "O", "O"), -2)
    CHLORIDE = (("Cl",), -1)
    BICARBONATE = (("H", "C", "O", "O", "O"), -1)
    HYDROXIDE = (("O", "H"), -1)
    WATER = (("H", "H", "O"), 0)

    @property
    def atoms(self) -> Tuple[str, ...]:
        return self.value[0]

    @property
    def charge(self) -> int:
        return self.value[1]

    @property
    def molecular_weight(self) -> float:
        return sum(ATOMIC_WEIGHTS[a] for a in self.atoms)

    @property
    def equivalent_weight(self) -> float:
        """mg per mEq; undefined for neutral water."""
        if self.charge == 0:
            raise ValueError("Water has no equivalent weight")
        return self.molecular_weight / abs(self.charge)


def ppm_to_meq(ppm: float, ion: Ion) -> float:
    """ppm (mg/L) of an ion to mEq/L"""
    return ppm / ion.equivalent_weight


def meq_to_ppm(meq: float, ion: Ion) -> float:
    return meq * ion.equivalent_weight


@dataclass(frozen=True)
class Salt:
    key: str
    name: str
    formula: str
    ions: Tuple[Ion, ...]

    @property
    def molecular_weight(self) -> float:
        return sum(ion.molecular_weight for ion in self.ions)

    def ion_fraction(self, target: Ion) -> float:
        """Mass fraction of the salt that is `target` (counting repeats)."""
        matching = sum(ion.molecular_weight for ion in self.ions if ion == target)
        return matching / self.molecular_weight

    def provides(self, target: Ion) -> bool:
        return target in self.ions

    def __str__(self):
        return f"[{self.name}]"


I = Ion

SALTS = {s.key: s for s in [
    Salt("gypsum", "Gypsum", "CaSO4·2H2O", (I.CALCIUM, I.SULFATE, I.WATER, I.WATER)),
    Salt("epsom", "Epsom", "MgSO4·7H2O", (I.MAGNESIUM, I.SULFATE) + (I.WATER,) * 7),
    Salt("table_salt", "Table Salt", "NaCl", (I.SODIUM, I.CHLORIDE)),
    Salt("calcium_chloride", "Calcium Chloride", "CaCl2·2H2O",
         (I.CALCIUM, I.CHLORIDE, I.CHLORIDE, I.WATER, I.WATER)),
    Salt("magnesium_chloride", "Magnesium Chloride", "MgCl2·6H2O",
         (I.MAGNESIUM, I.CHLORIDE, I.CHLORIDE) + (I.WATER,) * 6),
    Salt("baking_soda", "Baking Soda", "NaHCO3", (I.SODIUM, I.BICARBONATE)),
    Salt("slaked_lime", "Slaked Lime", "Ca(OH)2", (I.CALCIUM, I.HYDROXIDE, I.HYDROXIDE)),
    Salt("caustic_soda", "Caustic Soda", "NaOH", (I.SODIUM, I.HYDROXIDE)),
    Salt("sodium_sulfate", "Sodium Sulfate", "Na2SO4", (I.SODIUM, I.SODIUM, I.SULFATE)),
]}


@dataclass(frozen=True)
class Acid:
    key: str
    name: str
    # Empirical mash pH drop per ppm dosed
    ph_shift_per_ppm: float

    def __str__(self):
        return f"[{self.name}]"


ACIDS = {a.key: a for a in [
    # ~1 pH unit per 300 ppm of 88% lactic acid
    Acid("lactic_acid", "Lactic Acid (88%)", 1 / 300),
]}


def get_salt(key: str) -> Salt:
    salt = SALTS.get(key.lower())
    if salt is None:
        raise InvalidRecipe(f"Unknown salt: {key}")
    return salt


def get_acid(key: str) -> Acid:
    acid = ACIDS.get(key.lower())
    if acid is None:
        raise InvalidRecipe(f"Unknown acid: {key}")
    return acid
