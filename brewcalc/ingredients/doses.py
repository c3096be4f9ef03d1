"""
Proportional recipe entries and the absolute doses the engine solves for.
"""

from dataclasses import dataclass

from brewcalc.ingredients.hops import Hops, get_hops
from brewcalc.ingredients.malts import Malt, get_malt
from brewcalc.ingredients.salts import Acid, Salt
from brewcalc.ingredients.sugars import Sugar, get_sugar


# --- RECIPE PROPORTIONS (relative weights) ---

@dataclass(frozen=True)
class MaltProportion:
    malt: Malt
    proportion: float

    @staticmethod
    def from_dict(data):
        return MaltProportion(get_malt(data["malt"]), float(data["proportion"]))

    def to_dict(self):
        return {"malt": self.malt.key, "proportion": self.proportion}


@dataclass(frozen=True)
class SugarProportion:
    sugar: Sugar
    proportion: float

    @staticmethod
    def from_dict(data):
        return SugarProportion(get_sugar(data["sugar"]), float(data["proportion"]))

    def to_dict(self):
        return {"sugar": self.sugar.key, "proportion": self.proportion}


@dataclass(frozen=True)
class HopsProportion:
    hops: Hops
    proportion: float
    timing_min: float  # minutes before the end of the boil

    @staticmethod
    def from_dict(data):
        return HopsProportion(get_hops(data["hops"]), float(data["proportion"]), float(data["timing_min"]))

    def to_dict(self):
        return {"hops": self.hops.key, "proportion": self.proportion, "timing_min": self.timing_min}


# --- SOLVED DOSES ---

@dataclass(frozen=True)
class MaltDose:
    malt: Malt
    weight_kg: float

    def __str__(self):
        return f"{self.weight_kg:.3f} kg {self.malt}"


@dataclass(frozen=True)
class SugarDose:
    sugar: Sugar
    weight_kg: float

    def __str__(self):
        return f"{self.weight_kg:.3f} kg {self.sugar}"


@dataclass(frozen=True)
class HopsDose:
    hops: Hops
    weight_g: float
    timing_min: float

    def __str__(self):
        return f"{self.weight_g:.1f} g {self.hops} at {self.timing_min:g} min"


@dataclass(frozen=True)
class SaltConcentration:
    salt: Salt
    ppm: float


@dataclass(frozen=True)
class AcidConcentration:
    acid: Acid
    ppm: float


@dataclass(frozen=True)
class SaltDose:
    salt: Salt
    weight_mg: float

    def __str__(self):
        return f"{self.weight_mg / 1000:.2f} g {self.salt}"


@dataclass(frozen=True)
class AcidDose:
    acid: Acid
    weight_mg: float

    def __str__(self):
        return f"{self.weight_mg / 1000:.2f} g {self.acid}"
