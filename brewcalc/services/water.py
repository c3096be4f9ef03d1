import math
from dataclasses import dataclass, asdict, replace
from typing import Optional

from brewcalc.core.decorators import InvalidRecipe
from brewcalc.core.units import alkalinity_to_bicarbonate, bicarbonate_to_alkalinity


@dataclass(frozen=True)
class WaterProfile:
    """Ion concentrations in ppm; alkalinity is expressed as CaCO3."""
    name: str
    calcium: float
    magnesium: float
    sodium: float
    chloride: float
    sulfate: float
    alkalinity: float
    ph: float = 7.0

    @property
    def bicarbonate(self) -> float:
        return alkalinity_to_bicarbonate(self.alkalinity)

    @property
    def hardness(self) -> float:
        """Effective hardness as CaCO3"""
        return self.calcium / 1.4 + self.magnesium / 1.7

    def residual_alkalinity(self) -> float:
        return self.alkalinity - self.hardness

    def approx_mash_ph(self) -> float:
        """Coarse sanity estimate; the engine uses grain chemistry instead."""
        return 5.7 + self.residual_alkalinity() / 60

    def chloride_sulfate_ratio(self) -> Optional[float]:
        """
        Cl:SO4 by ppm. None when both are absent (RO water); infinite when
        only sulfate is absent.
        """
        if self.sulfate == 0:
            return None if self.chloride == 0 else math.inf
        return self.chloride / self.sulfate

    def with_changes(self, **changes) -> "WaterProfile":
        return replace(self, **changes)

    @staticmethod
    def from_dict(data):
        alkalinity = data.get("alkalinity")
        if alkalinity is None:
            alkalinity = bicarbonate_to_alkalinity(float(data.get("bicarbonate", 0.0)))
        return WaterProfile(
            name=data.get("name", "Source Water"),
            calcium=float(data.get("calcium", 0.0)),
            magnesium=float(data.get("magnesium", 0.0)),
            sodium=float(data.get("sodium", 0.0)),
            chloride=float(data.get("chloride", 0.0)),
            sulfate=float(data.get("sulfate", 0.0)),
            alkalinity=float(alkalinity),
            ph=float(data.get("ph", 7.0)),
        )

    def to_dict(self):
        return asdict(self)


PROFILES = {
    "ro": WaterProfile("RO Water", 0, 0, 0, 0, 0, 0, 5.5),
    "distilled": WaterProfile("Distilled Water", 0, 0, 0, 0, 0, 0, 7.0),
    # Palmerston North municipal supply, 2019 report
    "papaioea": WaterProfile("Papaioea (Palmerston North)", 38.6, 7.0, 15.6, 21.9, 12.5, 120.0, 8.0),
    # Classic brewing cities (Palmer's How to Brew)
    "burton": WaterProfile("Burton on Trent", 275, 40, 25, 35, 610, 270 / 1.22, 7.3),
    "dublin": WaterProfile("Dublin", 118, 4, 12, 19, 55, 319 / 1.22, 7.5),
    "munich": WaterProfile("Munich", 77, 17, 4, 8, 18, 295 / 1.22, 7.6),
    "pilsen": WaterProfile("Pilsen", 7, 2, 2, 5, 5, 15 / 1.22, 6.8),
}


def get_profile(name) -> WaterProfile:
    profile = PROFILES.get(name.lower())
    if profile is None:
        raise InvalidRecipe(f"Unknown water profile: {name}")
    return profile


def get_all_profiles():
    return {k: asdict(v) for k, v in PROFILES.items()}
