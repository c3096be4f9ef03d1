from dataclasses import dataclass, field
from typing import Optional, Tuple

from brewcalc.core.decorators import InvalidRecipe
from brewcalc.ingredients.salts import Acid, Salt, get_acid, get_salt
from brewcalc.ingredients.sugars import Sugar, get_sugar
from brewcalc.services.water import WaterProfile, get_profile


@dataclass(frozen=True)
class Packaging:
    """Bottles primed with a sugar, or a keg carbonated under pressure."""
    kind: str  # "bottle" or "keg"
    size_l: float
    priming_sugar: Optional[Sugar] = None

    @property
    def is_bottle(self) -> bool:
        return self.kind == "bottle"

    @staticmethod
    def from_dict(data):
        kind = data.get("kind", "keg")
        if kind not in ("bottle", "keg"):
            raise InvalidRecipe(f"Unknown packaging: {kind}")
        sugar = data.get("priming_sugar")
        if kind == "bottle":
            sugar = get_sugar(sugar or "dextrose")
        return Packaging(kind, float(data.get("size_l", 19.0)), sugar if kind == "bottle" else None)


@dataclass(frozen=True)
class Equipment:
    """
    Brewery gear and supplies, independent of any recipe.
    Volumes are liters, rates per hour or per kg as named.
    """
    name: str
    water_profile: WaterProfile
    salts_available: Tuple[Salt, ...]
    acids_available: Tuple[Acid, ...]
    mash_tun_volume_l: float
    max_kettle_volume_l: float
    kettle_losses_l: float
    # Roughly pi * r^2 (cm) * 0.00428; a 26 cm pot loses ~2.3 L/h
    boil_evaporation_per_hour_l: float
    grain_absorption_per_kg_l: float
    hops_absorption_per_kg_l: float
    # 0.68 traditional lautering, 0.84 BIAB, 0.87 pour/strain
    mash_efficiency: float
    infusion_temp_c: float
    room_temp_c: float
    fermenters_l: Tuple[float, ...]
    packaging: Packaging
    lagerers_l: Tuple[float, ...] = field(default_factory=tuple)
    ice_bath: bool = False

    def ice_weight_kg(self) -> float:
        return self.max_kettle_volume_l / 2

    def chilled_water_volume_l(self) -> float:
        return self.max_kettle_volume_l

    @staticmethod
    def from_dict(data):
        profile = data.get("water_profile", "ro")
        if isinstance(profile, str):
            profile = get_profile(profile)
        else:
            profile = WaterProfile.from_dict(profile)
        return Equipment(
            name=data.get("name", "Brewery"),
            water_profile=profile,
            salts_available=tuple(get_salt(s) for s in data.get("salts_available", [])),
            acids_available=tuple(get_acid(a) for a in data.get("acids_available", [])),
            mash_tun_volume_l=float(data["mash_tun_volume_l"]),
            max_kettle_volume_l=float(data["max_kettle_volume_l"]),
            kettle_losses_l=float(data.get("kettle_losses_l", 0.0)),
            boil_evaporation_per_hour_l=float(data["boil_evaporation_per_hour_l"]),
            grain_absorption_per_kg_l=float(data.get("grain_absorption_per_kg_l", 1.0)),
            hops_absorption_per_kg_l=float(data.get("hops_absorption_per_kg_l", 5.0)),
            mash_efficiency=float(data["mash_efficiency"]),
            infusion_temp_c=float(data.get("infusion_temp_c", 100.0)),
            room_temp_c=float(data.get("room_temp_c", 20.0)),
            fermenters_l=tuple(sorted(float(v) for v in data.get("fermenters_l", []))),
            packaging=Packaging.from_dict(data.get("packaging", {})),
            lagerers_l=tuple(sorted(float(v) for v in data.get("lagerers_l", []))),
            ice_bath=bool(data.get("ice_bath", False)),
        )
