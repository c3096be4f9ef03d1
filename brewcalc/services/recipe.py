from dataclasses import dataclass, field
from typing import Optional, Tuple

from brewcalc.ingredients import ValueRange
from brewcalc.ingredients.doses import HopsProportion, MaltProportion, SugarProportion
from brewcalc.ingredients.styles import Style, get_style
from brewcalc.ingredients.yeasts import Flocculation, Yeast, get_yeast
from brewcalc.services.mash_chemistry import MashRest

# Poorly flocculating yeast leaves less behind when the beer is not fined
FLOCCULATION_LOSS_FACTORS = {
    Flocculation.LOW: 0.94,
    Flocculation.LOW_MEDIUM: 0.97,
}


@dataclass(frozen=True)
class Recipe:
    """
    A desired beer. Ingredient proportions are relative weights; absolute
    amounts are solved for by Process from the gravity and IBU targets.
    """
    name: str
    style: Style
    malts: Tuple[MaltProportion, ...]
    mash_rests: Tuple[MashRest, ...]
    mash_thickness_l_per_kg: float
    original_gravity: float
    ibu: float
    hops: Tuple[HopsProportion, ...]
    boil_length_min: float
    yeast: Yeast
    ferment_temp_c: float
    sugars: Tuple[SugarProportion, ...] = field(default_factory=tuple)
    chloride_sulfate_ratio_range: Optional[ValueRange] = None
    target_mash_ph: float = 5.4
    fining_desired: bool = True
    target_abv: Optional[float] = None
    # volume of water per volume of beer
    max_post_ferment_dilution: float = 0.0
    # fraction of batch size; 0 forbids topping up after a partial boil
    max_partial_boil_dilution: float = 0.0

    def ferment_loss_fraction(self) -> float:
        """Trub and yeast left behind, as a fraction of the fermenter volume."""
        fraction = (self.original_gravity - 1) * 2.2
        if not self.fining_desired:
            fraction *= FLOCCULATION_LOSS_FACTORS.get(self.yeast.flocculation, 1.0)
        return fraction

    def fermentation_time_days(self) -> int:
        """
        Rough estimate: warmer and higher in the yeast's range runs faster,
        poor flocculators need longer to clear.
        """
        base = (35.0 - self.ferment_temp_c) / 2.0
        temp_range = self.yeast.temp_range
        span = temp_range.end - temp_range.start
        position = (self.ferment_temp_c - temp_range.start) / span if span > 0 else 0.5
        temp_multiplier = 1.2 - 0.4 * position
        floc_multiplier = {
            Flocculation.LOW: 1.2,
            Flocculation.LOW_MEDIUM: 1.1,
            Flocculation.MEDIUM: 1.0,
            Flocculation.MEDIUM_HIGH: 0.9,
            Flocculation.HIGH: 0.8,
            Flocculation.VERY_HIGH: 0.75,
        }[self.yeast.flocculation]
        return max(0, int(base * temp_multiplier * floc_multiplier))

    def diacetyl_rest_temp_c(self) -> float:
        return self.ferment_temp_c * (5 / 6) + (20 / 3)

    @staticmethod
    def from_dict(data):
        style = get_style(data["style"])
        ratio = data.get("chloride_sulfate_ratio_range")
        target_abv = data.get("target_abv")
        return Recipe(
            name=data["name"],
            style=style,
            malts=tuple(MaltProportion.from_dict(m) for m in data.get("malts", [])),
            mash_rests=tuple(MashRest.from_dict(r) for r in data.get("mash_rests", [])),
            mash_thickness_l_per_kg=float(data.get("mash_thickness_l_per_kg", 3.0)),
            original_gravity=float(data["original_gravity"]),
            ibu=float(data.get("ibu", 0.0)),
            hops=tuple(HopsProportion.from_dict(h) for h in data.get("hops", [])),
            boil_length_min=float(data.get("boil_length_min", style.recommended_boil_length())),
            yeast=get_yeast(data["yeast"]),
            ferment_temp_c=float(data["ferment_temp_c"]),
            sugars=tuple(SugarProportion.from_dict(s) for s in data.get("sugars", [])),
            chloride_sulfate_ratio_range=ValueRange(*ratio) if ratio else None,
            target_mash_ph=float(data.get("target_mash_ph", 5.4)),
            fining_desired=bool(data.get("fining_desired", True)),
            target_abv=float(target_abv) if target_abv is not None else None,
            max_post_ferment_dilution=float(data.get("max_post_ferment_dilution", 0.0)),
            max_partial_boil_dilution=float(data.get("max_partial_boil_dilution", 0.0)),
        )
