"""
BrewCalc - Mash Physics & Mash pH

Heat balance for strike water and step infusions (grain specific heat is
taken as 0.2 of water's, the classic homebrew constant, which is defined
in quarts, pounds and Fahrenheit), plus the distilled-water mash pH model.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from brewcalc.core.units import (
    c_to_f, f_to_c, kg_to_lb, liters_to_quarts, quarts_to_liters,
)
from brewcalc.ingredients.doses import MaltDose

logger = logging.getLogger(__name__)

GRAIN_HEAT_RATIO = 0.2

# pH a non-base malt would reach in distilled water before its acidity
SPECIALTY_BASELINE_PH = 5.7
# pH per (mEq/kg) per (L/kg) of specialty malt acidity
ACIDITY_PH_FACTOR = -0.14


@dataclass(frozen=True)
class MashRest:
    target_temp_c: float
    duration_min: float

    @staticmethod
    def from_dict(data):
        return MashRest(float(data["target_temp_c"]), float(data["duration_min"]))

    def to_dict(self):
        return {"target_temp_c": self.target_temp_c, "duration_min": self.duration_min}


def strike_water_temp(strike_volume_l, grain_weight_kg, grain_temp_c, target_temp_c):
    """
    Temperature of strike water that lands the mash on target_temp_c.
    Tw = (0.2 / R)(T2 - T1) + T2, with R in quarts per pound.
    """
    ratio = liters_to_quarts(strike_volume_l) / kg_to_lb(grain_weight_kg)
    t1 = c_to_f(grain_temp_c)
    t2 = c_to_f(target_temp_c)
    tw = (GRAIN_HEAT_RATIO / ratio) * (t2 - t1) + t2
    return f_to_c(tw)


def mash_infusion(grain_weight_kg, current_water_l, start_temp_c, target_temp_c, infusion_temp_c):
    """
    Liters of infusion water that raise the mash from start to target.
    Wa = (T2 - T1)(0.2 G + Wm) / (Tw - T2)

    Raises:
        ValueError: infusion water is not hotter than the target
    """
    if infusion_temp_c <= target_temp_c:
        raise ValueError(
            f"Infusion at {infusion_temp_c}C cannot raise the mash to {target_temp_c}C"
        )
    g = kg_to_lb(grain_weight_kg)
    wm = liters_to_quarts(current_water_l)
    t1, t2, tw = c_to_f(start_temp_c), c_to_f(target_temp_c), c_to_f(infusion_temp_c)
    wa = (t2 - t1) * (GRAIN_HEAT_RATIO * g + wm) / (tw - t2)
    return quarts_to_liters(wa)


def reverse_mash_infusion(grain_weight_kg, final_water_l, start_temp_c, target_temp_c, infusion_temp_c):
    """
    Liters of infusion that were added to reach final_water_l at target_temp_c
    when the mash was at start_temp_c beforehand.
    W1 = (W2 (T2 - Tw) + 0.2 G (T2 - T1)) / (T1 - Tw)

    Raises:
        ValueError: infusion water is not hotter than the starting rest
    """
    if infusion_temp_c == start_temp_c:
        raise ValueError(f"Infusion at {infusion_temp_c}C equals the starting rest temperature")
    g = kg_to_lb(grain_weight_kg)
    w2 = liters_to_quarts(final_water_l)
    t1, t2, tw = c_to_f(start_temp_c), c_to_f(target_temp_c), c_to_f(infusion_temp_c)
    w1 = (w2 * (t2 - tw) + GRAIN_HEAT_RATIO * g * (t2 - t1)) / (t1 - tw)
    return quarts_to_liters(w2 - w1)


def strike_volume_for_rests(grain_weight_kg, mash_water_l, rests: Sequence[MashRest], infusion_temp_c):
    """
    Walks the rests from last to first, removing each step's infusion from
    the final mash water. What is left is the strike water that hits the
    first rest on its own.
    """
    volume = mash_water_l
    later = rests[-1]
    for rest in reversed(rests[:-1]):
        infusion = reverse_mash_infusion(
            grain_weight_kg, volume, rest.target_temp_c, later.target_temp_c, infusion_temp_c
        )
        volume -= infusion
        later = rest
    return volume


def infusions_for_rests(grain_weight_kg, strike_volume_l, rests: Sequence[MashRest], infusion_temp_c) -> List[float]:
    """Forward pass: liters added at each rest (0.0 for the first)."""
    infusions = [0.0]
    volume = strike_volume_l
    for previous, rest in zip(rests, rests[1:]):
        added = mash_infusion(
            grain_weight_kg, volume, previous.target_temp_c, rest.target_temp_c, infusion_temp_c
        )
        infusions.append(added)
        volume += added
    return infusions


def distilled_mash_ph(malt_doses: Sequence[MaltDose], thickness_l_per_kg: float) -> float:
    """
    Grain-only mash pH at one mash thickness.

    Base malts contribute their distilled-water pH by weight; all other
    malts contribute a 5.7 baseline plus an acidity term that shrinks as
    the mash thins out.
    """
    total = sum(d.weight_kg for d in malt_doses)
    ph = 0.0
    acidity = 0.0
    for dose in malt_doses:
        share = dose.weight_kg / total
        if dose.malt.is_base and dose.malt.distilled_ph is not None:
            ph += share * dose.malt.distilled_ph
        else:
            ph += share * SPECIALTY_BASELINE_PH
            acidity += share * dose.malt.acidity_meq_per_kg
    return ph + ACIDITY_PH_FACTOR * acidity / thickness_l_per_kg
