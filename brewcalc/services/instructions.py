"""
BrewCalc - Brew Day Instructions

Renders a Process as a plain-text brew sheet: one section per brew
stage, each a numbered list of steps, followed by any warnings.
"""

import logging
import textwrap
from dataclasses import dataclass, field, fields
from typing import List, Optional

from brewcalc.core.units import liters_to_gallons
from brewcalc.services.process import Process

logger = logging.getLogger(__name__)


@dataclass
class Steps:
    """Free-text steps per brew stage, appended after the computed ones."""
    header: List[str] = field(default_factory=list)
    acquire: List[str] = field(default_factory=list)
    water: List[str] = field(default_factory=list)
    mash: List[str] = field(default_factory=list)
    boil: List[str] = field(default_factory=list)
    chill: List[str] = field(default_factory=list)
    pitch: List[str] = field(default_factory=list)
    ferment: List[str] = field(default_factory=list)
    package: List[str] = field(default_factory=list)

    def merged(self, other: Optional["Steps"]) -> "Steps":
        if other is None:
            return self
        return Steps(**{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)})


def _vol(liters):
    return f"{liters:.2f} L ({liters_to_gallons(liters):.2f} gal)"


def build_steps(process: Process) -> Steps:
    recipe = process.recipe
    equipment = process.equipment
    steps = Steps()

    steps.header = [
        f"Style: {recipe.style}",
        f"Batch: {_vol(process.batch_size)} into the fermenter, {_vol(process.product_volume())} of beer",
        f"OG {recipe.original_gravity:.3f}  FG {process.final_gravity():.3f}  "
        f"ABV {process.abv():.1f}%  IBU {process.bitterness():.0f}  SRM {process.color():.1f}",
    ]

    for dose, percent in process.malt_percentages():
        steps.acquire.append(f"{dose} ({percent:.1f}%)")
    steps.acquire.extend(str(d) for d in process.sugar_doses())
    steps.acquire.extend(str(d) for d in process.hops_doses())
    grams = process.yeast_grams()
    if grams is not None:
        steps.acquire.append(f"{grams:.1f} g {recipe.yeast}")
    else:
        steps.acquire.append(f"{process.yeast_cells() / 1e9:.0f} billion cells of {recipe.yeast}")
    nutrient = process.yeast_nutrient_amount()
    if nutrient > 0:
        steps.acquire.append(f"{nutrient:.2f} g yeast nutrient")
    zinc = process.zinc_needed()
    if zinc > 0:
        steps.acquire.append(f"{zinc:.2f} mg zinc")
    if process.whirlfloc_amount() > 0:
        steps.acquire.append(f"{process.whirlfloc_amount():.2f} Whirlfloc tablets")

    steps.water.append(f"Collect {_vol(process.total_water())} of {equipment.water_profile.name} water")
    steps.water.extend(f"Dissolve {d}" for d in process.salt_doses())
    steps.water.extend(f"Add {d}" for d in process.acid_doses())

    strike = process.strike_temperature()
    steps.mash.append(f"Heat {_vol(process.strike_volume())} of strike water to {strike:.1f} C")
    rests = recipe.mash_rests
    for rest, infusion, ph in zip(rests, process.mash_infusions(), process.mash_ph()):
        if infusion > 0:
            steps.mash.append(f"Infuse {_vol(infusion)} at {equipment.infusion_temp_c:.1f} C")
        steps.mash.append(f"Rest at {rest.target_temp_c:.1f} C for {rest.duration_min:g} min (pH {ph:.2f})")
    sparge = process.sparge_volume()
    if sparge > 0:
        steps.mash.append(f"Sparge with {_vol(sparge)}")
    steps.mash.append(f"Collect {_vol(process.pre_boil_volume())} at {process.pre_boil_gravity():.3f}")

    steps.boil.append(f"Boil for {recipe.boil_length_min:g} min")
    for dose in sorted(process.hops_doses(), key=lambda d: -d.timing_min):
        steps.boil.append(f"At {dose.timing_min:g} min before end add {dose.weight_g:.1f} g {dose.hops}")
    if recipe.fining_desired:
        steps.boil.append("Add Whirlfloc 5 min before end")

    if equipment.ice_bath:
        steps.chill.append(f"Chill in an ice bath: {process.ice_weight():.1f} kg ice, "
                           f"{_vol(process.chilled_water_volume())} cold water")
    dilution = process.partial_boil_dilution()
    if dilution > 0:
        steps.chill.append(f"Top up with {_vol(dilution)} of boiled, cooled water")
    steps.chill.append(f"Transfer {_vol(process.batch_size)} at {recipe.original_gravity:.3f}")

    steps.pitch.append(f"Pitch at {recipe.ferment_temp_c:.1f} C")

    steps.ferment.append(f"Ferment at {recipe.ferment_temp_c:.1f} C for {process.fermentation_time()} days")
    steps.ferment.append(f"Diacetyl rest at {process.diacetyl_rest_temperature():.1f} C for 2 days")
    if process.is_lagered():
        vessel = process.lagering_vessel()
        if vessel is not None:
            steps.ferment.append(f"Rack {_vol(process.post_ferment_volume())} off the trub "
                                 f"into the {vessel:g} L lagering vessel")
        lagering_days = recipe.style.recommended_conditioning_days()
        steps.ferment.append(f"Lower the temperature by 1 C per day to 4-7 C and hold for {lagering_days} days")
    if process.post_ferment_dilution() > 0:
        steps.ferment.append(f"Dilute with {_vol(process.post_ferment_dilution())} of boiled water")

    priming = process.priming_sugar_amount()
    if priming is not None:
        steps.package.append(f"Prime with {priming:.1f} g {equipment.packaging.priming_sugar}")
        steps.package.append("Bottle")
    else:
        steps.package.append(f"Keg and set the regulator to {process.keg_pressure():.1f} psi")
    steps.package.append(f"Ready in about {process.time_until_done()} days from pitching")
    return steps


def print_process(process: Process, custom_steps: Optional[Steps] = None, width=78) -> str:
    """
    Renders the brew sheet for a process.

    Args:
        process: The process to render
        custom_steps: Extra steps appended to each section
        width: Line width for wrapping

    Returns:
        The sheet as a string
    """
    steps = build_steps(process).merged(custom_steps)
    wrapper = textwrap.TextWrapper(width=width, subsequent_indent="    ")

    lines = [process.recipe.name, "=" * min(width, len(process.recipe.name))]
    lines.extend(wrapper.fill(line) for line in steps.header)

    for f in fields(steps):
        if f.name == "header":
            continue
        section = getattr(steps, f.name)
        if not section:
            continue
        lines.append("")
        lines.append(f.name.upper())
        for number, text in enumerate(section, start=1):
            lines.append(wrapper.fill(f"{number:2d}. {text}"))

    warnings = process.get_warnings()
    if warnings:
        lines.append("")
        lines.append("WARNINGS")
        for warning in warnings:
            prefix = "ERROR" if warning.is_error() else "NOTE"
            lines.append(wrapper.fill(f"{prefix}: {warning}"))

    logger.debug(f"Rendered {process!r} with {len(warnings)} warnings")
    return "\n".join(lines) + "\n"
