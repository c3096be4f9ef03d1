"""
BrewCalc - Process Calculation Engine

A Process ties one Equipment and one Recipe to a batch size (the volume
of wort that goes into the fermenter). Every quantity is derived on
demand from those three immutable inputs; nothing is cached, so calling
any accessor in any order gives the same answer.

Volume chain:
    strike + infusions - absorption  = pre-sparge
    pre-sparge + sparge              = pre-boil
    pre-boil - evaporation           = post-boil (pre-loss)
    post-boil (pre-loss) - losses    = post-boil
    post-boil + partial-boil water   = batch
    batch - ferment losses           = post-ferment
    post-ferment + dilution water    = product
"""

import logging
from typing import List, Optional, Tuple

from brewcalc.core.config import get_config
from brewcalc.core.decorators import recipe_guard
from brewcalc.core.units import kg_to_lb, liters_to_gallons, liters_to_milliliters, sg_to_plato
from brewcalc.ingredients import ValueRange
from brewcalc.ingredients.doses import AcidDose, HopsDose, MaltDose, SaltDose, SugarDose
from brewcalc.ingredients.malts import MaltAcidCategory
from brewcalc.ingredients.styles import Conditioning
from brewcalc.ingredients.yeasts import CELLS_PER_GRAM_DRY
from brewcalc.services import alerts
from brewcalc.services.calculator import (
    attenuated_gravity, calculate_abv, crystal_attenuation_reduction, dilute_gravity,
    keg_pressure_psi, morey_srm, specific_gravity, tinseth_ibu,
)
from brewcalc.services.equipment import Equipment
from brewcalc.services.mash_chemistry import (
    distilled_mash_ph, infusions_for_rests, strike_volume_for_rests, strike_water_temp,
)
from brewcalc.services.recipe import Recipe
from brewcalc.services.water_chemistry import WaterAdjustment, adjust_water, water_ph_shift

logger = logging.getLogger(__name__)

# Points a 12 °P congress wort carries; malt FAN figures are quoted at it
CONGRESS_WORT_POINTS = 48.0
# Gravity at which yeast FAN requirements are quoted
FAN_REFERENCE_POINTS = 40.0


class Process:
    def __init__(self, equipment: Equipment, recipe: Recipe, batch_size: float):
        self.equipment = equipment
        self.recipe = recipe
        self.batch_size = batch_size

    def __repr__(self):
        return f"Process({self.recipe.name!r}, {self.batch_size:g} L on {self.equipment.name!r})"

    # ============================================
    # INPUT CHECKS
    # ============================================

    def recipe_problems(self) -> List[str]:
        """Reasons the inputs cannot enter the derivation chain (empty when fine)."""
        recipe = self.recipe
        problems = []

        if self.batch_size <= 0:
            problems.append("batch size must be positive")
        if self.equipment.mash_efficiency <= 0:
            problems.append("mash efficiency must be positive")
        if recipe.original_gravity <= 1.0:
            problems.append("original gravity must be above 1.000")

        proportions = [m.proportion for m in recipe.malts] + [s.proportion for s in recipe.sugars]
        proportions += [h.proportion for h in recipe.hops]
        if any(p < 0 for p in proportions):
            problems.append("ingredient proportions must not be negative")
        if not recipe.malts or sum(m.proportion for m in recipe.malts) <= 0:
            problems.append("no malts specified")
        else:
            extract = sum(m.malt.ppg * m.proportion for m in recipe.malts)
            extract += sum(s.sugar.ppg * s.proportion for s in recipe.sugars)
            if extract <= 0:
                problems.append("malts and sugars provide no extract")

        if not recipe.mash_rests:
            problems.append("no mash rests specified")
        elif len(recipe.mash_rests) > 1:
            infusion = self.equipment.infusion_temp_c
            if any(infusion <= rest.target_temp_c for rest in recipe.mash_rests):
                problems.append("infusion temperature must exceed every mash rest temperature")
        if recipe.mash_thickness_l_per_kg <= 0:
            problems.append("mash thickness must be positive")

        if recipe.ibu > 0:
            if not recipe.hops or sum(h.proportion for h in recipe.hops) <= 0:
                problems.append("no hops specified but IBU target is non-zero")
            elif not any(h.timing_min > 0 and h.proportion > 0 for h in recipe.hops):
                problems.append("hop additions have no boil time so give no bitterness")
        if any(not 0 <= h.timing_min <= recipe.boil_length_min for h in recipe.hops):
            problems.append("hop addition times must fall within the boil")

        window = recipe.chloride_sulfate_ratio_range
        if window is not None and not (0 <= window.start <= window.end and window.end > 0):
            problems.append("chloride:sulfate window must be a positive, ordered range")
        if recipe.target_abv is not None and recipe.target_abv <= 0:
            problems.append("target ABV must be positive")

        return problems

    # ============================================
    # FERMENTER
    # ============================================

    def fermentation_head_space(self) -> float:
        return self.batch_size * get_config("fermenter_headspace_fraction")

    def fermenter_volume(self) -> Optional[float]:
        """Smallest fermenter that holds the batch plus headspace, or None."""
        needed = self.batch_size + self.fermentation_head_space()
        for size in sorted(self.equipment.fermenters_l):
            if size >= needed:
                return size
        return None

    def ferment_losses(self) -> float:
        return self.batch_size * self.recipe.ferment_loss_fraction()

    def post_ferment_volume(self) -> float:
        return self.batch_size - self.ferment_losses()

    def is_lagered(self) -> bool:
        return self.recipe.style.conditioning == Conditioning.LAGERED

    def lagering_vessel(self) -> Optional[float]:
        """Smallest lagering vessel that takes the beer racked off the trub, or None."""
        needed = self.post_ferment_volume()
        for size in self.equipment.lagerers_l:
            if size >= needed:
                return size
        return None

    # ============================================
    # GRAIN BILL
    # ============================================

    @recipe_guard
    def grain_bill_multiplier(self) -> float:
        """
        kg per proportion unit that lands the recipe exactly on its
        original gravity at the batch size.
        """
        unit_malts = [MaltDose(m.malt, m.proportion) for m in self.recipe.malts]
        unit_sugars = [SugarDose(s.sugar, s.proportion) for s in self.recipe.sugars]
        unit_sg = specific_gravity(unit_malts, unit_sugars, self.batch_size, self.equipment.mash_efficiency)
        multiplier = (self.recipe.original_gravity - 1) / (unit_sg - 1)
        logger.debug(f"{self!r}: grain bill multiplier {multiplier:.5f}")
        return multiplier

    def malt_doses(self) -> List[MaltDose]:
        multiplier = self.grain_bill_multiplier()
        return [MaltDose(m.malt, m.proportion * multiplier) for m in self.recipe.malts]

    def sugar_doses(self) -> List[SugarDose]:
        multiplier = self.grain_bill_multiplier()
        return [SugarDose(s.sugar, s.proportion * multiplier) for s in self.recipe.sugars]

    def grain_weight(self) -> float:
        return sum(d.weight_kg for d in self.malt_doses())

    def fermentables_weight(self) -> float:
        return self.grain_weight() + sum(d.weight_kg for d in self.sugar_doses())

    def malt_percentages(self) -> List[Tuple[MaltDose, float]]:
        total = self.grain_weight()
        return [(d, 100 * d.weight_kg / total) for d in self.malt_doses()]

    def original_gravity(self) -> float:
        """Gravity recomputed from the solved doses."""
        return specific_gravity(self.malt_doses(), self.sugar_doses(), self.batch_size,
                                self.equipment.mash_efficiency)

    # ============================================
    # HOPS & BOIL
    # ============================================

    @recipe_guard
    def hops_doses(self) -> List[HopsDose]:
        """
        Hop weights scaled so the Tinseth bitterness hits the IBU target.
        The recipe proportions are first read as grams to get a nominal IBU.
        """
        if self.recipe.ibu <= 0:
            return []
        og = self.recipe.original_gravity
        nominal = [HopsDose(h.hops, h.proportion, h.timing_min) for h in self.recipe.hops]
        factor = self.recipe.ibu / tinseth_ibu(nominal, og, self.batch_size)
        return [HopsDose(d.hops, d.weight_g * factor, d.timing_min) for d in nominal]

    def hops_absorption(self) -> float:
        hops_kg = sum(d.weight_g for d in self.hops_doses()) / 1000
        return hops_kg * self.equipment.hops_absorption_per_kg_l

    def kettle_losses(self) -> float:
        return self.equipment.kettle_losses_l + self.hops_absorption()

    def boil_evaporation(self) -> float:
        return self.equipment.boil_evaporation_per_hour_l / 60 * self.recipe.boil_length_min

    def full_boil_volume(self) -> float:
        """Pre-boil volume if the whole batch were boiled."""
        return self.batch_size + self.kettle_losses() + self.boil_evaporation()

    def partial_boil_dilution(self) -> float:
        """Boiled water added after the boil when the full batch does not fit the kettle."""
        if self.recipe.max_partial_boil_dilution <= 0:
            return 0.0
        return max(0.0, self.full_boil_volume() - self.equipment.max_kettle_volume_l)

    def post_boil_volume(self) -> float:
        """After kettle losses, before any partial-boil dilution."""
        return self.batch_size - self.partial_boil_dilution()

    def post_boil_pre_loss_volume(self) -> float:
        return self.post_boil_volume() + self.kettle_losses()

    def pre_boil_volume(self) -> float:
        return self.post_boil_pre_loss_volume() + self.boil_evaporation()

    def post_boil_gravity(self) -> float:
        return dilute_gravity(self.recipe.original_gravity, self.batch_size, self.post_boil_volume())

    def pre_boil_gravity(self) -> float:
        return dilute_gravity(self.post_boil_gravity(), self.post_boil_pre_loss_volume(), self.pre_boil_volume())

    # ============================================
    # MASH
    # ============================================

    def water_absorption(self) -> float:
        return self.grain_weight() * self.equipment.grain_absorption_per_kg_l

    def mash_volume(self) -> float:
        """All water in the mash after the last infusion."""
        return self.grain_weight() * self.recipe.mash_thickness_l_per_kg

    def pre_sparge_volume(self) -> float:
        return self.mash_volume() - self.water_absorption()

    @recipe_guard
    def strike_volume(self) -> float:
        return strike_volume_for_rests(
            self.grain_weight(), self.mash_volume(), self.recipe.mash_rests, self.equipment.infusion_temp_c
        )

    @recipe_guard
    def mash_infusions(self) -> List[float]:
        """Liters added at each rest, the first being 0.0."""
        return infusions_for_rests(
            self.grain_weight(), self.strike_volume(), self.recipe.mash_rests, self.equipment.infusion_temp_c
        )

    def mash_waters(self) -> List[float]:
        """Water in the mash at each rest."""
        waters = []
        volume = self.strike_volume()
        for infusion in self.mash_infusions():
            volume += infusion
            waters.append(volume)
        return waters

    def mash_thicknesses(self) -> List[float]:
        grain = self.grain_weight()
        return [water / grain for water in self.mash_waters()]

    def strike_temperature(self) -> float:
        return strike_water_temp(
            self.strike_volume(), self.grain_weight(),
            self.equipment.room_temp_c, self.recipe.mash_rests[0].target_temp_c,
        )

    def sparge_volume(self) -> float:
        """Negative when the mash alone already exceeds the pre-boil volume."""
        return self.pre_boil_volume() - self.pre_sparge_volume()

    def mash_tun_fill(self) -> float:
        """Volume the full mash occupies including grain displacement."""
        return self.mash_volume() + self.grain_weight() * get_config("grain_displacement_l_per_kg")

    # ============================================
    # WATER
    # ============================================

    def distilled_mash_ph(self) -> List[float]:
        doses = self.malt_doses()
        return [distilled_mash_ph(doses, thickness) for thickness in self.mash_thicknesses()]

    def water_adjustment(self) -> WaterAdjustment:
        """Salts and acids chosen for the final (saccharification) rest."""
        return adjust_water(
            self.equipment.water_profile,
            self.distilled_mash_ph()[-1],
            self.recipe.target_mash_ph,
            self.recipe.chloride_sulfate_ratio_range,
            self.equipment.salts_available,
            self.equipment.acids_available,
        )

    def water_salts(self):
        return self.water_adjustment().salts

    def water_acids(self):
        return self.water_adjustment().acids

    def adjusted_water_profile(self):
        return self.water_adjustment().apply(self.equipment.water_profile)

    def mash_ph(self) -> List[float]:
        """Estimated pH at each mash rest with the treated water."""
        adjustment = self.water_adjustment()
        shift = water_ph_shift(adjustment.apply(self.equipment.water_profile))
        shift -= sum(a.ppm * a.acid.ph_shift_per_ppm for a in adjustment.acids)
        return [ph + shift for ph in self.distilled_mash_ph()]

    def total_water(self) -> float:
        return (
            self.strike_volume() + sum(self.mash_infusions()) + max(0.0, self.sparge_volume())
            + self.partial_boil_dilution() + self.post_ferment_dilution()
        )

    def salt_doses(self) -> List[SaltDose]:
        liters = self.total_water()
        return [SaltDose(c.salt, c.ppm * liters) for c in self.water_salts()]

    def acid_doses(self) -> List[AcidDose]:
        liters = self.total_water()
        return [AcidDose(c.acid, c.ppm * liters) for c in self.water_acids()]

    # ============================================
    # BEER NUMBERS
    # ============================================

    def bitterness(self) -> float:
        return tinseth_ibu(self.hops_doses(), self.recipe.original_gravity, self.batch_size)

    def color(self) -> float:
        """SRM"""
        return morey_srm(self.malt_doses(), self.sugar_doses(), self.batch_size)

    def post_ferment_gravity(self) -> float:
        reduction = crystal_attenuation_reduction(self.malt_doses(), self.batch_size)
        attenuation = self.recipe.yeast.attenuation * (1 - reduction)
        return attenuated_gravity(self.recipe.original_gravity, attenuation)

    def natural_abv(self) -> float:
        return calculate_abv(self.recipe.original_gravity, self.post_ferment_gravity())

    def post_ferment_dilution_factor(self) -> float:
        """Water per volume of beer needed to bring ABV down to target (capped)."""
        target = self.recipe.target_abv
        natural = self.natural_abv()
        if target is None or natural <= target:
            return 0.0
        return min(natural / target - 1, self.recipe.max_post_ferment_dilution)

    def post_ferment_dilution(self) -> float:
        return self.post_ferment_volume() * self.post_ferment_dilution_factor()

    def product_volume(self) -> float:
        return self.post_ferment_volume() + self.post_ferment_dilution()

    def final_gravity(self) -> float:
        return dilute_gravity(self.post_ferment_gravity(), self.post_ferment_volume(), self.product_volume())

    def abv(self) -> float:
        return self.natural_abv() / (1 + self.post_ferment_dilution_factor())

    # ============================================
    # YEAST & NUTRIENTS
    # ============================================

    def wort_fan(self) -> float:
        """mg/L of free amino nitrogen, each malt weighted by the extract it gives."""
        gallons = liters_to_gallons(self.batch_size)
        efficiency = self.equipment.mash_efficiency
        fan = 0.0
        for dose in self.malt_doses():
            points = dose.malt.ppg * kg_to_lb(dose.weight_kg) * efficiency / gallons
            fan += dose.malt.fan_ppm * points / CONGRESS_WORT_POINTS
        return fan

    def fan_required(self) -> float:
        points = (self.recipe.original_gravity - 1) * 1000
        return self.recipe.yeast.fan_requirement * points / FAN_REFERENCE_POINTS

    def yeast_nutrient_amount(self) -> float:
        """Grams of yeast nutrient to cover any FAN shortfall."""
        shortfall = self.fan_required() - self.wort_fan()
        if shortfall <= 0:
            return 0.0
        return shortfall / get_config("nutrient_fan_ppm_per_g_per_l") * self.batch_size

    def zinc_needed(self) -> float:
        """mg of zinc when no nutrient (which carries zinc) is added."""
        if self.yeast_nutrient_amount() > 0:
            return 0.0
        return get_config("zinc_target_ppm") * self.batch_size

    def yeast_cells(self) -> int:
        rate = self.recipe.style.yeast_pitching_rate()
        plato = sg_to_plato(self.recipe.original_gravity)
        return int(rate * liters_to_milliliters(self.batch_size) * plato)

    def yeast_grams(self) -> Optional[float]:
        """Grams to pitch, or None for liquid yeast without a published rate."""
        yeast = self.recipe.yeast
        if yeast.pitching_rate is not None:
            grams, liters = yeast.pitching_rate
            return grams * self.batch_size / liters
        if yeast.is_dry:
            return self.yeast_cells() / CELLS_PER_GRAM_DRY
        return None

    def whirlfloc_amount(self) -> float:
        """Tablets; one per 19 L."""
        return self.batch_size / 19 if self.recipe.fining_desired else 0.0

    # ============================================
    # SCHEDULE & PACKAGING
    # ============================================

    def fermentation_time(self) -> int:
        return self.recipe.fermentation_time_days()

    def diacetyl_rest_temperature(self) -> float:
        return self.recipe.diacetyl_rest_temp_c()

    def time_until_done(self) -> int:
        """Days from pitching: fermentation, a 2 day diacetyl rest and conditioning."""
        conditioning = self.recipe.style.recommended_conditioning_days()
        if self.equipment.packaging.is_bottle:
            conditioning = max(conditioning, 14)
        return self.fermentation_time() + 2 + conditioning

    def priming_sugar_amount(self) -> Optional[float]:
        packaging = self.equipment.packaging
        if not packaging.is_bottle:
            return None
        return packaging.priming_sugar.priming_amount(
            self.recipe.style.carbonation_volume, self.product_volume(), self.recipe.ferment_temp_c
        )

    def keg_pressure(self, serving_temp_c=4.0) -> Optional[float]:
        if self.equipment.packaging.is_bottle:
            return None
        return keg_pressure_psi(serving_temp_c, self.recipe.style.carbonation_volume)

    def ice_weight(self) -> float:
        return self.equipment.ice_weight_kg() if self.equipment.ice_bath else 0.0

    def chilled_water_volume(self) -> float:
        return self.equipment.chilled_water_volume_l() if self.equipment.ice_bath else 0.0

    def volume_history(self) -> List[Tuple[str, float]]:
        return [
            ("Strike", self.strike_volume()),
            ("Infusions", sum(self.mash_infusions())),
            ("Absorption", -self.water_absorption()),
            ("Pre-sparge", self.pre_sparge_volume()),
            ("Sparge", self.sparge_volume()),
            ("Pre-boil", self.pre_boil_volume()),
            ("Evaporation", -self.boil_evaporation()),
            ("Post-boil (pre-loss)", self.post_boil_pre_loss_volume()),
            ("Kettle losses", -self.kettle_losses()),
            ("Post-boil", self.post_boil_volume()),
            ("Partial-boil dilution", self.partial_boil_dilution()),
            ("Batch", self.batch_size),
            ("Ferment losses", -self.ferment_losses()),
            ("Post-ferment", self.post_ferment_volume()),
            ("Post-ferment dilution", self.post_ferment_dilution()),
            ("Product", self.product_volume()),
        ]

    # ============================================
    # VALIDATION
    # ============================================

    @recipe_guard
    def get_warnings(self) -> List[alerts.ProcessWarning]:
        """
        Full validation pass. Every check runs; nothing short-circuits.
        Errors (is_error()) mean the process cannot be carried out as given.
        """
        recipe = self.recipe
        equipment = self.equipment
        warnings = []

        warnings.extend(self._equipment_warnings())
        warnings.extend(self._temperature_warnings())

        natural_abv = self.natural_abv()
        if natural_abv / 100 > recipe.yeast.alcohol_tolerance:
            warnings.append(alerts.TooMuchAlcohol(natural_abv, recipe.yeast.alcohol_tolerance * 100))
        if recipe.target_abv is not None and self.abv() > recipe.target_abv + 1e-9:
            warnings.append(alerts.TargetAbvUnreachable(self.abv(), recipe.target_abv))

        percentages = self.malt_percentages()
        base_fraction = sum(p for d, p in percentages if d.malt.is_base) / 100
        if base_fraction < get_config("min_base_malt_fraction"):
            warnings.append(alerts.LowDiastaticPower(base_fraction))
        for dose, percent in percentages:
            if percent > dose.malt.recommended_max_percent:
                warnings.append(alerts.ExcessMalt(dose.malt.name, percent, dose.malt.recommended_max_percent))

        warnings.extend(self._water_warnings())

        warnings.extend(alerts.style_warnings(
            recipe.style,
            og=recipe.original_gravity,
            fg=self.final_gravity(),
            abv=self.abv(),
            ibu=self.bitterness(),
            srm=self.color(),
        ))

        for warning in warnings:
            if warning.is_error():
                logger.warning(f"{recipe.name} on {equipment.name}: {warning}")
        return warnings

    def _equipment_warnings(self):
        equipment = self.equipment
        warnings = []

        if self.fermenter_volume() is None:
            largest = max(equipment.fermenters_l) if equipment.fermenters_l else None
            warnings.append(alerts.FermentersTooSmall(self.batch_size + self.fermentation_head_space(), largest))

        if self.pre_boil_volume() > equipment.max_kettle_volume_l + 1e-9:
            warnings.append(alerts.BoilKettleTooSmall(self.pre_boil_volume(), equipment.max_kettle_volume_l))

        if self.post_boil_volume() <= 0:
            warnings.append(alerts.KettleTooSmallForPartialBoil(
                equipment.max_kettle_volume_l, self.kettle_losses() + self.boil_evaporation()))

        dilution = self.partial_boil_dilution()
        maximum = self.recipe.max_partial_boil_dilution
        if dilution > 0 and dilution / self.batch_size > maximum:
            warnings.append(alerts.ExcessDilutionRequired(dilution / self.batch_size, maximum))

        sparge = self.sparge_volume()
        if sparge < 0:
            warnings.append(alerts.TooMuchMash(-sparge, self.recipe.mash_thickness_l_per_kg))

        if self.mash_tun_fill() > equipment.mash_tun_volume_l:
            warnings.append(alerts.MashTunTooSmall(self.mash_tun_fill(), equipment.mash_tun_volume_l))

        if self.is_lagered() and equipment.lagerers_l and self.lagering_vessel() is None:
            warnings.append(alerts.LageringVesselsTooSmall(self.post_ferment_volume(), max(equipment.lagerers_l)))
        return warnings

    def _temperature_warnings(self):
        equipment = self.equipment
        recipe = self.recipe
        boiling = get_config("boiling_point_c")
        warnings = []

        if len(recipe.mash_rests) > 1:
            if equipment.infusion_temp_c >= boiling:
                warnings.append(alerts.ImpossibleInfusionTemperature(equipment.infusion_temp_c))
            elif equipment.infusion_temp_c < get_config("min_infusion_temp_c"):
                warnings.append(alerts.UnusualInfusionTemperature(equipment.infusion_temp_c))

        strike = self.strike_temperature()
        if strike >= boiling:
            warnings.append(alerts.ImpossibleStrikeTemperature(strike))
        elif strike < get_config("min_strike_temp_c"):
            warnings.append(alerts.UnusualStrikeTemperature(strike))

        room = equipment.room_temp_c
        if not get_config("room_temp_min_c") <= room <= get_config("room_temp_max_c"):
            warnings.append(alerts.UnusualRoomTemperature(room))

        ferment = recipe.ferment_temp_c
        if not get_config("ferment_temp_min_c") <= ferment <= get_config("ferment_temp_max_c"):
            warnings.append(alerts.UnusualFermentationTemperature(ferment))
        yeast_range = recipe.yeast.temp_range
        if ferment > yeast_range.end:
            warnings.append(alerts.TooHot(ferment, yeast_range.end))
        elif ferment < yeast_range.start:
            warnings.append(alerts.TooCold(ferment, yeast_range.start))
        return warnings

    def _water_warnings(self):
        adjustment = self.water_adjustment()
        window = self.recipe.chloride_sulfate_ratio_range
        warnings = []

        if adjustment.unresolved_ratio == "low":
            warnings.append(alerts.ChlorideSulfateRatioLow(adjustment.ratio_before, window))
        elif adjustment.unresolved_ratio == "high":
            warnings.append(alerts.ChlorideSulfateRatioHigh(adjustment.ratio_before, window))

        band_min, band_max = get_config("mash_ph_min"), get_config("mash_ph_max")
        band = ValueRange(band_min, band_max)
        for step, ph in enumerate(self.mash_ph(), start=1):
            if not band.contains(ph):
                warnings.append(alerts.MashPhOutOfRange(step, ph, band))

        acidulated = any(d.malt.acid_category == MaltAcidCategory.ACIDULATED and d.weight_kg > 0
                         for d in self.malt_doses())
        if acidulated and adjustment.uses("baking_soda"):
            warnings.append(alerts.AcidityNeededCancelling())
        return warnings
