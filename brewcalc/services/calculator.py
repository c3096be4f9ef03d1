import logging
from typing import Sequence

import numpy as np

from brewcalc.core.units import (
    c_to_f, ebc_to_lovibond, grams_to_ounces, kg_to_lb, liters_to_gallons, plato_to_sg,
)
from brewcalc.ingredients.doses import HopsDose, MaltDose, SugarDose
from brewcalc.ingredients.malts import MaltCategory
from brewcalc.ingredients.sugars import Sugar

logger = logging.getLogger(__name__)


# ============================================
# GRAVITY
# ============================================

def extract_points(malt_doses: Sequence[MaltDose], sugar_doses: Sequence[SugarDose], efficiency: float) -> float:
    """
    Gravity points contributed by one gallon (ppg x pounds).
    Malt extract is scaled by mash efficiency; sugars dissolve completely.
    """
    malt_ppg = np.array([d.malt.ppg for d in malt_doses], dtype=float)
    malt_lb = np.array([kg_to_lb(d.weight_kg) for d in malt_doses], dtype=float)
    sugar_ppg = np.array([d.sugar.ppg for d in sugar_doses], dtype=float)
    sugar_lb = np.array([kg_to_lb(d.weight_kg) for d in sugar_doses], dtype=float)
    return float(np.dot(malt_ppg, malt_lb) * efficiency + np.dot(sugar_ppg, sugar_lb))


def specific_gravity(malt_doses, sugar_doses, volume_l, efficiency):
    """SG = 1 + sum(ppg x lb x efficiency) / gallons / 1000"""
    points = extract_points(malt_doses, sugar_doses, efficiency)
    return 1 + points / liters_to_gallons(volume_l) / 1000


def dilute_gravity(sg, volume_l, diluted_volume_l):
    """Gravity after topping volume_l of wort up to diluted_volume_l."""
    return 1 + (sg - 1) * volume_l / diluted_volume_l


# ============================================
# BITTERNESS (TINSETH)
# ============================================

def tinseth_utilization(original_gravity, boil_time_min):
    bigness_factor = 1.65 * (0.000125 ** (original_gravity - 1))
    boil_time_factor = (1 - np.exp(-0.04 * np.asarray(boil_time_min, dtype=float))) / 4.15
    return bigness_factor * boil_time_factor


def tinseth_ibu(hops_doses: Sequence[HopsDose], original_gravity, volume_l):
    """
    Total IBU of all hop additions, each with its own boil time.

    Args:
        hops_doses: Hop additions (grams, minutes before end of boil)
        original_gravity: Wort gravity the hops are boiled in
        volume_l: Volume the bitterness ends up in

    Returns:
        IBU as float
    """
    if not hops_doses:
        return 0.0
    alpha = np.array([d.hops.alpha_acid for d in hops_doses], dtype=float)
    ounces = np.array([grams_to_ounces(d.weight_g) for d in hops_doses], dtype=float)
    minutes = np.array([d.timing_min for d in hops_doses], dtype=float)
    utilization = tinseth_utilization(original_gravity, minutes)
    ibu = utilization * alpha * ounces * 7490 / liters_to_gallons(volume_l)
    return float(ibu.sum())


# ============================================
# COLOR (MOREY)
# ============================================

def malt_color_units(malt_doses, sugar_doses, volume_l):
    pounds = [kg_to_lb(d.weight_kg) for d in malt_doses] + [kg_to_lb(d.weight_kg) for d in sugar_doses]
    lovibond = [d.malt.lovibond for d in malt_doses] + [_sugar_lovibond(d.sugar) for d in sugar_doses]
    return float(np.dot(pounds, lovibond)) / liters_to_gallons(volume_l)


def _sugar_lovibond(sugar: Sugar):
    return ebc_to_lovibond(sugar.ebc) if sugar.ebc > 0 else 0.0


def morey_srm(malt_doses, sugar_doses, volume_l):
    """SRM = 1.4922 x MCU^0.6859"""
    mcu = malt_color_units(malt_doses, sugar_doses, volume_l)
    if mcu <= 0:
        return 0.0
    return 1.4922 * mcu ** 0.6859


# ============================================
# FERMENTATION
# ============================================

def crystal_attenuation_reduction(malt_doses: Sequence[MaltDose], volume_l):
    """
    Fraction of attenuation lost to unfermentable crystal malt sugars.
    One pound of 10L crystal in 5 gallons costs ~1%, 60L ~3%.
    """
    gallons = liters_to_gallons(volume_l)
    reduction = 0.0
    for dose in malt_doses:
        if dose.malt.category != MaltCategory.CRYSTAL:
            continue
        scale = (kg_to_lb(dose.weight_kg) / gallons) / (1 / 5)
        reduction += (0.0004 * dose.malt.lovibond + 0.006) * scale
    return reduction


def attenuated_gravity(original_gravity, attenuation):
    return original_gravity - (original_gravity - 1) * attenuation


def calculate_abv(original_gravity, final_gravity):
    """ABV percent, the alternative formula that holds up for strong beers."""
    return 76.08 * (original_gravity - final_gravity) / (1.775 - original_gravity) * (final_gravity / 0.794)


# ============================================
# HYDROMETER TEMPERATURE CORRECTION
# ============================================

# Density of water relative to 60F, cubic in Fahrenheit (highest power first)
HYDROMETER_POLY = [-2.32820948e-9, 2.04052596e-6, -1.34722124e-4, 1.00130346]


def correct_hydrometer_reading(reading_sg, sample_temp_c, calibration_temp_c=20.0):
    """Gravity a hydrometer would read if the sample were at its calibration temperature."""
    sample = np.polyval(HYDROMETER_POLY, c_to_f(sample_temp_c))
    calibration = np.polyval(HYDROMETER_POLY, c_to_f(calibration_temp_c))
    return float(reading_sg * sample / calibration)


# ============================================
# REFRACTOMETER CORRECTION (POST-FERMENTATION)
# ============================================

def correct_refractometer_reading(final_brix, original_brix, wort_correction_factor=1.04) -> dict:
    """
    Corrects a refractometer reading for the alcohol present after fermentation.
    Uses the Sean Terrill cubic formula.

    Args:
        final_brix: Refractometer reading of fermented beer (uncorrected)
        original_brix: Refractometer reading of the original wort
        wort_correction_factor: Calibration factor (1.04 for most refractometers)

    Returns:
        dict with original_gravity, final_gravity, abv and apparent_attenuation
    """
    ob = original_brix / wort_correction_factor
    fb = final_brix / wort_correction_factor

    og = plato_to_sg(ob)
    fg = (
        1.001843
        - (0.002318474 * ob)
        - (0.000007775 * ob ** 2)
        - (0.000000034 * ob ** 3)
        + (0.00574 * fb)
        + (0.00003344 * fb ** 2)
        + (0.000000086 * fb ** 3)
    )
    fg = max(0.990, min(fg, og))

    attenuation = (og - fg) / (og - 1) if og > 1 else 0.0
    return {
        "original_gravity": og,
        "final_gravity": fg,
        "abv": calculate_abv(og, fg),
        "apparent_attenuation": attenuation,
    }


# ============================================
# CARBONATION
# ============================================

def keg_pressure_psi(temp_c, volumes_co2):
    """
    Regulator pressure for forced carbonation at a serving temperature.
    PSI = -16.6999 - 0.0101059 T + 0.00116512 T^2 + (0.173354 T + 4.24267) V, T in F
    """
    temp_f = c_to_f(temp_c)
    psi = (
        -16.6999
        - (0.0101059 * temp_f)
        + (0.00116512 * temp_f * temp_f)
        + ((0.173354 * temp_f + 4.24267) * volumes_co2)
    )
    return max(0.0, psi)
