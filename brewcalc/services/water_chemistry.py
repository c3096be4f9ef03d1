"""
BrewCalc - Water Chemistry

Decomposes salts into ions to adjust a water profile, computes ionic
balance, and works out which salts/acids move a source water toward a
chloride:sulfate window and a target mash pH.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from brewcalc.core.units import alkalinity_to_bicarbonate, bicarbonate_to_alkalinity
from brewcalc.ingredients import ValueRange
from brewcalc.ingredients.doses import AcidConcentration, SaltConcentration
from brewcalc.ingredients.salts import Acid, Ion, Salt, ppm_to_meq
from brewcalc.services.water import WaterProfile

logger = logging.getLogger(__name__)

# Mash pH shift per ppm of residual alkalinity (as CaCO3)
WATER_PH_SHIFT_PER_RA = 0.00168

# Hardness (as CaCO3) per ppm Mg when calcium is held at seven times magnesium
HARDNESS_PER_PPM_MAGNESIUM = 7 / 1.4 + 1 / 1.7

# Cl:SO4 steered toward while hardening when the recipe gives no window
DEFAULT_CHLORIDE_SULFATE_TARGET = 1.0

# Profile field fed by each ion
ION_FIELDS = {
    Ion.CALCIUM: "calcium",
    Ion.MAGNESIUM: "magnesium",
    Ion.SODIUM: "sodium",
    Ion.CHLORIDE: "chloride",
    Ion.SULFATE: "sulfate",
}


def add_salt(profile: WaterProfile, salt: Salt, ppm: float) -> WaterProfile:
    """
    Returns the profile after dissolving `ppm` of salt.
    Bicarbonate is folded into alkalinity as CaCO3. Hydroxide and water
    of hydration do not change any tracked field.
    """
    changes = {}
    for ion in set(salt.ions):
        added = ppm * salt.ion_fraction(ion)
        if ion in ION_FIELDS:
            name = ION_FIELDS[ion]
            changes[name] = changes.get(name, getattr(profile, name)) + added
        elif ion == Ion.BICARBONATE:
            changes["alkalinity"] = profile.alkalinity + bicarbonate_to_alkalinity(added)
        elif ion == Ion.HYDROXIDE:
            logger.debug(f"{salt.name}: hydroxide contribution not modelled")
    return profile.with_changes(**changes)


def add_acid(profile: WaterProfile, acid: Acid, ppm: float) -> WaterProfile:
    """
    Acids only act on mash pH through their empirical shift per ppm;
    the ion profile is left as is.
    """
    logger.debug(f"{acid.name} at {ppm:.1f} ppm leaves the ion profile unchanged")
    return profile


def ion_balance(profile: WaterProfile) -> float:
    """Cations minus anions in mEq/L. Near zero for a consistent water report."""
    cations = (
        ppm_to_meq(profile.calcium, Ion.CALCIUM)
        + ppm_to_meq(profile.magnesium, Ion.MAGNESIUM)
        + ppm_to_meq(profile.sodium, Ion.SODIUM)
    )
    anions = (
        ppm_to_meq(profile.chloride, Ion.CHLORIDE)
        + ppm_to_meq(profile.sulfate, Ion.SULFATE)
        + ppm_to_meq(profile.bicarbonate, Ion.BICARBONATE)
    )
    return cations - anions


def water_ph_shift(profile: WaterProfile) -> float:
    return WATER_PH_SHIFT_PER_RA * profile.residual_alkalinity()


@dataclass
class WaterAdjustment:
    """Result of target-seeking water adjustment"""
    salts: List[SaltConcentration] = field(default_factory=list)
    acids: List[AcidConcentration] = field(default_factory=list)
    # "low" / "high" when the ratio window could not be reached
    unresolved_ratio: Optional[str] = None
    ratio_before: Optional[float] = None
    predicted_ph: Optional[float] = None

    def apply(self, profile: WaterProfile) -> WaterProfile:
        for dose in self.salts:
            profile = add_salt(profile, dose.salt, dose.ppm)
        for dose in self.acids:
            profile = add_acid(profile, dose.acid, dose.ppm)
        return profile

    def add_salt(self, dose: SaltConcentration):
        """Appends a dose, folding it into an earlier dose of the same salt."""
        for i, existing in enumerate(self.salts):
            if existing.salt == dose.salt:
                self.salts[i] = SaltConcentration(dose.salt, existing.ppm + dose.ppm)
                return
        self.salts.append(dose)

    def uses(self, salt_key: str) -> bool:
        return any(dose.salt.key == salt_key for dose in self.salts)


def _first_providing(salts: Sequence[Salt], ion: Ion) -> Optional[Salt]:
    for salt in salts:
        if salt.provides(ion):
            return salt
    return None


def ratio_correction(profile: WaterProfile, window: ValueRange, salts_available: Sequence[Salt]):
    """
    One salt that brings Cl:SO4 back into the window.

    Returns:
        (SaltConcentration or None, unresolved direction or None)
    """
    ratio = profile.chloride_sulfate_ratio()
    if ratio is None or window.contains(ratio):
        return None, None

    if ratio < window.start:
        salt = _first_providing(salts_available, Ion.CHLORIDE)
        if salt is None:
            return None, "low"
        needed = window.start * profile.sulfate - profile.chloride
        return SaltConcentration(salt, needed / salt.ion_fraction(Ion.CHLORIDE)), None

    salt = _first_providing(salts_available, Ion.SULFATE)
    if salt is None:
        return None, "high"
    needed = profile.chloride / window.end - profile.sulfate
    return SaltConcentration(salt, needed / salt.ion_fraction(Ion.SULFATE)), None


def _salt_by_key(salts: Sequence[Salt], key: str) -> Optional[Salt]:
    return next((s for s in salts if s.key == key), None)


def harden_water(
    profile: WaterProfile,
    ra_target: float,
    chloride_sulfate_target: float,
    salts_available: Sequence[Salt],
):
    """
    Lowers residual alkalinity by adding calcium and magnesium.

    Epsom brings magnesium up to a seventh of the calcium needed. The
    rest of the hardness comes from gypsum and calcium chloride, added a
    ppm at a time, whichever pulls Cl:SO4 toward the target.

    Returns:
        (list of SaltConcentration, hardened profile)
    """
    hardness_needed = profile.alkalinity - ra_target
    if hardness_needed <= profile.hardness:
        return [], profile

    added = {}

    epsom = _salt_by_key(salts_available, "epsom")
    mg_target = hardness_needed / HARDNESS_PER_PPM_MAGNESIUM
    if epsom is not None and profile.magnesium < mg_target:
        ppm = (mg_target - profile.magnesium) / epsom.ion_fraction(Ion.MAGNESIUM)
        profile = add_salt(profile, epsom, ppm)
        added[epsom] = ppm

    gypsum = _salt_by_key(salts_available, "gypsum")
    chloride = _salt_by_key(salts_available, "calcium_chloride")
    ca_target = (hardness_needed - profile.magnesium / 1.7) * 1.4
    while (gypsum is not None or chloride is not None) and ca_target - profile.calcium > 1e-9:
        ratio = profile.chloride_sulfate_ratio()
        if chloride is None or (gypsum is not None and (ratio is None or ratio > chloride_sulfate_target)):
            salt = gypsum
        else:
            salt = chloride
        ppm = min(1.0, (ca_target - profile.calcium) / salt.ion_fraction(Ion.CALCIUM))
        profile = add_salt(profile, salt, ppm)
        added[salt] = added.get(salt, 0.0) + ppm

    if ca_target - profile.calcium > 1e-9:
        logger.debug(f"No calcium salt on hand; residual alkalinity stays at {profile.residual_alkalinity():.0f}")
    return [SaltConcentration(salt, ppm) for salt, ppm in added.items()], profile


def adjust_water(
    source: WaterProfile,
    distilled_ph: float,
    target_ph: float,
    ratio_window: Optional[ValueRange],
    salts_available: Sequence[Salt],
    acids_available: Sequence[Acid],
) -> WaterAdjustment:
    """
    Computes salt and acid concentrations for the mash/sparge water.

    Args:
        source: Source water profile
        distilled_ph: Grain-only mash pH at the last mash rest
        target_ph: Desired mash pH (normally 5.4)
        ratio_window: Desired chloride:sulfate window, or None to skip
        salts_available: Salts on hand, in order of preference
        acids_available: Acids on hand, in order of preference

    Returns:
        WaterAdjustment with at most one ratio salt, then either an acid
        (pH too high), hardening salts (pH too high and no acid on hand)
        or baking soda (pH too low).
    """
    result = WaterAdjustment(ratio_before=source.chloride_sulfate_ratio())
    profile = source

    if ratio_window is not None:
        dose, unresolved = ratio_correction(source, ratio_window, salts_available)
        result.unresolved_ratio = unresolved
        if dose is not None:
            result.add_salt(dose)
            profile = add_salt(profile, dose.salt, dose.ppm)

    ph = distilled_ph + water_ph_shift(profile)
    if ph > target_ph and acids_available:
        acid = acids_available[0]
        ppm = (ph - target_ph) / acid.ph_shift_per_ppm
        result.acids.append(AcidConcentration(acid, ppm))
        ph = target_ph
    elif ph > target_ph:
        ra_target = (target_ph - distilled_ph) / WATER_PH_SHIFT_PER_RA
        ratio_target = ratio_window.midpoint if ratio_window is not None else DEFAULT_CHLORIDE_SULFATE_TARGET
        doses, profile = harden_water(profile, ra_target, ratio_target, salts_available)
        for dose in doses:
            result.add_salt(dose)
        ph = distilled_ph + water_ph_shift(profile)
    elif ph < target_ph:
        soda = next((s for s in salts_available if s.key == "baking_soda"), None)
        if soda is not None:
            ra_needed = (target_ph - ph) / WATER_PH_SHIFT_PER_RA
            hco3_ppm = alkalinity_to_bicarbonate(ra_needed)
            result.salts.append(SaltConcentration(soda, hco3_ppm / soda.ion_fraction(Ion.BICARBONATE)))
            ph = target_ph

    result.predicted_ph = ph
    logger.debug(f"Water adjustment: {result}")
    return result
