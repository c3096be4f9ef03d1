"""
BrewCalc - Process Warnings

Each warning kind is a small frozen dataclass carrying the numbers that
triggered it. Errors mean the process cannot physically be carried out;
advisories mean it can, but falls outside recommended bounds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Optional

from brewcalc.ingredients import ValueRange
from brewcalc.ingredients.styles import Style


class Severity(str, Enum):
    ERROR = "error"
    ADVISORY = "advisory"


@dataclass(frozen=True)
class ProcessWarning:
    severity: ClassVar[Severity] = Severity.ADVISORY

    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def message(self) -> str:
        return type(self).__name__

    def __str__(self):
        return self.message()


# --- ERRORS ---

@dataclass(frozen=True)
class FermentersTooSmall(ProcessWarning):
    severity: ClassVar[Severity] = Severity.ERROR
    needed_l: float
    largest_l: Optional[float]

    def message(self):
        largest = f"{self.largest_l:.1f} L" if self.largest_l is not None else "none"
        return f"Fermenters are too small: need {self.needed_l:.1f} L, largest is {largest}."


@dataclass(frozen=True)
class BoilKettleTooSmall(ProcessWarning):
    severity: ClassVar[Severity] = Severity.ERROR
    needed_l: float
    available_l: float

    def message(self):
        return (f"Boil kettle is too small: pre-boil volume {self.needed_l:.1f} L exceeds "
                f"{self.available_l:.1f} L and partial-boil dilution is not allowed.")


@dataclass(frozen=True)
class KettleTooSmallForPartialBoil(ProcessWarning):
    severity: ClassVar[Severity] = Severity.ERROR
    available_l: float
    losses_l: float

    def message(self):
        return (f"Boil kettle holds {self.available_l:.1f} L but kettle losses and evaporation "
                f"take {self.losses_l:.1f} L; no wort would be left to dilute.")


@dataclass(frozen=True)
class MashTunTooSmall(ProcessWarning):
    severity: ClassVar[Severity] = Severity.ERROR
    needed_l: float
    available_l: float

    def message(self):
        return f"Mash tun is too small: mash needs {self.needed_l:.1f} L, tun holds {self.available_l:.1f} L."


@dataclass(frozen=True)
class TooMuchMash(ProcessWarning):
    severity: ClassVar[Severity] = Severity.ERROR
    overfull_l: float
    mash_thickness: float

    def message(self):
        return (f"Mash water exceeds the pre-boil volume by {self.overfull_l:.2f} L; "
                f"mash thickness {self.mash_thickness:.2f} L/kg is too thin.")


@dataclass(frozen=True)
class ImpossibleInfusionTemperature(ProcessWarning):
    severity: ClassVar[Severity] = Severity.ERROR
    temp_c: float

    def message(self):
        return f"Infusion water at {self.temp_c:.1f} C is at or above boiling."


@dataclass(frozen=True)
class ImpossibleStrikeTemperature(ProcessWarning):
    severity: ClassVar[Severity] = Severity.ERROR
    temp_c: float

    def message(self):
        return f"Strike water would need to be {self.temp_c:.1f} C, at or above boiling."


# --- ADVISORIES ---

@dataclass(frozen=True)
class ChlorideSulfateRatioLow(ProcessWarning):
    ratio: float
    window: ValueRange

    def message(self):
        return f"Chloride:sulfate ratio {self.ratio:.2f} is below {self.window} and no chloride salt is on hand."


@dataclass(frozen=True)
class ChlorideSulfateRatioHigh(ProcessWarning):
    ratio: float
    window: ValueRange

    def message(self):
        return f"Chloride:sulfate ratio {self.ratio:.2f} is above {self.window} and no sulfate salt is on hand."


@dataclass(frozen=True)
class ExcessDilutionRequired(ProcessWarning):
    dilution_ratio: float
    maximum: float

    def message(self):
        return (f"Partial boil needs {self.dilution_ratio:.0%} dilution, "
                f"more than the {self.maximum:.0%} allowed.")


@dataclass(frozen=True)
class TargetAbvUnreachable(ProcessWarning):
    abv: float
    target: float

    def message(self):
        return f"ABV {self.abv:.2f}% stays above the {self.target:.2f}% target at the maximum dilution."


@dataclass(frozen=True)
class LageringVesselsTooSmall(ProcessWarning):
    needed_l: float
    largest_l: float

    def message(self):
        return (f"Lagering vessels are too small: need {self.needed_l:.1f} L, largest is "
                f"{self.largest_l:.1f} L. Lager in the fermenter instead.")


@dataclass(frozen=True)
class LowDiastaticPower(ProcessWarning):
    base_malt_fraction: float

    def message(self):
        return f"Only {self.base_malt_fraction:.0%} base malt; conversion may be incomplete."


@dataclass(frozen=True)
class ExcessMalt(ProcessWarning):
    malt: str
    percent: float
    maximum_percent: float

    def message(self):
        return f"{self.malt} is {self.percent:.1f}% of the grist (recommended max {self.maximum_percent:g}%)."


@dataclass(frozen=True)
class UnusualRoomTemperature(ProcessWarning):
    temp_c: float

    def message(self):
        return f"Room temperature {self.temp_c:.1f} C is unusual."


@dataclass(frozen=True)
class UnusualStrikeTemperature(ProcessWarning):
    temp_c: float

    def message(self):
        return f"Strike temperature {self.temp_c:.1f} C is unusually low."


@dataclass(frozen=True)
class UnusualInfusionTemperature(ProcessWarning):
    temp_c: float

    def message(self):
        return f"Infusion temperature {self.temp_c:.1f} C is unusually low."


@dataclass(frozen=True)
class UnusualFermentationTemperature(ProcessWarning):
    temp_c: float

    def message(self):
        return f"Fermentation temperature {self.temp_c:.1f} C is unusual."


@dataclass(frozen=True)
class TooHot(ProcessWarning):
    temp_c: float
    yeast_max_c: float

    def message(self):
        return f"Fermenting at {self.temp_c:.1f} C is above the yeast maximum of {self.yeast_max_c:.1f} C."


@dataclass(frozen=True)
class TooCold(ProcessWarning):
    temp_c: float
    yeast_min_c: float

    def message(self):
        return f"Fermenting at {self.temp_c:.1f} C is below the yeast minimum of {self.yeast_min_c:.1f} C."


@dataclass(frozen=True)
class TooMuchAlcohol(ProcessWarning):
    abv: float
    tolerance: float

    def message(self):
        return f"ABV {self.abv:.2f}% exceeds the yeast alcohol tolerance of {self.tolerance:.1f}%."


@dataclass(frozen=True)
class MashPhOutOfRange(ProcessWarning):
    step: int
    ph: float
    band: ValueRange

    def message(self):
        return f"Mash pH {self.ph:.2f} at rest {self.step} is outside {self.band}."


@dataclass(frozen=True)
class AcidityNeededCancelling(ProcessWarning):

    def message(self):
        return ("Baking soda is cancelling acidity that the acidulated malt added. "
                "Drop the acidulated malt instead.")


@dataclass(frozen=True)
class StyleRangeWarning(ProcessWarning):
    value: float
    range: ValueRange

    label: ClassVar[str] = "value"

    def message(self):
        return f"{self.label} {self.value:g} is outside the style range {self.range}."


@dataclass(frozen=True)
class OriginalGravityOutOfRange(StyleRangeWarning):
    label: ClassVar[str] = "Original gravity"


@dataclass(frozen=True)
class FinalGravityOutOfRange(StyleRangeWarning):
    label: ClassVar[str] = "Final gravity"


@dataclass(frozen=True)
class AbvOutOfRange(StyleRangeWarning):
    label: ClassVar[str] = "ABV"


@dataclass(frozen=True)
class IbuOutOfRange(StyleRangeWarning):
    label: ClassVar[str] = "Bitterness (IBU)"


@dataclass(frozen=True)
class SrmOutOfRange(StyleRangeWarning):
    label: ClassVar[str] = "Color (SRM)"


def style_warnings(style: Style, og: float, fg: float, abv: float, ibu: float, srm: float) -> List[ProcessWarning]:
    """Checks the computed beer against the style's documented ranges."""
    checks = [
        (OriginalGravityOutOfRange, og, style.original_gravity_range),
        (FinalGravityOutOfRange, fg, style.final_gravity_range),
        (AbvOutOfRange, abv, style.abv_range),
        (IbuOutOfRange, ibu, style.bitterness_range),
        (SrmOutOfRange, srm, style.color_range),
    ]
    return [kind(value, allowed) for kind, value, allowed in checks if not allowed.contains(value)]
