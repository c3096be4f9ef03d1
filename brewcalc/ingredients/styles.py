"""
BrewCalc - Beer Styles

Ranges come from the Beer Judge Certification Program and the Brewers
Association. They disagree, so each target range is the union of both.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from brewcalc.core.decorators import InvalidRecipe
from brewcalc.ingredients import ValueRange, union_ranges


class Fermentation(str, Enum):
    ALE = "ale"
    LAGER = "lager"
    EITHER = "either"


class Conditioning(str, Enum):
    NONE = "none"
    LAGERED = "lagered"
    AGED = "aged"


@dataclass(frozen=True)
class Style:
    key: str
    name: str
    fermentation: Fermentation
    conditioning: Conditioning
    is_wheat: bool
    carbonation_volume: float
    original_gravity_ranges: Tuple[ValueRange, ...]
    final_gravity_ranges: Tuple[ValueRange, ...]
    abv_ranges: Tuple[ValueRange, ...]  # percent
    bitterness_ranges: Tuple[ValueRange, ...]
    color_ranges: Tuple[ValueRange, ...]  # SRM

    @property
    def original_gravity_range(self) -> ValueRange:
        return union_ranges(self.original_gravity_ranges)

    @property
    def final_gravity_range(self) -> ValueRange:
        return union_ranges(self.final_gravity_ranges)

    @property
    def abv_range(self) -> ValueRange:
        return union_ranges(self.abv_ranges)

    @property
    def bitterness_range(self) -> ValueRange:
        return union_ranges(self.bitterness_ranges)

    @property
    def color_range(self) -> ValueRange:
        return union_ranges(self.color_ranges)

    @property
    def is_lager(self) -> bool:
        return self.fermentation == Fermentation.LAGER

    def recommended_boil_length(self) -> int:
        """
        Minutes. Lagers boil longer to drive off DMS and gain hot break;
        wheat beers to coagulate protein.
        """
        if self.is_lager:
            return 80
        if self.is_wheat:
            return 75
        return 50

    def recommended_conditioning_days(self) -> int:
        if self.conditioning == Conditioning.LAGERED:
            return 7 * 7
        return 14

    def yeast_pitching_rate(self) -> int:
        """Cells per mL per degree Plato."""
        if self.is_wheat:
            return 600_000
        if self.is_lager:
            return 1_500_000
        return 750_000

    def __str__(self):
        return self.name


def _r(*pairs):
    return tuple(ValueRange(*p) for p in pairs)


A, L = Fermentation.ALE, Fermentation.LAGER

STYLES = {s.key: s for s in [
    Style("dark_mild", "Dark Mild", A, Conditioning.NONE, False, 1.8,
          _r((1.030, 1.038)), _r((1.008, 1.013)), _r((3.0, 3.8)),
          _r((10.0, 25.0)), _r((14.0, 25.0))),
    Style("dunkles_weissbier", "Dunkles Weissbier", A, Conditioning.NONE, True, 3.5,
          _r((1.044, 1.057), (1.048, 1.056)), _r((1.008, 1.014), (1.008, 1.016)),
          _r((4.3, 5.6), (4.8, 5.4)), _r((10.0, 18.0), (10.0, 15.0)), _r((14.0, 23.0), (10.0, 25.0))),
    Style("marzen", "Märzen", L, Conditioning.LAGERED, False, 2.7,
          _r((1.054, 1.060), (1.052, 1.057)), _r((1.010, 1.014), (1.012, 1.020)),
          _r((5.6, 6.3), (5.1, 6.0)), _r((18.0, 24.0), (18.0, 25.0)), _r((8.0, 17.0), (4.0, 15.0))),
    Style("weissbier", "Weissbier", A, Conditioning.NONE, True, 3.3,
          _r((1.044, 1.053), (1.047, 1.056)), _r((1.008, 1.014), (1.008, 1.016)),
          _r((4.3, 5.6), (4.9, 5.6)), _r((8.0, 15.0), (10.0, 15.0)), _r((2.0, 6.0), (3.0, 9.0))),
    Style("leichtes_weizen", "Leichtes Weizen", A, Conditioning.NONE, True, 4.0,
          _r((1.028, 1.044)), _r((1.004, 1.008)), _r((2.5, 3.5)),
          _r((10.0, 15.0)), _r((3.5, 15.0))),
    Style("irish_red_ale", "Irish Red Ale", A, Conditioning.NONE, False, 1.9,
          _r((1.036, 1.046), (1.040, 1.048)), _r((1.010, 1.014)),
          _r((3.8, 5.0), (4.0, 4.8)), _r((18.0, 28.0), (20.0, 28.0)), _r((9.0, 14.0), (11.0, 18.0))),
    Style("belgian_dark_strong_ale", "Belgian Dark Strong Ale", A, Conditioning.NONE, False, 3.0,
          _r((1.092, 1.120)), _r((1.014, 1.020)), _r((10.0, 14.2)),
          _r((25.0, 50.0)), _r((16.0, 36.0))),
    Style("american_lager", "American Lager", L, Conditioning.LAGERED, False, 2.6,
          _r((1.040, 1.050)), _r((1.004, 1.010)), _r((4.2, 5.3)),
          _r((8.0, 18.0)), _r((2.0, 3.5))),
    Style("best_bitter", "Best Bitter", A, Conditioning.NONE, False, 1.8,
          _r((1.040, 1.048)), _r((1.008, 1.012)), _r((3.8, 4.6)),
          _r((25.0, 40.0)), _r((8.0, 16.0))),
]}


def get_style(key: str) -> Style:
    style = STYLES.get(key.lower())
    if style is None:
        raise InvalidRecipe(f"Unknown style: {key}")
    return style
