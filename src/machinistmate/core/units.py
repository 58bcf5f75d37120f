"""Program units: modal G-word, labels and conversion."""

from __future__ import annotations

from enum import Enum

MM_PER_INCH = 25.4

# Digits after the point in program coordinates, and the smallest length
# that still changes a formatted value.
DECIMALS = 4
RESOLUTION = 0.5 * 10 ** -DECIMALS


class Units(Enum):
    INCH = "inch"
    MM = "mm"

    @property
    def gcode_modal(self) -> str:
        """G-code modal group 6 word (G20 inch / G21 metric)."""
        return "G20" if self is Units.INCH else "G21"

    @property
    def scale_to_mm(self) -> float:
        return MM_PER_INCH if self is Units.INCH else 1.0

    def convert(self, value: float, target: Units) -> float:
        """Express *value* (in these units) in *target* units."""
        if target is self:
            return value
        return value * self.scale_to_mm / target.scale_to_mm

    def label(self) -> str:
        return "in" if self is Units.INCH else "mm"

    def feed_label(self) -> str:
        return "IPM" if self is Units.INCH else "mm/min"
