"""Snap grid resolutions offered by the sketcher."""

from __future__ import annotations

from enum import Enum

from deckcalc.utils.units import grid_label, in_to_ft


class GridResolution(Enum):
    SIX_INCH = 6
    ONE_FOOT = 12
    TWO_FOOT = 24
    THREE_FOOT = 36
    FOUR_FOOT = 48

    @property
    def inches(self) -> int:
        return self.value

    @property
    def feet(self) -> float:
        return in_to_ft(self.value)

    @property
    def label(self) -> str:
        return grid_label(self.value)

    @classmethod
    def from_inches(cls, inches: float) -> "GridResolution":
        """Look up a resolution by its step in inches.

        Raises ValueError for steps the sketcher does not offer.
        """
        for res in cls:
            if res.value == inches:
                return res
        valid = ", ".join(str(r.value) for r in cls)
        raise ValueError(f"Unsupported grid step {inches}\". Valid: {valid}")


DEFAULT_GRID = GridResolution.ONE_FOOT
