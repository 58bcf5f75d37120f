"""Cut direction / thread hand and the fixed coupling table.

Choosing climb vs. conventional (or right- vs. left-hand thread) selects
both the arc sense and the cutter compensation side at once.  The two are
never settable independently: every caller goes through
:func:`coupling_for`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ArcDirection(Enum):
    CW = "G02"
    CCW = "G03"

    @property
    def gcode(self) -> str:
        return self.value


class CompSide(Enum):
    LEFT = "G41"
    RIGHT = "G42"

    @property
    def gcode(self) -> str:
        return self.value


class CutDirection(Enum):
    CLIMB = "climb"
    CONVENTIONAL = "conventional"


class ThreadHand(Enum):
    RIGHT = "rh"
    LEFT = "lh"

    def label(self) -> str:
        return "Right Hand" if self is ThreadHand.RIGHT else "Left Hand"


@dataclass(frozen=True)
class Coupling:
    """Arc sense and compensation side selected together."""

    arc: ArcDirection
    comp: CompSide


_COUPLINGS: dict[Union[CutDirection, ThreadHand], Coupling] = {
    CutDirection.CLIMB: Coupling(ArcDirection.CCW, CompSide.LEFT),
    CutDirection.CONVENTIONAL: Coupling(ArcDirection.CW, CompSide.RIGHT),
    ThreadHand.RIGHT: Coupling(ArcDirection.CW, CompSide.LEFT),
    ThreadHand.LEFT: Coupling(ArcDirection.CCW, CompSide.RIGHT),
}


def coupling_for(choice: Union[CutDirection, ThreadHand]) -> Coupling:
    return _COUPLINGS[choice]
