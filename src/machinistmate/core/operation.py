"""Machining operation parameter containers.

Each operation profile is an immutable record of the values a machinist
types into the generator form.  Cross-field checks happen at the form
boundary (see :mod:`machinistmate.forms`); the planner only refuses
geometry that cannot be cut.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .direction import CutDirection, ThreadHand
from .geometry import pitch_from_tpi
from .units import Units

# Clearance plane above the work when an operation gives none, in inches.
DEFAULT_SAFE_Z = 0.1


class OperationType(Enum):
    POCKET = "pocket"
    THREAD_MILL = "thread"
    DRILL = "drill"


@dataclass(frozen=True)
class PocketOperation:
    """Circular pocket cut with concentric interpolated circles."""

    cutter_diameter: float
    circle_diameter: float
    speed: int
    feed: float
    depth: float                  # total depth, positive
    stepover: float               # radial distance between circles

    depth_per_pass: Optional[float] = None   # None -> full depth in one level
    direction: CutDirection = CutDirection.CLIMB
    tool_number: int = 1
    coolant: bool = False
    safe_z: Optional[float] = None   # None -> DEFAULT_SAFE_Z in program units

    operation_type = OperationType.POCKET

    @property
    def plunge_feed(self) -> float:
        return self.feed / 2.0

    @property
    def step_down(self) -> float:
        return self.depth_per_pass or self.depth


@dataclass(frozen=True)
class ThreadMillOperation:
    """Internal thread cut by helical interpolation, bottom up."""

    tool_diameter: float
    major_diameter: float
    minor_diameter: float
    thread_depth: float
    speed: int
    feed: float

    pitch: Optional[float] = None
    tpi: Optional[float] = None
    hand: ThreadHand = ThreadHand.RIGHT
    passes: int = 1               # radial passes, 1..5
    tool_number: int = 1
    coolant: bool = False
    safe_z: Optional[float] = None   # None -> DEFAULT_SAFE_Z in program units

    operation_type = OperationType.THREAD_MILL

    @property
    def plunge_feed(self) -> float:
        return self.feed / 2.0

    @property
    def resolved_pitch(self) -> Optional[float]:
        if self.pitch is not None:
            return self.pitch
        if self.tpi is not None:
            return pitch_from_tpi(self.tpi)
        return None


@dataclass(frozen=True)
class DrillOperation:
    """Peck drilling at the work-offset origin."""

    hole_diameter: float
    peck: float                   # Q: depth per peck
    r_plane: float                # R: retract plane above the surface
    total_depth: float
    speed: int
    feed: float

    tool_number: int = 2
    coolant: bool = True
    canned_cycle: bool = True     # False -> expand pecks into G00/G01

    operation_type = OperationType.DRILL


MachineParameters = Union[PocketOperation, ThreadMillOperation, DrillOperation]


def clearance_height(safe_z: Optional[float], units: Units) -> float:
    """*safe_z* as given, or the default clearance expressed in *units*."""
    if safe_z is not None:
        return safe_z
    return Units.INCH.convert(DEFAULT_SAFE_Z, units)
