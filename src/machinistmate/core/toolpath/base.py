"""Core toolpath data structures: motion primitives, pass blocks, toolpaths."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from ..direction import ArcDirection, CompSide
from .passes import PassDescriptor


class MoveType(Enum):
    """Kind of primitive in the ordered motion list."""
    RAPID = "rapid"                # G00
    FEED = "feed"                  # G01
    ARC = "arc"                    # G02/G03, helical when z is set
    COMP_ON = "comp_on"            # G41/G42 lead-in move
    COMP_OFF = "comp_off"          # G40 lead-out move
    SPINDLE = "spindle"            # M03 / M05
    COOLANT = "coolant"            # M08 / M09
    DISTANCE = "distance"          # G90 / G91
    DRILL_CYCLE = "drill_cycle"    # G83 peck cycle
    CYCLE_CANCEL = "cycle_cancel"  # G80


@dataclass(frozen=True)
class Motion:
    """A single motion primitive.

    Only the fields relevant to ``move_type`` are set; coordinates left as
    ``None`` are not programmed (modal value is kept by the control).
    """
    move_type: MoveType
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    feed_rate: Optional[float] = None
    i: Optional[float] = None            # arc centre offset, X
    j: Optional[float] = None            # arc centre offset, Y
    arc: Optional[ArcDirection] = None
    comp: Optional[CompSide] = None
    register: Optional[int] = None       # D word for compensation
    rpm: Optional[int] = None
    on: bool = True                      # spindle / coolant state
    incremental: bool = False            # DISTANCE: G91 when True
    peck: Optional[float] = None         # DRILL_CYCLE Q
    r_plane: Optional[float] = None      # DRILL_CYCLE R

    @property
    def center_offset(self) -> Optional[float]:
        """Length of the (I, J) vector for arcs."""
        if self.i is None and self.j is None:
            return None
        return math.hypot(self.i or 0.0, self.j or 0.0)


def rapid(x=None, y=None, z=None) -> Motion:
    return Motion(MoveType.RAPID, x=x, y=y, z=z)


def feed(x=None, y=None, z=None, f: Optional[float] = None) -> Motion:
    return Motion(MoveType.FEED, x=x, y=y, z=z, feed_rate=f)


def arc(
    direction: ArcDirection,
    i: float,
    j: float = 0.0,
    x: Optional[float] = None,
    y: Optional[float] = None,
    z: Optional[float] = None,
    f: Optional[float] = None,
) -> Motion:
    return Motion(MoveType.ARC, x=x, y=y, z=z, i=i, j=j, arc=direction, feed_rate=f)


def comp_on(side: CompSide, register: int, x: float, y: float,
            f: Optional[float] = None) -> Motion:
    return Motion(MoveType.COMP_ON, x=x, y=y, comp=side, register=register,
                  feed_rate=f)


def comp_off(x: float = 0.0, y: float = 0.0) -> Motion:
    return Motion(MoveType.COMP_OFF, x=x, y=y)


def spindle(rpm: Optional[int] = None, on: bool = True) -> Motion:
    return Motion(MoveType.SPINDLE, rpm=rpm, on=on)


def coolant(on: bool = True) -> Motion:
    return Motion(MoveType.COOLANT, on=on)


def distance_mode(incremental: bool) -> Motion:
    return Motion(MoveType.DISTANCE, incremental=incremental)


@dataclass
class ToolpathSegment:
    """The ordered motions of one cutting pass."""
    motions: list[Motion] = field(default_factory=list)
    descriptor: Optional[PassDescriptor] = None
    label: str = ""

    def append(self, motion: Motion) -> None:
        self.motions.append(motion)

    def extend(self, motions: list[Motion]) -> None:
        self.motions.extend(motions)

    def is_empty(self) -> bool:
        return len(self.motions) == 0


@dataclass
class Toolpath:
    """All passes of one operation plus what the emitter needs to wrap them.

    ``start_xy`` and ``clearance_z`` give the approach position taken before
    the first pass (tool length offset is applied on the Z move).
    ``annotations`` become comment lines at the top of the program.
    """
    segments: list[ToolpathSegment] = field(default_factory=list)
    tool_number: int = 1
    operation_name: str = ""
    start_xy: tuple[float, float] = (0.0, 0.0)
    clearance_z: float = 0.1
    annotations: list[str] = field(default_factory=list)

    def add_segment(self, seg: ToolpathSegment) -> None:
        self.segments.append(seg)

    def iter_motions(self) -> Iterator[Motion]:
        for seg in self.segments:
            yield from seg.motions

    @property
    def total_motions(self) -> int:
        return sum(len(s.motions) for s in self.segments)

    @property
    def is_empty(self) -> bool:
        return all(s.is_empty() for s in self.segments)
