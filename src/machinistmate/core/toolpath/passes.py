"""Pass scheduling: split axial depth and radial engagement into passes.

All schedules are built as a scan over fixed increments rather than a
running counter, so the boundary pass always lands exactly on the target.
A remainder smaller than the output resolution is folded into the pass
before it instead of becoming a pass of its own.

Two radial policies are supported:

Stepover accumulation
    ``s, 2s, 3s, ...`` until the path radius is reached; the last radius is
    clamped to the path radius.
Fixed pass count
    *n* candidate radii ``r_p - i * step`` with ``step = min(|r_p / n|,
    step_limit)``, sorted by absolute value so the tool always works from
    the lightest engagement out to the finished boundary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import accumulate
from typing import Optional

from ..direction import ArcDirection, CompSide, Coupling
from ..units import RESOLUTION

MIN_RADIAL_PASSES = 1
MAX_RADIAL_PASSES = 5


@dataclass(frozen=True)
class PassDescriptor:
    """One cutting pass: where it cuts and which way round."""

    index: int
    coupling: Optional[Coupling] = None   # None for straight drilling pecks
    depth: Optional[float] = None    # cumulative, positive, from top surface
    radius: Optional[float] = None   # tool-centre radius from feature centre

    @property
    def arc(self) -> Optional[ArcDirection]:
        return self.coupling.arc if self.coupling else None

    @property
    def comp(self) -> Optional[CompSide]:
        return self.coupling.comp if self.coupling else None


@dataclass(frozen=True)
class RadialPlan:
    """Result of the fixed pass-count radial policy.

    ``i_value`` is the centre-offset magnitude used on the helical moves.
    It is derived from the nominal step limit, independently of ``radii``,
    and can differ from the radius each pass is positioned at.
    """

    radii: list[float]
    step: float
    i_value: float


def _pass_count(total: float, step: float) -> int:
    return max(1, math.ceil((total - RESOLUTION) / step))


def depth_increments(total_depth: float, step: float) -> list[float]:
    """Per-pass depth increments: full *step* passes plus the remainder."""
    if step <= 0:
        raise ValueError("step must be positive")
    if total_depth <= 0:
        raise ValueError("total_depth must be positive")

    n = _pass_count(total_depth, step)
    remainder = total_depth - step * (n - 1)
    return [step] * (n - 1) + [remainder]


def depth_schedule(total_depth: float, step: float) -> list[float]:
    """Cumulative depth after each pass, ending exactly at *total_depth*.

    >>> depth_schedule(0.5, 0.25)
    [0.25, 0.5]
    """
    depths = list(accumulate(depth_increments(total_depth, step)))
    depths[-1] = total_depth
    return depths


def stepover_radii(path_radius: float, stepover: float) -> list[float]:
    """Concentric radii ``s, 2s, ...`` with the last clamped to *path_radius*."""
    if stepover <= 0:
        raise ValueError("stepover must be positive")
    if path_radius <= 0:
        raise ValueError("path_radius must be positive")

    n = _pass_count(path_radius, stepover)
    return [stepover * i for i in range(1, n)] + [path_radius]


def fixed_count_radii(
    path_radius: float,
    passes: int,
    step_limit: float,
) -> RadialPlan:
    """Radii for a fixed number of radial passes with a clamped step."""
    if not MIN_RADIAL_PASSES <= passes <= MAX_RADIAL_PASSES:
        raise ValueError(
            f"passes must be between {MIN_RADIAL_PASSES} and {MAX_RADIAL_PASSES}"
        )
    if step_limit == 0:
        raise ValueError("step_limit must be non-zero")

    step = min(abs(path_radius / passes), abs(step_limit))
    candidates = [path_radius - i * step for i in range(passes)]
    return RadialPlan(
        radii=sorted(candidates, key=abs),
        step=step,
        i_value=abs(step_limit) / passes,
    )


def schedule_passes(
    coupling: Optional[Coupling],
    depths: Optional[list[float]] = None,
    radii: Optional[list[float]] = None,
) -> list[PassDescriptor]:
    """Cross depth levels with radial passes, depth-major, indexed from 1.

    Either list may be omitted for a purely radial or purely axial schedule.
    """
    if not depths and not radii:
        return []
    levels: list[Optional[float]] = list(depths) if depths else [None]
    rings: list[Optional[float]] = list(radii) if radii else [None]

    return [
        PassDescriptor(index=i, coupling=coupling, depth=d, radius=r)
        for i, (d, r) in enumerate(
            ((d, r) for d in levels for r in rings), start=1
        )
    ]
