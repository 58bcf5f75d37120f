"""Motion building blocks shared by the operation profiles.

Every pass is cut from the feature centre: lead in with compensation
along +X to the pass radius, cut, then cancel compensation on the way
back to the centre.  All arcs start and end on the +X axis, so the arc
centre offset is always ``I = -radius, J = 0``.
"""

from __future__ import annotations

from typing import Sequence

from ..direction import ArcDirection, Coupling
from ..units import RESOLUTION
from .base import Motion, arc, comp_off, comp_on, distance_mode, feed

# Radii that format to zero leave no room for an arc.
ZERO_RADIUS = RESOLUTION


def is_degenerate(radius: float) -> bool:
    return radius <= ZERO_RADIUS


def lead_in(coupling: Coupling, register: int, radius: float,
            feed_rate: float) -> Motion:
    """Compensation-on move from the centre out to the pass radius."""
    return comp_on(coupling.comp, register, x=radius, y=0.0, f=feed_rate)


def lead_out() -> Motion:
    """Compensation-off move back to the feature centre."""
    return comp_off(0.0, 0.0)


def full_circle(direction: ArcDirection, radius: float,
                feed_rate: float) -> Motion:
    return arc(direction, i=-radius, j=0.0, x=radius, y=0.0, f=feed_rate)


def helical_entry(
    direction: ArcDirection,
    radius: float,
    z_target: float,
    plunge_feed: float,
    cut_feed: float,
) -> list[Motion]:
    """Ramp from the current Z down to *z_target* in one helical turn.

    Returns to the centre afterwards.  With no usable radius the ramp is
    replaced by a straight plunge at the centre.
    """
    if is_degenerate(radius):
        return [feed(z=z_target, f=plunge_feed)]
    return [
        feed(x=radius, y=0.0, f=cut_feed),
        arc(direction, i=-radius, j=0.0, x=radius, y=0.0, z=z_target,
            f=plunge_feed),
        feed(x=0.0, y=0.0, f=cut_feed),
    ]


def helix_climb(
    direction: ArcDirection,
    i_value: float,
    increments: Sequence[float],
    feed_rate: float,
) -> list[Motion]:
    """Incremental helical turns, one per Z increment (G91 ... G90)."""
    motions = [distance_mode(incremental=True)]
    for dz in increments:
        motions.append(arc(direction, i=-i_value, j=0.0, z=dz, f=feed_rate))
    motions.append(distance_mode(incremental=False))
    return motions
