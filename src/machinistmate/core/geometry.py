"""Geometry resolution: user-facing diameters into radii and path offsets.

The path radius is the circle the tool *centre* must follow so that the
tool's edge lands on the feature boundary::

    path_radius = feature_diameter / 2 - tool_diameter / 2
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConstraintViolation, GeometryInfeasible


@dataclass(frozen=True)
class CircleGeometry:
    """Resolved radii for a circular feature cut from the inside."""

    tool_radius: float
    feature_radius: float

    @property
    def path_radius(self) -> float:
        return self.feature_radius - self.tool_radius


@dataclass(frozen=True)
class ThreadGeometry(CircleGeometry):
    """Circle geometry plus the thread profile values."""

    minor_radius: float = 0.0
    pitch: float = 0.0

    @property
    def thread_height(self) -> float:
        """Radial depth of the thread form (major minus minor radius)."""
        return self.feature_radius - self.minor_radius


def pitch_from_tpi(tpi: float) -> float:
    """Axial pitch for *tpi* threads per unit length."""
    if tpi <= 0:
        raise ValueError("tpi must be positive")
    return 1.0 / tpi


def resolve_circle(tool_diameter: float, feature_diameter: float) -> CircleGeometry:
    """Resolve a pocket-style feature.

    Raises
    ------
    GeometryInfeasible:
        If the tool diameter is not strictly smaller than the feature.
    """
    if tool_diameter >= feature_diameter:
        raise GeometryInfeasible(
            "Cutter diameter is larger than or equal to the circle diameter."
        )
    return CircleGeometry(
        tool_radius=tool_diameter / 2.0,
        feature_radius=feature_diameter / 2.0,
    )


def resolve_thread(
    tool_diameter: float,
    major_diameter: float,
    minor_diameter: float,
    pitch: Optional[float] = None,
    tpi: Optional[float] = None,
) -> ThreadGeometry:
    """Resolve an internal thread profile.

    Exactly one of *pitch* or *tpi* is used; *pitch* wins if both are given.
    A tool equal to the major diameter resolves to a zero path radius,
    which the sequencer turns into a straight plunge.
    """
    if major_diameter <= minor_diameter:
        raise ConstraintViolation({
            "major_diameter": "Major diameter must be larger than minor diameter.",
        })
    if tool_diameter > major_diameter:
        raise GeometryInfeasible(
            "Thread mill diameter is larger than the thread major diameter."
        )

    if pitch is None:
        if tpi is None:
            raise ConstraintViolation({"pitch": "Either pitch or TPI is required."})
        pitch = pitch_from_tpi(tpi)
    elif pitch <= 0:
        raise ConstraintViolation({"pitch": "Must be positive."})

    return ThreadGeometry(
        tool_radius=tool_diameter / 2.0,
        feature_radius=major_diameter / 2.0,
        minor_radius=minor_diameter / 2.0,
        pitch=pitch,
    )
