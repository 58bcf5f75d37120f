"""Geometry helpers for checking planned toolpaths.

``sample_toolpath`` replays the motion list with its modal state and
returns tool-centre points (arcs and helices discretised); ``uncut_area``
measures how much of a circular feature the swept tool misses.
"""

from __future__ import annotations

import math

import numpy as np
from shapely.geometry import Point, Polygon
from shapely.ops import unary_union

from ..direction import ArcDirection
from .base import MoveType, Toolpath

ARC_SAMPLES = 64
_CIRCLE_SEGS = 64
_CLOSE = 1e-9

_LINEAR_TYPES = (MoveType.RAPID, MoveType.FEED, MoveType.COMP_ON, MoveType.COMP_OFF)


def sample_arc(
    start: np.ndarray,
    center: np.ndarray,
    end: np.ndarray,
    direction: ArcDirection,
    samples: int = ARC_SAMPLES,
) -> np.ndarray:
    """Discretise an XY arc (helical when start/end Z differ).

    *start*, *end* are (x, y, z); *center* is (x, y).  Coincident start
    and end XY means a full circle.  Returns an (samples, 3) array that
    excludes *start* and includes *end*.
    """
    v0 = start[:2] - center
    v1 = end[:2] - center
    radius = float(np.hypot(*v0))
    a0 = math.atan2(v0[1], v0[0])
    a1 = math.atan2(v1[1], v1[0])

    if direction is ArcDirection.CCW:
        sweep = (a1 - a0) % (2 * math.pi)
        if sweep < _CLOSE:
            sweep = 2 * math.pi
    else:
        sweep = -((a0 - a1) % (2 * math.pi))
        if sweep > -_CLOSE:
            sweep = -2 * math.pi

    t = np.linspace(0.0, 1.0, samples + 1)[1:]
    angles = a0 + sweep * t
    xs = center[0] + radius * np.cos(angles)
    ys = center[1] + radius * np.sin(angles)
    zs = start[2] + (end[2] - start[2]) * t
    return np.column_stack([xs, ys, zs])


def sample_toolpath(tp: Toolpath) -> np.ndarray:
    """Tool-centre positions visited by *tp*, as an (N, 3) array."""
    pos = np.array([tp.start_xy[0], tp.start_xy[1], tp.clearance_z], dtype=float)
    incremental = False
    chunks: list[np.ndarray] = [pos.reshape(1, 3)]

    def target(m) -> np.ndarray:
        out = pos.copy()
        for axis, value in enumerate((m.x, m.y, m.z)):
            if value is not None:
                out[axis] = out[axis] + value if incremental else value
        return out

    for m in tp.iter_motions():
        if m.move_type is MoveType.DISTANCE:
            incremental = m.incremental
        elif m.move_type in _LINEAR_TYPES:
            pos = target(m)
            chunks.append(pos.reshape(1, 3))
        elif m.move_type is MoveType.ARC:
            # I/J are always relative to the arc start point
            center = pos[:2] + np.array([m.i or 0.0, m.j or 0.0])
            end = target(m)
            chunks.append(sample_arc(pos, center, end, m.arc))
            pos = end
        elif m.move_type is MoveType.DRILL_CYCLE:
            chunks.append(np.array([
                [pos[0], pos[1], m.r_plane],
                [pos[0], pos[1], m.z],
                [pos[0], pos[1], m.r_plane],
            ]))
            pos = np.array([pos[0], pos[1], m.r_plane])

    return np.vstack(chunks)


def _disc(radius: float) -> Polygon:
    return Point(0.0, 0.0).buffer(radius, quad_segs=_CIRCLE_SEGS)


def swept_annulus(path_radius: float, tool_radius: float) -> Polygon:
    """Area cleared by a tool of *tool_radius* circling at *path_radius*."""
    outer = _disc(path_radius + tool_radius)
    inner_r = path_radius - tool_radius
    if inner_r <= 0:
        return outer
    return outer.difference(_disc(inner_r))


def uncut_area(feature_radius: float, tool_radius: float, radii: list[float]) -> float:
    """Area of the circular feature not swept by any of the passes."""
    if not radii:
        return _disc(feature_radius).area
    swept = unary_union([swept_annulus(r, tool_radius) for r in radii])
    return _disc(feature_radius).difference(swept).area
