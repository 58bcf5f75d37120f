"""Circular pocket by concentric interpolated circles.

Per depth level
---------------
1. Helical ramp at the first pass radius from the previous floor down to
   the new level (straight plunge when there is no room for a ramp).
2. For each radius from the innermost stepover out to the path radius:
   compensation-on lead-in, one full circle, compensation-off back to the
   centre.

A radius too small to show in the program is never cut as a circle; the
pass keeps only its plunge and a warning is issued.
"""

from __future__ import annotations

import warnings

from ..direction import coupling_for
from ..geometry import resolve_circle
from ..operation import PocketOperation, clearance_height
from ..units import Units
from .base import Toolpath, ToolpathSegment, feed, rapid
from .passes import depth_schedule, schedule_passes, stepover_radii
from .sequencer import full_circle, helical_entry, is_degenerate, lead_in, lead_out


def generate_pocket_toolpath(
    op: PocketOperation,
    units: Units = Units.INCH,
) -> Toolpath:
    """Plan a circular pocket.

    Raises
    ------
    GeometryInfeasible:
        If the cutter does not fit inside the circle.
    """
    geom = resolve_circle(op.cutter_diameter, op.circle_diameter)
    coupling = coupling_for(op.direction)
    safe_z = clearance_height(op.safe_z, units)

    depths = depth_schedule(op.depth, op.step_down)
    radii = stepover_radii(geom.path_radius, op.stepover)
    passes = schedule_passes(coupling, depths=depths, radii=radii)

    toolpath = Toolpath(
        tool_number=op.tool_number,
        operation_name="pocket",
        start_xy=(0.0, 0.0),
        clearance_z=safe_z,
        annotations=[
            "Circular Interpolation G-Code",
            f"Cutter Dia: {op.cutter_diameter:g}, Circle Dia: {op.circle_diameter:g}",
            f"Path Radius: {geom.path_radius:.4f}, Stepover: {op.stepover:g}",
        ],
    )

    for desc in passes:
        seg = ToolpathSegment(
            descriptor=desc,
            label=f"PASS {desc.index} Z-{desc.depth:.4f} R{desc.radius:.4f}",
        )

        if (desc.index - 1) % len(radii) == 0:
            if desc.index == 1:
                seg.append(feed(z=0.0, f=op.plunge_feed))
            seg.extend(helical_entry(
                desc.arc, radii[0], -desc.depth,
                plunge_feed=op.plunge_feed, cut_feed=op.feed,
            ))

        if is_degenerate(desc.radius):
            warnings.warn(
                f"Pass {desc.index}: path radius {desc.radius:g} is below the "
                "output resolution; skipping the circle",
                stacklevel=2,
            )
        else:
            seg.append(lead_in(coupling, op.tool_number, desc.radius, op.feed))
            seg.append(full_circle(desc.arc, desc.radius, op.feed))
            seg.append(lead_out())
        toolpath.add_segment(seg)

    toolpath.segments[-1].append(rapid(z=safe_z))
    return toolpath
