"""Internal thread milling by helical interpolation.

Each radial pass drops to the thread bottom at the hole centre, leads in
with compensation, then climbs one pitch per helical turn (incremental
mode) until it reaches the top surface.  Radial passes come from the
fixed pass-count policy and are cut smallest radius first.
"""

from __future__ import annotations

import warnings
from typing import Optional

from ..direction import coupling_for
from ..geometry import resolve_thread
from ..operation import ThreadMillOperation, clearance_height
from ..units import Units
from .base import Toolpath, ToolpathSegment, feed, rapid
from .passes import depth_increments, fixed_count_radii, schedule_passes
from .sequencer import helix_climb, is_degenerate, lead_in, lead_out

# Machine/tooling ceiling on the radial step of one pass, in inches.
NOMINAL_RADIAL_STEP = 1.0


def generate_threadmill_toolpath(
    op: ThreadMillOperation,
    step_limit: Optional[float] = None,
    units: Units = Units.INCH,
) -> Toolpath:
    """Plan an internal thread.

    *step_limit* is in program units; it defaults to
    ``NOMINAL_RADIAL_STEP`` converted from inches.

    Raises
    ------
    GeometryInfeasible:
        If the thread mill is larger than the major diameter.
    ConstraintViolation:
        If major <= minor diameter or no pitch can be resolved.
    """
    geom = resolve_thread(
        op.tool_diameter, op.major_diameter, op.minor_diameter,
        pitch=op.pitch, tpi=op.tpi,
    )
    coupling = coupling_for(op.hand)
    safe_z = clearance_height(op.safe_z, units)
    if step_limit is None:
        step_limit = Units.INCH.convert(NOMINAL_RADIAL_STEP, units)
    plan = fixed_count_radii(geom.path_radius, op.passes, step_limit)
    climbs = depth_increments(op.thread_depth, geom.pitch)

    bottom = -op.thread_depth
    approach_z = -(op.thread_depth - geom.pitch)

    toolpath = Toolpath(
        tool_number=op.tool_number,
        operation_name="thread mill",
        start_xy=(0.0, 0.0),
        clearance_z=safe_z,
        annotations=[
            f"Thread Milling G-Code - {op.hand.label()}",
            f"Major Dia: {op.major_diameter:g}, Pitch: {geom.pitch:.4f}",
            f"Radial Passes: {op.passes}, I: {plan.i_value:.4f}",
        ],
    )

    for desc in schedule_passes(coupling, radii=plan.radii):
        seg = ToolpathSegment(
            descriptor=desc,
            label=f"PASS {desc.index} R{desc.radius:.4f}",
        )
        seg.append(rapid(x=0.0, y=0.0))
        seg.append(rapid(z=approach_z))
        seg.append(feed(z=bottom, f=op.plunge_feed))

        if is_degenerate(abs(desc.radius)):
            warnings.warn(
                f"Pass {desc.index}: path radius is zero "
                f"(tool {op.tool_diameter:g} = major {op.major_diameter:g}); "
                "using a straight plunge instead of a helix",
                stacklevel=2,
            )
            seg.append(feed(z=0.0, f=op.feed))
        else:
            seg.append(lead_in(coupling, op.tool_number, desc.radius, op.feed))
            seg.extend(helix_climb(desc.arc, plan.i_value, climbs, op.feed))
            seg.append(lead_out())

        toolpath.add_segment(seg)

    toolpath.segments[-1].append(rapid(z=safe_z))
    return toolpath
