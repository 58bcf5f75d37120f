"""Peck drilling: G83 canned cycle, or the same pecks spelled out."""

from __future__ import annotations

from ..operation import DrillOperation
from ..units import Units
from .base import Motion, MoveType, Toolpath, ToolpathSegment, feed, rapid
from .passes import depth_schedule, schedule_passes

# Rapid back down to this far above the previous peck before feeding
# again, in inches.
PECK_CLEARANCE = 0.01


def generate_drilling_toolpath(
    op: DrillOperation,
    units: Units = Units.INCH,
) -> Toolpath:
    toolpath = Toolpath(
        tool_number=op.tool_number,
        operation_name="drill",
        start_xy=(0.0, 0.0),
        clearance_z=op.r_plane,
        annotations=[
            "Drilling Cycle - G83",
            f"Hole Dia: {op.hole_diameter:g}",
        ],
    )

    if op.canned_cycle:
        seg = ToolpathSegment(label=f"G83 Z-{op.total_depth:.4f} Q{op.peck:.4f}")
        seg.append(Motion(
            MoveType.DRILL_CYCLE,
            z=-op.total_depth,
            peck=op.peck,
            r_plane=op.r_plane,
            feed_rate=op.feed,
        ))
        seg.append(Motion(MoveType.CYCLE_CANCEL))
        toolpath.add_segment(seg)
        return toolpath

    clearance = Units.INCH.convert(PECK_CLEARANCE, units)
    previous = 0.0
    for desc in schedule_passes(None, depths=depth_schedule(op.total_depth, op.peck)):
        seg = ToolpathSegment(descriptor=desc, label=f"PECK {desc.index} Z-{desc.depth:.4f}")
        if desc.index > 1:
            seg.append(rapid(z=-previous + clearance))
        seg.append(feed(z=-desc.depth, f=op.feed))
        seg.append(rapid(z=op.r_plane))
        toolpath.add_segment(seg)
        previous = desc.depth

    return toolpath
