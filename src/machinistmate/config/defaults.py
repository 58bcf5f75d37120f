"""Default form values and starter tools.

These are conservative starting points for 6061 aluminium on a Haas mill;
adjust to the tooling and material actually in use.
"""

from ..core.direction import CutDirection, ThreadHand
from ..core.operation import DrillOperation, PocketOperation, ThreadMillOperation
from ..core.tool import Tool, ToolLibrary, ToolType

DEFAULT_POCKET = PocketOperation(
    cutter_diameter=0.5,
    circle_diameter=3.0,
    speed=3000,
    feed=20.0,
    depth=0.25,
    stepover=0.2,
    direction=CutDirection.CLIMB,
)

DEFAULT_THREAD = ThreadMillOperation(
    tool_diameter=0.4,
    major_diameter=0.5,       # 1/2-20
    minor_diameter=0.4375,
    thread_depth=0.5,
    speed=4000,
    feed=15.0,
    tpi=20,
    hand=ThreadHand.RIGHT,
)

DEFAULT_DRILL = DrillOperation(
    hole_diameter=0.25,
    peck=0.1,
    r_plane=0.1,
    total_depth=0.5,
    speed=1500,
    feed=10.0,
    tool_number=2,
    coolant=True,
)


def build_default_tool_library() -> ToolLibrary:
    """Return an in-memory ToolLibrary with the starter tools."""
    return ToolLibrary((
        Tool(1, "1/2\" Flat Endmill 3-flute", ToolType.FLAT_ENDMILL, 0.5,
             default_rpm=3000, default_feed=20.0),
        Tool(2, "1/4\" Jobber Drill", ToolType.DRILL, 0.25,
             default_rpm=1500, default_feed=10.0),
        Tool(3, "0.4\" Single-Form Thread Mill", ToolType.THREAD_MILL, 0.4,
             default_rpm=4000, default_feed=15.0),
        Tool(4, "1/4\" Flat Endmill 3-flute", ToolType.FLAT_ENDMILL, 0.25,
             default_rpm=5000, default_feed=15.0),
    ))
