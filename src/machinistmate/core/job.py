"""Job orchestrator: operation parameters in, program text out.

``generate_program`` is the entry point for the CLI and any form front
end.  It runs resolve -> schedule -> sequence -> emit once and returns
either a complete program or a single ``Error: ...`` line.
"""

from __future__ import annotations

from typing import Optional

from ..config.machine_profiles import get_profile
from ..config.settings import AppSettings
from ..gcode.program import EmitterConfig, Program, ProgramEmitter
from ..gcode.validate import ValidationResult, validate_toolpath
from .errors import GeometryInfeasible
from .operation import MachineParameters, OperationType
from .toolpath.base import Toolpath
from .toolpath.drilling import generate_drilling_toolpath
from .toolpath.pocket import generate_pocket_toolpath
from .toolpath.threadmill import generate_threadmill_toolpath


def plan_toolpath(
    op: MachineParameters,
    settings: Optional[AppSettings] = None,
) -> Toolpath:
    """Plan the motions for *op* in the configured program units.

    Raises
    ------
    GeometryInfeasible:
        If the tool does not fit the feature.
    TypeError:
        For an unknown operation type.
    """
    settings = settings or AppSettings()
    op_type = getattr(op, "operation_type", None)
    if op_type is OperationType.POCKET:
        return generate_pocket_toolpath(op, units=settings.units)
    if op_type is OperationType.THREAD_MILL:
        return generate_threadmill_toolpath(
            op,
            step_limit=settings.length(settings.nominal_radial_step),
            units=settings.units,
        )
    if op_type is OperationType.DRILL:
        return generate_drilling_toolpath(op, units=settings.units)
    raise TypeError(f"Unsupported operation: {type(op).__name__}")


def build_program(
    op: MachineParameters,
    settings: Optional[AppSettings] = None,
    config: Optional[EmitterConfig] = None,
) -> Program:
    """Plan and serialize *op*; geometry errors propagate."""
    settings = settings or AppSettings()
    tp = plan_toolpath(op, settings)
    emitter = ProgramEmitter(config or settings.emitter_config())
    return emitter.build(tp, rpm=op.speed, coolant_on=op.coolant)


def generate_program(
    op: MachineParameters,
    settings: Optional[AppSettings] = None,
    config: Optional[EmitterConfig] = None,
) -> str:
    """Program text for *op*, or ``"Error: <reason>"`` if it cannot be cut."""
    try:
        return build_program(op, settings, config).text
    except GeometryInfeasible as exc:
        return f"Error: {exc}"


def validate_operation(
    op: MachineParameters,
    tp: Toolpath,
    settings: Optional[AppSettings] = None,
) -> ValidationResult:
    """Run the safety checks for *tp* on the configured machine."""
    settings = settings or AppSettings()
    envelope = get_profile(settings.machine).envelope.in_units(settings.units)
    if op.operation_type is OperationType.POCKET:
        return validate_toolpath(
            tp, envelope, rpm=op.speed,
            feature_radius=op.circle_diameter / 2.0,
            tool_radius=op.cutter_diameter / 2.0,
        )
    return validate_toolpath(tp, envelope, rpm=op.speed)
