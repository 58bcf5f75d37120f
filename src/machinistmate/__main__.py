"""CLI entry point: ``python -m machinistmate pocket --circle-diameter 3 ...``"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config.defaults import (
    DEFAULT_DRILL,
    DEFAULT_POCKET,
    DEFAULT_THREAD,
    build_default_tool_library,
)
from .config.machine_profiles import HaasModel, get_profile
from .config.settings import AppSettings
from .core.errors import ConstraintViolation, GeometryInfeasible
from .core.job import plan_toolpath, validate_operation
from .core.tool import Tool, ToolLibrary, ToolType
from .core.units import Units
from .forms import parse_drill_form, parse_pocket_form, parse_thread_form
from .gcode.program import ProgramEmitter

_TOOL_TYPES = {
    "pocket": ToolType.FLAT_ENDMILL,
    "thread": ToolType.THREAD_MILL,
    "drill": ToolType.DRILL,
}

_DEFAULTS = {
    "pocket": DEFAULT_POCKET,
    "thread": DEFAULT_THREAD,
    "drill": DEFAULT_DRILL,
}

_PARSERS = {
    "pocket": parse_pocket_form,
    "thread": parse_thread_form,
    "drill": parse_drill_form,
}


def _add_tool_file(p: argparse.ArgumentParser) -> None:
    p.add_argument("--tool-file", type=Path, default=None,
                   help="JSON tool library (default: from settings, else starter tools)")


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("-o", "--output", type=Path, default=None,
                   help="Output .nc file (default: print to stdout)")
    p.add_argument("--machine", choices=[m.value for m in HaasModel], default=None,
                   help="Haas model for limit checks (default: from settings)")
    p.add_argument("--units", choices=[u.value for u in Units], default=None,
                   help="Program units (default: from settings)")
    p.add_argument("--tool-number", type=int, default=None,
                   help="Tool / offset number (default: first suitable tool)")
    _add_tool_file(p)
    p.add_argument("--speed", type=float, default=None, help="Spindle RPM")
    p.add_argument("--feed", type=float, default=None, help="Feed rate")
    p.add_argument("--coolant", choices=["on", "off"], default=None,
                   help="Flood coolant")
    p.add_argument("--eob", action="store_true",
                   help="Terminate blocks with ';'")
    p.add_argument("--skip-validate", action="store_true",
                   help="Skip machine-limit validation")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="machinistmate",
        description="Generate Haas-style G-code for pockets, threads and holes.",
        epilog="Lengths left out are taken from the tool library and the "
               "built-in defaults, converted to the program units.",
    )
    sub = p.add_subparsers(dest="operation", required=True)

    pocket = sub.add_parser("pocket", help="Circular pocket by interpolation")
    pocket.add_argument("--cutter-diameter", type=float, default=None)
    pocket.add_argument("--circle-diameter", type=float, default=None)
    pocket.add_argument("--depth", type=float, default=None,
                        help="Total depth of cut")
    pocket.add_argument("--depth-per-pass", type=float, default=None)
    pocket.add_argument("--stepover", type=float, default=None)
    pocket.add_argument("--direction", choices=["climb", "conventional"],
                        default=DEFAULT_POCKET.direction.value)
    _add_common(pocket)

    thread = sub.add_parser("thread", help="Internal thread milling")
    thread.add_argument("--tool-diameter", type=float, default=None)
    thread.add_argument("--major-diameter", type=float, default=None)
    thread.add_argument("--minor-diameter", type=float, default=None)
    thread.add_argument("--thread-depth", type=float, default=None)
    pitch = thread.add_mutually_exclusive_group()
    pitch.add_argument("--pitch", type=float, default=None)
    pitch.add_argument("--tpi", type=float, default=None)
    thread.add_argument("--hand", choices=["rh", "lh"], default="rh")
    thread.add_argument("--passes", type=int, default=DEFAULT_THREAD.passes)
    _add_common(thread)

    drill = sub.add_parser("drill", help="Peck drilling (G83)")
    drill.add_argument("--hole-diameter", type=float, default=None)
    drill.add_argument("--peck", type=float, default=None)
    drill.add_argument("--r-plane", type=float, default=None)
    drill.add_argument("--total-depth", type=float, default=None)
    drill.add_argument("--expand-pecks", action="store_true",
                       help="Write explicit peck moves instead of G83")
    _add_common(drill)

    tools = sub.add_parser("tools", help="List the tool library")
    _add_tool_file(tools)
    tools.add_argument("--init", action="store_true",
                       help="Write the starter tools to the tool file")

    return p


def _pick(value, fallback):
    return value if value is not None else fallback


def _load_library(path: Optional[Path]) -> ToolLibrary:
    if path is None:
        return build_default_tool_library()
    if not path.exists():
        raise FileNotFoundError(f"Tool file {path} not found")
    try:
        return ToolLibrary.from_file(path)
    except (ValueError, KeyError, TypeError) as exc:
        raise ValueError(f"Could not read tool file {path}: {exc}") from exc


def _select_tool(args: argparse.Namespace, lib: ToolLibrary) -> Optional[Tool]:
    """Requested tool, or the first suitable one when none is named."""
    if args.tool_number is None:
        return lib.first_of(_TOOL_TYPES[args.operation])
    if args.tool_number <= 0:
        return None     # rejected by the form
    tool = lib.get(args.tool_number)
    if tool is None:
        raise ConstraintViolation({
            "tool_number": f"Tool {args.tool_number} is not in the tool library.",
        })
    return tool


def _form_values(args: argparse.Namespace, settings: AppSettings,
                 lib: ToolLibrary) -> dict:
    """Merge CLI arguments with tool library and form defaults.

    Values typed on the command line pass through untouched so the form
    can reject them; library and default lengths are stored in inches and
    converted to the program units.
    """
    tool = _select_tool(args, lib)
    defaults = _DEFAULTS[args.operation]
    length = settings.length

    values = {
        "tool_number": _pick(args.tool_number,
                             tool.number if tool else defaults.tool_number),
        "speed": _pick(args.speed, tool.default_rpm if tool else defaults.speed),
        "feed": _pick(args.feed,
                      length(tool.default_feed if tool else defaults.feed)),
    }
    if args.coolant is not None:
        values["coolant"] = args.coolant

    if args.operation == "pocket":
        values.update(
            cutter_diameter=_pick(args.cutter_diameter, length(
                tool.diameter if tool else DEFAULT_POCKET.cutter_diameter)),
            circle_diameter=_pick(args.circle_diameter,
                                  length(DEFAULT_POCKET.circle_diameter)),
            depth=_pick(args.depth, length(DEFAULT_POCKET.depth)),
            depth_per_pass=args.depth_per_pass,
            stepover=_pick(args.stepover, length(DEFAULT_POCKET.stepover)),
            direction=args.direction,
        )
    elif args.operation == "thread":
        pitch, tpi = args.pitch, args.tpi
        if pitch is None and tpi is None:
            if settings.units is Units.INCH:
                tpi = DEFAULT_THREAD.tpi
            else:
                pitch = length(DEFAULT_THREAD.resolved_pitch)
        values.update(
            tool_diameter=_pick(args.tool_diameter, length(
                tool.diameter if tool else DEFAULT_THREAD.tool_diameter)),
            major_diameter=_pick(args.major_diameter,
                                 length(DEFAULT_THREAD.major_diameter)),
            minor_diameter=_pick(args.minor_diameter,
                                 length(DEFAULT_THREAD.minor_diameter)),
            thread_depth=_pick(args.thread_depth, length(DEFAULT_THREAD.thread_depth)),
            pitch=pitch,
            tpi=tpi,
            hand=args.hand,
            passes=args.passes,
        )
    else:
        values.update(
            hole_diameter=_pick(args.hole_diameter, length(
                tool.diameter if tool else DEFAULT_DRILL.hole_diameter)),
            peck=_pick(args.peck, length(DEFAULT_DRILL.peck)),
            r_plane=_pick(args.r_plane, length(DEFAULT_DRILL.r_plane)),
            total_depth=_pick(args.total_depth, length(DEFAULT_DRILL.total_depth)),
            canned_cycle=not args.expand_pecks,
        )
    return values


def _tools_command(args: argparse.Namespace, tool_file: Optional[Path]) -> int:
    if args.init:
        if tool_file is None:
            print("Error: --init needs --tool-file or a tool_file setting",
                  file=sys.stderr)
            return 2
        build_default_tool_library().save(tool_file)
        print(f"Wrote {tool_file}", file=sys.stderr)
        return 0

    try:
        lib = _load_library(tool_file)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    for t in lib.list_tools():
        print(f"T{t.number:<3} {t.tool_type.value:<12} D{t.diameter:<8g} "
              f"S{t.default_rpm:<6} F{t.default_feed:<6g} {t.name}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    settings = AppSettings.load()
    tool_file = args.tool_file
    if tool_file is None and settings.tool_file:
        tool_file = Path(settings.tool_file)

    if args.operation == "tools":
        return _tools_command(args, tool_file)

    if args.machine is not None:
        settings.default_machine = args.machine
    if args.units is not None:
        settings.default_units = args.units
    if args.eob:
        settings.end_of_block = ";"

    try:
        lib = _load_library(tool_file)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        op = _PARSERS[args.operation](_form_values(args, settings, lib))
    except ConstraintViolation as exc:
        print("Invalid parameters:", file=sys.stderr)
        for name, message in exc.field_errors.items():
            print(f"  {name}: {message}", file=sys.stderr)
        return 2

    try:
        toolpath = plan_toolpath(op, settings)
    except GeometryInfeasible as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ConstraintViolation as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print(f"Planned {len(toolpath.segments)} passes, "
          f"{toolpath.total_motions} moves ({toolpath.operation_name})",
          file=sys.stderr)

    if not args.skip_validate:
        profile = get_profile(settings.machine)
        result = validate_operation(op, toolpath, settings)
        if result.has_errors:
            print(f"VALIDATION ERRORS ({profile}):", file=sys.stderr)
            for issue in result.issues:
                if issue.severity == "error":
                    print(f"  ERROR: {issue.message}", file=sys.stderr)
            return 1
        for issue in result.issues:
            print(f"  Warning: {issue.message}", file=sys.stderr)

    emitter = ProgramEmitter(settings.emitter_config())
    if args.output is not None:
        emitter.generate(toolpath, op.speed, args.output, coolant_on=op.coolant)
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(emitter.build(toolpath, op.speed, coolant_on=op.coolant).text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
