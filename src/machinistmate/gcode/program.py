"""Program emitter: wraps a planned toolpath with setup and teardown blocks.

Output layout::

    (title / annotation comments)
    G90 G17 G20 G40 G80          mode reset
    T1 M06 (SELECT TOOL 1)       tool change
    G54                          work offset
    M03 S3000                    spindle on
    M08                          coolant (optional)
    G00 X0.0000 Y0.0000          approach
    G43 H01 Z0.1000              tool length offset
    (PASS 1 ...)                 one block per pass
    ...
    G00 Z1.0000                  retract
    M09                          coolant off (optional)
    M05
    G91 G28 Z0
    G91 G28 X0 Y0
    G90
    M30

The emitter makes no decisions about the toolpath; every line is a fixed
block or a serialized motion primitive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..core.toolpath.base import Motion, Toolpath, coolant, spindle
from ..core.units import Units
from .gcode_writer import comment, fmt, format_motion, rapid


@dataclass
class EmitterConfig:
    """Controller-level output options."""

    units: Units = Units.INCH
    work_offset: str = "G54"
    retract_z: float = 1.0       # final Z retract before homing
    end_of_block: str = ""       # e.g. ";" for Haas-style EOB
    percent: bool = False        # wrap program in % tape markers


@dataclass
class Program:
    """Serialized program split into header, body and footer."""

    header: list[str] = field(default_factory=list)
    body: list[str] = field(default_factory=list)
    footer: list[str] = field(default_factory=list)

    @property
    def lines(self) -> list[str]:
        return self.header + self.body + self.footer

    @property
    def text(self) -> str:
        return "\n".join(self.lines) + "\n"


class ProgramEmitter:
    """Turns a :class:`Toolpath` into program text."""

    def __init__(self, config: EmitterConfig | None = None):
        self.config = config or EmitterConfig()

    def _block(self, line: str) -> str:
        if not self.config.end_of_block or line.startswith("(") or line == "%":
            return line
        return line + self.config.end_of_block

    def _motion(self, m: Motion) -> str:
        return self._block(format_motion(m))

    def header(self, tp: Toolpath, rpm: int, coolant_on: bool = False) -> list[str]:
        cfg = self.config
        n = tp.tool_number
        lines = ["%"] if cfg.percent else []
        lines += [comment(a) for a in tp.annotations]
        lines += [
            self._block(f"G90 G17 {cfg.units.gcode_modal} G40 G80"),
            self._block(f"T{n} M06 (SELECT TOOL {n})"),
            self._block(cfg.work_offset),
            self._motion(spindle(rpm)),
        ]
        if coolant_on:
            lines.append(self._motion(coolant(True)))
        x, y = tp.start_xy
        lines.append(self._block(rapid(x, y)))
        lines.append(self._block(f"G43 H{n:02d} Z{fmt(tp.clearance_z)}"))
        return lines

    def body(self, tp: Toolpath) -> list[str]:
        lines: list[str] = []
        for seg in tp.segments:
            if seg.label:
                lines.append(comment(seg.label))
            lines.extend(self._motion(m) for m in seg.motions)
        return lines

    def footer(self, coolant_on: bool = False) -> list[str]:
        cfg = self.config
        lines = [self._block(rapid(z=cfg.retract_z))]
        if coolant_on:
            lines.append(self._motion(coolant(False)))
        lines += [
            self._motion(spindle(on=False)),
            self._block("G91 G28 Z0"),
            self._block("G91 G28 X0 Y0"),
            self._block("G90"),
            self._block("M30"),
        ]
        if cfg.percent:
            lines.append("%")
        return lines

    def build(self, tp: Toolpath, rpm: int, coolant_on: bool = False) -> Program:
        return Program(
            header=self.header(tp, rpm, coolant_on),
            body=self.body(tp),
            footer=self.footer(coolant_on),
        )

    def get_lines(self, tp: Toolpath, rpm: int, coolant_on: bool = False) -> list[str]:
        return self.build(tp, rpm, coolant_on).lines

    def generate(
        self,
        tp: Toolpath,
        rpm: int,
        output_path: Path,
        coolant_on: bool = False,
    ) -> Program:
        """Write the program to *output_path* and return it."""
        program = self.build(tp, rpm, coolant_on)
        output_path.write_text(program.text)
        return program

