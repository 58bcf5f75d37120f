"""Low-level G-code line formatting helpers.

Positions and depths always carry four decimals so identical input gives
byte-identical output.  Feeds follow the control's integer convention:
integral values are written with a trailing point (``F20.``), others in
their shortest decimal form (``F7.5``).
"""

from __future__ import annotations

from typing import Optional

from ..core.toolpath.base import Motion, MoveType
from ..core.units import DECIMALS


def fmt(value: float, decimals: int = DECIMALS) -> str:
    """Fixed-decimal coordinate; negative zero prints as zero."""
    text = f"{value:.{decimals}f}"
    if text.startswith("-") and float(text) == 0.0:
        text = text[1:]
    return text


def fmt_feed(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return f"{int(value)}."
    return repr(value)


def _axes(
    x: Optional[float] = None,
    y: Optional[float] = None,
    z: Optional[float] = None,
) -> list[str]:
    parts = []
    if x is not None:
        parts.append(f"X{fmt(x)}")
    if y is not None:
        parts.append(f"Y{fmt(y)}")
    if z is not None:
        parts.append(f"Z{fmt(z)}")
    return parts


def rapid(x=None, y=None, z=None) -> str:
    """G00 rapid traverse."""
    return " ".join(["G00"] + _axes(x, y, z))


def linear(x=None, y=None, z=None, f: Optional[float] = None) -> str:
    """G01 linear interpolation."""
    parts = ["G01"] + _axes(x, y, z)
    if f is not None:
        parts.append(f"F{fmt_feed(f)}")
    return " ".join(parts)


def circular(m: Motion) -> str:
    """G02/G03 arc; helical when Z is present."""
    parts = [m.arc.gcode] + _axes(m.x, m.y)
    parts.append(f"I{fmt(m.i or 0.0)}")
    parts.append(f"J{fmt(m.j or 0.0)}")
    parts += _axes(z=m.z)
    if m.feed_rate is not None:
        parts.append(f"F{fmt_feed(m.feed_rate)}")
    return " ".join(parts)


def comp_on(m: Motion) -> str:
    """G41/G42 with D register on a G01 lead-in."""
    parts = ["G01", m.comp.gcode, f"D{m.register:02d}"] + _axes(m.x, m.y)
    if m.feed_rate is not None:
        parts.append(f"F{fmt_feed(m.feed_rate)}")
    return " ".join(parts)


def comp_off(m: Motion) -> str:
    return " ".join(["G01", "G40"] + _axes(m.x, m.y))


def drill_cycle(m: Motion) -> str:
    return (
        f"G83 Z{fmt(m.z)} Q{fmt(m.peck)} R{fmt(m.r_plane)} "
        f"F{fmt_feed(m.feed_rate)}"
    )


def spindle(m: Motion) -> str:
    if not m.on:
        return "M05"
    return f"M03 S{m.rpm}" if m.rpm is not None else "M03"


def coolant(m: Motion) -> str:
    return "M08" if m.on else "M09"


def comment(text: str) -> str:
    """Wrap *text* in a parenthetical comment."""
    # the control ends a comment at the first ')', strip nested parens
    cleaned = text.replace("(", "").replace(")", "")
    return f"({cleaned})"


def format_motion(m: Motion) -> str:
    """Serialize one motion primitive to a single program line."""
    t = m.move_type
    if t is MoveType.RAPID:
        return rapid(m.x, m.y, m.z)
    if t is MoveType.FEED:
        return linear(m.x, m.y, m.z, m.feed_rate)
    if t is MoveType.ARC:
        return circular(m)
    if t is MoveType.COMP_ON:
        return comp_on(m)
    if t is MoveType.COMP_OFF:
        return comp_off(m)
    if t is MoveType.SPINDLE:
        return spindle(m)
    if t is MoveType.COOLANT:
        return coolant(m)
    if t is MoveType.DISTANCE:
        return "G91" if m.incremental else "G90"
    if t is MoveType.DRILL_CYCLE:
        return drill_cycle(m)
    if t is MoveType.CYCLE_CANCEL:
        return "G80"
    raise ValueError(f"Unhandled move type: {t}")
