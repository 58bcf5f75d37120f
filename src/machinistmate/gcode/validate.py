"""Safety checks on a planned toolpath before it is posted.

Checks cover spindle range, feed ceiling, compensation balance, arc
centre offsets against pass radii, travel extents and (for pockets)
material left uncut between passes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np

from ..core.toolpath.base import Motion, MoveType, Toolpath
from ..core.toolpath.utils import sample_toolpath, uncut_area
from ..core.units import Units

ARC_TOLERANCE = 1e-4
UNCUT_TOLERANCE = 1e-4   # fraction of feature area


@dataclass
class MachineEnvelope:
    """Axis travel and spindle/feed limits of a mill (inches, IPM)."""

    x_travel: float = 30.0
    y_travel: float = 16.0
    z_travel: float = 20.0
    max_rpm: int = 8100
    min_rpm: int = 1
    max_feed: float = 650.0

    def in_units(self, units: Units) -> MachineEnvelope:
        """Copy with travels and feed ceiling expressed in *units*."""
        if units is Units.INCH:
            return self
        return replace(
            self,
            x_travel=Units.INCH.convert(self.x_travel, units),
            y_travel=Units.INCH.convert(self.y_travel, units),
            z_travel=Units.INCH.convert(self.z_travel, units),
            max_feed=Units.INCH.convert(self.max_feed, units),
        )


@dataclass
class ValidationIssue:
    """A single validation problem found in the toolpath."""

    severity: str  # "error" or "warning"
    message: str
    motion: Optional[Motion] = None


@dataclass
class ValidationResult:
    """Result of validating a toolpath."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "error" for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(i.severity == "warning" for i in self.issues)

    @property
    def is_ok(self) -> bool:
        return len(self.issues) == 0

    @property
    def checks(self) -> list[str]:
        """Issue messages prefixed with their severity."""
        return [f"{i.severity.upper()}: {i.message}" for i in self.issues]

    def error(self, message: str, motion: Optional[Motion] = None) -> None:
        self.issues.append(ValidationIssue("error", message, motion))

    def warning(self, message: str, motion: Optional[Motion] = None) -> None:
        self.issues.append(ValidationIssue("warning", message, motion))


def _check_compensation(tp: Toolpath, result: ValidationResult) -> None:
    active = False
    for seg in tp.segments:
        for m in seg.motions:
            if m.move_type is MoveType.COMP_ON:
                if active:
                    result.error(f"{seg.label}: compensation turned on twice", m)
                active = True
            elif m.move_type is MoveType.COMP_OFF:
                if not active:
                    result.error(f"{seg.label}: compensation off without on", m)
                active = False
        if active:
            result.error(f"{seg.label}: compensation still active at end of pass")
            active = False


def _check_arcs(tp: Toolpath, result: ValidationResult) -> None:
    for seg in tp.segments:
        desc = seg.descriptor
        if desc is None or desc.radius is None:
            continue
        for m in seg.motions:
            if m.move_type is not MoveType.ARC:
                continue
            offset = m.center_offset
            if offset is None or abs(offset - abs(desc.radius)) <= ARC_TOLERANCE:
                continue
            result.warning(
                f"{seg.label}: arc centre offset {offset:.4f} differs from "
                f"pass radius {abs(desc.radius):.4f}",
                m,
            )


def _check_extents(tp: Toolpath, envelope: MachineEnvelope,
                   result: ValidationResult) -> None:
    points = sample_toolpath(tp)
    span = points.max(axis=0) - points.min(axis=0)
    for axis, travel, value in zip("XYZ", (envelope.x_travel, envelope.y_travel,
                                           envelope.z_travel), span):
        if value > travel + ARC_TOLERANCE:
            result.error(f"{axis} span {value:.4f} exceeds machine travel {travel}")


def validate_toolpath(
    tp: Toolpath,
    envelope: MachineEnvelope,
    rpm: int,
    feature_radius: Optional[float] = None,
    tool_radius: Optional[float] = None,
) -> ValidationResult:
    """Check *tp* against *envelope* and internal consistency rules.

    When *feature_radius* and *tool_radius* are given the passes are also
    checked for material left between concentric circles.
    """
    result = ValidationResult()

    if rpm < envelope.min_rpm:
        result.error(f"RPM {rpm} below machine minimum ({envelope.min_rpm})")
    if rpm > envelope.max_rpm:
        result.error(f"RPM {rpm} above machine maximum ({envelope.max_rpm})")

    if tp.is_empty:
        result.warning("Toolpath is empty, no cutting moves will be generated")
        return result

    for m in tp.iter_motions():
        if m.feed_rate is not None and m.feed_rate > envelope.max_feed:
            result.warning(
                f"Feed {m.feed_rate:.1f} exceeds machine max ({envelope.max_feed:.1f})",
                m,
            )

    _check_compensation(tp, result)
    _check_arcs(tp, result)
    _check_extents(tp, envelope, result)

    if feature_radius is not None and tool_radius is not None:
        radii = sorted({
            abs(seg.descriptor.radius) for seg in tp.segments
            if seg.descriptor is not None and seg.descriptor.radius is not None
        })
        missed = uncut_area(feature_radius, tool_radius, radii)
        if missed > UNCUT_TOLERANCE * np.pi * feature_radius ** 2:
            result.warning(
                f"Passes leave {missed:.4f} sq. units uncut; "
                "reduce stepover below the cutter diameter"
            )

    return result
