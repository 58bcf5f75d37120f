"""Validation boundary between raw form input and the planner.

Each ``parse_*_form`` takes the submitted field values (strings or
numbers, keyed by field name), coerces them, applies per-field and
cross-field rules and returns an immutable operation record.  All
problems are collected and raised together as one
:class:`ConstraintViolation` whose ``field_errors`` carry one message per
field.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from .core.direction import CutDirection, ThreadHand
from .core.errors import ConstraintViolation
from .core.operation import DrillOperation, PocketOperation, ThreadMillOperation
from .core.toolpath.passes import MAX_RADIAL_PASSES, MIN_RADIAL_PASSES

POSITIVE = "Must be positive."
POSITIVE_INT = "Must be a positive integer."
NUMBER = "Expected a number."


class _Form:
    """Collects coerced values and field errors for one submission."""

    def __init__(self, raw: Mapping[str, Any]):
        self.raw = raw
        self.errors: dict[str, str] = {}

    def _coerce(self, name: str) -> Optional[float]:
        value = self.raw.get(name)
        if isinstance(value, str):
            value = value.strip()
        try:
            num = float(value)
        except (TypeError, ValueError):
            self.errors[name] = NUMBER
            return None
        if math.isnan(num) or math.isinf(num):
            self.errors[name] = NUMBER
            return None
        return num

    def positive(self, name: str) -> Optional[float]:
        num = self._coerce(name)
        if num is not None and num <= 0:
            self.errors[name] = POSITIVE
            return None
        return num

    def positive_int(self, name: str) -> Optional[int]:
        num = self._coerce(name)
        if num is None:
            return None
        if num <= 0 or not num.is_integer():
            self.errors[name] = POSITIVE_INT
            return None
        return int(num)

    def optional_positive(self, name: str) -> Optional[float]:
        if self.raw.get(name) in (None, ""):
            return None
        return self.positive(name)

    def choice(self, name: str, enum_cls, default):
        value = self.raw.get(name)
        if value in (None, ""):
            return default
        if isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(e.value for e in enum_cls)
            self.errors[name] = f"Must be one of: {allowed}."
            return default

    def flag(self, name: str, default: bool) -> bool:
        value = self.raw.get(name)
        if value in (None, ""):
            return default
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in ("on", "true", "yes", "1"):
            return True
        if text in ("off", "false", "no", "0"):
            return False
        self.errors[name] = "Must be on or off."
        return default

    def require(self, ok: bool, name: str, message: str) -> None:
        if not ok and name not in self.errors:
            self.errors[name] = message

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise ConstraintViolation(self.errors)


def parse_pocket_form(raw: Mapping[str, Any]) -> PocketOperation:
    form = _Form(raw)
    cutter = form.positive("cutter_diameter")
    circle = form.positive("circle_diameter")
    speed = form.positive_int("speed")
    feed = form.positive("feed")
    depth = form.positive("depth")
    stepover = form.positive("stepover")
    per_pass = form.optional_positive("depth_per_pass")
    direction = form.choice("direction", CutDirection, CutDirection.CLIMB)
    tool_number = form.positive_int("tool_number") if "tool_number" in raw else 1
    coolant = form.flag("coolant", False)

    if depth is not None and per_pass is not None:
        form.require(depth >= per_pass, "depth",
                     "Total depth must be at least the depth per pass.")
    form.raise_if_invalid()

    return PocketOperation(
        cutter_diameter=cutter,
        circle_diameter=circle,
        speed=speed,
        feed=feed,
        depth=depth,
        stepover=stepover,
        depth_per_pass=per_pass,
        direction=direction,
        tool_number=tool_number,
        coolant=coolant,
    )


def parse_thread_form(raw: Mapping[str, Any]) -> ThreadMillOperation:
    form = _Form(raw)
    tool = form.positive("tool_diameter")
    major = form.positive("major_diameter")
    minor = form.positive("minor_diameter")
    depth = form.positive("thread_depth")
    speed = form.positive_int("speed")
    feed = form.positive("feed")
    pitch = form.optional_positive("pitch")
    tpi = form.optional_positive("tpi")
    hand = form.choice("hand", ThreadHand, ThreadHand.RIGHT)
    passes = form.positive_int("passes") if "passes" in raw else 1
    tool_number = form.positive_int("tool_number") if "tool_number" in raw else 1
    coolant = form.flag("coolant", False)

    if major is not None and minor is not None:
        form.require(major > minor, "major_diameter",
                     "Major diameter must be larger than minor diameter.")
    if passes is not None:
        form.require(MIN_RADIAL_PASSES <= passes <= MAX_RADIAL_PASSES, "passes",
                     f"Must be between {MIN_RADIAL_PASSES} and {MAX_RADIAL_PASSES}.")
    if "pitch" not in form.errors and "tpi" not in form.errors:
        form.require(pitch is not None or tpi is not None, "pitch",
                     "Either pitch or TPI is required.")
    form.raise_if_invalid()

    return ThreadMillOperation(
        tool_diameter=tool,
        major_diameter=major,
        minor_diameter=minor,
        thread_depth=depth,
        speed=speed,
        feed=feed,
        pitch=pitch,
        tpi=tpi,
        hand=hand,
        passes=passes,
        tool_number=tool_number,
        coolant=coolant,
    )


def parse_drill_form(raw: Mapping[str, Any]) -> DrillOperation:
    form = _Form(raw)
    speed = form.positive_int("speed")
    feed = form.positive("feed")
    tool_number = form.positive_int("tool_number")
    hole = form.positive("hole_diameter")
    peck = form.positive("peck")
    r_plane = form.positive("r_plane")
    depth = form.positive("total_depth")
    coolant = form.flag("coolant", True)
    canned = form.flag("canned_cycle", True)

    if depth is not None and peck is not None:
        form.require(depth >= peck, "total_depth",
                     "Total depth must be at least the peck amount.")
    form.raise_if_invalid()

    return DrillOperation(
        hole_diameter=hole,
        peck=peck,
        r_plane=r_plane,
        total_depth=depth,
        speed=speed,
        feed=feed,
        tool_number=tool_number,
        coolant=coolant,
        canned_cycle=canned,
    )
