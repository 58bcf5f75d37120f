"""Delegated program generation.

Some front ends hand three raw numbers to an external generative model
and relay whatever program and safety report it returns.  This module
only defines that seam: the request/result records, the callable shape a
generator must have, and the checks applied to what comes back.  No model
client ships with the package.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional, Protocol

from .core.errors import DelegatedGenerationFailure


@dataclass(frozen=True)
class SafeProgramRequest:
    parameter1: float
    parameter2: float
    parameter3: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SafeProgramResult:
    program: str
    safety_checks: list[str]
    valid: bool


@dataclass(frozen=True)
class ActionResult:
    """What a UI action receives: exactly one of ``data`` / ``error`` is set."""

    data: Optional[SafeProgramResult] = None
    error: Optional[str] = None


class ProgramGenerator(Protocol):
    def __call__(self, request: Mapping[str, float]) -> Mapping[str, Any]:
        ...


def _coerce_result(raw: Any) -> SafeProgramResult:
    if not isinstance(raw, Mapping):
        raise DelegatedGenerationFailure(
            f"Generator returned {type(raw).__name__}, expected a mapping"
        )

    program = raw.get("gCode", raw.get("program"))
    checks = raw.get("safetyChecks", raw.get("safety_checks"))
    valid = raw.get("valid")

    if not isinstance(program, str):
        raise DelegatedGenerationFailure("Generator result is missing the program text")
    if not isinstance(checks, (list, tuple)) or not all(isinstance(c, str) for c in checks):
        raise DelegatedGenerationFailure("Generator result has no list of safety checks")
    if not isinstance(valid, bool):
        raise DelegatedGenerationFailure("Generator result has no valid flag")

    return SafeProgramResult(program=program, safety_checks=list(checks), valid=valid)


def generate_safe_program(
    generator: ProgramGenerator,
    request: SafeProgramRequest,
) -> SafeProgramResult:
    """Call *generator* once and check the shape of its answer.

    Raises
    ------
    DelegatedGenerationFailure:
        If the generator raises or returns a malformed result.  There is
        no retry.
    """
    try:
        raw = generator(request.to_dict())
    except DelegatedGenerationFailure:
        raise
    except Exception as exc:
        raise DelegatedGenerationFailure(str(exc) or type(exc).__name__) from exc
    return _coerce_result(raw)


def generate_program_action(
    generator: ProgramGenerator,
    request: SafeProgramRequest,
) -> ActionResult:
    """UI-facing wrapper: failures become a user-visible message."""
    try:
        return ActionResult(data=generate_safe_program(generator, request))
    except DelegatedGenerationFailure as exc:
        return ActionResult(error=f"Failed to generate G-code. {exc}")
