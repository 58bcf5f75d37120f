"""Exception types raised by the planner and its boundaries."""

from __future__ import annotations


class MachinistMateError(Exception):
    """Base class for all machinistmate errors."""


class GeometryInfeasible(MachinistMateError):
    """The cutter cannot fit inside the target feature."""


class ConstraintViolation(MachinistMateError):
    """One or more input fields failed validation.

    ``field_errors`` maps the offending field name to a user-facing message.
    """

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        detail = "; ".join(f"{k}: {v}" for k, v in self.field_errors.items())
        super().__init__(detail or "Invalid parameters")


class DelegatedGenerationFailure(MachinistMateError):
    """The external program generator failed or returned a malformed result."""
