"""Tests for the delegated program generation seam."""

import pytest

from machinistmate.core.errors import DelegatedGenerationFailure
from machinistmate.generative import (
    SafeProgramRequest,
    generate_program_action,
    generate_safe_program,
)

REQUEST = SafeProgramRequest(parameter1=0.5, parameter2=3.0, parameter3=0.25)


def _good_generator(request):
    return {
        "gCode": f"(P1 {request['parameter1']})\nM30\n",
        "safetyChecks": ["Spindle speed within range"],
        "valid": True,
    }


def _failing_generator(request):
    raise RuntimeError("service unavailable")


class TestGenerateSafeProgram:
    def test_passes_request_fields(self):
        seen = {}

        def generator(request):
            seen.update(request)
            return _good_generator(request)

        result = generate_safe_program(generator, REQUEST)
        assert seen == {"parameter1": 0.5, "parameter2": 3.0, "parameter3": 0.25}
        assert result.program.startswith("(P1 0.5)")
        assert result.safety_checks == ["Spindle speed within range"]
        assert result.valid is True

    def test_snake_case_keys_accepted(self):
        result = generate_safe_program(
            lambda r: {"program": "M30", "safety_checks": [], "valid": False},
            REQUEST,
        )
        assert result.valid is False

    def test_generator_error_is_wrapped(self):
        with pytest.raises(DelegatedGenerationFailure, match="service unavailable"):
            generate_safe_program(_failing_generator, REQUEST)

    def test_malformed_result(self):
        with pytest.raises(DelegatedGenerationFailure):
            generate_safe_program(lambda r: {"gCode": "M30", "valid": True}, REQUEST)
        with pytest.raises(DelegatedGenerationFailure):
            generate_safe_program(lambda r: "M30", REQUEST)


class TestProgramAction:
    def test_success(self):
        action = generate_program_action(_good_generator, REQUEST)
        assert action.error is None
        assert action.data.valid

    def test_failure_message(self):
        action = generate_program_action(_failing_generator, REQUEST)
        assert action.data is None
        assert action.error == "Failed to generate G-code. service unavailable"
