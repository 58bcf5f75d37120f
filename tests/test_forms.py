"""Tests for form parsing and field validation."""

import pytest

from machinistmate.core.direction import CutDirection, ThreadHand
from machinistmate.core.errors import ConstraintViolation
from machinistmate.forms import (
    NUMBER,
    POSITIVE,
    POSITIVE_INT,
    parse_drill_form,
    parse_pocket_form,
    parse_thread_form,
)

POCKET_FORM = {
    "cutter_diameter": "0.5",
    "circle_diameter": "3.0",
    "speed": "3000",
    "feed": "20",
    "depth": "0.25",
    "stepover": "0.2",
}

THREAD_FORM = {
    "tool_diameter": "0.4",
    "major_diameter": "0.5",
    "minor_diameter": "0.4375",
    "thread_depth": "0.5",
    "speed": "4000",
    "feed": "15",
    "tpi": "20",
}

DRILL_FORM = {
    "hole_diameter": "0.25",
    "peck": "0.1",
    "r_plane": "0.1",
    "total_depth": "0.5",
    "speed": "1500",
    "feed": "10",
    "tool_number": "2",
}


def _errors(parse, form) -> dict:
    with pytest.raises(ConstraintViolation) as exc_info:
        parse(form)
    return exc_info.value.field_errors


class TestPocketForm:
    def test_parses_strings(self):
        op = parse_pocket_form(POCKET_FORM)
        assert op.cutter_diameter == 0.5
        assert op.speed == 3000
        assert op.direction is CutDirection.CLIMB
        assert op.depth_per_pass is None
        assert op.tool_number == 1

    def test_negative_value(self):
        errors = _errors(parse_pocket_form, {**POCKET_FORM, "cutter_diameter": "-1"})
        assert errors == {"cutter_diameter": POSITIVE}

    def test_missing_and_garbage(self):
        form = {**POCKET_FORM, "feed": "fast"}
        del form["stepover"]
        errors = _errors(parse_pocket_form, form)
        assert errors == {"feed": NUMBER, "stepover": NUMBER}

    def test_fractional_speed(self):
        errors = _errors(parse_pocket_form, {**POCKET_FORM, "speed": "2999.5"})
        assert errors == {"speed": POSITIVE_INT}

    def test_depth_per_pass_exceeds_depth(self):
        errors = _errors(parse_pocket_form, {**POCKET_FORM, "depth_per_pass": "0.5"})
        assert errors == {"depth": "Total depth must be at least the depth per pass."}

    def test_direction_choice(self):
        op = parse_pocket_form({**POCKET_FORM, "direction": "Conventional"})
        assert op.direction is CutDirection.CONVENTIONAL

    def test_bad_direction(self):
        errors = _errors(parse_pocket_form, {**POCKET_FORM, "direction": "sideways"})
        assert "direction" in errors

    def test_geometry_is_not_checked_here(self):
        # cutter vs circle is a planning error, not a field error
        op = parse_pocket_form({**POCKET_FORM, "cutter_diameter": "4"})
        assert op.cutter_diameter == 4.0


class TestThreadForm:
    def test_parses_strings(self):
        op = parse_thread_form(THREAD_FORM)
        assert op.hand is ThreadHand.RIGHT
        assert op.passes == 1
        assert op.resolved_pitch == pytest.approx(0.05)

    def test_major_not_above_minor(self):
        errors = _errors(parse_thread_form, {**THREAD_FORM, "major_diameter": "0.4"})
        assert errors == {
            "major_diameter": "Major diameter must be larger than minor diameter.",
        }

    def test_passes_out_of_range(self):
        errors = _errors(parse_thread_form, {**THREAD_FORM, "passes": "6"})
        assert errors == {"passes": "Must be between 1 and 5."}

    def test_pitch_or_tpi_required(self):
        form = dict(THREAD_FORM)
        del form["tpi"]
        errors = _errors(parse_thread_form, form)
        assert errors == {"pitch": "Either pitch or TPI is required."}

    def test_left_hand(self):
        op = parse_thread_form({**THREAD_FORM, "hand": "lh", "passes": 3})
        assert op.hand is ThreadHand.LEFT
        assert op.passes == 3


class TestDrillForm:
    def test_parses_strings(self):
        op = parse_drill_form(DRILL_FORM)
        assert op.tool_number == 2
        assert op.coolant is True
        assert op.canned_cycle is True

    def test_tool_number_required(self):
        form = dict(DRILL_FORM)
        del form["tool_number"]
        errors = _errors(parse_drill_form, form)
        assert errors == {"tool_number": NUMBER}

    def test_depth_below_peck(self):
        errors = _errors(parse_drill_form, {**DRILL_FORM, "total_depth": "0.05"})
        assert errors == {"total_depth": "Total depth must be at least the peck amount."}

    def test_coolant_off(self):
        op = parse_drill_form({**DRILL_FORM, "coolant": "off"})
        assert op.coolant is False

    def test_all_errors_reported_together(self):
        errors = _errors(parse_drill_form, {**DRILL_FORM, "peck": "0", "feed": ""})
        assert set(errors) == {"peck", "feed"}
