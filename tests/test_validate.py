"""Tests for toolpath safety validation."""

import pytest

from machinistmate.core.direction import CompSide
from machinistmate.core.operation import PocketOperation, ThreadMillOperation
from machinistmate.core.toolpath.base import Toolpath, ToolpathSegment, comp_on, feed
from machinistmate.core.toolpath.pocket import generate_pocket_toolpath
from machinistmate.core.toolpath.threadmill import generate_threadmill_toolpath
from machinistmate.core.toolpath.utils import sample_toolpath, uncut_area
from machinistmate.gcode.validate import MachineEnvelope, validate_toolpath


@pytest.fixture
def small_envelope() -> MachineEnvelope:
    return MachineEnvelope(
        x_travel=10.0, y_travel=6.0, z_travel=10.0,
        min_rpm=100, max_rpm=10000, max_feed=110.0,
    )


def _pocket(**overrides) -> PocketOperation:
    params = dict(cutter_diameter=0.5, circle_diameter=2.5, speed=3000,
                  feed=20.0, depth=0.25, stepover=0.2)
    params.update(overrides)
    return PocketOperation(**params)


def _validate_pocket(op: PocketOperation, envelope: MachineEnvelope):
    tp = generate_pocket_toolpath(op)
    return validate_toolpath(
        tp, envelope, rpm=op.speed,
        feature_radius=op.circle_diameter / 2,
        tool_radius=op.cutter_diameter / 2,
    )


class TestValidation:
    def test_valid_pocket_passes(self, small_envelope):
        result = _validate_pocket(_pocket(), small_envelope)
        assert result.is_ok, result.checks

    def test_rpm_too_low(self, small_envelope):
        result = _validate_pocket(_pocket(speed=50), small_envelope)
        assert result.has_errors

    def test_rpm_too_high(self, small_envelope):
        result = _validate_pocket(_pocket(speed=15000), small_envelope)
        assert result.has_errors

    def test_feed_too_high_is_warning(self, small_envelope):
        result = _validate_pocket(_pocket(feed=200.0), small_envelope)
        assert result.has_warnings
        assert not result.has_errors

    def test_travel_exceeded(self, small_envelope):
        op = _pocket(circle_diameter=12.0, stepover=2.0)
        tp = generate_pocket_toolpath(op)
        result = validate_toolpath(tp, small_envelope, rpm=3000)
        assert result.has_errors
        assert any("X span" in i.message for i in result.issues)

    def test_wide_stepover_leaves_material(self, small_envelope):
        result = _validate_pocket(_pocket(stepover=0.6), small_envelope)
        assert result.has_warnings
        assert any("uncut" in i.message for i in result.issues)

    def test_unbalanced_compensation_is_error(self, small_envelope):
        seg = ToolpathSegment(label="bad pass")
        seg.append(feed(z=-0.1, f=10.0))
        seg.append(comp_on(CompSide.LEFT, 1, x=0.5, y=0.0, f=20.0))
        tp = Toolpath(segments=[seg])
        result = validate_toolpath(tp, small_envelope, rpm=3000)
        assert result.has_errors
        assert any("compensation" in i.message for i in result.issues)

    def test_thread_i_value_divergence_is_flagged(self, small_envelope):
        # Helix centre offset (limit / passes) disagrees with the pass
        # radius; validation reports it rather than the planner fixing it.
        op = ThreadMillOperation(
            tool_diameter=0.4, major_diameter=0.5, minor_diameter=0.45,
            thread_depth=0.5, speed=4000, feed=15.0, tpi=20, passes=3,
        )
        tp = generate_threadmill_toolpath(op, step_limit=1.0)
        result = validate_toolpath(tp, small_envelope, rpm=op.speed)
        assert not result.has_errors
        assert any("centre offset" in i.message for i in result.issues)

    def test_empty_toolpath_is_warning(self, small_envelope):
        tp = Toolpath(segments=[], operation_name="empty")
        result = validate_toolpath(tp, small_envelope, rpm=3000)
        assert result.has_warnings


class TestGeometryHelpers:
    def test_full_coverage(self):
        assert uncut_area(1.25, 0.25, [0.2, 0.4, 0.6, 0.8, 1.0]) == pytest.approx(0.0, abs=1e-6)

    def test_no_passes_leaves_everything(self):
        assert uncut_area(1.0, 0.25, []) == pytest.approx(3.14, rel=0.01)

    def test_sampled_pocket_stays_inside_feature(self):
        tp = generate_pocket_toolpath(_pocket())
        points = sample_toolpath(tp)
        radial = (points[:, 0] ** 2 + points[:, 1] ** 2) ** 0.5
        assert radial.max() == pytest.approx(1.0, abs=1e-6)
        assert points[:, 2].min() == pytest.approx(-0.25)
