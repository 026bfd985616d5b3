"""
Tests for direction field sampling, display scaling and curve tracing.
"""

import math

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def field_request(expr="0", **overrides):
    from eulerfield.models import FieldRequest

    values = dict(
        expression=expr,
        x0=0.0,
        y0=0.0,
        x_end=4.0,
        y_end=2.0,
        x_step=1.0,
        y_step=1.0,
        precision=2,
    )
    values.update(overrides)
    return FieldRequest(**values)


class TestDisplayScaling:
    """Tests for the square display mapping."""

    def test_scale_and_mapping(self):
        """Test y is stretched so the y range matches the x range."""
        from eulerfield.solvers.direction_field import DisplayScaling

        scaling = DisplayScaling(0.0, 1.0, 4.0, 3.0)

        assert scaling.y_scale == 2.0
        assert scaling.map_y(1.0) == 1.0
        assert scaling.map_y(3.0) == 5.0
        assert scaling.y_top == 5.0

    def test_sample_step_in_data_space(self):
        """Test a display-space y step is converted to data space."""
        from eulerfield.solvers.direction_field import DisplayScaling

        scaling = DisplayScaling(0.0, 0.0, 4.0, 2.0)

        assert scaling.sample_step(1.0) == 0.5

    def test_zero_width_domain(self):
        """Test a zero x range gives one sample per column."""
        from eulerfield.solvers.direction_field import DisplayScaling

        scaling = DisplayScaling(1.0, 0.0, 1.0, 2.0)

        assert scaling.y_scale == 0.0
        assert scaling.sample_step(1.0) == math.inf

    def test_segment_uses_scaled_slope(self):
        """Test a unit data slope is drawn with slope y_scale on screen."""
        from eulerfield.solvers.direction_field import DisplayScaling

        scaling = DisplayScaling(0.0, 0.0, 4.0, 2.0)
        sample = scaling.segment(1.0, 0.5, 1.0)

        assert sample.center_x == 1.0
        assert sample.center_y == 1.0
        assert sample.half_dx == pytest.approx(1 / math.sqrt(5))
        assert sample.half_dy == pytest.approx(2 / math.sqrt(5))
        assert sample.half_dy / sample.half_dx == pytest.approx(2.0)


class TestDirectionFieldSolver:
    """Tests for grid sampling."""

    def test_sample_count(self):
        """Test the grid size matches the stepping formula."""
        from eulerfield.solvers.direction_field import DirectionFieldSolver

        field = DirectionFieldSolver().solve(field_request())

        # (floor(4 / 1) + 1) * (floor(2 / (1 / 2)) + 1)
        assert len(field.samples) == 25

    def test_sample_count_with_inexact_steps(self):
        """Test accumulated floating point error does not drop boundary points."""
        from eulerfield.solvers.direction_field import sample_field

        samples = sample_field("x*y", 0, 0, 1, 1, 0.1, 0.1, 3)

        assert len(samples) == 11 * 11

    def test_grid_order_and_positions(self):
        """Test columns are sampled left to right, bottom to top."""
        from eulerfield.solvers.direction_field import DirectionFieldSolver

        field = DirectionFieldSolver().solve(field_request())
        first_column = field.samples[:5]

        assert [s.center_x for s in first_column] == [0.0] * 5
        assert [s.center_y for s in first_column] == [0.0, 1.0, 2.0, 3.0, 4.0]
        assert field.samples[5].center_x == 1.0

    def test_constant_segment_length(self):
        """Test every segment is two display units long whatever the slope."""
        from eulerfield.solvers.direction_field import sample_field

        samples = sample_field("x*y - 3", -2, -1, 2, 3, 0.5, 0.5, 2)

        for s in samples:
            assert math.hypot(2 * s.half_dx, 2 * s.half_dy) == pytest.approx(2.0)

    def test_horizontal_segments(self):
        """Test zero slope gives horizontal segments centred on the grid point."""
        from eulerfield.solvers.direction_field import sample_field

        samples = sample_field("0", 0, 0, 2, 2, 1, 1, 1)

        assert all(s.half_dx == 1.0 and s.half_dy == 0.0 for s in samples)
        assert samples[0].start == (-1.0, 0.0)
        assert samples[0].end == (1.0, 0.0)

    def test_axis_geometry(self):
        """Test y_scale and y_top are reported for rendering."""
        from eulerfield.solvers.direction_field import DirectionFieldSolver

        field = DirectionFieldSolver().solve(field_request(y0=1.0, y_end=3.0))

        assert field.y_scale == 2.0
        assert field.y_top == 5.0
        assert field.curve == ()


class TestDirectionFieldValidation:
    """Tests for rejected domains and steps."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"x_step": 0.0},
            {"y_step": -1.0},
            {"y_end": 0.0},
            {"x_end": -1.0},
            {"y_end": -1.0},
            {"x_end": float("nan")},
            {"precision": -2},
        ],
    )
    def test_rejected(self, overrides):
        """Test degenerate or inverted requests raise ValidationError."""
        from eulerfield.solvers.direction_field import DirectionFieldSolver
        from eulerfield.utils.errors import ValidationError

        with pytest.raises(ValidationError):
            DirectionFieldSolver().solve(field_request(**overrides))

    def test_zero_curve_step(self):
        """Test a curve step that rounds to zero is rejected."""
        from eulerfield.solvers.direction_field import DirectionFieldSolver
        from eulerfield.utils.errors import ValidationError

        request = field_request(plot_curve=True, curve_step=0.001)

        with pytest.raises(ValidationError):
            DirectionFieldSolver().solve(request)

    def test_curve_step_ignored_without_curve(self):
        """Test the curve step is only checked when a curve is requested."""
        from eulerfield.solvers.direction_field import DirectionFieldSolver

        field = DirectionFieldSolver().solve(field_request(curve_step=0.0))

        assert len(field.samples) == 25

    def test_bad_expression(self):
        """Test malformed expressions fail before sampling."""
        from eulerfield.solvers.direction_field import DirectionFieldSolver
        from eulerfield.utils.errors import ExpressionError

        with pytest.raises(ExpressionError):
            DirectionFieldSolver().solve(field_request("x +"))


class TestCurveTrace:
    """Tests for the overlaid Euler curve."""

    def test_defaults_to_field_origin(self):
        """Test the curve starts at (x0, y0) and steps by x_step by default."""
        from eulerfield.models import FieldRequest

        request = FieldRequest("0", 0.0, 1.0, 4.0, 2.0, 0.5, 1.0, 2, plot_curve=True)

        assert request.curve_x0 == 0.0
        assert request.curve_y0 == 1.0
        assert request.curve_step == 0.5

    def test_flat_curve(self):
        """Test a zero slope traces a horizontal, display-mapped line."""
        from eulerfield.solvers.direction_field import DirectionFieldSolver

        request = field_request(plot_curve=True, curve_step=1.0, curve_y0=1.0)
        field = DirectionFieldSolver().solve(request)

        assert [p.x for p in field.curve] == [0.0, 1.0, 2.0, 3.0, 4.0]
        assert all(p.y == 2.0 for p in field.curve)

    def test_stops_when_leaving_domain(self):
        """Test the trace ends once y leaves [y0, y_end]."""
        from eulerfield.solvers.direction_field import trace_curve

        curve = trace_curve("1", 0, 0, 4, 2, 1, 2)

        assert [(p.x, p.y) for p in curve] == [(0.0, 0.0), (1.0, 2.0), (2.0, 4.0)]

    def test_start_outside_domain(self):
        """Test a start point above the field gives an empty curve."""
        from eulerfield.solvers.direction_field import trace_curve

        curve = trace_curve("0", 0, 0, 4, 2, 1, 2, curve_x0=0, curve_y0=5)

        assert curve == ()

    def test_curve_values_rounded(self):
        """Test the trace re-rounds like the step table."""
        from eulerfield.solvers.direction_field import trace_curve
        from eulerfield.solvers.euler import run

        curve = trace_curve("0.3*(300-y)", 0, 0, 0.2, 300, 0.1, 2)
        records = run("0.3*(300-y)", 0.1, 0, 0, 0.2, 2)

        # y_scale = 0.2 / 300, so map back to data space to compare
        y_scale = 0.2 / 300
        assert [p.x for p in curve] == [r.x for r in records]
        for point, record in zip(curve, records):
            assert point.y == pytest.approx(record.y * y_scale)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
