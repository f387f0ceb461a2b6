"""Tests for the arc converter."""

import math

import numpy as np
import pytest
from svgpathtools import Arc

from pathnorm.config import ConversionConfig
from pathnorm.errors import InvalidArcError
from pathnorm.svg.arc import (
    MAX_ARC_STEPS,
    ArcParameters,
    arc_to_quadratics,
    center_parameterization,
    quadratic_deviation,
    segment_count,
)
from pathnorm.svg.commands import LineTo, Point, QuadTo
from pathnorm.utils.geometry import max_radial_deviation, quadratic_points

ARCS = [
    ArcParameters(Point(0, 0), Point(10, 0), 5, 5, 0, False, True),
    ArcParameters(Point(0, 0), Point(10, 0), 5, 5, 0, False, False),
    ArcParameters(Point(3, 4), Point(-7, 12), 9, 4, 30, True, False),
    ArcParameters(Point(3, 4), Point(-7, 12), 9, 4, 30, True, True),
    ArcParameters(Point(0.1, 0.2), Point(0.3, 0.7), 0.05, 0.05, 0, False, True),  # radii scaled up
    ArcParameters(Point(100, 50), Point(120, 80), 40, 15, -60, False, True),
]


def _approximation_points(params: ArcParameters, commands) -> np.ndarray:
    chunks = []
    start = params.start
    for cmd in commands:
        chunks.append(quadratic_points(start, cmd.c, cmd.end, 64))
        start = cmd.end
    return np.vstack(chunks)


def _deviation(params: ArcParameters, config: ConversionConfig) -> float:
    arc = center_parameterization(params)
    pts = _approximation_points(params, arc_to_quadratics(params, config))
    return max_radial_deviation(pts, arc.center, arc.rx, arc.ry, arc.phi)


@pytest.mark.parametrize("params", ARCS)
def test_last_endpoint_is_exact(params):
    for config in (ConversionConfig(bezier_steps=7), ConversionConfig(tolerance=1e-3)):
        commands = arc_to_quadratics(params, config)
        assert commands
        assert all(isinstance(c, QuadTo) for c in commands)
        assert commands[-1].end == params.end


def test_semicircle_center_and_sweep():
    arc = center_parameterization(ArcParameters(Point(0, 0), Point(10, 0), 5, 5, 0, False, True))
    assert arc.center == pytest.approx(Point(5, 0))
    assert arc.sweep_angle == pytest.approx(math.pi)

    arc = center_parameterization(ArcParameters(Point(0, 0), Point(10, 0), 5, 5, 0, False, False))
    assert arc.sweep_angle == pytest.approx(-math.pi)


def test_semicircle_passes_through_top():
    commands = arc_to_quadratics(
        ArcParameters(Point(0, 0), Point(10, 0), 5, 5, 0, False, True),
        ConversionConfig(bezier_steps=2),
    )
    assert len(commands) == 2
    # positive sweep runs through decreasing y in these coordinates
    assert commands[0].end == pytest.approx(Point(5, -5))


def test_quarter_circle_control_is_tangent_intersection():
    commands = arc_to_quadratics(
        ArcParameters(Point(10, 0), Point(0, 10), 10, 10, 0, False, True),
        ConversionConfig(bezier_steps=1),
    )
    assert len(commands) == 1
    assert commands[0].c == pytest.approx(Point(10, 10))


def test_small_radii_are_scaled_up():
    arc = center_parameterization(ArcParameters(Point(0, 0), Point(100, 0), 1, 1, 0, False, True))
    assert arc.rx == pytest.approx(50)
    assert arc.ry == pytest.approx(50)
    assert arc.center == pytest.approx(Point(50, 0))


def test_large_arc_flag_picks_the_long_way():
    small = center_parameterization(ArcParameters(Point(0, 0), Point(10, 0), 10, 10, 0, False, True))
    large = center_parameterization(ArcParameters(Point(0, 0), Point(10, 0), 10, 10, 0, True, True))
    assert 0 < small.sweep_angle < math.pi
    assert math.pi < large.sweep_angle <= 2 * math.pi
    assert small.sweep_angle + large.sweep_angle == pytest.approx(2 * math.pi)


@pytest.mark.parametrize("params", ARCS)
def test_matches_svgpathtools_arc(params):
    reference = Arc(
        complex(*params.start),
        complex(params.rx, params.ry),
        params.rotation,
        params.large_arc,
        params.sweep,
        complex(*params.end),
    )
    arc = center_parameterization(params)
    assert complex(*arc.center) == pytest.approx(reference.center, abs=1e-9)
    assert math.degrees(arc.sweep_angle) == pytest.approx(reference.delta, abs=1e-7)

    n = 6
    commands = arc_to_quadratics(params, ConversionConfig(bezier_steps=n))
    for i, cmd in enumerate(commands):
        expected = reference.point((i + 1) / n)
        assert complex(*cmd.end) == pytest.approx(expected, abs=1e-7)


def test_zero_length_arc():
    assert arc_to_quadratics(ArcParameters(Point(2, 2), Point(2, 2), 5, 5)) == []


def test_zero_radius_is_line():
    assert arc_to_quadratics(ArcParameters(Point(0, 0), Point(10, 10), 0, 5)) == [LineTo(Point(10, 10))]
    assert arc_to_quadratics(ArcParameters(Point(0, 0), Point(10, 10), 5, 0)) == [LineTo(Point(10, 10))]


def test_radii_are_magnitudes():
    params = ArcParameters(Point(0, 0), Point(1, 1), -3, -4)
    assert (params.rx, params.ry) == (3, 4)


@pytest.mark.parametrize(
    "rx, ry, rotation",
    [(math.nan, 1, 0), (1, math.inf, 0), (1, 1, -math.inf), (1, 1, math.nan)],
)
def test_non_finite_parameters(rx, ry, rotation):
    with pytest.raises(InvalidArcError):
        arc_to_quadratics(ArcParameters(Point(0, 0), Point(1, 1), rx, ry, rotation))


def test_fixed_steps_are_used_as_given():
    params = ArcParameters(Point(10, 0), Point(0, 10), 10, 10, 0, False, True)
    assert len(arc_to_quadratics(params, ConversionConfig(bezier_steps=8))) == 8


def test_fixed_steps_raised_for_wide_sweeps():
    assert segment_count(math.pi, 5, 5, ConversionConfig(bezier_steps=1)) == 2
    assert segment_count(1.9 * math.pi, 5, 5, ConversionConfig(bezier_steps=1)) == 4
    assert segment_count(-1.9 * math.pi, 5, 5, ConversionConfig(bezier_steps=6)) == 6


def test_tolerance_count_grows_as_tolerance_shrinks():
    counts = [segment_count(1.5 * math.pi, 20, 8, ConversionConfig(tolerance=t)) for t in (1.0, 0.1, 0.01, 0.001)]
    assert counts == sorted(counts)
    assert counts[0] < counts[-1]


def test_tolerance_count_is_capped():
    assert segment_count(2 * math.pi, 1e9, 1e9, ConversionConfig(tolerance=1e-12)) == MAX_ARC_STEPS


def test_tolerance_is_met_on_circle():
    params = ArcParameters(Point(0, 0), Point(20, 0), 10, 10, 0, True, True)
    for tolerance in (0.5, 0.05, 0.005):
        config = ConversionConfig(tolerance=tolerance)
        assert _deviation(params, config) * 10 <= tolerance + 1e-12


def test_tolerance_is_met_on_ellipse():
    params = ArcParameters(Point(3, 4), Point(-7, 12), 9, 4, 30, True, False)
    arc = center_parameterization(params)
    config = ConversionConfig(tolerance=0.01)
    assert _deviation(params, config) * max(arc.rx, arc.ry) <= 0.01 + 1e-12


@pytest.mark.parametrize("params", ARCS)
def test_more_steps_never_increase_deviation(params):
    deviations = [_deviation(params, ConversionConfig(bezier_steps=n)) for n in (1, 2, 4, 8, 16, 32)]
    for coarse, fine in zip(deviations, deviations[1:]):
        assert fine <= coarse + 1e-12


def test_quadratic_deviation_matches_midpoint_gap():
    # quarter circle, control at (10, 10): curve midpoint is (7.5, 7.5)
    expected = math.hypot(7.5, 7.5) - 10
    assert quadratic_deviation(math.pi / 2, 10) == pytest.approx(expected)


@pytest.mark.parametrize("params, sweep", [(ARCS[2], -math.pi), (ARCS[3], math.pi)])
def test_scaled_radii_center_on_chord_midpoint(params, sweep):
    arc = center_parameterization(params)
    assert arc.center == Point(-2, 8)
    assert arc.sweep_angle == sweep


def test_tiny_radii_scale_to_the_chord():
    params = ArcParameters(Point(0, 0), Point(10, 0), 1e-170, 1e-170, 0, False, True)
    arc = center_parameterization(params)
    assert (arc.rx, arc.ry) == (5, 5)
    assert arc.center == Point(5, 0)

    commands = arc_to_quadratics(params, ConversionConfig(bezier_steps=4))
    assert all(isinstance(c, QuadTo) for c in commands)
    assert commands[1].end == pytest.approx(Point(5, -5))
    assert commands[-1].end == Point(10, 0)


def test_huge_radii_stay_close_to_the_chord():
    params = ArcParameters(Point(0, 0), Point(10, 0), 1e200, 1e200, 0, False, True)
    arc = center_parameterization(params)
    assert 0 < arc.sweep_angle < 1e-190

    commands = arc_to_quadratics(params, ConversionConfig(bezier_steps=4))
    assert len(commands) == 4
    for i, cmd in enumerate(commands):
        assert cmd.end == pytest.approx(Point(2.5 * (i + 1), 0), abs=1e-9)
        assert cmd.c == pytest.approx(Point(2.5 * i + 1.25, 0), abs=1e-9)


def test_flat_ellipse_is_line():
    params = ArcParameters(Point(0, 0), Point(10, 10), 1e-200, 1e200)
    assert center_parameterization(params) is None
    assert arc_to_quadratics(params) == [LineTo(Point(10, 10))]
