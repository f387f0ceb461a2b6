"""Arc converter: elliptical arc (endpoint form) -> absolute quadratic beziers.

Steps:
  1. degenerate cases (non-finite -> error, zero length -> nothing, zero radius -> line)
  2. endpoint -> center parameterization, scaling radii up when they cannot span the chord
  3. signed sweep chosen by the large-arc and sweep flags
  4. equal sub-sweeps, count from a fixed step policy or a deviation tolerance
  5. one Q per sub-sweep, control point at the intersection of the end tangents
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from pathnorm.config import ConversionConfig
from pathnorm.errors import InvalidArcError
from pathnorm.svg.commands import Command, LineTo, Point, QuadTo
from pathnorm.utils.geometry import ellipse_offsets

logger = logging.getLogger(__name__)

# Tangent lines at the ends of a half-turn sub-arc are parallel; stay at a quarter turn or less.
MAX_SEGMENT_SWEEP = math.pi / 2

# Upper bound on segments per arc under the tolerance policy
MAX_ARC_STEPS = 1024


@dataclass(frozen=True)
class ArcParameters:
    """Elliptical arc in path-data (endpoint) form, all coordinates absolute."""

    start: Point
    end: Point
    rx: float
    ry: float
    rotation: float = 0.0  # degrees
    large_arc: bool = False
    sweep: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", Point(*self.start))
        object.__setattr__(self, "end", Point(*self.end))
        # Radius sign carries no meaning in the arc grammar
        object.__setattr__(self, "rx", abs(self.rx))
        object.__setattr__(self, "ry", abs(self.ry))


@dataclass(frozen=True)
class CenterArc:
    """Same arc in center form: angles in radians on the unrotated ellipse."""

    center: Point
    rx: float
    ry: float
    phi: float
    start_angle: float
    sweep_angle: float


def _angle_between(ux: float, uy: float, vx: float, vy: float) -> float:
    return math.atan2(ux * vy - uy * vx, ux * vx + uy * vy)


def center_parameterization(params: ArcParameters) -> CenterArc | None:
    """Convert a non-degenerate endpoint arc to center form.

    Radii too small to reach from start to end are scaled up uniformly until
    the chord fits, which puts the center exactly on the chord midpoint.
    Everything is computed from the ratios x1'/rx and y1'/ry, so radii near
    the float limits neither overflow nor underflow. Returns None when the
    ellipse is numerically flat (radius ratio or chord below float resolution).
    """
    x0, y0 = params.start
    x, y = params.end
    rx, ry = params.rx, params.ry

    phi = math.radians(params.rotation)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)

    # Start point in the ellipse-aligned frame, relative to the chord midpoint
    dx2 = (x0 - x) / 2.0
    dy2 = (y0 - y) / 2.0
    x1p = cos_phi * dx2 + sin_phi * dy2
    y1p = -sin_phi * dx2 + cos_phi * dy2

    # Smallest radii with the same proportions that still span the chord
    if rx <= ry:
        q = rx / ry
        if q == 0.0:
            return None
        rx_fit = math.hypot(x1p, y1p * q)
        ry_fit = rx_fit / q
    else:
        q = ry / rx
        if q == 0.0:
            return None
        ry_fit = math.hypot(x1p * q, y1p)
        rx_fit = ry_fit / q
    if math.isinf(max(rx_fit, ry_fit)):
        return None

    sign = -1.0 if params.large_arc == params.sweep else 1.0
    if rx_fit >= rx:
        rx, ry = rx_fit, ry_fit
        a, b = x1p / rx, y1p / ry
        kx = ky = 0.0
    else:
        a, b = x1p / rx, y1p / ry
        r = math.hypot(a, b)
        if r == 0.0:
            return None
        coef = sign * math.sqrt((1.0 - r) * (1.0 + r))
        kx = coef * (b / r)
        ky = -coef * (a / r)

    # Center in the aligned frame is (kx * rx, ky * ry)
    cxp, cyp = kx * rx, ky * ry
    cx = cos_phi * cxp - sin_phi * cyp + (x0 + x) / 2.0
    cy = sin_phi * cxp + cos_phi * cyp + (y0 + y) / 2.0

    ux, uy = a - kx, b - ky
    vx, vy = -a - kx, -b - ky

    start_angle = _angle_between(1.0, 0.0, ux, uy)
    sweep_angle = _angle_between(ux, uy, vx, vy)
    if not params.sweep and sweep_angle > 0:
        sweep_angle -= 2 * math.pi
    elif params.sweep and sweep_angle < 0:
        sweep_angle += 2 * math.pi

    return CenterArc(Point(cx, cy), rx, ry, phi, start_angle, sweep_angle)


def quadratic_deviation(segment_sweep: float, radius: float) -> float:
    """Worst-case gap between a circular sub-arc and its tangent-intersection quadratic.

    The gap peaks at the curve midpoint: r * (1 - cos h)^2 / (2 cos h), h = half the sweep.
    For an ellipse, pass the larger radius to get an upper bound.
    """
    c = math.cos(abs(segment_sweep) / 2.0)
    return radius * (1.0 - c) ** 2 / (2.0 * c)


def segment_count(sweep_angle: float, rx: float, ry: float, config: ConversionConfig) -> int:
    """Number of equal sub-sweeps for an arc under the given policy."""
    sweep = abs(sweep_angle)
    floor = max(1, math.ceil(sweep / MAX_SEGMENT_SWEEP - 1e-9))
    if not config.uses_tolerance:
        return max(config.bezier_steps, floor)

    radius = max(rx, ry)
    n = floor
    while n < MAX_ARC_STEPS and quadratic_deviation(sweep / n, radius) > config.tolerance:
        n += 1
    return n


def arc_to_quadratics(params: ArcParameters, config: ConversionConfig | None = None) -> list[Command]:
    """Approximate an arc by absolute Q commands, in order from start to end.

    Returns ``[]`` for a zero-length arc and a single ``LineTo`` when either
    radius is zero, or when the ellipse is too flat to represent. The last
    command always ends exactly at ``params.end``.
    """
    if not all(math.isfinite(v) for v in (params.rx, params.ry, params.rotation)):
        raise InvalidArcError(
            f"arc radii and rotation must be finite (rx={params.rx}, ry={params.ry}, rotation={params.rotation})"
        )
    if params.start == params.end:
        return []
    if params.rx == 0 or params.ry == 0:
        return [LineTo(params.end)]

    config = config or ConversionConfig.default()
    arc = center_parameterization(params)
    if arc is None:
        logger.debug("Arc %s -> %s is numerically flat, emitting a line", params.start, params.end)
        return [LineTo(params.end)]
    n = segment_count(arc.sweep_angle, arc.rx, arc.ry, config)

    # Points are placed relative to the start so huge radii do not swamp short sweeps
    step = arc.sweep_angle / n
    origin = np.asarray(params.start, dtype=np.float64)
    ends = origin + ellipse_offsets(arc.rx, arc.ry, arc.phi, arc.start_angle, step * np.arange(1, n + 1))

    # The tangent intersection lies on the mid-angle ray, scaled by 1/cos(h) in parameter space
    bulge = 2.0 * math.sin(step / 4.0) ** 2 / math.cos(step / 2.0)
    controls = origin + ellipse_offsets(
        arc.rx, arc.ry, arc.phi, arc.start_angle, step * (np.arange(n) + 0.5), bulge
    )

    logger.debug(
        "Arc %s -> %s: sweep %.4f rad in %d segments",
        params.start,
        params.end,
        arc.sweep_angle,
        n,
    )

    commands: list[Command] = []
    for i in range(n):
        end = params.end if i == n - 1 else Point(float(ends[i, 0]), float(ends[i, 1]))
        commands.append(QuadTo(Point(float(controls[i, 0]), float(controls[i, 1])), end))
    return commands
