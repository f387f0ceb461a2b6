"""Reference consumers of a command stream: shorthand expansion, text, svgpathtools."""

from __future__ import annotations

import re
from collections.abc import Iterable

from svgpathtools import CubicBezier, Line, Path, QuadraticBezier

from pathnorm.svg.commands import (
    ClosePath,
    Command,
    CurveTo,
    LineTo,
    MoveTo,
    Point,
    QuadTo,
    SmoothCurveTo,
    SmoothQuadTo,
)

_TRAILING_ZEROS_RE = re.compile(r"^(-?\d*\.(\d*[1-9])?)0*$")
_TRAILING_DOT_RE = re.compile(r"\.$")


def format_number(v: float, precision: int | None = None) -> str:
    """Format a coordinate with optional fixed decimals and no trailing zeros."""
    s = f"{v:.{precision}f}" if precision is not None else repr(float(v))
    if "e" not in s and "." in s:
        s = _TRAILING_ZEROS_RE.sub(r"\1", s)
        s = _TRAILING_DOT_RE.sub("", s)
    if s in ("-0", ""):
        s = "0"
    return s


def expand_shorthand(commands: Iterable[Command]) -> list[Command]:
    """Rewrite S as C and T as Q by resolving their implicit control points."""
    expanded: list[Command] = []
    current = start = Point(0.0, 0.0)
    cubic: Point | None = None
    quad: Point | None = None

    for cmd in commands:
        if isinstance(cmd, MoveTo):
            current = start = cmd.end
            cubic = quad = None
        elif isinstance(cmd, LineTo):
            current = cmd.end
            cubic = quad = None
        elif isinstance(cmd, CurveTo):
            current, cubic, quad = cmd.end, cmd.c2, None
        elif isinstance(cmd, SmoothCurveTo):
            c1 = current if cubic is None else cubic.reflect_through(current)
            current, cubic, quad = cmd.end, cmd.c2, None
            cmd = CurveTo(c1, cmd.c2, cmd.end)
        elif isinstance(cmd, QuadTo):
            current, cubic, quad = cmd.end, None, cmd.c
        elif isinstance(cmd, SmoothQuadTo):
            c = current if quad is None else quad.reflect_through(current)
            current, cubic, quad = cmd.end, None, c
            cmd = QuadTo(c, cmd.end)
        elif isinstance(cmd, ClosePath):
            current = start
        else:
            raise TypeError(f"Not a path command: {cmd!r}")
        expanded.append(cmd)
    return expanded


def to_path_data(commands: Iterable[Command], precision: int | None = None, expand: bool = False) -> str:
    """Serialize commands back to path-data text, e.g. ``"M0 0 L10 10 Z"``."""
    if expand:
        commands = expand_shorthand(commands)
    parts = []
    for cmd in commands:
        numbers = " ".join(format_number(v, precision) for p in cmd.points for v in p)
        parts.append(f"{cmd.letter}{numbers}")
    return " ".join(parts)


def _c(p: Point) -> complex:
    return complex(p.x, p.y)


def to_svgpathtools(commands: Iterable[Command]) -> Path:
    """Build an svgpathtools Path for downstream geometry (length, sampling, intersections).

    Zero-length lines are dropped since svgpathtools cannot parameterize them.
    """
    segments = []
    current = start = 0j
    for cmd in expand_shorthand(commands):
        if isinstance(cmd, MoveTo):
            current = start = _c(cmd.end)
        elif isinstance(cmd, LineTo):
            if _c(cmd.end) != current:
                segments.append(Line(current, _c(cmd.end)))
            current = _c(cmd.end)
        elif isinstance(cmd, CurveTo):
            segments.append(CubicBezier(current, _c(cmd.c1), _c(cmd.c2), _c(cmd.end)))
            current = _c(cmd.end)
        elif isinstance(cmd, QuadTo):
            segments.append(QuadraticBezier(current, _c(cmd.c), _c(cmd.end)))
            current = _c(cmd.end)
        elif isinstance(cmd, ClosePath):
            if current != start:
                segments.append(Line(current, start))
            current = start
    return Path(*segments)
