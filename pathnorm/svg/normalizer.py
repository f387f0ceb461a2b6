"""Command normalizer: raw tokens -> absolute M/L/C/S/Q/T/Z.

Every source letter has one handler, registered via decorator:

    @handles("H")
    def _horizontal(state, raw, out, config) -> None:
        ...

Handlers resolve relative arguments against ``state.current`` for their own
argument group, append to the builder and update the shorthand memory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable

from pathnorm.config import ConversionConfig
from pathnorm.svg.arc import ArcParameters, arc_to_quadratics
from pathnorm.svg.builder import CommandStream, CommandStreamBuilder
from pathnorm.svg.commands import (
    ClosePath,
    CurveTo,
    LineTo,
    MoveTo,
    Point,
    QuadTo,
    RawCommand,
    SmoothCurveTo,
    SmoothQuadTo,
)

logger = logging.getLogger(__name__)

ORIGIN = Point(0.0, 0.0)


@dataclass
class ParserState:
    """Pen state for a single normalization pass."""

    current: Point = ORIGIN
    subpath_start: Point = ORIGIN
    # Set only while the previous emitted command belongs to that curve family
    last_cubic_control: Point | None = None
    last_quad_control: Point | None = None
    started: bool = False

    def resolve(self, x: float, y: float, relative: bool) -> Point:
        if relative:
            return Point(self.current.x + x, self.current.y + y)
        return Point(x, y)

    def resolve_pairs(self, args: tuple[float, ...], relative: bool) -> list[Point]:
        """Resolve consecutive (x, y) pairs against the same current point."""
        return [self.resolve(args[i], args[i + 1], relative) for i in range(0, len(args), 2)]

    def clear_controls(self) -> None:
        self.last_cubic_control = None
        self.last_quad_control = None

    def implicit_cubic_control(self) -> Point:
        if self.last_cubic_control is None:
            return self.current
        return self.last_cubic_control.reflect_through(self.current)

    def implicit_quad_control(self) -> Point:
        if self.last_quad_control is None:
            return self.current
        return self.last_quad_control.reflect_through(self.current)


Handler = Callable[[ParserState, RawCommand, CommandStreamBuilder, ConversionConfig], None]

_HANDLERS: dict[str, Handler] = {}


def handles(letter: str):
    """Decorator to register the handler for one source letter."""

    def decorator(fn: Handler) -> Handler:
        if letter in _HANDLERS:
            raise ValueError(f"Duplicate handler for {letter}")
        _HANDLERS[letter] = fn
        return fn

    return decorator


@handles("M")
def _moveto(state: ParserState, raw: RawCommand, out: CommandStreamBuilder, config: ConversionConfig) -> None:
    point = state.resolve(*raw.args, raw.relative)
    state.current = state.subpath_start = point
    state.clear_controls()
    out.append(MoveTo(point))


@handles("L")
def _lineto(state: ParserState, raw: RawCommand, out: CommandStreamBuilder, config: ConversionConfig) -> None:
    point = state.resolve(*raw.args, raw.relative)
    state.current = point
    state.clear_controls()
    out.append(LineTo(point))


@handles("H")
def _horizontal(state: ParserState, raw: RawCommand, out: CommandStreamBuilder, config: ConversionConfig) -> None:
    (x,) = raw.args
    if raw.relative:
        x += state.current.x
    state.current = Point(x, state.current.y)
    state.clear_controls()
    out.append(LineTo(state.current))


@handles("V")
def _vertical(state: ParserState, raw: RawCommand, out: CommandStreamBuilder, config: ConversionConfig) -> None:
    (y,) = raw.args
    if raw.relative:
        y += state.current.y
    state.current = Point(state.current.x, y)
    state.clear_controls()
    out.append(LineTo(state.current))


@handles("C")
def _curveto(state: ParserState, raw: RawCommand, out: CommandStreamBuilder, config: ConversionConfig) -> None:
    c1, c2, end = state.resolve_pairs(raw.args, raw.relative)
    state.current = end
    state.last_cubic_control = c2
    state.last_quad_control = None
    out.append(CurveTo(c1, c2, end))


@handles("S")
def _smooth_curveto(state: ParserState, raw: RawCommand, out: CommandStreamBuilder, config: ConversionConfig) -> None:
    c1 = state.implicit_cubic_control()
    c2, end = state.resolve_pairs(raw.args, raw.relative)
    logger.debug("S at %s: implicit first control %s", state.current, c1)
    state.current = end
    state.last_cubic_control = c2
    state.last_quad_control = None
    out.append(SmoothCurveTo(c2, end))


@handles("Q")
def _quadto(state: ParserState, raw: RawCommand, out: CommandStreamBuilder, config: ConversionConfig) -> None:
    c, end = state.resolve_pairs(raw.args, raw.relative)
    state.current = end
    state.last_quad_control = c
    state.last_cubic_control = None
    out.append(QuadTo(c, end))


@handles("T")
def _smooth_quadto(state: ParserState, raw: RawCommand, out: CommandStreamBuilder, config: ConversionConfig) -> None:
    c = state.implicit_quad_control()
    end = state.resolve(*raw.args, raw.relative)
    state.current = end
    state.last_quad_control = c
    state.last_cubic_control = None
    out.append(SmoothQuadTo(end))


@handles("A")
def _arc(state: ParserState, raw: RawCommand, out: CommandStreamBuilder, config: ConversionConfig) -> None:
    rx, ry, rotation, large_arc, sweep, x, y = raw.args
    params = ArcParameters(
        start=state.current,
        end=state.resolve(x, y, raw.relative),
        rx=rx,
        ry=ry,
        rotation=rotation,
        large_arc=large_arc != 0,
        sweep=sweep != 0,
    )
    commands = arc_to_quadratics(params, config)
    if not commands:
        return

    out.extend(commands)
    state.current = params.end
    last = commands[-1]
    state.last_cubic_control = None
    state.last_quad_control = last.c if isinstance(last, QuadTo) else None


@handles("Z")
def _closepath(state: ParserState, raw: RawCommand, out: CommandStreamBuilder, config: ConversionConfig) -> None:
    # Shorthand memory survives a closepath
    state.current = state.subpath_start
    out.append(ClosePath())


def normalize(tokens: Iterable[RawCommand], config: ConversionConfig | None = None) -> CommandStream:
    """Consume raw tokens in order and build the canonical command stream."""
    config = config or ConversionConfig.default()
    state = ParserState()
    out = CommandStreamBuilder()

    for raw in tokens:
        _HANDLERS[raw.letter](state, raw, out, config)
        state.started = True

    if not state.started:
        return out.build()
    return out.build(state.current, state.subpath_start)
