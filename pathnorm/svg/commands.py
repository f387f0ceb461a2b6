"""Command model: points, the seven canonical commands, and raw tokenizer records.

Command is a closed union. Consumers that need per-command semantics should
``match`` over the variants; code that only moves coordinates around can use
``points`` / ``with_points`` without caring which variant it holds.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import ClassVar, NamedTuple, Union


class Point(NamedTuple):
    x: float
    y: float

    def translate(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)

    def reflect_through(self, center: Point) -> Point:
        """Point symmetric to this one about ``center``."""
        return Point(2 * center.x - self.x, 2 * center.y - self.y)


class _PointsMixin:
    """Generic coordinate access shared by every command dataclass."""

    @property
    def points(self) -> tuple[Point, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))  # type: ignore[arg-type]

    def with_points(self, points):
        names = [f.name for f in fields(self)]  # type: ignore[arg-type]
        if len(points) != len(names):
            raise ValueError(f"{self.letter} takes {len(names)} points, got {len(points)}")  # type: ignore[attr-defined]
        return type(self)(**{name: Point(*p) for name, p in zip(names, points)})


@dataclass(frozen=True)
class MoveTo(_PointsMixin):
    letter: ClassVar[str] = "M"
    end: Point


@dataclass(frozen=True)
class LineTo(_PointsMixin):
    letter: ClassVar[str] = "L"
    end: Point


@dataclass(frozen=True)
class CurveTo(_PointsMixin):
    letter: ClassVar[str] = "C"
    c1: Point
    c2: Point
    end: Point


@dataclass(frozen=True)
class SmoothCurveTo(_PointsMixin):
    # c1 is implicit: reflection of the previous cubic control, or the current point
    letter: ClassVar[str] = "S"
    c2: Point
    end: Point


@dataclass(frozen=True)
class QuadTo(_PointsMixin):
    letter: ClassVar[str] = "Q"
    c: Point
    end: Point


@dataclass(frozen=True)
class SmoothQuadTo(_PointsMixin):
    # control is implicit: reflection of the previous quadratic control, or the current point
    letter: ClassVar[str] = "T"
    end: Point


@dataclass(frozen=True)
class ClosePath(_PointsMixin):
    letter: ClassVar[str] = "Z"


Command = Union[MoveTo, LineTo, CurveTo, SmoothCurveTo, QuadTo, SmoothQuadTo, ClosePath]


# Numbers per argument group for each source letter
ARITY: dict[str, int] = {
    "M": 2,
    "L": 2,
    "T": 2,
    "H": 1,
    "V": 1,
    "C": 6,
    "S": 4,
    "Q": 4,
    "A": 7,
    "Z": 0,
}


@dataclass(frozen=True)
class RawCommand:
    """One argument group as read from the source text."""

    letter: str  # upper-case source letter
    relative: bool
    args: tuple[float, ...] = ()
    position: int = 0  # source offset of the letter or first argument
