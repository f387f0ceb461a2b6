"""Path — a normalized command sequence with its bounding box and resizing helpers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from pathnorm.svg.commands import Command, Point
from pathnorm.utils.geometry import as_array, bbox


class Path:
    """Immutable wrapper over absolute commands. Every transform returns a new Path.

    The bounding box covers every coordinate, control points included, so it
    may be larger than the rendered outline.
    """

    def __init__(self, commands: Iterable[Command]) -> None:
        self._commands: tuple[Command, ...] = tuple(commands)
        self._bbox = bbox(as_array(p for cmd in self._commands for p in cmd.points))

    @property
    def commands(self) -> tuple[Command, ...]:
        return self._commands

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        return self._bbox

    @property
    def size(self) -> tuple[float, float]:
        xmin, ymin, xmax, ymax = self._bbox
        return (xmax - xmin, ymax - ymin)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        return f"Path({len(self._commands)} commands, bbox={self._bbox})"

    def map_points(self, fn: Callable[[Point], Point]) -> Path:
        return Path(cmd.with_points([fn(p) for p in cmd.points]) for cmd in self._commands)

    def translate(self, dx: float, dy: float) -> Path:
        return self.map_points(lambda p: p.translate(dx, dy))

    def _scale_xy(self, sx: float, sy: float) -> Path:
        # Anchor the bounding-box corner so only the extent changes
        ox, oy = self._bbox[0], self._bbox[1]
        return self.map_points(lambda p: Point(ox + (p.x - ox) * sx, oy + (p.y - oy) * sy))

    def _axis_factors(self, width: float, height: float) -> tuple[float | None, float | None]:
        w, h = self.size
        return (width / w if w > 0 else None, height / h if h > 0 else None)

    def scale(self, factor: float) -> Path:
        return self._scale_xy(factor, factor)

    def resize(self, width: float, height: float) -> Path:
        """Stretch each axis independently to the target size."""
        sx, sy = self._axis_factors(width, height)
        return self._scale_xy(sx if sx is not None else 1.0, sy if sy is not None else 1.0)

    def fit(self, width: float, height: float) -> Path:
        """Uniform scale so the path fits inside width x height."""
        factors = [f for f in self._axis_factors(width, height) if f is not None]
        return self.scale(min(factors)) if factors else self

    def cover(self, width: float, height: float) -> Path:
        """Uniform scale so the path covers width x height."""
        factors = [f for f in self._axis_factors(width, height) if f is not None]
        return self.scale(max(factors)) if factors else self
