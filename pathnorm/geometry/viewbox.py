"""ViewBox mapping from user coordinates to a viewport."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from pathnorm.svg.commands import Command, Point

_VIEWBOX_SPLIT_RE = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class ViewBox:
    min_x: float
    min_y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if not (self.width > 0 and self.height > 0):
            raise ValueError(f"ViewBox needs a positive size, got {self.width}x{self.height}")

    @classmethod
    def from_string(cls, value: str) -> ViewBox:
        """Parse a ``viewBox`` attribute value such as ``"0 0 24 24"``."""
        parts = [p for p in _VIEWBOX_SPLIT_RE.split(value.strip()) if p]
        if len(parts) != 4:
            raise ValueError(f"viewBox needs 4 numbers, got {value!r}")
        return cls(*(float(p) for p in parts))

    def map_point(self, p: Point, viewport_width: float, viewport_height: float) -> Point:
        return Point(
            (p.x - self.min_x) * viewport_width / self.width,
            (p.y - self.min_y) * viewport_height / self.height,
        )

    def map_command(self, cmd: Command, viewport_width: float, viewport_height: float) -> Command:
        return cmd.with_points([self.map_point(p, viewport_width, viewport_height) for p in cmd.points])

    def iter_mapped(
        self, commands: Iterable[Command], viewport_width: float, viewport_height: float
    ) -> Iterator[Command]:
        for cmd in commands:
            yield self.map_command(cmd, viewport_width, viewport_height)

    def map_commands(
        self, commands: Iterable[Command], viewport_width: float, viewport_height: float
    ) -> tuple[Command, ...]:
        return tuple(self.iter_mapped(commands, viewport_width, viewport_height))
