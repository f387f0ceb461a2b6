"""pathnorm — SVG path-data normalization to absolute M/L/C/S/Q/T/Z."""

from pathnorm.config import ConversionConfig
from pathnorm.errors import InvalidArcError, MalformedPathError
from pathnorm.svg.builder import CommandStream
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
from pathnorm.svg.parser import parse_path

__all__ = [
    "parse_path",
    "ConversionConfig",
    "CommandStream",
    "Command",
    "Point",
    "MoveTo",
    "LineTo",
    "CurveTo",
    "SmoothCurveTo",
    "QuadTo",
    "SmoothQuadTo",
    "ClosePath",
    "MalformedPathError",
    "InvalidArcError",
]
