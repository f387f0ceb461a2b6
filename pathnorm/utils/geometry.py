"""Leaf-node geometry helpers. No svg imports."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def as_array(points: Iterable[tuple[float, float]]) -> NDArray[np.float64]:
    """Nx2 float array from an iterable of (x, y) pairs."""
    arr = np.array(list(points), dtype=np.float64)
    return arr.reshape(-1, 2)


def ellipse_offsets(
    rx: float,
    ry: float,
    phi: float,
    theta0: float,
    deltas: NDArray[np.float64],
    bulge: float = 0.0,
) -> NDArray[np.float64]:
    """Displacements on an ellipse rotated by ``phi`` from parameter ``theta0`` to ``theta0 + deltas``.

    Cosine and sine differences use product form, so a tiny sweep on a huge
    ellipse keeps its precision. ``bulge`` moves each target outward along its
    own radius by that fraction of the radius.
    """
    half = deltas / 2.0
    mid = theta0 + half
    angles = theta0 + deltas
    du = -2.0 * np.sin(mid) * np.sin(half) + bulge * np.cos(angles)
    dv = 2.0 * np.cos(mid) * np.sin(half) + bulge * np.sin(angles)
    ex = rx * du
    ey = ry * dv
    cos_phi, sin_phi = np.cos(phi), np.sin(phi)
    return np.column_stack([cos_phi * ex - sin_phi * ey, sin_phi * ex + cos_phi * ey])


def quadratic_points(
    p0: tuple[float, float],
    c: tuple[float, float],
    p1: tuple[float, float],
    n: int = 32,
) -> NDArray[np.float64]:
    """Sample a quadratic bezier at ``n`` evenly spaced parameters (endpoints included)."""
    t = np.linspace(0.0, 1.0, n)[:, None]
    a, b, d = np.asarray(p0, float), np.asarray(c, float), np.asarray(p1, float)
    return (1 - t) ** 2 * a + 2 * (1 - t) * t * b + t**2 * d


def max_radial_deviation(
    points: NDArray[np.float64],
    center: tuple[float, float],
    rx: float,
    ry: float,
    phi: float,
) -> float:
    """Largest |r - 1| of ``points`` after mapping the ellipse onto the unit circle.

    Multiplying by max(rx, ry) bounds the euclidean distance to the ellipse;
    for a circle the product is that distance exactly.
    """
    d = points - np.asarray(center, float)
    cos_phi, sin_phi = np.cos(phi), np.sin(phi)
    u = (cos_phi * d[:, 0] + sin_phi * d[:, 1]) / rx
    v = (-sin_phi * d[:, 0] + cos_phi * d[:, 1]) / ry
    return float(np.max(np.abs(np.hypot(u, v) - 1.0)))
