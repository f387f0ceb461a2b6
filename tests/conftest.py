"""Shared test fixtures."""

from __future__ import annotations

import pytest

from pathnorm.svg.commands import Point


# Path data taken from common icon sets

HOME_D = "M3 10a2 2 0 0 1 .709-1.528l7-5.999a2 2 0 0 1 2.582 0l7 5.999A2 2 0 0 1 21 10v9a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"

SMILE_D = "M8 14s1.5 2 4 2 4-2 4-2"

DOOR_D = "M15 21v-8a1 1 0 0 0-1-1h-4a1 1 0 0 0-1 1v8"

# Same outline twice: once absolute, once relative from the same start point
ABSOLUTE_D = (
    "M10 10 L20 10 H30 V20 C30 25 25 30 20 30 S10 25 10 20 "
    "Q10 15 15 12 T20 10 A5 5 0 0 1 30 10 Z"
)
RELATIVE_D = (
    "m10 10 l10 0 h10 v10 c0 5 -5 10 -10 10 s-10 -5 -10 -10 "
    "q0 -5 5 -8 t5 -2 a5 5 0 0 1 10 0 z"
)

# Already in the reduced command set, all absolute
CANONICAL_D = "M0 0 L10 0 C10 5 5 10 0 10 S-5 5 0 0 Q5 -5 10 -5 T20 0 Z M30 30 L40 40"


def assert_points_close(actual, expected, abs_tol: float = 1e-9) -> None:
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert a == pytest.approx(Point(*e), abs=abs_tol)


def assert_commands_close(actual, expected, abs_tol: float = 1e-9) -> None:
    actual, expected = list(actual), list(expected)
    assert [c.letter for c in actual] == [c.letter for c in expected]
    for a, e in zip(actual, expected):
        assert_points_close(a.points, e.points, abs_tol)


@pytest.fixture
def home_d() -> str:
    return HOME_D


@pytest.fixture
def smile_d() -> str:
    return SMILE_D


@pytest.fixture
def door_d() -> str:
    return DOOR_D
