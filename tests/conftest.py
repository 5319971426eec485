"""Shared fixtures for generator tests."""

from __future__ import annotations

import pytest


class ScriptedRng:
    """Stand-in for ``numpy.random.Generator`` that replays fixed draws."""

    def __init__(self, ints: list[int], floats: list[float]) -> None:
        self.ints = list(ints)
        self.floats = list(floats)

    def integers(self, high: int) -> int:
        value = self.ints.pop(0)
        assert 0 <= value < high, f"scripted draw {value} outside [0, {high})"
        return value

    def random(self) -> float:
        return self.floats.pop(0)


class UntouchableRng:
    """Random source that fails the test if anything draws from it."""

    def integers(self, high: int) -> int:
        raise AssertionError("randomness consumed")

    def random(self) -> float:
        raise AssertionError("randomness consumed")


@pytest.fixture
def untouchable_rng() -> UntouchableRng:
    return UntouchableRng()
