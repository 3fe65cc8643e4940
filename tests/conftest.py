"""Shared fixtures for hypergaze tests."""

import os

os.environ.setdefault("MPLBACKEND", "Agg")

import numpy as np
import pytest

from hypergaze.geometry import HyperbolicPoint


def random_point(rng: np.random.RandomState, max_radius: float = 0.9) -> HyperbolicPoint:
    """A point at a random disk position with a random heading."""
    r = max_radius * np.sqrt(rng.uniform())
    theta = rng.uniform(0, 2 * np.pi)
    point = HyperbolicPoint.from_plane((r * np.cos(theta), r * np.sin(theta)))
    point.rotate(rng.uniform(-np.pi, np.pi))
    return point


@pytest.fixture
def rng():
    return np.random.RandomState(42)
