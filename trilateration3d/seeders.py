"""Initial-guess generators for the numeric solver.

Every generator draws from an explicitly passed :class:`numpy.random.Generator`
so that callers control seeding.
"""

from __future__ import annotations

import logging
from typing import Dict, Protocol, Sequence, Type

import numpy as np
from scipy.stats import qmc

from .geometry import Point, Range
from .logging_utils import apply_debug_logging

logger = logging.getLogger(__name__)


def _require_positive(value: float, what: str) -> float:
    value = float(value)
    if not value > 0.0:
        raise ValueError(f"{what} must be positive, got {value}")
    return value


def random_point_in_cube(center: Point, half_width: float, rng: np.random.Generator) -> Point:
    """Pick a point uniformly from the axis-aligned cube of edge ``2 * half_width`` around ``center``."""

    half_width = _require_positive(half_width, "half_width")
    offsets = rng.uniform(-half_width, half_width, size=3)
    return Point.from_array(center.as_array() + offsets)


def random_point_on_sphere(center: Point, radius: float, rng: np.random.Generator) -> Point:
    """Pick a uniformly distributed point on the sphere of ``radius`` around ``center``."""

    radius = _require_positive(radius, "radius")
    direction = rng.standard_normal(3)
    norm = float(np.linalg.norm(direction))
    while norm == 0.0:
        direction = rng.standard_normal(3)
        norm = float(np.linalg.norm(direction))
    return Point.from_array(center.as_array() + direction * (radius / norm))


class BaseSeeder(Protocol):
    """Protocol implemented by seeding strategies."""

    def seed(self, observations: Sequence[Range], rng: np.random.Generator, attempt: int) -> Point:
        """Return an initial guess for restart number ``attempt``."""


def _reference(observations: Sequence[Range]) -> Range:
    # a zero range would collapse the sampling region onto the station
    for observation in observations:
        if observation.distance > 0.0:
            return observation
    raise ValueError("seeding requires an observation with a positive range")


class CubeSeeder:
    """Seed inside the cube around the first station with a positive range."""

    def seed(self, observations: Sequence[Range], rng: np.random.Generator, attempt: int) -> Point:
        ref = _reference(observations)
        return random_point_in_cube(ref.station, ref.distance, rng)


class SphereSeeder:
    """Seed on the sphere described by the first observation with a positive range."""

    def seed(self, observations: Sequence[Range], rng: np.random.Generator, attempt: int) -> Point:
        ref = _reference(observations)
        return random_point_on_sphere(ref.station, ref.distance, rng)


class SobolSeeder:
    """Seed from a deterministic Sobol sequence over the reference station's cube.

    Later attempts walk further along the sequence and add Gaussian jitter
    drawn from ``rng``.
    """

    def __init__(self, jitter_ratio: float = 0.02):
        self.jitter_ratio = float(jitter_ratio)

    def seed(self, observations: Sequence[Range], rng: np.random.Generator, attempt: int) -> Point:
        ref = _reference(observations)
        half_width = _require_positive(ref.distance, "range")

        engine = qmc.Sobol(d=3, scramble=False)
        # the first two Sobol points are the cube corner and its centre
        index = attempt + 2
        unit = engine.random_base2(m=index.bit_length())[index]
        offsets = (unit * 2.0 - 1.0) * half_width

        if attempt > 0:
            offsets = offsets + rng.normal(0.0, self.jitter_ratio * half_width * (attempt + 1), size=3)
        return Point.from_array(ref.station.as_array() + offsets)


_SEEDERS: Dict[str, Type] = {
    "cube": CubeSeeder,
    "sphere": SphereSeeder,
    "sobol": SobolSeeder,
}


def make_seeder(name: str) -> BaseSeeder:
    try:
        cls = _SEEDERS[name]
    except KeyError as exc:
        raise ValueError(f"unknown seeder '{name}' (expected one of {', '.join(sorted(_SEEDERS))})") from exc
    return cls()


apply_debug_logging(globals(), logger=logger, skip={"make_seeder"})


__all__ = [
    "BaseSeeder",
    "CubeSeeder",
    "SobolSeeder",
    "SphereSeeder",
    "make_seeder",
    "random_point_in_cube",
    "random_point_on_sphere",
]
