"""Residual vector and Jacobian of the multilateration problem.

For a candidate point ``g`` and observations ``(s_i, d_i)`` the residuals are
``d_i - |s_i - g|``. The Jacobian returned here holds the gradient of the
predicted distance ``|s_i - g|``, so the residual gradient is its negation;
the Gauss-Newton step adds its correction to stay consistent with that.
"""

from __future__ import annotations

import logging

import numpy as np

from ..geometry import Point, distance
from ..logging_utils import apply_debug_logging
from .model import DegenerateGeometryError, Observations

logger = logging.getLogger(__name__)


def residuals(observations: Observations, guess: Point) -> np.ndarray:
    """Return measured minus predicted distance for every observation."""

    out = np.empty(len(observations), dtype=float)
    for i, observation in enumerate(observations):
        out[i] = observation.distance - distance(observation.station, guess)
    return out


def jacobian(observations: Observations, guess: Point) -> np.ndarray:
    """Return the ``n x 3`` matrix with rows ``(guess - station_i) / d_i``.

    Raises :class:`DegenerateGeometryError` when ``guess`` sits exactly on a
    station.
    """

    out = np.empty((len(observations), 3), dtype=float)
    for i, observation in enumerate(observations):
        station = observation.station
        # common denominator of the row
        dist = distance(station, guess)
        if dist == 0.0:
            raise DegenerateGeometryError(i, station)
        out[i, 0] = (guess.x - station.x) / dist
        out[i, 1] = (guess.y - station.y) / dist
        out[i, 2] = (guess.z - station.z) / dist
    return out


def sum_of_squared_residuals(observations: Observations, guess: Point) -> float:
    total = 0.0
    for observation in observations:
        diff = observation.distance - distance(observation.station, guess)
        total += diff * diff
    return total


apply_debug_logging(globals(), logger=logger)


__all__ = ["jacobian", "residuals", "sum_of_squared_residuals"]
