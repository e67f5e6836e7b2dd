"""Reference stations and observation sets with known solutions."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .geometry import Point, Range

STATIONS: Tuple[Point, ...] = (
    Point(-9529.96875, -41.71875, -10613.03125),
    Point(-9570.0625, -60.28125, -10585.375),
    Point(-9617.125, -76.59375, -10570.6875),
    Point(-9662.1875, -80.34375, -10544.375),
    Point(-9674.40625, -81.4375, -10528.3437),
    Point(-9780.125, 9.75, -10414.21875),
    Point(-9898.96875, 49.09375, -10440.8125),
)

# name -> (measured ranges per station, expected target)
_SAMPLES: Dict[str, Tuple[Tuple[float, ...], Point]] = {
    "origin": (
        (14263.89, 14270.25, 14291.06, 14302.03, 14298.49, 14286.60, 14387.58),
        Point(0.0, 0.0, 0.0),
    ),
    "far": (
        (30433.55, 30405.41, 30390.37, 30364.13, 30348.13, 30237.38, 30266.39),
        Point(-9530.5, -910.28125, 19808.125),
    ),
    "near_origin": (
        (14263.78, 14270.17, 14291.01, 14302.01, 14298.48, 14286.69, 14387.72),
        Point(6.25, -1.28125, -5.75),
    ),
    "close": (
        (3184.68, 3157.20, 3143.50, 3118.80, 3103.34, 2997.21, 3037.08),
        Point(-9529.437, -64.5, -7428.4375),
    ),
    "offset": (
        (3911.65, 3874.52, 3832.39, 3787.03, 3773.53, 3632.56, 3511.50),
        Point(-13243.15625, 1026.5625, -10003.09375),
    ),
}

SAMPLE_NAMES: Tuple[str, ...] = tuple(_SAMPLES)


def make_observations(distances: Sequence[float], stations: Sequence[Point] = STATIONS) -> List[Range]:
    if len(distances) != len(stations):
        raise ValueError(f"expected {len(stations)} distances, got {len(distances)}")
    return [Range(station, dist) for station, dist in zip(stations, distances)]


def get_sample(name: str) -> Tuple[List[Range], Point]:
    try:
        distances, expected = _SAMPLES[name]
    except KeyError as exc:
        raise KeyError(f"unknown sample '{name}' (expected one of {', '.join(SAMPLE_NAMES)})") from exc
    return make_observations(distances), expected


__all__ = ["SAMPLE_NAMES", "STATIONS", "get_sample", "make_observations"]
