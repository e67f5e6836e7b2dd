"""Plain-text observation format.

One observation per line: ``x y z distance``, separated by whitespace and/or
commas. ``#`` starts a comment; blank lines are ignored.
"""

from __future__ import annotations

import math
import re
from typing import List

from .geometry import Point, Range

_SEPARATOR_RE = re.compile(r"[\s,]+")


class ObservationParseError(ValueError):
    def __init__(self, line: int, message: str):
        super().__init__(f"[line {line}] {message}")
        self.line = line


def parse_observations(text: str) -> List[Range]:
    observations: List[Range] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        body = raw.split("#", 1)[0].strip()
        if not body:
            continue
        fields = [part for part in _SEPARATOR_RE.split(body) if part]
        if len(fields) != 4:
            raise ObservationParseError(lineno, f"expected 4 values (x y z distance), got {len(fields)}")
        try:
            x, y, z, dist = (float(part) for part in fields)
        except ValueError as exc:
            raise ObservationParseError(lineno, f"invalid number: {exc}") from exc
        if not all(math.isfinite(v) for v in (x, y, z, dist)):
            raise ObservationParseError(lineno, "values must be finite")
        if dist < 0:
            raise ObservationParseError(lineno, f"distance must be non-negative, got {dist}")
        observations.append(Range(Point(x, y, z), dist))
    return observations


def format_observations(observations: List[Range]) -> str:
    lines = [
        f"{r.station.x!r} {r.station.y!r} {r.station.z!r} {r.distance!r}" for r in observations
    ]
    return "\n".join(lines) + ("\n" if lines else "")


__all__ = ["ObservationParseError", "format_observations", "parse_observations"]
