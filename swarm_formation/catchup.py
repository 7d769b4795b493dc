"""
Catch-up radius system.

An agent slows down inside ``arrive_radius``, moves at magnitude 1 between
``arrive_radius`` and ``inner_radius``, and speeds up to
``1 + multiplier`` between ``inner_radius`` and ``outer_radius`` when it falls
behind its slot.
"""
from __future__ import annotations
import logging
import math
from enum import Enum

from . import config as C
from .validation import at_least, report, within

logger = logging.getLogger(__name__)


class DistanceMapping(Enum):
    """Monotonic, saturating maps from a distance interval onto [0, 1]."""

    CONSTANT = "constant"
    LINEAR = "linear"
    QUADRATIC = "quadratic"
    SQUARE_ROOT = "square_root"


def _ratio(lo: float, hi: float, value: float) -> float:
    if hi <= lo:
        return 1.0 if value > hi else 0.0
    return min(max((value - lo) / (hi - lo), 0.0), 1.0)


_MAPPINGS = {
    DistanceMapping.CONSTANT: lambda r: 1.0,
    DistanceMapping.LINEAR: lambda r: r,
    DistanceMapping.QUADRATIC: lambda r: r * r,
    DistanceMapping.SQUARE_ROOT: math.sqrt,
}


def map_distance(mapping: DistanceMapping, lo: float, hi: float, value: float) -> float:
    """Map ``value`` from ``[lo, hi]`` onto ``[0, 1]`` with the given curve."""
    curve = _MAPPINGS.get(mapping)
    if curve is None:
        logger.error("Unknown distance mapping %r, falling back to linear", mapping)
        curve = _MAPPINGS[DistanceMapping.LINEAR]
    return curve(_ratio(lo, hi, value))


def as_mapping(value) -> DistanceMapping:
    """Accept a ``DistanceMapping`` or its name/value, e.g. ``"square_root"``."""
    if isinstance(value, DistanceMapping):
        return value
    key = str(value).strip().lower()
    for mapping in DistanceMapping:
        if key in (mapping.value, mapping.name.lower()):
            return mapping
    logger.error("Unknown distance mapping %r, falling back to linear", value)
    return DistanceMapping.LINEAR


def magnitude(distance: float, spec: "CatchUpSpec") -> float:
    if distance <= spec.arrive_radius:
        return map_distance(spec.mapping, 0.0, spec.arrive_radius, distance)
    if distance < spec.inner_radius:
        return 1.0
    return 1.0 + spec.multiplier * map_distance(spec.mapping, spec.inner_radius, spec.outer_radius, distance)


class CatchUpSpec:
    """
    Radii and mapping of the catch-up system. The ordering
    ``0 <= arrive_radius <= inner_radius <= outer_radius`` always holds: every
    setter clamps its value against the current neighbours and records a
    ``ParameterWarning`` in ``warnings`` instead of raising.
    """

    def __init__(
        self,
        arrive_radius: float = C.ARRIVE_RADIUS,
        inner_radius: float = C.INNER_CATCH_UP_RADIUS,
        outer_radius: float = C.OUTER_CATCH_UP_RADIUS,
        multiplier: float = C.CATCH_UP_MULTIPLIER,
        mapping=C.DISTANCE_MAPPING,
    ):
        self.warnings: list = []
        arrive, w_arrive = at_least("arrive_radius", float(arrive_radius), 0.0)
        inner, w_inner = at_least("inner_radius", float(inner_radius), arrive, "arrive_radius")
        outer, w_outer = at_least("outer_radius", float(outer_radius), inner, "inner_radius")
        report([w_arrive, w_inner, w_outer], self.warnings)

        self._arrive = arrive
        self._inner = inner
        self._outer = outer
        self.multiplier = float(multiplier)
        self.mapping = as_mapping(mapping)

    @classmethod
    def from_config(cls, cfg: dict | None = None) -> "CatchUpSpec":
        cfg = (cfg or C.get_config())["catch_up"]
        return cls(
            arrive_radius=cfg["arrive_radius"],
            inner_radius=cfg["inner_radius"],
            outer_radius=cfg["outer_radius"],
            multiplier=cfg["multiplier"],
            mapping=cfg["mapping"],
        )

    @property
    def arrive_radius(self) -> float:
        return self._arrive

    @arrive_radius.setter
    def arrive_radius(self, value: float):
        value, warning = within("arrive_radius", float(value), 0.0, self._inner, upper="inner_radius")
        report([warning], self.warnings)
        self._arrive = value

    @property
    def inner_radius(self) -> float:
        return self._inner

    @inner_radius.setter
    def inner_radius(self, value: float):
        value, warning = within(
            "inner_radius", float(value), self._arrive, self._outer, "arrive_radius", "outer_radius"
        )
        report([warning], self.warnings)
        self._inner = value

    @property
    def outer_radius(self) -> float:
        return self._outer

    @outer_radius.setter
    def outer_radius(self, value: float):
        value, warning = at_least("outer_radius", float(value), self._inner, "inner_radius")
        report([warning], self.warnings)
        self._outer = value

    def magnitude(self, distance: float) -> float:
        return magnitude(distance, self)

    def __repr__(self) -> str:
        return (
            f"CatchUpSpec(arrive_radius={self._arrive}, inner_radius={self._inner}, "
            f"outer_radius={self._outer}, multiplier={self.multiplier}, mapping={self.mapping.name})"
        )
