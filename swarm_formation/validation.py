"""
Clamp-and-report validators.

Invalid parameters are never rejected: each validator returns the nearest
valid value together with a ``ParameterWarning`` (or ``None`` when the input
was already valid). Owners decide whether to log or surface the warning.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterWarning:
    name: str
    value: float
    clamped_to: float
    message: str

    def __str__(self) -> str:
        return f"{self.name}={self.value!r} {self.message}, set to {self.clamped_to!r}"


Checked = Tuple[float, Optional[ParameterWarning]]


def at_least(name: str, value, minimum, what: str = "") -> Checked:
    if value < minimum:
        reason = f"needs to be at least {what or minimum}"
        return minimum, ParameterWarning(name, value, minimum, reason)
    return value, None


def at_most(name: str, value, maximum, what: str = "") -> Checked:
    if value > maximum:
        reason = f"needs to be smaller or equal to {what or maximum}"
        return maximum, ParameterWarning(name, value, maximum, reason)
    return value, None


def within(name: str, value, minimum, maximum, lower: str = "", upper: str = "") -> Checked:
    """Clamp into ``[minimum, maximum]``; the lower bound wins if they cross."""
    value, warning = at_least(name, value, minimum, lower)
    if warning is not None:
        return value, warning
    return at_most(name, value, maximum, upper)


def clamp_size(value: int) -> Tuple[int, Optional[ParameterWarning]]:
    return at_least("size", int(value), 1)


def clamp_position(value: int) -> Tuple[int, Optional[ParameterWarning]]:
    return at_least("position_in_formation", int(value), 0)


def clamp_spacing(value: float) -> Checked:
    return at_least("spacing", float(value), 0.0)


def clamp_agents_per_line(value) -> Tuple[Tuple[int, int], List[ParameterWarning]]:
    x, y = (int(v) for v in value)
    x, wx = at_least("agents_per_line.x", x, 1)
    y, wy = at_least("agents_per_line.y", y, 1)
    return (x, y), [w for w in (wx, wy) if w is not None]


def clamp_ratio(value: float) -> Checked:
    return within("complexity_ratio", float(value), 0.0, 1.0)


def report(warnings, sink: Optional[list] = None) -> None:
    """
    Log every non-empty warning and optionally collect it into ``sink``. A
    warning equal to the last one in ``sink`` has already been reported.
    """
    for w in warnings:
        if w is None:
            continue
        if sink and sink[-1] == w:
            continue
        logger.warning("%s", w)
        if sink is not None:
            sink.append(w)
