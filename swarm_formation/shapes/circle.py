"""
Circle formations.

The boundary variant puts every agent on one ring whose circumference is
``size * spacing``. The solid variant fills concentric rings from the centre
outwards; ring ``k`` (zero-based) has radius ``(k + 1) * spacing`` and holds
``floor(2 * pi * (k + 1))`` agents. Its slot order is inverted: slot 0 sits on
the outermost (possibly sparse) ring and slot ``size - 1`` is the centre.
"""
from __future__ import annotations
import math

from .common import layout
from .variants import Circle, FormationSpec, Layout


def ring_capacity(ring: int) -> int:
    return math.floor(2.0 * math.pi * (ring + 1))


def _on_ring(radius: float, count: int, index: int):
    theta = 2.0 * math.pi / count
    angle = index * theta + math.pi / 2.0
    return (radius * math.cos(angle), radius * math.sin(angle), 0.0)


def compute(spec: FormationSpec, shape: Circle) -> Layout:
    if shape.solid:
        return _solid(spec)
    return _boundary(spec)


def _boundary(spec: FormationSpec) -> Layout:
    radius = spec.spacing * spec.size / (2.0 * math.pi)
    point = _on_ring(radius, spec.size, spec.position)
    return layout(point, spec.up_axis, layers=1)


def _solid(spec: FormationSpec) -> Layout:
    size = spec.size
    depth = size - 1 - spec.position  # 0 is the centre

    filled = 1          # agents up to and including the last counted ring
    before = 1          # agents inside the ring of this slot
    slot_ring = 0
    rings = 0
    while filled < size:
        capacity = ring_capacity(rings)
        filled += capacity
        if filled <= depth:
            before += capacity
            slot_ring += 1
        rings += 1
    sparse = 1 if filled > size else 0

    if depth == 0:
        return layout((0.0, 0.0, 0.0), spec.up_axis, rings, sparse)

    # The outermost ring only holds what is left over
    count = min(ring_capacity(slot_ring), size - before)
    radius = (slot_ring + 1) * spec.spacing
    point = _on_ring(radius, count, depth - before + 1)
    return layout(point, spec.up_axis, rings, sparse)
