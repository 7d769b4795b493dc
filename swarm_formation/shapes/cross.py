"""
Cross formations.

Planar: a vertical bar through a horizontal bar of ``2 * arm + 1`` agents.
Slots run from the top of the upper arm, across the horizontal bar from
left to right, then down the lower arm, which takes any remainder.

Spatial: the horizontal bar is joined by an upper and a lower vertical arm
and a front and a back arm along Z; the back arm takes any remainder.
"""
from __future__ import annotations
import math

from .common import layout
from .variants import Cross, FormationSpec, Layout, ShapeType


def compute(spec: FormationSpec, shape: Cross) -> Layout:
    if shape.shape is ShapeType.PLANAR:
        return _planar(spec)
    return _spatial(spec)


def _planar(spec: FormationSpec) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    arm = math.ceil(size / 2) // 2
    layers = size - 2 * arm

    if pos < arm:
        point = (0.0, (arm - pos) * s, 0.0)
    elif pos < 3 * arm + 1:
        point = ((pos - 2 * arm) * s, 0.0, 0.0)
    else:
        point = (0.0, -(pos - 3 * arm) * s, 0.0)
    return layout(point, spec.up_axis, layers)


def _spatial(spec: FormationSpec) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    arm = math.ceil(math.ceil((size - 1) / 3) / 2)
    layers = max(1, size - 4 * arm)

    if pos < arm:
        point = (0.0, 0.0, (arm - pos) * s)
    elif pos < 3 * arm + 1:
        point = ((pos - 2 * arm) * s, 0.0, 0.0)
    elif pos < 4 * arm + 1:
        point = (0.0, (arm - (pos - 3 * arm - 1)) * s, 0.0)
    elif pos < 5 * arm + 1:
        point = (0.0, -(pos - 4 * arm) * s, 0.0)
    else:
        point = (0.0, 0.0, -(pos - 5 * arm) * s)
    return layout(point, spec.up_axis, layers)
