"""
Shape geometry for formations.

This package contains:
- variants.py : ShapeVariant dataclasses, FormationSpec and Layout
- common.py   : orientation flip and sparse-layer helpers shared by all shapes
- line.py, circle.py, box.py, cross.py, arrow.py, v.py : one module per shape

Use ``compute_position(spec)`` to get the local offset of one slot.
"""
from __future__ import annotations
import numpy as np

from . import arrow, box, circle, cross, line, v
from .variants import (
    Arrow,
    Box,
    Circle,
    Cross,
    FormationSpec,
    Layout,
    Line,
    ShapeType,
    ShapeVariant,
    V,
)

_DISPATCH = {
    Line: line.compute,
    Circle: circle.compute,
    Box: box.compute,
    Cross: cross.compute,
    Arrow: arrow.compute,
    V: v.compute,
}


def compute_position(spec: FormationSpec) -> Layout:
    """
    Local-space offset, layer count and sparse layer count for the slot
    ``spec.position`` of a formation of ``spec.size`` agents. Raises
    ``ValueError`` when the position lies beyond the formation.
    """
    if not 0 <= spec.position < spec.size:
        raise ValueError(f"position {spec.position} outside formation of size {spec.size}")
    try:
        compute = _DISPATCH[type(spec.shape)]
    except KeyError:
        raise TypeError(f"unknown shape variant {type(spec.shape).__name__}") from None

    if spec.size == 1:
        return Layout(np.zeros(3), 1, 0)
    return compute(spec, spec.shape)


__all__ = [
    "Arrow",
    "Box",
    "Circle",
    "Cross",
    "FormationSpec",
    "Layout",
    "Line",
    "ShapeType",
    "ShapeVariant",
    "V",
    "compute_position",
]
