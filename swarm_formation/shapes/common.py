from __future__ import annotations
import math
from typing import Sequence, Tuple
import numpy as np

from .. import config as C
from .variants import Layout

Point = Tuple[float, float, float]


def _sign(v: float) -> float:
    return -1.0 if v < 0 else 1.0


def orient(point: Point, up: Sequence[float]) -> np.ndarray:
    """
    Flip an offset authored in the XY-plane so that the computed Z-axis lands
    on whichever axis ``up`` points along. The first non-zero component of
    ``up`` wins and lends its sign; the zero vector keeps the offset as is.
    """
    x, y, z = point
    ux, uy, uz = up
    if abs(ux) > C.AXIS_EPSILON:
        return np.array([z * _sign(ux), y, x])
    if abs(uy) > C.AXIS_EPSILON:
        return np.array([x, z * _sign(uy), y])
    if abs(uz) > C.AXIS_EPSILON:
        return np.array([y, x * _sign(uz), z])
    return np.array([x, y, z])


def place(start: Point, id_x: int, id_y: int, spacing_x: float, spacing_y: float) -> Point:
    x, y, z = start
    return (x + id_x * spacing_x, y + id_y * spacing_y, z)


def layout(point: Point, up: Sequence[float], layers: int, sparse_layers: int = 0) -> Layout:
    return Layout(orient(point, up), layers, sparse_layers)


def centered(count: int, spacing: float) -> float:
    """Start coordinate of ``count`` agents centred around zero."""
    return -(count - 1) / 2 * spacing


def fit_sparse_lines(width: int, height: int, agents: int) -> Tuple[int, int]:
    """
    Width and height for the ``agents`` of a sparse box layer. The layer is
    kept as square as possible while the longer side of the ideal
    ``width x height`` layer keeps its importance; the result always covers
    every agent and never exceeds the ideal counts.
    """
    if height <= 1:
        return width, height
    if height <= width:
        new_y = min(math.ceil(math.sqrt(agents)), height)
        new_x = agents // new_y
        if new_x * new_y < agents:
            new_x = min(new_x + 1, width)
        if new_x * new_y < agents:
            new_y = min(new_y + 1, height)
    else:
        new_x = min(math.ceil(math.sqrt(agents)), width)
        new_y = agents // new_x
        if new_x * new_y < agents:
            new_y = min(new_y + 1, height)
        if new_x * new_y < agents:
            new_x = min(new_x + 1, width)
    return new_x, new_y


def sparse_grid_slot(index: int, agents: int, line_width: int) -> Tuple[int, int, int]:
    """
    Row-major slot of ``index`` in a sparse grid of ``agents`` agents whose
    rows hold ``line_width`` agents. Returns ``(id_x, id_y, row_width)`` where
    ``row_width`` is shortened for the trailing partial row.
    """
    id_y = index // line_width
    row_width = line_width
    if line_width * (id_y + 1) > agents:
        row_width = agents - line_width * id_y
    return index - id_y * line_width, id_y, row_width
