"""
Arrow formations, growing from a single tip agent backwards.

Layer ``k`` (one-based) of a solid arrow holds ``k`` agents in a row (planar)
or a ``k x k`` square (spatial). A boundary arrow keeps only the two outer
agents of each row (planar) or the perimeter of each square (spatial). The
last layer may be sparse and is spread over the width of its ideal layer.
"""
from __future__ import annotations
import math

from .common import centered, layout, place, sparse_grid_slot
from .variants import Arrow, FormationSpec, Layout, ShapeType


def compute(spec: FormationSpec, shape: Arrow) -> Layout:
    spatial = shape.shape is ShapeType.SPATIAL
    if shape.solid:
        return _solid_spatial(spec) if spatial else _solid_planar(spec)
    return _boundary_spatial(spec) if spatial else _boundary_planar(spec)


def _layer_count(size: int, capacity):
    """Number of layers needed for ``size`` agents and whether the last one is sparse."""
    layers, filled = 0, 0
    while filled < size:
        layers += 1
        filled += capacity(layers)
    return layers, 1 if filled > size else 0


def _locate(position: int, capacity):
    """
    One-based layer of ``position``, the number of agents up to and including
    that layer, and the capacity of the layer.
    """
    layer, filled, per_layer = 1, 1, 1
    while position >= filled:
        layer += 1
        per_layer = capacity(layer)
        filled += per_layer
    return layer, filled, per_layer


def _square(layer: int) -> int:
    return layer * layer


def _perimeter(layer: int) -> int:
    return 4 * layer - 4 if layer > 1 else 1


def _fit_square(agents: int, side: int):
    """Sub-rows and sub-columns of a sparse square layer of ``side`` agents."""
    new_y = min(math.isqrt(agents), side)
    new_x = min(agents // new_y, side)
    new_y = min(agents // new_x, side)
    if new_x * new_y < agents:
        new_x = min(new_x + 1, side)
    if new_x * new_y < agents:
        new_y = min(new_y + 1, side)
    return new_x, new_y


def _solid_planar(spec: FormationSpec) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    layers, sparse = _layer_count(size, lambda k: k)
    layer, filled, _ = _locate(pos, lambda k: k)

    row_width = layer
    spacing_x = s
    if filled > size:
        row_width = size - filled + layer
        spacing_x = s * layer / (row_width + 1)

    id_x = pos - filled + layer
    start = (centered(row_width, spacing_x), (layers + 1) / 2 * s - layer * s, 0.0)
    point = place(start, id_x, 0, spacing_x, 0.0)
    return layout(point, spec.up_axis, layers, sparse)


def _solid_spatial(spec: FormationSpec) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    layers, sparse = _layer_count(size, _square)
    layer, filled, per_layer = _locate(pos, _square)
    index = pos - filled + per_layer
    z = (layers + 1) / 2 * s - layer * s

    if filled > size:
        agents = size - filled + per_layer
        line_x, line_y = _fit_square(agents, layer)
        id_x, id_y, row_width = sparse_grid_slot(index, agents, line_x)
        spacing_x = s * layer / row_width
        spacing_y = s * layer / (line_y + 1)
        start = (centered(row_width, spacing_x), centered(line_y, spacing_y), z)
    else:
        id_x, id_y = index % layer, index // layer
        spacing_x = spacing_y = s
        start = (centered(layer, s), centered(layer, s), z)

    point = place(start, id_x, id_y, spacing_x, spacing_y)
    return layout(point, spec.up_axis, layers, sparse)


def _boundary_planar(spec: FormationSpec) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    layers = 1 + math.ceil((size - 1) / 2)

    if pos == 0:
        layer, id_x, row_width = 1, 0, 1
    else:
        layer = math.ceil(pos / 2) + 1
        id_x = (pos + 1) % 2
        row_width = 2

    spacing_x = (layer - 1) * s
    start = (centered(row_width, spacing_x), (layers + 1) / 2 * s - layer * s, 0.0)
    point = place(start, id_x, 0, spacing_x, 0.0)
    return layout(point, spec.up_axis, layers, 1 if size % 2 == 0 else 0)


def _boundary_spatial(spec: FormationSpec) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    layers, sparse = _layer_count(size, _perimeter)
    layer, filled, per_layer = _locate(pos, _perimeter)
    index = pos - filled + per_layer
    side = layer
    z = (layers + 1) / 2 * s - layer * s

    spacing_x = spacing_y = s
    x_shift = 0.0
    if filled > size:
        agents = size - filled + per_layer
        rows = math.ceil(math.sqrt(agents))
        row_width = math.ceil((agents - 2 * rows + 4) / 2)
        stretch = (side - 1) * s
        if index < row_width:
            id_x, id_y = index, 0
            if agents < 3:
                row_width = 1
                x_shift = stretch / 2
            spacing_x = stretch / max(row_width - 1, 1)
        elif index >= row_width + 2 * (rows - 2):
            id_y = rows - 1
            top = agents - row_width - 2 * (id_y - 1)
            if top == 1:
                x_shift = stretch / 2
            id_x = (index - row_width - 2 * (rows - 2)) % top
            spacing_x = stretch / max(top - 1, 1)
        else:
            id_x, id_y = (index - row_width) % 2, (index - row_width) // 2 + 1
            spacing_x = stretch
        spacing_y = stretch / max(rows - 1, 1)
    else:
        id_x, id_y = _perimeter_slot(index, side)
        if 0 < id_y < side - 1:
            spacing_x = (side - 1) * s

    start = (centered(side, s) + x_shift, centered(side, s), z)
    point = place(start, id_x, id_y, spacing_x, spacing_y)
    return layout(point, spec.up_axis, layers, sparse)


def _perimeter_slot(index: int, side: int):
    """
    Column and row of ``index`` on the perimeter of a ``side x side`` square:
    bottom row, then both sides row by row, then the top row. Inner rows
    report column 0 or 1 for the left or right side.
    """
    if index < side:
        return index, 0
    if index > side + 2 * (side - 2):
        return (index - side - 2 * (side - 2)) % side, side - 1
    return (index - side) % 2, (index - side) // 2 + 1
