"""
V formations.

Boundary V: two single-file wings that close in towards the back, two agents
per layer (planar) or two columns of ``height`` agents per layer (spatial).
A single agent left over becomes the tip.

Solid V: ``front`` layers carry two full wings of ``width`` agents each; the
remaining agents fill back layers that shrink by one agent per layer
(planar) or by one column of ``height`` agents per layer (spatial). A wing
width of 1 is the boundary V.
"""
from __future__ import annotations
import math

from .common import centered, layout, place
from .variants import FormationSpec, Layout, ShapeType, V


def compute(spec: FormationSpec, shape: V) -> Layout:
    width, height = shape.agents_per_line
    spatial = shape.shape is ShapeType.SPATIAL
    if not shape.solid or width == 1:
        return _boundary_spatial(spec, height) if spatial else _boundary_planar(spec)
    if spatial:
        return _solid_spatial(spec, width, height)
    return _solid_planar(spec, width)


def _front_layers(size: int, ideal_back: int, layer_size: int) -> int:
    return max(1, math.ceil((size - ideal_back) / layer_size))


def _wing_start(id_x: int, width: int, distance: float, s: float):
    """Left wing grows outwards from ``-distance``, right wing from ``+distance``."""
    if id_x < width:
        return id_x, -(distance + width - 1) * s
    return id_x - width, distance * s


def _solid_planar(spec: FormationSpec, width: int) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    ideal_back = width * (2 * width - 1)
    front = _front_layers(size, ideal_back, 2 * width)
    front_size = front * 2 * width
    back_size = size - front_size

    layer, id_x, x = 0, 0, 0.0
    if pos < front_size:
        layer = pos // (2 * width)
        id_x, x = _wing_start(pos % (2 * width), width, (front - layer) / 2, s)

    # Back layer b holds 2 * width - 1 - b agents
    filled, back = 0, 0
    while filled < back_size:
        capacity = 2 * width - 1 - back
        index = pos - front_size - filled
        if 0 <= index < capacity:
            layer = front + back
            id_x = index
            x = centered(min(capacity, back_size - filled), s)
        filled += capacity
        back += 1

    layers = front + back
    y = (layers - 1) / 2 * s - layer * s
    point = place((x, y, 0.0), id_x, 0, s, 0.0)
    return layout(point, spec.up_axis, layers, back)


def _solid_spatial(spec: FormationSpec, width: int, height: int) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    layer_size = 2 * width * height
    ideal_back = (2 * width - 1) * width * height
    front = _front_layers(size, ideal_back, layer_size)
    front_size = front * layer_size
    back_size = size - front_size

    layer, id_x, id_y, x, y = 0, 0, 0, 0.0, 0.0
    if pos < front_size:
        layer = pos // layer_size
        index = pos - layer * layer_size
        id_y = index // (2 * width)
        id_x, x = _wing_start(index % (2 * width), width, (front - layer) / 2, s)

    # Back layer b (one-based) is 2 * width - b agents wide
    filled, back = 0, 1
    while filled < back_size:
        capacity = (2 * width - back) * height
        index = pos - front_size - filled
        if 0 <= index < capacity:
            layer = front + back - 1
            row_width = 2 * width - back
            id_x, id_y = index % row_width, index // row_width
            rows = height
            if filled + capacity > back_size:
                agents = back_size - filled
                rows = math.ceil(agents / row_width)
                if index >= (rows - 1) * row_width:
                    row_width = agents - (rows - 1) * row_width
            x = centered(row_width, s)
            y = (height - rows) / 2 * s
        filled += capacity
        back += 1
    back -= 1

    layers = front + back
    z = (layers - 1) / 2 * s - layer * s
    point = place((x, y, z), id_x, id_y, s, s)
    return layout(point, spec.up_axis, layers, back)


def _boundary_planar(spec: FormationSpec) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    layer = pos // 2
    sparse = size % 2
    layers = size // 2 + sparse

    distance = (size // 2 - layer) / 2 * s
    x = -distance if pos % 2 == 0 else distance
    y = (layers - 1) / 2 * s - layer * s
    return layout((x, y, 0.0), spec.up_axis, layers, sparse)


def _boundary_spatial(spec: FormationSpec, height: int) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    per_layer = 2 * height
    layers = math.ceil(size / per_layer)
    rest = size % per_layer
    in_rest = pos >= size - rest

    # Wings converge one layer later unless the rest is a single centre column
    wing_layers = layers
    line_x, line_y = 2, height
    if rest > height or rest == 0:
        wing_layers += 1
    elif in_rest:
        line_x = 1

    odd_tip = rest > height and rest % 2 == 1
    if odd_tip:
        layers += 1

    layer = pos // per_layer
    index = pos - layer * per_layer
    if in_rest:
        index = pos - (size - rest)
        if rest <= height:
            line_y = rest
        elif odd_tip and pos == size - 1:
            index, line_x, line_y = 0, 1, 1
            layer = layers - 1
        elif odd_tip:
            line_y = (rest - 1) // 2
        else:
            line_y = rest // 2

    id_x, id_y = index % line_x, index // line_x
    distance = (wing_layers - layer - 1) / 2 * s
    if id_x < 1:
        x = -distance
    else:
        id_x -= line_x // 2
        x = distance
    start = (x, (height - line_y) / 2 * s, (layers - 1) / 2 * s - layer * s)
    point = place(start, id_x, id_y, s, s)
    return layout(point, spec.up_axis, layers, 1 if rest else 0)
