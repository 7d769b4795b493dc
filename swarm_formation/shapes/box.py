"""
Box formations.

Solid boxes stack full ``width`` rows (planar) or ``width x height`` layers
(spatial) from the front to the back; the last row or layer may be sparse and
is then re-centred with compressed spacing. Boundary boxes keep the first
row or face complete and only populate the perimeter of the following ones.
"""
from __future__ import annotations
import math

from .common import centered, fit_sparse_lines, layout, place, sparse_grid_slot
from .variants import Box, FormationSpec, Layout, ShapeType


def compute(spec: FormationSpec, shape: Box) -> Layout:
    width, height = shape.agents_per_line
    spatial = shape.shape is ShapeType.SPATIAL
    if shape.solid:
        if spatial:
            return _solid_spatial(spec, width, height)
        return _solid_planar(spec, width)
    if spatial:
        return _boundary_spatial(spec, width, height)
    return _boundary_planar(spec, width)


def _solid_planar(spec: FormationSpec, width: int) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    layers = math.ceil(size / width)
    row = pos // width
    id_x = pos - row * width
    remainder = size % width

    spacing_x = s
    if remainder and row == size // width:
        spacing_x = s * width / (remainder + 1)
        x = centered(remainder, spacing_x)
    else:
        x = centered(width, s)
    y = (layers - 1) / 2 * s - row * s

    point = place((x, y, 0.0), id_x, 0, spacing_x, 0.0)
    return layout(point, spec.up_axis, layers, 1 if remainder else 0)


def _solid_spatial(spec: FormationSpec, width: int, height: int) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    per_layer = width * height
    layers = math.ceil(size / per_layer)
    full_layers = size // per_layer
    layer = pos // per_layer

    if layer < full_layers:
        index = pos - layer * per_layer
        id_x, id_y = index % width, index // width
        spacing_x = spacing_y = s
        x, y = centered(width, s), centered(height, s)
    else:
        agents = size - per_layer * full_layers
        line_x, line_y = fit_sparse_lines(width, height, agents)
        id_x, id_y, row_width = sparse_grid_slot(pos - per_layer * full_layers, agents, line_x)
        spacing_x = s * width / (row_width + 1)
        spacing_y = s * height / (line_y + 1)
        x, y = centered(row_width, spacing_x), centered(line_y, spacing_y)
    z = (layers - 1) / 2 * s - layer * s

    point = place((x, y, z), id_x, id_y, spacing_x, spacing_y)
    return layout(point, spec.up_axis, layers, 1 if size % per_layer else 0)


def _boundary_planar(spec: FormationSpec, width: int) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    # A single column or a single row has no interior to leave out
    if width == 1 or size <= width:
        return _solid_planar(spec, width)

    if size - 2 * width > 0:
        layers = math.ceil((size - 2 * width) / 2) + 2
    else:
        layers = 2

    if layers == 2:
        last = size - width
    elif (size - 2 * width) % 2 == 0:
        last = width
    else:
        last = width - 1

    top = (layers - 1) / 2 * s
    if pos < width:
        point = place((centered(width, s), top, 0.0), pos, 0, s, 0.0)
    elif pos < size - last:
        row = 1 + (pos - width) // 2
        side = (pos - width) % 2
        point = place((centered(width, s), top - row * s, 0.0), side, 0, (width - 1) * s, 0.0)
    else:
        id_x = last - (size - pos)
        spacing_x = s * width / last
        point = place((centered(last, spacing_x), top - (layers - 1) * s, 0.0), id_x, 0, spacing_x, 0.0)

    return layout(point, spec.up_axis, layers, 1 if last < width else 0)


def _boundary_spatial(spec: FormationSpec, width: int, height: int) -> Layout:
    size, pos, s = spec.size, spec.position, spec.spacing
    per_layer = width * height
    # Faces without interior or not even one full face: nothing to hollow out
    if width == 1 or height == 1 or size <= per_layer:
        return _solid_spatial(spec, width, height)

    ring = 2 * width + 2 * height - 4
    rest = size - per_layer
    layers = 1 + math.ceil(rest / ring)
    last = rest % ring

    spacing_x = spacing_y = s
    x, y = centered(width, s), centered(height, s)
    if pos < per_layer:
        layer = 0
        id_x, id_y = pos % width, pos // width
    elif pos < size - last:
        layer = 1 + (pos - per_layer) // ring
        index = (pos - per_layer) % ring
        if index < width:
            id_x, id_y = index, 0
        elif index > width + 2 * (height - 2):
            id_x, id_y = (index - width - 2 * (height - 2)) % width, height - 1
        else:
            # Left and right column between bottom and top row
            id_x, id_y = (index - width) % 2, (index - width) // 2 + 1
            spacing_x = s * (width - 1)
    else:
        layer = layers - 1
        line_x, line_y = fit_sparse_lines(width, height, last)
        id_x, id_y, row_width = sparse_grid_slot(pos - (size - last), last, line_x)
        spacing_x = s * width / (row_width + 1)
        spacing_y = s * height / (line_y + 1)
        x, y = centered(row_width, spacing_x), centered(line_y, spacing_y)
    z = (layers - 1) / 2 * s - layer * s

    point = place((x, y, z), id_x, id_y, spacing_x, spacing_y)
    return layout(point, spec.up_axis, layers, 1 if last else 0)
