import math
import numpy as np
import pytest

from swarm_formation.shapes import (
    Arrow, Box, Circle, Cross, FormationSpec, Line, ShapeType, V, compute_position,
)
from swarm_formation.shapes.common import orient

P, S = ShapeType.PLANAR, ShapeType.SPATIAL

SHAPES = [
    Line(),
    Circle(solid=True),
    Circle(solid=False),
    Cross(shape=P),
    Cross(shape=S),
    Arrow(solid=True, shape=P),
    Arrow(solid=True, shape=S),
    Arrow(solid=False, shape=P),
    Arrow(solid=False, shape=S),
]
for lines in [(1, 1), (1, 3), (3, 1), (3, 3), (4, 2), (2, 4)]:
    for solid in (True, False):
        for kind in (P, S):
            SHAPES.append(Box(agents_per_line=lines, solid=solid, shape=kind))
for lines in [(1, 1), (1, 3), (2, 1), (2, 2), (3, 2)]:
    for solid in (True, False):
        for kind in (P, S):
            SHAPES.append(V(agents_per_line=lines, solid=solid, shape=kind))


def offsets(shape, size, spacing=1.0, up=(0.0, 0.0, 0.0)):
    return [
        compute_position(FormationSpec(size, pos, spacing, shape, up)).offset
        for pos in range(size)
    ]


@pytest.mark.parametrize("shape", SHAPES, ids=repr)
def test_offsets_are_distinct(shape):
    for size in range(1, 31):
        points = {tuple(np.round(o, 6) + 0.0) for o in offsets(shape, size, spacing=1.5)}
        assert len(points) == size, f"size {size}"


@pytest.mark.parametrize("shape", SHAPES, ids=repr)
def test_single_agent_sits_on_reference(shape):
    layout = compute_position(FormationSpec(1, 0, 5.0, shape))
    assert np.array_equal(layout.offset, np.zeros(3))


@pytest.mark.parametrize("shape", SHAPES, ids=repr)
def test_compute_is_repeatable(shape):
    spec = FormationSpec(17, 11, 2.5, shape, (0.0, 1.0, 0.0))
    a, b = compute_position(spec), compute_position(spec)
    assert np.array_equal(a.offset, b.offset)
    assert (a.layers, a.sparse_layers) == (b.layers, b.sparse_layers)


def test_line_values():
    xs = offsets(Line(), 5, spacing=2.0)
    assert xs[0][0] == -4.0
    assert xs[2][0] == 0.0
    assert xs[4][0] == 4.0
    for o in xs:
        assert o[1] == 0.0 and o[2] == 0.0


def test_circle_boundary_ring():
    points = offsets(Circle(solid=False), 8, spacing=1.0)
    radius = 8 / (2 * math.pi)
    for p in points:
        assert np.linalg.norm(p) == pytest.approx(radius)
    angles = sorted(math.atan2(p[1], p[0]) % (2 * math.pi) for p in points)
    steps = np.diff(angles)
    assert np.allclose(steps, 2 * math.pi / 8)


def test_circle_solid_fills_centre_last():
    points = offsets(Circle(solid=True), 7, spacing=2.0)
    assert np.allclose(points[6], 0.0)
    for p in points[:6]:
        assert np.linalg.norm(p) == pytest.approx(2.0)


def test_circle_solid_slot_zero_on_outer_ring():
    points = offsets(Circle(solid=True), 10, spacing=1.0)
    # 1 centre + 6 on the first ring + 3 on the second
    assert np.linalg.norm(points[0]) == pytest.approx(2.0)
    assert np.linalg.norm(points[9]) == pytest.approx(0.0)
    assert np.linalg.norm(points[5]) == pytest.approx(1.0)


def test_box_solid_planar_grid():
    points = offsets(Box(agents_per_line=(3, 3)), 9, spacing=1.0)
    assert np.allclose(points[4], [0.0, 0.0, 0.0])
    assert np.allclose(points[0], [-1.0, 1.0, 0.0])
    assert np.allclose(points[8], [1.0, -1.0, 0.0])


def test_box_sparse_row_is_centred():
    layout = compute_position(FormationSpec(10, 9, 1.0, Box(agents_per_line=(3, 3))))
    assert layout.layers == 4
    assert layout.sparse_layers == 1
    assert layout.offset[0] == pytest.approx(0.0)


def test_box_clamps_agents_per_line():
    assert Box(agents_per_line=(0, -2)).agents_per_line == (1, 1)


def test_arrow_tip_leads():
    points = offsets(Arrow(solid=True, shape=P), 3, spacing=2.0)
    assert np.allclose(points[0], [0.0, 1.0, 0.0])
    assert np.allclose(points[1], [-1.0, -1.0, 0.0])
    assert np.allclose(points[2], [1.0, -1.0, 0.0])


def test_arrow_layers():
    layout = compute_position(FormationSpec(7, 0, 1.0, Arrow(solid=True, shape=P)))
    assert layout.layers == 4
    assert layout.sparse_layers == 1
    layout = compute_position(FormationSpec(14, 0, 1.0, Arrow(solid=True, shape=S)))
    assert layout.layers == 3
    assert layout.sparse_layers == 0


def test_v_boundary_planar_wings():
    points = offsets(V(solid=False), 5, spacing=2.0)
    assert points[0][0] < 0 < points[1][0]
    assert points[0][1] == points[1][1]
    assert np.allclose(points[4], [0.0, -2.0, 0.0])


def test_cross_planar_bar():
    points = offsets(Cross(), 5, spacing=1.0)
    xs = sorted(p[0] for p in points if p[1] == 0.0)
    assert xs == [-1.0, 0.0, 1.0]


def test_position_out_of_range():
    with pytest.raises(ValueError):
        compute_position(FormationSpec(3, 3, 1.0, Line()))


def test_orientation_flip():
    p = (1.0, 2.0, 3.0)
    assert np.allclose(orient(p, (0.0, 0.0, 0.0)), [1.0, 2.0, 3.0])
    assert np.allclose(orient(p, (2.0, 0.0, 0.0)), [3.0, 2.0, 1.0])
    assert np.allclose(orient(p, (-1.0, 0.0, 0.0)), [-3.0, 2.0, 1.0])
    assert np.allclose(orient(p, (0.0, -1.0, 0.0)), [1.0, -3.0, 2.0])
    assert np.allclose(orient(p, (0.0, 0.0, -1.0)), [2.0, -1.0, 3.0])
    # first non-zero axis wins
    assert np.allclose(orient(p, (0.0, 1.0, 1.0)), [1.0, 3.0, 2.0])


def test_up_axis_moves_depth_onto_y():
    spec = FormationSpec(3, 0, 1.0, Cross(shape=S), (0.0, 1.0, 0.0))
    flat = compute_position(FormationSpec(3, 0, 1.0, Cross(shape=S)))
    flipped = compute_position(spec)
    assert flipped.offset[1] == flat.offset[2]


def test_negative_spacing_is_clamped():
    spec = FormationSpec(3, 0, -2.0, Line())
    assert spec.spacing == 0.0
    assert [w.name for w in spec.warnings] == ["spacing"]
    assert np.array_equal(compute_position(spec).offset, np.zeros(3))


def test_empty_size_is_clamped_to_one():
    spec = FormationSpec(0, 0, 1.0, Line())
    assert spec.size == 1
    assert spec.warnings[0].clamped_to == 1
    assert np.array_equal(compute_position(spec).offset, np.zeros(3))


def test_negative_position_is_clamped():
    spec = FormationSpec(4, -1, 1.0, Line())
    assert spec.position == 0
    assert compute_position(spec).offset[0] == -1.5


@pytest.mark.parametrize("kind", [P, S])
def test_single_column_box_has_no_hollow_variant(kind):
    for size in range(1, 13):
        solid = offsets(Box(agents_per_line=(1, 3), solid=True, shape=kind), size)
        boundary = offsets(Box(agents_per_line=(1, 3), solid=False, shape=kind), size)
        assert np.array_equal(np.array(solid), np.array(boundary))
        assert all(o[0] == 0.0 for o in boundary)


@pytest.mark.parametrize("kind", [P, S])
def test_single_wing_v_is_the_boundary_v(kind):
    for size in range(1, 16):
        solid = offsets(V(agents_per_line=(1, 2), solid=True, shape=kind), size)
        boundary = offsets(V(agents_per_line=(1, 2), solid=False, shape=kind), size)
        assert np.array_equal(np.array(solid), np.array(boundary))


def test_box_boundary_spatial_below_one_face_is_solid():
    for size in range(1, 10):
        solid = offsets(Box(agents_per_line=(3, 3), solid=True, shape=S), size)
        boundary = offsets(Box(agents_per_line=(3, 3), solid=False, shape=S), size)
        assert np.array_equal(np.array(solid), np.array(boundary))


def test_box_boundary_planar_single_row_is_solid():
    for size in range(1, 4):
        solid = offsets(Box(agents_per_line=(3, 3), solid=True, shape=P), size)
        boundary = offsets(Box(agents_per_line=(3, 3), solid=False, shape=P), size)
        assert np.array_equal(np.array(solid), np.array(boundary))
