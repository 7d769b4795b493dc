import logging
import math
import pytest

from swarm_formation.catchup import CatchUpSpec, DistanceMapping, as_mapping, magnitude, map_distance


def test_linear_profile():
    spec = CatchUpSpec(arrive_radius=1, inner_radius=3, outer_radius=5, multiplier=2, mapping=DistanceMapping.LINEAR)
    expected = {0: 0.0, 1: 1.0, 2: 1.0, 3: 1.0, 4: 2.0, 5: 3.0}
    for distance, value in expected.items():
        assert magnitude(distance, spec) == pytest.approx(value)


def test_saturates_beyond_outer_radius():
    spec = CatchUpSpec(1, 3, 5, 2)
    assert spec.magnitude(50.0) == pytest.approx(3.0)


def test_mappings():
    assert map_distance(DistanceMapping.CONSTANT, 0, 4, 1) == 1.0
    assert map_distance(DistanceMapping.LINEAR, 0, 4, 1) == pytest.approx(0.25)
    assert map_distance(DistanceMapping.QUADRATIC, 0, 4, 2) == pytest.approx(0.25)
    assert map_distance(DistanceMapping.SQUARE_ROOT, 0, 4, 1) == pytest.approx(0.5)


def test_mapping_clamped_to_unit_interval():
    for mapping in DistanceMapping:
        for value in (-3.0, 0.0, 1.7, 2.0, 9.0):
            assert 0.0 <= map_distance(mapping, 0.0, 2.0, value) <= 1.0


def test_degenerate_interval_is_a_step():
    assert map_distance(DistanceMapping.LINEAR, 2.0, 2.0, 2.0) == 0.0
    assert map_distance(DistanceMapping.LINEAR, 2.0, 2.0, 2.5) == 1.0
    # agent exactly on its slot with all radii at zero
    assert CatchUpSpec().magnitude(0.0) == 0.0


def test_unknown_mapping_falls_back_to_linear(caplog):
    with caplog.at_level(logging.ERROR, logger="swarm_formation.catchup"):
        assert map_distance("bogus", 0.0, 4.0, 1.0) == pytest.approx(0.25)
    assert any("bogus" in r.getMessage() for r in caplog.records)


def test_mapping_names():
    assert as_mapping("square_root") is DistanceMapping.SQUARE_ROOT
    assert as_mapping("QUADRATIC") is DistanceMapping.QUADRATIC
    assert as_mapping(DistanceMapping.CONSTANT) is DistanceMapping.CONSTANT


def test_constructor_orders_radii():
    spec = CatchUpSpec(arrive_radius=5, inner_radius=3, outer_radius=1)
    assert (spec.arrive_radius, spec.inner_radius, spec.outer_radius) == (5, 5, 5)
    assert len(spec.warnings) == 2


def test_negative_arrive_radius_clamped(caplog):
    with caplog.at_level(logging.WARNING, logger="swarm_formation.validation"):
        spec = CatchUpSpec(arrive_radius=-1.0)
    assert spec.arrive_radius == 0.0
    assert spec.warnings[0].name == "arrive_radius"
    assert caplog.records


def test_outer_radius_setter_assigns():
    # Setting the outer radius has to take effect, not silently keep the old value
    spec = CatchUpSpec(1, 3, 5)
    spec.outer_radius = 10
    assert spec.outer_radius == 10
    spec.outer_radius = 2
    assert spec.outer_radius == 3
    assert spec.warnings[-1].name == "outer_radius"


def test_setters_clamp_against_neighbours():
    spec = CatchUpSpec(1, 3, 5)
    spec.arrive_radius = 4
    assert spec.arrive_radius == 3
    spec.arrive_radius = -2
    assert spec.arrive_radius == 0
    spec.inner_radius = 7
    assert spec.inner_radius == 5
    spec.arrive_radius = 1
    spec.inner_radius = 0.5
    assert spec.inner_radius == 1
    assert spec.arrive_radius <= spec.inner_radius <= spec.outer_radius


def test_setters_do_not_warn_for_valid_values():
    spec = CatchUpSpec(1, 3, 5)
    spec.inner_radius = 4
    spec.arrive_radius = 2
    spec.outer_radius = 6
    assert spec.warnings == []
    assert math.isclose(spec.magnitude(5.0), 1.0 + 0.5)


def test_from_config_uses_defaults():
    cfg = {'catch_up': {'arrive_radius': 1.0, 'inner_radius': 2.0, 'outer_radius': 4.0,
                        'multiplier': 3.0, 'mapping': 'quadratic'}}
    spec = CatchUpSpec.from_config(cfg)
    assert spec.mapping is DistanceMapping.QUADRATIC
    assert spec.magnitude(3.0) == pytest.approx(1.0 + 3.0 * 0.25)
    assert CatchUpSpec.from_config().mapping is DistanceMapping.LINEAR
