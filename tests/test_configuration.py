import logging
import numpy as np
import pytest

import swarm_formation.configuration as configuration
from swarm_formation import (
    ConfigurationError, FormationGroup, FormationOwnershipError, FormationUnit, Reference, update_configuration,
)
from swarm_formation.reference import yaw_rotation

LINE_SLOTS = np.array([[-3.0, 0, 0], [-1.0, 0, 0], [1.0, 0, 0], [3.0, 0, 0]])


def make_units(positions, **kwargs):
    return [
        FormationUnit(spacing=2.0, agent_position=p, name=f"agent{i}", **kwargs)
        for i, p in enumerate(positions)
    ]


@pytest.mark.parametrize("ratio", [0.0, 0.5, 1.0])
def test_agents_on_shuffled_slots_keep_them(ratio):
    order = [2, 0, 3, 1]
    units = make_units(LINE_SLOTS[order])
    group = FormationGroup(units, complexity_ratio=ratio)
    update_configuration(group)
    assert group.assignment.tolist() == order
    for unit, slot in zip(units, order):
        assert unit.size == 4
        assert unit.position_in_formation == slot
        assert not unit.stale
        np.testing.assert_allclose(unit.target(), unit.agent_position)


def test_assignment_is_bijection_for_scattered_agents():
    rng = np.random.default_rng(11)
    units = make_units(rng.uniform(-10, 10, size=(9, 3)))
    group = FormationGroup(units, complexity_ratio=0.5)
    group.update()
    assert sorted(group.assignment.tolist()) == list(range(9))
    assert sorted(u.position_in_formation for u in units) == list(range(9))


def test_start_respects_assign_on_start():
    units = make_units(LINE_SLOTS)
    group = FormationGroup(units, assign_on_start=False)
    group.start()
    assert len(group.assignment) == 0
    group.assign_on_start = True
    group.start()
    assert group.assignment.tolist() == [0, 1, 2, 3]


def test_fixed_size_leaves_free_slots():
    units = make_units(LINE_SLOTS[:2])
    group = FormationGroup(units, auto_size=False, maximum_size=6)
    group.update()
    assert all(u.size == 6 for u in units)


def test_fixed_size_too_small_is_raised(caplog):
    units = make_units(LINE_SLOTS)
    with caplog.at_level(logging.WARNING, logger="swarm_formation.validation"):
        group = FormationGroup(units, auto_size=False, maximum_size=2)
        group.update()
    assert all(u.size == 4 for u in units)
    assert group.warnings[-1].clamped_to == 4


def test_discovery_keeps_active_units_only():
    units = make_units(LINE_SLOTS)
    units[1].active = False
    group = FormationGroup(source=lambda: units)
    group.update()
    assert group.units == [units[0], units[2], units[3]]
    assert all(u.size == 3 for u in group.units)
    assert not units[1].managed


def test_discovery_caps_fixed_size():
    units = make_units(LINE_SLOTS)
    group = FormationGroup(source=lambda: units, auto_size=False, maximum_size=2)
    group.update()
    assert group.units == units[:2]
    assert len(group.assignment) == 2


def test_inactive_units_skipped_without_discovery():
    units = make_units(LINE_SLOTS[:3])
    units[2].active = False
    group = FormationGroup(units, auto_discover=False)
    group.update()
    assert len(group.assignment) == 2
    assert units[0].size == 2


def test_group_orientation_rotates_slots():
    rotated = LINE_SLOTS @ yaw_rotation(np.pi / 2).T
    order = [3, 1, 0, 2]
    units = make_units(rotated[order])
    group = FormationGroup(units, orientation=yaw_rotation(np.pi / 2), complexity_ratio=1.0)
    group.update()
    assert group.assignment.tolist() == order


def test_slots_follow_unit_reference():
    shifted = LINE_SLOTS + [0.0, 50.0, 0.0]
    units = make_units(shifted[::-1], reference=Reference([0.0, 50.0, 0.0]))
    group = FormationGroup(units, complexity_ratio=1.0)
    group.update()
    assert group.assignment.tolist() == [3, 2, 1, 0]


def test_unit_belongs_to_one_group():
    units = make_units(LINE_SLOTS[:1])
    FormationGroup(units)
    with pytest.raises(FormationOwnershipError):
        FormationGroup(units)


def test_managed_units_reject_outside_writes():
    units = make_units(LINE_SLOTS)
    group = FormationGroup(units)
    group.update()
    with pytest.raises(FormationOwnershipError):
        units[0].position_in_formation = 3


def test_size_change_during_update_is_detected(monkeypatch):
    units = make_units(LINE_SLOTS)
    group = FormationGroup(units)

    def resize_then_solve(agents, slots, ratio, scale):
        units[0].size = 7
        return np.arange(len(agents))

    monkeypatch.setattr(configuration, "solve", resize_then_solve)
    with pytest.raises(ConfigurationError):
        update_configuration(group)


def test_empty_group():
    group = FormationGroup()
    group.update()
    assert len(group.assignment) == 0


def test_complexity_ratio_clamped():
    group = FormationGroup(complexity_ratio=-0.5)
    assert group.complexity_ratio == 0.0
    assert group.warnings[0].name == "complexity_ratio"


def test_group_from_config():
    group = FormationGroup.from_config(make_units(LINE_SLOTS))
    assert group.maximum_size == 10
    assert group.complexity_ratio == 0.5
    group.start()
    assert group.assignment.tolist() == [0, 1, 2, 3]


def test_repeated_updates_warn_once():
    units = make_units(LINE_SLOTS)
    group = FormationGroup(units, auto_size=False, maximum_size=2)
    for _ in range(3):
        group.update()
    assert len(group.warnings) == 1
