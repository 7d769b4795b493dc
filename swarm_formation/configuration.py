"""
Formation configuration: sizes a group of formation units, computes every
candidate slot and lets the assignment solver decide which agent takes which
slot.
"""
from __future__ import annotations
import logging
from typing import Callable, Iterable, List, Optional
import numpy as np

from . import config as C
from .assignment import solve
from .formation import FormationOwnershipError, FormationUnit
from .shapes import compute_position
from .validation import at_least, clamp_ratio, clamp_size, report

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """The formation changed while a configuration update was in progress."""


class FormationGroup:
    """
    Owns a list of formation units and their slot indices.

    With ``auto_size`` the formation size is the number of active units,
    otherwise ``maximum_size``. With ``auto_discover`` the unit list is
    re-collected from ``source`` (a callable returning candidate units) on
    every update. ``orientation`` rotates slot offsets before they are
    compared with agent positions.
    """

    def __init__(
        self,
        units: Iterable[FormationUnit] = (),
        source: Optional[Callable[[], Iterable[FormationUnit]]] = None,
        maximum_size: int = C.MAXIMUM_GROUP_SIZE,
        complexity_ratio: float = C.ASSIGN_COMPLEXITY,
        auto_size: bool = C.AUTO_SIZE,
        auto_discover: bool = C.AUTO_DISCOVER,
        assign_on_start: bool = C.ASSIGN_ON_START,
        orientation=None,
        cost_scale: float = C.COST_SCALE,
    ):
        self.warnings: list = []
        self.source = source
        self.auto_size = auto_size
        self.auto_discover = auto_discover
        self.assign_on_start = assign_on_start
        self.orientation = np.eye(3) if orientation is None else np.asarray(orientation, dtype=float)
        self.cost_scale = cost_scale
        self.maximum_size = maximum_size
        self.complexity_ratio = complexity_ratio
        self.assignment = np.zeros(0, dtype=int)

        self._units: List[FormationUnit] = []
        for unit in units:
            self.add(unit)

    @classmethod
    def from_config(cls, units: Iterable[FormationUnit] = (), source=None, cfg: dict | None = None):
        cfg = cfg or C.get_config()
        return cls(
            units,
            source=source,
            maximum_size=cfg["group"]["maximum_size"],
            complexity_ratio=cfg["assignment"]["complexity"],
            auto_size=cfg["group"]["auto_size"],
            auto_discover=cfg["group"]["auto_discover"],
            assign_on_start=cfg["group"]["assign_on_start"],
            cost_scale=cfg["assignment"]["cost_scale"],
        )

    # -----------------------------
    # Parameters
    # -----------------------------
    @property
    def maximum_size(self) -> int:
        return self._maximum_size

    @maximum_size.setter
    def maximum_size(self, value: int):
        value, warning = clamp_size(value)
        report([warning], self.warnings)
        self._maximum_size = value

    @property
    def complexity_ratio(self) -> float:
        return self._complexity_ratio

    @complexity_ratio.setter
    def complexity_ratio(self, value: float):
        value, warning = clamp_ratio(value)
        report([warning], self.warnings)
        self._complexity_ratio = value

    # -----------------------------
    # Membership
    # -----------------------------
    @property
    def units(self) -> List[FormationUnit]:
        return list(self._units)

    def add(self, unit: FormationUnit):
        if unit._group is self:
            return
        if unit._group is not None:
            raise FormationOwnershipError(f"{unit!r} already belongs to another formation group")
        unit._group = self
        self._units.append(unit)

    def remove(self, unit: FormationUnit):
        self._units.remove(unit)
        unit._group = None

    def release(self):
        """Hand every unit's slot back to the unit itself."""
        for unit in self._units:
            unit._group = None
        self._units = []

    def _members(self) -> List[FormationUnit]:
        if self.auto_discover and self.source is not None:
            found = [unit for unit in self.source() if unit.active]
            if not self.auto_size:
                found = found[: self._maximum_size]
            self.release()
            for unit in found:
                self.add(unit)
        return [unit for unit in self._units if unit.active]

    # -----------------------------
    # Lifecycle
    # -----------------------------
    def start(self):
        if self.assign_on_start:
            self.update()

    def update(self):
        update_configuration(self)


def slot_positions(group: FormationGroup, units: List[FormationUnit], size: int) -> np.ndarray:
    """
    World position of slot ``i`` for unit ``i`` in a formation of ``size``,
    using each unit's own shape parameters and reference.
    """
    slots = []
    for index, unit in enumerate(units):
        unit.size = size
        unit._assign(index)
        offset = compute_position(unit.spec()).offset
        reference = unit.resolve_reference()
        slots.append(reference.position + reference.rotation @ (group.orientation @ offset))
    return np.array(slots).reshape(len(units), 3)


def update_configuration(group: FormationGroup) -> None:
    """
    Size the formation, collect its units, assign every unit a slot and
    recompute each unit's layout once.
    """
    units = group._members()
    if group.auto_size:
        size = max(len(units), 1)
    else:
        size, warning = at_least("maximum_size", group.maximum_size, len(units), "the number of units")
        report([warning], group.warnings)

    logger.debug("Updating formation of %d units, size %d", len(units), size)
    if not units:
        group.assignment = np.zeros(0, dtype=int)
        return

    slots = slot_positions(group, units, size)
    agents = np.array([unit.agent_position for unit in units], dtype=float).reshape(len(units), 3)
    assignment = solve(agents, slots, group.complexity_ratio, group.cost_scale)

    if any(unit.size != size for unit in units) or len(assignment) != len(units):
        raise ConfigurationError("formation size changed during the configuration update")

    for unit, slot in zip(units, assignment):
        unit._assign(int(slot))
        unit.recompute()
    group.assignment = assignment
