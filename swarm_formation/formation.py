from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import numpy as np

from . import config as C
from .catchup import CatchUpSpec
from .reference import Reference, ReferenceRegistry, resolve
from .shapes import FormationSpec, Layout, Line, ShapeVariant, compute_position
from .validation import at_most, clamp_position, clamp_size, clamp_spacing, report


class FormationOwnershipError(RuntimeError):
    """A slot owned by a FormationGroup was written from outside the group."""


@dataclass
class SteeringResult:
    direction: np.ndarray
    magnitude: float
    distance: float
    target: np.ndarray


class FormationUnit:
    """
    One agent's membership in a formation: its slot parameters, the catch-up
    profile, and where the formation origin comes from.

    Setters only store (clamped) values. Call ``recompute()`` once after a
    batch of changes; the layout is computed lazily on first access.
    """

    def __init__(
        self,
        size: int = C.SIZE,
        position_in_formation: int = C.POSITION_IN_FORMATION,
        spacing: float = C.SPACING,
        shape: ShapeVariant | None = None,
        up_axis=C.UP_AXIS,
        catch_up: CatchUpSpec | None = None,
        reference: Reference | None = None,
        tag: str | None = None,
        registry: ReferenceRegistry | None = None,
        target_position=None,
        agent_position=None,
        active: bool = True,
        name: str | None = None,
    ):
        self.warnings: list = []
        self.name = name
        self.active = active
        self.catch_up = catch_up if catch_up is not None else CatchUpSpec()

        self.reference = reference
        self.tag = tag
        self.registry = registry
        self.target_position = None if target_position is None else np.asarray(target_position, dtype=float)
        self.agent_position = np.zeros(3) if agent_position is None else np.asarray(agent_position, dtype=float)

        self._group = None
        self._layout: Optional[Layout] = None
        self._stale = True
        self.size = size
        self.position_in_formation = position_in_formation
        self.spacing = spacing
        self.shape = shape if shape is not None else Line()
        self.up_axis = up_axis

    # -----------------------------
    # Formation parameters
    # -----------------------------
    @property
    def size(self) -> int:
        return self._size

    @size.setter
    def size(self, value: int):
        value, warning = clamp_size(value)
        report([warning], self.warnings)
        self._size = value
        self._stale = True

    @property
    def position_in_formation(self) -> int:
        return self._position

    @position_in_formation.setter
    def position_in_formation(self, value: int):
        if self._group is not None:
            raise FormationOwnershipError(
                f"{self!r} is managed by a formation group; its slot is assigned by the group"
            )
        self._assign(value)

    def _assign(self, value: int):
        value, warning = clamp_position(value)
        report([warning], self.warnings)
        self._position = value
        self._stale = True

    @property
    def spacing(self) -> float:
        return self._spacing

    @spacing.setter
    def spacing(self, value: float):
        value, warning = clamp_spacing(value)
        report([warning], self.warnings)
        self._spacing = value
        self._stale = True

    @property
    def shape(self) -> ShapeVariant:
        return self._shape

    @shape.setter
    def shape(self, value: ShapeVariant):
        self._shape = value
        self._stale = True

    @property
    def up_axis(self):
        return self._up_axis

    @up_axis.setter
    def up_axis(self, value):
        self._up_axis = tuple(float(v) for v in value)
        self._stale = True

    @property
    def managed(self) -> bool:
        return self._group is not None

    @property
    def stale(self) -> bool:
        """Parameters changed since the last ``recompute()``."""
        return self._stale

    # -----------------------------
    # Layout
    # -----------------------------
    def spec(self) -> FormationSpec:
        position, warning = at_most("position_in_formation", self._position, self._size - 1, "size - 1")
        report([warning], self.warnings)
        return FormationSpec(self._size, position, self._spacing, self._shape, self._up_axis)

    def recompute(self) -> Layout:
        self._layout = compute_position(self.spec())
        self._stale = False
        return self._layout

    @property
    def layout(self) -> Layout:
        if self._layout is None:
            return self.recompute()
        return self._layout

    @property
    def local_offset(self) -> np.ndarray:
        return self.layout.offset

    @property
    def layers(self) -> int:
        return self.layout.layers

    @property
    def sparse_layers(self) -> int:
        return self.layout.sparse_layers

    # -----------------------------
    # Steering
    # -----------------------------
    def resolve_reference(self) -> Reference:
        return resolve(self.reference, self.tag, self.registry, self.target_position)

    def target(self, reference: Reference | None = None) -> np.ndarray:
        """World position of this unit's slot."""
        reference = reference if reference is not None else self.resolve_reference()
        return reference.to_world(self.local_offset)

    def steer(self, agent_position=None, reference: Reference | None = None) -> SteeringResult:
        """
        Direction towards the slot and the catch-up magnitude for the current
        distance. The direction is the zero vector once the agent sits on its
        slot.
        """
        position = self.agent_position if agent_position is None else np.asarray(agent_position, dtype=float)
        target = self.target(reference)
        delta = target - position
        distance = float(np.linalg.norm(delta))
        direction = delta / distance if distance > 0.0 else np.zeros(3)
        return SteeringResult(direction, self.catch_up.magnitude(distance), distance, target)

    def __repr__(self) -> str:
        label = self.name if self.name is not None else hex(id(self))
        return f"FormationUnit({label}, slot={self._position}/{self._size}, shape={self._shape})"
