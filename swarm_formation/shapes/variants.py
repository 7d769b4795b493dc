from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Tuple, Union
import numpy as np

from .. import config as C
from ..validation import clamp_agents_per_line, clamp_position, clamp_size, clamp_spacing, report


class ShapeType(Enum):
    """Build a formation as a flat (2D) or a volumetric (3D) variant."""

    PLANAR = "planar"
    SPATIAL = "spatial"


@dataclass(frozen=True)
class Line:
    pass


@dataclass(frozen=True)
class Circle:
    solid: bool = True


@dataclass(frozen=True)
class Cross:
    shape: ShapeType = ShapeType.PLANAR


@dataclass(frozen=True)
class Arrow:
    solid: bool = True
    shape: ShapeType = ShapeType.PLANAR


def _checked_lines(instance, value):
    lines, warnings = clamp_agents_per_line(value)
    report(warnings)
    object.__setattr__(instance, "agents_per_line", lines)


@dataclass(frozen=True)
class Box:
    """``agents_per_line`` is (width, height) of one full layer."""

    agents_per_line: Tuple[int, int] = C.BOX_AGENTS_PER_LINE
    solid: bool = True
    shape: ShapeType = ShapeType.PLANAR

    def __post_init__(self):
        _checked_lines(self, self.agents_per_line)


@dataclass(frozen=True)
class V:
    """``agents_per_line`` is (wing width, height) of the V."""

    agents_per_line: Tuple[int, int] = C.V_AGENTS_PER_LINE
    solid: bool = True
    shape: ShapeType = ShapeType.PLANAR

    def __post_init__(self):
        _checked_lines(self, self.agents_per_line)


ShapeVariant = Union[Line, Circle, Box, Cross, Arrow, V]


@dataclass(frozen=True)
class FormationSpec:
    """
    Everything one agent needs to compute its slot offset. A size below 1, a
    negative position or a negative spacing is clamped and the
    ``ParameterWarning`` kept in ``warnings``.
    """

    size: int = C.SIZE
    position: int = C.POSITION_IN_FORMATION
    spacing: float = C.SPACING
    shape: ShapeVariant = field(default_factory=Line)
    up_axis: Tuple[float, float, float] = C.UP_AXIS
    warnings: list = field(default_factory=list, init=False, compare=False, repr=False)

    def __post_init__(self):
        size, w_size = clamp_size(self.size)
        position, w_position = clamp_position(self.position)
        spacing, w_spacing = clamp_spacing(self.spacing)
        report([w_size, w_position, w_spacing], self.warnings)
        object.__setattr__(self, "size", size)
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "spacing", spacing)
        object.__setattr__(self, "up_axis", tuple(float(v) for v in self.up_axis))


class Layout(NamedTuple):
    """Local-space offset of one slot plus the layer bookkeeping of its shape."""

    offset: np.ndarray
    layers: int
    sparse_layers: int
