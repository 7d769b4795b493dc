from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Union
import numpy as np


@dataclass(frozen=True, eq=False)
class Reference:
    """
    Origin of a formation: world position plus a 3x3 rotation that turns
    local slot offsets into world directions.
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.eye(3))

    def __post_init__(self):
        object.__setattr__(self, "position", np.asarray(self.position, dtype=float).reshape(3))
        object.__setattr__(self, "rotation", np.asarray(self.rotation, dtype=float).reshape(3, 3))

    @classmethod
    def at(cls, position) -> "Reference":
        """Bare target position, no rotation."""
        return cls(position=position)

    def to_world(self, offset: np.ndarray) -> np.ndarray:
        return self.position + self.rotation @ np.asarray(offset, dtype=float)


def yaw_rotation(heading: float) -> np.ndarray:
    """Rotation about Z by ``heading`` radians."""
    cos_h = np.cos(heading)
    sin_h = np.sin(heading)
    return np.array([[cos_h, -sin_h, 0.0], [sin_h, cos_h, 0.0], [0.0, 0.0, 1.0]])


ReferenceSource = Union[Reference, Callable[[], Reference]]


class ReferenceRegistry:
    """
    Tag -> reference lookup. A tag may point to a fixed ``Reference`` or to a
    callable returning the current one, e.g. the pose of a moving leader.
    """

    def __init__(self):
        self._sources: Dict[str, ReferenceSource] = {}

    def register(self, tag: str, source: ReferenceSource):
        self._sources[tag] = source

    def unregister(self, tag: str):
        self._sources.pop(tag, None)

    def lookup(self, tag: str) -> Optional[Reference]:
        source = self._sources.get(tag)
        if source is None:
            return None
        if callable(source):
            return source()
        return source

    def __contains__(self, tag: str) -> bool:
        return tag in self._sources


def resolve(
    reference: Optional[Reference] = None,
    tag: Optional[str] = None,
    registry: Optional[ReferenceRegistry] = None,
    target_position=None,
) -> Reference:
    """
    Pick the formation origin: an explicit reference first, then a tagged one
    from ``registry``, then the bare ``target_position`` (origin if unset).
    """
    if reference is not None:
        return reference
    if tag is not None and registry is not None:
        found = registry.lookup(tag)
        if found is not None:
            return found
    if target_position is None:
        return Reference()
    return Reference.at(target_position)
