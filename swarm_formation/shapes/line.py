from __future__ import annotations

from .common import centered, layout
from .variants import FormationSpec, Layout, Line


def compute(spec: FormationSpec, shape: Line) -> Layout:
    """Single row along X, slot 0 on the left, centred on the reference."""
    x = centered(spec.size, spec.spacing) + spec.position * spec.spacing
    return layout((x, 0.0, 0.0), spec.up_axis, layers=1)
