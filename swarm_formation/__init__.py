"""
Formation package for agent swarms.

This package contains:
- shapes/          : Slot geometry for Line, Circle, Box, Cross, Arrow and V
- catchup.py       : Catch-up radius system (distance -> movement magnitude)
- formation.py     : FormationUnit, one agent's steering contribution
- assignment.py    : Greedy + Hungarian agent-to-slot assignment
- configuration.py : FormationGroup and update_configuration
- reference.py     : Formation origin (position + rotation) and tag lookup
- validation.py    : Clamp-and-report parameter validators
- config.py        : Default values for all of the above
"""

# Explicit exports
from . import config
from . import validation
from . import shapes
from . import catchup
from . import reference
from . import formation
from . import assignment
from . import configuration

from .assignment import AssignmentError, IndexMap, solve
from .catchup import CatchUpSpec, DistanceMapping, magnitude, map_distance
from .configuration import ConfigurationError, FormationGroup, update_configuration
from .formation import FormationOwnershipError, FormationUnit, SteeringResult
from .reference import Reference, ReferenceRegistry
from .shapes import (
    Arrow,
    Box,
    Circle,
    Cross,
    FormationSpec,
    Layout,
    Line,
    ShapeType,
    V,
    compute_position,
)
from .validation import ParameterWarning

# So you can do:
#   from swarm_formation import FormationUnit, Box, ShapeType
# or:
#   from swarm_formation.assignment import solve

__all__ = [
    "config",
    "validation",
    "shapes",
    "catchup",
    "reference",
    "formation",
    "assignment",
    "configuration",
    "AssignmentError",
    "IndexMap",
    "solve",
    "CatchUpSpec",
    "DistanceMapping",
    "magnitude",
    "map_distance",
    "ConfigurationError",
    "FormationGroup",
    "update_configuration",
    "FormationOwnershipError",
    "FormationUnit",
    "SteeringResult",
    "Reference",
    "ReferenceRegistry",
    "Arrow",
    "Box",
    "Circle",
    "Cross",
    "FormationSpec",
    "Layout",
    "Line",
    "ShapeType",
    "V",
    "compute_position",
    "ParameterWarning",
]
