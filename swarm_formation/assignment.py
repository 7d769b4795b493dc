"""
Agent to slot assignment.

``solve`` blends two solvers: the first ``ceil(N * (1 - ratio))`` slots are
taken greedily by their nearest free agent, the remaining agents and slots
are matched optimally with the Hungarian algorithm on an integer cost
matrix. Every call works on its own local state.
"""
from __future__ import annotations
import logging
import math
from typing import Dict, Iterable, List, Tuple
import numpy as np

from . import config as C
from .validation import clamp_ratio, report

logger = logging.getLogger(__name__)


class AssignmentError(ValueError):
    """Agent and slot inputs do not describe one square assignment problem."""


class IndexMap:
    """
    Dense local indices ``0..k-1`` for a subset of global indices, used to
    solve a sub-matrix and translate its result back.
    """

    def __init__(self, global_indices: Iterable[int]):
        self._to_global = np.asarray(list(global_indices), dtype=int)
        self._to_local: Dict[int, int] = {int(g): i for i, g in enumerate(self._to_global)}
        if len(self._to_local) != len(self._to_global):
            raise ValueError("global indices must be unique")

    @classmethod
    def excluding(cls, n: int, used: Iterable[int]) -> "IndexMap":
        """All indices of ``range(n)`` not in ``used``, in ascending order."""
        used = set(used)
        return cls(i for i in range(n) if i not in used)

    @property
    def indices(self) -> np.ndarray:
        return self._to_global.copy()

    def global_index(self, local: int) -> int:
        return int(self._to_global[local])

    def local_index(self, global_index: int) -> int:
        return self._to_local[int(global_index)]

    def __len__(self) -> int:
        return len(self._to_global)

    def __contains__(self, global_index: int) -> bool:
        return int(global_index) in self._to_local


# -----------------------------
# Costs
# -----------------------------
def _points(values, name: str) -> np.ndarray:
    points = np.asarray(values, dtype=float)
    if points.size == 0:
        return points.reshape(0, 3)
    if points.ndim != 2:
        raise AssignmentError(f"{name} must be a sequence of vectors, got shape {points.shape}")
    return points


def distance_matrix(agent_positions, slot_positions) -> np.ndarray:
    """Euclidean distances, rows are agents and columns are slots."""
    agents = _points(agent_positions, "agent_positions")
    slots = _points(slot_positions, "slot_positions")
    if len(agents) and len(slots) and agents.shape[1] != slots.shape[1]:
        raise AssignmentError(f"agents are {agents.shape[1]}-D but slots are {slots.shape[1]}-D")
    return np.linalg.norm(agents[:, None, :] - slots[None, :, :], axis=-1)


def cost_matrix(agent_positions, slot_positions, scale: float = C.COST_SCALE) -> np.ndarray:
    """Integer travel costs ``floor(distance * scale)``."""
    return np.floor(distance_matrix(agent_positions, slot_positions) * scale).astype(np.int64)


def total_cost(agent_positions, slot_positions, assignment, scale: float = C.COST_SCALE) -> int:
    costs = cost_matrix(agent_positions, slot_positions, scale)
    assignment = np.asarray(assignment, dtype=int)
    return int(costs[np.arange(len(assignment)), assignment].sum())


# -----------------------------
# Greedy solver
# -----------------------------
def greedy(distances: np.ndarray, slot_count: int) -> List[Tuple[int, int]]:
    """
    Give each of the first ``slot_count`` slots, in order, its nearest free
    agent. Ties go to the lowest agent index. Returns ``(agent, slot)`` pairs.
    """
    free = list(range(distances.shape[0]))
    pairs = []
    for slot in range(slot_count):
        best, best_distance = None, math.inf
        for agent in free:
            if distances[agent, slot] < best_distance:
                best, best_distance = agent, distances[agent, slot]
        free.remove(best)
        pairs.append((best, slot))
    return pairs


# -----------------------------
# Hungarian solver
# -----------------------------
_STAR = 1
_PRIME = 2


class _HungarianState:
    def __init__(self, costs: np.ndarray):
        self.costs = np.array(costs, dtype=np.int64)
        n = self.costs.shape[0]
        self.marked = np.zeros((n, n), dtype=int)
        self.row_covered = np.zeros(n, dtype=bool)
        self.col_covered = np.zeros(n, dtype=bool)
        self.path = np.zeros((2 * n, 2), dtype=int)
        self.start = (0, 0)

    def clear_covers(self):
        self.row_covered[:] = False
        self.col_covered[:] = False


def _reduce_rows(state: _HungarianState):
    """Subtract each row minimum and star one independent zero per row and column."""
    state.costs -= state.costs.min(axis=1)[:, np.newaxis]
    for i, j in zip(*np.where(state.costs == 0)):
        if not state.row_covered[i] and not state.col_covered[j]:
            state.marked[i, j] = _STAR
            state.row_covered[i] = True
            state.col_covered[j] = True
    state.clear_covers()
    return _cover_starred_columns


def _cover_starred_columns(state: _HungarianState):
    starred = state.marked == _STAR
    state.col_covered[np.any(starred, axis=0)] = True
    if starred.sum() < state.costs.shape[0]:
        return _prime_zeros
    return None


def _prime_zeros(state: _HungarianState):
    """
    Prime uncovered zeros. A primed zero with a star in its row covers that
    row and uncovers the star's column; one without starts an augmenting path.
    """
    zeros = (state.costs == 0).astype(int)
    uncovered = zeros * (~state.row_covered)[:, np.newaxis]
    uncovered *= (~state.col_covered).astype(int)
    n = state.costs.shape[0]

    while True:
        row, col = np.unravel_index(np.argmax(uncovered), (n, n))
        if uncovered[row, col] == 0:
            return _adjust_costs
        state.marked[row, col] = _PRIME
        star_col = np.argmax(state.marked[row] == _STAR)
        if state.marked[row, star_col] != _STAR:
            state.start = (row, col)
            return _augment
        col = star_col
        state.row_covered[row] = True
        state.col_covered[col] = False
        uncovered[:, col] = zeros[:, col] * (~state.row_covered).astype(int)
        uncovered[row] = 0


def _augment(state: _HungarianState):
    """Flip stars and primes along the alternating path from the last prime."""
    path = state.path
    count = 0
    path[count] = state.start

    while True:
        row = np.argmax(state.marked[:, path[count, 1]] == _STAR)
        if state.marked[row, path[count, 1]] != _STAR:
            break
        count += 1
        path[count] = (row, path[count - 1, 1])

        col = np.argmax(state.marked[path[count, 0]] == _PRIME)
        if state.marked[row, col] != _PRIME:
            col = -1
        count += 1
        path[count] = (path[count - 1, 0], col)

    for i in range(count + 1):
        r, c = path[i]
        state.marked[r, c] = 0 if state.marked[r, c] == _STAR else _STAR

    state.clear_covers()
    state.marked[state.marked == _PRIME] = 0
    return _cover_starred_columns


def _adjust_costs(state: _HungarianState):
    """Add the smallest uncovered cost to covered rows, subtract it from uncovered columns."""
    if np.any(~state.row_covered) and np.any(~state.col_covered):
        minval = state.costs[~state.row_covered][:, ~state.col_covered].min()
        state.costs[state.row_covered] += minval
        state.costs[:, ~state.col_covered] -= minval
    return _prime_zeros


def hungarian(costs) -> np.ndarray:
    """
    Minimum-cost perfect matching of a square integer cost matrix. Returns
    ``columns`` with ``columns[row]`` the column matched to ``row``.
    """
    costs = np.asarray(costs)
    if costs.ndim != 2 or costs.shape[0] != costs.shape[1]:
        raise AssignmentError(f"cost matrix must be square, got shape {costs.shape}")
    if costs.shape[0] == 0:
        return np.zeros(0, dtype=int)

    state = _HungarianState(costs)
    step = _reduce_rows
    while step is not None:
        step = step(state)
    return np.argmax(state.marked == _STAR, axis=1)


# -----------------------------
# Blended solver
# -----------------------------
def split(n: int, complexity_ratio: float) -> Tuple[int, int]:
    """Number of greedily and optimally assigned slots."""
    simple = math.ceil(round(n * (1.0 - complexity_ratio), 9))
    return simple, n - simple


def solve(
    agent_positions,
    slot_positions,
    complexity_ratio: float = C.ASSIGN_COMPLEXITY,
    cost_scale: float = C.COST_SCALE,
) -> np.ndarray:
    """
    Assign every agent a distinct slot. ``complexity_ratio`` 0 is greedy only,
    1 is optimal only. Returns ``assignment`` with ``assignment[agent] = slot``.
    """
    agents = _points(agent_positions, "agent_positions")
    slots = _points(slot_positions, "slot_positions")
    if len(agents) != len(slots):
        raise AssignmentError(f"{len(agents)} agents cannot be assigned to {len(slots)} slots")

    ratio, warning = clamp_ratio(complexity_ratio)
    report([warning])

    n = len(agents)
    assignment = np.full(n, -1, dtype=int)
    if n == 0:
        return assignment

    simple, complex_ = split(n, ratio)
    logger.debug("Assigning %d agents: %d greedy, %d optimal", n, simple, complex_)

    distances = distance_matrix(agents, slots)
    pairs = greedy(distances, simple)
    for agent, slot in pairs:
        assignment[agent] = slot

    if complex_:
        free_agents = IndexMap.excluding(n, (agent for agent, _ in pairs))
        free_slots = IndexMap.excluding(n, range(simple))
        costs = np.floor(distances * cost_scale).astype(np.int64)
        sub = costs[np.ix_(free_agents.indices, free_slots.indices)]
        for row, col in enumerate(hungarian(sub)):
            assignment[free_agents.global_index(row)] = free_slots.global_index(col)

    return assignment
