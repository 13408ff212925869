"""Constraint-propagation Sudoku solver with minimum-remaining-value guessing.

Every cell carries a domain of candidate digits. Propagation alternates two
passes over the 27 units until the total degree of freedom stops shrinking:

* elimination removes the value of every single-candidate cell from the
  other cells of its units;
* assignment fixes a cell to a value when that value is a candidate of no
  other cell in one of its units (hidden single).

When propagation stalls the solver guesses on the cell with the fewest
candidates: a cloned state tries the first candidate, and if that branch
fails the candidate is excluded from the original state and propagation
resumes. A state is contradictory as soon as a domain becomes empty or two
single-candidate cells of one unit share a value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Set

from project_config import get_section, get_setting

from .grid import Grid
from .trace import SolveTrace
from .units import ALL_CELLS, DIGITS, SIZE, UNITS, Cell, Unit

_LOGGER = logging.getLogger(__name__)

DEFAULT_PROPAGATION_ROUNDS = 2


class CandidateState:
    """Per-cell candidate domains of an in-progress solve."""

    __slots__ = ("_domains",)

    def __init__(self, domains: List[List[Set[int]]]) -> None:
        self._domains = domains

    @classmethod
    def from_grid(cls, grid: Grid) -> "CandidateState":
        """Build the initial domains and run one elimination pass."""

        domains: List[List[Set[int]]] = []
        for r in range(SIZE):
            row: List[Set[int]] = []
            for c in range(SIZE):
                value = grid.get(r, c)
                row.append({value} if value else set(DIGITS))
            domains.append(row)
        state = cls(domains)
        state.eliminate()
        return state

    def clone(self) -> "CandidateState":
        return CandidateState([[set(domain) for domain in row] for row in self._domains])

    def assign_from(self, other: "CandidateState") -> None:
        """Overwrite every domain with a copy of the matching domain of ``other``."""

        for r, c in ALL_CELLS:
            target = self._domains[r][c]
            target.clear()
            target.update(other._domains[r][c])

    # Inspection -------------------------------------------------------

    def domain(self, row: int, col: int) -> FrozenSet[int]:
        return frozenset(self._domains[row][col])

    @property
    def degree_of_freedom(self) -> int:
        return sum(len(d) - 1 for row in self._domains for d in row if len(d) > 1)

    @property
    def correct(self) -> bool:
        """``False`` once the state can no longer lead to a solution."""

        for row in self._domains:
            for domain in row:
                if not domain:
                    return False
        for unit in UNITS:
            seen: Set[int] = set()
            for r, c in unit:
                domain = self._domains[r][c]
                if len(domain) != 1:
                    continue
                (value,) = domain
                if value in seen:
                    return False
                seen.add(value)
        return True

    @property
    def complete(self) -> bool:
        return all(len(d) == 1 for row in self._domains for d in row)

    # Propagation ------------------------------------------------------

    def eliminate(self) -> None:
        for unit in UNITS:
            self._eliminate_unit(unit)

    def assign_hidden_singles(self) -> None:
        for unit in UNITS:
            self._assign_unit(unit)

    def propagate(self, rounds: int = DEFAULT_PROPAGATION_ROUNDS) -> None:
        for _ in range(rounds):
            self.eliminate()
            self.assign_hidden_singles()

    def step(self, rounds: int = DEFAULT_PROPAGATION_ROUNDS) -> bool:
        """Run one propagation round and report whether it made progress."""

        before = self.degree_of_freedom
        self.propagate(rounds)
        return self.degree_of_freedom < before

    def _eliminate_unit(self, unit: Unit) -> None:
        domains = [self._domains[r][c] for r, c in unit]
        solved = {next(iter(d)) for d in domains if len(d) == 1}
        if not solved:
            return
        for domain in domains:
            if len(domain) != 1:
                domain.difference_update(solved)

    def _assign_unit(self, unit: Unit) -> None:
        domains = [self._domains[r][c] for r, c in unit]
        counts = dict.fromkeys(DIGITS, 0)
        for domain in domains:
            for value in domain:
                counts[value] += 1
        for value in DIGITS:
            if counts[value] != 1:
                continue
            for domain in domains:
                if len(domain) != 1 and value in domain:
                    domain.clear()
                    domain.add(value)
                    break

    # Guessing ---------------------------------------------------------

    def select_guess_cell(self) -> Optional[Cell]:
        """First cell in row-major order with the smallest domain above one."""

        best: Optional[Cell] = None
        best_size = SIZE + 1
        for r, c in ALL_CELLS:
            size = len(self._domains[r][c])
            if 1 < size < best_size:
                best, best_size = (r, c), size
                if size == 2:
                    break
        return best

    def first_candidate(self, cell: Cell) -> int:
        r, c = cell
        return min(self._domains[r][c])

    def fix(self, cell: Cell, value: int) -> None:
        r, c = cell
        domain = self._domains[r][c]
        domain.clear()
        domain.add(value)

    def exclude(self, cell: Cell, value: int) -> None:
        r, c = cell
        self._domains[r][c].discard(value)

    # Output -----------------------------------------------------------

    def to_grid(self, *, title: Optional[str] = None) -> Grid:
        """Assemble a grid from single-candidate domains; others stay blank."""

        grid = Grid(title)
        for r, c in ALL_CELLS:
            domain = self._domains[r][c]
            if len(domain) == 1:
                grid.set(r, c, next(iter(domain)))
        return grid

    def describe(self) -> str:
        lines = []
        for row in self._domains:
            items = []
            for domain in row:
                if not domain:
                    items.append("X")
                else:
                    items.append("[" + ", ".join(str(v) for v in sorted(domain)) + "]")
            lines.append(" ".join(items))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()


@dataclass
class SolveStats:
    guesses: int = 0
    exclusions: int = 0
    max_depth: int = 0
    propagation_rounds: int = 0

    def to_payload(self) -> dict:
        return {
            "guesses": self.guesses,
            "exclusions": self.exclusions,
            "max_depth": self.max_depth,
            "propagation_rounds": self.propagation_rounds,
        }


class Solver:
    """Solve a single :class:`Grid`.

    The caller's grid is copied on construction and never modified. Call
    :meth:`solve` for the full search or :meth:`step` to advance the working
    state one propagation round at a time.
    """

    def __init__(
        self,
        grid: Grid,
        *,
        trace_level: Optional[str] = None,
        propagation_rounds: Optional[int] = None,
    ) -> None:
        if grid is None:
            raise TypeError("grid must not be None")
        self._problem = grid.clone()
        self.state = CandidateState.from_grid(self._problem)
        if trace_level is None:
            trace_level = str(get_setting("solver.trace_level", "none"))
        if propagation_rounds is None:
            propagation_rounds = int(get_section("solver.propagation_rounds", DEFAULT_PROPAGATION_ROUNDS))
        if propagation_rounds < 1:
            raise ValueError("propagation_rounds must be >= 1")
        self.rounds = propagation_rounds
        self.trace = SolveTrace(trace_level=trace_level)
        self.stats = SolveStats()
        self._result: Optional[Grid] = None
        self.trace.record("init", depth=0, degree_of_freedom=self.state.degree_of_freedom)

    @property
    def problem(self) -> Grid:
        return self._problem.clone()

    def step(self) -> bool:
        """Run one propagation round on the working state; never guesses."""

        progress = self.state.step(self.rounds)
        self.stats.propagation_rounds += 1
        self.trace.record("propagate", depth=0, degree_of_freedom=self.state.degree_of_freedom)
        return progress

    def solve(self) -> Grid:
        """Return the solved grid, or an all-blank grid when there is no solution."""

        if self._result is None:
            if self._search(self.state, 0):
                result = self.state.to_grid(title=self._problem.title)
            else:
                result = Grid(self._problem.title)
            self._result = result
            _LOGGER.info(
                "Solve finished: solved=%s guesses=%d max_depth=%d",
                result.solved(),
                self.stats.guesses,
                self.stats.max_depth,
            )
        return self._result.clone()

    # Internal helpers -------------------------------------------------

    def _search(self, state: CandidateState, depth: int) -> bool:
        self.stats.max_depth = max(self.stats.max_depth, depth)
        while True:
            if not self._converge(state, depth):
                self.trace.record("contradiction", depth=depth, degree_of_freedom=state.degree_of_freedom)
                return False
            cell = state.select_guess_cell()
            if cell is None:
                self.trace.record("solved", depth=depth, degree_of_freedom=0)
                return True

            value = state.first_candidate(cell)
            branch = state.clone()
            branch.fix(cell, value)
            self.stats.guesses += 1
            self.trace.record(
                "guess",
                depth=depth,
                degree_of_freedom=state.degree_of_freedom,
                note=f"r{cell[0]}c{cell[1]}={value}",
            )
            _LOGGER.debug("Guess %d at r%dc%d (depth %d)", value, cell[0], cell[1], depth)

            if self._search(branch, depth + 1):
                state.assign_from(branch)
                self.trace.record("adopt", depth=depth, degree_of_freedom=0)
                return True

            state.exclude(cell, value)
            self.stats.exclusions += 1
            self.trace.record(
                "exclude",
                depth=depth,
                degree_of_freedom=state.degree_of_freedom,
                note=f"r{cell[0]}c{cell[1]}!={value}",
            )
            _LOGGER.debug("Excluded %d from r%dc%d (depth %d)", value, cell[0], cell[1], depth)

    def _converge(self, state: CandidateState, depth: int) -> bool:
        """Propagate until a fixed point; ``False`` on contradiction."""

        while True:
            if not state.correct:
                return False
            if state.complete:
                return True
            before = state.degree_of_freedom
            state.propagate(self.rounds)
            self.stats.propagation_rounds += 1
            after = state.degree_of_freedom
            self.trace.record("propagate", depth=depth, degree_of_freedom=after)
            if after >= before:
                return state.correct


def solve(grid: Grid) -> Grid:
    """Solve ``grid``; check ``solved()`` on the result."""

    return Solver(grid).solve()


def try_solve(grid: Grid) -> Optional[Grid]:
    """Solve ``grid`` and return ``None`` instead of a blank grid on failure."""

    result = solve(grid)
    return result if result.solved() else None


def can_be_solved(grid: Grid) -> bool:
    return solve(grid).solved()


__all__ = [
    "DEFAULT_PROPAGATION_ROUNDS",
    "CandidateState",
    "SolveStats",
    "Solver",
    "can_be_solved",
    "solve",
    "try_solve",
]
