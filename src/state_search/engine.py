# engine.py
# Breadth-first search engine.
#
# The Solver is the kernel. Puzzle specifications are passive: this class owns
# the queue, the visited set and the loop, and calls back into the caller's
# successor generator and goal predicate.
#
# Control flow:
#   no goal configured? → Unsolvable
#   → seed queue + visited set with the initial state
#   → dequeue → goal check → expand → dedup at enqueue time
#   → queue empty → NoSolution
#
# All terminal output is delegated to display.py; no formatting here.

from collections import deque

from state_search import display
from state_search.fingerprint import VisitedSet
from state_search.models import NoSolution, PuzzleSpecification, SearchResult, Solved, Unsolvable


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SearchBudgetExceeded(Exception):
    """Raised when a solver with max_expansions set runs out of budget."""

    def __init__(self, limit: int, discovered: int) -> None:
        super().__init__(
            f"Search stopped after expanding {limit} state(s) "
            f"({discovered} discovered) without reaching a goal."
        )
        self.limit = limit
        self.discovered = discovered


# ---------------------------------------------------------------------------
# Solver
# ---------------------------------------------------------------------------


class Solver:
    """
    Shortest-path search over the implicit graph of a puzzle specification.

    Every call to solve() owns its own queue and visited set, so one Solver
    may be shared between threads as long as the specifications are pure.

    Example:
        solver = Solver(verbose=True)
        result = solver.solve(spec)
    """

    def __init__(self, verbose: bool = False, max_expansions: int | None = None) -> None:
        if max_expansions is not None and max_expansions < 1:
            raise ValueError("max_expansions must be a positive integer or None.")
        self._verbose = verbose
        self._max_expansions = max_expansions

    def solve(self, spec: PuzzleSpecification) -> SearchResult:
        """
        Breadth-first search from spec.initial_state.

        The goal check runs when a state is dequeued, so the first goal found
        lies at the minimum depth. States are marked visited when discovered,
        not when expanded, so no state is ever queued twice.

        Exceptions raised by the specification's callables propagate as-is.
        """
        if spec.is_goal is None:
            result = Unsolvable()
            if self._verbose:
                display.unsolvable(spec.name, result.reason)
            return result

        if self._verbose:
            display.search_started(spec.name, spec.initial_description)

        visited = VisitedSet()
        visited.add(spec.initial_state)
        queue = deque([(spec.initial_state, [spec.initial_description])])
        expanded = 0

        while queue:
            state, trace = queue.popleft()

            if spec.is_goal(state):
                result = Solved(
                    trace=trace + [spec.describe_goal(state)],
                    states_expanded=expanded,
                    states_discovered=len(visited),
                )
                if self._verbose:
                    display.goal_reached(spec.name, result)
                return result

            if self._max_expansions is not None and expanded >= self._max_expansions:
                if self._verbose:
                    display.budget_exhausted(spec.name, self._max_expansions)
                raise SearchBudgetExceeded(self._max_expansions, len(visited))

            expanded += 1
            for description, new_state in spec.successors_of(state):
                if visited.add(new_state):
                    queue.append((new_state, trace + [description]))

        result = NoSolution(states_expanded=expanded, states_discovered=len(visited))
        if self._verbose:
            display.search_exhausted(spec.name, result)
        return result


def solve(spec: PuzzleSpecification) -> SearchResult:
    """Search `spec` with a quiet, unbounded Solver."""
    return Solver().solve(spec)
