from collections import Counter
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from state_search.engine import SearchBudgetExceeded, Solver, solve
from state_search.fingerprint import fingerprint
from state_search.models import Move, NoSolution, PuzzleSpecification, Solved, Unsolvable


def _graph_spec(edges: dict, start, goals, **kwargs) -> PuzzleSpecification:
    """Specification over an explicit adjacency list of (description, state) pairs."""
    return PuzzleSpecification(
        initial_state=start,
        initial_description=f"Start at {start}.",
        successors_of=lambda state: [Move(d, s) for d, s in edges.get(state, [])],
        is_goal=lambda state: state in goals,
        goal_description="Arrived.",
        **kwargs,
    )


def _ring_spec(size: int, goal, counter: Counter | None = None) -> PuzzleSpecification:
    """Integers modulo `size`; every step has an exact inverse, so the graph is cyclic."""

    def successors_of(n: int) -> list[Move]:
        if counter is not None:
            counter[n] += 1
        return [Move("Step forward.", (n + 1) % size), Move("Step back.", (n - 1) % size)]

    return PuzzleSpecification(
        initial_state=0,
        initial_description="Standing at 0.",
        successors_of=successors_of,
        is_goal=lambda n: n == goal,
        goal_description=f"Reached {goal}.",
    )


# ---------------------------------------------------------------------------
# Outcome Tests
# ---------------------------------------------------------------------------

def test_initial_state_already_goal():
    spec = _graph_spec({"a": [("go", "b")]}, "a", {"a"})
    result = solve(spec)
    assert isinstance(result, Solved)
    assert result.trace == ["Start at a.", "Arrived."]
    assert result.moves == []
    assert result.move_count == 0


def test_goal_never_true_returns_no_solution():
    spec = _graph_spec({"a": [("go", "b")], "b": [("back", "a")]}, "a", set())
    result = solve(spec)
    assert isinstance(result, NoSolution)
    assert result.states_expanded == 2
    assert result.states_discovered == 2


def test_disconnected_goal_returns_no_solution():
    edges = {"a": [("a to b", "b")], "b": [], "island": [("stay", "island")]}
    assert isinstance(solve(_graph_spec(edges, "a", {"island"})), NoSolution)


def test_missing_goal_predicate_is_unsolvable_without_searching():
    successors = MagicMock(return_value=[])
    spec = PuzzleSpecification(
        initial_state=0,
        initial_description="Nothing to do.",
        successors_of=successors,
    )
    result = solve(spec)
    assert isinstance(result, Unsolvable)
    successors.assert_not_called()


# ---------------------------------------------------------------------------
# Shortest Path & Ordering Tests
# ---------------------------------------------------------------------------

def test_shorter_path_wins_even_when_listed_second():
    edges = {
        "start": [("Take the long way.", "a"), ("Take the short way.", "b")],
        "a": [("a to c", "c")],
        "c": [("c to end", "end")],
        "b": [("b to end", "end")],
    }
    result = solve(_graph_spec(edges, "start", {"end"}))
    assert result.trace == ["Start at start.", "Take the short way.", "b to end", "Arrived."]


def test_ties_go_to_the_first_produced_move():
    edges = {"s": [("left", "L"), ("right", "R")]}
    result = solve(_graph_spec(edges, "s", {"L", "R"}))
    assert result.moves == ["left"]


def test_ties_go_to_the_earliest_dequeued_source():
    edges = {
        "s": [("to x", "x"), ("to y", "y")],
        "y": [("y to goal", "g2")],
        "x": [("x to goal", "g1")],
    }
    result = solve(_graph_spec(edges, "s", {"g1", "g2"}))
    assert result.moves == ["to x", "x to goal"]


def test_cycles_terminate_with_shortest_direction():
    result = solve(_ring_spec(10, goal=7))
    assert isinstance(result, Solved)
    assert result.moves == ["Step back."] * 3


def test_solve_is_deterministic():
    spec = _ring_spec(12, goal=5)
    assert solve(spec) == solve(spec)


# ---------------------------------------------------------------------------
# Dedup Tests
# ---------------------------------------------------------------------------

def test_no_state_is_expanded_twice():
    counter = Counter()
    result = solve(_ring_spec(9, goal=None, counter=counter))
    assert isinstance(result, NoSolution)
    assert set(counter) == set(range(9))
    assert max(counter.values()) == 1
    assert result.states_expanded == 9


def test_diamond_discovers_shared_state_once():
    edges = {
        "top": [("left", "l"), ("right", "r")],
        "l": [("l down", "bottom")],
        "r": [("r down", "bottom")],
        "bottom": [],
    }
    expanded = Counter()
    spec = _graph_spec(edges, "top", set())
    counted = spec.model_copy(
        update={"successors_of": lambda s: expanded.update([s]) or spec.successors_of(s)}
    )
    result = solve(counted)
    assert result.states_discovered == 4
    assert expanded == Counter({"top": 1, "l": 1, "r": 1, "bottom": 1})


def test_structurally_equal_states_are_deduplicated():
    # Each step rebuilds the dict in a different key order.
    def successors_of(state: dict) -> list[Move]:
        flipped = dict(reversed(list({**state, "n": (state["n"] + 1) % 3}.items())))
        return [Move("Advance.", flipped)]

    spec = PuzzleSpecification(
        initial_state={"n": 0, "tag": "x"},
        initial_description="n is 0.",
        successors_of=successors_of,
        is_goal=lambda state: False,
        goal_description="Done.",
    )
    result = solve(spec)
    assert result.states_discovered == 3
    assert fingerprint({"tag": "x", "n": 0}) == fingerprint({"n": 0, "tag": "x"})


def test_int_and_float_levels_are_one_state():
    # Whole steps stay ints; two half steps land on the same level as a float.
    expanded = Counter()

    def successors_of(level):
        expanded[level] += 1
        steps = [Move("Climb a whole step.", level + 1), Move("Climb a half step.", level + 0.5)]
        return [move for move in steps if move.state <= 2.5]

    spec = PuzzleSpecification(
        initial_state=0,
        initial_description="At the bottom.",
        successors_of=successors_of,
        is_goal=lambda level: False,
        goal_description="Done.",
    )
    result = solve(spec)
    assert isinstance(result, NoSolution)
    assert result.states_expanded == 6
    assert max(expanded.values()) == 1


# ---------------------------------------------------------------------------
# Caller Fault & Budget Tests
# ---------------------------------------------------------------------------

def test_successor_errors_propagate():
    def broken(state):
        raise RuntimeError("rule exploded")

    spec = PuzzleSpecification(
        initial_state=0,
        initial_description="Start.",
        successors_of=broken,
        is_goal=lambda state: False,
        goal_description="Done.",
    )
    with pytest.raises(RuntimeError, match="rule exploded"):
        solve(spec)


def test_goal_predicate_errors_propagate():
    spec = PuzzleSpecification(
        initial_state=0,
        initial_description="Start.",
        successors_of=lambda state: [],
        is_goal=MagicMock(side_effect=KeyError("missing")),
        goal_description="Done.",
    )
    with pytest.raises(KeyError):
        solve(spec)


def test_non_callable_successors_rejected_at_construction():
    with pytest.raises(ValidationError):
        PuzzleSpecification(initial_state=0, initial_description="x", successors_of="not callable")


def test_goal_predicate_requires_a_goal_description():
    with pytest.raises(ValidationError, match="goal_description"):
        PuzzleSpecification(
            initial_state=0,
            initial_description="Start.",
            successors_of=lambda state: [],
            is_goal=lambda state: True,
        )


def test_goal_describer_stands_in_for_goal_description():
    spec = PuzzleSpecification(
        initial_state=3,
        initial_description="Start.",
        successors_of=lambda state: [],
        is_goal=lambda state: True,
        goal_describer=lambda state: f"Finished on {state}.",
    )
    assert solve(spec).trace == ["Start.", "Finished on 3."]


def test_budget_exceeded_on_unbounded_graph():
    spec = PuzzleSpecification(
        initial_state=0,
        initial_description="Counting up.",
        successors_of=lambda n: [Move("Add one.", n + 1)],
        is_goal=lambda n: n < 0,
        goal_description="Went below zero.",
    )
    with pytest.raises(SearchBudgetExceeded) as exc_info:
        Solver(max_expansions=25).solve(spec)
    assert exc_info.value.limit == 25
    assert exc_info.value.discovered == 26


def test_budget_large_enough_still_solves():
    result = Solver(max_expansions=100).solve(_ring_spec(10, goal=7))
    assert result.move_count == 3


def test_invalid_budget_rejected():
    with pytest.raises(ValueError, match="max_expansions"):
        Solver(max_expansions=0)


# ---------------------------------------------------------------------------
# Display Wiring Tests
# ---------------------------------------------------------------------------

@patch("state_search.engine.display")
def test_verbose_solver_reports_lifecycle(mock_display):
    result = Solver(verbose=True).solve(_ring_spec(4, goal=2))
    mock_display.search_started.assert_called_once_with("puzzle", "Standing at 0.")
    mock_display.goal_reached.assert_called_once_with("puzzle", result)
    mock_display.search_exhausted.assert_not_called()


@patch("state_search.engine.display")
def test_quiet_solver_prints_nothing(mock_display):
    solve(_ring_spec(4, goal=None))
    assert mock_display.method_calls == []
