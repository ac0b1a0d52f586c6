# jugs.py
# Two-vessel measuring puzzle. State is a (first, second) tuple of litres held.

from state_search.models import Move, PuzzleSpecification


def build(capacities: tuple[int, int] = (3, 5), target: int = 4) -> PuzzleSpecification:
    """Measure exactly `target` litres using two unmarked jugs and a tap."""
    if min(capacities) < 1 or target < 0:
        raise ValueError("Capacities must be positive and the target non-negative.")

    names = [f"{c}-litre jug" for c in capacities]

    def pour(state: tuple[int, int], source: int, dest: int) -> tuple[int, int]:
        amount = min(state[source], capacities[dest] - state[dest])
        levels = list(state)
        levels[source] -= amount
        levels[dest] += amount
        return tuple(levels)

    def successors_of(state: tuple[int, int]) -> list[Move]:
        candidates = []
        for i in (0, 1):
            filled = list(state)
            filled[i] = capacities[i]
            candidates.append(Move(f"Fill the {names[i]}.", tuple(filled)))
        for i in (0, 1):
            emptied = list(state)
            emptied[i] = 0
            candidates.append(Move(f"Empty the {names[i]}.", tuple(emptied)))
        candidates.append(Move(f"Pour the {names[0]} into the {names[1]}.", pour(state, 0, 1)))
        candidates.append(Move(f"Pour the {names[1]} into the {names[0]}.", pour(state, 1, 0)))
        # No-op moves (filling a full jug, pouring an empty one) are not moves.
        return [move for move in candidates if move.state != state]

    return PuzzleSpecification(
        name="water jugs",
        initial_state=(0, 0),
        initial_description=f"Both jugs are empty; the goal is exactly {target} litres.",
        successors_of=successors_of,
        is_goal=lambda state: target in state,
        goal_description=f"One jug now holds exactly {target} litres.",
    )
