# hanoi.py
# Tower of Hanoi. Each peg is a tuple of disk sizes, bottom first.

from state_search.models import Move, PuzzleSpecification

PEGS = "ABC"


def successors_of(state: tuple[tuple[int, ...], ...]) -> list[Move]:
    moves = []
    for source, stack in enumerate(state):
        if not stack:
            continue
        disk = stack[-1]
        for dest, target in enumerate(state):
            if dest == source or (target and target[-1] < disk):
                continue
            pegs = list(state)
            pegs[source] = stack[:-1]
            pegs[dest] = target + (disk,)
            moves.append(Move(f"Move disk {disk} from peg {PEGS[source]} to peg {PEGS[dest]}.", tuple(pegs)))
    return moves


def build(disks: int = 3) -> PuzzleSpecification:
    if disks < 1:
        raise ValueError("Tower of Hanoi needs at least one disk.")
    tower = tuple(range(disks, 0, -1))
    solved = ((), (), tower)
    return PuzzleSpecification(
        name=f"tower of hanoi ({disks})",
        initial_state=(tower, (), ()),
        initial_description=f"All {disks} disks are stacked on peg A.",
        successors_of=successors_of,
        is_goal=lambda state: state == solved,
        goal_description="The whole tower now stands on peg C.",
    )
