# run.py
# Entry point. Config and wiring only; no logic lives here.
#
# Settings come from the environment (see config.py); set
# STATE_SEARCH_VERBOSE=1 to narrate each search as it runs.

from state_search import display
from state_search.config import load_settings
from state_search.engine import SearchBudgetExceeded, Solver
from state_search.puzzles import hanoi, jugs, river, sliding

PUZZLES = [
    river.build(),
    jugs.build(capacities=(3, 5), target=4),
    hanoi.build(disks=3),
    sliding.build(),
    # Two tiles swapped: odd parity, never reaches the solved grid.
    sliding.build(start=((2, 1), (3, 0))),
]


def main() -> None:
    settings = load_settings()
    solver = Solver(**settings.solver_options())
    display.banner(len(PUZZLES))

    rows = []
    for spec in PUZZLES:
        try:
            result = solver.solve(spec)
        except SearchBudgetExceeded as exc:
            display.halt(str(exc))
            rows.append((spec.name, None))
            continue
        display.trace(spec.name, result)
        rows.append((spec.name, result))

    display.summary(rows)


if __name__ == "__main__":
    main()
