# display.py
# All terminal output for the search engine and the puzzle runner.
#
# This module owns presentation entirely. engine.py never formats strings:
# it calls named functions here. Swap this file to change the entire UI.
#
# Colour language:
#   cyan    search lifecycle events
#   yellow  budgets and limits
#   green   solved
#   red     no solution / unsolvable
#   magenta trace steps

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from state_search.models import NoSolution, SearchResult, Solved, Unsolvable

console = Console()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _label(tag: str, color: str) -> Text:
    t = Text()
    t.append(f" {tag} ", style=f"bold white on {color}")
    return t


def _mono(value: str, max_len: int = 120) -> str:
    if len(value) > max_len:
        return value[:max_len] + "…"
    return value


# ---------------------------------------------------------------------------
# Runner entry
# ---------------------------------------------------------------------------


def banner(puzzle_count: int) -> None:
    console.print()
    console.print(
        Panel.fit(
            "[bold cyan]State-Space Search[/bold cyan]\n"
            "[dim]Breadth-first shortest move sequences over puzzle state graphs[/dim]\n\n"
            f"[dim]Puzzles :[/dim] [white]{puzzle_count}[/white]",
            border_style="cyan",
            padding=(1, 4),
        )
    )


# ---------------------------------------------------------------------------
# Search lifecycle
# ---------------------------------------------------------------------------


def search_started(name: str, initial_description: str) -> None:
    console.print()
    console.print(Rule(f"[cyan]{name.upper()}[/cyan]", style="cyan"))
    console.print(_label("SOLVER", "cyan"), f"[cyan] → Searching from:[/cyan] [white]{_mono(initial_description)}[/white]")


def goal_reached(name: str, result: Solved) -> None:
    console.print(
        _label("SOLVER", "cyan"),
        f"[bold green] ✓ {name}: goal reached in {result.move_count} move(s)[/bold green]"
        f"  [dim]expanded={result.states_expanded} discovered={result.states_discovered}[/dim]",
    )


def search_exhausted(name: str, result: NoSolution) -> None:
    console.print(
        _label("SOLVER", "cyan"),
        f"[bold red] ✗ {name}: state space exhausted[/bold red]"
        f"  [dim]expanded={result.states_expanded} discovered={result.states_discovered}[/dim]",
    )


def unsolvable(name: str, reason: str) -> None:
    console.print()
    console.print(
        Panel(
            f"[bold red]{name} cannot be searched.[/bold red]\n[dim]{reason}[/dim]",
            title=_label("UNSOLVABLE ✗", "red"),
            border_style="red",
            padding=(0, 2),
        )
    )


def budget_exhausted(name: str, limit: int) -> None:
    console.print(
        Panel(
            f"[bold yellow]{name}: expansion budget of {limit} state(s) spent.[/bold yellow]\n"
            "[dim]Search halted before the state space was exhausted.[/dim]",
            title=_label("BUDGET", "yellow"),
            border_style="yellow",
            padding=(0, 2),
        )
    )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def trace(name: str, result: SearchResult) -> None:
    """Render one result: the full narration when solved, a fixed message otherwise."""
    console.print()
    if isinstance(result, Solved):
        table = Table(
            box=box.SIMPLE_HEAVY,
            border_style="green",
            show_header=True,
            header_style="bold green",
            padding=(0, 1),
        )
        table.add_column("#", justify="center", width=4)
        table.add_column("Step", style="white")

        last = len(result.trace) - 1
        for index, line in enumerate(result.trace):
            marker = "" if index in (0, last) else str(index)
            style = "dim" if index in (0, last) else "magenta"
            table.add_row(marker, f"[{style}]{line}[/{style}]")

        console.print(
            Panel(
                table,
                title=_label(f"SOLVED: {name}", "green"),
                subtitle=f"[dim]{result.move_count} move(s)[/dim]",
                border_style="green",
                padding=(0, 1),
            )
        )
        return

    reason = result.reason if isinstance(result, Unsolvable) else "There's no solution."
    console.print(
        Panel(
            f"[bold white]{reason}[/bold white]",
            title=_label(f"NO SOLUTION: {name}", "red"),
            border_style="red",
            padding=(0, 2),
        )
    )


def summary(rows: list[tuple[str, SearchResult | None]]) -> None:
    """One row per puzzle. A None result marks a search halted by its budget."""
    console.print()
    table = Table(
        box=box.SIMPLE_HEAVY,
        border_style="dim",
        show_header=True,
        header_style="bold dim",
        padding=(0, 1),
    )
    table.add_column("Puzzle", width=24)
    table.add_column("Outcome", justify="center", width=14)
    table.add_column("Moves", justify="right", width=6)
    table.add_column("Expanded", justify="right", width=10)

    for name, result in rows:
        if isinstance(result, Solved):
            table.add_row(name, "[bold green]solved[/bold green]", str(result.move_count), str(result.states_expanded))
        elif isinstance(result, NoSolution):
            table.add_row(name, "[bold red]no solution[/bold red]", "-", str(result.states_expanded))
        elif result is None:
            table.add_row(name, "[bold yellow]halted[/bold yellow]", "-", "-")
        else:
            table.add_row(name, "[bold red]unsolvable[/bold red]", "-", "-")

    console.print(Panel(table, title="[dim]SUMMARY[/dim]", border_style="dim", padding=(0, 1)))
    console.print()


def halt(reason: str) -> None:
    console.print()
    console.print(
        Panel(
            f"[bold white]{reason}[/bold white]",
            title=_label("HALT", "red"),
            border_style="red",
            padding=(0, 2),
        )
    )
    console.print()
