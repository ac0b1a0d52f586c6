# puzzle.py
# Fluent builder for rule-based puzzles.
#
# A Puzzle collects move rules, winning conditions and losing conditions, then
# folds them into a PuzzleSpecification: losing states are filtered out of
# successors_of, so the engine only ever sees a successor generator and a goal
# predicate.

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel

from state_search.engine import Solver
from state_search.models import Move, PuzzleSpecification, SearchResult


class PuzzleDefinitionError(Exception):
    """Raised when a rule produces something that cannot become a state."""


def _reject_unknown_fields(state: Any, changes: Mapping[str, Any], fields: set[str]) -> None:
    unknown = sorted(set(changes) - fields)
    if unknown:
        raise PuzzleDefinitionError(
            f"Partial update names unknown field(s) of {type(state).__name__}: {', '.join(unknown)}."
        )


def apply_update(state: Any, changes: Mapping[str, Any]) -> Any:
    """
    Merge a partial update onto `state`, returning a new state.

    Supports dict states, dataclass instances and pydantic models. The
    original state is never modified.
    """
    if isinstance(state, Mapping):
        return {**state, **changes}
    if dataclasses.is_dataclass(state) and not isinstance(state, type):
        _reject_unknown_fields(state, changes, {field.name for field in dataclasses.fields(state)})
        return dataclasses.replace(state, **changes)
    if isinstance(state, BaseModel):
        _reject_unknown_fields(state, changes, set(type(state).model_fields))
        return type(state).model_validate({**state.model_dump(), **changes})
    raise PuzzleDefinitionError(
        f"Cannot apply a partial update to a state of type {type(state).__name__}."
    )


class Puzzle:
    """
    Declarative puzzle definition.

    Example:
        puzzle = (
            Puzzle({"boat": 0, "goat": 0}, "Everything is on the near bank.")
            .valid_move(lambda s: s["boat"] == s["goat"],
                        lambda s: {"boat": 1 - s["boat"], "goat": 1 - s["goat"]},
                        "Take the goat across.")
            .winning_condition(lambda s: s["goat"] == 1, "The goat made it.")
        )
        result = puzzle.solve()

    A move callable may return a full replacement state, or a mapping of
    changed fields to merge onto the current one.
    """

    def __init__(self, initial_state: Any, initial_description: str, name: str = "puzzle") -> None:
        self.initial_state = initial_state
        self.initial_description = initial_description
        self.name = name
        self.valid_moves: list[tuple[Callable[[Any], bool], Callable[[Any], Any], str]] = []
        self.winning_conditions: list[tuple[Callable[[Any], bool], str]] = []
        self.losing_conditions: list[Callable[[Any], bool]] = []

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def valid_move(
        self,
        is_applicable: Callable[[Any], bool],
        move: Callable[[Any], Any],
        description: str,
    ) -> "Puzzle":
        self.valid_moves.append((is_applicable, move, description))
        return self

    def winning_condition(self, is_winning: Callable[[Any], bool], description: str) -> "Puzzle":
        self.winning_conditions.append((is_winning, description))
        return self

    def losing_condition(self, is_losing: Callable[[Any], bool]) -> "Puzzle":
        self.losing_conditions.append(is_losing)
        return self

    # ------------------------------------------------------------------
    # Folding into a specification
    # ------------------------------------------------------------------

    def _next_state(self, state: Any, move: Callable[[Any], Any]) -> Any:
        produced = move(state)
        if isinstance(state, Mapping):
            if not isinstance(produced, Mapping):
                raise PuzzleDefinitionError(
                    f"Move on a mapping state returned {type(produced).__name__}, expected a mapping."
                )
            return apply_update(state, produced)
        if isinstance(produced, Mapping):
            return apply_update(state, produced)
        return produced

    def is_losing(self, state: Any) -> bool:
        return any(is_losing(state) for is_losing in self.losing_conditions)

    def successors_of(self, state: Any) -> list[Move]:
        moves: list[Move] = []
        for is_applicable, move, description in self.valid_moves:
            if not is_applicable(state):
                continue
            new_state = self._next_state(state, move)
            if self.is_losing(new_state):
                continue
            moves.append(Move(description, new_state))
        return moves

    def is_goal(self, state: Any) -> bool:
        return any(is_winning(state) for is_winning, _ in self.winning_conditions)

    def describe_goal(self, state: Any) -> str:
        for is_winning, description in self.winning_conditions:
            if is_winning(state):
                return description
        return ""

    def to_specification(self) -> PuzzleSpecification:
        """With no winning conditions, the specification has no goal predicate."""
        has_goal = bool(self.winning_conditions)
        return PuzzleSpecification(
            name=self.name,
            initial_state=self.initial_state,
            initial_description=self.initial_description,
            successors_of=self.successors_of,
            is_goal=self.is_goal if has_goal else None,
            goal_describer=self.describe_goal if has_goal else None,
        )

    def solve(self, **solver_options: Any) -> SearchResult:
        return Solver(**solver_options).solve(self.to_specification())
