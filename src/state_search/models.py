# models.py
# Data contracts for the search engine.
# No search logic lives here, only schema and validation.

from collections.abc import Callable, Iterable
from typing import Any, Literal, NamedTuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Move(NamedTuple):
    """One legal action: what was done, and the state it produced."""

    description: str
    state: Any


class PuzzleSpecification(BaseModel):
    """Everything the engine needs to search one puzzle."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(default="puzzle", description="Label used in terminal output.")
    initial_state: Any = Field(..., description="Starting configuration. Never mutated.")
    initial_description: str = Field(..., description="Narrates the starting configuration.")
    successors_of: Callable[[Any], Iterable[Move]] = Field(
        ..., description="Pure function: state -> legal moves, in preference order."
    )
    is_goal: Callable[[Any], bool] | None = Field(
        default=None, description="Goal predicate. None means no goal is configured."
    )
    goal_description: str = Field(default="", description="Appended to a solved trace.")
    goal_describer: Callable[[Any], str] | None = Field(
        default=None, description="Optional per-state override of goal_description."
    )

    @model_validator(mode="after")
    def _goal_needs_description(self) -> "PuzzleSpecification":
        if self.is_goal is not None and self.goal_describer is None and not self.goal_description:
            raise ValueError("goal_description is required when is_goal is set without a goal_describer.")
        return self

    def describe_goal(self, state: Any) -> str:
        if self.goal_describer is not None:
            return self.goal_describer(state)
        return self.goal_description


# ---------------------------------------------------------------------------
# Search results
# ---------------------------------------------------------------------------


class Solved(BaseModel):
    """A goal was reached. `trace` is the full narration, start to goal."""

    model_config = ConfigDict(frozen=True)

    outcome: Literal["solved"] = "solved"
    trace: list[str] = Field(..., min_length=2)
    states_expanded: int = 0
    states_discovered: int = 0

    @property
    def moves(self) -> list[str]:
        """Move descriptions only, without the initial and goal narration."""
        return self.trace[1:-1]

    @property
    def move_count(self) -> int:
        return len(self.trace) - 2


class NoSolution(BaseModel):
    """The reachable state space was exhausted without reaching a goal."""

    model_config = ConfigDict(frozen=True)

    outcome: Literal["no_solution"] = "no_solution"
    states_expanded: int = 0
    states_discovered: int = 0


class Unsolvable(BaseModel):
    """The specification declares no goal. No search was performed."""

    model_config = ConfigDict(frozen=True)

    outcome: Literal["unsolvable"] = "unsolvable"
    reason: str = "No goal condition is configured."


SearchResult = Union[Solved, NoSolution, Unsolvable]
