# river.py
# Fox, goose and bag of beans river crossing.
#
# The boat carries the farmer and at most one passenger. Left without the
# farmer, the fox eats the goose and the goose eats the beans.

from enum import Enum

from state_search.models import PuzzleSpecification
from state_search.puzzle import Puzzle

PASSENGERS = ("fox", "goose", "beans")


class Shore(Enum):
    ONE = "one"
    OTHER = "other"


def across(location: Shore) -> Shore:
    return Shore.OTHER if location is Shore.ONE else Shore.ONE


def _carry(passenger: str):
    def move(state: dict) -> dict:
        return {"boat": across(state["boat"]), passenger: across(state[passenger])}

    return move


def _unsupervised(first: str, second: str):
    def is_losing(state: dict) -> bool:
        return state["boat"] is not state[first] and state["boat"] is not state[second]

    return is_losing


def build_puzzle() -> Puzzle:
    initial = {"boat": Shore.ONE, "fox": Shore.ONE, "goose": Shore.ONE, "beans": Shore.ONE}
    return (
        Puzzle(initial, "The boat and all the animals are on the start shore.", name="river crossing")
        .valid_move(lambda s: s["boat"] is s["fox"], _carry("fox"), "Take the fox across.")
        .valid_move(lambda s: s["boat"] is s["goose"], _carry("goose"), "Take the goose across.")
        .valid_move(lambda s: s["boat"] is s["beans"], _carry("beans"), "Take the bag of beans across.")
        .valid_move(lambda s: True, lambda s: {"boat": across(s["boat"])}, "Go across with an empty boat.")
        .winning_condition(
            lambda s: all(s[p] is Shore.OTHER for p in PASSENGERS),
            "All the animals are now on the other side.",
        )
        .losing_condition(_unsupervised("fox", "goose"))
        .losing_condition(_unsupervised("goose", "beans"))
    )


def build() -> PuzzleSpecification:
    return build_puzzle().to_specification()
