# config.py
# Environment-driven settings for the puzzle runner.
#
#   STATE_SEARCH_VERBOSE          "1"/"true"/"yes" to narrate each search
#   STATE_SEARCH_MAX_EXPANSIONS   positive int; unset or empty means unbounded
#
# Values may also come from a .env file in the working directory.

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Solver options resolved from the environment."""

    verbose: bool = Field(default=False, description="Narrate search lifecycle events.")
    max_expansions: int | None = Field(default=None, ge=1, description="Expansion budget per search.")

    @field_validator("verbose", mode="before")
    @classmethod
    def _parse_flag(cls, value):
        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY
        return value

    @field_validator("max_expansions", mode="before")
    @classmethod
    def _parse_budget(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def solver_options(self) -> dict:
        return {"verbose": self.verbose, "max_expansions": self.max_expansions}


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        verbose=os.getenv("STATE_SEARCH_VERBOSE", ""),
        max_expansions=os.getenv("STATE_SEARCH_MAX_EXPANSIONS", ""),
    )
