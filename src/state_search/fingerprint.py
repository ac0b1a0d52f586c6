# fingerprint.py
# Canonical SHA-256 identity for arbitrary state values.
#
# Guarantees: two states with the same field values and the same sequence
# contents in the same order produce the same fingerprint, however they were
# constructed. Record field order never matters; sequence order always does.
#
# stdlib hashing, pydantic-aware canonicalization.

import dataclasses
import hashlib
import json
import math
from collections.abc import Mapping, Set
from enum import Enum
from typing import Any

from pydantic import BaseModel


class UnfingerprintableStateError(TypeError):
    """Raised when a state holds a value with no canonical form. Caller bug."""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _sha256(data: str) -> str:
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def _serialize(value: Any) -> str:
    """Deterministic serialization. sort_keys is non-negotiable."""
    return json.dumps(value, sort_keys=True, ensure_ascii=False, allow_nan=False)


def _key(value: Any) -> str:
    # 1 and "1" must stay distinct once they become JSON object keys.
    return _serialize(canonicalize(value))


# ---------------------------------------------------------------------------
# Canonical form
# ---------------------------------------------------------------------------

def canonicalize(value: Any) -> Any:
    """
    Reduce a state value to plain JSON-compatible data.

    Records (mappings, dataclasses, pydantic models) become dicts whose keys
    are sorted at serialization time. Lists and tuples keep their order. Sets
    are tagged and sorted by the serialized form of their members. Integral
    floats collapse to ints.

    Raises UnfingerprintableStateError for anything else.
    """
    # Enum before scalars: IntEnum and StrEnum members are also int / str.
    if isinstance(value, Enum):
        return {"__enum__": f"{type(value).__qualname__}.{value.name}"}

    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnfingerprintableStateError(f"Non-finite float in state: {value!r}")
        # 1.0 == 1 and -0.0 == 0, so they share one identity.
        if value.is_integer():
            return int(value)
        return value

    if isinstance(value, BaseModel):
        return canonicalize(value.model_dump())

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: canonicalize(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }

    if isinstance(value, Mapping):
        return {_key(k): canonicalize(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]

    if isinstance(value, Set):
        return {"__set__": sorted((canonicalize(item) for item in value), key=_serialize)}

    raise UnfingerprintableStateError(
        f"Cannot fingerprint value of type {type(value).__name__}: {value!r}"
    )


def fingerprint(state: Any) -> str:
    """Hex-encoded SHA-256 of the canonical serialization of `state`."""
    return _sha256(_serialize(canonicalize(state)))


# ---------------------------------------------------------------------------
# VisitedSet
# ---------------------------------------------------------------------------

class VisitedSet:
    """
    Fingerprints of every state discovered during one search.

    Membership only; grows monotonically. One instance per solve call,
    never shared between searches.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def add(self, state: Any) -> bool:
        """Record `state`. Returns True if it had not been discovered before."""
        key = fingerprint(state)
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __contains__(self, state: Any) -> bool:
        return fingerprint(state) in self._seen

    def __len__(self) -> int:
        return len(self._seen)
