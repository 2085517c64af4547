"""MatchError — the closed set of recoverable failures.

Public Match operations return one of these (or None on success) instead
of raising, so callers can print the message and carry on.
"""

from __future__ import annotations

from enum import Enum


class MatchError(Enum):
    """Why a deploy, remove or boost request was refused."""

    UNKNOWN_UNIT_TYPE = "unknown ant type"
    ILLEGAL_LOCATION = "illegal location"
    INSUFFICIENT_RESOURCES = "not enough food"
    SLOT_OCCUPIED = "tunnel already occupied"
    UNKNOWN_BOOST = "no such boost"
    BOOST_EXHAUSTED = "no more of that boost"
    NO_DEFENDER_AT_LOCATION = "no ant at location"

    def __str__(self) -> str:
        return self.value
