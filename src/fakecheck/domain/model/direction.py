"""Parameter passing direction."""

from enum import Enum, auto


class ParameterDirection(Enum):
    """How an argument travels between caller and fake."""

    IN = auto()  # by value
    REF = auto()  # read at call time, written back after a match
    OUT = auto()  # written back only, pre-call value is irrelevant
