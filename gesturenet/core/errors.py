"""Exception types raised by the network core."""

from __future__ import annotations


class GestureNetError(Exception):
    """Base class for GestureNet failures."""


class InvalidTopology(GestureNetError, ValueError):
    """Layer sizes or hyperparameters cannot form a network."""


class MalformedRow(GestureNetError, ValueError):
    """A dataset row does not match ``input_size + output_size``."""

    def __init__(self, index: int, length: int, expected: int) -> None:
        super().__init__(
            f"Row {index} has {length} values, expected {expected} "
            "(features followed by targets)"
        )
        self.index = index
        self.length = length
        self.expected = expected


__all__ = ["GestureNetError", "InvalidTopology", "MalformedRow"]
