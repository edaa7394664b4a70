from __future__ import annotations

from typing import Protocol

import numpy as np


class InvalidDimensionsError(ValueError):
    """Raised when a box is requested with a zero, negative or non-integral size."""

    pass


class UnsolvableError(Exception):
    """Raised on request when a solve ends with the box still locked."""

    pass


class Puzzle(Protocol):
    def toggle(self, row: int, col: int) -> None: ...
    def is_locked(self) -> bool: ...
    def get_state(self) -> np.ndarray: ...


def check_dimensions(y, x) -> tuple[int, int]:
    for name, value in (("y", y), ("x", x)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidDimensionsError(
                f"{name} must be an integer, got {value!r}"
            )
        if value < 1:
            raise InvalidDimensionsError(
                f"{name} must be a positive integer, got {value}"
            )
    return int(y), int(x)
