from __future__ import annotations

from typing import Tuple

import numpy as np

from .base import InvalidDimensionsError, check_dimensions


def build_A(y: int, x: int) -> np.ndarray:
    """Return the n×n effect matrix A over GF(2) for a y×x box, n = y*x.
    Column j encodes the cells flipped when toggling cell j: every cell in
    the same row or the same column, the toggled cell included.
    """
    y, x = check_dimensions(y, x)
    rows, cols = np.divmod(np.arange(y * x), x)
    same_row = rows[:, None] == rows[None, :]
    same_col = cols[:, None] == cols[None, :]
    # the toggled cell flips three times (cell, row, column) -> odd -> flips
    return (same_row | same_col).astype(np.uint8)


def build_system(state: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Encode a snapshot as A·X = B. B is a fresh copy; state is untouched."""
    state = np.asarray(state)
    if state.ndim != 2 or state.size == 0:
        raise InvalidDimensionsError(
            f"Expected a non-empty 2-D box state, got shape {state.shape}"
        )
    y, x = state.shape
    A = build_A(y, x)
    B = state.reshape(-1).astype(np.uint8)  # copies
    return A, B


def gf2_eliminate(A: np.ndarray, B: np.ndarray) -> list[int]:
    """Gauss-Jordan reduce A and B over GF(2), in place.

    Returns the pivot columns: pivots[k] is the column whose single 1 sits
    on row k after reduction. Columns missing from the list are free.
    """
    m, n = A.shape
    assert B.shape == (m,), f"B must have shape {(m,)}, got {B.shape}"

    row = 0
    pivots: list[int] = []
    for col in range(n):
        if row == m:
            break
        # find a pivot in/under current row
        hits = np.flatnonzero(A[row:, col])
        if len(hits) == 0:
            continue
        pivot = row + int(hits[0])
        if pivot != row:
            A[[row, pivot]] = A[[pivot, row]]
            B[[row, pivot]] = B[[pivot, row]]
        # eliminate ALL other rows (Gauss-Jordan)
        others = np.flatnonzero(A[:, col])
        others = others[others != row]
        A[others, :] ^= A[row, :]
        B[others] ^= B[row]
        pivots.append(col)
        row += 1
    return pivots


def extract_solution(
    A: np.ndarray, B: np.ndarray, pivots: list[int]
) -> np.ndarray:
    """Read X off a reduced system; free variables are fixed to 0."""
    n = A.shape[1]
    X = np.zeros((n,), dtype=np.uint8)
    for ri, pc in enumerate(pivots):
        # row ri must hold exactly one pivot-column 1, at pc
        assert (
            A[ri, pc] == 1 and A[ri, pivots].sum() == 1
        ), f"row {ri} is not reduced at pivot column {pc}"
        X[pc] = B[ri]
    return X


def is_consistent(A: np.ndarray, B: np.ndarray) -> bool:
    """False if the reduced system has a 0...0 | 1 row."""
    return not bool(np.any((A.sum(axis=1) == 0) & (B == 1)))


def gf2_solve(state: np.ndarray) -> Tuple[np.ndarray, list[int], bool]:
    """Encode, reduce and extract in one go.

    Returns:
        X: toggle vector (length y*x, uint8)
        pivots: pivot columns of the reduced system
        consistent: whether A·X = B has an exact solution
    """
    A, B = build_system(state)
    pivots = gf2_eliminate(A, B)
    return extract_solution(A, B, pivots), pivots, is_consistent(A, B)


def apply_effect(state: np.ndarray, X: np.ndarray) -> np.ndarray:
    """Simulate toggling every set bit of X on a copy of state."""
    state = np.asarray(state, dtype=bool)
    y, x = state.shape
    flips = (build_A(y, x) @ np.asarray(X, dtype=np.int64)) % 2
    return state ^ flips.astype(bool).reshape(y, x)
