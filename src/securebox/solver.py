from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np

from .algebra import gf2_solve
from .base import Puzzle, UnsolvableError, check_dimensions
from .board import SecureBox
from .config import SolverConfig

logger = logging.getLogger(__name__)


class SolvePhase(Enum):
    LINEAR_SOLVE_APPLIED = "linear_solve_applied"
    CHECKING = "checking"
    RETRYING = "retrying"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SolveResult:
    phase: SolvePhase
    locked: bool
    toggles: int = 0
    retries: int = 0
    free_variables: int = 0
    consistent: bool = True
    plan: list[int] = field(default_factory=list)

    def raise_for_status(self) -> None:
        if self.locked:
            raise UnsolvableError(
                f"Box still locked after {self.retries} fallback rounds "
                f"({self.free_variables} free variables, consistent={self.consistent})"
            )


def apply_plan(puzzle: Puzzle, X: np.ndarray, x: int) -> int:
    """Toggle every flat index set in X; returns the number of toggles."""
    count = 0
    for index in np.flatnonzero(X):
        row, col = divmod(int(index), x)
        puzzle.toggle(row, col)
        count += 1
    return count


class BoxSolver:
    """
    Solve the box as A·X = B over GF(2), replay X, then run a bounded
    corrector if the box still reports locked cells.
    """

    def __init__(self, config: SolverConfig | None = None):
        self.config = config or SolverConfig()

    def solve(self, puzzle: Puzzle) -> SolveResult:
        snapshot = np.asarray(puzzle.get_state(), dtype=bool)
        y, x = snapshot.shape
        n = y * x

        X, pivots, consistent = gf2_solve(snapshot)
        free = n - len(pivots)

        if free:
            logger.info("%dx%d system has %d free variables, fixed to 0", y, x, free)
        if not consistent:
            logger.info("%dx%d snapshot is outside the column space of A", y, x)

        result = SolveResult(
            phase=SolvePhase.LINEAR_SOLVE_APPLIED,
            locked=True,
            free_variables=free,
            consistent=consistent,
            plan=[int(i) for i in np.flatnonzero(X)],
        )
        result.toggles = apply_plan(puzzle, X, x)
        logger.debug("applied %d toggles from the linear solve", result.toggles)

        return self._correct(puzzle, snapshot, result)

    def _correct(
        self, puzzle: Puzzle, snapshot: np.ndarray, result: SolveResult
    ) -> SolveResult:
        limit = self.config.retry_limit(snapshot.size)
        x = snapshot.shape[1]
        original = snapshot.reshape(-1).astype(np.uint8)

        while True:
            result.phase = SolvePhase.CHECKING
            if not puzzle.is_locked():
                result.phase = SolvePhase.DONE
                result.locked = False
                break
            if result.retries >= limit:
                result.phase = SolvePhase.FAILED
                logger.warning(
                    "fallback gave up after %d rounds, box remains locked",
                    result.retries,
                )
                break

            result.phase = SolvePhase.RETRYING
            result.retries += 1
            if self.config.fallback == "original":
                targets = original
            else:
                targets = np.asarray(puzzle.get_state()).reshape(-1).astype(np.uint8)
            result.toggles += apply_plan(puzzle, targets, x)
            logger.debug(
                "fallback round %d (%s), %d toggles so far",
                result.retries,
                self.config.fallback,
                result.toggles,
            )

        logger.debug("solve finished in phase %s", result.phase.value)
        return result


def open_box(
    y: int,
    x: int,
    rng: np.random.Generator | None = None,
    config: SolverConfig | None = None,
) -> bool:
    """Build a shuffled y×x SecureBox and unlock it.

    Returns True if the box remains locked, False if it was opened.
    """
    return solve_box(y, x, rng=rng, config=config).locked


def solve_box(
    y: int,
    x: int,
    rng: np.random.Generator | None = None,
    config: Optional[SolverConfig] = None,
) -> SolveResult:
    y, x = check_dimensions(y, x)
    if y > x:
        y, x = x, y
    box = SecureBox(y, x, rng=rng)
    return BoxSolver(config).solve(box)
