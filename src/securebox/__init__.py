from securebox.base import InvalidDimensionsError, Puzzle, UnsolvableError
from securebox.board import SecureBox
from securebox.config import SolverConfig, load_config
from securebox.solver import (
    BoxSolver,
    SolvePhase,
    SolveResult,
    open_box,
    solve_box,
)
