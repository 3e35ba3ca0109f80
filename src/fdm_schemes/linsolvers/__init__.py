"""Linear solvers used by implicit time-stepping schemes."""

from .tridiagonal import TridiagonalSystem, Thomas, solve_tridiagonal
from .protocol import TridiagonalSolverProtocol


__all__ = [
    # Protocol
    "TridiagonalSolverProtocol",

    # Tridiagonal systems
    "TridiagonalSystem",
    "Thomas",
    "solve_tridiagonal",
]
