"""Iterative relaxation solvers for the 2-D Laplace equation."""

from .convergence import (
    IterationState,
    RelaxationResult,
    RelaxationStatus,
    max_change,
    relax,
)
from .protocol import RelaxationSolverProtocol
from .base import RelaxationSolver
from .jacobi import PointJacobi, jacobi_sweep
from .sor import SOR, sor_sweep


__all__ = [
    # Protocol and base class
    "RelaxationSolverProtocol",
    "RelaxationSolver",

    # Convergence bookkeeping
    "IterationState",
    "RelaxationResult",
    "RelaxationStatus",
    "max_change",
    "relax",

    # Solvers
    "PointJacobi",
    "SOR",
    "jacobi_sweep",
    "sor_sweep",
]
