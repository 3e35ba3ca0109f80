"""
Finite-difference schemes for model PDEs

JAX implementations of the classical finite-difference methods for the
linear transport, diffusion and Laplace equations.

Main components:
- schemes: explicit and implicit time-stepping schemes
- linsolvers: tridiagonal (Thomas) solver for implicit schemes
- relaxation: Point-Jacobi and SOR iterations for the Laplace equation
- solve: driving loop with snapshot history
"""

import jax

# Textbook reference values are double precision
jax.config.update("jax_enable_x64", True)

from .errors import ConfigurationError, SingularSystemError
from .grid import BCType, Discretization, create_uniform_grid
from .boundary import FixedBoundary, PeriodicBoundary

# Time-stepping schemes
from .schemes import (
    State,
    Upwind,
    BadUpwind,
    FTCS,
    Lax,
    LaxWendroff,
    Leapfrog,
    MacCormack,
    BeamWarming,
)

# Solvers
from .linsolvers import Thomas, TridiagonalSystem, solve_tridiagonal
from .relaxation import PointJacobi, SOR, RelaxationResult, RelaxationStatus
from .solve import advance_n, solve_with_history

__all__ = [
    # Errors
    "ConfigurationError",
    "SingularSystemError",

    # Grid and boundaries
    "BCType",
    "Discretization",
    "create_uniform_grid",
    "FixedBoundary",
    "PeriodicBoundary",

    # Time-stepping schemes
    "State",
    "Upwind",
    "BadUpwind",
    "FTCS",
    "Lax",
    "LaxWendroff",
    "Leapfrog",
    "MacCormack",
    "BeamWarming",

    # Tridiagonal systems
    "Thomas",
    "TridiagonalSystem",
    "solve_tridiagonal",

    # Relaxation
    "PointJacobi",
    "SOR",
    "RelaxationResult",
    "RelaxationStatus",

    # Drivers
    "advance_n",
    "solve_with_history",
]
