"""Convergence bookkeeping shared by all relaxation solvers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Tuple

import jax
from jax import Array
import jax.numpy as jnp

from ..custom_types import Sweep
from ..logging import get_logger

logger = get_logger(__name__)


class RelaxationStatus(Enum):
    """Lifecycle of an iterative solve."""
    INITIALIZED = "initialized"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"


class RelaxationResult(NamedTuple):
    """
    Outcome of an iterative solve.

    Attributes:
        u: Final grid
        n_iter: Number of sweeps performed
        residual: Maximum pointwise change of the last sweep
        status: CONVERGED or MAX_ITERATIONS_REACHED
        history: Maximum change of every sweep, in order
    """

    u: Array
    n_iter: int
    residual: float
    status: RelaxationStatus
    history: Tuple[float, ...] = ()

    @property
    def converged(self) -> bool:
        return self.status is RelaxationStatus.CONVERGED


@dataclass
class IterationState:
    """Mutable state of a solve in progress."""

    u: Array
    n_iter: int = 0
    residual: float = float("inf")
    status: RelaxationStatus = RelaxationStatus.INITIALIZED
    history: List[float] = field(default_factory=list)

    def update(self, u: Array, change: float):
        self.status = RelaxationStatus.ITERATING
        self.u = u
        self.n_iter += 1
        self.residual = change
        self.history.append(change)

    def result(self) -> RelaxationResult:
        return RelaxationResult(
            u=self.u,
            n_iter=self.n_iter,
            residual=self.residual,
            status=self.status,
            history=tuple(self.history),
        )


@jax.jit
def max_change(u_new: Array, u_old: Array) -> Array:
    """Maximum absolute pointwise change between two sweeps."""
    return jnp.max(jnp.abs(u_new - u_old))


def as_grid_2d(u0) -> Array:
    """Convert an initial guess to a float 2-D grid, rejecting anything else."""
    u = jnp.asarray(u0, dtype=float)
    if u.ndim != 2:
        raise ValueError(f"Expected a rectangular 2-D grid, got an array of shape {u.shape}")
    return u


def relax(sweep: Sweep, u0: Array, tol: float, maxiter: int) -> RelaxationResult:
    """
    Sweep until the maximum change drops to `tol` or `maxiter` sweeps are done.

    Args:
        sweep: One relaxation sweep, u -> (u_next, max_change)
        u0: Initial grid; boundary rows/columns hold the Dirichlet values
        tol: Convergence tolerance on the maximum pointwise change
        maxiter: Maximum number of sweeps

    Returns:
        RelaxationResult. Hitting `maxiter` is reported through the status,
        not raised.
    """
    state = IterationState(u=as_grid_2d(u0))

    while state.n_iter < maxiter:
        u_next, change = sweep(state.u)
        state.update(u_next, float(change))
        logger.debug(f"sweep {state.n_iter}: max change {state.residual:.3e}")
        if state.residual <= tol:
            state.status = RelaxationStatus.CONVERGED
            break
    else:
        state.status = RelaxationStatus.MAX_ITERATIONS_REACHED
        logger.warning(
            f"Relaxation did not converge within {maxiter} sweeps. "
            f"Final max change: {state.residual:.2e} (tol {tol:.2e})."
        )

    return state.result()
