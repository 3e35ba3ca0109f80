"""Base class for relaxation solvers."""

from typing import Tuple

from flax import nnx
from jax import Array

from .convergence import RelaxationResult, relax


class RelaxationSolver(nnx.Module):
    """
    Shared driver for relaxation solvers.

    Subclasses only provide `sweep`; convergence checking lives in `relax`.

    Attributes:
        tol: Convergence tolerance on the maximum change per sweep
        maxiter: Maximum number of sweeps
    """

    def __init__(self, tol: float = 1e-10, maxiter: int = 10_000):
        if tol < 0.0:
            raise ValueError(f"tol must be non-negative, got {tol}")
        if maxiter < 1:
            raise ValueError(f"maxiter must be positive, got {maxiter}")
        self.tol = tol
        self.maxiter = maxiter

    def sweep(self, u: Array) -> Tuple[Array, Array]:
        """
        Perform one relaxation sweep. Subclasses must override this.

        Args:
            u: Current grid

        Returns:
            u_next: Grid after one sweep, always floating point
            change: Maximum absolute pointwise change of the sweep
        """
        raise NotImplementedError(f"{type(self).__name__} does not define a sweep")

    def __call__(self, u0: Array) -> RelaxationResult:
        """
        Relax u0 until the maximum change per sweep is at most `tol`.

        Args:
            u0: Initial grid with Dirichlet values on its edges

        Returns:
            RelaxationResult; check `.converged` or `.status`.
        """
        return relax(self.sweep, u0, self.tol, self.maxiter)
