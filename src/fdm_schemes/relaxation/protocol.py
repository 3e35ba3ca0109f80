"""Protocol for iterative solvers of the Laplace equation."""

from typing import Protocol, Tuple, runtime_checkable

from jax import Array

from .convergence import RelaxationResult


@runtime_checkable
class RelaxationSolverProtocol(Protocol):
    """
    Protocol for relaxation solvers.

    A solver exposes one sweep over the interior of a 2-D grid and a call
    that repeats sweeps until convergence or the iteration cap.
    """

    def sweep(self, u: Array) -> Tuple[Array, Array]:
        """
        Perform one sweep over the interior points.

        Args:
            u: Current grid

        Returns:
            Updated grid and the maximum pointwise change
        """
        ...

    def __call__(self, u0: Array) -> RelaxationResult:
        """
        Relax u0 until convergence or the iteration cap.

        Args:
            u0: Initial grid with Dirichlet values on its edges

        Returns:
            RelaxationResult
        """
        ...
