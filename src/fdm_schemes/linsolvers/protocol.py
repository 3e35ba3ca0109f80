"""Protocol for linear solvers used in implicit time-stepping schemes."""

from typing import Protocol, runtime_checkable

from jax import Array

from .tridiagonal import TridiagonalSystem


@runtime_checkable
class TridiagonalSolverProtocol(Protocol):
    """
    Protocol for tridiagonal linear solvers.

    Any class implementing a __call__() method with this signature can be
    used as the linear solver of an implicit scheme.
    """

    def __call__(self, system: TridiagonalSystem) -> Array:
        """
        Solve the tridiagonal system A*x = rhs.

        Args:
            system: Sub-, main and super-diagonals plus right-hand side.

        Returns:
            Solution vector x such that A*x ≈ rhs
        """
        ...
