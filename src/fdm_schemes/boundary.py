"""
Boundary policies shared by every time-stepping scheme.

A policy does two things:
    - `neighbours(u)` returns the fields u_{j-1} and u_{j+1} that stencils read;
    - `policy(u_new, u_old)` imposes the boundary on a freshly computed level.

Schemes compose with a policy instead of hard-coding boundary logic.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, runtime_checkable

import jax.numpy as jnp
from jax import Array

from .custom_types import Neighbours
from .grid import BCType


@runtime_checkable
class BoundaryProtocol(Protocol):
    """Protocol for boundary policies."""

    bc_type: BCType

    def neighbours(self, u: Array) -> Neighbours:
        """
        Return (u_{j-1}, u_{j+1}) for every grid point j.

        Args:
            u: Solution on the full grid.

        Returns:
            Two arrays with the shape of u.
        """
        ...

    def __call__(self, u_new: Array, u_old: Array) -> Array:
        """
        Impose the boundary on the next time level.

        Args:
            u_new: Next level as produced by a stencil.
            u_old: Current level.

        Returns:
            Next level with boundary values in place.
        """
        ...


@dataclass(frozen=True)
class FixedBoundary:
    """
    Dirichlet boundary: both end points hold fixed values.

    Attributes:
        left: Value at x_min. If None, the end point keeps its current value,
            i.e. u(x_min, t) = u(x_min, 0).
        right: Value at x_max. If None, as for `left`.
    """

    left: Optional[float] = None
    right: Optional[float] = None
    bc_type: BCType = BCType.FIXED

    def neighbours(self, u: Array) -> Neighbours:
        # End values are replicated; the stencil result at the ends is discarded.
        u_minus = jnp.concatenate([u[:1], u[:-1]])
        u_plus = jnp.concatenate([u[1:], u[-1:]])
        return u_minus, u_plus

    def values(self, u_old: Array) -> Tuple[Array, Array]:
        """Boundary values of the next level."""
        left = u_old[0] if self.left is None else jnp.asarray(self.left, dtype=u_old.dtype)
        right = u_old[-1] if self.right is None else jnp.asarray(self.right, dtype=u_old.dtype)
        return left, right

    def __call__(self, u_new: Array, u_old: Array) -> Array:
        left, right = self.values(u_old)
        return u_new.at[0].set(left).at[-1].set(right)


@dataclass(frozen=True)
class PeriodicBoundary:
    """
    Periodic boundary: the last grid point neighbours the first.

    The grid must not store the periodic image of its first point
    (see `create_uniform_grid` with `BCType.PERIODIC`).
    """

    bc_type: BCType = BCType.PERIODIC

    def neighbours(self, u: Array) -> Neighbours:
        return jnp.roll(u, 1), jnp.roll(u, -1)

    def __call__(self, u_new: Array, u_old: Array) -> Array:
        return u_new


def make_boundary(bc_type: BCType) -> BoundaryProtocol:
    """Default boundary policy for a BCType."""
    if bc_type == BCType.FIXED:
        return FixedBoundary()
    if bc_type == BCType.PERIODIC:
        return PeriodicBoundary()
    raise ValueError(f"Unsupported boundary condition type: {bc_type}")
