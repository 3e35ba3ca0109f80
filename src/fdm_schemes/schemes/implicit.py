"""
Implicit time-stepping schemes.
"""

from dataclasses import dataclass, field

import jax.numpy as jnp

from ..boundary import FixedBoundary
from ..grid import Discretization
from ..linsolvers import TridiagonalSolverProtocol, TridiagonalSystem, Thomas
from .base import AbstractScheme, State


@dataclass(frozen=True)
class BeamWarming(AbstractScheme):
    """
    Weighted Beam-Warming scheme for u_t + c u_x = alpha u_xx.

    Discretisation, with weight $\\lambda \\in [0, 1]$:
    $$ -\\lambda (\\tfrac{\\nu}{2} + \\mu) u_{j-1}^{n+1} + (1 + 2 \\lambda \\mu) u_j^{n+1}
       + \\lambda (\\tfrac{\\nu}{2} - \\mu) u_{j+1}^{n+1}
       = (1 - \\lambda) (\\tfrac{\\nu}{2} + \\mu) u_{j-1}^n + (1 - 2 (1 - \\lambda) \\mu) u_j^n
       - (1 - \\lambda) (\\tfrac{\\nu}{2} - \\mu) u_{j+1}^n $$

    lam = 0 is FTCS, lam = 1/2 Crank-Nicolson, lam = 1 backward Euler.
    Each step assembles a tridiagonal system for the interior points, with
    the next-level boundary values folded into the right-hand side, and
    hands it to `solver`.

    Attributes:
        lam: Implicit weight.
        solver: Tridiagonal solver. Default: Thomas.
        boundary: Must be a FixedBoundary.
    """

    lam: float = 0.5
    solver: TridiagonalSolverProtocol = field(default_factory=Thomas)

    def __post_init__(self):
        if not 0.0 <= self.lam <= 1.0:
            raise ValueError(f"lam must lie in [0, 1], got {self.lam}")
        if not isinstance(self.boundary, FixedBoundary):
            raise ValueError(
                "BeamWarming supports fixed boundary values only, "
                f"got {type(self.boundary).__name__}"
            )

    def assemble(self, state: State, params: Discretization) -> TridiagonalSystem:
        """
        Build the tridiagonal system whose solution is the next interior level.

        Args:
            state: Current time level, at least 3 points long.
            params: Discretization parameters.

        Returns:
            System of size N-2 for u_1^{n+1}, ..., u_{N-2}^{n+1}
        """
        u = jnp.asarray(state.u, dtype=float)
        if u.shape[0] < 3:
            raise ValueError(f"BeamWarming needs at least 3 grid points, got {u.shape[0]}")

        lam = self.lam
        half_nu = 0.5 * params.courant
        mu = params.diffusion_number

        # Left-hand side coefficients
        a = -lam * (half_nu + mu)
        b = 1.0 + 2.0 * lam * mu
        c = lam * (half_nu - mu)

        # Right-hand side coefficients
        a_rhs = (1.0 - lam) * (half_nu + mu)
        b_rhs = 1.0 - 2.0 * (1.0 - lam) * mu
        c_rhs = -(1.0 - lam) * (half_nu - mu)

        rhs = a_rhs * u[:-2] + b_rhs * u[1:-1] + c_rhs * u[2:]

        left, right = self.boundary.values(u)
        rhs = rhs.at[0].add(-a * left).at[-1].add(-c * right)

        n = rhs.shape[0]
        return TridiagonalSystem(
            lower=jnp.full((n,), a, dtype=rhs.dtype),
            diag=jnp.full((n,), b, dtype=rhs.dtype),
            upper=jnp.full((n,), c, dtype=rhs.dtype),
            rhs=rhs,
        )

    def advance(self, state: State, params: Discretization) -> State:
        state = state._replace(u=jnp.asarray(state.u, dtype=float))
        system = self.assemble(state, params)
        interior = self.solver(system)
        u_next = state.u.at[1:-1].set(interior)
        return state.push(self.boundary(u_next, state.u))
