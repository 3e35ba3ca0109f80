"""
Explicit time-stepping schemes for u_t + c u_x = alpha u_xx.

Notation: nu = c dt / dx (Courant number), mu = alpha dt / dx^2.

No scheme guards its own stability: an unstable choice of parameters shows
up as growing or non-finite values in the returned grid.
"""

from abc import abstractmethod
from dataclasses import dataclass

import jax
from jax import Array

from ..grid import Discretization
from .base import AbstractScheme, State


@jax.jit
def backward_difference(u: Array, u_minus: Array, nu: float) -> Array:
    """$$ u_j - \\nu (u_j - u_{j-1}) $$"""
    return u - nu * (u - u_minus)


@jax.jit
def forward_difference(u: Array, u_plus: Array, nu: float) -> Array:
    """$$ u_j - \\nu (u_{j+1} - u_j) $$"""
    return u - nu * (u_plus - u)


@jax.jit
def ftcs_stencil(u: Array, u_minus: Array, u_plus: Array, nu: float, mu: float) -> Array:
    return u - 0.5 * nu * (u_plus - u_minus) + mu * (u_plus - 2.0 * u + u_minus)


@jax.jit
def lax_stencil(u_minus: Array, u_plus: Array, nu: float) -> Array:
    return 0.5 * (u_minus + u_plus) - 0.5 * nu * (u_plus - u_minus)


@jax.jit
def lax_wendroff_stencil(u: Array, u_minus: Array, u_plus: Array, nu: float) -> Array:
    return (
        u
        - 0.5 * nu * (u_plus - u_minus)
        + 0.5 * nu**2 * (u_plus - 2.0 * u + u_minus)
    )


@jax.jit
def leapfrog_stencil(u_prev: Array, u_minus: Array, u_plus: Array, nu: float) -> Array:
    return u_prev - nu * (u_plus - u_minus)


@jax.jit
def maccormack_corrector(u: Array, u_pred: Array, u_pred_minus: Array, nu: float) -> Array:
    return 0.5 * (u + u_pred) - 0.5 * nu * (u_pred - u_pred_minus)


@dataclass(frozen=True)
class ExplicitScheme(AbstractScheme):
    """Single-level explicit scheme: u^{n+1} depends on u^n only."""

    @abstractmethod
    def stencil(self, u: Array, u_minus: Array, u_plus: Array, params: Discretization) -> Array:
        """Evaluate the update at every grid point."""
        ...

    def advance(self, state: State, params: Discretization) -> State:
        u_minus, u_plus = self.boundary.neighbours(state.u)
        u_next = self.stencil(state.u, u_minus, u_plus, params)
        return state.push(self.boundary(u_next, state.u))


@dataclass(frozen=True)
class Upwind(ExplicitScheme):
    """
    First-order upwind scheme.

    Takes the one-sided difference on the side the flow comes from:
    $$ u_j^{n+1} = u_j^n - \\nu (u_j^n - u_{j-1}^n), \\quad c \\ge 0 $$
    $$ u_j^{n+1} = u_j^n - \\nu (u_{j+1}^n - u_j^n), \\quad c < 0 $$

    Stable for |nu| <= 1.
    """

    def stencil(self, u, u_minus, u_plus, params):
        if params.velocity >= 0.0:
            return backward_difference(u, u_minus, params.courant)
        return forward_difference(u, u_plus, params.courant)


@dataclass(frozen=True)
class BadUpwind(ExplicitScheme):
    """
    Upwind scheme applied on the wrong side.

    Takes the one-sided difference on the downwind side:
    $$ u_j^{n+1} = u_j^n - \\nu (u_{j+1}^n - u_j^n), \\quad c \\ge 0 $$

    Unstable for every nu > 0; kept to show what happens when the direction
    of information flow is ignored.
    """

    def stencil(self, u, u_minus, u_plus, params):
        if params.velocity >= 0.0:
            return forward_difference(u, u_plus, params.courant)
        return backward_difference(u, u_minus, params.courant)


@dataclass(frozen=True)
class FTCS(ExplicitScheme):
    """
    Forward in time, centred in space.

    $$ u_j^{n+1} = u_j^n - \\frac{\\nu}{2} (u_{j+1}^n - u_{j-1}^n)
       + \\mu (u_{j+1}^n - 2 u_j^n + u_{j-1}^n) $$

    Unconditionally unstable for pure advection (mu = 0); stable for pure
    diffusion (nu = 0) when mu <= 1/2.
    """

    def stencil(self, u, u_minus, u_plus, params):
        return ftcs_stencil(u, u_minus, u_plus, params.courant, params.diffusion_number)


@dataclass(frozen=True)
class Lax(ExplicitScheme):
    """
    Lax scheme: FTCS with u_j^n replaced by the average of its neighbours.

    $$ u_j^{n+1} = \\frac{1}{2} (u_{j-1}^n + u_{j+1}^n)
       - \\frac{\\nu}{2} (u_{j+1}^n - u_{j-1}^n) $$
    """

    def stencil(self, u, u_minus, u_plus, params):
        return lax_stencil(u_minus, u_plus, params.courant)


@dataclass(frozen=True)
class LaxWendroff(ExplicitScheme):
    """
    Lax-Wendroff scheme, second order in time and space.

    $$ u_j^{n+1} = u_j^n - \\frac{\\nu}{2} (u_{j+1}^n - u_{j-1}^n)
       + \\frac{\\nu^2}{2} (u_{j+1}^n - 2 u_j^n + u_{j-1}^n) $$

    Equivalent to the two half-step (Richtmyer) form for linear equations.
    """

    def stencil(self, u, u_minus, u_plus, params):
        return lax_wendroff_stencil(u, u_minus, u_plus, params.courant)


@dataclass(frozen=True)
class Leapfrog(AbstractScheme):
    """
    Leapfrog scheme, centred in time and space.

    $$ u_j^{n+1} = u_j^{n-1} - \\nu (u_{j+1}^n - u_{j-1}^n) $$

    Needs two levels. The first step must be taken by another scheme
    (e.g. `Lax`), see the `bootstrap` argument of `solve_with_history`.
    """

    def advance(self, state: State, params: Discretization) -> State:
        if state.u_prev is None:
            raise ValueError(
                "Leapfrog needs the previous time level; take the first step "
                "with a single-level scheme such as Lax."
            )
        u_minus, u_plus = self.boundary.neighbours(state.u)
        u_next = leapfrog_stencil(state.u_prev, u_minus, u_plus, params.courant)
        return state.push(self.boundary(u_next, state.u))


@dataclass(frozen=True)
class MacCormack(AbstractScheme):
    """
    MacCormack predictor-corrector scheme.

    Predictor (forward difference):
    $$ \\bar{u}_j = u_j^n - \\nu (u_{j+1}^n - u_j^n) $$

    Corrector (backward difference, averaged with the predictor):
    $$ u_j^{n+1} = \\frac{1}{2} (u_j^n + \\bar{u}_j) - \\frac{\\nu}{2} (\\bar{u}_j - \\bar{u}_{j-1}) $$

    Equivalent to Lax-Wendroff for linear equations.
    """

    def advance(self, state: State, params: Discretization) -> State:
        nu = params.courant
        u = state.u

        _, u_plus = self.boundary.neighbours(u)
        u_pred = self.boundary(forward_difference(u, u_plus, nu), u)

        u_pred_minus, _ = self.boundary.neighbours(u_pred)
        u_next = maccormack_corrector(u, u_pred, u_pred_minus, nu)

        return state.push(self.boundary(u_next, u))
