"""Direct solver for tridiagonal linear systems (Thomas algorithm)."""

from typing import NamedTuple, Tuple

from flax import nnx
import jax
from jax import Array
import jax.numpy as jnp

from ..errors import SingularSystemError


class TridiagonalSystem(NamedTuple):
    """
    Tridiagonal linear system A*x = rhs.

    Row i of A reads `lower[i] x[i-1] + diag[i] x[i] + upper[i] x[i+1]`.
    All four sequences have length N; `lower[0]` and `upper[N-1]` lie outside
    the matrix and are ignored.
    """

    lower: Array
    diag: Array
    upper: Array
    rhs: Array

    def matvec(self, x: Array) -> Array:
        """Compute A*x."""
        x_minus = jnp.concatenate([jnp.zeros((1,), x.dtype), x[:-1]])
        x_plus = jnp.concatenate([x[1:], jnp.zeros((1,), x.dtype)])
        return self.lower * x_minus + self.diag * x + self.upper * x_plus


@jax.jit
def _thomas_sweeps(lower: Array, diag: Array, upper: Array, rhs: Array) -> Tuple[Array, Array]:
    """
    Forward elimination followed by back substitution.

    Returns the solution and the pivots met during elimination. A zero pivot
    leaves non-finite values in the solution; the caller must check.
    """
    zero = jnp.zeros((), rhs.dtype)
    lower = lower.at[0].set(zero)
    upper = upper.at[-1].set(zero)

    def eliminate(carry, row):
        c_prev, d_prev = carry
        a, b, c, d = row
        pivot = b - a * c_prev
        c_new = c / pivot
        d_new = (d - a * d_prev) / pivot
        return (c_new, d_new), (c_new, d_new, pivot)

    _, (c_star, d_star, pivots) = jax.lax.scan(
        eliminate, (zero, zero), (lower, diag, upper, rhs)
    )

    def substitute(x_next, row):
        c, d = row
        x = d - c * x_next
        return x, x

    _, x = jax.lax.scan(substitute, zero, (c_star, d_star), reverse=True)

    return x, pivots


def solve_tridiagonal(lower: Array, diag: Array, upper: Array, rhs: Array) -> Array:
    """
    Solve a tridiagonal system with the Thomas algorithm.

    O(N) forward elimination then back substitution, no pivoting.

    Args:
        lower: Sub-diagonal, length N (entry 0 ignored)
        diag: Main diagonal, length N
        upper: Super-diagonal, length N (entry N-1 ignored)
        rhs: Right-hand side, length N

    Returns:
        Solution x of length N

    Raises:
        ValueError: If the sequences are empty or differ in length
        SingularSystemError: If a zero pivot arises during elimination
    """
    lower, diag, upper, rhs = (
        jnp.asarray(v, dtype=float) for v in (lower, diag, upper, rhs)
    )
    shapes = {v.shape for v in (lower, diag, upper, rhs)}
    if len(shapes) != 1 or lower.ndim != 1:
        raise ValueError(
            "lower, diag, upper and rhs must be 1-D sequences of equal length, "
            f"got shapes {[v.shape for v in (lower, diag, upper, rhs)]}"
        )
    if rhs.size == 0:
        raise ValueError("Cannot solve an empty tridiagonal system")

    x, pivots = _thomas_sweeps(lower, diag, upper, rhs)

    singular = pivots == 0.0
    if jnp.any(singular):
        raise SingularSystemError(int(jnp.argmax(singular)))

    return x


class Thomas(nnx.Module):
    """
    Thomas algorithm for tridiagonal systems.

    Implements: TridiagonalSolverProtocol
    """

    def __call__(self, system: TridiagonalSystem) -> Array:
        """
        Solve A*x = rhs.

        Args:
            system: Tridiagonal system to solve

        Returns:
            Solution x
        """
        return solve_tridiagonal(system.lower, system.diag, system.upper, system.rhs)
