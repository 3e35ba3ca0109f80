"""Unit tests for the tridiagonal solver."""

import pytest
import jax
import jax.numpy as jnp

from fdm_schemes import SingularSystemError
from fdm_schemes.linsolvers import (
    Thomas,
    TridiagonalSolverProtocol,
    TridiagonalSystem,
    solve_tridiagonal,
)


@pytest.fixture
def diagonally_dominant_system():
    """Random, strictly diagonally dominant system of size 64."""
    n = 64
    k1, k2, k3, k4 = jax.random.split(jax.random.PRNGKey(0), 4)
    lower = jax.random.uniform(k1, (n,), minval=-1.0, maxval=1.0)
    upper = jax.random.uniform(k2, (n,), minval=-1.0, maxval=1.0)
    diag = 2.5 + jax.random.uniform(k3, (n,))
    rhs = jax.random.normal(k4, (n,))
    return TridiagonalSystem(lower=lower, diag=diag, upper=upper, rhs=rhs)


class TestThomas:

    def test_small_exact_system(self):
        """
        Rows (lower, diag, upper): (0, 1, 2), (3, 4, 5), (6, 7, 0).
        """
        x = solve_tridiagonal(
            lower=[0.0, 3.0, 6.0],
            diag=[1.0, 4.0, 7.0],
            upper=[2.0, 5.0, 0.0],
            rhs=[8.0, 9.0, 10.0],
        )
        expected = jnp.array([21.0 / 22.0, 155.0 / 44.0, -35.0 / 22.0])
        assert jnp.allclose(x, expected, atol=1e-12)

    def test_residual(self, diagonally_dominant_system):
        system = diagonally_dominant_system
        x = Thomas()(system)
        assert jnp.allclose(system.matvec(x), system.rhs, atol=1e-10)

    def test_ignores_out_of_matrix_entries(self, diagonally_dominant_system):
        system = diagonally_dominant_system
        x = solve_tridiagonal(*system)
        lower = system.lower.at[0].set(1e6)
        upper = system.upper.at[-1].set(-1e6)
        x_modified = solve_tridiagonal(lower, system.diag, upper, system.rhs)
        assert jnp.array_equal(x, x_modified)

    def test_deterministic(self, diagonally_dominant_system):
        x1 = solve_tridiagonal(*diagonally_dominant_system)
        x2 = solve_tridiagonal(*diagonally_dominant_system)
        assert jnp.array_equal(x1, x2)

    def test_single_equation(self):
        x = solve_tridiagonal([0.0], [4.0], [0.0], [2.0])
        assert jnp.allclose(x, jnp.array([0.5]))

    def test_implements_protocol(self):
        assert isinstance(Thomas(), TridiagonalSolverProtocol)


class TestThomasErrors:

    def test_zero_leading_pivot(self):
        with pytest.raises(SingularSystemError) as excinfo:
            solve_tridiagonal([0.0, 1.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0])
        assert excinfo.value.row == 0

    def test_zero_pivot_during_elimination(self):
        # pivot_1 = 1 - 1 * (1 / 1) = 0
        with pytest.raises(SingularSystemError) as excinfo:
            solve_tridiagonal([0.0, 1.0, 1.0], [1.0, 1.0, 3.0], [1.0, 1.0, 0.0], [1.0, 2.0, 3.0])
        assert excinfo.value.row == 1

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            solve_tridiagonal([0.0, 1.0], [2.0, 2.0, 2.0], [1.0, 0.0], [1.0, 1.0])

    def test_empty_system(self):
        with pytest.raises(ValueError):
            solve_tridiagonal([], [], [], [])
