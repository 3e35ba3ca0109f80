"""Unit tests for the Laplace relaxation solvers."""

import pytest
import jax.numpy as jnp

from fdm_schemes.config import LaplaceConfig
from fdm_schemes.relaxation import (
    SOR,
    PointJacobi,
    RelaxationSolver,
    RelaxationSolverProtocol,
    RelaxationStatus,
    jacobi_sweep,
    sor_sweep,
)


@pytest.fixture
def lid_grid():
    """
    Factory for a square grid with u = 1 on the top edge (y = y_max) and
    u = 0 on the other three.
    """
    def make(n):
        return LaplaceConfig(n_x=n, n_y=n).initial_grid()
    return make


class TestSweeps:

    def test_jacobi_single_point(self, lid_grid):
        u = jacobi_sweep(lid_grid(2))
        assert jnp.isclose(u[1, 1], 0.25)

    def test_sor_single_point(self, lid_grid):
        u = sor_sweep(lid_grid(2), 1.5)
        assert jnp.isclose(u[1, 1], 0.375)

    def test_sor_uses_updated_values(self):
        """
        Rows j = 1, 2 at k = 1 with u = 1 on the k = 2 edge: the second point
        sees the first point's new value.
        """
        u0 = jnp.zeros((4, 3)).at[:, 2].set(1.0)
        u_gs = sor_sweep(u0, 1.0)
        u_jacobi = jacobi_sweep(u0)
        assert jnp.isclose(u_gs[1, 1], 0.25)
        assert jnp.isclose(u_gs[2, 1], 0.3125)
        assert jnp.isclose(u_jacobi[2, 1], 0.25)

    @pytest.mark.parametrize("solver", [PointJacobi(), SOR(omega=1.0)])
    def test_integer_grid_promoted(self, lid_grid, solver):
        u_float = lid_grid(3)
        u_next, change = solver.sweep(u_float.astype(int))
        expected, _ = solver.sweep(u_float)
        assert jnp.issubdtype(u_next.dtype, jnp.floating)
        assert jnp.array_equal(u_next, expected)
        assert change > 0.0

    def test_base_solver_has_no_sweep(self, lid_grid):
        with pytest.raises(NotImplementedError, match="RelaxationSolver"):
            RelaxationSolver().sweep(lid_grid(2))

    def test_edges_untouched(self, lid_grid):
        u0 = lid_grid(6)
        for u in (jacobi_sweep(u0), sor_sweep(u0, 1.5)):
            assert jnp.array_equal(u[0, :], u0[0, :])
            assert jnp.array_equal(u[-1, :], u0[-1, :])
            assert jnp.array_equal(u[:, 0], u0[:, 0])
            assert jnp.array_equal(u[:, -1], u0[:, -1])


class TestConvergence:

    def test_jacobi_reference(self):
        u0 = jnp.tile(jnp.array([0.0, 0.0, 0.0, 1.0]), (4, 1))
        result = PointJacobi()(u0)
        assert result.converged
        expected = jnp.array([0.125, 0.375])
        assert jnp.allclose(result.u[1, 1:3], expected, atol=1e-10)
        assert jnp.allclose(result.u[2, 1:3], expected, atol=1e-10)

    @pytest.mark.parametrize("solver", [PointJacobi(), SOR(omega=1.5)])
    def test_lid_reference(self, lid_grid, solver):
        result = solver(lid_grid(8))
        assert result.status is RelaxationStatus.CONVERGED
        expected = jnp.array([
            0.0, 0.0448260716, 0.0962734264, 0.1617340455, 0.2499999988,
            0.3713541876, 0.5360795131, 0.7492915745, 1.0,
        ])
        assert jnp.allclose(result.u[4], expected, atol=1e-8)

    def test_jacobi_and_sor_agree(self, lid_grid):
        u0 = lid_grid(10)
        jacobi = PointJacobi()(u0)
        sor = SOR(omega=1.7)(u0)
        assert jacobi.converged and sor.converged
        assert jnp.allclose(jacobi.u, sor.u, atol=1e-8)

    def test_sor_needs_fewer_sweeps(self, lid_grid):
        u0 = lid_grid(4)
        jacobi = PointJacobi()(u0)
        sor = SOR(omega=1.2)(u0)
        assert sor.n_iter < jacobi.n_iter

    def test_trivial_problem_converges_in_one_sweep(self):
        u0 = jnp.ones((6, 5))
        for solver in (PointJacobi(), SOR()):
            result = solver(u0)
            assert result.converged
            assert result.n_iter == 1
            assert result.residual == 0.0

    def test_history_records_every_sweep(self, lid_grid):
        result = PointJacobi()(lid_grid(4))
        assert len(result.history) == result.n_iter
        assert result.history[-1] == result.residual
        assert result.residual <= 1e-10


class TestNonConvergence:

    def test_max_iterations_reached(self, lid_grid):
        result = PointJacobi(maxiter=3)(lid_grid(8))
        assert not result.converged
        assert result.status is RelaxationStatus.MAX_ITERATIONS_REACHED
        assert result.n_iter == 3
        assert result.residual > 1e-10

    def test_sor_max_iterations_reached(self, lid_grid):
        result = SOR(omega=1.5, tol=0.0, maxiter=5)(lid_grid(8))
        assert result.status is RelaxationStatus.MAX_ITERATIONS_REACHED
        assert result.n_iter == 5


class TestValidation:

    @pytest.mark.parametrize("omega", [0.0, 2.0, -0.5, 2.5])
    def test_invalid_omega(self, omega):
        with pytest.raises(ValueError):
            SOR(omega=omega)

    def test_invalid_tolerance(self):
        with pytest.raises(ValueError):
            PointJacobi(tol=-1.0)

    def test_invalid_maxiter(self):
        with pytest.raises(ValueError):
            SOR(maxiter=0)

    def test_rejects_non_2d_grid(self):
        with pytest.raises(ValueError):
            PointJacobi()(jnp.zeros(5))

    @pytest.mark.parametrize("solver", [PointJacobi(), SOR()])
    def test_implements_protocol(self, solver):
        assert isinstance(solver, RelaxationSolverProtocol)
