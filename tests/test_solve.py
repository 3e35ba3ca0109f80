"""Unit/integration tests for the driving loop and boundary policies."""

import pytest
import jax.numpy as jnp

from fdm_schemes import (
    FTCS,
    ConfigurationError,
    Discretization,
    FixedBoundary,
    Lax,
    Leapfrog,
    PeriodicBoundary,
    State,
    Upwind,
    advance_n,
    solve_with_history,
)
from fdm_schemes.boundary import BoundaryProtocol, make_boundary
from fdm_schemes.grid import BCType, create_uniform_grid
from fdm_schemes.initial_conditions import INITIAL_CONDITIONS, get_initial_condition, step


@pytest.fixture
def transport_setup():
    """Step profile on [-1, 1], 20 cells, courant number 0.5."""
    x, dx = create_uniform_grid(-1.0, 1.0, 20, BCType.FIXED, return_spacing=True)
    return x, step(x), Discretization.from_courant(0.5, dx=dx)


class TestSolveWithHistory:

    def test_snapshot_layout(self, transport_setup):
        x, u0, params = transport_setup
        steps, u = solve_with_history(Lax(), u0, params, n_steps=6, save_every=2)
        assert jnp.array_equal(steps, jnp.array([0, 2, 4, 6]))
        assert u.shape == (4, x.shape[0])
        assert jnp.array_equal(u[0], u0)

    def test_matches_advance_n(self, transport_setup):
        _, u0, params = transport_setup
        _, u = solve_with_history(FTCS(), u0, params, n_steps=5)
        state = advance_n(FTCS(), State(u=u0), params, 5)
        assert jnp.allclose(u[-1], state.u)

    def test_zero_steps(self, transport_setup):
        _, u0, params = transport_setup
        steps, u = solve_with_history(Upwind(), u0, params, n_steps=0)
        assert jnp.array_equal(steps, jnp.array([0]))
        assert jnp.array_equal(u[0], u0)

    def test_leapfrog_bootstrap(self, transport_setup):
        _, u0, params = transport_setup
        _, u = solve_with_history(Leapfrog(), u0, params, n_steps=4, bootstrap=Lax())
        lax_step = Lax().advance(State(u=u0), params)
        assert jnp.allclose(u[1], lax_step.u)
        assert jnp.all(jnp.isfinite(u))

    def test_leapfrog_without_bootstrap(self, transport_setup):
        _, u0, params = transport_setup
        with pytest.raises(ValueError):
            solve_with_history(Leapfrog(), u0, params, n_steps=2)

    @pytest.mark.parametrize("kwargs", [{"n_steps": -1}, {"n_steps": 4, "save_every": 0}])
    def test_invalid_arguments(self, transport_setup, kwargs):
        _, u0, params = transport_setup
        with pytest.raises(ValueError):
            solve_with_history(Upwind(), u0, params, **kwargs)

    def test_verbose(self, transport_setup, capsys):
        _, u0, params = transport_setup
        solve_with_history(Upwind(), u0, params, n_steps=2, verbose=True)
        out = capsys.readouterr().out
        assert "Solving with Upwind" in out
        assert "Completed" in out


class TestBoundary:

    def test_fixed_holds_initial_values(self):
        u_old = jnp.array([2.0, 0.0, 0.0, -1.0])
        u_new = jnp.array([5.0, 1.0, 1.0, 5.0])
        assert jnp.array_equal(FixedBoundary()(u_new, u_old), jnp.array([2.0, 1.0, 1.0, -1.0]))

    def test_fixed_given_values(self):
        u = jnp.zeros(4)
        assert jnp.array_equal(
            FixedBoundary(left=1.0, right=3.0)(u, u), jnp.array([1.0, 0.0, 0.0, 3.0])
        )

    def test_periodic_neighbours(self):
        u = jnp.array([1.0, 2.0, 3.0])
        u_minus, u_plus = PeriodicBoundary().neighbours(u)
        assert jnp.array_equal(u_minus, jnp.array([3.0, 1.0, 2.0]))
        assert jnp.array_equal(u_plus, jnp.array([2.0, 3.0, 1.0]))

    def test_make_boundary(self):
        assert isinstance(make_boundary(BCType.FIXED), FixedBoundary)
        assert isinstance(make_boundary(BCType.PERIODIC), PeriodicBoundary)
        assert isinstance(make_boundary(BCType.PERIODIC), BoundaryProtocol)


class TestGrid:

    def test_fixed_grid_includes_end_points(self):
        x, dx = create_uniform_grid(-1.0, 1.0, 20, BCType.FIXED, return_spacing=True)
        assert x.shape == (21,)
        assert jnp.isclose(x[0], -1.0) and jnp.isclose(x[-1], 1.0)
        assert jnp.isclose(dx, 0.1)

    def test_periodic_grid_drops_image_point(self):
        x, dx = create_uniform_grid(-1.0, 1.0, 20, BCType.PERIODIC, return_spacing=True)
        assert x.shape == (20,)
        assert jnp.isclose(x[-1] + dx, 1.0)

    def test_invalid_cell_count(self):
        with pytest.raises(ValueError):
            create_uniform_grid(-1.0, 1.0, 0, BCType.FIXED)


class TestInitialConditions:

    @pytest.mark.parametrize("name", sorted(INITIAL_CONDITIONS))
    def test_shape_and_range(self, name):
        x = jnp.linspace(-1.0, 1.0, 41)
        u = get_initial_condition(name)(x)
        assert u.shape == x.shape
        assert jnp.all(jnp.abs(u) <= 1.0)

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError):
            get_initial_condition("zigzag")
