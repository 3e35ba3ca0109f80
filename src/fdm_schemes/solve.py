import time
from typing import Optional, Tuple

from jax import Array
import jax.numpy as jnp

from .grid import Discretization
from .schemes import SchemeProtocol, State


def advance_n(
    scheme: SchemeProtocol,
    state: State,
    params: Discretization,
    n_steps: int,
) -> State:
    """
    Advance `state` by `n_steps` levels with `scheme`.

    Args:
        scheme: Time-stepping scheme instance (e.g. Upwind(), BeamWarming())
        state: Starting state
        params: Discretization parameters
        n_steps: Number of steps to take

    Returns:
        State after n_steps steps
    """
    if n_steps < 0:
        raise ValueError(f"n_steps must be non-negative, got {n_steps}")

    for _ in range(n_steps):
        state = scheme.advance(state, params)
    return state


def solve_with_history(
    scheme: SchemeProtocol,
    u0: Array,
    params: Discretization,
    n_steps: int,
    save_every: int = 1,
    bootstrap: Optional[SchemeProtocol] = None,
    verbose: bool = False,
) -> Tuple[Array, Array]:
    """
    Advance u0 by `n_steps` levels and keep every `save_every`-th level.

    Args:
        scheme: Time-stepping scheme instance (e.g. Lax(), Leapfrog())
        u0: Initial condition on the full grid, boundary points included
        params: Discretization parameters
        n_steps: Total number of time steps
        save_every: Store a snapshot every this many steps. The initial
            level is always stored.
        bootstrap: Scheme used for the first step only. Two-level schemes
            such as Leapfrog need one (e.g. Lax()).
        verbose: Print progress information

    Returns:
        steps: Step index of every snapshot, shape (n_snapshots,)
        u: Snapshots, shape (n_snapshots, *u0.shape)

    Example usage:
    ```python
    from fdm_schemes import Discretization, Lax, Leapfrog, solve_with_history
    from fdm_schemes.grid import BCType, create_uniform_grid
    from fdm_schemes.initial_conditions import step

    x, dx = create_uniform_grid(-1.0, 1.0, 20, BCType.FIXED, return_spacing=True)
    params = Discretization.from_courant(1.0, dx=dx)
    steps, u = solve_with_history(
        Leapfrog(), step(x), params, n_steps=6, bootstrap=Lax()
    )
    ```
    """
    if n_steps < 0:
        raise ValueError(f"n_steps must be non-negative, got {n_steps}")
    if save_every < 1:
        raise ValueError(f"save_every must be positive, got {save_every}")

    if verbose:
        print(f"Solving with {type(scheme).__name__}")
        print(
            f"dx={params.dx:.4g}, dt={params.dt:.4g}, "
            f"courant={params.courant:.4g}, diffusion number={params.diffusion_number:.4g}, "
            f"{n_steps} steps"
        )

    state = State(u=jnp.asarray(u0, dtype=float))
    steps_save = [0]
    u_save = [state.u]

    start_wallclock = time.time()

    for n in range(1, n_steps + 1):
        if n == 1 and bootstrap is not None:
            state = bootstrap.advance(state, params)
        else:
            state = scheme.advance(state, params)

        if n % save_every == 0:
            steps_save.append(n)
            u_save.append(state.u)

    elapsed_wallclock = time.time() - start_wallclock

    if verbose:
        print(
            f"Completed in {elapsed_wallclock:.3f}s "
            f"({n_steps / max(elapsed_wallclock, 1e-12):.1f} steps/s)"
        )

    return jnp.asarray(steps_save), jnp.stack(u_save, axis=0)
