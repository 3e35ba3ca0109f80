import jax.numpy as jnp
from matplotlib import pyplot as plt

from fdm_schemes import FTCS, BeamWarming, Discretization, solve_with_history
from fdm_schemes.grid import BCType, create_uniform_grid
from fdm_schemes.initial_conditions import sine


def analytical_diffusion_solution(x, t, alpha):
    """
    Analytical solution for the 1D diffusion equation on [-1, 1] with:
    - Initial condition: u(x, 0) = sin(pi x)
    - Boundary conditions: u(-1, t) = u(1, t) = 0
    - Solution: u(x, t) = exp(-alpha pi^2 t) sin(pi x)
    """
    return jnp.exp(-alpha * jnp.pi**2 * t) * jnp.sin(jnp.pi * x)


def main(n_cells=40, alpha=1.0, mu=0.4, n_steps=400, save_every=80):
    """
    Solve the diffusion equation with FTCS and Crank-Nicolson and plot both
    against the analytical solution.

    Arguments:
        n_cells - Number of grid cells (default 40)
        alpha - Diffusion coefficient (default 1.0)
        mu - Diffusion number alpha dt / dx^2 (default 0.4)
        n_steps - Number of time steps (default 400)
        save_every - Steps between stored snapshots (default 80)
    """
    # Set up system
    x, dx = create_uniform_grid(-1.0, 1.0, n_cells, BCType.FIXED, return_spacing=True)
    params = Discretization.from_diffusion_number(mu, dx=dx, diffusivity=alpha)
    u0 = sine(x)

    # Solve the equation
    print("Solving...")
    steps, u_ftcs = solve_with_history(FTCS(), u0, params, n_steps, save_every=save_every)
    _, u_cn = solve_with_history(BeamWarming(lam=0.5), u0, params, n_steps, save_every=save_every)
    print("Solve finished.")

    t = steps * params.dt
    u_analytical = [analytical_diffusion_solution(x, t[i], alpha) for i in range(len(t))]

    # Compare at the stored time points
    for i in range(1, len(t)):
        norm = jnp.linalg.norm(u_analytical[i])
        error_ftcs = jnp.linalg.norm(u_ftcs[i] - u_analytical[i]) / norm
        error_cn = jnp.linalg.norm(u_cn[i] - u_analytical[i]) / norm
        print(f"t={t[i]:.4f}: relative error FTCS = {error_ftcs:.3e}, Crank-Nicolson = {error_cn:.3e}")

    # Plot results
    fig, ax = plt.subplots()
    ax.plot(x, u_analytical[0], 'k--', label=f"Analytical, $t={t[0]:.2f}$")
    ax.plot(x, u_ftcs[-1], '-', marker='.', label=f"FTCS, $t={t[-1]:.3f}$")
    ax.plot(x, u_cn[-1], '-', marker='x', label=f"Crank-Nicolson, $t={t[-1]:.3f}$")
    ax.plot(x, u_analytical[-1], '--', label=f"Analytical, $t={t[-1]:.3f}$")
    ax.legend()
    ax.set_xlabel('x')
    ax.set_ylabel('u')
    plt.show()


if __name__ == "__main__":
    main()
