import math
from dataclasses import dataclass, field
from enum import IntEnum

import jax.numpy as jnp

from .errors import ConfigurationError


class BCType(IntEnum):
    """
    Boundary condition types.

    Currently supported boundary conditions:
        FIXED
        PERIODIC
    """
    FIXED = 0
    PERIODIC = 1


def create_uniform_grid(x_min: float, x_max: float, n_cells: int, bc_type: BCType, return_spacing=False):
    """
    Create a uniform grid on [x_min, x_max] based on the boundary condition type.

    Args:
        x_min: Left end of the domain
        x_max: Right end of the domain
        n_cells: Number of grid cells
        bc_type: BCType object

    Returns:
        x: Grid
        dx: Grid spacing (only if return_spacing is True)
    """
    if bc_type not in (BCType.FIXED, BCType.PERIODIC):
        raise ValueError(f"Unsupported boundary condition type: {bc_type}")
    if n_cells < 1:
        raise ValueError(f"n_cells must be positive, got {n_cells}")

    dx = (x_max - x_min) / n_cells
    if bc_type == BCType.FIXED:
        # Both end points are grid points holding the boundary values
        x = jnp.linspace(x_min, x_max, n_cells + 1)
    else:
        # x_max is the periodic image of x_min and is not stored
        x = jnp.linspace(x_min, x_max, n_cells, endpoint=False)

    if return_spacing:
        return x, dx
    else:
        return x


def _require_positive(name: str, value: float):
    if not (math.isfinite(value) and value > 0.0):
        raise ConfigurationError(f"{name} must be positive and finite, got {value}")


@dataclass(frozen=True)
class Discretization:
    """
    Immutable discretization parameters of a 1-D run.

    Attributes:
        dx: Grid spacing.
        dt: Time step.
        velocity: Advection speed c (signed).
        diffusivity: Diffusion coefficient alpha.
        courant: c * dt / dx, computed once at construction.
        diffusion_number: alpha * dt / dx**2, computed once at construction.
    """

    dx: float
    dt: float
    velocity: float = 0.0
    diffusivity: float = 0.0
    courant: float = field(init=False)
    diffusion_number: float = field(init=False)

    def __post_init__(self):
        _require_positive("dx", self.dx)
        _require_positive("dt", self.dt)
        if not math.isfinite(self.velocity):
            raise ConfigurationError(f"velocity must be finite, got {self.velocity}")
        if not (math.isfinite(self.diffusivity) and self.diffusivity >= 0.0):
            raise ConfigurationError(
                f"diffusivity must be non-negative and finite, got {self.diffusivity}"
            )
        object.__setattr__(self, 'courant', self.velocity * self.dt / self.dx)
        object.__setattr__(self, 'diffusion_number', self.diffusivity * self.dt / self.dx**2)

    @classmethod
    def from_courant(cls, courant: float, dx: float = 1.0, velocity: float = 1.0) -> "Discretization":
        """Choose dt so that |velocity| * dt / dx equals `courant`."""
        _require_positive("courant", courant)
        if velocity == 0.0:
            raise ConfigurationError("velocity must be non-zero to derive dt from a Courant number")
        return cls(dx=dx, dt=courant * dx / abs(velocity), velocity=velocity)

    @classmethod
    def from_diffusion_number(cls, mu: float, dx: float = 1.0, diffusivity: float = 1.0) -> "Discretization":
        """Choose dt so that diffusivity * dt / dx**2 equals `mu`."""
        _require_positive("diffusion_number", mu)
        _require_positive("diffusivity", diffusivity)
        return cls(dx=dx, dt=mu * dx**2 / diffusivity, diffusivity=diffusivity)
