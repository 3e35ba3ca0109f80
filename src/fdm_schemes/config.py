"""
Run parameters, loaded from JSON files and validated before any computation.

Example parameter file for a transport run:
```json
{
    "n_cells": 20,
    "velocity": 1.0,
    "courant": 0.5,
    "n_steps": 6,
    "ncycle_out": 2
}
```
"""

from dataclasses import MISSING, dataclass, fields
import json
import math
import os
import typing
from typing import Any, Mapping, Optional, Tuple, Type, TypeVar

from jax import Array
import jax.numpy as jnp

from .errors import ConfigurationError
from .grid import BCType, Discretization, create_uniform_grid
from .initial_conditions import get_initial_condition

ConfigT = TypeVar("ConfigT")

BOUNDARY_TYPES = {
    "fixed": BCType.FIXED,
    "periodic": BCType.PERIODIC,
}


def _exactly_one(**candidates) -> str:
    given = [name for name, value in candidates.items() if value is not None]
    if len(given) != 1:
        raise ConfigurationError(
            f"Exactly one of {', '.join(candidates)} must be given, got "
            f"{', '.join(given) if given else 'none'}"
        )
    return given[0]


def _positive(name: str, value):
    if not (math.isfinite(value) and value > 0):
        raise ConfigurationError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class TimeSteppingConfig:
    """
    Parameters of a 1-D time-stepping run.

    Attributes:
        n_cells: Number of grid cells on [x_min, x_max]
        x_min, x_max: Domain ends
        velocity: Advection speed c
        diffusivity: Diffusion coefficient alpha
        dt: Time step. Exactly one of dt, courant and diffusion_number.
        courant: |c| dt / dx, used to derive dt
        diffusion_number: alpha dt / dx^2, used to derive dt
        n_steps: Number of steps. Exactly one of n_steps and t_max.
        t_max: Final time, rounded up to a whole number of steps
        ncycle_out: Steps between stored snapshots
        initial_condition: Name of the initial condition
        boundary: 'fixed' or 'periodic'
        weight: Implicit weight of the Beam-Warming scheme
    """

    n_cells: int
    x_min: float = -1.0
    x_max: float = 1.0
    velocity: float = 0.0
    diffusivity: float = 0.0
    dt: Optional[float] = None
    courant: Optional[float] = None
    diffusion_number: Optional[float] = None
    n_steps: Optional[int] = None
    t_max: Optional[float] = None
    ncycle_out: int = 1
    initial_condition: str = "step"
    boundary: str = "fixed"
    weight: float = 0.5

    def __post_init__(self):
        if self.n_cells < 2:
            raise ConfigurationError(f"n_cells must be at least 2, got {self.n_cells}")
        if not self.x_max > self.x_min:
            raise ConfigurationError(
                f"x_max must exceed x_min, got x_min={self.x_min}, x_max={self.x_max}"
            )
        if not math.isfinite(self.velocity):
            raise ConfigurationError(f"velocity must be finite, got {self.velocity}")
        if not (math.isfinite(self.diffusivity) and self.diffusivity >= 0.0):
            raise ConfigurationError(f"diffusivity must be non-negative, got {self.diffusivity}")

        time_step = _exactly_one(dt=self.dt, courant=self.courant, diffusion_number=self.diffusion_number)
        _positive(time_step, getattr(self, time_step))
        if time_step == "courant" and self.velocity == 0.0:
            raise ConfigurationError("courant needs a non-zero velocity")
        if time_step == "diffusion_number" and self.diffusivity == 0.0:
            raise ConfigurationError("diffusion_number needs a positive diffusivity")

        duration = _exactly_one(n_steps=self.n_steps, t_max=self.t_max)
        if duration == "n_steps" and self.n_steps < 0:
            raise ConfigurationError(f"n_steps must be non-negative, got {self.n_steps}")
        if duration == "t_max":
            _positive("t_max", self.t_max)

        if self.ncycle_out < 1:
            raise ConfigurationError(f"ncycle_out must be positive, got {self.ncycle_out}")
        if not 0.0 <= self.weight <= 1.0:
            raise ConfigurationError(f"weight must lie in [0, 1], got {self.weight}")
        if self.boundary not in BOUNDARY_TYPES:
            raise ConfigurationError(
                f"Unknown boundary '{self.boundary}'. Available: {', '.join(BOUNDARY_TYPES)}"
            )
        get_initial_condition(self.initial_condition)

    @property
    def bc_type(self) -> BCType:
        return BOUNDARY_TYPES[self.boundary]

    @property
    def dx(self) -> float:
        return (self.x_max - self.x_min) / self.n_cells

    def grid(self) -> Array:
        return create_uniform_grid(self.x_min, self.x_max, self.n_cells, self.bc_type)

    def initial_state(self) -> Tuple[Array, Array]:
        """Grid and initial condition evaluated on it."""
        x = self.grid()
        return x, get_initial_condition(self.initial_condition)(x)

    def discretization(self) -> Discretization:
        dx = self.dx
        if self.dt is not None:
            dt = self.dt
        elif self.courant is not None:
            dt = self.courant * dx / abs(self.velocity)
        else:
            dt = self.diffusion_number * dx**2 / self.diffusivity
        return Discretization(dx=dx, dt=dt, velocity=self.velocity, diffusivity=self.diffusivity)

    def steps(self) -> int:
        """Number of time steps of the run."""
        if self.n_steps is not None:
            return self.n_steps
        # Guard against t_max / dt landing just above an integer
        return math.ceil(self.t_max / self.discretization().dt - 1e-9)


@dataclass(frozen=True)
class LaplaceConfig:
    """
    Parameters of a 2-D Laplace run on [0, length_x] x [0, length_y].

    The grid has shape (n_x + 1, n_y + 1); axis 0 is x, axis 1 is y. Edge
    values are Dirichlet data: left/right at x = 0 / length_x, bottom/top at
    y = 0 / length_y. Corners take the bottom/top values.
    """

    n_x: int
    n_y: int
    length_x: float = 1.0
    length_y: float = 1.0
    tol: float = 1e-10
    maxiter: int = 10_000
    omega: float = 1.5
    top: float = 1.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0
    initial_guess: float = 0.0

    def __post_init__(self):
        for name in ("n_x", "n_y"):
            if getattr(self, name) < 2:
                raise ConfigurationError(f"{name} must be at least 2, got {getattr(self, name)}")
        _positive("length_x", self.length_x)
        _positive("length_y", self.length_y)
        if not (math.isfinite(self.tol) and self.tol >= 0.0):
            raise ConfigurationError(f"tol must be non-negative, got {self.tol}")
        if self.maxiter < 1:
            raise ConfigurationError(f"maxiter must be positive, got {self.maxiter}")
        if not 0.0 < self.omega < 2.0:
            raise ConfigurationError(f"omega must lie in (0, 2), got {self.omega}")

    def coordinates(self) -> Tuple[Array, Array]:
        x = jnp.linspace(0.0, self.length_x, self.n_x + 1)
        y = jnp.linspace(0.0, self.length_y, self.n_y + 1)
        return x, y

    def initial_grid(self) -> Array:
        u = jnp.full((self.n_x + 1, self.n_y + 1), self.initial_guess, dtype=float)
        u = u.at[0, :].set(self.left).at[-1, :].set(self.right)
        u = u.at[:, 0].set(self.bottom).at[:, -1].set(self.top)
        return u


def _check_type(name: str, value: Any, hint) -> Any:
    """Check a JSON value against a field annotation, widening int to float."""
    args = typing.get_args(hint)
    if typing.get_origin(hint) is typing.Union and type(None) in args:
        if value is None:
            return None
        hint = next(arg for arg in args if arg is not type(None))

    if hint is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif hint is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif isinstance(value, hint):
        return value

    raise ConfigurationError(
        f"{name} must be of type {hint.__name__}, got {type(value).__name__} ({value!r})"
    )


def config_from_dict(data: Mapping[str, Any], cls: Type[ConfigT]) -> ConfigT:
    """
    Build a validated config object from a mapping.

    Args:
        data: Parameter mapping, typically parsed JSON
        cls: TimeSteppingConfig or LaplaceConfig

    Returns:
        Config instance

    Raises:
        ConfigurationError: On unknown or missing keys, wrong types or
            out-of-range values
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Parameters must be a JSON object, got {type(data).__name__}")

    hints = typing.get_type_hints(cls)
    known = {f.name: f for f in fields(cls)}

    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ConfigurationError(f"Unknown parameter(s) for {cls.__name__}: {', '.join(unknown)}")

    missing = sorted(
        name for name, f in known.items()
        if name not in data and f.default is MISSING and f.default_factory is MISSING
    )
    if missing:
        raise ConfigurationError(f"Missing parameter(s) for {cls.__name__}: {', '.join(missing)}")

    kwargs = {name: _check_type(name, value, hints[name]) for name, value in data.items()}
    return cls(**kwargs)


def load_config(path: str, cls: Type[ConfigT]) -> ConfigT:
    """
    Load and validate a JSON parameter file.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file is not valid JSON or fails validation
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Parameter file not found: {path}")

    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Cannot parse {path}: {e}") from e

    return config_from_dict(data, cls)
