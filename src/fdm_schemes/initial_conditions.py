"""
Initial conditions on a 1-D grid, selectable by name.
"""

from typing import Callable, Dict

from jax import Array
import jax.numpy as jnp

from .errors import ConfigurationError


def step(x: Array) -> Array:
    """Unit step: 1 for x < 0, 0 otherwise."""
    return jnp.where(x < 0.0, 1.0, 0.0)


def square_pulse(x: Array, half_width: float = 0.25) -> Array:
    """1 on [-half_width, half_width], 0 elsewhere."""
    return jnp.where(jnp.abs(x) <= half_width, 1.0, 0.0)


def triangle(x: Array) -> Array:
    """Hat function 1 - |x|, clipped at zero."""
    return jnp.maximum(1.0 - jnp.abs(x), 0.0)


def gaussian(x: Array, centre: float = 0.0, width: float = 0.1) -> Array:
    return jnp.exp(-0.5 * ((x - centre) / width) ** 2)


def sine(x: Array) -> Array:
    return jnp.sin(jnp.pi * x)


INITIAL_CONDITIONS: Dict[str, Callable[[Array], Array]] = {
    "step": step,
    "square_pulse": square_pulse,
    "triangle": triangle,
    "gaussian": gaussian,
    "sine": sine,
}


def get_initial_condition(name: str) -> Callable[[Array], Array]:
    """
    Look up an initial condition by name.

    Raises:
        ConfigurationError: If the name is unknown
    """
    try:
        return INITIAL_CONDITIONS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown initial condition '{name}'. "
            f"Available: {', '.join(sorted(INITIAL_CONDITIONS))}"
        ) from None
