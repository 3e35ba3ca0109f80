"""Type aliases to improve type hint readability."""

from typing import Callable, Tuple, TypeAlias
from jax import Array

Neighbours: TypeAlias = Tuple[Array, Array]
Sweep: TypeAlias = Callable[[Array], Tuple[Array, Array]]
