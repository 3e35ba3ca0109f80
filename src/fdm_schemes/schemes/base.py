"""Abstract base class for time-stepping schemes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from jax import Array

from ..boundary import BoundaryProtocol, FixedBoundary
from ..grid import Discretization


class State(NamedTuple):
    """
    Time-level buffers of a 1-D run.

    Attributes:
        u: Solution at the current level n.
        u_prev: Solution at level n-1, or None before the first step.
        step: Index n of the current level.
    """

    u: Array
    u_prev: Optional[Array] = None
    step: int = 0

    def push(self, u_next: Array) -> "State":
        """Return the state one level later; the current level becomes u_prev."""
        return State(u=u_next, u_prev=self.u, step=self.step + 1)


@dataclass(frozen=True)
class AbstractScheme(ABC):
    """
    Base class for time-stepping schemes.

    Attributes:
        boundary: Boundary policy applied after every update.
    """

    boundary: BoundaryProtocol = field(default_factory=FixedBoundary)

    @abstractmethod
    def advance(self, state: State, params: Discretization) -> State:
        """
        Take a single time step.

        Args:
            state: Current (and possibly previous) time level.
            params: Discretization parameters.

        Returns:
            State at the next time level.
        """
        ...
