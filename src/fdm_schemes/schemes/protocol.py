"""Protocols for time-stepping schemes."""

from typing import Protocol, runtime_checkable

from ..grid import Discretization
from .base import State


@runtime_checkable
class SchemeProtocol(Protocol):
    """
    Protocol for time-stepping schemes.

    Defines the interface for advancing a 1-D grid one time level.
    Any class implementing an advance() method with this signature can be
    driven by `solve_with_history`.
    """

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
