"""Time-stepping schemes for the 1-D model equations."""

from .base import AbstractScheme, State
from .protocol import SchemeProtocol
from .explicit import (
    ExplicitScheme,
    Upwind,
    BadUpwind,
    FTCS,
    Lax,
    LaxWendroff,
    Leapfrog,
    MacCormack,
)
from .implicit import BeamWarming

__all__ = [
    # Base class and state
    'AbstractScheme',
    'SchemeProtocol',
    'State',

    # Explicit methods
    'ExplicitScheme',
    'Upwind',
    'BadUpwind',
    'FTCS',
    'Lax',
    'LaxWendroff',
    'Leapfrog',
    'MacCormack',

    # Implicit methods
    'BeamWarming',
]
