"""
Registry of runnable examples, one per textbook program.

Each example pairs a parameter class with a runner that builds the grid,
scheme or solver from the parameters and returns a `Solution` ready to be
written out.
"""

from dataclasses import dataclass
from typing import Callable, Dict, NamedTuple, Optional, TextIO, Tuple, Type, Union

from jax import Array
import jax.numpy as jnp

from .boundary import make_boundary
from .config import LaplaceConfig, TimeSteppingConfig
from .data_utils import write_snapshots_1d, write_solution_2d
from .errors import ConfigurationError
from .logging import get_logger
from .relaxation import SOR, PointJacobi, RelaxationResult, RelaxationSolverProtocol
from .schemes import (
    FTCS,
    BadUpwind,
    BeamWarming,
    Lax,
    LaxWendroff,
    Leapfrog,
    MacCormack,
    SchemeProtocol,
    Upwind,
)
from .solve import solve_with_history

logger = get_logger(__name__)


class TimeSteppingSolution(NamedTuple):
    """Stored snapshots of a 1-D run."""

    x: Array
    steps: Array
    u: Array
    converged: bool = True

    def write(self, stream: TextIO):
        write_snapshots_1d(stream, self.steps, self.x, self.u)

    def archive(self) -> Tuple[dict, dict]:
        """Arrays and metadata for `save_history`."""
        return {"x": self.x, "steps": self.steps, "u": self.u}, {"converged": self.converged}


class LaplaceSolution(NamedTuple):
    """Final grid of a relaxation run."""

    name: str
    x: Array
    y: Array
    result: RelaxationResult

    @property
    def converged(self) -> bool:
        return self.result.converged

    def write(self, stream: TextIO):
        state = "converged" if self.converged else "not converged"
        label = (
            f"{self.name} {state} after {self.result.n_iter} sweeps "
            f"(max change {self.result.residual:.3e})"
        )
        write_solution_2d(stream, self.x, self.y, self.result.u, label=label)

    def archive(self) -> Tuple[dict, dict]:
        arrays = {
            "x": self.x,
            "y": self.y,
            "u": self.result.u,
            "history": jnp.asarray(self.result.history),
        }
        metadata = {
            "solver": self.name,
            "status": self.result.status.value,
            "n_iter": self.result.n_iter,
            "residual": self.result.residual,
            "converged": self.converged,
        }
        return arrays, metadata


Solution = Union[TimeSteppingSolution, LaplaceSolution]
Config = Union[TimeSteppingConfig, LaplaceConfig]


@dataclass(frozen=True)
class Example:
    """
    A named, runnable example.

    Attributes:
        name: Registry key, also the stem of the parameter and output files
        description: One-line summary
        config_cls: Parameter class the input file is loaded into
        run: Maps a parameter object to a Solution
    """

    name: str
    description: str
    config_cls: Type
    run: Callable[[Config], Solution]


def _time_stepping_runner(
    make_scheme: Callable[..., SchemeProtocol],
    make_bootstrap: Optional[Callable[..., SchemeProtocol]] = None,
) -> Callable[[TimeSteppingConfig], TimeSteppingSolution]:

    def run(config: TimeSteppingConfig) -> TimeSteppingSolution:
        boundary = make_boundary(config.bc_type)
        try:
            scheme = make_scheme(config, boundary)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        bootstrap = make_bootstrap(config, boundary) if make_bootstrap is not None else None

        x, u0 = config.initial_state()
        params = config.discretization()
        n_steps = config.steps()

        logger.info(
            f"{type(scheme).__name__}: {x.shape[0]} points, courant={params.courant:.4g}, "
            f"diffusion number={params.diffusion_number:.4g}, {n_steps} steps"
        )
        steps, u = solve_with_history(
            scheme, u0, params, n_steps, save_every=config.ncycle_out, bootstrap=bootstrap
        )
        return TimeSteppingSolution(x=x, steps=steps, u=u)

    return run


def _relaxation_runner(
    make_solver: Callable[[LaplaceConfig], RelaxationSolverProtocol],
) -> Callable[[LaplaceConfig], LaplaceSolution]:

    def run(config: LaplaceConfig) -> LaplaceSolution:
        solver = make_solver(config)
        x, y = config.coordinates()
        result = solver(config.initial_grid())
        logger.info(
            f"{type(solver).__name__}: {result.status.value} after {result.n_iter} sweeps, "
            f"max change {result.residual:.3e}"
        )
        return LaplaceSolution(name=type(solver).__name__, x=x, y=y, result=result)

    return run


def _transport(name, description, make_scheme, make_bootstrap=None) -> Example:
    return Example(name, description, TimeSteppingConfig, _time_stepping_runner(make_scheme, make_bootstrap))


def _laplace(name, description, make_solver) -> Example:
    return Example(name, description, LaplaceConfig, _relaxation_runner(make_solver))


EXAMPLES: Dict[str, Example] = {
    example.name: example
    for example in (
        # Section 1: upwind differencing, done right and wrong
        _transport("good_upwind", "Transport equation, upwind difference",
                   lambda config, boundary: Upwind(boundary=boundary)),
        _transport("bad_upwind", "Transport equation, downwind difference (unstable)",
                   lambda config, boundary: BadUpwind(boundary=boundary)),

        # Section 2: linear hyperbolic
        _transport("upwind", "Transport equation, upwind scheme",
                   lambda config, boundary: Upwind(boundary=boundary)),
        _transport("ftcs", "Transport equation, FTCS scheme",
                   lambda config, boundary: FTCS(boundary=boundary)),
        _transport("lax", "Transport equation, Lax scheme",
                   lambda config, boundary: Lax(boundary=boundary)),
        _transport("lax_wendroff", "Transport equation, Lax-Wendroff scheme",
                   lambda config, boundary: LaxWendroff(boundary=boundary)),
        _transport("leapfrog", "Transport equation, Leapfrog scheme started with a Lax step",
                   lambda config, boundary: Leapfrog(boundary=boundary),
                   lambda config, boundary: Lax(boundary=boundary)),
        _transport("maccormack", "Transport equation, MacCormack scheme",
                   lambda config, boundary: MacCormack(boundary=boundary)),
        _transport("beam_warming", "Transport equation, Beam-Warming scheme",
                   lambda config, boundary: BeamWarming(boundary=boundary, lam=config.weight)),

        # Section 2: parabolic
        _transport("ftcs_diffusion", "Diffusion equation, FTCS scheme",
                   lambda config, boundary: FTCS(boundary=boundary)),
        _transport("beam_warming_diffusion", "Diffusion equation, Beam-Warming scheme",
                   lambda config, boundary: BeamWarming(boundary=boundary, lam=config.weight)),

        # Section 2: elliptic
        _laplace("point_jacobi", "Laplace equation, Point-Jacobi iteration",
                 lambda config: PointJacobi(tol=config.tol, maxiter=config.maxiter)),
        _laplace("sor", "Laplace equation, successive over-relaxation",
                 lambda config: SOR(omega=config.omega, tol=config.tol, maxiter=config.maxiter)),
    )
}


def get_example(name: str) -> Example:
    """
    Look up an example by name.

    Raises:
        KeyError: If no example has this name
    """
    if name not in EXAMPLES:
        raise KeyError(f"Unknown example '{name}'. Available: {', '.join(EXAMPLES)}")
    return EXAMPLES[name]
