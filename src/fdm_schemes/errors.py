"""Exceptions raised by the solver engine."""


class ConfigurationError(ValueError):
    """Invalid, missing or out-of-range run parameters."""


class SingularSystemError(ValueError):
    """
    A zero pivot appeared during tridiagonal elimination.

    The system is not solvable by the Thomas algorithm, which usually means
    an unsupported parameter combination for an implicit scheme.
    """

    def __init__(self, row: int):
        self.row = row
        super().__init__(
            f"Zero pivot in row {row} of the tridiagonal system; "
            "the matrix cannot be factorised without pivoting."
        )
