"""Data utilities: snapshot writers and .npz archives."""

# Data I/O utilities
from .readwrite import write_snapshots_1d, write_solution_2d, save_history, load_history

__all__ = [
    # Text output
    "write_snapshots_1d",
    "write_solution_2d",

    # Archives
    "save_history",
    "load_history",
]
