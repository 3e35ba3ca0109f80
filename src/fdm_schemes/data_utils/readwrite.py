"""
Utilities for writing solver output.

Text output follows the gnuplot data layout: `index` blocks separated by two
blank lines for 1-D histories, `splot` rows separated by one blank line for
2-D fields.
"""

import os
from typing import Optional, TextIO, Tuple

import jax.numpy as jnp
import numpy as np

from ..logging import get_logger

logger = get_logger(__name__)


def write_snapshots_1d(stream: TextIO, steps, x, u_history, label: str = "step"):
    """
    Write a 1-D solution history as gnuplot index blocks.

    Each snapshot becomes a `# <label> <n>` header followed by one
    `index x value` row per grid point, and is closed by two blank lines.

    Args:
        stream: Writable text stream
        steps: Step index of every snapshot, shape (n_snapshots,)
        x: Grid, shape (N,)
        u_history: Snapshots, shape (n_snapshots, N)
        label: Header word naming the snapshot index
    """
    steps = np.asarray(steps)
    x = np.asarray(x)
    u_history = np.asarray(u_history)

    if u_history.ndim != 2 or u_history.shape != (steps.shape[0], x.shape[0]):
        raise ValueError(
            f"u_history must have shape (len(steps), len(x)) = {(steps.shape[0], x.shape[0])}, "
            f"got {u_history.shape}"
        )

    for n, u in zip(steps, u_history):
        stream.write(f"# {label} {n}\n")
        for j, (x_j, u_j) in enumerate(zip(x, u)):
            stream.write(f"{j} {x_j:.10f} {u_j:.10f}\n")
        stream.write("\n\n")


def write_solution_2d(stream: TextIO, x, y, u, label: Optional[str] = None):
    """
    Write a 2-D field as `x y value` rows, one blank line after each x row.

    Args:
        stream: Writable text stream
        x: x coordinates, shape (n_x + 1,)
        y: y coordinates, shape (n_y + 1,)
        u: Field, shape (n_x + 1, n_y + 1)
        label: Optional header line
    """
    x = np.asarray(x)
    y = np.asarray(y)
    u = np.asarray(u)

    if u.shape != (x.shape[0], y.shape[0]):
        raise ValueError(f"u must have shape {(x.shape[0], y.shape[0])}, got {u.shape}")

    if label is not None:
        stream.write(f"# {label}\n")
    for i, x_i in enumerate(x):
        for k, y_k in enumerate(y):
            stream.write(f"{x_i:.10f} {y_k:.10f} {u[i, k]:.10f}\n")
        stream.write("\n")


def save_history(save_path: str, arrays: dict, metadata: Optional[dict] = None):
    """
    Save solution arrays to an NPZ file with metadata.

    Args:
        save_path: Path to save the NPZ file
        arrays: Dictionary of arrays (e.g. 'x', 'steps', 'u')
        metadata: Additional metadata to save
    """
    directory = os.path.dirname(save_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    # Convert JAX arrays to NumPy
    save_data = {}
    for key, value in arrays.items():
        if key.startswith('meta_'):
            raise ValueError(f"Array names must not start with 'meta_', got '{key}'")
        if isinstance(value, jnp.ndarray):
            save_data[key] = np.array(value)
        else:
            save_data[key] = value

    if metadata:
        for key, value in metadata.items():
            save_data[f"meta_{key}"] = value

    np.savez_compressed(save_path, **save_data)
    logger.info(f"History saved to: {save_path}")


def load_history(file_path: str, convert_to_jax: bool = True) -> Tuple[dict, dict]:
    """
    Load solution arrays from an NPZ file.

    Args:
        file_path: Path to the NPZ file
        convert_to_jax: Whether to convert arrays to JAX arrays (default: True)

    Returns:
        Tuple of (arrays, metadata) dictionaries
        - arrays: Contains the saved arrays
        - metadata: Contains metadata with 'meta_' prefix removed
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"History file not found: {file_path}")

    arrays = {}
    metadata = {}

    with np.load(file_path) as data:
        for key in data.files:
            value = data[key]

            if key.startswith('meta_'):
                metadata[key[5:]] = value.item() if value.ndim == 0 else value
            elif convert_to_jax:
                arrays[key] = jnp.array(value)
            else:
                arrays[key] = value

    logger.info(f"History loaded from: {file_path} ({', '.join(arrays)})")
    return arrays, metadata
