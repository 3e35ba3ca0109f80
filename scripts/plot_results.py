"""
Script for plotting the output file of an example run.

1-D histories are drawn as one curve per snapshot; 2-D fields as a filled
contour plot.

Usage:
    python scripts/plot_results.py outputs/lax.dat
"""

import argparse
import os
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np


def read_snapshots_1d(lines: List[str]) -> List[Tuple[int, np.ndarray, np.ndarray]]:
    """Parse `# step n` blocks of `index x value` rows."""
    snapshots = []
    rows = []
    step = None
    for line in lines + ["# end"]:
        if line.startswith("#"):
            if step is not None and rows:
                data = np.array(rows)
                snapshots.append((step, data[:, 1], data[:, 2]))
            rows = []
            fields = line[1:].split()
            step = int(fields[1]) if len(fields) > 1 and fields[1].isdigit() else None
        elif line.strip():
            rows.append([float(v) for v in line.split()])
    return snapshots


def read_solution_2d(lines: List[str]) -> Tuple[np.ndarray, np.ndarray, np.ndarray, Optional[str]]:
    """Parse `x y value` rows, one blank line after each x row."""
    label = None
    rows = []
    for line in lines:
        if line.startswith("#"):
            label = line[1:].strip()
        elif line.strip():
            rows.append([float(v) for v in line.split()])
    data = np.array(rows)
    x = np.unique(data[:, 0])
    y = np.unique(data[:, 1])
    u = data[:, 2].reshape(x.shape[0], y.shape[0])
    return x, y, u, label


def plot_file(path: str, save_path: Optional[str] = None):
    with open(path) as f:
        lines = f.read().splitlines()

    name = os.path.splitext(os.path.basename(path))[0]
    fig, ax = plt.subplots()

    if lines and lines[0].startswith("# step"):
        for step, x, u in read_snapshots_1d(lines):
            ax.plot(x, u, '-', marker='.', label=f"step {step}")
        ax.set_xlabel('x')
        ax.set_ylabel('u')
        ax.legend()
        ax.set_title(name)
    else:
        x, y, u, label = read_solution_2d(lines)
        contour = ax.contourf(x, y, u.T, levels=20)
        fig.colorbar(contour, ax=ax, label='u')
        ax.set_xlabel('x')
        ax.set_ylabel('y')
        ax.set_aspect('equal')
        ax.set_title(label or name)

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Figure saved to: {save_path}")
    else:
        plt.show()


def main():
    parser = argparse.ArgumentParser(description="Plot the output of an example run")
    parser.add_argument("path", type=str, help="Path to a .dat file written by fdm-schemes")
    parser.add_argument("--save", type=str, default=None, help="Save the figure instead of showing it")
    args = parser.parse_args()

    plot_file(args.path, args.save)


if __name__ == "__main__":
    main()
