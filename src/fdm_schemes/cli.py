"""
Command-line entry point.

Usage:
    fdm-schemes <example>

Reads `inputs/<example>.json` and writes `outputs/<example>.dat` (text) and
`outputs/<example>.npz` (arrays), all relative to the working directory.
"""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from .errors import ConfigurationError, SingularSystemError
from .config import load_config
from .data_utils import save_history
from .logging import configure_logging, get_logger
from .problems import EXAMPLES, get_example

logger = get_logger(__name__)

INPUT_DIR = "inputs"
OUTPUT_DIR = "outputs"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fdm-schemes",
        description="Run a finite-difference example and write its output file.",
    )
    parser.add_argument(
        "example",
        choices=sorted(EXAMPLES),
        metavar="example",
        help=f"Example to run, one of: {', '.join(EXAMPLES)}",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=logging.INFO)
    example = get_example(args.example)

    input_path = os.path.join(INPUT_DIR, f"{example.name}.json")
    output_path = os.path.join(OUTPUT_DIR, f"{example.name}.dat")
    archive_path = os.path.join(OUTPUT_DIR, f"{example.name}.npz")

    # Solve fully before touching the output file
    try:
        config = load_config(input_path, example.config_cls)
        solution = example.run(config)
    except (ConfigurationError, SingularSystemError, FileNotFoundError) as e:
        logger.error(f"{example.name}: {e}")
        return 1

    if not solution.converged:
        logger.warning(f"{example.name}: solution did not converge, writing it anyway")

    os.makedirs(OUTPUT_DIR, exist_ok=True)
    with open(output_path, "w") as f:
        solution.write(f)

    arrays, metadata = solution.archive()
    save_history(archive_path, arrays, {"example": example.name, **metadata})

    logger.info(f"{example.name}: output written to {output_path} and {archive_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
