"""Tests for the logging helpers."""

import io
import logging

import pytest
import jax.numpy as jnp

from fdm_schemes.logging import configure_logging, get_logger
from fdm_schemes.relaxation import PointJacobi


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    configure_logging(level=logging.WARNING, stream=stream)
    yield stream
    configure_logging(level=logging.WARNING)


class TestLogging:

    def test_namespace(self):
        assert get_logger("cli").name == "fdm_schemes.cli"
        assert get_logger("fdm_schemes.cli") is get_logger("cli")

    def test_no_duplicate_handlers(self):
        logger = get_logger("test_handlers")
        assert len(get_logger("test_handlers").handlers) == len(logger.handlers) == 1

    def test_non_convergence_warning(self, log_stream):
        u0 = jnp.zeros((6, 6)).at[:, -1].set(1.0)
        PointJacobi(maxiter=2)(u0)
        output = log_stream.getvalue()
        assert "[WARNING] fdm_schemes.relaxation.convergence" in output
        assert "did not converge within 2 sweeps" in output

    def test_configure_logging_level(self, log_stream):
        logger = get_logger("test_levels")
        configure_logging(level="INFO", stream=log_stream)
        logger.debug("hidden")
        configure_logging(level="DEBUG", stream=log_stream)
        logger.debug("shown")
        output = log_stream.getvalue()
        assert "hidden" not in output
        assert "shown" in output
