"""Unit tests for the package logger."""

import logging

import pytest
from binairo.logging_utils import LOGGER_NAME, get_logger, set_level


class TestLogging:

    def test_package_logger(self):
        logger = get_logger()
        assert logger.name == LOGGER_NAME
        assert logger.handlers

    def test_module_loggers_are_children(self):
        assert get_logger("binairo.solvers.csp_solver").name == "binairo.solvers.csp_solver"
        assert get_logger("scripts.run").name == "binairo.scripts.run"

    def test_set_level(self):
        logger = get_logger()
        previous = logger.level
        try:
            set_level("debug")
            assert logger.level == logging.DEBUG
            set_level(logging.ERROR)
            assert logger.level == logging.ERROR
        finally:
            logger.setLevel(previous)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
