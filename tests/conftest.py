"""
Shared pytest fixtures for statesync tests.
"""

import logging

import pytest

from statesync.any_support import AnySupport


@pytest.fixture
def any_support() -> AnySupport:
    return AnySupport()


@pytest.fixture(autouse=True)
def reset_statesync_logging():
    """Reset the statesync logger before and after each test.

    Leaves a lone NullHandler (library default) and NOTSET level so logging
    configuration from one test cannot leak into another.
    """
    logger = logging.getLogger("statesync")

    def reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    reset()
    yield
    reset()
