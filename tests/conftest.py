"""Root test configuration: isolate logger state changed by CLI commands"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Restore the sitecontent logger level after each test."""
    logger = logging.getLogger("sitecontent")
    level = logger.level
    yield
    logger.setLevel(level)
