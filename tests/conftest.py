import logging

import pytest

from run_canceller.utils.logging_config import ColoredFormatter


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Drop the handlers setup_logging() installs so they never outlive a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, ColoredFormatter) or isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
