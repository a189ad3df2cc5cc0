"""Pytest configuration for idhunt."""
import logging
from logging.handlers import RotatingFileHandler

import pytest

_OWN_HANDLER_TYPES = (logging.StreamHandler, RotatingFileHandler)


@pytest.fixture(autouse=True)
def reset_root_logging():
    # setup_logging() installs plain root handlers bound to the test's
    # captured streams; drop them so later tests do not write to closed files.
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in _OWN_HANDLER_TYPES:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
