import logging

import pytest

from foreach.config import get_settings
from foreach.launcher import ProcessLauncher


class RecordingLauncher(ProcessLauncher):
    """Records every argv instead of spawning a process."""

    def __init__(self, status=0):
        self.calls = []
        self.status = status

    def launch(self, argv):
        self.calls.append(list(argv))
        return self.status


@pytest.fixture
def launcher():
    return RecordingLauncher()


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("foreach")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
