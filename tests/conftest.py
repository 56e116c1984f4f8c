import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Undo root-logger changes (e.g. from CLI invocations) between tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
