import logging

import pytest

from payzen_ws.logging_config import init_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    yield root
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
    root.setLevel(saved_level)


def test_level_by_name(root_logger):
    init_logging("warning")
    assert root_logger.level == logging.WARNING


def test_handler_installed_once(root_logger):
    init_logging(logging.INFO)
    init_logging(logging.DEBUG)

    ours = [h for h in root_logger.handlers if h.get_name() == "payzen_ws.stdout"]
    assert len(ours) == 1
    assert root_logger.level == logging.DEBUG
