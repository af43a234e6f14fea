import io
import logging
import sys

import pytest

from solsigner.logging_utils import setup_stdout_logging


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in original_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(original_level)
    if hasattr(root, "_solsigner_stdout_handler"):
        delattr(root, "_solsigner_stdout_handler")


def test_setup_stdout_logging_reuses_handler(clean_root):
    handler = setup_stdout_logging()
    again = setup_stdout_logging(level="debug")
    assert again is handler
    assert handler.stream is sys.stdout
    assert handler.level == logging.DEBUG
    assert clean_root.level == logging.DEBUG
    assert clean_root.handlers.count(handler) == 1


def test_setup_stdout_logging_format(clean_root):
    stream = io.StringIO()
    setup_stdout_logging(level=logging.INFO, stream=stream)
    logging.getLogger("solsigner.test").info("hello %s", "world")
    line = stream.getvalue().strip()
    assert line.endswith("| hello world")
    assert "[INFO] solsigner.test:" in line


def test_setup_stdout_logging_unknown_level(clean_root):
    with pytest.raises(ValueError):
        setup_stdout_logging(level="chatty")
