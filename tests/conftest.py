import logging

import pytest

_ENV_VARS = (
    "SOLSIGNER_CONFIG",
    "SOLSIGNER_OUTPUT_FORMAT",
    "SOLSIGNER_KEYPAIR",
    "SOLSIGNER_LOG_LEVEL",
    "SOLANA_KEYPAIR",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    if hasattr(root, "_solsigner_stdout_handler"):
        delattr(root, "_solsigner_stdout_handler")
