import logging

import matplotlib

matplotlib.use("Agg")

import pytest

from figcompose import config


@pytest.fixture(autouse=True)
def _fresh_defaults(monkeypatch):
    for suffix in ("DPI", "LABEL_SIZE", "MAX_EXPORT_PX", "THEME"):
        monkeypatch.delenv(f"FIGCOMPOSE_{suffix}", raising=False)
    config.reload()
    yield
    config.reload()


@pytest.fixture(autouse=True)
def _detach_package_handlers():
    yield
    logger = logging.getLogger("figcompose")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
