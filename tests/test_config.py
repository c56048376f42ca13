import logging
import os

import pytest

from orrery import config
from orrery.logging_config import setup_logging


@pytest.fixture
def orrery_logger():
    logger = logging.getLogger("orrery")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_textures_live_under_assets():
    assert config.TEXTURES_PATH == os.path.join(config.ASSETS_PATH, "textures")
    assert os.path.isabs(config.ASSETS_PATH)


def test_resource_path_prefers_frozen_bundle(monkeypatch, tmp_path):
    monkeypatch.setattr(config.sys, "_MEIPASS", str(tmp_path), raising=False)
    assert config.get_resource_path("assets") == os.path.join(str(tmp_path), "assets")


def test_setup_logging_replaces_handlers(orrery_logger):
    setup_logging(logging.DEBUG)
    setup_logging(logging.DEBUG)

    assert orrery_logger.level == logging.DEBUG
    assert len(orrery_logger.handlers) == 1


def test_setup_logging_writes_file(orrery_logger, tmp_path):
    log_file = tmp_path / "orrery.log"
    setup_logging(logging.INFO, log_file=str(log_file))

    logging.getLogger("orrery.model.catalog").info("catalog loaded")
    for handler in orrery_logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized." in text
    assert "orrery.model.catalog - INFO - catalog loaded" in text
