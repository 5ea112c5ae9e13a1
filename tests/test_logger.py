import importlib
import logging

import pytest

import docsign_core.crypto
from docsign_core.logger import ROOT_LOGGER, configure_logging, get_logger, resolve_level


@pytest.fixture
def fresh_root():
    """Detach the DocSign handlers for one test and restore them afterwards."""
    root = logging.getLogger(ROOT_LOGGER)
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers.clear()
    yield root
    for h in root.handlers:
        if h not in saved_handlers:
            h.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_resolve_level():
    assert resolve_level("debug") == (logging.DEBUG, None)
    assert resolve_level(" warning ") == (logging.WARNING, None)
    assert resolve_level(logging.ERROR) == (logging.ERROR, None)
    assert resolve_level("verbose") == (logging.INFO, "VERBOSE")


def test_unknown_env_level_falls_back_to_info(fresh_root, monkeypatch, caplog):
    monkeypatch.setenv("DOCSIGN_LOG_LEVEL", "verbose")
    caplog.set_level(logging.WARNING, logger=ROOT_LOGGER)
    root = configure_logging()
    assert root.level == logging.INFO
    assert "unknown log level 'VERBOSE'" in caplog.text


def test_module_import_survives_unknown_env_level(fresh_root, monkeypatch):
    monkeypatch.setenv("DOCSIGN_LOG_LEVEL", "verbose")
    importlib.reload(docsign_core.crypto)
    assert fresh_root.level == logging.INFO
    assert fresh_root.handlers


def test_child_loggers_share_parent_handlers(fresh_root):
    configure_logging("DEBUG")
    configure_logging("DEBUG")
    child = get_logger("DocSign.Something")
    assert child.handlers == []
    assert child.getEffectiveLevel() == logging.DEBUG
    assert sum(type(h) is logging.StreamHandler for h in fresh_root.handlers) == 1


def test_file_handler_added_once(fresh_root, tmp_path):
    target = tmp_path / "logs" / "docsign.log"
    configure_logging("INFO", str(target))
    configure_logging("INFO", str(target))
    files = [h for h in fresh_root.handlers if isinstance(h, logging.FileHandler)]
    assert len(files) == 1
    get_logger("DocSign.Test").info("[TEST] hello")
    files[0].flush()
    assert "[TEST] hello" in target.read_text()
