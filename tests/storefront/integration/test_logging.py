import logging

import pytest
import structlog
from storefront.utils.logging import configure_logging, current_environment, get_log_level


@pytest.fixture()
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_log_level_follows_environment(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.setenv("PROTEAN_ENV", "production")
    assert current_environment() == "production"
    assert get_log_level() == "INFO"


def test_explicit_log_level_wins(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    assert get_log_level() == "ERROR"


def test_file_handlers_only_with_log_dir(tmp_path, monkeypatch, restore_logging):
    monkeypatch.delenv("LOG_DIR", raising=False)
    configure_logging()
    assert len(logging.getLogger().handlers) == 1

    configure_logging(str(tmp_path))
    assert len(logging.getLogger().handlers) == 3
    assert (tmp_path / "storefront.log").exists()
