"""Tests for the logging setup."""

import logging
from datetime import date

import pytest

from shapedview.services import logging_service


@pytest.fixture(autouse=True)
def clean_logging(monkeypatch):
    monkeypatch.delenv(logging_service.LOG_LEVEL_ENV, raising=False)
    logging_service.reset_logging()
    yield
    logging_service.reset_logging()


def package_logger():
    return logging.getLogger(logging_service.PACKAGE_LOGGER)


def test_package_logger_has_null_handler():
    assert any(isinstance(h, logging.NullHandler) for h in package_logger().handlers)


def test_setup_writes_log_file(tmp_path):
    logging_service.setup_logging(logging.DEBUG, log_to_file=True, log_dir=tmp_path)
    logging_service.get_logger("shapedview.core.paths").info("hello")
    for handler in package_logger().handlers:
        handler.flush()

    path = logging_service.log_file_path(tmp_path)
    assert path.exists()
    assert "hello" in path.read_text()


def test_log_file_name():
    path = logging_service.log_file_path(logging_service.DEFAULT_LOG_DIR, date(2024, 3, 7))
    assert path.name == "shapedview_20240307.log"


def test_setup_leaves_root_logger_alone():
    root = logging.getLogger()
    sentinel = logging.NullHandler()
    root.addHandler(sentinel)
    before = list(root.handlers)
    try:
        logging_service.setup_logging(log_to_file=False)
        assert root.handlers == before
        logging_service.reset_logging()
        assert root.handlers == before
    finally:
        root.removeHandler(sentinel)


def test_reset_removes_only_installed_handlers():
    foreign = logging.NullHandler()
    package_logger().addHandler(foreign)
    try:
        logging_service.setup_logging(log_to_file=False)
        logging_service.reset_logging()
        handlers = package_logger().handlers
        assert foreign in handlers
        assert not any(type(h) is logging.StreamHandler for h in handlers)
        assert package_logger().propagate
    finally:
        package_logger().removeHandler(foreign)


def test_setup_is_idempotent():
    logging_service.setup_logging(log_to_file=False)
    count = len(package_logger().handlers)
    logging_service.setup_logging(log_to_file=False)
    assert len(package_logger().handlers) == count


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv(logging_service.LOG_LEVEL_ENV, "debug")
    logger = logging_service.setup_logging(logging.WARNING, log_to_file=False)
    assert logger.level == logging.DEBUG


def test_unknown_environment_level_is_ignored(monkeypatch):
    monkeypatch.setenv(logging_service.LOG_LEVEL_ENV, "chatty")
    logger = logging_service.setup_logging(logging.WARNING, log_to_file=False)
    assert logger.level == logging.WARNING
