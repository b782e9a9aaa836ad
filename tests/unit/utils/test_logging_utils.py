"""
Tests for the logging helpers.
"""
import logging
import os
import sys
import time

import pytest

from affinity_chain.utils.logging_utils import (
    cleanup_old_logs,
    get_log_file_path,
    set_log_level,
    setup_logger,
)


@pytest.fixture
def fresh_logger_name(request):
    """A unique logger name whose handlers are removed after the test."""
    name = f"affinity_chain_test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_get_log_file_path_without_timestamp(tmp_path):
    path = get_log_file_path("affinity_chain.folding", log_dir=tmp_path / "logs", include_timestamp=False)

    assert path == tmp_path / "logs" / "affinity_chain_folding.log"
    assert path.parent.is_dir()


def test_get_log_file_path_with_timestamp(tmp_path):
    path = get_log_file_path("pkg.mod", log_dir=tmp_path)
    assert path.name.startswith("pkg_mod_")
    assert path.suffix == ".log"


def test_setup_logger_console_only(fresh_logger_name):
    logger = setup_logger(fresh_logger_name, level=logging.DEBUG, enable_file_logging=False)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.handlers[0].stream is sys.stderr


def test_setup_logger_writes_explicit_file(fresh_logger_name, tmp_path):
    log_file = tmp_path / "nested" / "run.log"
    logger = setup_logger(fresh_logger_name, level=logging.INFO, log_file=str(log_file))

    logger.info("hello from the test")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "INFO" in content
    assert "hello from the test" in content


def test_setup_logger_is_idempotent(fresh_logger_name):
    setup_logger(fresh_logger_name, enable_file_logging=False)
    logger = setup_logger(fresh_logger_name, enable_file_logging=False)
    assert len(logger.handlers) == 1


def test_set_log_level_updates_handlers(fresh_logger_name):
    logger = setup_logger(fresh_logger_name, level=logging.INFO, enable_file_logging=False)

    set_log_level(logger, logging.ERROR)

    assert logger.level == logging.ERROR
    assert all(handler.level == logging.ERROR for handler in logger.handlers)


def test_cleanup_old_logs(tmp_path):
    old_log = tmp_path / "old.log"
    new_log = tmp_path / "new.log"
    other = tmp_path / "notes.txt"
    for path in (old_log, new_log, other):
        path.write_text("x", encoding="utf-8")

    ten_days_ago = time.time() - 10 * 86400
    os.utime(old_log, (ten_days_ago, ten_days_ago))
    os.utime(other, (ten_days_ago, ten_days_ago))

    assert cleanup_old_logs(tmp_path, days_to_keep=7) == 1
    assert not old_log.exists()
    assert new_log.exists()
    assert other.exists()


def test_cleanup_old_logs_missing_dir(tmp_path):
    assert cleanup_old_logs(tmp_path / "absent") == 0
