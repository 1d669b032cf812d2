"""Tests for the logging helpers."""

import logging

import pytest

from contentcache.utils.logging import (
    ColoredFormatter,
    disable_logging,
    enable_logging,
    get_logger,
    init_default_logger,
    set_log_level,
    setup_logger,
)


@pytest.fixture
def logger_name(request):
    name = f"contentcache-test-{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestSetup:
    """Tests for logger configuration."""

    def test_package_logger_configured_on_import(self):
        logger = logging.getLogger("contentcache")
        assert logger.handlers
        assert logger.propagate is False

    def test_setup_is_idempotent(self, logger_name):
        first = setup_logger(logger_name)
        second = setup_logger(logger_name)

        assert first is second
        assert len(first.handlers) == 1

    def test_string_level(self, logger_name):
        logger = setup_logger(logger_name, level="debug")
        assert logger.level == logging.DEBUG

    def test_file_output(self, logger_name, tmp_path):
        log_file = tmp_path / "logs" / "cache.log"
        logger = setup_logger(logger_name, log_file=log_file, console=False)

        logger.warning("evicted entry")
        for handler in logger.handlers:
            handler.flush()

        assert "[WARNING] evicted entry" in log_file.read_text()

    def test_get_logger_updates_level(self, logger_name):
        get_logger(logger_name)
        logger = get_logger(logger_name, level="ERROR")
        assert logger.level == logging.ERROR

    def test_set_level_updates_handlers(self, logger_name):
        logger = setup_logger(logger_name)
        set_log_level("WARNING", logger_name)

        assert logger.level == logging.WARNING
        assert all(h.level == logging.WARNING for h in logger.handlers)

    def test_disable_and_enable(self, logger_name):
        logger = setup_logger(logger_name)

        disable_logging(logger_name)
        assert not logger.isEnabledFor(logging.CRITICAL)

        enable_logging(logger_name, level="INFO")
        assert logger.isEnabledFor(logging.INFO)

    def test_init_default_logger_reuses_package_logger(self):
        assert init_default_logger() is logging.getLogger("contentcache")


class TestColoredFormatter:
    """Tests for level coloring."""

    def test_colors_do_not_leak_into_record(self):
        formatter = ColoredFormatter("%(levelname)s %(message)s")
        formatter.use_colors = True
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)

        colored = formatter.format(record)

        assert "\033[" in colored
        assert record.levelname == "ERROR"

    def test_plain_when_disabled(self):
        formatter = ColoredFormatter("%(levelname)s %(message)s", use_colors=False)
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "ok", None, None)
        assert formatter.format(record) == "INFO ok"
