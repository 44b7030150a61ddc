"""
Unit tests for logger setup.
"""
import io
import logging

import pytest

from specpaste.logger import PACKAGE_LOGGER, get_logger, setup_logger


@pytest.fixture
def stream():
    stream = io.StringIO()
    setup_logger(level="DEBUG", format_string="%(name)s %(levelname)s %(message)s", stream=stream)
    yield stream
    setup_logger()


class TestGetLogger:
    """Tests for module logger naming."""

    def test_module_name_is_kept(self):
        assert get_logger("specpaste.services.parser").name == "specpaste.services.parser"

    def test_outside_name_is_namespaced(self):
        assert get_logger("wsgi").name == "specpaste.wsgi"

    def test_package_name(self):
        assert get_logger(PACKAGE_LOGGER) is logging.getLogger(PACKAGE_LOGGER)

    def test_module_loggers_have_no_handlers(self):
        module_logger = get_logger("specpaste.matching.fuzzy")
        assert module_logger.handlers == []
        assert module_logger.propagate


class TestSetupLogger:
    """Tests for package logger configuration."""

    def test_module_records_reach_package_handler(self, stream):
        get_logger("specpaste.services.parser").debug("Extracted 3 raw pairs")
        assert stream.getvalue() == "specpaste.services.parser DEBUG Extracted 3 raw pairs\n"

    def test_level_applies_to_modules(self, stream):
        setup_logger(level="warning", stream=stream)
        get_logger("specpaste.services.parser").info("hidden")
        get_logger("specpaste.extractors.page_fetcher").warning("shown")
        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_repeated_setup_keeps_one_handler(self, stream):
        setup_logger(stream=stream)
        setup_logger(stream=stream)
        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 1
        assert not logging.getLogger(PACKAGE_LOGGER).propagate
