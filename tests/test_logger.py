"""
Tests for the shared logging setup.
"""
import logging

import pytest

from utils import logger as logger_module
from utils.logger import configure_logging, get_logger


@pytest.fixture
def root():
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


class TestConfigureLogging:

    def test_handler_installed_once(self, root):
        configure_logging("INFO")
        configure_logging("WARNING")
        get_logger("invoices")
        assert root.handlers.count(logger_module._handler) == 1

    @pytest.mark.parametrize("name, level", [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), (" error ", logging.ERROR)])
    def test_level_names(self, root, name, level):
        configure_logging(name)
        assert root.level == level

    @pytest.mark.parametrize("name", ["LOUD", "BASIC_FORMAT"])
    def test_unknown_level_falls_back_to_info(self, root, name):
        configure_logging(name)
        assert root.level == logging.INFO

    def test_get_logger_is_named(self):
        assert get_logger("services.query_service").name == "services.query_service"
