import logging
from unittest import TestCase

import structlog

from recepcao_core.adapters.config.structlog_config import LOGGER_NAME, configure_logging


class ConfigureLoggingTests(TestCase):
    def setUp(self):
        self.root_handlers = list(logging.getLogger().handlers)

    def tearDown(self):
        pkg_logger = logging.getLogger(LOGGER_NAME)
        for handler in list(pkg_logger.handlers):
            pkg_logger.removeHandler(handler)
        pkg_logger.propagate = True
        structlog.reset_defaults()

    def test_root_logger_is_left_alone(self):
        configure_logging("INFO")
        self.assertEqual(logging.getLogger().handlers, self.root_handlers)

    def test_reconfiguring_replaces_the_package_handler(self):
        configure_logging("DEBUG")
        pkg_logger = configure_logging("WARNING", json_logs=True)
        self.assertIs(pkg_logger, logging.getLogger(LOGGER_NAME))
        self.assertEqual(len(pkg_logger.handlers), 1)
        self.assertEqual(pkg_logger.level, logging.WARNING)
        self.assertFalse(pkg_logger.propagate)
