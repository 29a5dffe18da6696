"""Tests for :mod:`customer_auth.app_logging`."""

import logging
from unittest import TestCase, mock

from pythonjsonlogger import jsonlogger

from .. import app_logging


class TestSetupLogger(TestCase):
    """Tests for :func:`.app_logging.setup_logger`."""

    def setUp(self):
        """Remember the root logger so it can be restored."""
        self.root = logging.getLogger()
        self.handlers = list(self.root.handlers)
        self.level = self.root.level

    def tearDown(self):
        self.root.handlers = self.handlers
        self.root.setLevel(self.level)

    def test_json_handler(self):
        """A JSON formatter is installed on the root logger."""
        logger = app_logging.setup_logger('DEBUG')
        self.assertIs(logger, self.root)
        self.assertEqual(logger.level, logging.DEBUG)
        added = [h for h in logger.handlers if h not in self.handlers]
        self.assertEqual(len(added), 1)
        self.assertIsInstance(added[0].formatter, jsonlogger.JsonFormatter)

    def test_level_from_config(self):
        """Without an explicit level the configured one is used."""
        with mock.patch.object(app_logging.config, 'LOG_LEVEL', 'WARNING'):
            logger = app_logging.setup_logger()
        self.assertEqual(logger.level, logging.WARNING)
