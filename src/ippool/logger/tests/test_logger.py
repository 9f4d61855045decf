# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Tests for `ippool.logger`."""

import logging
import logging.config

from fixtures import FakeLogger

from ippool import logger
from ippool.logger._common import (
    DEFAULT_LOG_VERBOSITY,
    make_logging_level_names_consistent,
)
from ippool.logger._ippoollog import get_ippool_logger, IPPoolLogger
from ippool.logger._logging import get_logging_config, get_logging_level
from ippooltesting.factory import factory
from ippooltesting.testcase import IPPoolTestCase


class TestGetLoggingLevel(IPPoolTestCase):
    scenarios = (
        ("errors-only", {"verbosity": 0, "level": logging.ERROR}),
        ("quiet", {"verbosity": 1, "level": logging.WARNING}),
        ("normal", {"verbosity": 2, "level": logging.INFO}),
        ("debug", {"verbosity": 3, "level": logging.DEBUG}),
        ("below-range", {"verbosity": -5, "level": logging.ERROR}),
        ("above-range", {"verbosity": 9, "level": logging.DEBUG}),
    )

    def test_maps_verbosity_to_level(self):
        self.assertEqual(self.level, get_logging_level(self.verbosity))


class TestGetLoggingConfig(IPPoolTestCase):
    def test_sets_root_and_ippool_levels(self):
        config = get_logging_config(3)
        self.assertEqual(logging.DEBUG, config["root"]["level"])
        self.assertEqual(
            logging.DEBUG, config["loggers"]["ippool"]["level"]
        )
        self.assertTrue(config["loggers"]["ippool"]["propagate"])

    def test_configures_only_the_ippool_logger(self):
        config = get_logging_config(2)
        self.assertEqual(["ippool"], list(config["loggers"]))

    def test_does_not_disable_existing_loggers(self):
        self.assertFalse(get_logging_config(2)["disable_existing_loggers"])


class TestConfigure(IPPoolTestCase):
    def setUp(self):
        super().setUp()
        self.dictConfig = self.patch(logging.config, "dictConfig")
        self.addCleanup(setattr, logger, "current_verbosity", 2)

    def test_applies_logging_config(self):
        logger.configure(1)
        self.dictConfig.assert_called_once_with(get_logging_config(1))
        self.assertEqual(1, logger.current_verbosity)

    def test_uses_default_verbosity(self):
        logger.configure()
        self.dictConfig.assert_called_once_with(
            get_logging_config(DEFAULT_LOG_VERBOSITY)
        )
        self.assertEqual(DEFAULT_LOG_VERBOSITY, logger.current_verbosity)

    def test_does_not_capture_warnings(self):
        capture = self.patch(logging, "captureWarnings")
        logger.configure(2)
        capture.assert_called_once_with(False)

    def test_set_verbosity_reconfigures(self):
        logger.set_verbosity(3)
        self.dictConfig.assert_called_once_with(get_logging_config(3))
        self.assertEqual(3, logger.current_verbosity)


class TestMakeLoggingLevelNamesConsistent(IPPoolTestCase):
    def setUp(self):
        super().setUp()
        names = {
            level: logging.getLevelName(level)
            for level in (
                logging.NOTSET,
                logging.DEBUG,
                logging.INFO,
                logging.WARNING,
                logging.ERROR,
                logging.CRITICAL,
            )
        }
        self.addCleanup(
            lambda: [
                logging.addLevelName(level, name)
                for level, name in names.items()
            ]
        )

    def test_renames_levels(self):
        make_logging_level_names_consistent()
        self.assertEqual("-", logging.getLevelName(logging.NOTSET))
        self.assertEqual("debug", logging.getLevelName(logging.DEBUG))
        self.assertEqual("info", logging.getLevelName(logging.INFO))
        self.assertEqual("warn", logging.getLevelName(logging.WARNING))
        self.assertEqual("error", logging.getLevelName(logging.ERROR))


class TestGetIPPoolLogger(IPPoolTestCase):
    def test_root_logger_is_named_ippool(self):
        ippoollog = get_ippool_logger()
        self.assertIsInstance(ippoollog, IPPoolLogger)
        self.assertEqual("ippool", ippoollog.name)

    def test_tagged_logger_is_a_child(self):
        tag = factory.make_name("tag")
        ippoollog = get_ippool_logger(tag)
        self.assertIsInstance(ippoollog, IPPoolLogger)
        self.assertEqual("ippool." + tag, ippoollog.name)

    def test_refuses_to_log_exceptions(self):
        ippoollog = get_ippool_logger(factory.make_name("tag"))
        self.assertRaises(NotImplementedError, ippoollog.exception, "boom")

    def test_records_reach_ippool_handlers(self):
        fake = self.useFixture(FakeLogger("ippool"))
        message = factory.make_name("message")
        get_ippool_logger(factory.make_name("tag")).info(message)
        self.assertIn(message, fake.output)
