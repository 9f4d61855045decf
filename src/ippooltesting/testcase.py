# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Test related classes and functions for the address pool manager."""

__all__ = ["IPPoolTestCase"]


from collections.abc import Mapping
from functools import wraps
from importlib import import_module
import os
import random
from typing import Any
from unittest import mock
from unittest.mock import MagicMock

import testtools
from testtools.content import text_content

from ippooltesting.factory import factory
from ippooltesting.fixtures import TempDirectory
from ippooltesting.scenarios import WithScenarios


class IPPoolTestCase(WithScenarios, testtools.TestCase):
    """Base `TestCase` for the address pool manager.

    Supports `test scenarios`_ and `fixtures`_.

    .. _test scenarios: https://launchpad.net/testscenarios

    .. _fixtures: https://launchpad.net/python-fixtures

    """

    # Allow testtools to generate longer diffs when tests fail.
    maxDiff = testtools.TestCase.maxDiff * 3

    scenarios: tuple[Any] = (
        # (scenario-name, {instance-attribute-name: value, ...}),
    )

    def setUp(self):
        unittest_case = super(testtools.TestCase, self)
        self.assertEqual = unittest_case.assertEqual
        self.assertNotEqual = unittest_case.assertNotEqual

        self.assertIn = unittest_case.assertIn
        self.assertNotIn = unittest_case.assertNotIn

        self.assertIs = unittest_case.assertIs
        self.assertIsNot = unittest_case.assertIsNot

        self.assertIsNone = unittest_case.assertIsNone
        self.assertIsNotNone = unittest_case.assertIsNotNone

        rand_seed = os.environ.get("IPPOOL_RAND_SEED")
        random.seed(rand_seed)
        seed_info = []
        if rand_seed is not None:
            seed_info.append(f"IPPOOL_RAND_SEED={rand_seed}")

        if "PYTHONHASHSEED" in os.environ:
            seed_info.append(
                "PYTHONHASHSEED={}".format(os.environ["PYTHONHASHSEED"])
            )

        if seed_info:
            self.addDetail("Seeds", text_content(" ".join(seed_info)))

        super().setUp()

    def make_dir(self):
        """Create a temporary directory.

        This is a convenience wrapper around a fixture incantation.  That's
        the only reason why it's on the test case and not in a factory.
        """
        return self.useFixture(TempDirectory()).path

    def make_file(self, name=None, contents=None):
        """Create, and write to, a file.

        This is a convenience wrapper around `make_dir` and a factory
        call.  It ensures that the file is in a directory that will be
        cleaned up at the end of the test.
        """
        return factory.make_file(self.make_dir(), name, contents)

    @wraps(testtools.TestCase.assertSequenceEqual)
    def assertSequenceEqual(self, seq1, seq2, msg=None, seq_type=None):
        """Override testtools' version to prevent use of mappings."""
        if seq_type is None:
            self.assertNotIsInstance(
                seq1,
                Mapping,
                "Mappings cannot be compared with assertSequenceEqual",
            )
            self.assertNotIsInstance(
                seq2,
                Mapping,
                "Mappings cannot be compared with assertSequenceEqual",
            )
        return super().assertSequenceEqual(seq1, seq2, msg, seq_type)

    def patch(
        self, obj, attribute=None, value=mock.sentinel.unset
    ) -> MagicMock:
        """Patch `obj.attribute` with `value`.

        If `value` is unspecified, a new `MagicMock` will be created and
        patched-in instead. Its ``__name__`` attribute will be set to
        `attribute` or the ``__name__`` of the replaced object if `attribute`
        is not given.

        This is a thin customisation of `testtools.TestCase.patch`, so refer
        to that in case of doubt.

        :return: The patched-in object.
        """
        # If 'attribute' is None, assume 'obj' is a 'fully-qualified' object,
        # and assume that its __module__ is what we want to patch.
        if attribute is None:
            attribute = obj.__name__
            obj = import_module(obj.__module__)
        if value is mock.sentinel.unset:
            value = MagicMock(__name__=attribute)
        super().patch(obj, attribute, value)
        return value
