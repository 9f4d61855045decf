# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Tests for `ippooltesting.scenarios`."""

import unittest

import pytest

from ippooltesting.scenarios import make_scenario_classes, WithScenarios
from ippooltesting.testcase import IPPoolTestCase


class TestWithScenarios(IPPoolTestCase):
    def test_scenarios_applied(self):
        # Scenarios are applied correctly when a test is called via __call__()
        # instead of run().

        events = []

        class Test(WithScenarios, unittest.TestCase):
            scenarios = [
                ("one", dict(token="one")),
                ("two", dict(token="two")),
            ]

            def test(self):
                events.append(self.token)

        test = Test("test")
        test.__call__()

        self.assertEqual(["one", "two"], events)

    def test_scenarios_applied_by_call(self):
        # Scenarios are applied by __call__() when it is called first, and not
        # by run().

        events = []

        class Test(WithScenarios, unittest.TestCase):
            scenarios = [
                ("one", dict(token="one")),
                ("two", dict(token="two")),
            ]

            def test(self):
                events.append(self.token)

            def run(self, result=None):
                # Call-up right past WithScenarios.run() to show that it is
                # not responsible for applying scenarios, and __call__() is.
                super(WithScenarios, self).run(result)

        test = Test("test")
        test.__call__()

        self.assertEqual(["one", "two"], events)


class TestMakeScenarioClasses(IPPoolTestCase):
    def make_test_class(self):
        class Test(WithScenarios, unittest.TestCase):
            scenarios = [
                ("one", dict(token="one", number=1)),
                ("two", dict(token="two", number=2)),
                ("three", dict(token="three", number=3)),
            ]

            def test(self):
                pass

        return Test

    def test_makes_one_class_per_scenario(self):
        cls = self.make_test_class()
        classes = make_scenario_classes(cls)
        self.assertEqual(
            ["Test[one]", "Test[two]", "Test[three]"],
            [name for name, _ in classes],
        )
        for name, scenario_class in classes:
            self.assertTrue(issubclass(scenario_class, cls))
            self.assertEqual(name, scenario_class.__name__)
            self.assertEqual(name, scenario_class.__qualname__)
            self.assertEqual(cls.__module__, scenario_class.__module__)

    def test_applies_parameters_as_class_attributes(self):
        classes = make_scenario_classes(self.make_test_class())
        self.assertEqual(
            [("one", 1), ("two", 2), ("three", 3)],
            [(cls.token, cls.number) for _, cls in classes],
        )

    def test_scenario_classes_have_no_scenarios(self):
        for _, cls in make_scenario_classes(self.make_test_class()):
            self.assertIsNone(cls.scenarios)

    def test_calling_a_scenario_test_runs_it_once(self):
        events = []

        class Test(WithScenarios, unittest.TestCase):
            scenarios = [
                ("one", dict(token="one")),
                ("two", dict(token="two")),
            ]

            def test(self):
                events.append(self.token)

        for _, cls in make_scenario_classes(Test):
            cls("test").__call__()

        self.assertEqual(["one", "two"], events)

    def test_function_parameters_are_not_bound(self):
        def make_thing():
            return "thing"

        class Test(WithScenarios, unittest.TestCase):
            scenarios = [("one", dict(factory=make_thing))]

            def test(self):
                pass

        [(_, cls)] = make_scenario_classes(Test)
        self.assertEqual("thing", cls("test").factory())

    def test_base_class_is_unchanged(self):
        cls = self.make_test_class()
        make_scenario_classes(cls)
        self.assertEqual(3, len(cls.scenarios))
        self.assertFalse(hasattr(cls, "token"))


class TestCollectedPerScenario(IPPoolTestCase):
    scenarios = (
        ("one", {"token": "one"}),
        ("two", {"token": "two"}),
    )

    def test_has_scenario_parameters(self):
        self.assertIn(self.token, ("one", "two"))
        self.assertIsNone(self.scenarios)


def test_each_scenario_is_collected_separately(request):
    classes = [getattr(item, "cls", None) for item in request.session.items]
    collected = sorted(
        cls.__name__
        for cls in classes
        if cls is not None and issubclass(cls, TestCollectedPerScenario)
    )
    if len(collected) == 0:
        pytest.skip("TestCollectedPerScenario was not selected.")
    assert collected == [
        "TestCollectedPerScenario[one]",
        "TestCollectedPerScenario[two]",
    ]
