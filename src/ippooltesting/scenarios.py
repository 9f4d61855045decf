# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Adapting `testscenarios` to work with the test runner."""

from types import FunctionType

import testscenarios


class WithScenarios(testscenarios.WithScenarios):
    """Variant of testscenarios_' that provides ``__call__``.

    Some `TestCase` implementations treat ``__call__`` as something other
    than a synonym for ``run``. This means that testscenarios_'
    ``WithScenarios``, which customises ``run`` only, does not work
    correctly.

    Under pytest this won't do anything, because ``src/conftest.py`` uses
    `make_scenario_classes` to expand scenarios at collection time. This
    remains here for use with other test runners.

    .. testscenarios_: https://launchpad.net/testscenarios
    """

    def __call__(self, result=None):
        if self._get_scenarios():
            for test in testscenarios.generate_scenarios(self):
                test.__call__(result)
        else:
            super().__call__(result)


def make_scenario_classes(cls):
    """Expand the scenarios of test case class `cls` into subclasses.

    Each subclass has the parameters of one scenario as class attributes,
    and no scenarios of its own.

    :return: A list of ``(name, subclass)`` tuples, one per scenario, in the
        order the scenarios are declared. Each name is of the form
        ``TestCaseName[scenario-name]``.
    """
    classes = []
    for scenario_name, parameters in cls.scenarios:
        name = f"{cls.__name__}[{scenario_name}]"
        namespace = {
            # Functions must not become methods.
            key: (
                staticmethod(value)
                if isinstance(value, FunctionType)
                else value
            )
            for key, value in parameters.items()
        }
        namespace.update(
            scenarios=None,
            __module__=cls.__module__,
            __qualname__=name,
        )
        classes.append((name, type(cls)(name, (cls,), namespace)))
    return classes
