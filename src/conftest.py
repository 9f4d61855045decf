# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

import pytest

from ippooltesting.scenarios import make_scenario_classes, WithScenarios


@pytest.fixture(autouse=True)
def setup_testenv(monkeypatch, tmpdir):
    ippool_etc = tmpdir.join("ippool_etc")
    ippool_etc.mkdir()
    monkeypatch.setenv("IPPOOL_CONFIG", str(ippool_etc.join("ippool.yaml")))
    yield


@pytest.hookimpl(tryfirst=True)
def pytest_pycollect_makeitem(collector, name, obj):
    """Collect each scenario of a test case class as a class of its own."""
    if not isinstance(collector, pytest.Module):
        return None
    if not (isinstance(obj, type) and issubclass(obj, WithScenarios)):
        return None
    if not getattr(obj, "scenarios", None):
        return None
    items = []
    for scenario_name, scenario_class in make_scenario_classes(obj):
        # The class node finds its class by name in the module.
        setattr(collector.obj, scenario_name, scenario_class)
        item = collector.ihook.pytest_pycollect_makeitem(
            collector=collector, name=scenario_name, obj=scenario_class
        )
        if item is None:
            continue
        elif isinstance(item, list):
            items.extend(item)
        else:
            items.append(item)
    return items
