# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Start-up of the address pool manager.

There is no module-level registry. Call `make_registry` once
when the process starts and hand the result to every collaborator that
needs to allocate or release addresses.
"""

__all__ = [
    "make_registry",
    "start_up",
]

from ippool import logger
from ippool.config import IPPoolConfiguration
from ippool.registry import PoolRegistry


def make_registry(pool_definitions=()):
    """Return a new `PoolRegistry` holding the given pools.

    :param pool_definitions: An iterable of mappings with ``name``, ``cidr``
        and, optionally, ``exclude`` keys, as found in the ``pools`` option
        of `IPPoolConfiguration`.
    :raise IPPoolError: If any definition is rejected. No registry is
        returned in that case.
    """
    registry = PoolRegistry()
    for definition in pool_definitions:
        registry.create_pool(
            definition["name"],
            definition["cidr"],
            definition.get("exclude"),
        )
    return registry


def start_up(config_file=None):
    """Configure logging and build the registry from configuration.

    :param config_file: Path to the configuration file. Defaults to
        `IPPoolConfiguration.DEFAULT_FILENAME`.
    :return: A `PoolRegistry`.
    """
    with IPPoolConfiguration.open(config_file) as config:
        verbosity = config.verbosity
        pool_definitions = config.pools
    logger.configure(verbosity)
    return make_registry(pool_definitions)
