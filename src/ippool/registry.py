# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Registry of named address pools."""

__all__ = [
    "PoolRegistry",
]

from threading import RLock

from ippool.errors import DuplicateName, InvalidArgument, NotFound
from ippool.logger import get_ippool_logger
from ippool.pool import AddressPool

ippoollog = get_ippool_logger("registry")


class PoolRegistry:
    """Name-keyed collection of `AddressPool` instances.

    Names are case-sensitive. There is no global registry: create one when
    the process starts (see `ippool.bootstrap.make_registry`) and pass it to
    whatever needs it.
    """

    def __init__(self):
        super().__init__()
        self._pools = {}
        self._lock = RLock()

    def create_pool(self, name, cidr, excluded=None):
        """Create and register a new pool.

        The pool is built before the registry is touched, so a failure
        leaves the registry unchanged.

        :raise InvalidArgument: If `name` or `cidr` is empty or malformed.
        :raise DuplicateName: If a pool called `name` already exists.
        :return: The new `AddressPool`.
        """
        if not isinstance(name, str) or len(name) == 0:
            raise InvalidArgument.empty("Pool name")
        if not isinstance(cidr, str) or len(cidr.strip()) == 0:
            raise InvalidArgument.empty("CIDR")
        with self._lock:
            if name in self._pools:
                raise DuplicateName.from_name(name)
            pool = AddressPool(name, cidr, excluded)
            self._pools[name] = pool
        ippoollog.info(
            "Created pool %s (%s): %d of %d addresses available.",
            name,
            pool.cidr,
            pool.available_ips,
            pool.total_ips,
        )
        return pool

    def get_pool(self, name):
        """Return the pool called `name`.

        :raise NotFound: If there is no such pool.
        """
        with self._lock:
            try:
                return self._pools[name]
            except KeyError:
                raise NotFound.from_name(name)  # noqa: B904

    def get_pools(self):
        """Return a list of every registered pool, in registration order."""
        with self._lock:
            return list(self._pools.values())

    def remove_pool(self, name):
        """Remove the pool called `name`.

        :raise NotFound: If there is no such pool.
        """
        with self._lock:
            if name not in self._pools:
                raise NotFound.from_name(name)
            del self._pools[name]
        ippoollog.info("Removed pool %s.", name)

    def clear_pools(self):
        """Remove every registered pool."""
        with self._lock:
            count = len(self._pools)
            self._pools.clear()
        if count != 0:
            ippoollog.info("Removed all %d pools.", count)

    def clear_usage(self):
        """Release every allocated address in every pool.

        :return: A list of the pools that were cleared.
        """
        pools = self.get_pools()
        for pool in pools:
            pool.clear()
        return pools

    def get_summaries(self, with_addresses=False):
        """Return a `PoolSummary` for every registered pool.

        :param with_addresses: See `AddressPool.summarize`.
        """
        return [
            pool.summarize(with_addresses=with_addresses)
            for pool in self.get_pools()
        ]

    def __contains__(self, name):
        with self._lock:
            return name in self._pools

    def __len__(self):
        with self._lock:
            return len(self._pools)

    def __iter__(self):
        """Iterate over a snapshot of the registered pool names."""
        with self._lock:
            return iter(list(self._pools))
