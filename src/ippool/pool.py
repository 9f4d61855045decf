# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Pools of IPv4 addresses carved out of a single CIDR block.

An `AddressPool` partitions the usable addresses of its block -- everything
strictly between the network and broadcast addresses -- into three disjoint
sets:

available
    Addresses that `AddressPool.allocate` may hand out, in FIFO order.

used
    Addresses that have been allocated and not yet released.

excluded
    Addresses that are never handed out.

The available sequence is not materialized. It is the concatenation of a
lazy ascending cursor over addresses that have never been allocated, skipping
exclusions, followed by a queue of addresses that have been released. This
gives the same order as enqueuing every usable address up front, but costs
memory in proportion to the number of used, excluded and released addresses
rather than to the size of the block.
"""

__all__ = [
    "AddressPool",
    "parse_cidr",
    "parse_ipv4_address",
    "PoolSummary",
]

from bisect import bisect_left
from collections import deque, namedtuple
import re
from threading import RLock

from netaddr import IPAddress, IPNetwork

from ippool.errors import InvalidArgument, NotAllocated, PoolExhausted
from ippool.logger import get_ippool_logger

ippoollog = get_ippool_logger("pool")


# A strict dotted-quad: four decimal octets, no leading zeros.
_octet = r"(?:25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9]?[0-9])"
IPV4_ADDRESS_RE = re.compile(r"^{0}(?:\.{0}){{3}}$".format(_octet))
PREFIX_LENGTH_RE = re.compile(r"^[0-9]{1,2}$")


PoolSummary = namedtuple(
    "PoolSummary",
    (
        "name",
        "cidr",
        "network_address",
        "subnet_mask",
        "prefix_length",
        "total_ips",
        "available_ips",
        "used_ips",
        "excluded_ips",
        "used_addresses",
        "available_addresses",
        "excluded_addresses",
    ),
)
PoolSummary.__doc__ = """\
A point-in-time description of an `AddressPool`.

Every field is a plain `str`, `int` or `list` of `str` so that the summary
can be rendered or serialized (see ``_asdict()``) without knowledge of
`netaddr`.
"""


def parse_ipv4_address(address):
    """Return `address` as an IPv4 `IPAddress`.

    :param address: A dotted-quad string, or an `IPAddress`.
    :raise InvalidArgument: If `address` is not an IPv4 address.
    """
    if isinstance(address, IPAddress):
        if address.version != 4:
            raise InvalidArgument.bad_address(address)
        return address
    if isinstance(address, str):
        address = address.strip()
        if IPV4_ADDRESS_RE.match(address) is not None:
            return IPAddress(address, 4)
    raise InvalidArgument.bad_address(address)


def parse_cidr(cidr):
    """Parse `cidr` into an address and a prefix length.

    :return: A ``(IPAddress, int)`` tuple. The address has not been masked.
    :raise InvalidArgument: If `cidr` is not of the form ``a.b.c.d/prefix``
        with a prefix length between 0 and 32 inclusive.
    """
    if not isinstance(cidr, str) or len(cidr.strip()) == 0:
        raise InvalidArgument.empty("CIDR")
    parts = cidr.strip().split("/")
    if len(parts) != 2:
        raise InvalidArgument.bad_cidr(cidr, "expected address/prefix")
    address, prefix = parts
    try:
        address = parse_ipv4_address(address)
    except InvalidArgument:
        raise InvalidArgument.bad_cidr(  # noqa: B904
            cidr, "invalid IP address"
        )
    if PREFIX_LENGTH_RE.match(prefix) is None or int(prefix) > 32:
        raise InvalidArgument.bad_cidr(cidr, "invalid prefix length")
    return address, int(prefix)


class AddressPool:
    """A pool of assignable IPv4 addresses.

    All public methods are safe to call from multiple threads.
    """

    def __init__(self, name, cidr, excluded=None):
        """Create a pool of the usable addresses in `cidr`.

        :param name: The name of the pool. Must not be empty.
        :param cidr: A string like ``192.168.1.0/24``. Host bits in the
            address are ignored.
        :param excluded: Optional iterable of addresses that must never be
            allocated. Those outside the usable range are recorded in
            `out_of_range_exclusions` but otherwise ignored.
        :raise InvalidArgument: If the name is empty, or the CIDR or any
            excluded address does not parse.
        """
        super().__init__()
        if not isinstance(name, str) or len(name) == 0:
            raise InvalidArgument.empty("Pool name")
        address, prefix_length = parse_cidr(cidr)
        excluded = self._parse_excluded(excluded)

        self._name = name
        self._cidr = cidr.strip()
        self._network = IPNetwork(
            (address.value, prefix_length), version=4
        ).cidr
        self._lock = RLock()

        # The usable range; empty (first > last) for /31 and /32.
        self._first = self._network.first + 1
        self._last = self._network.last - 1

        in_range = {
            exclusion.value
            for exclusion in excluded
            if self._first <= exclusion.value <= self._last
        }
        self._excluded = frozenset(in_range)
        self._excluded_sorted = sorted(in_range)
        self.out_of_range_exclusions = tuple(
            sorted(
                {
                    exclusion
                    for exclusion in excluded
                    if exclusion.value not in in_range
                }
            )
        )
        if len(self.out_of_range_exclusions) != 0:
            ippoollog.warning(
                "Pool %s (%s): ignoring excluded addresses outside the "
                "usable range: %s",
                self._name,
                self._cidr,
                ", ".join(map(str, self.out_of_range_exclusions)),
            )

        # The next never-allocated address. Everything from here to
        # `_last`, less exclusions, is available.
        self._cursor = self._first
        self._skip_excluded()
        # Released addresses, in the order they were released.
        self._recycled = deque()
        # Allocated addresses, in the order they were allocated.
        self._used = {}

    @staticmethod
    def _parse_excluded(excluded):
        if excluded is None:
            return []
        elif isinstance(excluded, (str, IPAddress)):
            excluded = [excluded]
        return [parse_ipv4_address(exclusion) for exclusion in excluded]

    def _skip_excluded(self):
        while self._cursor <= self._last and self._cursor in self._excluded:
            self._cursor += 1

    def _count_fresh(self):
        """Count never-allocated addresses that remain available."""
        if self._cursor > self._last:
            return 0
        excluded_ahead = len(self._excluded_sorted) - bisect_left(
            self._excluded_sorted, self._cursor
        )
        return (self._last - self._cursor + 1) - excluded_ahead

    def _iter_fresh(self):
        for value in range(self._cursor, self._last + 1):
            if value not in self._excluded:
                yield value

    @property
    def name(self):
        return self._name

    @property
    def cidr(self):
        return self._cidr

    @property
    def network_address(self):
        return self._network.network

    @property
    def broadcast_address(self):
        """The all-ones host address, even for /31 and /32 blocks."""
        return IPAddress(self._network.last, 4)

    @property
    def subnet_mask(self):
        return self._network.netmask

    @property
    def prefix_length(self):
        return self._network.prefixlen

    @property
    def total_ips(self):
        """The number of usable addresses, including excluded ones."""
        return max(0, self._network.size - 2)

    @property
    def available_ips(self):
        with self._lock:
            return self._count_fresh() + len(self._recycled)

    @property
    def used_ips(self):
        with self._lock:
            return len(self._used)

    @property
    def excluded_ips(self):
        return len(self._excluded)

    def __contains__(self, address):
        """Is `address` a usable address of this pool?"""
        try:
            address = parse_ipv4_address(address)
        except InvalidArgument:
            return False
        return self._first <= address.value <= self._last

    def is_allocated(self, address):
        address = parse_ipv4_address(address)
        with self._lock:
            return address.value in self._used

    def allocate(self):
        """Allocate the next available address.

        Addresses that have never been allocated are handed out first, in
        ascending order; after those, released addresses are handed out in
        the order they were released.

        :raise PoolExhausted: If there are no available addresses.
        :return: An `IPAddress`.
        """
        with self._lock:
            if self._cursor <= self._last:
                value = self._cursor
                self._cursor += 1
                self._skip_excluded()
            elif len(self._recycled) != 0:
                value = self._recycled.popleft()
            else:
                ippoollog.warning(
                    "Pool %s (%s) is exhausted; %d addresses in use.",
                    self._name,
                    self._cidr,
                    len(self._used),
                )
                raise PoolExhausted.from_pool(self)
            self._used[value] = None
        address = IPAddress(value, 4)
        ippoollog.debug("Allocated %s from pool %s.", address, self._name)
        return address

    def release(self, address):
        """Return `address` to the tail of the available addresses.

        :param address: An `IPAddress` or a dotted-quad string.
        :raise InvalidArgument: If `address` does not parse.
        :raise NotAllocated: If `address` is not currently allocated.
        """
        address = parse_ipv4_address(address)
        with self._lock:
            if address.value not in self._used:
                raise NotAllocated.from_address(self, address)
            del self._used[address.value]
            self._recycled.append(address.value)
        ippoollog.debug("Released %s to pool %s.", address, self._name)

    def clear(self):
        """Release every allocated address.

        Addresses are returned to the available queue in the order in which
        they were allocated.
        """
        with self._lock:
            count = len(self._used)
            self._recycled.extend(self._used)
            self._used.clear()
        if count != 0:
            ippoollog.info(
                "Pool %s (%s): released %d addresses.",
                self._name,
                self._cidr,
                count,
            )

    def get_used_ips(self):
        """Return a list of allocated addresses, oldest allocation first."""
        with self._lock:
            return [IPAddress(value, 4) for value in self._used]

    def get_available_ips(self):
        """Return a list of available addresses, in allocation order.

        This enumerates the whole block, so be wary of calling it for large
        pools.
        """
        with self._lock:
            available = [IPAddress(value, 4) for value in self._iter_fresh()]
            available.extend(IPAddress(value, 4) for value in self._recycled)
        return available

    def get_excluded_ips(self):
        """Return a list of excluded addresses, in ascending order."""
        return [IPAddress(value, 4) for value in self._excluded_sorted]

    def summarize(self, with_addresses=True):
        """Return a `PoolSummary` of this pool.

        :param with_addresses: If false, the address lists in the summary are
            left empty. Listing available addresses is costly for large
            blocks.
        """
        with self._lock:
            if with_addresses:
                used = list(map(str, self.get_used_ips()))
                available = list(map(str, self.get_available_ips()))
                excluded = list(map(str, self.get_excluded_ips()))
            else:
                used, available, excluded = [], [], []
            return PoolSummary(
                name=self.name,
                cidr=self.cidr,
                network_address=str(self.network_address),
                subnet_mask=str(self.subnet_mask),
                prefix_length=self.prefix_length,
                total_ips=self.total_ips,
                available_ips=self.available_ips,
                used_ips=self.used_ips,
                excluded_ips=self.excluded_ips,
                used_addresses=used,
                available_addresses=available,
                excluded_addresses=excluded,
            )

    def __repr__(self):
        return "<{} {!r} {} ({} of {} available)>".format(
            self.__class__.__name__,
            self._name,
            self._cidr,
            self.available_ips,
            self.total_ips,
        )
