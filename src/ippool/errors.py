# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Errors arising from address pools and the pool registry."""


class IPPoolError(Exception):
    """Base class for all address pool errors."""


class InvalidArgument(IPPoolError, ValueError):
    """A name, CIDR or address could not be accepted."""

    @classmethod
    def empty(cls, what):
        return cls("%s must not be empty." % what)

    @classmethod
    def bad_cidr(cls, cidr, reason):
        return cls("Invalid CIDR %r: %s." % (cidr, reason))

    @classmethod
    def bad_address(cls, address):
        return cls("Invalid IPv4 address: %r." % (address,))


class DuplicateName(IPPoolError):
    """A pool with the same name is already registered."""

    @classmethod
    def from_name(cls, name):
        return cls("Pool with name '%s' already exists." % name)


class NotFound(IPPoolError, KeyError):
    """The named pool is not registered."""

    @classmethod
    def from_name(cls, name):
        return cls("Pool with name '%s' not found." % name)

    def __str__(self):
        # KeyError quotes its argument; keep the message readable.
        return Exception.__str__(self)


class PoolExhausted(IPPoolError):
    """No addresses remain available for allocation."""

    @classmethod
    def from_pool(cls, pool):
        return cls(
            "No more IPs available in pool '%s' (%s)." % (pool.name, pool.cidr)
        )


class NotAllocated(IPPoolError):
    """The address is not currently allocated from the pool."""

    @classmethod
    def from_address(cls, pool, address):
        return cls(
            "IP %s is not in use in pool '%s'." % (address, pool.name)
        )
