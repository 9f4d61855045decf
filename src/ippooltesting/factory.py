# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Test object factories."""


from itertools import islice, repeat
import os.path
import random
import string

from netaddr import IPAddress, IPNetwork, IPSet

EMPTY_SET = frozenset()


class TooManyRandomRetries(Exception):
    """Something that relies on luck did not get lucky.

    Some factory methods need to generate random items until they find one
    that meets certain requirements.  This exception indicates that it took
    too many retries, which may mean that no matching item is possible.
    """


def network_clashes(network, other_networks):
    """Does the IP range for `network` clash with any in `other_networks`?

    :param network: An `IPNetwork`.
    :param other_networks: An iterable of `IPNetwork` items.
    :return: Whether the IP range for `network` overlaps with any of those
        for the networks in `other_networks`.
    """
    for other_network in other_networks:
        if network in other_network or other_network in network:
            return True
    return False


class Factory:
    random_letters = map(
        random.choice, repeat(string.ascii_letters + string.digits)
    )

    random_octets = iter(lambda: random.randint(0, 255), None)

    def make_string(self, size=10, prefix=""):
        """Return a `str` filled with random ASCII letters or digits."""
        return prefix + "".join(islice(self.random_letters, size))

    def make_name(self, prefix=None, sep="-", size=6):
        """Generate a random name.

        :param prefix: Optional prefix.  Pass one to help make test failures
            and tracebacks easier to read!  If you don't, you might as well
            use `make_string`.
        :param sep: Separator that will go between the prefix and the random
            portion of the name.  Defaults to a dash.
        :param size: Length of the random portion of the name.
        :return: A randomized unicode string.
        """
        if prefix is None:
            return self.make_string(size=size)
        else:
            return prefix + sep + self.make_string(size=size)

    def pick_bool(self):
        """Return an arbitrary Boolean value (`True` or `False`)."""
        return random.choice((True, False))

    def make_ipv4_address(self):
        octets = list(islice(self.random_octets, 4))
        if octets[0] == 0:
            octets[0] = 1
        return "%d.%d.%d.%d" % tuple(octets)

    def make_ipv4_network(
        self, slash=None, *, but_not=EMPTY_SET, disjoint_from=None
    ):
        """Generate a random IPv4 network.

        :param slash: Bit width of the network, e.g. 24 for what used to be
            known as a class-C network.
        :param but_not: Optional iterable of `IPNetwork` objects whose values
            should not be returned.  Use this when you need a different network
            from any returned previously.  The new network may overlap any of
            these, but it won't be identical.
        :param disjoint_from: Optional iterable of `IPNetwork` objects whose
            IP ranges the new network must not overlap.
        :return: A network spanning at least 14 host addresses (at most 28
            bits).
        :rtype: :class:`IPNetwork`
        """
        if disjoint_from is None:
            disjoint_from = []
        if slash is None:
            slash = random.randint(24, 28)
        # Look randomly for a network that matches our criteria.
        for _ in range(100):
            network = IPNetwork(f"{self.make_ipv4_address()}/{slash}").cidr
            forbidden = network in but_not
            clashes = network_clashes(network, disjoint_from)
            if not forbidden and not clashes:
                return network
        raise TooManyRandomRetries("Could not find available network")

    def pick_ip_in_network(self, network, *, but_not=EMPTY_SET):
        """Pick a usable address in `network`.

        Network and broadcast addresses are never picked.

        :param but_not: Optional iterable of addresses not to return.
        :return: A dotted-quad string.
        """
        excluded_set = IPSet()
        for exclusion in but_not:
            if isinstance(exclusion, str):
                exclusion = IPAddress(exclusion)
            excluded_set.add(exclusion)
        first, last = network.first + 1, network.last - 1
        network_size = network.size - 2
        if network_size <= 0 or len(but_not) >= network_size:
            raise ValueError(
                "No IP addresses available in network: %s (but_not=%r)"
                % (network, but_not)
            )
        for _ in range(100):
            address = IPAddress(random.randint(first, last))
            if address not in excluded_set:
                return str(address)
        raise TooManyRandomRetries(
            "Could not find available IP in network: %s (but_not=%r)"
            % (network, but_not)
        )

    def make_file(self, location, name=None, contents=None):
        """Create a file, and write data to it.

        Prefer the eponymous convenience wrapper in
        :class:`ippooltesting.testcase.IPPoolTestCase`.  It creates a
        temporary directory and arranges for its eventual cleanup.

        :param location: Directory.  Use a temporary directory for this, and
            make sure it gets cleaned up after the test!
        :param name: Optional name for the file.  If none is given, one will
            be made up.
        :param contents: Optional contents for the file. If omitted, some
            arbitrary ASCII text will be written. If Unicode content is
            provided, it will be encoded with UTF-8.
        :return: Path to the file.
        """
        if name is None:
            name = self.make_string()
        if contents is None:
            contents = self.make_string().encode("ascii")
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        path = os.path.join(location, name)
        with open(path, "wb") as f:
            f.write(contents)
        return path


# Create factory singleton.
factory = Factory()
