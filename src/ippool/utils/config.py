# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Helpers for configuration validation.

Especially work-arounds for broken `formencode` behaviour.
"""

import formencode

from ippool.errors import InvalidArgument
from ippool.pool import parse_cidr, parse_ipv4_address


class UnicodeString(formencode.FancyValidator):
    """A FormEncode `UnicodeString` validator that works.

    The one in `formencode` is... weird.
    """

    not_empty = None
    accept_python = False
    messages = {
        "noneType": "The input must be a Unicode string (not None)",
        "badType": (
            "The input must be a Unicode string (not a %(type)s: %(value)r)"
        ),
    }

    def _validate(self, value, state=None):
        if not isinstance(value, str):
            raise formencode.Invalid(
                self.message(
                    "badType",
                    state,
                    value=value,
                    type=type(value).__qualname__,
                ),
                value,
                state,
            )

    _validate_python = _validate
    _validate_other = _validate

    def empty_value(self, value):
        return ""


class IPv4AddressString(UnicodeString):
    """A validator for a dotted-quad IPv4 address."""

    messages = {"notIPv4": "%(value)r is not a valid IPv4 address"}

    def _validate(self, value, state=None):
        super()._validate(value, state)
        try:
            parse_ipv4_address(value)
        except InvalidArgument:
            raise formencode.Invalid(  # noqa: B904
                self.message("notIPv4", state, value=value), value, state
            )

    _validate_python = _validate
    _validate_other = _validate


class IPv4CIDRString(UnicodeString):
    """A validator for an IPv4 block in ``a.b.c.d/prefix`` notation."""

    messages = {"notCIDR": "%(value)r is not a valid IPv4 CIDR: %(reason)s"}

    def _validate(self, value, state=None):
        super()._validate(value, state)
        try:
            parse_cidr(value)
        except InvalidArgument as error:
            raise formencode.Invalid(  # noqa: B904
                self.message("notCIDR", state, value=value, reason=error),
                value,
                state,
            )

    _validate_python = _validate
    _validate_other = _validate


class Schema(formencode.Schema):
    """A FormEncode `Schema` that works.

    Work around a bug in `formencode` where it considers instances of `bytes`
    to be iterators, and so complains about multiple values.
    """

    def _value_is_iterator(self, value):
        if isinstance(value, bytes):
            return False
        else:
            return super()._value_is_iterator(value)
