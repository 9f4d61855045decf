# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).
"""Logging for the address pool manager.

Two kinds of logger are in use:

- Module loggers, from ``logging.getLogger(__name__)``, for diagnostics.

- The ``ippool`` log, from `get_ippool_logger`, which is a "nice to read"
  record of pools being created and removed and of addresses running out.
  It refuses ``exception()``; tracebacks belong in module loggers.

Both are configured by `configure`, which maps a verbosity of 0 to 3 onto
the standard library's levels.
"""

__all__ = [
    "configure",
    "get_ippool_logger",
    "IPPoolLogger",
    "set_verbosity",
]

from ippool.logger._common import (
    DEFAULT_LOG_VERBOSITY,
    make_logging_level_names_consistent,
)
from ippool.logger._ippoollog import get_ippool_logger, IPPoolLogger
from ippool.logger._logging import (
    configure_standard_logging,
    set_standard_verbosity,
)

# Current verbosity level. Configured initial in `configure()` call.
# Can be set afterward at runtime with `set_verbosity()`.
current_verbosity = DEFAULT_LOG_VERBOSITY


def configure(verbosity: int = None):
    """Configure logging.

    If the verbosity is not specified, it will be set to the default verbosity
    level.

    It is not necessary to call `set_verbosity()` after calling this function,
    unless the specified verbosity needs to be changed.

    :param verbosity: See `get_logging_level`.
    """
    global current_verbosity
    if verbosity is None:
        verbosity = DEFAULT_LOG_VERBOSITY
    current_verbosity = verbosity
    # Fix-up the logging level names in the standard library. This is done
    # first to ensure they're consistent in most/all situations.
    make_logging_level_names_consistent()
    configure_standard_logging(verbosity)


def set_verbosity(verbosity: int = None):
    """Resets the logging verbosity to the specified level.

    This function is intended to be be called after `configure()` is called.

    :param verbosity: See `get_logging_level`.
    """
    global current_verbosity
    if verbosity is None:
        verbosity = DEFAULT_LOG_VERBOSITY
    current_verbosity = verbosity
    set_standard_verbosity(verbosity)
