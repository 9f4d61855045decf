# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Standard-library `logging`-specific stuff."""

import logging
import logging.config
import sys

from ippool.logger._common import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_VERBOSITY_LEVELS,
)

# Map verbosity numbers to `logging` levels.
DEFAULT_LOGGING_VERBOSITY_LEVELS = {
    # verbosity: level
    0: logging.ERROR,
    1: logging.WARN,
    2: logging.INFO,
    3: logging.DEBUG,
}

# Belt-n-braces.
assert (
    DEFAULT_LOGGING_VERBOSITY_LEVELS.keys() == DEFAULT_LOG_VERBOSITY_LEVELS
), "Logging verbosity map does not match expectations."


def set_standard_verbosity(verbosity: int):
    """Reconfigure verbosity of the standard library's `logging` module."""
    logging.config.dictConfig(get_logging_config(verbosity))


def configure_standard_logging(verbosity: int):
    """Configure the standard library's `logging` module.

    :param verbosity: See `get_logging_level`.
    """
    set_standard_verbosity(verbosity)
    # Make sure that `logging` is not configured to capture warnings.
    logging.captureWarnings(False)


def get_logging_config(verbosity: int):
    """Return a configuration dict usable with `logging.config.dictConfig`.

    :param verbosity: See `get_logging_level`.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "stdout": {
                "format": DEFAULT_LOG_FORMAT,
                "datefmt": "",  # To prevent using the default format
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": sys.__stdout__,
                "formatter": "stdout",
            },
        },
        "root": {
            "level": get_logging_level(verbosity),
            "handlers": ["stdout"],
        },
        "loggers": {
            # The `ippool` logger provides a "nice to read" log of pool
            # creation, allocation and release. It propagates to the root
            # logger only.
            "ippool": {
                "level": get_logging_level(verbosity),
                "propagate": True,
            },
        },
    }


def get_logging_level(verbosity: int) -> int:
    """Return the `logging` level corresponding to `verbosity`.

    The level returned should be treated as *inclusive*. For example
    `logging.INFO` means that informational messages ought to be logged as
    well as messages of a higher level.

    :param verbosity: 0, 1, 2, or 3, meaning very quiet logging, quiet
        logging, normal logging, and verbose/debug logging.
    """
    levels = DEFAULT_LOGGING_VERBOSITY_LEVELS
    v_min, v_max = min(levels), max(levels)
    if verbosity > v_max:
        return levels[v_max]
    elif verbosity < v_min:
        return levels[v_min]
    else:
        return levels[verbosity]
