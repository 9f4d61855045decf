# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).
"""Common parts of the address pool logging machinery."""

import logging

# For timestamps, rely on journald instead.
DEFAULT_LOG_FORMAT = "%(name)s: [%(levelname)s] %(message)s"
DEFAULT_LOG_VERBOSITY_LEVELS = {0, 1, 2, 3}
DEFAULT_LOG_VERBOSITY = 2


def make_logging_level_names_consistent():
    """Rename the standard library's logging levels to lower-case names.

    "warn" is used in preference to "warning" so that every level name is a
    single short word.
    """
    for level in list(logging._levelToName):
        if level == logging.NOTSET:
            # Rendered as a hyphen when the level is not known.
            name = "-"
        elif level == logging.WARNING:
            name = "warn"
        else:
            name = logging.getLevelName(level).lower()
        # For a preexisting level this will _replace_ the name.
        logging.addLevelName(level, name)
