# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""The human-readable `ippool` log."""

import logging


class IPPoolLogger(logging.getLoggerClass()):
    """A Logger class that doesn't allow you to call exception()."""

    def exception(self, *args, **kwargs):
        raise NotImplementedError(
            "Don't log exceptions to ippoollog; use a module logger "
            "from `logging.getLogger(__name__)` instead"
        )


def get_ippool_logger(tag=None):
    """Return a logger for the human-readable `ippool` log.

    :param tag: A string that will be used to name the logger, in the form
        "ippool.<tag>". If None, the logger will simply be named "ippool".
    """
    if tag is None:
        logger_name = "ippool"
    else:
        logger_name = "ippool.%s" % tag

    ippoollog = logging.getLogger(logger_name)
    # Swap the class so that every logger handed out by this function is an
    # IPPoolLogger, while leaving all other loggers to `logging`.
    ippoollog.__class__ = IPPoolLogger

    return ippoollog
