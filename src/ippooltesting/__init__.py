# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Testing infrastructure for the address pool manager."""

from os.path import abspath, dirname, join, pardir, realpath
import re
from warnings import filterwarnings

# The root of the source tree.
dev_root = abspath(join(dirname(realpath(__file__)), pardir, pardir))

# Construct a regular expression that matches all of the core packages, and
# their subpackages.
packages = {
    "ippool",
    "ippooltesting",
}
packages_expr = r"^(?:%s)\b" % "|".join(
    re.escape(package) for package in packages
)

# Enable some warnings that we ought to pay heed to.
filterwarnings("error", category=BytesWarning, module=packages_expr)
filterwarnings("default", category=DeprecationWarning, module=packages_expr)
filterwarnings("default", category=ImportWarning, module=packages_expr)
