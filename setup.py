# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Setuptools installer for ippool."""

from os.path import dirname, join

from setuptools import find_packages, setup


def read(filename):
    """Return the whitespace-stripped content of `filename`."""
    path = join(dirname(__file__), filename)
    with open(path, "r") as fin:
        return fin.read().strip()


setup(
    name="ippool",
    version="1.0.0",
    license="AGPLv3",
    description="Pools of IPv4 addresses for provisioning virtual machines",
    long_description=read("README.rst"),
    packages=find_packages(
        where="src",
        exclude=[
            "*.testing",
            "*.tests",
            "*.tests.*",
            "ippooltesting",
            "ippooltesting.*",
        ],
    ),
    package_dir={"": "src"},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "formencode",
        "netaddr",
        "PyYAML",
    ],
    extras_require={
        "test": [
            "fixtures",
            "pytest",
            "testscenarios",
            "testtools",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Information Technology",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: GNU Affero General Public License v3",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Systems Administration",
    ],
)
