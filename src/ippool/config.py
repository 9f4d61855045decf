# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Configuration for the address pool manager.

Configuration objects are subclasses of `Configuration`, and declare each
option as a `ConfigurationOption`. A metaclass derived from
`ConfigurationMeta` says where the configuration lives:

* ``default`` is the default filename for the configuration file.

* ``envvar`` is the name of an environment variable that, if defined,
  provides the filename in preference to ``default``.

* ``backend`` is a factory that provides the storage mechanism. Only
  `ConfigurationFile`, which keeps options in a YAML file, is provided.

It can be used like so::

  with IPPoolConfiguration.open() as config:
      for pool in config.pools:
          print(pool["name"], pool["cidr"])

Only the pools to create at start-up are configured here. Which addresses
have been allocated from them is never saved.
"""

from contextlib import contextmanager
import logging
import os
from os import environ

from formencode import ForEach
from formencode.api import is_validator, NoDefault
from formencode.validators import Number
import yaml

from ippool.utils.config import (
    IPv4AddressString,
    IPv4CIDRString,
    Schema,
    UnicodeString,
)

logger = logging.getLogger(__name__)


# Permit reads by members of the same group.
default_file_mode = 0o640


def touch(path, mode=default_file_mode):
    """Ensure that `path` exists."""
    os.close(os.open(path, os.O_CREAT | os.O_APPEND, mode))


class ConfigurationImmutable(Exception):
    """The configuration is read-only; it cannot be mutated."""


class ConfigurationFile:
    """Read configuration as YAML from a file.

    The file is never written. Setting or deleting an option raises
    `ConfigurationImmutable`.
    """

    def __init__(self, path):
        super().__init__()
        self.config = {}
        self.path = path

    def __iter__(self):
        return iter(self.config)

    def __getitem__(self, name):
        return self.config[name]

    def __setitem__(self, name, data):
        raise ConfigurationImmutable(f"{self}: Cannot set `{name}'.")

    def __delitem__(self, name):
        raise ConfigurationImmutable(f"{self}: Cannot set `{name}'.")

    def load(self):
        """Load the configuration."""
        with open(self.path, "rb") as fd:
            config = yaml.safe_load(fd)
        if config is None:
            self.config.clear()
        elif isinstance(config, dict):
            self.config = config
        else:
            raise ValueError(
                "Configuration in %s is not a mapping: %r"
                % (self.path, config)
            )

    def __str__(self):
        return f"{self.__class__.__qualname__}({self.path!r})"

    @classmethod
    @contextmanager
    def open(cls, path: str):
        """Open a configuration file read-only.

        It will create the configuration file if it does not yet exist.
        """
        # Ensure `path` exists...
        touch(path)
        # before loading it in.
        configfile = cls(path)
        configfile.load()
        logger.debug("Loaded configuration from %s.", path)
        yield configfile


class ConfigurationMeta(type):
    """Metaclass for configuration objects.

    :cvar envvar: The name of the environment variable which will be used to
        store the filename of the configuration file. This can be passed in
        from the caller's environment. Setting `DEFAULT_FILENAME` updates this
        environment variable so that it's available to sub-processes.
    :cvar default: If the environment variable named by `envvar` is not set,
        this is used as the filename.
    :cvar backend: The class used to load the configuration. This must provide
        an ``open(filename)`` method that returns a context manager. This
        context manager must provide an object with a dict-like interface.
    """

    envvar = None  # Set this in subtypes.
    default = None  # Set this in subtypes.
    backend = None  # Set this in subtypes.

    def _get_default_filename(cls):
        filename = environ.get(cls.envvar)
        if filename is None or len(filename) == 0:
            return cls.default
        else:
            return filename

    def _set_default_filename(cls, filename):
        # Set the configuration filename in the environment.
        environ[cls.envvar] = filename

    def _delete_default_filename(cls):
        # Remove any setting of the configuration filename from the
        # environment.
        environ.pop(cls.envvar, None)

    DEFAULT_FILENAME = property(
        _get_default_filename,
        _set_default_filename,
        _delete_default_filename,
        doc=(
            "The default configuration file to load. Refers to "
            "`cls.envvar` in the environment."
        ),
    )


class Configuration:
    """An object that holds configuration options.

    Configuration options should be defined by creating properties using
    `ConfigurationOption`. For example::

        class ApplicationConfiguration(Configuration):

            application_name = ConfigurationOption(
                "application_name", "The name for this app, used in the UI.",
                validator=UnicodeString())

    This can then be used like so::

        config = ApplicationConfiguration(database)  # database is dict-like.
        config.application_name = "Pools On A Plate"
        print(config.application_name)

    """

    # Define this class variable in sub-classes. Using `ConfigurationMeta` as
    # a metaclass is a good way to achieve this.
    DEFAULT_FILENAME = None

    def __init__(self, store):
        """Initialise a new `Configuration` object.

        :param store: A dict-like object.
        """
        super().__init__()
        # Use the super-class's __setattr__() because it's redefined later on
        # to prevent accidentally setting attributes that are not options.
        super().__setattr__("store", store)

    def __setattr__(self, name, value):
        """Prevent setting unrecognised options.

        Only options that have been declared on the class, using the
        `ConfigurationOption` descriptor for example, can be set.

        This is as much about preventing typos as anything else.
        """
        if hasattr(self.__class__, name):
            super().__setattr__(name, value)
        else:
            raise AttributeError(
                "%r object has no attribute %r"
                % (self.__class__.__name__, name)
            )

    @classmethod
    @contextmanager
    def open(cls, filepath=None):
        if filepath is None:
            filepath = cls.DEFAULT_FILENAME
        os.makedirs(os.path.dirname(filepath), exist_ok=True)
        with cls.backend.open(filepath) as store:
            yield cls(store)


class ConfigurationOption:
    """Define a configuration option.

    This is for use with `Configuration` and its subclasses.
    """

    def __init__(self, name, doc, validator):
        """Initialise a new `ConfigurationOption`.

        :param name: The name for this option. This is the name as which this
            option will be stored in the underlying `Configuration` object.
        :param doc: A description of the option. This is mandatory.
        :param validator: A `formencode.validators.Validator`.
        """
        super().__init__()

        assert isinstance(name, str)
        assert isinstance(doc, str)
        assert is_validator(validator)
        assert validator.if_missing is not NoDefault

        self.name = name
        self.__doc__ = doc
        self.validator = validator

    def __get__(self, obj, type=None):
        if obj is None:
            return self
        else:
            try:
                value = obj.store[self.name]
            except KeyError:
                return self.validator.if_missing
            else:
                # The store may have been written by hand.
                return self.validator.to_python(value)

    def __set__(self, obj, value):
        obj.store[self.name] = self.validator.to_python(value)

    def __delete__(self, obj):
        del obj.store[self.name]


class PoolDefinition(Schema):
    """Configuration validator for a pool to create at start-up."""

    name = UnicodeString(not_empty=True)
    cidr = IPv4CIDRString(not_empty=True)
    exclude = ForEach(
        IPv4AddressString(), convert_to_list=True, if_missing=[]
    )


class IPPoolConfigurationMeta(ConfigurationMeta):
    """Local meta-configuration for the address pool manager."""

    envvar = "IPPOOL_CONFIG"
    default = "/etc/ippool/ippool.yaml"
    backend = ConfigurationFile


class IPPoolConfiguration(Configuration, metaclass=IPPoolConfigurationMeta):
    """Local configuration for the address pool manager."""

    verbosity = ConfigurationOption(
        "verbosity",
        "Logging verbosity, from 0 (errors only) to 3 (debug).",
        Number(min=0, max=3, if_missing=2),
    )

    pools = ConfigurationOption(
        "pools",
        "Pools to create at start-up, each with a name, a CIDR and an "
        "optional list of addresses to exclude.",
        ForEach(PoolDefinition(), convert_to_list=True, if_missing=[]),
    )
