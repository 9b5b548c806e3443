r"""@package transcend.config

Runtime settings read from configuration files.

The settings are read once on import from the `[transcend]` section of the
files `~/.transcend.cfg` and the file named by the environment variable
`TRANSCEND_CONFIG` (if set), where later files override earlier ones. Keys
not mentioned in any file keep their default value (see DEFAULTS).

@b Examples

```
    # ~/.transcend.cfg
    [transcend]
    default_precision = 64
    cordic_min_precision = 2000
```
"""

from configparser import ConfigParser
import logging
import os
import os.path as op


__all__ = [
    "DEFAULTS",
    "Settings",
    "load_settings",
    "settings",
]


logger = logging.getLogger(__name__)


## Name of the section read from configuration files.
SECTION = "transcend"

## Environment variable naming an additional configuration file.
ENV_VAR = "TRANSCEND_CONFIG"

## Default values and their types.
DEFAULTS = dict(
    default_precision=53,
    guard_bits=20,
    constants_precision=1000,
    atan_table_size=700,
    atan_table_precision=2048,
    cordic_min_precision=1000,
    log_halley_threshold=1e5,
    log_taylor_check_every=5,
    pow_int_limit=1e6,
    exp_limit=700000,
    gamma_factorial_limit=171,
    gamma_stirling_threshold=15,
    lanczos_max_precision=64,
    reduction_max_subtractions=64,
)


class Settings(object):
    r"""Read-only collection of the configured values.

    Attributes are the keys of DEFAULTS. Values are converted to the type of
    the respective default value.
    """

    def __init__(self, **values):
        unknown = set(values) - set(DEFAULTS)
        if unknown:
            raise ValueError("Unknown settings: %s" % ", ".join(sorted(unknown)))
        data = dict(DEFAULTS)
        for key, value in values.items():
            data[key] = _convert(key, value)
        for key in ("default_precision", "constants_precision",
                    "atan_table_precision", "log_taylor_check_every"):
            if data[key] < 1:
                raise ValueError("Setting %s must be positive." % key)
        object.__setattr__(self, "_data", data)

    def __getattr__(self, name):
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        raise AttributeError("Settings are read-only.")

    def replace(self, **values):
        r"""Return a copy with some values replaced."""
        data = dict(self._data)
        data.update(values)
        return Settings(**data)

    def as_dict(self):
        return dict(self._data)

    def __repr__(self):
        return "Settings(%s)" % ", ".join(
            "%s=%r" % (k, v) for k, v in sorted(self._data.items())
        )


def _convert(key, value):
    default = DEFAULTS[key]
    try:
        if isinstance(default, int):
            return int(value)
        return float(value)
    except (TypeError, ValueError):
        raise ValueError("Invalid value for setting %s: %r" % (key, value))


def default_files():
    r"""Return the list of configuration files read by load_settings()."""
    files = [op.expanduser(op.join("~", ".transcend.cfg"))]
    env_file = os.environ.get(ENV_VAR)
    if env_file:
        files.append(env_file)
    return files


def load_settings(files=None):
    r"""Create a Settings object from configuration files.

    @param files
        List of files to read. Missing files are silently ignored. Default is
        to use default_files().
    """
    if files is None:
        files = default_files()
    config = ConfigParser()
    found = config.read(files)
    if found:
        logger.debug("Read configuration from %s", ", ".join(found))
    values = dict()
    if config.has_section(SECTION):
        for key, value in config.items(SECTION):
            values[key] = value
    return Settings(**values)


## Settings used by the package.
settings = load_settings()
