"""Environment-derived settings.

There is no configuration file. A couple of environment variables tune how
the scanner talks to git:

- ``PENDING_GIT``: git executable to run (default ``git``)
- ``PENDING_VERBOSE``: ``1``/``true``/``yes``/``on`` enables diagnostics
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .result import Err, Ok, Result

__all__ = [
    "Config",
    "ConfigError",
    "ENV_GIT",
    "ENV_VERBOSE",
    "load_config",
]

ENV_GIT = "PENDING_GIT"
ENV_VERBOSE = "PENDING_VERBOSE"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"", "0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when an environment setting cannot be parsed."""

    message: str
    variable: str | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Runtime settings for a scan.

    Attributes:
        git: Executable used for every repository query
        verbose: Print each command and keep git's stderr attached
    """

    git: str = "git"
    verbose: bool = False


def load_config(environ: Mapping[str, str] | None = None) -> Result[Config, ConfigError]:
    """Read settings from the environment.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        Ok(Config) on success, Err(ConfigError) for unparseable values.
    """
    env = os.environ if environ is None else environ

    git = env.get(ENV_GIT)
    if git is not None and not git.strip():
        return Err(ConfigError(f"{ENV_GIT} is set but empty", variable=ENV_GIT))

    match _parse_bool(env.get(ENV_VERBOSE, "")):
        case Err(raw):
            return Err(
                ConfigError(
                    f"{ENV_VERBOSE} must be a boolean (got {raw!r})",
                    variable=ENV_VERBOSE,
                )
            )
        case Ok(verbose):
            pass

    return Ok(Config(git=(git or "git").strip(), verbose=verbose))


def _parse_bool(raw: str) -> Result[bool, str]:
    value = raw.strip().lower()
    if value in _TRUE:
        return Ok(True)
    if value in _FALSE:
        return Ok(False)
    return Err(raw)
