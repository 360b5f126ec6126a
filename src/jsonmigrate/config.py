"""Settings for the dispatch helper.

Sources, highest priority first: explicit keyword arguments, environment
variables, defaults.

    | Setting              | Environment variable       | Default |
    |----------------------|----------------------------|---------|
    | host_version         | JSONMIGRATE_HOST_VERSION   | 25      |
    | log_generated_source | JSONMIGRATE_LOG_SOURCE     | False   |
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .errors import ConfigurationError

ENV_HOST_VERSION = "JSONMIGRATE_HOST_VERSION"
ENV_LOG_SOURCE = "JSONMIGRATE_LOG_SOURCE"

DEFAULT_HOST_VERSION = 25
# Last host major version whose only JSON type family is representation A
LAST_LEGACY_VERSION = 24

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class Settings:
    host_version: int = DEFAULT_HOST_VERSION
    log_generated_source: bool = False

    @property
    def is_legacy_host(self) -> bool:
        return self.host_version <= LAST_LEGACY_VERSION


def _parse_version(raw: str) -> int:
    text = raw.strip()
    # "25.0.3" style values carry the major version first
    major = text.split(".", 1)[0]
    try:
        version = int(major)
    except ValueError:
        raise ConfigurationError(f"{ENV_HOST_VERSION}: not a major version: {raw!r}") from None
    if version <= 0:
        raise ConfigurationError(f"{ENV_HOST_VERSION}: must be positive, got {version}")
    return version


def _parse_flag(raw: str) -> bool:
    text = raw.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(f"{ENV_LOG_SOURCE}: not a boolean: {raw!r}")


def load_settings(
    host_version: int | None = None,
    log_generated_source: bool | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from explicit values, then the environment, then defaults."""
    env = os.environ if environ is None else environ
    if host_version is None:
        raw = env.get(ENV_HOST_VERSION)
        host_version = _parse_version(raw) if raw is not None else DEFAULT_HOST_VERSION
    elif isinstance(host_version, bool) or not isinstance(host_version, int) or host_version <= 0:
        raise ConfigurationError(f"host_version must be a positive int, got {host_version!r}")
    if log_generated_source is None:
        raw = env.get(ENV_LOG_SOURCE)
        log_generated_source = _parse_flag(raw) if raw is not None else False
    return Settings(host_version=host_version, log_generated_source=bool(log_generated_source))
