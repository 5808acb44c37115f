"""User configuration management for driver-images."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from vpd.next.util import read_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "driver-images"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.yaml"

DEFAULT_MAX_WORKERS = 8
DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_READ_TIMEOUT = 30
DEFAULT_MAX_ATTEMPTS = 3


class ConfigError(Exception):
    """Raised when the configuration file holds an invalid value."""


class DriverImagesConfig:
    """Manages driver-images user configuration.

    Example ``config.yaml``::

        aws:
          region: us-west-2
          profile: drivers
          owners: [self]
          connect_timeout: 10
          read_timeout: 30
          max_attempts: 3
        concurrency:
          max_workers: 8
    """

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self):
        if self.config_path.exists():
            logger.debug("Loading config from %s", self.config_path)
            self._data = read_yaml(str(self.config_path)) or {}
        else:
            self._data = {}
        if not isinstance(self._data, Mapping):
            raise ConfigError("Config file must contain a YAML mapping: %s" % self.config_path)
        self._validate()

    def _validate(self):
        # surface bad values at load time rather than on first use
        for name in ("owners", "connect_timeout", "read_timeout", "max_attempts", "max_workers"):
            getattr(self, name)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-separated key path."""
        parts = key.split(".")
        current = self._data
        for part in parts:
            if isinstance(current, Mapping) and part in current:
                current = current[part]
            else:
                return default
        return current

    def _positive_int(self, key: str, default: int) -> int:
        value = self.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigError("'%s' must be a positive integer, got %r" % (key, value))
        return value

    @property
    def aws_region(self) -> str | None:
        return self.get("aws.region")

    @property
    def aws_profile(self) -> str | None:
        return self.get("aws.profile")

    @property
    def owners(self) -> list[str]:
        owners = self.get("aws.owners")
        if owners is None:
            return []
        if isinstance(owners, str):
            return [owners]
        if not isinstance(owners, list) or not all(isinstance(o, str) for o in owners):
            raise ConfigError("'aws.owners' must be a string or a list of strings, got %r" % (owners,))
        return list(owners)

    @property
    def connect_timeout(self) -> int:
        return self._positive_int("aws.connect_timeout", DEFAULT_CONNECT_TIMEOUT)

    @property
    def read_timeout(self) -> int:
        return self._positive_int("aws.read_timeout", DEFAULT_READ_TIMEOUT)

    @property
    def max_attempts(self) -> int:
        return self._positive_int("aws.max_attempts", DEFAULT_MAX_ATTEMPTS)

    @property
    def max_workers(self) -> int:
        return self._positive_int("concurrency.max_workers", DEFAULT_MAX_WORKERS)
