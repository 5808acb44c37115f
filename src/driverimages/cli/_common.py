"""Shared CLI infrastructure: utilities, Click types, decorators."""

from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path

import click

from driverimages.naming import ImageLang, ImagePlatform

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool):
    """Install a single stderr handler on the root logger.

    ``-v`` switches to DEBUG with timestamps and logger names; otherwise
    only the bare INFO messages are shown.
    """
    level = logging.DEBUG if verbose else logging.INFO
    fmt = ("%(asctime)s [%(levelname)s] %(name)s: %(message)s" if verbose
           else "%(message)s")

    root = logging.getLogger()
    root.setLevel(level)
    # Remove any handlers that may have been added by library imports
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))
    root.addHandler(handler)

    from driverimages.utils import suppress_noisy_loggers
    suppress_noisy_loggers()


def _get_config(ctx: click.Context):
    """Load user configuration from the path given to the root command.

    Exits with an error message if the config file is invalid.
    """
    from driverimages.config import ConfigError, DriverImagesConfig

    config_path = ctx.find_root().obj.get("config_path")
    try:
        return DriverImagesConfig(Path(config_path) if config_path else None)
    except ConfigError as e:
        click.echo("Error: %s" % e, err=True)
        sys.exit(1)


def _get_catalog(config):
    """Create the EC2 image catalog; exits with an error message on failure."""
    from driverimages.aws import QueryError, build_catalog

    try:
        return build_catalog(config)
    except QueryError as e:
        click.echo("Error: %s" % e, err=True)
        sys.exit(1)


class EnumChoice(click.Choice):
    """Case-insensitive choice over an Enum's values, converting to the member."""

    def __init__(self, enum_cls: type[Enum]):
        self.enum_cls = enum_cls
        super().__init__([m.value for m in enum_cls], case_sensitive=False)

    def convert(self, value, param, ctx):
        if isinstance(value, self.enum_cls):
            return value
        return self.enum_cls(super().convert(value, param, ctx))


LANG = EnumChoice(ImageLang)
PLATFORM = EnumChoice(ImagePlatform)


def image_id_option(f):
    """Required --image-id option."""
    return click.option("--image-id", "-i", "image_id", required=True,
                        help="EC2 image ID (e.g. ami-0123456789abcdef0)")(f)
