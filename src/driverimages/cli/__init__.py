"""driver-images CLI: list, inspect and delete driver machine images."""

from __future__ import annotations

import click

from driverimages import __version__
from ._common import _setup_logging
from ._images import delete_cmd, list_cmd, show_cmd


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose/debug output")
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
              help="Path to config file (default: ~/.config/driver-images/config.yaml)")
@click.version_option(__version__, prog_name="driver-images")
@click.pass_context
def main(ctx, verbose, config_path):
    """driver-images: inventory and clean up driver machine images on AWS."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path
    _setup_logging(verbose)


main.add_command(list_cmd)
main.add_command(show_cmd)
main.add_command(delete_cmd)
