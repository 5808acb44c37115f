"""driver-images list, show and delete commands."""

from __future__ import annotations

import logging
import sys

import click

from ._common import LANG, PLATFORM, _get_catalog, _get_config, image_id_option

logger = logging.getLogger(__name__)


@click.command("list")
@click.option("--lang", "-l", type=LANG, default=None,
              help="Driver language (default: java)")
@click.option("--platform", "-p", type=PLATFORM, default=None,
              help="Target platform (default: all platforms)")
@click.option("--interactive", "-i", is_flag=True,
              help="Browse results in an interactive table")
@click.pass_context
def list_cmd(ctx, lang, platform, interactive):
    """List driver images for a language and platform."""
    from driverimages.aws import QueryError
    from driverimages.images import build_driver_images_by_lang_and_platform
    from driverimages.naming import to_lang_string, to_platform_string

    config = _get_config(ctx)
    catalog = _get_catalog(config)

    lang_str, platform_str = to_lang_string(lang), to_platform_string(platform)
    try:
        images = build_driver_images_by_lang_and_platform(
            catalog, lang, platform, max_workers=config.max_workers,
        )
    except QueryError as e:
        click.echo(
            "Error retrieving driver images for lang %s and platform %s: %s"
            % (lang_str, platform_str, e),
            err=True,
        )
        sys.exit(1)

    logger.info("Listing images for language %s, platform %s", lang_str, platform_str)
    if interactive:
        from driverimages.ui import ImageBrowser
        ImageBrowser(images).run()
        return

    from driverimages.utils.cli_formatters import format_image_table
    click.echo(format_image_table(images))


@click.command("show")
@image_id_option
@click.pass_context
def show_cmd(ctx, image_id):
    """Show a driver image and its snapshots."""
    from driverimages.aws import QueryError
    from driverimages.images import ImageNotFoundError, build_driver_image_by_id
    from driverimages.utils.cli_formatters import display_image_detail

    config = _get_config(ctx)
    catalog = _get_catalog(config)

    try:
        image = build_driver_image_by_id(catalog, image_id)
    except ImageNotFoundError as e:
        click.echo("Error: %s" % e, err=True)
        sys.exit(1)
    except QueryError as e:
        click.echo("Error retrieving image %s: %s" % (image_id, e), err=True)
        sys.exit(1)

    display_image_detail(image)


@click.command("delete")
@image_id_option
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_cmd(ctx, image_id, yes):
    """Deregister a driver image and delete its snapshots."""
    from driverimages.aws import QueryError

    config = _get_config(ctx)
    catalog = _get_catalog(config)

    if not yes:
        click.confirm(
            "Deregister image %s and delete its snapshots?" % image_id,
            abort=True,
        )

    logger.info("Deleting image with ID %s", image_id)
    try:
        result = catalog.deregister_image(image_id)
    except QueryError as e:
        click.echo("Error deleting image %s: %s" % (image_id, e), err=True)
        sys.exit(1)

    click.echo("Result of image deletion: %s" % result)
    if not result:
        sys.exit(1)
